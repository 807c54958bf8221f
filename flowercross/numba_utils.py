"""
Numba Switchable Decorator
==========================

Provides configurable Numba JIT compilation with three-level control:
1. Function-level (highest priority)
2. Module-level
3. Global (lowest priority)

Configuration is read from configs.numba_config when a function is decorated,
i.e. on first import of its module. Edit the config before importing
``flowercross``; changing it afterwards has no effect.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Sequence

from configs import numba_config as config

logger = logging.getLogger(__name__)


# ============================================================================
# Cache Directory Setup
# ============================================================================

def _setup_cache_dir():
    """Configure Numba cache directory based on config."""
    cache_dir = config.CACHE_DIR

    if cache_dir is None:
        return

    cache_path = Path(cache_dir)
    cache_path.mkdir(parents=True, exist_ok=True)

    # Must be set before numba is imported
    os.environ['NUMBA_CACHE_DIR'] = str(cache_path.resolve())


_setup_cache_dir()

from numba import njit  # noqa: E402


# ============================================================================
# JIT Decision Logic
# ============================================================================

def _should_jit(func: Callable) -> bool:
    """
    Determine whether a function should be JIT compiled.

    Priority: Function > Module > Global
    """
    module_name = func.__module__
    full_name = f"{module_name}.{func.__qualname__}"

    if full_name in config.FUNCTION_OVERRIDES:
        return config.FUNCTION_OVERRIDES[full_name]

    if module_name in config.MODULE_OVERRIDES:
        return config.MODULE_OVERRIDES[module_name]

    return config.ENABLED_GLOBAL


# ============================================================================
# Decorator
# ============================================================================

def numba_switchable(
    func: Optional[Callable] = None,
    *,
    cache: bool = True,
    fastmath: bool = False,
    calls: Sequence[Callable] = (),
    **njit_kwargs
) -> Callable:
    """
    Configurable Numba JIT decorator.

    Compiled code can only call other compiled functions, so a function is
    compiled only if every switchable function listed in ``calls`` is too.
    Disabling a callee therefore disables its callers as well.

    Args:
        func: Function to decorate
        cache: Cache compiled functions (default: True)
        fastmath: Enable fast math optimizations (default: False)
        calls: Switchable functions called from ``func``
        **njit_kwargs: Additional arguments for numba.njit

    Usage:
        ```python
        @numba_switchable
        def double(x):
            ...

        @numba_switchable(calls=(double,))
        def quadruple(x):
            return double(double(x))
        ```

    Attributes on decorated function:
        - python: Original Python function
        - numba: JIT-compiled function (None if disabled)
        - is_jit_enabled: Whether JIT is enabled
        - full_name: Fully qualified function name
    """

    def decorator(fn: Callable) -> Callable:
        full_name = f"{fn.__module__}.{fn.__qualname__}"

        interpreted = [c.full_name for c in calls if not c.is_jit_enabled]
        numba_func = None
        if interpreted:
            logger.debug("%s: jit disabled, calls interpreted %s", full_name, interpreted)
        elif _should_jit(fn):
            numba_func = njit(fn, cache=cache, fastmath=fastmath, **njit_kwargs)
        logger.debug("%s: jit %s", full_name, "enabled" if numba_func is not None else "disabled")

        wrapper = numba_func if numba_func is not None else fn

        wrapper.python = fn
        wrapper.numba = numba_func
        wrapper.is_jit_enabled = numba_func is not None
        wrapper.full_name = full_name

        return wrapper

    # Support both @numba_switchable and @numba_switchable(...)
    if func is not None:
        return decorator(func)
    return decorator
