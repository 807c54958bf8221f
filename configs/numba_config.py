"""
Numba Configuration
===================

Controls Numba JIT compilation of the genotype bit kernels at three levels:
1. FUNCTION_OVERRIDES - Highest priority, control specific functions
2. MODULE_OVERRIDES   - Medium priority, control entire modules
3. ENABLED_GLOBAL     - Lowest priority, global default

Function/Module names use fully qualified format:
- Function: 'flowercross.kernels.normalize'
- Module: 'flowercross.kernels'

Settings are read when a kernel is decorated, i.e. when its module is first
imported. Change them before importing ``flowercross``.

Disabling a kernel also disables every kernel that calls it:
turning off 'flowercross.kernels.normalize' runs combine_cartesian
interpreted as well.
"""

from pathlib import Path

# ============================================================================
# Cache Configuration
# ============================================================================
# Directory for Numba cache files
# - None: Use default (each module's __pycache__ folder)
# - Path or str: Use specified directory (will be created if not exists)
CACHE_DIR: Path | str | None = None

# Examples:
# CACHE_DIR = ".numba_cache"                # Relative to working directory
# CACHE_DIR = Path.home() / ".cache/numba"  # User cache directory

# ============================================================================
# Global Switch (lowest priority)
# ============================================================================
ENABLED_GLOBAL: bool = True

# ============================================================================
# Module-level Overrides (medium priority)
# ============================================================================
# Format: 'module_name': bool
MODULE_OVERRIDES: dict[str, bool] = {
    # 'flowercross.kernels': False,
}

# ============================================================================
# Function-level Overrides (highest priority)
# ============================================================================
# Format: 'module.function': bool
FUNCTION_OVERRIDES: dict[str, bool] = {
    # 'flowercross.kernels.tally_first_occurrence': False,
}
