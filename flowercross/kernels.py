"""Bit-level kernels over packed genotypes.

All functions here operate on plain ints / NumPy arrays holding the 8-bit
encoding described in :mod:`flowercross.type_def` and are compiled with
Numba when enabled in ``configs.numba_config``.

Field layout (one field per locus, red first)::

    bit   7 6 | 5 4 | 3 2 | 1 0
          R R | Y Y | W W | S S

Within a field the high bit is the first allele and the low bit the second.
A normalized field is ``0b11``, ``0b10`` or ``0b00``.

Docstring style: Google style (Args, Returns, Example).
"""
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from flowercross.numba_utils import numba_switchable
from flowercross.type_def import HIGH_BITS, LOW_BITS, SEQ_SPACE


@numba_switchable(cache=True)
def normalize(seq: int) -> int:
    """Fold every field into canonical order.

    The normalized high bit is "at least one dominant allele", the low bit
    "both alleles dominant", so ``0b01`` and ``0b10`` both become ``0b10``.

    Args:
        seq: Raw 8-bit value, possibly holding ``0b01`` fields.

    Returns:
        int: Normalized 8-bit value. ``normalize(normalize(x)) == normalize(x)``.

    Example:
        >>> bin(normalize(0b01_11_11_00))
        '0b10111100'
    """
    high = seq & HIGH_BITS
    low = seq & LOW_BITS
    return high | (low << 1) | ((high >> 1) & low)


@numba_switchable(cache=True)
def swap_fields(seq: int) -> int:
    """Exchange the two bits of every field (``ab`` -> ``ba``).

    The result is generally not normalized.
    """
    return ((seq & HIGH_BITS) >> 1) | ((seq & LOW_BITS) << 1)


@numba_switchable(cache=True, calls=(normalize, swap_fields))
def combine_cartesian(lhs: int, rhs: int) -> NDArray[np.uint8]:
    """Enumerate all ``SEQ_SPACE`` equally likely offspring of two parents.

    Each mask bit is a coin flip. In the high bit of a field it picks which
    of ``lhs``'s two alleles at that locus is inherited; in the low bit it
    picks which of ``rhs``'s two alleles is. Picking is a per-bit select
    between a parent and its field-swapped self, so mask ``0`` takes
    ``lhs``'s first allele and ``rhs``'s second at every locus.

    Args:
        lhs: Packed genotype contributing the first allele of each field.
        rhs: Packed genotype contributing the second allele of each field.

    Returns:
        np.ndarray: ``uint8`` array of shape ``(SEQ_SPACE,)`` with the
            normalized offspring for every mask, in mask order.
    """
    swapped_lhs = swap_fields(lhs)
    swapped_rhs = swap_fields(rhs)
    combined = np.empty(SEQ_SPACE, dtype=np.uint8)
    for mask in range(SEQ_SPACE):
        from_lhs = (~mask & lhs) | (mask & swapped_lhs)
        from_rhs = (~mask & rhs) | (mask & swapped_rhs)
        combined[mask] = normalize((from_lhs & HIGH_BITS) | (from_rhs & LOW_BITS))
    return combined


@numba_switchable(cache=True)
def tally_first_occurrence(
    combined: NDArray[np.uint8],
) -> Tuple[NDArray[np.int64], NDArray[np.int64]]:
    """Count equal values, keeping the order in which they first appear.

    Args:
        combined: Packed genotypes, e.g. the output of :func:`combine_cartesian`.

    Returns:
        Tuple of ``(seqs, counts)``: the distinct values in first-occurrence
        order and how often each occurs. ``counts.sum() == combined.size``.
    """
    counts = np.zeros(SEQ_SPACE, dtype=np.int64)
    order = np.empty(combined.size, dtype=np.int64)
    n_distinct = 0
    for i in range(combined.size):
        seq = combined[i]
        if counts[seq] == 0:
            order[n_distinct] = seq
            n_distinct += 1
        counts[seq] += 1
    seqs = order[:n_distinct].copy()
    return seqs, counts[seqs]
