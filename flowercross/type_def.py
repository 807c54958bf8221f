"""Type definitions and encoding constants for flower genotypes.

A genotype is packed into a single byte. Types are deliberately simple
(plain ints) so they index straight into NumPy arrays and stay usable from
Numba-compiled kernels.
"""

from enum import IntEnum
from typing import Tuple, TypeAlias


Seq: TypeAlias = int  # 8-bit packed genotype, four 2-bit fields
Probability: TypeAlias = float


class Locus(IntEnum):
    """The four loci, in the order their fields appear in the packed byte.

    The value doubles as the field index counted from the most significant
    field, so ``Locus.RED`` occupies bits 7-6 and ``Locus.SHADE`` bits 1-0.
    """
    RED = 0
    YELLOW = 1
    WHITE = 2
    SHADE = 3

    def __repr__(self):
        return f"Locus.{self.name}"


class Zygosity(IntEnum):
    """Normalized 2-bit field values."""
    HOMOZYGOUS_RECESSIVE = 0b00
    HETEROZYGOUS = 0b10
    HOMOZYGOUS_DOMINANT = 0b11

    def __repr__(self):
        return f"Zygosity.{self.name}"


N_LOCI = 4
N_BITS = 2 * N_LOCI
SEQ_SPACE = 1 << N_BITS  # 256 raw byte values

# Per-position dominant letters, two per locus.
ALLELE_LETTERS = "RRYYWWSS"

FIELD_MASK = 0b11
HIGH_BITS = 0xAA  # first allele of every field
LOW_BITS = 0x55   # second allele of every field


def field_shift(locus: int) -> int:
    """Return the right-shift that moves ``locus``'s field into bits 1-0."""
    return 2 * (N_LOCI - 1 - int(locus))


def locus_letters(locus: int) -> Tuple[str, str]:
    """Return the ``(dominant, recessive)`` letters of a locus."""
    upper = ALLELE_LETTERS[2 * int(locus)]
    return (upper, upper.lower())
