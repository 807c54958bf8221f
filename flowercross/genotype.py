"""
genotype
========
The ``Genotype`` value type: parsing, rendering and crossing flower genotypes.

Responsibilities
----------------
- Parse allele-letter strings such as ``"RrYYWWss"`` into the packed byte
  encoding and render them back.
- Cross two genotypes into the exact Mendelian distribution of offspring.
- Answer per-locus questions (zygosity, gametes).

Design Notes
------------
- Instances are immutable and cached per packed value, so the same genotype
  always returns the same object and identity comparison is valid.
- Bit manipulation lives in :mod:`flowercross.kernels`; this module only
  translates between kernel output and ``Genotype`` objects.
"""

from __future__ import annotations

import itertools
import logging
from typing import Dict, List, Tuple, Union

import numpy as np

from flowercross.errors import InvalidCharacterError, InvalidFormatError
from flowercross.kernels import combine_cartesian, normalize, tally_first_occurrence
from flowercross.type_def import (
    ALLELE_LETTERS, FIELD_MASK, N_BITS, SEQ_SPACE,
    Locus, Probability, Seq, Zygosity, field_shift, locus_letters,
)

logger = logging.getLogger(__name__)


class Genotype:
    """
    A four-locus diploid flower genotype packed into one byte.

    Construct from text with :meth:`from_str`; :meth:`from_seq` is the
    internal factory for already-encoded values.

    Example:
        >>> parent = Genotype.from_str("RrYYWWss")
        >>> for child, probability in parent.cross(parent):
        ...     print(f"{child}: {probability}")
        RrYYWWss: 0.5
        RRYYWWss: 0.25
        rrYYWWss: 0.25

    Note: Genotype instances are cached, so ``Genotype.from_str("RRYYWWSS")
    is Genotype.from_str("RRYYWWSS")``.
    """

    __slots__ = ('_seq',)

    # Cache: {normalized seq: instance}
    _cache: Dict[Seq, 'Genotype'] = {}

    def __new__(cls, seq: Seq):
        if isinstance(seq, bool) or not isinstance(seq, (int, np.integer)):
            raise TypeError(f"seq must be an integer, got {type(seq).__name__}.")
        if not 0 <= seq < SEQ_SPACE:
            raise ValueError(f"seq must be in [0, {SEQ_SPACE - 1}], got {seq}.")
        seq = int(normalize(int(seq)))

        if seq in cls._cache:
            return cls._cache[seq]
        instance = super().__new__(cls)
        object.__setattr__(instance, "_seq", seq)
        # setdefault is atomic; a concurrent creator gets the stored instance
        return cls._cache.setdefault(seq, instance)

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    # ---------- construction ----------
    @classmethod
    def from_seq(cls, seq: Seq) -> 'Genotype':
        """Create a Genotype from a raw packed value, normalizing it first.

        Args:
            seq: Integer in ``[0, 255]``; fields may be unnormalized.

        Raises:
            TypeError: If ``seq`` is not an integer.
            ValueError: If ``seq`` does not fit in the packed byte.
        """
        return cls(seq)

    @classmethod
    def from_str(cls, text: str, strict: bool = True) -> 'Genotype':
        """
        Parse a genotype from its allele-letter string.

        Character ``i`` must be the upper- or lowercase form of
        ``"RRYYWWSS"[i]``. Uppercase is a dominant allele, lowercase a
        recessive one. Pairs written recessive-first (``"rR"``) are accepted
        and folded into the canonical ``"Rr"``.

        Args:
            text: Exactly eight characters, e.g. ``"RrYYWWss"``.
            strict: When False, any character other than the expected
                uppercase letter reads as recessive instead of raising.

        Returns:
            Genotype: The normalized genotype.

        Raises:
            TypeError: If ``text`` is not a string.
            InvalidFormatError: If ``text`` is not exactly eight characters.
            InvalidCharacterError: If ``strict`` and a character is not the
                allele letter expected at its position.
        """
        if not isinstance(text, str):
            raise TypeError(f"Genotype text must be a string, got {type(text).__name__}.")
        if len(text) != N_BITS:
            raise InvalidFormatError(text, N_BITS)

        seq = 0
        for i, (char, upper) in enumerate(zip(text, ALLELE_LETTERS)):
            if char == upper:
                seq |= 1 << (N_BITS - 1 - i)
            elif strict and char != upper.lower():
                raise InvalidCharacterError(text, i, upper)

        genotype = cls.from_seq(seq)
        logger.debug("Parsed %r as %s (0x%02x)", text, genotype, genotype.seq)
        return genotype

    # ---------- rendering ----------
    @property
    def seq(self) -> Seq:
        """The normalized packed byte."""
        return self._seq

    def to_string(self) -> str:
        """Return the allele-letter form, e.g. ``"RrYYWWss"``."""
        letters = []
        for i, upper in enumerate(ALLELE_LETTERS):
            bit = self._seq & (1 << (N_BITS - 1 - i))
            letters.append(upper if bit else upper.lower())
        return "".join(letters)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Genotype({self.to_string()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Genotype):
            return NotImplemented
        return self._seq == other._seq

    def __hash__(self) -> int:
        return hash(self._seq)

    def __reduce__(self):
        return (self.__class__, (self._seq,))

    # ---------- locus queries ----------
    def zygosity_at(self, locus: Union[Locus, int]) -> Zygosity:
        """Return the zygosity of one locus.

        Args:
            locus: A :class:`Locus` member or its integer index.

        Raises:
            ValueError: If ``locus`` is not one of the four loci.
        """
        locus = Locus(int(locus))
        return Zygosity((self._seq >> field_shift(locus)) & FIELD_MASK)

    def is_homozygous_at(self, locus: Union[Locus, int]) -> bool:
        """Check if the genotype is homozygous at a given locus."""
        return self.zygosity_at(locus) != Zygosity.HETEROZYGOUS

    def is_heterozygous_at(self, locus: Union[Locus, int]) -> bool:
        """Check if the genotype is heterozygous at a given locus."""
        return not self.is_homozygous_at(locus)

    def produce_gametes(self) -> Dict[str, float]:
        """
        Generate every haploid gamete with its Mendelian frequency.

        A gamete carries one allele letter per locus, e.g. ``"RYWs"``.
        Homozygous loci contribute their single allele with frequency 1.0,
        heterozygous loci each allele with 0.5, and loci assort
        independently.

        Returns:
            Dict mapping gamete strings to frequencies. All frequencies sum
            to 1.0.

        Example:
            >>> Genotype.from_str("RrYYWWss").produce_gametes()
            {'RYWs': 0.5, 'rYWs': 0.5}
        """
        locus_gamete_frequencies = []
        for locus in Locus:
            dominant, recessive = locus_letters(locus)
            zygosity = self.zygosity_at(locus)
            if zygosity == Zygosity.HOMOZYGOUS_DOMINANT:
                locus_gamete_frequencies.append({dominant: 1.0})
            elif zygosity == Zygosity.HOMOZYGOUS_RECESSIVE:
                locus_gamete_frequencies.append({recessive: 1.0})
            else:
                locus_gamete_frequencies.append({dominant: 0.5, recessive: 0.5})

        gamete_freqs = {}
        for combination in itertools.product(*[d.items() for d in locus_gamete_frequencies]):
            gamete = "".join(letter for letter, _ in combination)
            gamete_freqs[gamete] = float(np.prod([freq for _, freq in combination]))
        return gamete_freqs

    # ---------- crossing ----------
    def cross_counts(self, other: 'Genotype') -> List[Tuple['Genotype', int]]:
        """
        Cross with ``other`` and return exact offspring tallies.

        Every one of the ``SEQ_SPACE`` allele combinations is equally likely;
        each distinct offspring is reported once with the number of
        combinations producing it, in order of first occurrence.

        Args:
            other: The second parent.

        Returns:
            List of ``(Genotype, count)``; counts sum to ``SEQ_SPACE``.

        Raises:
            TypeError: If ``other`` is not a Genotype.
        """
        if not isinstance(other, Genotype):
            raise TypeError(f"Can only cross with a Genotype, got {type(other).__name__}.")

        combined = combine_cartesian(self._seq, other._seq)
        seqs, counts = tally_first_occurrence(combined)
        results = [(Genotype(int(seq)), int(count)) for seq, count in zip(seqs, counts)]
        logger.debug("Crossed %s x %s: %d distinct offspring", self, other, len(results))
        return results

    def cross(self, other: 'Genotype') -> List[Tuple['Genotype', Probability]]:
        """
        Cross with ``other`` and return the offspring distribution.

        Models independent assortment over the four loci: each offspring
        locus takes one allele from each parent, both choices equally likely.

        Args:
            other: The second parent.

        Returns:
            List of ``(Genotype, probability)``, one entry per distinct
            offspring in order of first occurrence. Probabilities sum to 1.0.

        Example:
            >>> Genotype.from_str("RRYYWWSS").cross(Genotype.from_str("rryywwss"))
            [(Genotype('RrYyWwSs'), 1.0)]
        """
        return [(child, count / SEQ_SPACE) for child, count in self.cross_counts(other)]


# Module-level convenience wrappers

def parse(text: str, strict: bool = True) -> Genotype:
    """Alias for :meth:`Genotype.from_str`."""
    return Genotype.from_str(text, strict=strict)


def cross(lhs: Union[Genotype, str], rhs: Union[Genotype, str]) -> List[Tuple[Genotype, Probability]]:
    """Cross two genotypes given either as Genotype objects or strings."""
    if isinstance(lhs, str):
        lhs = Genotype.from_str(lhs)
    if isinstance(rhs, str):
        rhs = Genotype.from_str(rhs)
    return lhs.cross(rhs)
