"""
Flower Cross Calculator
=======================

Exact Mendelian cross probabilities for four-locus flower genotypes.

    >>> from flowercross import Genotype
    >>> Genotype.from_str("RrYYWWss").cross(Genotype.from_str("RrYYWWss"))
    [(Genotype('RrYYWWss'), 0.5), (Genotype('RRYYWWss'), 0.25), (Genotype('rrYYWWss'), 0.25)]
"""

from flowercross.errors import FlowerCrossError, InvalidCharacterError, InvalidFormatError
from flowercross.genotype import Genotype, cross, parse
from flowercross.kernels import combine_cartesian, normalize, swap_fields, tally_first_occurrence
from flowercross.type_def import ALLELE_LETTERS, SEQ_SPACE, Locus, Zygosity

__version__ = "0.1.0"

__all__ = [
    # genotype
    'Genotype', 'parse', 'cross',
    # errors
    'FlowerCrossError', 'InvalidFormatError', 'InvalidCharacterError',
    # kernels
    'normalize', 'swap_fields', 'combine_cartesian', 'tally_first_occurrence',
    # type_def
    'Locus', 'Zygosity', 'ALLELE_LETTERS', 'SEQ_SPACE',
]
