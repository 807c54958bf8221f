"""
Black-box tests for Genotype parsing, rendering and locus queries.
"""

import itertools
import pickle
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from flowercross import (
    FlowerCrossError, Genotype, InvalidCharacterError, InvalidFormatError, Locus, Zygosity,
)


def all_genotype_strings():
    """Every normalized genotype string, 3 states per locus."""
    per_locus = [(u + u, u + u.lower(), u.lower() + u.lower()) for u in "RYWS"]
    return ["".join(parts) for parts in itertools.product(*per_locus)]


# ─── Parsing ──────────────────────────────────────────────────────────────────


class TestFromStr:
    def test_fully_dominant(self):
        assert Genotype.from_str("RRYYWWSS").to_string() == "RRYYWWSS"

    def test_fully_recessive(self):
        assert Genotype.from_str("rryywwss").to_string() == "rryywwss"

    def test_packed_value_puts_red_in_high_bits(self):
        assert Genotype.from_str("RRYYWWSS").seq == 0xFF
        assert Genotype.from_str("rryywwss").seq == 0x00
        assert Genotype.from_str("RrYYWWss").seq == 0b10_11_11_00

    def test_recessive_first_pair_is_normalized(self):
        genotype = Genotype.from_str("rRYYWWss")
        assert genotype == Genotype.from_str("RrYYWWss")
        assert genotype.to_string() == "RrYYWWss"

    def test_every_locus_normalized(self):
        assert Genotype.from_str("rRyYwWsS").to_string() == "RrYyWwSs"

    @pytest.mark.parametrize("text", all_genotype_strings())
    def test_round_trip(self, text):
        genotype = Genotype.from_str(text)
        assert genotype.to_string() == text
        assert Genotype.from_str(genotype.to_string()) is genotype

    def test_81_distinct_genotypes(self):
        assert len({Genotype.from_str(t) for t in all_genotype_strings()}) == 81


# ─── Parse errors ─────────────────────────────────────────────────────────────


class TestParseErrors:
    @pytest.mark.parametrize("text", ["", "RrYYWWs", "RrYYWWssX", "RRYYWWSSRRYYWWSS"])
    def test_wrong_length_raises_invalid_format(self, text):
        with pytest.raises(InvalidFormatError) as exc_info:
            Genotype.from_str(text)
        assert exc_info.value.expected_length == 8
        assert exc_info.value.text == text

    def test_invalid_character_reports_position(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            Genotype.from_str("RrYXWWss")
        error = exc_info.value
        assert error.position == 3
        assert error.char == "X"
        assert error.expected == "Y"

    def test_letter_from_another_locus_is_rejected(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            Genotype.from_str("RrYYWWsr")
        assert exc_info.value.position == 7

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidFormatError, FlowerCrossError)
        assert issubclass(InvalidCharacterError, FlowerCrossError)
        with pytest.raises(ValueError):
            Genotype.from_str("abc")

    def test_non_string_raises_type_error(self):
        with pytest.raises(TypeError):
            Genotype.from_str(0xFF)

    def test_lenient_mode_reads_unknown_characters_as_recessive(self):
        genotype = Genotype.from_str("R?YYWWsX", strict=False)
        assert genotype.to_string() == "RrYYWWss"

    def test_lenient_mode_still_checks_length(self):
        with pytest.raises(InvalidFormatError):
            Genotype.from_str("RrYY", strict=False)


# ─── Raw construction ─────────────────────────────────────────────────────────


class TestFromSeq:
    def test_normalizes_raw_value(self):
        assert Genotype.from_seq(0b01_11_11_00) is Genotype.from_str("RrYYWWss")

    @pytest.mark.parametrize("seq", [-1, 256])
    def test_out_of_range_raises(self, seq):
        with pytest.raises(ValueError):
            Genotype.from_seq(seq)

    @pytest.mark.parametrize("seq", ["ff", 1.0, True])
    def test_non_integer_raises(self, seq):
        with pytest.raises(TypeError):
            Genotype.from_seq(seq)


# ─── Value semantics ──────────────────────────────────────────────────────────


class TestValueSemantics:
    def test_instances_are_cached(self):
        assert Genotype.from_str("RrYyWwSs") is Genotype.from_str("rRyYwWsS")

    def test_immutable(self):
        genotype = Genotype.from_str("RrYyWwSs")
        with pytest.raises(AttributeError):
            genotype._seq = 0

    def test_hashable_and_equal_by_value(self):
        assert {Genotype.from_str("RRYYWWSS"): 1}[Genotype.from_seq(0xFF)] == 1

    def test_not_equal_to_string(self):
        assert Genotype.from_str("RRYYWWSS") != "RRYYWWSS"

    def test_str_and_repr(self):
        genotype = Genotype.from_str("RrYYWWss")
        assert str(genotype) == "RrYYWWss"
        assert repr(genotype) == "Genotype('RrYYWWss')"

    def test_pickle_returns_cached_instance(self):
        genotype = Genotype.from_str("RrYYWWss")
        assert pickle.loads(pickle.dumps(genotype)) is genotype


# ─── Locus queries ────────────────────────────────────────────────────────────


class TestLocusQueries:
    def test_zygosity_at_each_locus(self):
        genotype = Genotype.from_str("RrYYwwSs")
        assert genotype.zygosity_at(Locus.RED) == Zygosity.HETEROZYGOUS
        assert genotype.zygosity_at(Locus.YELLOW) == Zygosity.HOMOZYGOUS_DOMINANT
        assert genotype.zygosity_at(Locus.WHITE) == Zygosity.HOMOZYGOUS_RECESSIVE
        assert genotype.zygosity_at(Locus.SHADE) == Zygosity.HETEROZYGOUS

    def test_integer_locus_index(self):
        assert Genotype.from_str("RrYYwwSs").zygosity_at(2) == Zygosity.HOMOZYGOUS_RECESSIVE

    def test_unknown_locus_raises(self):
        with pytest.raises(ValueError):
            Genotype.from_str("RrYYwwSs").zygosity_at(4)

    def test_homozygous_and_heterozygous(self):
        genotype = Genotype.from_str("RrYYwwSs")
        assert genotype.is_heterozygous_at(Locus.RED)
        assert genotype.is_homozygous_at(Locus.YELLOW)
        assert genotype.is_homozygous_at(Locus.WHITE)
        assert not genotype.is_homozygous_at(Locus.SHADE)


# ─── Gametes ──────────────────────────────────────────────────────────────────


class TestProduceGametes:
    def test_single_heterozygous_locus(self):
        assert Genotype.from_str("RrYYWWss").produce_gametes() == {"RYWs": 0.5, "rYWs": 0.5}

    def test_homozygote_makes_one_gamete(self):
        assert Genotype.from_str("rryywwss").produce_gametes() == {"ryws": 1.0}

    def test_full_heterozygote_makes_16_equal_gametes(self):
        gametes = Genotype.from_str("RrYyWwSs").produce_gametes()
        assert len(gametes) == 16
        assert all(freq == pytest.approx(1 / 16) for freq in gametes.values())

    @pytest.mark.parametrize("text", ["RrYyWWss", "RRyyWwSs", "rrYyWwSS"])
    def test_frequencies_sum_to_one(self, text):
        assert sum(Genotype.from_str(text).produce_gametes().values()) == pytest.approx(1.0)


# ─── Concurrency ──────────────────────────────────────────────────────────────


class TestConcurrentConstruction:
    N_THREADS = 16

    def test_concurrent_creators_share_one_instance(self, monkeypatch):
        monkeypatch.setattr(Genotype, "_cache", {})
        barrier = threading.Barrier(self.N_THREADS)

        def create(_):
            barrier.wait()
            return Genotype.from_str("RrYyWwSs")

        with ThreadPoolExecutor(max_workers=self.N_THREADS) as pool:
            instances = list(pool.map(create, range(self.N_THREADS)))

        assert all(instance is instances[0] for instance in instances)
        assert Genotype._cache == {instances[0].seq: instances[0]}

    def test_losing_creator_returns_stored_instance(self, monkeypatch):
        monkeypatch.setattr(Genotype, "_cache", {})
        winner = Genotype.from_seq(0xAA)
        # A creator that checked the cache before the winner stored its
        # instance still ends up with the winner's object.
        monkeypatch.setattr(Genotype, "_cache", _MissOnceCache(Genotype._cache))
        assert Genotype.from_seq(0xAA) is winner


class _MissOnceCache(dict):
    """Cache whose first membership test misses, as if another thread had
    not yet stored its instance."""

    def __init__(self, *args):
        super().__init__(*args)
        self._missed = False

    def __contains__(self, key):
        if not self._missed:
            self._missed = True
            return False
        return super().__contains__(key)
