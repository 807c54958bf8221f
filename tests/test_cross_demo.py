"""
Tests for the cross_demo command-line driver.
"""

import pytest

import cross_demo
from configs import cross_config


class TestMain:
    def test_default_parents(self, capsys):
        assert cross_demo.main([]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert cross_config.DEFAULT_PARENTS == ('RrYYWWss', 'RrYYWWss')
        assert lines == [
            "Genotype('RrYYWWss'): 0.5",
            "Genotype('RRYYWWss'): 0.25",
            "Genotype('rrYYWWss'): 0.25",
        ]

    def test_given_parents(self, capsys):
        assert cross_demo.main(["RRYYWWSS", "rryywwss"]) == 0
        assert capsys.readouterr().out.splitlines() == ["Genotype('RrYyWwSs'): 1.0"]

    def test_exact_counts(self, capsys):
        assert cross_demo.main(["RrYYWWss", "RrYYWWss", "--exact"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "Genotype('RrYYWWss'): 128/256",
            "Genotype('RRYYWWss'): 64/256",
            "Genotype('rrYYWWss'): 64/256",
        ]

    def test_invalid_genotype_exits_with_error(self, capsys):
        assert cross_demo.main(["RrYYWWs", "RrYYWWss"]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error:" in captured.err

    def test_lenient_flag(self, capsys):
        assert cross_demo.main(["RRYYWWSS", "r?yywwss", "--lenient"]) == 0
        assert capsys.readouterr().out.splitlines() == ["Genotype('RrYyWwSs'): 1.0"]

    def test_unknown_log_level_rejected(self):
        with pytest.raises(SystemExit):
            cross_demo.main(["--log-level", "LOUD"])


class TestFormatResults:
    def test_float_lines(self):
        from flowercross import Genotype
        genotype = Genotype.from_str("RrYYWWss")
        assert cross_demo.format_results([(genotype, 0.5)]) == ["Genotype('RrYYWWss'): 0.5"]
