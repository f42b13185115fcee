"""Unit tests for the binomial significance test."""

import math

import pytest

from governance.significance_test import binomial_upper_tail, run_binomial_tests


class TestBinomialUpperTail:
    def test_half_of_hundred(self):
        assert binomial_upper_tail(50, 100) == pytest.approx(0.539795, abs=1e-5)

    def test_zero_successes_is_certain(self):
        assert binomial_upper_tail(0, 20) == pytest.approx(1.0)

    def test_all_successes(self):
        assert binomial_upper_tail(10, 10) == pytest.approx(0.5**10)

    def test_empty_n_is_nan(self):
        assert math.isnan(binomial_upper_tail(0, 0))

    def test_monotone_in_successes(self):
        p_values = [binomial_upper_tail(k, 100) for k in range(101)]
        assert all(a >= b for a, b in zip(p_values, p_values[1:]))

    def test_successes_above_n_rejected(self):
        with pytest.raises(ValueError):
            binomial_upper_tail(11, 10)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            binomial_upper_tail(-1, 10)


class TestTieConventions:
    def test_including_ties_uses_all_trials(self):
        report = run_binomial_tests(ssl_wins=60, supervised_wins=30, ties=10)
        assert report.excluding_ties.n == 90
        assert report.including_ties.n == 100
        assert report.including_ties.p_value == pytest.approx(binomial_upper_tail(60, 100))

    def test_ties_count_against_ssl(self):
        report = run_binomial_tests(ssl_wins=60, supervised_wins=30, ties=10)
        assert report.excluding_ties.p_value < report.including_ties.p_value

    def test_clear_win_is_significant(self):
        report = run_binomial_tests(ssl_wins=70, supervised_wins=30, ties=0)
        assert report.excluding_ties.significant
        assert report.including_ties.significant

    def test_even_split_is_not_significant(self):
        report = run_binomial_tests(ssl_wins=50, supervised_wins=50, ties=0)
        assert not report.excluding_ties.significant

    def test_no_strict_winner_is_undefined(self):
        report = run_binomial_tests(ssl_wins=0, supervised_wins=0, ties=12)
        assert not report.excluding_ties.defined
        assert not report.excluding_ties.significant
        assert report.including_ties.p_value == pytest.approx(1.0)

    def test_custom_alpha(self):
        report = run_binomial_tests(ssl_wins=58, supervised_wins=42, ties=0, alpha=0.01)
        assert report.excluding_ties.alpha == 0.01
        assert report.excluding_ties.to_dict()["significant"] is False
