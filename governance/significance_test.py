"""Significance Test — One-tailed binomial tests of SSL wins against a fair coin."""

import math
from dataclasses import dataclass

from loguru import logger
from scipy.stats import binom

DEFAULT_ALPHA = 0.05


def binomial_upper_tail(successes: int, n: int, p: float = 0.5) -> float:
    """P(K >= successes | n, p), i.e. 1 - CDF(successes - 1; n, p). NaN when n == 0."""
    if n < 0 or successes < 0:
        raise ValueError(f"successes and n must be non-negative, got successes={successes}, n={n}")
    if successes > n:
        raise ValueError(f"successes ({successes}) exceeds n ({n})")
    if n == 0:
        return float("nan")
    return float(binom.sf(successes - 1, n, p))


@dataclass
class BinomialTestResult:
    """Result of a single one-tailed binomial test."""

    convention: str
    successes: int
    n: int
    p_value: float
    alpha: float = DEFAULT_ALPHA

    @property
    def defined(self) -> bool:
        return not math.isnan(self.p_value)

    @property
    def significant(self) -> bool:
        return self.defined and self.p_value < self.alpha

    def to_dict(self) -> dict:
        return {
            "convention": self.convention,
            "successes": self.successes,
            "n": self.n,
            "p_value": self.p_value,
            "alpha": self.alpha,
            "significant": self.significant,
        }


@dataclass
class SignificanceReport:
    """Both tie conventions for one harness run."""

    excluding_ties: BinomialTestResult
    including_ties: BinomialTestResult


def run_binomial_tests(
    ssl_wins: int,
    supervised_wins: int,
    ties: int,
    alpha: float = DEFAULT_ALPHA,
) -> SignificanceReport:
    """H0: pi = 0.5, H1: pi > 0.5 where pi is the probability that SSL wins a trial.

    Excluding ties uses n = ssl_wins + supervised_wins. Including ties uses every
    counted trial as n, so ties weigh against SSL.
    """
    n_excl = ssl_wins + supervised_wins
    n_incl = n_excl + ties

    excluding = BinomialTestResult(
        convention="excluding_ties",
        successes=ssl_wins,
        n=n_excl,
        p_value=binomial_upper_tail(ssl_wins, n_excl),
        alpha=alpha,
    )
    including = BinomialTestResult(
        convention="including_ties",
        successes=ssl_wins,
        n=n_incl,
        p_value=binomial_upper_tail(ssl_wins, n_incl),
        alpha=alpha,
    )

    if not excluding.defined:
        logger.warning("No trial produced a strict winner, p-value excluding ties is undefined")

    logger.info(
        f"Binomial test: p(excl. ties)={excluding.p_value:.6f} (n={n_excl}), "
        f"p(incl. ties)={including.p_value:.6f} (n={n_incl})"
    )
    return SignificanceReport(excluding_ties=excluding, including_ties=including)
