"""Report — Human-readable summary of a reverse causality SSL experiment."""

import numpy as np

from governance.significance_test import SignificanceReport
from training.resampling.harness import AggregateOutcome, DegeneratePolicy

RULE = "=" * 40


def _pct(rate: float) -> str:
    return "n/a" if np.isnan(rate) else f"{rate * 100:.1f}%"


def format_header(
    target: str,
    features: list[str],
    n_samples: int,
    n_features: int,
    n_missing_y: int,
    n_missing_x: int,
) -> str:
    lines = [
        RULE,
        "Reverse Causality Test using SSL",
        RULE,
        "",
        "Handling missing values...",
        f"  Missing values in Y replaced with 0: {n_missing_y}",
        f"  Missing values in X replaced with 0: {n_missing_x}",
        "",
        "Variables:",
        f"  Target (Y): {target}",
        f"  Predictors (X): {', '.join(features)}",
        f"  Sample size: {n_samples} observations",
        f"  Number of predictors: {n_features}",
    ]
    return "\n".join(lines)


def format_results(
    target: str,
    features: list[str],
    aggregate: AggregateOutcome,
    significance: SignificanceReport,
    diagnostics: dict | None = None,
) -> str:
    total = aggregate.n_resamples
    rmse = aggregate.rmse_summary()
    excl = significance.excluding_ties
    incl = significance.including_ties

    lines = [
        RULE,
        "RESULTS",
        RULE,
        "",
        "1. Variables Used:",
        f"   Target (Y): {target}",
        f"   Predictors (X): {', '.join(features)}",
        "",
        "2. Resampling Summary:",
        f"   Total resamples: {total}",
        f"   SSL wins: {aggregate.ssl_wins} ({_pct(aggregate.rate(aggregate.ssl_wins))})",
        f"   Supervised wins: {aggregate.supervised_wins} ({_pct(aggregate.rate(aggregate.supervised_wins))})",
        f"   Ties: {aggregate.ties} ({_pct(aggregate.rate(aggregate.ties))})",
    ]
    if aggregate.degenerate:
        note = "counted as ties" if aggregate.policy is DegeneratePolicy.COUNT_AS_TIE else "excluded"
        lines.append(f"   Degenerate trials: {aggregate.degenerate} ({note})")
    if aggregate.retries:
        lines.append(f"   Redrawn splits: {aggregate.retries}")
    lines.append(f"   Completed in {aggregate.elapsed_seconds:.2f} seconds")

    lines += [
        "",
        "3. Binomial Test Results:",
        "   -------------------------",
        f"   p-value (EXCLUDING ties, standard): {excl.p_value:.6f} (n={excl.n})",
        f"   p-value (INCLUDING ties): {incl.p_value:.6f} (n={incl.n})",
        "",
        "4. RMSE Statistics:",
        f"   Average RMSE (Supervised):      {rmse['supervised_mean']:.6f} (SD: {rmse['supervised_std']:.6f})",
        f"   Average RMSE (Semi-Supervised): {rmse['ssl_mean']:.6f} (SD: {rmse['ssl_std']:.6f})",
        f"   Average improvement: {rmse['improvement_pct_mean']:.2f}%",
    ]

    if diagnostics and diagnostics.get("valid_trials"):
        lines += [
            "",
            "5. Co-Training Diagnostics:",
            f"   Mean growth rounds: {diagnostics['mean_rounds']:.2f} (max {diagnostics['max_rounds']})",
            f"   Mean pseudo-labels per trial: {diagnostics['mean_pseudo_labeled']:.1f}",
            f"   Trials without any pseudo-label: {diagnostics['no_promotion_rate'] * 100:.1f}%",
        ]

    lines += [
        "",
        RULE,
        f"INTERPRETATION (α = {excl.alpha})",
        RULE,
        "",
    ]
    if excl.significant:
        lines += [
            "✓ SIGNIFICANT RESULT (excluding ties)",
            "  Semi-supervised learning significantly outperforms supervised learning.",
        ]
    else:
        lines += [
            "✗ NOT SIGNIFICANT (excluding ties)",
            "  No statistical evidence that SSL outperforms supervised learning.",
        ]
    lines.append(
        "✓ SIGNIFICANT RESULT (including ties)" if incl.significant else "✗ NOT SIGNIFICANT (including ties)"
    )
    lines.append(RULE)
    return "\n".join(lines)
