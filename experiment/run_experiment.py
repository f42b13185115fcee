"""Experiment entry point — Reverse causality test via co-training SSL and a binomial test.

Resamples labeled/unlabeled splits many times, counts how often co-training beats
supervised-only learning, and tests that win rate against a fair coin.
"""

import sys

from loguru import logger

from experiment.report import format_header, format_results
from experiment.settings import Settings, get_settings
from feature_engineering.dataset_loader import PreparedDataset, load_dataset, prepare_dataset
from feature_engineering.feature_registry import FeatureSchema
from governance.significance_test import run_binomial_tests
from monitoring.ssl_metrics import SSLMetricsCollector
from training.resampling.harness import ResamplingHarness
from training.semi_supervised.base_ssl_trainer import SSLConfig


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _load(settings: Settings, schema: FeatureSchema) -> PreparedDataset:
    if settings.DATA_PATH:
        return load_dataset(settings.DATA_PATH, schema)

    from training.data_generator import generate_regression_dataset

    logger.info("No SSL_DATA_PATH configured, using a synthetic dataset")
    df = generate_regression_dataset(
        n_features=len(schema.feature_names),
        seed=settings.SEED,
        target_name=schema.target_name,
    )
    df.columns = [schema.target_name, *schema.feature_names]
    return prepare_dataset(df, schema)


def run_experiment(settings: Settings | None = None, echo: bool = True) -> dict:
    """Load data, run the resampling harness, test significance, and print the report."""
    settings = settings or get_settings()

    schema = FeatureSchema(
        name=settings.SERVICE_NAME,
        target_name=settings.TARGET_COLUMN,
        feature_names=settings.feature_columns,
        labeled_size_offset=settings.LABELED_SIZE_OFFSET,
    )
    dataset = _load(settings, schema)

    config = SSLConfig(
        method=settings.METHOD,
        confidence_threshold=settings.CONFIDENCE_THRESHOLD,
        max_update=settings.MAX_UPDATE,
        labeled_size_offset=settings.LABELED_SIZE_OFFSET,
    )
    harness = ResamplingHarness.for_dataset(
        dataset.X,
        dataset.y,
        method=settings.METHOD,
        config=config,
        n_resamples=settings.N_RESAMPLES,
        seed=settings.SEED,
        degenerate_policy=settings.DEGENERATE_POLICY,
        max_degenerate_retries=settings.MAX_DEGENERATE_RETRIES,
        progress_every=settings.PROGRESS_EVERY,
    )
    aggregate = harness.run()

    significance = run_binomial_tests(
        aggregate.ssl_wins, aggregate.supervised_wins, aggregate.ties, alpha=settings.ALPHA
    )

    metrics = SSLMetricsCollector(max_update=config.max_update)
    metrics.record_many(aggregate.outcomes)
    diagnostics = metrics.summary()

    report = "\n\n".join(
        [
            format_header(
                schema.target_name,
                schema.feature_names,
                dataset.n_samples,
                dataset.n_features,
                dataset.n_missing_y,
                dataset.n_missing_x,
            ),
            format_results(schema.target_name, schema.feature_names, aggregate, significance, diagnostics),
        ]
    )
    if echo:
        print(report)

    return {
        "schema": schema.get_metadata(),
        "missing": {"y": dataset.n_missing_y, "x": dataset.n_missing_x},
        "aggregate": aggregate.to_dict(),
        "significance": {
            "excluding_ties": significance.excluding_ties.to_dict(),
            "including_ties": significance.including_ties.to_dict(),
        },
        "diagnostics": diagnostics,
        "report": report,
    }


def main() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    run_experiment(settings)


if __name__ == "__main__":
    main()
