"""
High‑level pipeline orchestration functions.

Each function in this module coordinates one stage of the analysis
using the settings in :mod:`bullying_tweets.config`.  The functions call
into the lower‑level modules defined in `classification` and
`topic_modeling`.  Use these functions from the command line or import
them into your own scripts/notebooks.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from . import config
from .classification import text_classifier
from .classification.text_classifier import ClassificationResult
from .topic_modeling import lda
from .topic_modeling.lda import TopicModelResult


def run_classification(
    dataset_path: Path | None = None,
    results_dir: Path | None = None,
    **overrides: Any,
) -> ClassificationResult | None:
    """Train and evaluate the bullying-trace classifier.

    This stage reads the labeled tweets, builds a stemmed tf-idf
    document-term matrix, holds out 10% of the tweets, runs 3-fold
    cross-validation on the rest, trains the SVM and writes the
    classification report and predictions to
    `config.RESULTS_DIR / "classification"`.  Keyword overrides are
    passed to :func:`text_classifier.run_pipeline`.
    """
    params: Dict[str, Any] = {
        "text_column": config.TEXT_COLUMN,
        "label_column": config.LABEL_COLUMN,
        "test_size": config.TEST_SIZE,
        "n_folds": config.CV_FOLDS,
        "algorithm": config.CLASSIFIER_ALGORITHM,
        "random_state": config.RANDOM_STATE,
    }
    params.update(overrides)
    logging.info("Running tweet classification pipeline…")
    return text_classifier.run_pipeline(
        dataset_path=dataset_path or config.DATASET_PATH,
        results_dir=Path(results_dir or config.RESULTS_DIR) / "classification",
        **params,
    )


def run_topic_modeling(
    dataset_path: Path | None = None,
    results_dir: Path | None = None,
    **overrides: Any,
) -> TopicModelResult | None:
    """Fit the topic model to the English tweets.

    Results (top terms per topic, per-tweet topic assignments and a
    figure) are written to `config.RESULTS_DIR / "topics"`.  Keyword
    overrides are passed to :func:`lda.run_topic_pipeline`.
    """
    params: Dict[str, Any] = {
        "text_column": config.TEXT_COLUMN,
        "language_column": config.LANGUAGE_COLUMN,
        "language": config.TOPIC_LANGUAGE,
        "n_topics": config.N_TOPICS,
        "n_terms": config.N_TOP_TERMS,
        "random_state": config.RANDOM_STATE,
    }
    params.update(overrides)
    logging.info("Running topic modeling pipeline…")
    return lda.run_topic_pipeline(
        dataset_path=dataset_path or config.DATASET_PATH,
        results_dir=Path(results_dir or config.RESULTS_DIR) / "topics",
        **params,
    )


def run_all(dataset_path: Path | None = None, results_dir: Path | None = None) -> Dict[str, Any]:
    """Run classification followed by topic modeling."""
    return {
        "classification": run_classification(dataset_path, results_dir),
        "topics": run_topic_modeling(dataset_path, results_dir),
    }
