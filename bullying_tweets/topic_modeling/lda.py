"""
Latent Dirichlet Allocation over the English tweets.

The topic model uses a raw-count document-term matrix (LDA is defined
over term counts, not tf-idf weights).  Tweets that end up with no terms
after preprocessing are dropped before fitting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.decomposition import LatentDirichletAllocation

from ..analysis.visualizations import plot_top_terms
from ..data_processing.features import (
    build_document_term_matrix,
    drop_empty_documents,
    vocabulary,
)
from ..data_processing.tweets import (
    drop_missing_text,
    filter_language,
    load_tweets,
    summarise_dataset,
)
from ..data_processing.utils import DEFAULT_OPTIONS, PreprocessingOptions
from ..utils.file_io import write_csv, write_json

LOG = logging.getLogger(__name__)


@dataclass
class TopicModelResult:
    model: LatentDirichletAllocation
    top_terms: pd.DataFrame
    document_topics: pd.DataFrame
    perplexity: float
    n_documents: int


def prepare_topic_corpus(
    df: pd.DataFrame,
    text_column: str,
    language: str = "en",
    language_column: str | None = "lang",
) -> pd.DataFrame:
    """Filter to one language and drop tweets without text."""
    if language_column is not None:
        df = filter_language(df, language, language_column)
    return drop_missing_text(df, text_column)


def fit_lda(
    matrix,
    n_topics: int = 20,
    random_state: int | None = 42,
    max_iter: int = 20,
    learning_method: str = "batch",
) -> LatentDirichletAllocation:
    """Fit an LDA model with ``n_topics`` topics to a count matrix."""
    if n_topics < 1:
        raise ValueError(f"n_topics must be at least 1, got {n_topics}")
    if matrix.shape[0] == 0:
        raise ValueError("Cannot fit a topic model on an empty document-term matrix")
    lda = LatentDirichletAllocation(
        n_components=n_topics,
        max_iter=max_iter,
        learning_method=learning_method,
        random_state=random_state,
    )
    LOG.info("Fitting LDA with %d topics on %d documents", n_topics, matrix.shape[0])
    lda.fit(matrix)
    return lda


def top_terms(model: LatentDirichletAllocation, feature_names, n_terms: int = 10) -> pd.DataFrame:
    """Highest-weighted terms per topic, one column per topic."""
    feature_names = np.asarray(feature_names)
    n_terms = min(n_terms, len(feature_names))
    columns = {}
    for topic_idx, topic in enumerate(model.components_):
        top_features_ind = topic.argsort()[: -n_terms - 1 : -1]
        columns[f"Topic {topic_idx + 1}"] = feature_names[top_features_ind]
    table = pd.DataFrame(columns)
    table.index = pd.RangeIndex(1, n_terms + 1, name="rank")
    return table


def document_topics(model: LatentDirichletAllocation, matrix) -> pd.DataFrame:
    """Most likely topic (numbered from 1) for each document."""
    distribution = model.transform(matrix)
    return pd.DataFrame(
        {
            "topic": distribution.argmax(axis=1) + 1,
            "probability": distribution.max(axis=1),
        }
    )


def run_topic_pipeline(
    dataset_path: Path,
    results_dir: Path,
    text_column: str = "text",
    language_column: str | None = "lang",
    language: str = "en",
    n_topics: int = 20,
    n_terms: int = 10,
    random_state: int | None = 42,
    max_iter: int = 20,
    options: PreprocessingOptions = DEFAULT_OPTIONS,
) -> TopicModelResult | None:
    """Execute the topic-modeling workflow.

    Filters the dataset to ``language``, builds a count matrix, fits the
    LDA model and writes the top-terms table, document topic assignments
    and a bar-chart figure into ``results_dir``.  Returns ``None`` when
    the dataset file does not exist.
    """
    dataset_path = Path(dataset_path)
    results_dir = Path(results_dir)
    if not dataset_path.exists():
        logging.error("Dataset not found at %s", dataset_path)
        return None

    required = [text_column] + ([language_column] if language_column else [])
    df = load_tweets(dataset_path, required_columns=required)
    logging.info("Dataset summary:\n%s", summarise_dataset(df, language_column=language_column))
    corpus = prepare_topic_corpus(df, text_column, language, language_column)
    if corpus.empty:
        raise ValueError(f"No tweets left after filtering to language {language!r}")

    logging.info("Building term-count document-term matrix…")
    dtm = build_document_term_matrix(corpus[text_column], weighting="tf", options=options)
    dtm, kept = drop_empty_documents(dtm)
    if dtm.matrix.shape[0] == 0:
        raise ValueError("Every tweet was empty after preprocessing")

    model = fit_lda(
        dtm.matrix,
        n_topics=n_topics,
        random_state=random_state,
        max_iter=max_iter,
    )
    feature_names = vocabulary(dtm)
    terms = top_terms(model, feature_names, n_terms)
    assignments = document_topics(model, dtm.matrix)
    assignments.insert(0, text_column, corpus[text_column].iloc[kept].to_numpy())
    perplexity = float(model.perplexity(dtm.matrix))
    LOG.info("LDA perplexity: %.2f", perplexity)

    results_dir.mkdir(parents=True, exist_ok=True)
    write_csv(terms.reset_index(), results_dir / "top_terms.csv")
    write_csv(assignments, results_dir / "document_topics.csv")
    write_json(
        {
            "n_topics": n_topics,
            "n_documents": int(dtm.matrix.shape[0]),
            "n_terms": int(dtm.matrix.shape[1]),
            "perplexity": perplexity,
        },
        results_dir / "topic_model_summary.json",
    )
    plot_top_terms(model, feature_names, results_dir / "top_terms.png", n_terms=n_terms)

    return TopicModelResult(model, terms, assignments, perplexity, int(dtm.matrix.shape[0]))
