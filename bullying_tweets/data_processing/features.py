"""
Document-term matrix construction.

Both workflows build their matrix here: the classifier uses tf-idf
weights, the topic model uses raw term counts.  The matrix itself is a
scipy sparse matrix produced by scikit-learn and is treated as opaque.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Iterable, NamedTuple, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer, TfidfVectorizer

from .utils import DEFAULT_OPTIONS, PreprocessingOptions, preprocess_document

LOG = logging.getLogger(__name__)

WEIGHTINGS = ("tfidf", "tf")


class DocumentTermMatrix(NamedTuple):
    matrix: object
    vectorizer: CountVectorizer


def build_document_term_matrix(
    texts: Iterable[str],
    weighting: str = "tfidf",
    options: PreprocessingOptions = DEFAULT_OPTIONS,
    min_df: int | float = 1,
    max_df: int | float = 1.0,
    max_features: int | None = None,
    ngram_range: Tuple[int, int] = (1, 1),
) -> DocumentTermMatrix:
    """Preprocess ``texts`` and vectorise them.

    Parameters
    ----------
    texts : iterable of str
        Raw tweets.
    weighting : {"tfidf", "tf"}
        ``tfidf`` for the classifier, ``tf`` (raw counts) for LDA.
    options : PreprocessingOptions
        Stemming / stopword / punctuation switches.

    Returns
    -------
    DocumentTermMatrix
        The sparse matrix and the fitted vectoriser.
    """
    if weighting not in WEIGHTINGS:
        raise ValueError(f"Unknown weighting {weighting!r}; choose one of {WEIGHTINGS}")
    vectorizer_cls = TfidfVectorizer if weighting == "tfidf" else CountVectorizer
    vectorizer = vectorizer_cls(
        preprocessor=partial(preprocess_document, options=options),
        token_pattern=r"(?u)\b\w+\b",
        lowercase=False,
        min_df=min_df,
        max_df=max_df,
        max_features=max_features,
        ngram_range=ngram_range,
    )
    matrix = vectorizer.fit_transform(list(texts))
    LOG.info(
        "Built %s document-term matrix: %d documents x %d terms",
        weighting,
        matrix.shape[0],
        matrix.shape[1],
    )
    return DocumentTermMatrix(matrix, vectorizer)


def vocabulary(dtm: DocumentTermMatrix) -> np.ndarray:
    """Return the vocabulary terms in column order."""
    return dtm.vectorizer.get_feature_names_out()


def drop_empty_documents(dtm: DocumentTermMatrix) -> Tuple[DocumentTermMatrix, np.ndarray]:
    """Remove rows with no terms; return the reduced matrix and kept row indices."""
    row_sums = np.asarray(dtm.matrix.sum(axis=1)).ravel()
    keep = np.flatnonzero(row_sums > 0)
    if len(keep) < dtm.matrix.shape[0]:
        LOG.info("Dropping %d empty documents", dtm.matrix.shape[0] - len(keep))
    return DocumentTermMatrix(dtm.matrix[keep], dtm.vectorizer), keep
