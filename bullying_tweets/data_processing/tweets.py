"""
Loading and light cleaning of the tweet dataset.

The CSV is expected to carry at least a free-text column, a binary
bullying label (``y``/``n`` or already 0/1) and a language code.  Column
names default to the values in :mod:`bullying_tweets.config`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable

import pandas as pd

from ..utils.file_io import read_csv

LOG = logging.getLogger(__name__)

LABEL_MAP: Dict[str, int] = {"y": 1, "n": 0}


def load_tweets(file_path: Path, required_columns: Iterable[str] = ()) -> pd.DataFrame:
    """Read the tweet CSV and check that the required columns exist."""
    df = read_csv(file_path)
    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        raise KeyError(
            f"Dataset {file_path} is missing column(s) {missing}; "
            f"available columns: {list(df.columns)}"
        )
    LOG.info("Loaded %d tweets from %s", len(df), file_path)
    return df


def _binary_ints(numeric: pd.Series) -> pd.Series:
    unknown = sorted(set(numeric[~numeric.isin([0, 1])].tolist()))
    if unknown:
        raise ValueError(f"Unexpected label values {unknown}; numeric labels must be 0 or 1")
    return numeric.astype(int)


def encode_labels(labels: pd.Series) -> pd.Series:
    """Map ``y``/``n`` labels to 1/0.

    A column that is already numeric must hold only 0 and 1 and is
    returned as integers.  Any other value, including a fractional or
    non-binary number, raises ``ValueError``.
    """
    if labels.isna().any():
        raise ValueError(f"Label column {labels.name!r} has {int(labels.isna().sum())} missing values")
    if pd.api.types.is_numeric_dtype(labels):
        return _binary_ints(labels)

    normalised = labels.astype(str).str.strip().str.lower()
    numeric = pd.to_numeric(normalised, errors="coerce")
    if numeric.notna().all():
        return _binary_ints(numeric)

    unknown = sorted(set(normalised) - set(LABEL_MAP))
    if unknown:
        raise ValueError(f"Unexpected label values {unknown}; expected 'y'/'n' or numeric labels")
    return normalised.map(LABEL_MAP).astype(int)


def drop_missing_text(df: pd.DataFrame, text_column: str) -> pd.DataFrame:
    """Remove rows whose text is missing or blank."""
    text = df[text_column]
    mask = text.notna() & text.astype(str).str.strip().ne("")
    dropped = int((~mask).sum())
    if dropped:
        LOG.info("Dropping %d tweets with empty text", dropped)
    return df.loc[mask].reset_index(drop=True)


def filter_language(df: pd.DataFrame, language: str, language_column: str) -> pd.DataFrame:
    """Keep only tweets whose language code matches ``language``."""
    codes = df[language_column].astype(str).str.strip().str.lower()
    filtered = df.loc[codes == language.lower()].reset_index(drop=True)
    LOG.info("Kept %d of %d tweets with language %r", len(filtered), len(df), language)
    return filtered


def summarise_dataset(
    df: pd.DataFrame,
    label_column: str | None = None,
    language_column: str | None = None,
) -> str:
    """Return a short text summary of size, label and language distribution."""
    lines = [f"Tweets: {len(df)}"]
    if label_column and label_column in df.columns:
        counts = df[label_column].value_counts(dropna=False)
        lines.append("Labels: " + ", ".join(f"{k}={v}" for k, v in counts.items()))
    if language_column and language_column in df.columns:
        counts = df[language_column].value_counts(dropna=False).head(5)
        lines.append("Top languages: " + ", ".join(f"{k}={v}" for k, v in counts.items()))
    return "\n".join(lines)
