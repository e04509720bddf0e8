"""File input/output helpers.

Writers create the parent directory first.  Every helper logs the
failing path before re-raising.
"""

import json
import logging
from pathlib import Path

import pandas as pd


def read_csv(path, **kwargs):
    """Read a CSV file into a DataFrame; ``kwargs`` go to ``pd.read_csv``."""
    path = Path(path)
    try:
        return pd.read_csv(path, **kwargs)
    except Exception as exc:
        logging.error("Failed to read CSV file %s: %s", path, exc)
        raise


def write_csv(df, path):
    """Write a DataFrame to CSV without the index."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)
    except Exception as exc:
        logging.error("Failed to write CSV file %s: %s", path, exc)
        raise


def write_json(data, path):
    """Write an object, or a DataFrame as a list of records, to JSON."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, pd.DataFrame):
            data.to_json(path, orient="records", force_ascii=False)
            return
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
    except Exception as exc:
        logging.error("Failed to write JSON file %s: %s", path, exc)
        raise


def write_text(text, path):
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except Exception as exc:
        logging.error("Failed to write text file %s: %s", path, exc)
        raise
