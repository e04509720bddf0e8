"""
Project configuration settings.

Edit the variables in this module, or set the matching ``BULLYING_*``
environment variables (a ``.env`` file in the project root is honoured),
to point at your dataset and tune the modelling defaults.  Keeping
configuration in one place makes it easy to override default behaviour
without modifying individual modules.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base directory for storing input and output data.
BASE_DIR: Path = Path(__file__).resolve().parents[1]


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    return Path(value) if value else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


###############################################################################
# Directory paths
###############################################################################

# Input tweets live here
DATA_DIR: Path = _env_path("BULLYING_DATA_DIR", BASE_DIR / "data")

# Reports, predictions and figures are written here
RESULTS_DIR: Path = _env_path("BULLYING_RESULTS_DIR", BASE_DIR / "results")

# The tweet CSV used by both workflows
DATASET_PATH: Path = _env_path("BULLYING_DATASET", DATA_DIR / "bullying_tweets.csv")

###############################################################################
# Dataset columns
###############################################################################

TEXT_COLUMN: str = os.getenv("BULLYING_TEXT_COLUMN", "text")
LABEL_COLUMN: str = os.getenv("BULLYING_LABEL_COLUMN", "bullying_traces")
LANGUAGE_COLUMN: str = os.getenv("BULLYING_LANGUAGE_COLUMN", "lang")

###############################################################################
# Modelling defaults
###############################################################################

# 90/10 train/test split
TEST_SIZE: float = _env_float("BULLYING_TEST_SIZE", 0.1)
CV_FOLDS: int = _env_int("BULLYING_CV_FOLDS", 3)
CLASSIFIER_ALGORITHM: str = os.getenv("BULLYING_ALGORITHM", "svm")

N_TOPICS: int = _env_int("BULLYING_N_TOPICS", 20)
N_TOP_TERMS: int = _env_int("BULLYING_N_TOP_TERMS", 10)
TOPIC_LANGUAGE: str = os.getenv("BULLYING_TOPIC_LANGUAGE", "en")

RANDOM_STATE: int = _env_int("BULLYING_RANDOM_STATE", 42)


def ensure_directories(*dirs: Path) -> None:
    """Create the given directories (default: data and results) if missing."""
    for _dir in dirs or (DATA_DIR, RESULTS_DIR):
        Path(_dir).mkdir(parents=True, exist_ok=True)
