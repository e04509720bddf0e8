"""
Bullying Tweet Analysis Package

This package walks through two standard text-mining workflows on a
tweet dataset about bullying: supervised classification of bullying
traces (tf-idf + SVM with cross-validation) and unsupervised topic
modeling of the English tweets (LDA).  Modules are organised by stage
and can be used independently or orchestrated together through the
high‑level pipeline functions.
"""

from . import config  # noqa: F401
from . import pipelines  # noqa: F401

__all__ = [
    "config",
    "pipelines",
]
