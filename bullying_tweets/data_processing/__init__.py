"""
Subpackage for loading and transforming the tweet dataset.

Each module handles one aspect of preparing tweets for modelling:
loading and label encoding, text normalisation and stemming, and
construction of the document-term matrices.
"""

__all__ = [
    "tweets",
    "utils",
    "features",
]
