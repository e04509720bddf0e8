"""
Text preprocessing helpers for tweets.

This module provides the functions used to turn a raw tweet into the
string that the vectorisers see: normalisation (URLs, mentions, retweet
markers, punctuation and digits), tokenisation, stopword removal and
stemming.  Stopwords and the stemmer come from NLTK.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

import nltk
from nltk.corpus import stopwords
from nltk.stem import SnowballStemmer

LOG = logging.getLogger(__name__)

URL_RE = re.compile(r"(?:https?://|www\.)\S+")
MENTION_RE = re.compile(r"@\w+")
RETWEET_RE = re.compile(r"\brt\b")
HASHTAG_RE = re.compile(r"#(\w+)")
DIGIT_RE = re.compile(r"\d+")
PUNCT_RE = re.compile(r"[^\w\s]|_")
SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class PreprocessingOptions:
    """Switches for the preprocessing chain applied to every document."""

    lowercase: bool = True
    remove_numbers: bool = True
    remove_punctuation: bool = True
    remove_stopwords: bool = True
    stem: bool = True
    language: str = "english"
    min_token_length: int = 1


DEFAULT_OPTIONS = PreprocessingOptions()


def normalise_text(text: str, options: PreprocessingOptions = DEFAULT_OPTIONS) -> str:
    """Strip tweet artefacts and collapse whitespace.

    URLs, ``@mentions`` and the ``RT`` retweet marker are removed and the
    ``#`` of a hashtag is dropped so the word itself survives.  Digits and
    punctuation are removed when the options ask for it.
    """
    if not isinstance(text, str):
        return ""
    cleaned = html.unescape(text)
    cleaned = URL_RE.sub(" ", cleaned)
    cleaned = MENTION_RE.sub(" ", cleaned)
    cleaned = HASHTAG_RE.sub(r"\1", cleaned)
    if options.lowercase:
        cleaned = cleaned.lower()
        cleaned = RETWEET_RE.sub(" ", cleaned)
    else:
        cleaned = re.sub(r"\b(?:RT|rt)\b", " ", cleaned)
    if options.remove_numbers:
        cleaned = DIGIT_RE.sub(" ", cleaned)
    if options.remove_punctuation:
        cleaned = PUNCT_RE.sub(" ", cleaned)
    return SPACE_RE.sub(" ", cleaned).strip()


def tokenize(text: str) -> list[str]:
    """Split normalised text on whitespace."""
    return text.split() if text else []


@lru_cache(maxsize=None)
def get_stopwords(language: str = "english") -> frozenset[str]:
    """Return the NLTK stopword list, fetching the corpus on first use."""
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        LOG.info("Downloading NLTK stopwords corpus…")
        nltk.download("stopwords", quiet=True)
    return frozenset(stopwords.words(language))


def remove_stopwords(tokens: Iterable[str], stops: Iterable[str] | None = None) -> list[str]:
    """Remove stopwords (English by default) from a list of tokens."""
    stops = frozenset(stops) if stops is not None else get_stopwords("english")
    return [tok for tok in tokens if tok not in stops]


@lru_cache(maxsize=None)
def _stemmer(language: str) -> SnowballStemmer:
    return SnowballStemmer(language)


def stem_tokens(tokens: Iterable[str], language: str = "english") -> list[str]:
    """Reduce each token to its Snowball stem."""
    stemmer = _stemmer(language)
    return [stemmer.stem(tok) for tok in tokens]


def preprocess_document(text: str, options: PreprocessingOptions = DEFAULT_OPTIONS) -> str:
    """Run the full chain and return the document as a space-joined string."""
    tokens = tokenize(normalise_text(text, options))
    if options.remove_stopwords:
        tokens = remove_stopwords(tokens, get_stopwords(options.language))
    if options.stem:
        tokens = stem_tokens(tokens, options.language)
    if options.min_token_length > 1:
        tokens = [tok for tok in tokens if len(tok) >= options.min_token_length]
    return " ".join(tokens)
