#!/usr/bin/env python
"""Thin wrapper for running the classification stage.

Usage examples (run from project root):
    python scripts/1.classify_tweets.py --dataset data/bullying_tweets.csv
    python scripts/1.classify_tweets.py --algorithm naive_bayes --folds 5 --tune

All flags are those of ``bullying-tweets classify``; see ``--help``.
"""
from __future__ import annotations

import sys

from bullying_tweets.cli import main

if __name__ == "__main__":
    raise SystemExit(main(["classify", *sys.argv[1:]]))
