#!/usr/bin/env python
"""Thin wrapper for running the LDA topic-model stage.

Usage examples (run from project root):
    python scripts/2.model_topics.py --dataset data/bullying_tweets.csv
    python scripts/2.model_topics.py --topics 10 --terms 15 --language en

All flags are those of ``bullying-tweets topics``; see ``--help``.
"""
from __future__ import annotations

import sys

from bullying_tweets.cli import main

if __name__ == "__main__":
    raise SystemExit(main(["topics", *sys.argv[1:]]))
