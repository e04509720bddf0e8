"""Command-line entry point for the classification and topic-model stages.

Examples
    # classify with the defaults from config.py / .env
    bullying-tweets classify --dataset data/bullying_tweets.csv

    # 20-topic LDA on the English tweets, 10 terms per topic
    bullying-tweets topics --dataset data/bullying_tweets.csv --topics 20 --terms 10

    # both stages
    bullying-tweets all --dataset data/bullying_tweets.csv --results-dir results
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import config, pipelines
from .classification.text_classifier import get_models

LOG = logging.getLogger(__name__)


def _common_options() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--dataset", type=Path, default=config.DATASET_PATH, help="Tweet CSV file")
    parser.add_argument("--results-dir", type=Path, default=config.RESULTS_DIR, help="Where reports are written")
    parser.add_argument("--text-column", default=config.TEXT_COLUMN)
    parser.add_argument("--seed", type=int, default=config.RANDOM_STATE, help="Random state for splits and models")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return parser


def _classify_options() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--label-column", default=config.LABEL_COLUMN)
    parser.add_argument("--test-size", type=float, default=config.TEST_SIZE, help="Held-out fraction")
    parser.add_argument("--folds", type=int, default=config.CV_FOLDS, help="Cross-validation folds")
    parser.add_argument(
        "--algorithm",
        choices=sorted(get_models()),
        default=config.CLASSIFIER_ALGORITHM,
    )
    parser.add_argument("--tune", action="store_true", help="Grid search the algorithm's parameters")
    parser.add_argument("--unlabeled", type=Path, help="Optional CSV of tweets to label with the fitted model")
    return parser


def _topic_options() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--language-column", default=config.LANGUAGE_COLUMN)
    parser.add_argument("--language", default=config.TOPIC_LANGUAGE, help="Language code kept for topic modeling")
    parser.add_argument("--topics", type=int, default=config.N_TOPICS, help="Number of LDA topics")
    parser.add_argument("--terms", type=int, default=config.N_TOP_TERMS, help="Top terms printed per topic")
    parser.add_argument("--max-iter", type=int, default=20, help="LDA iterations")
    return parser


def build_parser() -> argparse.ArgumentParser:
    common, classify, topics = _common_options(), _classify_options(), _topic_options()
    parser = argparse.ArgumentParser(
        prog="bullying-tweets",
        description="Classify bullying traces and model topics in a tweet dataset.",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("classify", parents=[common, classify], help="tf-idf + classifier with cross-validation")
    sub.add_parser("topics", parents=[common, topics], help="LDA topic model of the filtered tweets")
    sub.add_parser("all", parents=[common, classify, topics], help="Run both stages")
    return parser


def _classify(args: argparse.Namespace) -> int:
    result = pipelines.run_classification(
        args.dataset,
        args.results_dir,
        text_column=args.text_column,
        label_column=args.label_column,
        test_size=args.test_size,
        n_folds=args.folds,
        algorithm=args.algorithm,
        random_state=args.seed,
        tune=args.tune,
        unlabeled_path=args.unlabeled,
    )
    if result is None:
        return 2
    cv = result.cross_validation
    print(f"\n=== Cross-validation ({len(cv.fold_accuracies)} folds) ===")
    for fold, acc in enumerate(cv.fold_accuracies, 1):
        print(f"Fold {fold}: {acc:.4f}")
    print(f"Mean accuracy: {cv.mean_accuracy:.4f} (std {cv.std_accuracy:.4f})")
    print("\n=== Held-out evaluation ===")
    print(result.analytics.summary())
    print()
    print(result.analytics.by_label.round(4).to_string())
    return 0


def _topics(args: argparse.Namespace) -> int:
    result = pipelines.run_topic_modeling(
        args.dataset,
        args.results_dir,
        text_column=args.text_column,
        language_column=args.language_column,
        language=args.language,
        n_topics=args.topics,
        n_terms=args.terms,
        random_state=args.seed,
        max_iter=args.max_iter,
    )
    if result is None:
        return 2
    print(f"\n=== Top {args.terms} terms for {args.topics} topics ({result.n_documents} tweets) ===")
    print(result.top_terms.to_string())
    print(f"\nPerplexity: {result.perplexity:.2f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    config.ensure_directories(args.results_dir)
    LOG.info("Writing results under %s", args.results_dir)

    if args.command == "classify":
        return _classify(args)
    if args.command == "topics":
        return _topics(args)

    status = _classify(args)
    if status != 0:
        return status
    return _topics(args)


if __name__ == "__main__":
    raise SystemExit(main())
