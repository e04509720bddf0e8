"""
End‑to‑end tweet classification pipeline.

This module encapsulates the supervised workflow on the bullying
dataset.  It defines helpers for packing a document-term matrix and its
labels into a train/test container, cross-validating and training the
models, scoring the held-out tweets, summarising precision/recall/F1
and labelling unseen tweets with the fitted model.  The default model
is a linear SVM; Naive Bayes, Logistic Regression, a LinearSVC and a
Random Forest are available through :func:`get_models`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd
from scipy.special import expit
from sklearn.base import clone
from sklearn.calibration import CalibratedClassifierCV
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import (
    accuracy_score,
    classification_report,
    confusion_matrix,
    precision_recall_fscore_support,
)
from sklearn.model_selection import GridSearchCV, StratifiedKFold, train_test_split
from sklearn.naive_bayes import MultinomialNB
from sklearn.pipeline import Pipeline
from sklearn.svm import SVC, LinearSVC
from tqdm import tqdm

from ..analysis.visualizations import plot_confusion_matrix
from ..data_processing.features import DocumentTermMatrix, build_document_term_matrix
from ..data_processing.tweets import (
    drop_missing_text,
    encode_labels,
    load_tweets,
    summarise_dataset,
)
from ..data_processing.utils import DEFAULT_OPTIONS, PreprocessingOptions
from ..utils.file_io import read_csv, write_csv, write_json, write_text

LOG = logging.getLogger(__name__)


@dataclass
class ClassifierContainer:
    """A document-term matrix, its labels and the train/test row split."""

    matrix: Any
    labels: np.ndarray
    train_index: np.ndarray
    test_index: np.ndarray

    @property
    def X_train(self):
        return self.matrix[self.train_index]

    @property
    def X_test(self):
        return self.matrix[self.test_index]

    @property
    def y_train(self) -> np.ndarray:
        return self.labels[self.train_index]

    @property
    def y_test(self) -> np.ndarray:
        return self.labels[self.test_index]


@dataclass
class CrossValidationResult:
    algorithm: str
    fold_accuracies: List[float]

    @property
    def mean_accuracy(self) -> float:
        return float(np.mean(self.fold_accuracies))

    @property
    def std_accuracy(self) -> float:
        return float(np.std(self.fold_accuracies))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "fold": range(1, len(self.fold_accuracies) + 1),
                "accuracy": self.fold_accuracies,
            }
        )


@dataclass
class ClassificationAnalytics:
    """Held-out precision, recall and F1 for one algorithm."""

    algorithm: str
    by_label: pd.DataFrame
    accuracy: float
    confusion: np.ndarray
    report: str

    @property
    def precision(self) -> float:
        return float(self.by_label["precision"].mean())

    @property
    def recall(self) -> float:
        return float(self.by_label["recall"].mean())

    @property
    def f1(self) -> float:
        return float(self.by_label["f1"].mean())

    def summary(self) -> str:
        return (
            f"Algorithm: {self.algorithm}\n"
            f"Accuracy:  {self.accuracy:.4f}\n"
            f"Precision: {self.precision:.4f}\n"
            f"Recall:    {self.recall:.4f}\n"
            f"F1:        {self.f1:.4f}"
        )


@dataclass
class ClassificationResult:
    cross_validation: CrossValidationResult
    analytics: ClassificationAnalytics
    model: Pipeline
    predictions: pd.DataFrame
    unlabeled_predictions: pd.DataFrame | None = field(default=None)


def create_container(
    matrix: Any,
    labels,
    test_size: float = 0.1,
    random_state: int | None = 42,
    shuffle: bool = True,
    stratify: bool = True,
) -> ClassifierContainer:
    """Split the rows of ``matrix`` into training and test partitions.

    ``stratify`` keeps the label balance equal across the partitions; it
    only applies when ``shuffle`` is set.
    """
    labels = np.asarray(labels)
    n_rows = matrix.shape[0]
    if len(labels) != n_rows:
        raise ValueError(f"Matrix has {n_rows} rows but {len(labels)} labels were given")
    indices = np.arange(n_rows)
    train_index, test_index = train_test_split(
        indices,
        test_size=test_size,
        random_state=random_state if shuffle else None,
        shuffle=shuffle,
        stratify=labels if (stratify and shuffle) else None,
    )
    LOG.info("Container: %d training and %d test documents", len(train_index), len(test_index))
    return ClassifierContainer(matrix, labels, np.sort(train_index), np.sort(test_index))


def get_models(random_state: int | None = 42) -> Dict[str, Tuple[Pipeline, Dict[str, list]]]:
    """Define models and their hyperparameter grids for grid search."""
    models: Dict[str, Tuple[Pipeline, Dict[str, list]]] = {}
    models["svm"] = (
        Pipeline([
            ("clf", CalibratedClassifierCV(SVC(kernel="linear"), cv=3, ensemble=False)),
        ]),
        {
            "clf__estimator__C": [0.1, 1.0, 10.0, 100.0],
            "clf__estimator__kernel": ["linear", "rbf"],
        },
    )
    models["linear_svm"] = (
        Pipeline([
            ("clf", LinearSVC(random_state=random_state)),
        ]),
        {
            "clf__C": [0.1, 1.0, 10.0],
        },
    )
    models["logistic_regression"] = (
        Pipeline([
            ("clf", LogisticRegression(max_iter=1000)),
        ]),
        {
            "clf__C": [0.1, 1.0, 10.0],
        },
    )
    models["naive_bayes"] = (
        Pipeline([
            ("clf", MultinomialNB()),
        ]),
        {
            "clf__alpha": [0.1, 1.0, 10.0],
        },
    )
    models["random_forest"] = (
        Pipeline([
            ("clf", RandomForestClassifier(random_state=random_state)),
        ]),
        {
            "clf__n_estimators": [100, 200],
            "clf__max_depth": [None, 10, 20],
        },
    )
    return models


def _get_model(algorithm: str, random_state: int | None) -> Tuple[Pipeline, Dict[str, list]]:
    models = get_models(random_state)
    if algorithm not in models:
        raise ValueError(f"Unknown algorithm {algorithm!r}; choose one of {sorted(models)}")
    return models[algorithm]


def cross_validate(
    container: ClassifierContainer,
    algorithm: str = "svm",
    n_folds: int = 3,
    random_state: int | None = 42,
) -> CrossValidationResult:
    """Stratified k-fold accuracy on the training partition."""
    pipeline, _ = _get_model(algorithm, random_state)
    X, y = container.X_train, container.y_train
    folds = StratifiedKFold(n_splits=n_folds, shuffle=True, random_state=random_state)
    accuracies: List[float] = []
    for fold, (tr_idx, va_idx) in enumerate(
        tqdm(folds.split(X, y), total=n_folds, desc=f"{algorithm} CV"), 1
    ):
        model = clone(pipeline).fit(X[tr_idx], y[tr_idx])
        acc = accuracy_score(y[va_idx], model.predict(X[va_idx]))
        LOG.info("Fold %d accuracy: %.4f", fold, acc)
        accuracies.append(float(acc))
    result = CrossValidationResult(algorithm, accuracies)
    LOG.info("Mean cross-validation accuracy: %.4f", result.mean_accuracy)
    return result


def train_model(
    container: ClassifierContainer,
    algorithm: str = "svm",
    random_state: int | None = 42,
    **params,
) -> Pipeline:
    """Fit ``algorithm`` on the training partition.

    Extra keyword arguments are passed to the pipeline, e.g. ``clf__C=10``.
    """
    pipeline, _ = _get_model(algorithm, random_state)
    if params:
        pipeline.set_params(**params)
    LOG.info("Training %s model", algorithm)
    return pipeline.fit(container.X_train, container.y_train)


def tune_model(
    container: ClassifierContainer,
    algorithm: str = "svm",
    cv: int = 3,
    random_state: int | None = 42,
) -> Pipeline:
    """Grid search the algorithm's parameter grid and return the best estimator."""
    pipeline, param_grid = _get_model(algorithm, random_state)
    LOG.info("Tuning %s model", algorithm)
    gs = GridSearchCV(pipeline, param_grid, cv=cv, n_jobs=-1)
    gs.fit(container.X_train, container.y_train)
    LOG.info("Best parameters for %s: %s", algorithm, gs.best_params_)
    return gs.best_estimator_


def _predict_with_probability(model: Pipeline, X) -> Tuple[np.ndarray, np.ndarray]:
    if hasattr(model, "predict_proba"):
        # label and probability both come from the same row of predict_proba
        proba = model.predict_proba(X)
        best = proba.argmax(axis=1)
        return model.classes_[best], proba[np.arange(len(best)), best]
    labels = model.predict(X)
    # binary decision scores squashed onto (0, 1)
    scores = np.asarray(model.decision_function(X))
    if scores.ndim > 1:
        scores = scores.max(axis=1)
    p1 = expit(scores)
    return labels, np.maximum(p1, 1 - p1)


def classify_model(container: ClassifierContainer, model: Pipeline) -> pd.DataFrame:
    """Predict the test partition; one row per test document."""
    labels, probability = _predict_with_probability(model, container.X_test)
    return pd.DataFrame(
        {
            "row": container.test_index,
            "label": labels,
            "probability": probability,
        }
    )


def create_analytics(
    container: ClassifierContainer,
    predictions: pd.DataFrame,
    algorithm: str = "svm",
) -> ClassificationAnalytics:
    """Compare predicted test labels against the ground truth."""
    y_true = container.y_test
    y_pred = predictions["label"].to_numpy()
    labels = np.unique(container.labels)
    precision, recall, f1, support = precision_recall_fscore_support(
        y_true, y_pred, labels=labels, zero_division=0
    )
    by_label = pd.DataFrame(
        {"precision": precision, "recall": recall, "f1": f1, "support": support},
        index=pd.Index(labels, name="label"),
    )
    return ClassificationAnalytics(
        algorithm=algorithm,
        by_label=by_label,
        accuracy=float(accuracy_score(y_true, y_pred)),
        confusion=confusion_matrix(y_true, y_pred, labels=labels),
        report=classification_report(y_true, y_pred, labels=labels, zero_division=0),
    )


def label_unlabeled(
    model: Pipeline, dtm: DocumentTermMatrix, df_unlabeled: pd.DataFrame, text_column: str
) -> pd.DataFrame:
    """Predict labels for unseen tweets and return an augmented DataFrame."""
    X_unlabeled = dtm.vectorizer.transform(df_unlabeled[text_column].fillna("").astype(str))
    labels, probability = _predict_with_probability(model, X_unlabeled)
    df_unlabeled = df_unlabeled.copy()
    df_unlabeled["predicted_label"] = labels
    df_unlabeled["probability"] = probability
    return df_unlabeled


def save_predictions(predictions: pd.DataFrame, output_path: Path) -> None:
    """Save predictions to CSV and JSON formats."""
    write_csv(predictions, output_path.with_suffix(".csv"))
    write_json(predictions, output_path.with_suffix(".json"))


def run_pipeline(
    dataset_path: Path,
    results_dir: Path,
    text_column: str = "text",
    label_column: str = "bullying_traces",
    test_size: float = 0.1,
    n_folds: int = 3,
    algorithm: str = "svm",
    random_state: int | None = 42,
    options: PreprocessingOptions = DEFAULT_OPTIONS,
    tune: bool = False,
    unlabeled_path: Path | None = None,
) -> ClassificationResult | None:
    """Execute the full classification workflow.

    Reads ``dataset_path``, builds a tf-idf document-term matrix, holds
    out ``test_size`` of the tweets, cross-validates and trains the
    classifier and writes reports and predictions into ``results_dir``.
    Returns ``None`` when the dataset file does not exist.
    """
    dataset_path = Path(dataset_path)
    results_dir = Path(results_dir)
    if not dataset_path.exists():
        logging.error("Dataset not found at %s", dataset_path)
        return None

    logging.info("Loading labeled dataset…")
    df = load_tweets(dataset_path, required_columns=[text_column, label_column])
    df = drop_missing_text(df, text_column)
    logging.info("Dataset summary:\n%s", summarise_dataset(df, label_column))
    labels = encode_labels(df[label_column]).to_numpy()

    logging.info("Building tf-idf document-term matrix…")
    dtm = build_document_term_matrix(df[text_column], weighting="tfidf", options=options)

    logging.info("Splitting data…")
    container = create_container(dtm.matrix, labels, test_size=test_size, random_state=random_state)

    logging.info("Cross-validating %s with %d folds…", algorithm, n_folds)
    cv_result = cross_validate(container, algorithm, n_folds=n_folds, random_state=random_state)

    if tune:
        model = tune_model(container, algorithm, cv=n_folds, random_state=random_state)
    else:
        model = train_model(container, algorithm, random_state=random_state)

    logging.info("Evaluating model on held-out tweets…")
    scored = classify_model(container, model)
    analytics = create_analytics(container, scored, algorithm)

    results_dir.mkdir(parents=True, exist_ok=True)
    write_csv(cv_result.to_frame(), results_dir / "cross_validation.csv")
    write_text(
        f"{analytics.summary()}\n"
        f"Mean CV accuracy: {cv_result.mean_accuracy:.4f}\n\n"
        f"{analytics.report}",
        results_dir / "classification_report.txt",
    )

    predictions = df.iloc[container.test_index][[text_column]].reset_index(drop=True)
    predictions["true_label"] = container.y_test
    predictions["predicted_label"] = scored["label"].to_numpy()
    predictions["probability"] = scored["probability"].to_numpy()
    save_predictions(predictions, results_dir / "predictions")

    plot_confusion_matrix(
        container.y_test,
        scored["label"].to_numpy(),
        results_dir / "confusion_matrix.png",
        labels=np.unique(labels),
    )

    unlabeled = None
    if unlabeled_path is not None:
        logging.info("Predicting labels for unlabeled tweets…")
        unlabeled = label_unlabeled(model, dtm, read_csv(unlabeled_path), text_column)
        save_predictions(unlabeled, results_dir / "unlabeled_predictions")

    return ClassificationResult(cv_result, analytics, model, predictions, unlabeled)
