"""Figures for the classifier and topic-model results."""

import logging
import math
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from sklearn.metrics import ConfusionMatrixDisplay, confusion_matrix  # noqa: E402


def plot_top_terms(model, feature_names, output_path, n_terms=10, n_cols=5):
    """Draw one horizontal bar chart of top-term weights per topic.

    Parameters
    ----------
    model : LatentDirichletAllocation
        Fitted topic model; only ``components_`` is read.
    feature_names : array-like of str
        Vocabulary in matrix column order.
    output_path : Path or str
        Where the PNG is written.
    """
    output_path = Path(output_path)
    feature_names = np.asarray(feature_names)
    n_topics = model.components_.shape[0]
    n_cols = min(n_cols, n_topics)
    n_rows = math.ceil(n_topics / n_cols)

    fig, axes = plt.subplots(n_rows, n_cols, figsize=(4 * n_cols, 3.5 * n_rows), sharex=True)
    axes = np.atleast_1d(axes).flatten()
    for topic_idx, topic in enumerate(model.components_):
        top_features_ind = topic.argsort()[: -n_terms - 1 : -1]
        ax = axes[topic_idx]
        ax.barh(feature_names[top_features_ind], topic[top_features_ind], height=0.7)
        ax.set_title(f"Topic {topic_idx + 1}")
        ax.invert_yaxis()
        for side in ("top", "right", "left"):
            ax.spines[side].set_visible(False)
    for ax in axes[n_topics:]:
        ax.axis("off")
    fig.suptitle("LDA top terms")
    fig.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path)
    plt.close(fig)
    logging.info("Saved top-term figure to %s", output_path)


def plot_confusion_matrix(y_true, y_pred, output_path, labels=None):
    """Save a confusion-matrix heatmap of held-out predictions."""
    output_path = Path(output_path)
    cm = confusion_matrix(y_true, y_pred, labels=labels)
    fig, ax = plt.subplots(figsize=(4, 4))
    ConfusionMatrixDisplay(cm, display_labels=labels).plot(ax=ax, colorbar=False)
    ax.set_title("Held-out confusion matrix")
    fig.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path)
    plt.close(fig)
