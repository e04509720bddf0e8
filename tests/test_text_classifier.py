import numpy as np
import pandas as pd
import pytest
from scipy import sparse

from bullying_tweets.classification import text_classifier as tc
from bullying_tweets.data_processing.features import build_document_term_matrix
from bullying_tweets.data_processing.tweets import encode_labels


@pytest.fixture
def dtm(tweets_df):
    return build_document_term_matrix(tweets_df["text"], weighting="tfidf")


@pytest.fixture
def container(tweets_df, dtm):
    labels = encode_labels(tweets_df["bullying_traces"]).to_numpy()
    return tc.create_container(dtm.matrix, labels, test_size=0.1, random_state=0)


def test_create_container_splits_ninety_ten(container):
    assert len(container.train_index) == 54
    assert len(container.test_index) == 6
    assert not set(container.train_index) & set(container.test_index)
    # stratified: both classes held out equally
    assert sorted(container.y_test.tolist()) == [0, 0, 0, 1, 1, 1]
    assert container.X_train.shape[0] == 54


def test_create_container_without_shuffle_holds_out_the_tail(dtm):
    labels = np.array([0, 1] * 30)
    container = tc.create_container(dtm.matrix, labels, test_size=0.1, shuffle=False)
    assert container.test_index.tolist() == list(range(54, 60))


def test_create_container_rejects_label_mismatch(dtm):
    with pytest.raises(ValueError, match="labels"):
        tc.create_container(dtm.matrix, [0, 1, 0])


def test_get_models_registry():
    assert set(tc.get_models()) == {
        "svm",
        "linear_svm",
        "logistic_regression",
        "naive_bayes",
        "random_forest",
    }


def test_unknown_algorithm_raises(container):
    with pytest.raises(ValueError, match="Unknown algorithm"):
        tc.train_model(container, "boosting")


def test_cross_validate_three_folds(container):
    result = tc.cross_validate(container, "svm", n_folds=3, random_state=0)
    assert len(result.fold_accuracies) == 3
    assert all(0.0 <= acc <= 1.0 for acc in result.fold_accuracies)
    assert result.mean_accuracy >= 0.8
    assert result.to_frame()["fold"].tolist() == [1, 2, 3]


def test_train_classify_and_analytics(container):
    model = tc.train_model(container, "svm", random_state=0)
    predictions = tc.classify_model(container, model)
    assert predictions["row"].tolist() == container.test_index.tolist()
    assert predictions["probability"].between(0, 1).all()

    analytics = tc.create_analytics(container, predictions, "svm")
    assert analytics.by_label.index.tolist() == [0, 1]
    assert list(analytics.by_label.columns) == ["precision", "recall", "f1", "support"]
    assert analytics.accuracy >= 0.8
    assert analytics.confusion.sum() == 6
    assert "F1:" in analytics.summary()


def test_train_model_accepts_pipeline_params(container):
    model = tc.train_model(container, "logistic_regression", clf__C=10.0)
    assert model.named_steps["clf"].C == 10.0


def test_linear_svm_probability_from_decision_function(container):
    model = tc.train_model(container, "linear_svm", random_state=0)
    predictions = tc.classify_model(container, model)
    assert predictions["probability"].between(0.5, 1).all()


def test_tune_model_returns_fitted_estimator(container):
    model = tc.tune_model(container, "naive_bayes", cv=3)
    assert model.predict(container.X_test).shape == (6,)


def test_label_unlabeled(container, dtm):
    model = tc.train_model(container, "svm", random_state=0)
    unseen = pd.DataFrame({"text": ["I got bullied at school", "love this pizza"]})
    labelled = tc.label_unlabeled(model, dtm, unseen, "text")
    assert labelled["predicted_label"].tolist() == [1, 0]
    assert "predicted_label" not in unseen.columns


def test_run_pipeline_writes_reports(dataset_csv, tmp_path):
    results_dir = tmp_path / "results"
    unlabeled = tmp_path / "unlabeled.csv"
    pd.DataFrame({"text": ["teased on the bus", "sunny weather"]}).to_csv(unlabeled, index=False)

    result = tc.run_pipeline(dataset_csv, results_dir, random_state=0, unlabeled_path=unlabeled)

    assert result is not None
    assert len(result.predictions) == 6
    assert len(result.cross_validation.fold_accuracies) == 3
    assert len(result.unlabeled_predictions) == 2
    for name in (
        "cross_validation.csv",
        "classification_report.txt",
        "predictions.csv",
        "predictions.json",
        "confusion_matrix.png",
        "unlabeled_predictions.csv",
    ):
        assert (results_dir / name).exists(), name
    assert "Mean CV accuracy" in (results_dir / "classification_report.txt").read_text()


def test_run_pipeline_missing_dataset_returns_none(tmp_path):
    assert tc.run_pipeline(tmp_path / "missing.csv", tmp_path / "out") is None


@pytest.mark.parametrize("seed", range(10))
def test_reported_probability_belongs_to_reported_label(seed):
    rng = np.random.default_rng(seed)
    matrix = sparse.random(40, 15, density=0.3, format="csr", random_state=seed)
    labels = rng.permutation([0, 1] * 20)
    container = tc.create_container(matrix, labels, test_size=0.25, random_state=seed)
    model = tc.train_model(container, "svm")

    predictions = tc.classify_model(container, model)
    proba = model.predict_proba(container.X_test)
    columns = np.searchsorted(model.classes_, predictions["label"].to_numpy())

    assert (predictions["probability"] >= 0.5).all()
    np.testing.assert_allclose(proba[np.arange(len(columns)), columns], predictions["probability"])


def test_tune_model_searches_calibrated_svm(container):
    model = tc.tune_model(container, "svm", cv=3)
    assert model.named_steps["clf"].estimator.C in (0.1, 1.0, 10.0, 100.0)
