import pytest

from bullying_tweets.data_processing.features import build_document_term_matrix, vocabulary
from bullying_tweets.topic_modeling import lda


@pytest.fixture
def count_dtm(tweets_df):
    return build_document_term_matrix(tweets_df["text"], weighting="tf")


def test_fit_lda_and_top_terms(count_dtm):
    model = lda.fit_lda(count_dtm.matrix, n_topics=3, random_state=0, max_iter=5)
    terms = lda.top_terms(model, vocabulary(count_dtm), n_terms=5)
    assert list(terms.columns) == ["Topic 1", "Topic 2", "Topic 3"]
    assert terms.shape == (5, 3)
    assert terms.index.tolist() == [1, 2, 3, 4, 5]
    assert set(terms.to_numpy().ravel()) <= set(vocabulary(count_dtm))


def test_top_terms_caps_at_vocabulary_size():
    dtm = build_document_term_matrix(["bullied school", "school bus"], weighting="tf")
    model = lda.fit_lda(dtm.matrix, n_topics=2, random_state=0, max_iter=5)
    assert lda.top_terms(model, vocabulary(dtm), n_terms=10).shape == (3, 2)


def test_document_topics(count_dtm):
    model = lda.fit_lda(count_dtm.matrix, n_topics=3, random_state=0, max_iter=5)
    assignments = lda.document_topics(model, count_dtm.matrix)
    assert len(assignments) == count_dtm.matrix.shape[0]
    assert assignments["topic"].between(1, 3).all()
    assert assignments["probability"].between(0, 1).all()


def test_fit_lda_rejects_bad_topic_count(count_dtm):
    with pytest.raises(ValueError, match="n_topics"):
        lda.fit_lda(count_dtm.matrix, n_topics=0)


def test_prepare_topic_corpus_keeps_english(tweets_df):
    corpus = lda.prepare_topic_corpus(tweets_df, "text", "en", "lang")
    assert len(corpus) == 48


def test_run_topic_pipeline(dataset_csv, tmp_path):
    results_dir = tmp_path / "topics"
    result = lda.run_topic_pipeline(
        dataset_csv, results_dir, n_topics=3, n_terms=5, random_state=0, max_iter=5
    )
    assert result.n_documents == 48
    assert result.top_terms.shape == (5, 3)
    assert result.perplexity > 0
    for name in ("top_terms.csv", "document_topics.csv", "topic_model_summary.json", "top_terms.png"):
        assert (results_dir / name).exists(), name


def test_run_topic_pipeline_no_tweets_in_language(dataset_csv, tmp_path):
    with pytest.raises(ValueError, match="'de'"):
        lda.run_topic_pipeline(dataset_csv, tmp_path, language="de", n_topics=2)


def test_run_topic_pipeline_missing_dataset(tmp_path):
    assert lda.run_topic_pipeline(tmp_path / "missing.csv", tmp_path) is None
