import pandas as pd
import pytest

from bullying_tweets.data_processing.tweets import (
    drop_missing_text,
    encode_labels,
    filter_language,
    load_tweets,
    summarise_dataset,
)


def test_encode_labels_maps_y_and_n():
    labels = pd.Series(["y", " N", "Y", "n"], name="bullying_traces")
    assert encode_labels(labels).tolist() == [1, 0, 1, 0]


def test_encode_labels_passes_numeric_through():
    assert encode_labels(pd.Series([1.0, 0.0, 1.0])).tolist() == [1, 0, 1]
    assert encode_labels(pd.Series(["1", "0"])).tolist() == [1, 0]


def test_encode_labels_rejects_unknown_values():
    with pytest.raises(ValueError, match="maybe"):
        encode_labels(pd.Series(["y", "maybe"]))


def test_encode_labels_rejects_missing_values():
    with pytest.raises(ValueError, match="missing"):
        encode_labels(pd.Series(["y", None], name="label"))


def test_load_tweets_reports_missing_columns(dataset_csv):
    with pytest.raises(KeyError, match="nope"):
        load_tweets(dataset_csv, required_columns=["text", "nope"])


def test_load_tweets_reads_rows(dataset_csv, tweets_df):
    df = load_tweets(dataset_csv, required_columns=["text", "bullying_traces", "lang"])
    assert len(df) == len(tweets_df)


def test_filter_language_is_case_insensitive(tweets_df):
    english = filter_language(tweets_df, "en", "lang")
    assert len(english) == 48
    assert set(english["lang"]) == {"en", "EN"}


def test_filter_language_can_empty_the_frame(tweets_df):
    assert filter_language(tweets_df, "de", "lang").empty


def test_drop_missing_text():
    df = pd.DataFrame({"text": ["hello", None, "   ", "bye"]})
    assert drop_missing_text(df, "text")["text"].tolist() == ["hello", "bye"]


def test_summarise_dataset(tweets_df):
    summary = summarise_dataset(tweets_df, "bullying_traces", "lang")
    assert summary.splitlines()[0] == "Tweets: 60"
    assert "y=30" in summary


@pytest.mark.parametrize("values", [[0.7, 0.2, 1.0], [0, 2], ["0", "3"]])
def test_encode_labels_rejects_non_binary_numbers(values):
    with pytest.raises(ValueError, match="0 or 1"):
        encode_labels(pd.Series(values))


def test_encode_labels_accepts_booleans():
    assert encode_labels(pd.Series([True, False])).tolist() == [1, 0]
