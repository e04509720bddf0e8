from itertools import product

import pandas as pd
import pytest

from bullying_tweets.data_processing import utils

STOPWORDS = frozenset(
    {
        "i", "me", "my", "we", "you", "he", "she", "it", "they", "was", "were",
        "is", "am", "are", "be", "been", "at", "the", "a", "an", "to", "and",
        "in", "on", "of", "by", "after", "so", "this", "that", "again", "got",
    }
)

BULLYING_ACTS = ["bullied", "teased", "harassed", "mocked", "pushed"]
BULLYING_PLACES = ["at school", "in class", "on the bus", "online", "after lunch", "by classmates"]
OTHER_ACTS = ["love", "enjoying", "craving", "watching", "sharing"]
OTHER_THINGS = ["coffee", "sunny weather", "the football game", "new phone", "pizza", "concert"]


@pytest.fixture(autouse=True)
def fixed_stopwords(monkeypatch):
    """Avoid downloading the NLTK stopword corpus during tests."""
    monkeypatch.setattr(utils, "get_stopwords", lambda language="english": STOPWORDS)
    return STOPWORDS


@pytest.fixture
def tweets_df():
    rows = []
    for i, (act, place) in enumerate(product(BULLYING_ACTS, BULLYING_PLACES)):
        rows.append(
            {
                "text": f"RT @kid{i}: I got {act} {place} again #bullying http://t.co/{i}",
                "bullying_traces": "y",
                "lang": "es" if i % 5 == 0 else "en",
            }
        )
    for i, (act, thing) in enumerate(product(OTHER_ACTS, OTHER_THINGS)):
        rows.append(
            {
                "text": f"@friend{i} so {act} this {thing} today!! #happy",
                "bullying_traces": "n",
                "lang": "fr" if i % 5 == 0 else "EN",
            }
        )
    return pd.DataFrame(rows)


@pytest.fixture
def dataset_csv(tmp_path, tweets_df):
    path = tmp_path / "tweets.csv"
    tweets_df.to_csv(path, index=False)
    return path
