# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import numpy as np
import pandas as pd
import pytest

from recsplit.matrix import RatingStore

USER_IX = RatingStore.USER_IX
ITEM_IX = RatingStore.ITEM_IX
RATING_IX = RatingStore.RATING_IX


def create_rating_store(num_users, num_items, num_ratings, seed=42):
    rstate = np.random.RandomState(seed)

    input_dict = {
        "user": [f"u{u}" for u in rstate.randint(0, num_users, num_ratings)],
        "item": [f"i{i}" for i in rstate.randint(0, num_items, num_ratings)],
        "rating": rstate.randint(1, 6, num_ratings).astype(float),
    }

    df = pd.DataFrame.from_dict(input_dict)
    return RatingStore(df, "user", "item", "rating")


@pytest.fixture(scope="function")
def df():
    data = {
        "user": ["u3", "u1", "u1", "u2", "u3"],
        "item": ["i1", "i1", "i2", "i3", "i3"],
        "rating": [4.0, 2.5, 5.0, 1.0, 3.0],
    }
    return pd.DataFrame.from_dict(data)


@pytest.fixture(scope="function")
def store(df):
    return RatingStore(df, "user", "item", "rating")


@pytest.fixture(scope="function")
def empty_store():
    return RatingStore.from_arrays([], [], [])


@pytest.fixture(scope="function")
def store_10():
    """10 ratings of 3 users."""
    return RatingStore.from_arrays(
        [0, 0, 0, 1, 1, 1, 1, 2, 2, 2],
        [0, 1, 2, 0, 1, 2, 3, 3, 5, 6],
        [1.0, 2.0, 3.0, 4.0, 5.0, 1.0, 2.0, 3.0, 4.0, 5.0],
    )


@pytest.fixture(scope="function")
def larger_store():
    return create_rating_store(num_users=50, num_items=100, num_ratings=1000)


@pytest.fixture(scope="function")
def store_sporadic_users():
    """Users with only one or two ratings"""
    return RatingStore.from_arrays(
        ["a", "a", "a", "b", "c", "c", "d"],
        [1, 2, 3, 1, 2, 3, 3],
        [1.0, 2.0, 3.0, 4.0, 5.0, 1.0, 2.0],
    )


@pytest.fixture(scope="function")
def store_uniform_users():
    """10 users with exactly 5 ratings each."""
    users = np.repeat(np.arange(10), 5)
    items = np.tile(np.arange(5), 10)
    ratings = np.arange(50, dtype=float) % 5 + 1
    return RatingStore.from_arrays(users, items, ratings)
