# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import numpy as np
import pandas as pd
import pytest

from recsplit.exceptions import InvalidArgumentError
from recsplit.matrix import Rating, RatingStore


def test_init(store):
    assert len(store) == 5
    assert store.num_ratings == 5

    np.testing.assert_array_equal(store.users, ["u3", "u1", "u1", "u2", "u3"])
    np.testing.assert_array_equal(store.items, ["i1", "i1", "i2", "i3", "i3"])
    np.testing.assert_array_equal(store.ratings, [4.0, 2.5, 5.0, 1.0, 3.0])
    np.testing.assert_array_equal(store.interaction_ids, np.arange(5))


def test_init_missing_column(df):
    with pytest.raises(KeyError):
        RatingStore(df.drop(columns=["rating"]), "user", "item", "rating")


def test_init_missing_ids(df):
    df.loc[2, "user"] = None
    with pytest.raises(InvalidArgumentError):
        RatingStore(df, "user", "item", "rating")


def test_init_does_not_change_df(df):
    df_copy = df.copy()
    RatingStore(df, "user", "item", "rating")
    pd.testing.assert_frame_equal(df, df_copy)


def test_from_arrays():
    store = RatingStore.from_arrays([1, 2, 1], ["a", "b", "c"], [1, 2, 3])

    assert len(store) == 3
    assert store[0] == Rating(1, "a", 1.0)
    assert store[-1] == Rating(1, "c", 3.0)
    assert list(store) == [Rating(1, "a", 1.0), Rating(2, "b", 2.0), Rating(1, "c", 3.0)]
    assert store.ratings.dtype == float


def test_from_arrays_unequal_length():
    with pytest.raises(InvalidArgumentError):
        RatingStore.from_arrays([1, 2, 1], ["a", "b"], [1, 2, 3])


def test_empty(empty_store):
    assert len(empty_store) == 0
    assert list(empty_store) == []
    assert empty_store.active_users == set()


def test_getitem_out_of_range(store):
    with pytest.raises(IndexError):
        store[5]

    with pytest.raises(IndexError):
        store[-6]


def test_rating_is_immutable(store):
    rating = store[0]
    with pytest.raises(AttributeError):
        rating.rating = 1.0


def test_subset(store):
    sub = store.subset([3, 0, 4])

    assert len(sub) == 3
    assert list(sub) == [store[3], store[0], store[4]]
    np.testing.assert_array_equal(sub.interaction_ids, [3, 0, 4])

    # The original is untouched
    assert len(store) == 5
    np.testing.assert_array_equal(store.interaction_ids, np.arange(5))


def test_subset_of_subset_keeps_interaction_ids(store):
    sub = store.subset([4, 3, 2]).subset([2, 0])

    assert list(sub) == [store[2], store[4]]
    np.testing.assert_array_equal(sub.interaction_ids, [2, 4])


def test_subset_numpy_indices(store):
    sub = store.subset(np.array([1, 2]))
    assert list(sub) == [store[1], store[2]]


def test_subset_empty(store):
    sub = store.subset([])
    assert len(sub) == 0
    assert len(store) == 5


@pytest.mark.parametrize("indices", [[0, 5], [-1], [10]])
def test_subset_out_of_range(store, indices):
    with pytest.raises(IndexError):
        store.subset(indices)


def test_arrays_are_copies(store):
    users = store.users
    users[0] = "u999"
    ratings = store.ratings
    ratings[0] = -1

    assert store[0] == Rating("u3", "i1", 4.0)


def test_to_dataframe(store):
    df = store.to_dataframe()

    assert list(df.columns) == [
        RatingStore.INTERACTION_IX,
        RatingStore.USER_IX,
        RatingStore.ITEM_IX,
        RatingStore.RATING_IX,
    ]
    df.loc[0, RatingStore.RATING_IX] = 100.0
    assert store[0].rating == 4.0


def test_active_users_items(store):
    assert store.active_users == {"u1", "u2", "u3"}
    assert store.active_items == {"i1", "i2", "i3"}


def test_init_ignores_columns_with_internal_names(df):
    df = df.rename(columns={"rating": "score"})
    df[RatingStore.USER_IX] = "stale"
    df[RatingStore.RATING_IX] = -1.0

    store = RatingStore(df, "user", "item", "score")

    assert list(store.to_dataframe().columns) == [
        RatingStore.INTERACTION_IX,
        RatingStore.USER_IX,
        RatingStore.ITEM_IX,
        RatingStore.RATING_IX,
    ]
    np.testing.assert_array_equal(store.users, ["u3", "u1", "u1", "u2", "u3"])
    np.testing.assert_array_equal(store.ratings, [4.0, 2.5, 5.0, 1.0, 3.0])


@pytest.mark.parametrize("indices", [[True, False, True, False, False], [0.0, 1.5], ["0"]])
def test_subset_non_integer_indices(store, indices):
    with pytest.raises(IndexError):
        store.subset(indices)


def test_ratings_hold_python_ids():
    store = RatingStore.from_arrays(np.array([1, 2]), np.array([3, 4]), [1.0, 2.0])

    assert type(store[0].user) is int
    assert type(store[1].item) is int
    assert all(type(rating.user) is int for rating in store)
