# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert
import logging
from typing import Any, Hashable, List, Tuple

import numpy as np
import pandas as pd
from scipy.sparse import csr_matrix

from recsplit.matrix.rating_store import RatingStore
from recsplit.util import to_python_scalar

logger = logging.getLogger("recsplit")


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _group_by_code(codes: np.ndarray, num_groups: int) -> List[np.ndarray]:
    """Positions of ``codes`` grouped per code value, each group in order of occurrence."""
    if num_groups == 0:
        return []
    order = _read_only(np.argsort(codes, kind="stable"))
    counts = np.bincount(codes, minlength=num_groups)
    return np.split(order, np.cumsum(counts)[:-1])


class TrainSet:
    """A dense index over the ratings in a RatingStore.

    Users and items get a consecutive inner id in ``[0, num_users)``
    and ``[0, num_items)`` respectively.
    Inner ids are assigned in order of first appearance while scanning the ratings,
    so the same RatingStore always results in the same ids.

    Ratings are grouped per inner user id,
    in the order they were encountered for that user.

    A TrainSet is built from a snapshot of exactly one RatingStore
    and does not change afterwards.

    Example
    ~~~~~~~~~

    ::

        from recsplit.matrix import RatingStore, TrainSet

        store = RatingStore.from_arrays(
            ["alice", "bob", "alice"],
            ["matrix", "matrix", "up"],
            [5.0, 3.0, 4.0],
        )
        train_set = TrainSet(store)

        train_set.num_users  # 2
        train_set.to_inner_item("up")  # 1
        train_set.user_ratings[0]  # [(0, 5.0), (1, 4.0)]

    :param data: Ratings to index.
    :type data: RatingStore
    """

    def __init__(self, data: RatingStore):
        self._data = data

        user_codes, outer_users = pd.factorize(data.users, sort=False)
        item_codes, outer_items = pd.factorize(data.items, sort=False)

        self._user_codes = _read_only(np.asarray(user_codes, dtype=np.int64))
        self._item_codes = _read_only(np.asarray(item_codes, dtype=np.int64))
        self._ratings = _read_only(data.ratings)

        self._outer_user_ids = _read_only(np.asarray(outer_users))
        self._outer_item_ids = _read_only(np.asarray(outer_items))

        self._user_id_mapping = {outer: inner for inner, outer in enumerate(self._outer_user_ids)}
        self._item_id_mapping = {outer: inner for inner, outer in enumerate(self._outer_item_ids)}

        self._user_positions = _group_by_code(self._user_codes, self.num_users)
        self._item_positions = _group_by_code(self._item_codes, self.num_items)

        logger.debug(
            f"Built TrainSet with {self.num_users} users, {self.num_items} items and {self.num_ratings} ratings"
        )

    def __len__(self) -> int:
        return len(self._ratings)

    def __repr__(self) -> str:
        return f"TrainSet(num_users={self.num_users}, num_items={self.num_items}, num_ratings={self.num_ratings})"

    @property
    def data(self) -> RatingStore:
        """The RatingStore this TrainSet was built from."""
        return self._data

    @property
    def num_users(self) -> int:
        """Number of distinct users."""
        return len(self._outer_user_ids)

    @property
    def num_items(self) -> int:
        """Number of distinct items."""
        return len(self._outer_item_ids)

    @property
    def num_ratings(self) -> int:
        """Number of ratings, equal to the length of the source RatingStore."""
        return len(self._ratings)

    @property
    def shape(self) -> Tuple[int, int]:
        """Shape of the rating matrix, as ``|U| x |I|``"""
        return self.num_users, self.num_items

    def to_inner_user(self, user: Hashable) -> int:
        """Get the inner id of a user.

        :param user: Outer user id.
        :type user: Hashable
        :raises KeyError: If the user has no ratings in this TrainSet.
        :return: Inner user id.
        :rtype: int
        """
        try:
            return self._user_id_mapping[user]
        except KeyError:
            raise KeyError(f"User {user!r} not present in TrainSet") from None

    def to_outer_user(self, inner_user: int) -> Any:
        """Get the outer id of a user.

        :param inner_user: Inner user id in ``[0, num_users)``.
        :type inner_user: int
        :raises KeyError: If the inner id is out of range.
        :return: Outer user id.
        """
        if not 0 <= inner_user < self.num_users:
            raise KeyError(f"Inner user id {inner_user} not present in TrainSet")
        return to_python_scalar(self._outer_user_ids[inner_user])

    def to_inner_item(self, item: Hashable) -> int:
        """Get the inner id of an item.

        :param item: Outer item id.
        :type item: Hashable
        :raises KeyError: If the item has no ratings in this TrainSet.
        :return: Inner item id.
        :rtype: int
        """
        try:
            return self._item_id_mapping[item]
        except KeyError:
            raise KeyError(f"Item {item!r} not present in TrainSet") from None

    def to_outer_item(self, inner_item: int) -> Any:
        """Get the outer id of an item.

        :param inner_item: Inner item id in ``[0, num_items)``.
        :type inner_item: int
        :raises KeyError: If the inner id is out of range.
        :return: Outer item id.
        """
        if not 0 <= inner_item < self.num_items:
            raise KeyError(f"Inner item id {inner_item} not present in TrainSet")
        return to_python_scalar(self._outer_item_ids[inner_item])

    @property
    def user_id_mapping(self) -> pd.DataFrame:
        """DataFrame with the outer user ids and their inner ids as columns."""
        return pd.DataFrame(
            {
                RatingStore.USER_IX: self._outer_user_ids,
                "inner_" + RatingStore.USER_IX: np.arange(self.num_users),
            }
        )

    @property
    def item_id_mapping(self) -> pd.DataFrame:
        """DataFrame with the outer item ids and their inner ids as columns."""
        return pd.DataFrame(
            {
                RatingStore.ITEM_IX: self._outer_item_ids,
                "inner_" + RatingStore.ITEM_IX: np.arange(self.num_items),
            }
        )

    @property
    def user_positions(self) -> List[np.ndarray]:
        """Per inner user id, the positions of the user's ratings in :attr:`data`.

        Positions are listed in the order the ratings occur in :attr:`data`.
        Every position in ``[0, num_ratings)`` occurs in exactly one list.

        :return: List indexed by inner user id of read-only position arrays.
        :rtype: List[np.ndarray]
        """
        return list(self._user_positions)

    @property
    def user_ratings(self) -> List[List[Tuple[int, float]]]:
        """Per inner user id, the ``(inner item id, rating)`` pairs of the user.

        Pairs are listed in the order they were encountered for that user.

        :return: List indexed by inner user id.
        :rtype: List[List[Tuple[int, float]]]
        """
        return [
            list(zip(self._item_codes[positions].tolist(), self._ratings[positions].tolist()))
            for positions in self._user_positions
        ]

    @property
    def item_ratings(self) -> List[List[Tuple[int, float]]]:
        """Per inner item id, the ``(inner user id, rating)`` pairs of the item.

        Pairs are listed in the order they were encountered for that item.

        :return: List indexed by inner item id.
        :rtype: List[List[Tuple[int, float]]]
        """
        return [
            list(zip(self._user_codes[positions].tolist(), self._ratings[positions].tolist()))
            for positions in self._item_positions
        ]

    @property
    def global_mean(self) -> float:
        """Mean of all ratings, NaN if there are none."""
        if self.num_ratings == 0:
            return float("nan")
        return float(self._ratings.mean())

    @property
    def rating_range(self) -> Tuple[float, float]:
        """Minimal and maximal rating, ``(nan, nan)`` if there are none."""
        if self.num_ratings == 0:
            return float("nan"), float("nan")
        return float(self._ratings.min()), float(self._ratings.max())

    @property
    def values(self) -> csr_matrix:
        """All ratings as a sparse matrix of size ``(num_users, num_items)``, indexed by inner ids.

        If a user rated the same item more than once, the entry is the sum of those ratings.

        :return: Ratings as a csr_matrix.
        :rtype: csr_matrix
        """
        return csr_matrix(
            (self._ratings, (self._user_codes, self._item_codes)),
            shape=self.shape,
            dtype=float,
        )
