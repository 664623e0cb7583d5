# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert
from dataclasses import dataclass
import logging
from typing import Any, Hashable, Iterator, Sequence, Set

import numpy as np
import pandas as pd

from recsplit.exceptions import InvalidArgumentError
from recsplit.util import to_python_scalar

logger = logging.getLogger("recsplit")


@dataclass(frozen=True)
class Rating:
    """A single observation of a user rating an item.

    :param user: Outer user identifier.
    :type user: Hashable
    :param item: Outer item identifier.
    :type item: Hashable
    :param rating: The rating value.
    :type rating: float
    """

    user: Hashable
    item: Hashable
    rating: float


class RatingStore:
    """A RatingStore contains the ratings users gave to items, in the order they were observed.

    Users and items are identified by their outer (original) identifiers,
    which can be any hashable value: integers, strings, ...

    A RatingStore never changes after construction.
    Selecting ratings with :meth:`subset` always returns a new object.

    Every rating also carries an interaction id,
    which is its position in the RatingStore that was originally constructed.
    Interaction ids are preserved by :meth:`subset`,
    so a rating in a fold can always be traced back to the original observation.

    .. note::

        The RatingStore does not deduplicate user-item pairs.
        If a user rated an item twice, both ratings are kept.

    :param df: Dataframe containing one row per rating.
        Must contain user ids, item ids and rating values.
    :type df: pd.DataFrame
    :param user_ix: User ids column name.
    :type user_ix: str
    :param item_ix: Item ids column name.
    :type item_ix: str
    :param rating_ix: Rating values column name.
    :type rating_ix: str
    """

    USER_IX = "uid"
    ITEM_IX = "iid"
    RATING_IX = "rating"
    INTERACTION_IX = "interactionid"

    def __init__(self, df: pd.DataFrame, user_ix: str, item_ix: str, rating_ix: str):
        col_mapper = {
            user_ix: RatingStore.USER_IX,
            item_ix: RatingStore.ITEM_IX,
            rating_ix: RatingStore.RATING_IX,
        }

        missing_cols = set(col_mapper.keys()).difference(df.columns)
        if missing_cols:
            raise KeyError(f"Columns {missing_cols} are missing from the DataFrame.")

        # Select before renaming, other columns may already carry the internal names
        df = df[[user_ix, item_ix, rating_ix]].rename(columns=col_mapper).copy()

        if df[[RatingStore.USER_IX, RatingStore.ITEM_IX]].isna().any(axis=None):
            raise InvalidArgumentError("User and item identifiers can't be missing.")

        df[RatingStore.RATING_IX] = df[RatingStore.RATING_IX].astype(float)
        df = df.reset_index(drop=True).reset_index().rename(columns={"index": RatingStore.INTERACTION_IX})

        self._df = df

    @classmethod
    def from_arrays(cls, users: Sequence[Any], items: Sequence[Any], ratings: Sequence[float]) -> "RatingStore":
        """Create a RatingStore from three parallel sequences.

        The ``i``-th rating is given by ``users[i]`` to ``items[i]``
        with value ``ratings[i]``.

        :param users: Outer user ids.
        :type users: Sequence[Any]
        :param items: Outer item ids.
        :type items: Sequence[Any]
        :param ratings: Rating values.
        :type ratings: Sequence[float]
        :raises InvalidArgumentError: If the sequences differ in length.
        :return: RatingStore containing the ratings in the given order.
        :rtype: RatingStore
        """
        if not len(users) == len(items) == len(ratings):
            raise InvalidArgumentError(
                "Users, items and ratings should have equal length. "
                f"Received {len(users)}, {len(items)} and {len(ratings)}."
            )

        df = pd.DataFrame(
            {
                cls.USER_IX: pd.Series(list(users), dtype=object if len(users) == 0 else None),
                cls.ITEM_IX: pd.Series(list(items), dtype=object if len(items) == 0 else None),
                cls.RATING_IX: pd.Series(list(ratings), dtype=float),
            }
        )
        return cls(df, cls.USER_IX, cls.ITEM_IX, cls.RATING_IX)

    @classmethod
    def _from_internal(cls, df: pd.DataFrame) -> "RatingStore":
        # Skip column renaming so that interaction ids are kept.
        store = cls.__new__(cls)
        store._df = df.reset_index(drop=True)
        return store

    def __len__(self) -> int:
        return len(self._df)

    @property
    def num_ratings(self) -> int:
        """The total number of ratings.

        :return: Rating count.
        :rtype: int
        """
        return len(self._df)

    def __getitem__(self, index: int) -> Rating:
        if not -len(self) <= index < len(self):
            raise IndexError(f"Rating index {index} out of range for RatingStore of length {len(self)}")
        # Column-wise access, a row of an all-numeric frame would upcast ids to float
        return Rating(
            to_python_scalar(self._df[RatingStore.USER_IX].iat[index]),
            to_python_scalar(self._df[RatingStore.ITEM_IX].iat[index]),
            float(self._df[RatingStore.RATING_IX].iat[index]),
        )

    def __iter__(self) -> Iterator[Rating]:
        for user, item, rating in zip(self.users, self.items, self.ratings):
            yield Rating(to_python_scalar(user), to_python_scalar(item), float(rating))

    def __repr__(self) -> str:
        return f"RatingStore(num_ratings={self.num_ratings})"

    def subset(self, indices: Sequence[int]) -> "RatingStore":
        """Select the ratings at the given positions.

        The returned RatingStore contains exactly the ratings at ``indices``,
        in the order of ``indices``.
        The original RatingStore is not modified.

        :param indices: Positions of the ratings to select,
            each in ``[0, len(self))``.
        :type indices: Sequence[int]
        :raises IndexError: If a position is out of range, or not an integer.
        :return: New RatingStore with the selected ratings.
        :rtype: RatingStore
        """
        indices = np.asarray(indices).ravel()

        if indices.size == 0:
            indices = indices.astype(np.int64)
        elif not np.issubdtype(indices.dtype, np.integer):
            raise IndexError(f"Subset indices should be integer positions, received dtype {indices.dtype}.")

        if indices.size and (indices.min() < 0 or indices.max() >= len(self)):
            raise IndexError(f"Subset indices should be in [0, {len(self)}), received out of range positions.")

        logger.debug(f"Selecting subset of {indices.size} ratings")

        return RatingStore._from_internal(self._df.iloc[indices].copy())

    @property
    def users(self) -> np.ndarray:
        """Outer user ids of all ratings, in order.

        :return: Array of user ids.
        :rtype: np.ndarray
        """
        return self._df[RatingStore.USER_IX].to_numpy(copy=True)

    @property
    def items(self) -> np.ndarray:
        """Outer item ids of all ratings, in order.

        :return: Array of item ids.
        :rtype: np.ndarray
        """
        return self._df[RatingStore.ITEM_IX].to_numpy(copy=True)

    @property
    def ratings(self) -> np.ndarray:
        """Rating values, in order.

        :return: Array of rating values.
        :rtype: np.ndarray
        """
        return self._df[RatingStore.RATING_IX].to_numpy(dtype=float, copy=True)

    @property
    def interaction_ids(self) -> np.ndarray:
        """Interaction ids of all ratings, in order.

        The interaction id of a rating is its position in the RatingStore
        that was originally constructed, before any subsets were taken.

        :return: Array of interaction ids.
        :rtype: np.ndarray
        """
        return self._df[RatingStore.INTERACTION_IX].to_numpy(dtype=np.int64, copy=True)

    @property
    def active_users(self) -> Set[Any]:
        """The set of all users with at least one rating."""
        return set(self._df[RatingStore.USER_IX].unique())

    @property
    def active_items(self) -> Set[Any]:
        """The set of all items with at least one rating."""
        return set(self._df[RatingStore.ITEM_IX].unique())

    def to_dataframe(self) -> pd.DataFrame:
        """A copy of the ratings as a DataFrame.

        Columns are :attr:`USER_IX`, :attr:`ITEM_IX`, :attr:`RATING_IX`
        and :attr:`INTERACTION_IX`.

        :return: DataFrame with one row per rating.
        :rtype: pd.DataFrame
        """
        return self._df.copy()
