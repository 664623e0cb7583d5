# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import logging
from abc import ABC, abstractmethod
from numbers import Integral, Real
from typing import List, Sequence, Tuple

import numpy as np
from tqdm.auto import tqdm

from recsplit.exceptions import EmptyDataSetError, InvalidArgumentError
from recsplit.matrix import RatingStore, TrainSet
from recsplit.util import check_seed, get_random_generator


logger = logging.getLogger("recsplit")

Folds = Tuple[List[TrainSet], List[RatingStore]]


def _is_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _concat(positions: Sequence[np.ndarray]) -> np.ndarray:
    if len(positions) == 0:
        return np.array([], dtype=np.int64)
    return np.concatenate(positions).astype(np.int64, copy=False)


class Splitter(ABC):
    """Base class for defining a splitter.

    A splitter divides a RatingStore into train and test folds.
    Each fold is a pair of a :class:`TrainSet` built on the train ratings,
    and a :class:`RatingStore` with the held out test ratings.

    Splitters hold no state besides their parameters.
    All randomness comes from a generator created during :meth:`split`,
    seeded with the seed passed to that call,
    so splitting the same data with the same seed always gives the same folds.

    A splitter can also be called as a function: ``splitter(data, seed)``
    is equivalent to ``splitter.split(data, seed)``.
    """

    def split(self, data: RatingStore, seed: int) -> Folds:
        """Split data into train and test folds.

        All parameters are validated before any fold is constructed.

        :param data: Ratings to split. Not modified.
        :type data: RatingStore
        :param seed: Seed for the random generator, a 64 bit integer.
        :type seed: int
        :raises InvalidArgumentError: If a parameter of the splitter or the seed is invalid.
        :raises EmptyDataSetError: If the splitter requires ratings and ``data`` is empty.
        :return: A 2-tuple: the list of train sets and the list of test sets,
            both of equal length.
        :rtype: Tuple[List[TrainSet], List[RatingStore]]
        """
        seed = check_seed(seed)
        self._validate(data)

        train_folds, test_folds = self._split(data, get_random_generator(seed))

        logger.debug(f"{self.identifier} - Split successful")

        return train_folds, test_folds

    def __call__(self, data: RatingStore, seed: int) -> Folds:
        return self.split(data, seed)

    @abstractmethod
    def _validate(self, data: RatingStore) -> None:
        """Check parameters against the data, raise if the split can't be made.

        :param data: Ratings that will be split.
        :type data: RatingStore
        """
        raise NotImplementedError()

    @abstractmethod
    def _split(self, data: RatingStore, rng: np.random.Generator) -> Folds:
        """Abstract method to be implemented by the child class.

        :param data: Validated ratings to split.
        :type data: RatingStore
        :param rng: Random generator owned by this call.
        :type rng: np.random.Generator
        """
        raise NotImplementedError()

    @property
    def name(self):
        """The name of the splitter."""
        return self.__class__.__name__

    @property
    def identifier(self):
        """String identifier of the splitter object,
        contains name and parameter values."""
        paramstring = ",".join((f"{k}={v}" for k, v in self.__dict__.items()))
        return self.name + f"({paramstring})"


class KFoldSplitter(Splitter):
    """Randomly divides the ratings into ``k`` folds of (nearly) equal size.

    Each fold serves as test set once, while the ratings in
    the other ``k - 1`` folds are used to build the train set.

    With ``L`` ratings, every fold contains ``L // k`` ratings,
    and the first ``L % k`` folds contain one extra rating.

    :param k: Number of folds, in ``[1, len(data)]``.
    :type k: int
    """

    def __init__(self, k: int):
        super().__init__()
        self.k = k

    def _validate(self, data: RatingStore) -> None:
        if not _is_int(self.k) or self.k <= 0:
            raise InvalidArgumentError(f"Number of folds should be a positive integer, received {self.k!r}.")
        if len(data) == 0:
            raise EmptyDataSetError("Can't split an empty RatingStore into folds.")
        if self.k > len(data):
            raise InvalidArgumentError(f"Number of folds {self.k} exceeds the number of ratings {len(data)}.")

    def _split(self, data: RatingStore, rng: np.random.Generator) -> Folds:
        num_ratings = len(data)
        perm = rng.permutation(num_ratings)
        fold_size, remainder = divmod(num_ratings, self.k)

        train_folds = []
        test_folds = []

        begin = 0
        for i in range(self.k):
            end = begin + fold_size + (1 if i < remainder else 0)

            test_ix = perm[begin:end].copy()
            train_ix = np.concatenate([perm[:begin], perm[end:]])

            test_folds.append(data.subset(test_ix))
            train_folds.append(TrainSet(data.subset(train_ix)))

            logger.debug(f"{self.identifier} - Fold {i} - {len(test_ix)} test ratings")
            begin = end

        return train_folds, test_folds


class UserLOOSplitter(Splitter):
    """Per user leave-one-out splitter.

    For every repeat, one rating of every user is chosen uniformly at random
    and held out as test rating.
    All other ratings of the user are used to build the train set.
    A user with a single rating therefore has no train ratings in that repeat.

    :param repeat: Number of independent train/test pairs to generate.
    :type repeat: int
    """

    def __init__(self, repeat: int):
        super().__init__()
        self.repeat = repeat

    def _validate(self, data: RatingStore) -> None:
        if not _is_int(self.repeat) or self.repeat <= 0:
            raise InvalidArgumentError(f"Repeat should be a positive integer, received {self.repeat!r}.")
        if len(data) == 0:
            logger.warning(f"{self.identifier} - Splitting an empty RatingStore, all folds will be empty")

    def _split(self, data: RatingStore, rng: np.random.Generator) -> Folds:
        full_set = TrainSet(data)
        user_positions = full_set.user_positions

        train_folds = []
        test_folds = []

        for _ in range(self.repeat):
            train_ix = []
            test_ix = []

            for positions in tqdm(user_positions):
                out = rng.integers(len(positions))
                test_ix.append(positions[out])
                train_ix.append(np.delete(positions, out))

            train_folds.append(TrainSet(data.subset(_concat(train_ix))))
            test_folds.append(data.subset(np.array(test_ix, dtype=np.int64)))

        return train_folds, test_folds


class UserKeepNSplitter(Splitter):
    """Splits users into train users and test users,
    keeping ``n`` ratings of every test user for training.

    Simulates recommending to users with a short profile (cold users).
    For every repeat a ``test_ratio`` fraction of the users is chosen at random.
    Of each such test user, ``n`` random ratings are used for training
    and the remaining ratings are held out as test ratings.
    All ratings of the other users are used for training.

    The number of test users is ``floor(num_users * test_ratio)``.

    :param repeat: Number of independent train/test pairs to generate.
    :type repeat: int
    :param n: Number of ratings of a test user to keep in the train set.
        A test user with ``n`` or fewer ratings has no test ratings.
    :type n: int
    :param test_ratio: Fraction of users to use as test users, in ``[0, 1]``.
    :type test_ratio: float
    """

    def __init__(self, repeat: int, n: int, test_ratio: float):
        super().__init__()
        self.repeat = repeat
        self.n = n
        self.test_ratio = test_ratio

    def _validate(self, data: RatingStore) -> None:
        if not _is_int(self.repeat) or self.repeat <= 0:
            raise InvalidArgumentError(f"Repeat should be a positive integer, received {self.repeat!r}.")
        if not _is_int(self.n) or self.n < 0:
            raise InvalidArgumentError(f"n should be a non-negative integer, received {self.n!r}.")
        if not isinstance(self.test_ratio, Real) or not 0 <= self.test_ratio <= 1:
            raise InvalidArgumentError(f"Test ratio should be in [0, 1], received {self.test_ratio!r}.")
        if len(data) == 0:
            logger.warning(f"{self.identifier} - Splitting an empty RatingStore, all folds will be empty")

    def _split(self, data: RatingStore, rng: np.random.Generator) -> Folds:
        full_set = TrainSet(data)
        user_positions = full_set.user_positions
        num_test_users = int(np.floor(full_set.num_users * self.test_ratio))

        train_folds = []
        test_folds = []

        for _ in range(self.repeat):
            user_perm = rng.permutation(full_set.num_users)
            test_users = user_perm[:num_test_users]
            train_users = user_perm[num_test_users:]

            # All ratings of train users are used for training
            train_ix = [user_positions[u] for u in train_users]
            test_ix = []

            for u in tqdm(test_users):
                shuffled = rng.permutation(user_positions[u])
                train_ix.append(shuffled[: self.n])
                test_ix.append(shuffled[self.n :])

            train_folds.append(TrainSet(data.subset(_concat(train_ix))))
            test_folds.append(data.subset(_concat(test_ix)))

            logger.debug(f"{self.identifier} - {num_test_users} test users")

        return train_folds, test_folds
