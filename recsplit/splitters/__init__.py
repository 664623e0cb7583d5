# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""The splitters module contains the strategies to split ratings into train and test folds.

Each splitter takes a :class:`recsplit.matrix.RatingStore` and a seed,
and returns a list of :class:`recsplit.matrix.TrainSet` objects
and a list of held out :class:`recsplit.matrix.RatingStore` objects,
one pair per fold.

.. currentmodule:: recsplit.splitters

.. autosummary::
    :toctree: generated/

    splitter_base.Splitter
    splitter_base.KFoldSplitter
    splitter_base.UserLOOSplitter
    splitter_base.UserKeepNSplitter

Example
~~~~~~~~~

::

    from recsplit.splitters import KFoldSplitter

    train_sets, test_sets = KFoldSplitter(5).split(store, seed=42)
    for train_set, test_set in zip(train_sets, test_sets):
        ...

"""

from recsplit.exceptions import InvalidArgumentError
from recsplit.splitters.splitter_base import (
    Splitter,
    KFoldSplitter,
    UserLOOSplitter,
    UserKeepNSplitter,
)

SPLITTERS = {
    "KFoldSplitter": KFoldSplitter,
    "UserLOOSplitter": UserLOOSplitter,
    "UserKeepNSplitter": UserKeepNSplitter,
}


def get_splitter(splitter_name):
    if splitter_name not in SPLITTERS:
        raise InvalidArgumentError(
            f"Unknown splitter {splitter_name!r}, should be one of {', '.join(SPLITTERS)}."
        )
    return SPLITTERS[splitter_name]
