# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""The matrix module contains the classes that represent rating data within recsplit.

.. currentmodule:: recsplit.matrix

.. autosummary::
    :toctree: generated/

    Rating
    RatingStore
    TrainSet

Example
~~~~~~~~~

A RatingStore object can be constructed from a pandas DataFrame
with a row for each rating,
or from three parallel sequences of users, items and ratings.
A TrainSet indexes the users and items of a RatingStore
with consecutive inner ids::

    import pandas as pd

    from recsplit.matrix import RatingStore, TrainSet
    data = {
        "user": ["u3", "u2", "u1", "u1"],
        "item": ["i1", "i1", "i2", "i3"],
        "rating": [4.0, 2.5, 5.0, 1.0],
    }
    df = pd.DataFrame.from_dict(data)
    store = RatingStore(df, "user", "item", "rating")
    train_set = TrainSet(store)

"""

from recsplit.matrix.rating_store import Rating, RatingStore
from recsplit.matrix.train_set import TrainSet
