# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import pytest

from recsplit.matrix import RatingStore


@pytest.fixture(scope="function")
def single_user_store():
    return RatingStore.from_arrays(["u"] * 3, ["a", "b", "c"], [1.0, 2.0, 3.0])
