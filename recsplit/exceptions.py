# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""Exceptions raised when splitting is configured with values it can't work with."""


class InvalidArgumentError(ValueError):
    """Raised when a splitter, a store or a configuration receives an invalid parameter value.

    Examples are a fold count that is not positive,
    or a test ratio outside of the unit interval.
    """


class EmptyDataSetError(ValueError):
    """Raised when a split requires at least one rating, but the RatingStore is empty."""
