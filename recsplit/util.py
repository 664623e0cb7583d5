# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

import logging
import numbers

import numpy as np

from recsplit.exceptions import InvalidArgumentError

logger = logging.getLogger("recsplit")

_UINT64_MODULUS = 2**64


def check_seed(seed) -> int:
    """Validate a seed and return it as a Python int.

    :param seed: Seed passed by the caller.
    :type seed: int
    :raises InvalidArgumentError: If the seed is not an integer,
        or does not fit in 64 bits (signed or unsigned).
    :return: The seed as a Python int.
    :rtype: int
    """
    if isinstance(seed, (bool, np.bool_)) or not isinstance(seed, numbers.Integral):
        raise InvalidArgumentError(f"Seed should be an integer, received {seed!r}.")

    seed = int(seed)
    if not -(2**63) <= seed < _UINT64_MODULUS:
        raise InvalidArgumentError(f"Seed {seed} does not fit in 64 bits.")

    return seed


def get_random_generator(seed) -> np.random.Generator:
    """Create a random generator owned by the caller, seeded with ``seed``.

    Negative seeds are mapped onto the unsigned 64 bit range
    (two's complement), so every distinct 64 bit seed yields a distinct stream.
    The global numpy random state is never touched.

    :param seed: Signed or unsigned 64 bit integer seed.
    :type seed: int
    :return: A new random generator.
    :rtype: np.random.Generator
    """
    seed = check_seed(seed)
    return np.random.default_rng(seed % _UINT64_MODULUS)


def to_python_scalar(value):
    """Convert numpy scalars to the equivalent Python value, leave other values unchanged."""
    if isinstance(value, np.generic):
        return value.item()
    return value
