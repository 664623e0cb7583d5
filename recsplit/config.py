# RecPack, An Experimentation Toolkit for Top-N Recommendation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert

"""Build splitters from YAML configuration.

A configuration names the splitter type, its parameters and the seed::

    splitter:
      type: UserKeepNSplitter
      params:
        repeat: 3
        n: 5
        test_ratio: 0.2
    seed: 42

"""
import logging

import yaml

import recsplit.splitters
from recsplit.exceptions import InvalidArgumentError
from recsplit.matrix import RatingStore
from recsplit.util import check_seed

logger = logging.getLogger("recsplit")


class SplitterConfig:
    """Splitter configuration loaded from YAML.

    :param config_file: YAML document as a string or an open file.
    """

    def __init__(self, config_file):
        self.config = yaml.safe_load(config_file)
        self.validate()

    @classmethod
    def load(cls, path) -> "SplitterConfig":
        """Load a configuration from the YAML file at ``path``."""
        with open(path, "r") as f:
            return cls(f)

    def validate(self):
        if not isinstance(self.config, dict):
            raise InvalidArgumentError("Splitter configuration should be a mapping.")

        if not isinstance(self.config.get("splitter"), dict) or "type" not in self.config["splitter"]:
            raise InvalidArgumentError("Splitter configuration is missing the splitter type.")
        # Raises for unknown types
        recsplit.splitters.get_splitter(self.config["splitter"]["type"])

        if not isinstance(self.config["splitter"].get("params") or {}, dict):
            raise InvalidArgumentError("Splitter params should be a mapping.")

        if "seed" not in self.config:
            raise InvalidArgumentError("Splitter configuration is missing the seed.")
        check_seed(self.config["seed"])

    def get_splitter(self) -> recsplit.splitters.Splitter:
        splitter_type = recsplit.splitters.get_splitter(self.config["splitter"]["type"])
        params = self.config["splitter"].get("params") or {}
        try:
            return splitter_type(**params)
        except TypeError as e:
            raise InvalidArgumentError(f"Invalid params for {splitter_type.__name__}: {e}") from e

    def get_seed(self) -> int:
        return check_seed(self.config["seed"])

    def split(self, data: RatingStore) -> recsplit.splitters.splitter_base.Folds:
        """Split ``data`` with the configured splitter and seed."""
        splitter = self.get_splitter()
        logger.info(f"Splitting {data.num_ratings} ratings with {splitter.identifier}")
        return splitter.split(data, self.get_seed())
