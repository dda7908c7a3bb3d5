"""Solver settings and logging setup."""

import logging

import yaml
from rich.logging import RichHandler

from .errors import MalformedInput
from .ranker import GuessRanker

DEFAULTS = {
    # first guess of a game; None ranks the full corpus instead
    "opener": None,
    "top_n": 5,

    # ranking
    "workers": 1,
    "max_guesses": None,
    "tolerance": 1e-9,
    "solution_weight": 1.0,
    "prefer_solutions": False,
    "candidate_threshold": 0,

    # dictionary
    "solutions_only": False,

    "log_level": "WARNING",
}


def load_config(path=None, **overrides):
    """Defaults, updated by the YAML mapping at ``path`` and then by ``overrides``."""
    config = dict(DEFAULTS)
    if path is not None:
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.load(f, Loader=yaml.FullLoader) or {}
            except yaml.YAMLError as e:
                raise MalformedInput(f"{path}: {e}") from e
        if not isinstance(data, dict):
            raise MalformedInput(f"{path}: expected a mapping of settings")
        config.update(data)
    config.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(config) - set(DEFAULTS))
    if unknown:
        raise MalformedInput(f"unknown settings: {', '.join(unknown)}")
    return config


def ranker_from_config(config):
    return GuessRanker(
        workers=config["workers"],
        max_guesses=config["max_guesses"],
        tolerance=config["tolerance"],
        solution_weight=config["solution_weight"],
        prefer_solutions=config["prefer_solutions"],
        candidate_threshold=config["candidate_threshold"],
    )


def setup_logging(level="WARNING"):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
        force=True,
    )
