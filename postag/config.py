"""Manages the loading and validation of tagger configuration.

This module defines the `Config` dataclass, a typed container for the training
hyper-parameters and the label conventions of the corpus, and the
`load_config` function that reads it from a YAML file. Every field has a
default, so a YAML file only needs to list the values it overrides.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional
import yaml


@dataclass
class Config:
    """
    A typed configuration object that holds all settings for the tagger.

    Attributes:
        epochs: Number of passes over the training data.
        learning_rate: Initial step size of the perceptron update.
        decay_every: The learning rate decays at the start of every epoch whose
                     index is a positive multiple of this value.
        decay_factor: Multiplier applied to the learning rate on decay.
        shuffle_tokens: Shuffle the token order inside each sentence every
                        epoch, in addition to the sentence order. Predictions
                        still feed the previous-tag feature along the
                        sentence's link chain.
        seed: Seed of the random generator used for shuffling. None draws a
              fresh seed on every run.
        confusion_dim: Number of labels shown when printing a confusion matrix.
        determiner_tags: Gold labels whose words populate the determiner list.
        adjective_tags: Gold labels whose words populate the adjective list.
        proper_noun_tags: Gold labels whose words populate the proper-noun list.
    """
    epochs: int = 45
    learning_rate: float = 0.1
    decay_every: int = 8
    decay_factor: float = 0.7
    shuffle_tokens: bool = True
    seed: Optional[int] = None
    confusion_dim: int = 5
    determiner_tags: tuple[str, ...] = ("DT",)
    adjective_tags: tuple[str, ...] = ("JJ",)
    proper_noun_tags: tuple[str, ...] = ("NNP",)


def _tags(value, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def load_config(path: str = "config.yaml") -> Config:
    """
    Loads and validates a YAML configuration file into a Config object.

    Args:
        path: The path to the configuration YAML file.

    Returns:
        A fully populated `Config` object. Keys missing from the file keep
        their defaults.

    Raises:
        FileNotFoundError: If the specified file cannot be found.
        ValueError: If the YAML cannot be parsed or holds invalid values.
        TypeError: If the root of the YAML file is not a dictionary.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file at {path}: {e}")

    if y is None:
        y = {}
    if not isinstance(y, dict):
        raise TypeError(f"Configuration file {path} must be a dictionary.")

    known = {f.name for f in fields(Config)}
    unknown = sorted(set(y) - known)
    if unknown:
        print(f"[CONFIG] Ignoring unknown keys in {path}: {', '.join(unknown)}")

    defaults = Config()
    seed = y.get("seed", defaults.seed)
    cfg = Config(
        epochs=int(y.get("epochs", defaults.epochs)),
        learning_rate=float(y.get("learning_rate", defaults.learning_rate)),
        decay_every=int(y.get("decay_every", defaults.decay_every)),
        decay_factor=float(y.get("decay_factor", defaults.decay_factor)),
        shuffle_tokens=bool(y.get("shuffle_tokens", defaults.shuffle_tokens)),
        seed=None if seed is None else int(seed),
        confusion_dim=int(y.get("confusion_dim", defaults.confusion_dim)),
        determiner_tags=_tags(y.get("determiner_tags"), defaults.determiner_tags),
        adjective_tags=_tags(y.get("adjective_tags"), defaults.adjective_tags),
        proper_noun_tags=_tags(y.get("proper_noun_tags"), defaults.proper_noun_tags),
    )

    if cfg.epochs < 0:
        raise ValueError(f"epochs must be non-negative, got {cfg.epochs}")
    if cfg.decay_every < 1:
        raise ValueError(f"decay_every must be at least 1, got {cfg.decay_every}")
    return cfg
