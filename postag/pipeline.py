"""High-level entry points tying feature extraction and training together."""
from __future__ import annotations
import random
from typing import List, Optional

from .config import Config
from .features import extract_all_features
from .perceptron import Perceptron
from .state import TaggerState
from .types import Sentence

__all__ = ["extract_all_features", "build_perceptron", "train"]


def _observe_labels(sentences: List[Sentence], state: TaggerState) -> None:
    # Class counting normally happens in the corpus reader.
    for sentence in sentences:
        for token in sentence.chain():
            for label in (token.gold_label, token.prediction):
                if label is not None:
                    state.labels.observe(label)


def build_perceptron(state: TaggerState, cfg: Config) -> Perceptron:
    """Allocates a perceptron sized from the classes and features known to `state`."""
    return Perceptron(
        num_classes=state.num_classes(),
        num_features=state.num_features(),
        state=state,
        learning_rate=cfg.learning_rate,
        decay_every=cfg.decay_every,
        decay_factor=cfg.decay_factor,
        shuffle_tokens=cfg.shuffle_tokens,
        rng=random.Random(cfg.seed),
    )


def train(
    training_data: Optional[List[Sentence]],
    development_data: Optional[List[Sentence]] = None,
    epochs: Optional[int] = None,
    state: Optional[TaggerState] = None,
    cfg: Optional[Config] = None,
    extract: bool = True,
    progress: bool = True,
) -> Perceptron:
    """
    Extracts features, then constructs and trains a perceptron.

    The weight matrix is sized after the features of both the training and the
    development data have been extracted, so development features are scored
    like any other. If development data is given it is labelled with the
    averaged weights at the end of training.

    Args:
        training_data: The training sentences, as returned by the corpus reader.
        development_data: Optional held-out sentences to label.
        epochs: Number of training epochs. Defaults to `cfg.epochs`.
        state: The tagger state the sentences were read with. If omitted, a
               fresh state is created and the gold and predicted labels of
               both datasets are counted into it.
        cfg: Training configuration. Defaults to `Config()`.
        extract: Set to False when the sentences already carry features, e.g.
                 when they were loaded from a feature file.
        progress: Show a progress bar during training.

    Returns:
        The trained perceptron.

    Raises:
        ValueError: If `training_data` is None.
    """
    if training_data is None:
        raise ValueError("The training data can't be None.")
    cfg = cfg or Config()
    if state is None:
        state = TaggerState()
        _observe_labels(training_data, state)
        if development_data is not None:
            _observe_labels(development_data, state)

    if extract:
        extract_all_features(training_data, state)
        if development_data is not None:
            extract_all_features(development_data, state)

    perceptron = build_perceptron(state, cfg)
    print(f"Training on {sum(len(s) for s in training_data)} tokens "
          f"({perceptron.num_classes} classes, {perceptron.num_features} features)...")
    return perceptron.train(
        training_data,
        development_data,
        epochs=cfg.epochs if epochs is None else epochs,
        progress=progress,
    )
