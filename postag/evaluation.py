"""Accuracy, confusion matrices and error inspection for tagged sentences.

All functions here read the `gold_label` and `prediction` of tokens that have
already been tagged; none of them touch the model.
"""
from __future__ import annotations
from collections import Counter
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .types import Sentence

# Stand-in label for tokens that never received a prediction.
MISSING_LABEL = "<none>"


def _label(value: Optional[str]) -> str:
    return MISSING_LABEL if value is None else value


def accuracy(sentences: Iterable[Sentence]) -> float:
    """Fraction of tokens whose prediction equals the gold label, 0.0 if there are none."""
    correct = 0
    total = 0
    for sentence in sentences:
        for token in sentence:
            correct += token.is_correct
            total += 1
    return correct / total if total else 0.0


class ConfusionMatrix:
    """
    Counts of (gold label, predicted label) pairs over a set of sentences.

    Rows are gold labels and columns predicted labels. Labels are ordered by
    how often they occur as either gold or predicted label, most frequent
    first, with ties broken alphabetically, so the busiest labels end up in
    the upper left corner.

    Attributes:
        labels: The label order used for both axes.
        matrix: A square `pandas.DataFrame` of counts indexed by `labels`.
    """

    def __init__(self, sentences: Iterable[Sentence]):
        golds: List[str] = []
        preds: List[str] = []
        for sentence in sentences:
            for token in sentence:
                golds.append(_label(token.gold_label))
                preds.append(_label(token.prediction))

        freq = Counter(golds) + Counter(preds)
        self.labels: List[str] = sorted(freq, key=lambda label: (-freq[label], label))

        if golds:
            counts = pd.crosstab(pd.Series(golds, name="gold"), pd.Series(preds, name="predicted"))
            self.matrix = counts.reindex(index=self.labels, columns=self.labels, fill_value=0)
        else:
            self.matrix = pd.DataFrame(0, index=self.labels, columns=self.labels, dtype=int)
        self.matrix.index.name = "gold"
        self.matrix.columns.name = "predicted"

    def number_errors(self, gold_label: str, pred_label: str) -> int:
        """How many tokens with `gold_label` were predicted as `pred_label`."""
        if gold_label not in self.matrix.index or pred_label not in self.matrix.columns:
            return 0
        return int(self.matrix.at[gold_label, pred_label])

    def most_confused(self, n: int = 10) -> List[tuple[str, str, int]]:
        """The `n` most frequent (gold, predicted, count) errors, off-diagonal only."""
        errors = [
            (gold, pred, int(self.matrix.at[gold, pred]))
            for gold in self.labels
            for pred in self.labels
            if gold != pred and self.matrix.at[gold, pred] > 0
        ]
        errors.sort(key=lambda e: (-e[2], e[0], e[1]))
        return errors[:n]

    def format(self, max_dim: int) -> str:
        """Renders the top-left `max_dim` x `max_dim` corner of the matrix."""
        k = max(0, min(max_dim, len(self.labels)))
        return self.matrix.iloc[:k, :k].to_string()

    def print(self, max_dim: int) -> None:
        print(self.format(max_dim))


def extract_instances(
    sentences: Sequence[Sentence], gold_label: str, pred_label: str, window: int = 3
) -> List[str]:
    """
    Collects the context of every token tagged `pred_label` whose gold label is `gold_label`.

    Args:
        sentences: Tagged sentences.
        gold_label: The gold label of the confusion to look for.
        pred_label: The predicted label of the confusion to look for.
        window: Number of tokens shown on each side of the confused token.

    Returns:
        One formatted block per instance: a ``word gold prediction`` row per
        context token, the confused token wrapped in asterisks.
    """
    blocks = []
    for sentence in sentences:
        chain = sentence.chain()
        for i, token in enumerate(chain):
            if token.gold_label != gold_label or token.prediction != pred_label:
                continue
            rows = []
            for other in chain[max(0, i - window):i + window + 1]:
                word = f"*{other.word}*" if other is token else other.word
                rows.append(f"{word:<15}\t{_label(other.gold_label):<10}\t{_label(other.prediction):<10}")
            rows.append("*" * 22)
            blocks.append("\n".join(rows))
    return blocks
