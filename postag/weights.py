"""Dense per-class weight vectors with running-average bookkeeping.

The store holds a `[num_classes, num_features + 1]` matrix of current weights
(column 0 is the bias) and the running sum of that matrix taken once per
processed training token. Instead of adding the whole matrix on every step,
each cell remembers the step at which it last changed and its total is
brought up to date lazily, right before the cell is modified or read. The
resulting sums are the same as adding the full matrix after every token.
"""
from __future__ import annotations
from typing import Optional, Sequence

import numpy as np


class WeightStore:
    """
    Weights of a multiclass perceptron.

    Attributes:
        num_classes: Number of rows (classes).
        num_features: Number of feature columns, excluding the bias column.
        current: The weights mutated by `update`.
        steps: How many times `accumulate` has been called.
        averaged: The averaged weights, available after `finalize_average`.
    """

    def __init__(self, num_classes: int, num_features: int):
        self.num_classes = max(0, int(num_classes))
        self.num_features = max(0, int(num_features))
        shape = (self.num_classes, self.num_features + 1)
        self.current = np.zeros(shape, dtype=np.float64)
        self._totals = np.zeros(shape, dtype=np.float64)
        self._tstamps = np.zeros(shape, dtype=np.int64)
        self.steps = 0
        self.averaged: Optional[np.ndarray] = None

    def _columns(self, feature_ids: Sequence[int]) -> np.ndarray:
        """Maps feature ids to weight columns, dropping ids the matrix cannot hold."""
        ids = np.asarray(feature_ids, dtype=np.int64).reshape(-1)
        ids = ids[(ids >= 0) & (ids < self.num_features)]
        return ids + 1

    def bias(self, class_id: int) -> float:
        return float(self.current[class_id, 0])

    def score(self, class_id: int, feature_ids: Sequence[int]) -> float:
        """
        Scores a feature vector against one class with the current weights.

        Ids outside the fitted width (features interned after the store was
        allocated) contribute nothing.
        """
        cols = self._columns(feature_ids)
        row = self.current[class_id]
        return float(row[0] + row[cols].sum())

    def scores(self, feature_ids: Sequence[int]) -> np.ndarray:
        """Current-weight scores of a feature vector for every class."""
        cols = self._columns(feature_ids)
        return self.current[:, 0] + self.current[:, cols].sum(axis=1)

    def _touch(self, class_id: int, cols: np.ndarray) -> None:
        # Fold the value held since the last change into the running totals.
        cells = np.unique(cols)
        held = self.steps - self._tstamps[class_id, cells]
        self._totals[class_id, cells] += held * self.current[class_id, cells]
        self._tstamps[class_id, cells] = self.steps

    def update(self, predicted: int, correct: int, feature_ids: Sequence[int], rate: float) -> None:
        """
        Applies the multiclass perceptron update after a misclassification.

        The bias and every in-range feature of the correct class gain `rate`;
        those of the predicted class lose it. A feature listed twice is
        updated twice.

        Args:
            predicted: The class id the model chose.
            correct: The gold class id.
            feature_ids: The token's feature vector.
            rate: The current learning rate.
        """
        if predicted == correct:
            return
        cols = np.concatenate(([0], self._columns(feature_ids)))
        for class_id, delta in ((correct, rate), (predicted, -rate)):
            self._touch(class_id, cols)
            np.add.at(self.current[class_id], cols, delta)

    def accumulate(self) -> None:
        """Adds the current weights to the running sum. Call once per token."""
        self.steps += 1

    @property
    def accumulated(self) -> np.ndarray:
        """The running sum of the current weights over all accumulation steps."""
        return self._totals + (self.steps - self._tstamps) * self.current

    def finalize_average(self) -> np.ndarray:
        """
        Divides the running sum by the number of accumulation steps.

        Returns:
            The averaged weight matrix. All zeros if nothing was accumulated.

        Raises:
            RuntimeError: If the average has already been finalized.
        """
        if self.averaged is not None:
            raise RuntimeError("Averaged weights have already been finalized.")
        if self.steps == 0:
            self.averaged = np.zeros_like(self.current)
        else:
            self.averaged = self.accumulated / self.steps
        return self.averaged

    def _require_average(self) -> np.ndarray:
        if self.averaged is None:
            raise RuntimeError("Averaged weights are not available before finalize_average().")
        return self.averaged

    def score_average(self, class_id: int, feature_ids: Sequence[int]) -> float:
        avg = self._require_average()
        cols = self._columns(feature_ids)
        return float(avg[class_id, 0] + avg[class_id, cols].sum())

    def scores_average(self, feature_ids: Sequence[int]) -> np.ndarray:
        avg = self._require_average()
        cols = self._columns(feature_ids)
        return avg[:, 0] + avg[:, cols].sum(axis=1)
