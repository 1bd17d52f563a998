"""Multiclass averaged perceptron with greedy left-to-right decoding.

A `Perceptron` moves through one lifecycle: it is constructed with a weight
matrix sized from the feature and class counts known at that point, trained
for a number of epochs with the current weights, averaged once, and from then
on predicts with the averaged weights only.

Decoding is greedy. Whenever a token receives a prediction, the previous-tag
feature of its successor in the sentence's link chain is rewritten, so the
order in which tokens are predicted matters.
"""
from __future__ import annotations
import random
from typing import Iterable, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from .features import extract_previous_tag
from .state import TaggerState
from .types import Sentence, Token
from .weights import WeightStore


def argmax(scores: Sequence[float]) -> int:
    """Index of the best score; ties go to the lowest index, -1 if empty."""
    if len(scores) == 0:
        return -1
    return int(np.argmax(scores))


class Perceptron:
    """
    Trains and applies the multiclass averaged perceptron.

    Attributes:
        state: The tagger state used to resolve class ids to labels and to
               intern previous-tag features.
        weights: The `WeightStore` holding current and averaged weights.
        learning_rate: The step size used for the next update.
        decay_every: The learning rate decays at the start of every epoch
                     whose index is a positive multiple of this value.
        decay_factor: Multiplier applied on decay.
        shuffle_tokens: Whether token order inside sentences is shuffled
                        every epoch.
        epoch_errors: Number of misclassified training tokens per epoch.
    """

    def __init__(
        self,
        num_classes: int,
        num_features: int,
        state: TaggerState,
        learning_rate: float = 0.1,
        decay_every: int = 8,
        decay_factor: float = 0.7,
        shuffle_tokens: bool = True,
        rng: Optional[random.Random] = None,
    ):
        self.num_classes = num_classes
        self.num_features = num_features
        self.state = state
        self.weights = WeightStore(num_classes, num_features)
        self.learning_rate = learning_rate
        self.decay_every = decay_every
        self.decay_factor = decay_factor
        self.shuffle_tokens = shuffle_tokens
        self.rng = rng if rng is not None else random.Random()
        self.epoch_errors: List[int] = []

    @property
    def is_averaged(self) -> bool:
        return self.weights.averaged is not None

    def _assign(self, token: Token, sentence: Sentence, class_id: int) -> int:
        token.predicted_label_index = class_id
        token.prediction = self.state.labels.get_label(class_id)
        nxt = sentence.next(token)
        if nxt is not None:
            extract_previous_tag(nxt, sentence, self.state)
        return class_id

    def predict(self, token: Token, sentence: Sentence) -> int:
        """Predicts a token's class with the current (training) weights."""
        class_id = argmax(self.weights.scores(token.features))
        return self._assign(token, sentence, class_id)

    def predict_average(self, token: Token, sentence: Sentence) -> int:
        """
        Predicts a token's class with the averaged weights.

        The prediction is stored on the token and propagated to the
        previous-tag feature of the next token in the chain; the weights are
        not modified.

        Raises:
            RuntimeError: If the weights have not been averaged yet.
        """
        class_id = argmax(self.weights.scores_average(token.features))
        return self._assign(token, sentence, class_id)

    def predict_sentence_average(self, sentence: Sentence) -> None:
        for token in sentence:
            self.predict_average(token, sentence)

    def tag(self, sentences: Iterable[Sentence]) -> None:
        """Labels every token of the given sentences with the averaged weights."""
        for sentence in sentences:
            self.predict_sentence_average(sentence)

    def train(
        self,
        training_data: Sequence[Sentence],
        development_data: Optional[Sequence[Sentence]] = None,
        epochs: int = 45,
        progress: bool = True,
    ) -> "Perceptron":
        """
        Adjusts the weights on the training data, then averages them.

        Each epoch shuffles the sentence order and, if `shuffle_tokens` is
        set, the token order within each sentence. Every token is predicted
        with the current weights, the weights are updated if the prediction
        is wrong, and the running average is accumulated for every token
        whether or not it was updated.

        Args:
            training_data: Sentences whose tokens already carry features.
            development_data: Optional sentences to label with the averaged
                              weights once training is done.
            epochs: Number of passes over the training data.
            progress: Show a progress bar over the epochs.

        Returns:
            The trained perceptron itself.

        Raises:
            RuntimeError: If the perceptron has already been trained.
        """
        if self.is_averaged:
            raise RuntimeError("This perceptron has already been trained and averaged.")

        train_data = list(training_data)
        for epoch in tqdm(range(epochs), desc="Training", disable=not progress):
            self.rng.shuffle(train_data)
            if epoch % self.decay_every == 0 and epoch != 0:
                self.learning_rate *= self.decay_factor

            errors = 0
            for sentence in train_data:
                if self.shuffle_tokens:
                    sentence.shuffle(self.rng)
                for token in sentence:
                    predicted = self.predict(token, sentence)
                    if predicted != token.correct_label_index:
                        errors += 1
                        if predicted >= 0:
                            self.weights.update(predicted, token.correct_label_index,
                                                token.features, self.learning_rate)
                    self.weights.accumulate()
            self.epoch_errors.append(errors)

        self.weights.finalize_average()

        if development_data is not None:
            self.tag(development_data)
        return self
