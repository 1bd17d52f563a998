from __future__ import annotations
from dataclasses import dataclass, field
import random
from typing import Iterator, List, Optional

__all__ = ["UNSET", "Token", "Sentence"]

# Marker for a feature slot that has been reserved but not written yet.
UNSET = -1


@dataclass
class Token:
    """
    Represents one word position in a sentence with its annotations.

    Tokens are mutable: training and inference overwrite `prediction` and
    `predicted_label_index`, and the last slot of `features` is rewritten every
    time the previous token receives a prediction.

    Attributes:
        word: The word text itself.
        gold_label: The reference part-of-speech tag.
        prediction: The current predicted tag. Initialised from the predicted
            column of the input and replaced by the tagger.
        correct_label_index: Class id of `gold_label`, set by feature extraction.
        predicted_label_index: Class id of the latest prediction.
        features: Interned feature ids in the fixed slot layout of
            `postag.features.extract_features`. Empty until extracted.
        idx: Position of the token in its sentence's link chain.
        prev_idx: Chain position of the preceding token, None at sentence start.
        next_idx: Chain position of the following token, None at sentence end.
    """
    word: str
    gold_label: Optional[str] = None
    prediction: Optional[str] = None
    correct_label_index: int = -1
    predicted_label_index: int = -1
    features: List[int] = field(default_factory=list)
    idx: int = 0
    prev_idx: Optional[int] = None
    next_idx: Optional[int] = None

    @property
    def is_correct(self) -> bool:
        return self.gold_label == self.prediction


class Sentence:
    """
    An ordered sequence of tokens forming one tagging unit.

    The sentence owns its tokens in chain order; neighbour links on the tokens
    are indices into that chain. Iteration follows a separate order which
    starts out equal to the chain order and may be shuffled in place by
    training without touching the links.
    """

    def __init__(self, tokens: Optional[List[Token]] = None):
        self.tokens: List[Token] = []
        self.order: List[int] = []
        for token in tokens or []:
            self.append(token)

    def append(self, token: Token) -> Token:
        """Adds `token` at the end of the chain and links it to its predecessor."""
        token.idx = len(self.tokens)
        token.next_idx = None
        if self.tokens:
            last = self.tokens[-1]
            token.prev_idx = last.idx
            last.next_idx = token.idx
        else:
            token.prev_idx = None
        self.tokens.append(token)
        self.order.append(token.idx)
        return token

    def previous(self, token: Token) -> Optional[Token]:
        return self.tokens[token.prev_idx] if token.prev_idx is not None else None

    def next(self, token: Token) -> Optional[Token]:
        return self.tokens[token.next_idx] if token.next_idx is not None else None

    def shuffle(self, rng: random.Random) -> None:
        """Shuffles the iteration order in place. The link chain is unchanged."""
        rng.shuffle(self.order)

    def chain(self) -> List[Token]:
        """The tokens in link-chain order."""
        return list(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        for i in self.order:
            yield self.tokens[i]

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, i: int) -> Token:
        return self.tokens[i]

    def __bool__(self) -> bool:
        return bool(self.tokens)

    def __repr__(self) -> str:
        return f"Sentence({' '.join(t.word for t in self.tokens)!r})"
