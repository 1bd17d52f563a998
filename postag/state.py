"""Explicit, resettable state shared by the reader, extractor and perceptron.

`TaggerState` bundles the feature interner, the label extractor and the
lexical sets. A single instance is created per run and passed to every
stage; `reset` returns it to an empty state before working on a new dataset
so feature ids stay dense for the new feature universe.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Set, Tuple

from .interner import LabelExtractor, SymbolInterner
from .types import Token


@dataclass
class LexicalSets:
    """
    Word lists built from the gold labels of the training data.

    Attributes:
        determiner_tags: Gold labels that add a word to `determiners`.
        adjective_tags: Gold labels that add a word to `adjectives`.
        proper_noun_tags: Gold labels that add a word to `proper_nouns`.
    """
    determiner_tags: Tuple[str, ...] = ("DT",)
    adjective_tags: Tuple[str, ...] = ("JJ",)
    proper_noun_tags: Tuple[str, ...] = ("NNP",)
    determiners: Set[str] = field(default_factory=set)
    adjectives: Set[str] = field(default_factory=set)
    proper_nouns: Set[str] = field(default_factory=set)

    def add(self, token: Token) -> None:
        """Files the token's word under the set its gold label belongs to."""
        if token.gold_label in self.determiner_tags:
            self.determiners.add(token.word)
        elif token.gold_label in self.adjective_tags:
            self.adjectives.add(token.word)
        elif token.gold_label in self.proper_noun_tags:
            self.proper_nouns.add(token.word)

    def clear(self) -> None:
        self.determiners.clear()
        self.adjectives.clear()
        self.proper_nouns.clear()


@dataclass
class TaggerState:
    features: SymbolInterner = field(default_factory=SymbolInterner)
    labels: LabelExtractor = field(default_factory=LabelExtractor)
    lexicon: LexicalSets = field(default_factory=LexicalSets)

    @classmethod
    def from_tags(
        cls,
        determiner_tags: Iterable[str] = ("DT",),
        adjective_tags: Iterable[str] = ("JJ",),
        proper_noun_tags: Iterable[str] = ("NNP",),
    ) -> "TaggerState":
        return cls(lexicon=LexicalSets(
            determiner_tags=tuple(determiner_tags),
            adjective_tags=tuple(adjective_tags),
            proper_noun_tags=tuple(proper_noun_tags),
        ))

    def num_classes(self) -> int:
        return self.labels.num_classes()

    def num_features(self) -> int:
        """
        Returns the width to allocate for the weight matrix.

        Every token carries one previous-tag feature that is only interned
        during training, so one extra id per observed class is reserved on top
        of the strings interned so far.
        """
        return self.features.size() + self.num_classes()

    def reset(self) -> None:
        """Clears the interner, the label extractor and the lexical sets."""
        self.features.clear()
        self.labels.clear()
        self.lexicon.clear()
