"""Dense, growable mappings between strings and integer ids.

Two independent instances are used by the tagger: one for feature strings
(`SymbolInterner`) and one for part-of-speech labels (`LabelExtractor`). Ids
are handed out in first-seen order, are never reused, and always cover the
range ``[0, size)`` without gaps.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from .types import Token


class SymbolInterner:
    """
    A bijection between strings and densely assigned non-negative integers.

    Attributes:
        _ids: Forward map from string to id.
        _symbols: Reverse map, indexed by id.
    """

    def __init__(self, symbols: Iterable[str] = ()):
        self._ids: Dict[str, int] = {}
        self._symbols: List[str] = []
        for s in symbols:
            self.lookup(s)

    def lookup(self, s: str) -> int:
        """
        Returns the id of `s`, allocating the next free id on first sight.

        Args:
            s: The string to intern.

        Returns:
            The id of the string. Repeated calls return the same id.
        """
        idx = self._ids.get(s)
        if idx is None:
            idx = len(self._symbols)
            self._ids[s] = idx
            self._symbols.append(s)
        return idx

    def inverse_lookup(self, idx: int) -> Optional[str]:
        """Returns the string for a known id, or None."""
        if 0 <= idx < len(self._symbols):
            return self._symbols[idx]
        return None

    def size(self) -> int:
        return len(self._symbols)

    def symbols(self) -> List[str]:
        """All interned strings in id order."""
        return list(self._symbols)

    def clear(self) -> None:
        self._ids.clear()
        self._symbols.clear()

    def __contains__(self, s: object) -> bool:
        return s in self._ids

    def __len__(self) -> int:
        return len(self._symbols)


class LabelExtractor(SymbolInterner):
    """
    Interns part-of-speech labels into dense class ids.

    Besides the id mapping, the extractor remembers every label observed while
    reading input, from both the gold and the predicted column. That count
    (`num_classes`) sizes the weight matrix and may be larger than the number
    of interned gold labels.
    """

    def __init__(self, symbols: Iterable[str] = (), observed: Iterable[str] = ()):
        super().__init__(symbols)
        self._observed = set(observed)

    def observe(self, label: str) -> None:
        self._observed.add(label)

    def observed(self) -> List[str]:
        return sorted(self._observed)

    def num_classes(self) -> int:
        return len(self._observed)

    def extract_label(self, token: Token) -> int:
        """Interns the gold label of `token` and returns its class id."""
        return self.lookup(token.gold_label)

    def get_label(self, idx: int) -> Optional[str]:
        return self.inverse_lookup(idx)

    def clear(self) -> None:
        super().clear()
        self._observed.clear()
