"""Test configuration helpers for ensuring local imports resolve."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Tuple

import pytest


def _ensure_project_root_on_path() -> None:
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


_ensure_project_root_on_path()

from postag.state import TaggerState  # noqa: E402
from postag.types import Sentence, Token  # noqa: E402


def make_sentence(pairs: List[Tuple[str, str]], state: TaggerState = None) -> Sentence:
    """Builds a sentence from (word, gold) pairs, recording labels in `state` if given."""
    sentence = Sentence()
    for word, gold in pairs:
        sentence.append(Token(word=word, gold_label=gold, prediction=gold))
        if state is not None:
            state.labels.observe(gold)
    return sentence


def conll_lines(sentences: List[List[Tuple[str, str, str]]]) -> str:
    """Renders (word, gold, predicted) triples as a tab-separated CoNLL text."""
    out = []
    for sent in sentences:
        for i, (word, gold, pred) in enumerate(sent, start=1):
            out.append("\t".join([str(i), word, "_", "_", gold, pred, "_"]))
        out.append("")
    return "\n".join(out) + "\n"


@pytest.fixture
def state() -> TaggerState:
    return TaggerState()


@pytest.fixture
def toy_corpus_text() -> str:
    train = [
        [("the", "DT", "DT"), ("dog", "NN", "NN"), ("runs", "VBZ", "VBZ")],
        [("a", "DT", "DT"), ("cat", "NN", "NN"), ("sleeps", "VBZ", "VBZ")],
    ]
    return conll_lines(train * 5)
