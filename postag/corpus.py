"""Reads tagged sentences from CoNLL-style, tab-separated files.

Each token line has at least six tab-separated columns: the token id, the
word form (column 1), the gold part-of-speech tag (column 4) and a predicted
tag (column 5). Other columns are ignored, as are lines with fewer columns.

A new sentence begins when a token id is ``1``, when an id of the form
``<sentence>_<token>`` changes its sentence number, or after a blank line.
"""
from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Optional

from .state import TaggerState
from .types import Sentence, Token

ID_COL = 0
WORD_COL = 1
GOLD_COL = 4
PRED_COL = 5


def _starts_sentence(token_id: str, current_sent_no: Optional[int]) -> tuple[bool, Optional[int]]:
    """Decides whether a token id opens a new sentence."""
    if "_" in token_id:
        sent_no = int(token_id.split("_")[0])
        return sent_no != current_sent_no, sent_no
    return int(token_id) == 1, current_sent_no


def parse_lines(lines: Iterable[str], state: TaggerState, training: bool = True) -> List[Sentence]:
    """
    Builds sentences from CoNLL lines.

    Every gold and predicted label is recorded in the state's label extractor.
    When `training` is set, the words of tokens whose gold labels mark
    determiners, adjectives or proper nouns are also added to the lexical sets.

    Args:
        lines: The lines of a CoNLL file.
        state: The tagger state to record labels and lexical sets in.
        training: Whether the lines are training data.

    Returns:
        The sentences in input order, each with its link chain established.
    """
    sentences: List[Sentence] = []
    sentence = Sentence()
    sent_no: Optional[int] = None

    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            if sentence:
                sentences.append(sentence)
                sentence = Sentence()
            continue

        contents = line.split("\t")
        if len(contents) <= PRED_COL or not contents[ID_COL]:
            continue

        try:
            is_new, sent_no = _starts_sentence(contents[ID_COL], sent_no)
        except ValueError:
            print(f"Warning: Skipping line {lineno} with malformed token id {contents[ID_COL]!r}")
            continue
        if is_new and sentence:
            sentences.append(sentence)
            sentence = Sentence()

        token = Token(word=contents[WORD_COL], gold_label=contents[GOLD_COL], prediction=contents[PRED_COL])
        state.labels.observe(token.gold_label)
        state.labels.observe(token.prediction)
        if training:
            state.lexicon.add(token)
        sentence.append(token)

    if sentence:
        sentences.append(sentence)
    return sentences


def read_data(path: str, state: TaggerState, training: bool = True) -> List[Sentence]:
    """
    Reads a CoNLL file into a list of sentences.

    Unreadable files are reported as a warning and produce an empty list.

    Args:
        path: The path to the CoNLL file.
        state: The tagger state to record labels and lexical sets in.
        training: Whether the file holds training data.

    Returns:
        The sentences of the file, or an empty list if it could not be read.
    """
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            return parse_lines(f, state, training=training)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Warning: Could not read {path}: {e}")
        return []
