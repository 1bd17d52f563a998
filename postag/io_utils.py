"""Saving and loading predictions, weights, extracted features and tagger state.

Writers report I/O failures as warnings instead of raising, so a failed
export never discards a finished training run. Feature files use the
svm-multiclass layout, one token per line:

    <class id + 1> <feature id + 1>:1 ... # <word> <gold label>[ EOS]

``EOS`` marks the last token of a sentence. The previous-tag slot is not
written since it only exists during decoding. Feature ids are only
meaningful together with the interner that produced them, which is stored
next to the features with `save_state`.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Iterable, List

from .evaluation import MISSING_LABEL
from .interner import LabelExtractor, SymbolInterner
from .perceptron import Perceptron
from .state import LexicalSets, TaggerState
from .types import UNSET, Sentence, Token

EOS_MARKER = "EOS"


def save_predictions(path: str, sentences: Iterable[Sentence]) -> None:
    """
    Writes ``word gold prediction`` per token, with a trailing ``*`` on errors.

    Args:
        path: The output file.
        sentences: Tagged sentences.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            for sentence in sentences:
                for token in sentence.chain():
                    marker = "" if token.is_correct else "*"
                    f.write(f"{token.word} {token.gold_label} {token.prediction} {marker}\n")
    except OSError as e:
        print(f"Warning: Could not write predictions to {path}: {e}")


def save_weights(path: str, perceptron: Perceptron, averaged: bool = False) -> None:
    """
    Writes one line per class: the label, then the bias and every feature weight.

    Args:
        path: The output file.
        perceptron: A perceptron, trained or not.
        averaged: Write the averaged weights instead of the current ones.
    """
    weights = perceptron.weights
    matrix = weights.averaged if averaged else weights.current
    if matrix is None:
        print("Warning: Averaged weights are not available; writing current weights instead.")
        matrix = weights.current
    try:
        with open(path, "w", encoding="utf-8") as f:
            for class_id, row in enumerate(matrix):
                label = perceptron.state.labels.get_label(class_id) or MISSING_LABEL
                f.write(label + "".join(f" {w:f}" for w in row) + "\n")
    except OSError as e:
        print(f"Warning: Could not write weights to {path}: {e}")


def _static_features(token: Token) -> List[int]:
    # The final slot is the previous tag, which is recomputed during decoding.
    return [fid for fid in token.features[:-1] if fid != UNSET]


def write_features(path: str, sentences: List[Sentence]) -> None:
    """Stores the extracted features of every token in svm-multiclass layout."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            for sentence in sentences:
                chain = sentence.chain()
                for i, token in enumerate(chain):
                    feats = " ".join(f"{fid + 1}:1" for fid in _static_features(token))
                    line = f"{token.correct_label_index + 1} {feats}".rstrip()
                    line += f" # {token.word} {token.gold_label}"
                    if i == len(chain) - 1:
                        line += f" {EOS_MARKER}"
                    f.write(line + "\n")
    except OSError as e:
        print(f"Warning: Could not write features to {path}: {e}")


def read_features(path: str, state: TaggerState) -> List[Sentence]:
    """
    Reconstructs sentences from a file written by `write_features`.

    The tokens get their words, gold labels and feature vectors back, with
    the previous-tag slot reserved again. Gold labels are interned into
    `state`, which should be the state saved alongside the features.

    Args:
        path: The feature file.
        state: The tagger state the features were extracted with.

    Returns:
        The reconstructed sentences, or an empty list if the file could not
        be read or parsed.
    """
    sentences: List[Sentence] = []
    sentence = Sentence()
    try:
        with open(path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                head, _, comment = line.partition(" # ")
                parts = head.split()
                meta = comment.split()
                eos = bool(meta) and meta[-1] == EOS_MARKER
                if eos:
                    meta = meta[:-1]

                token = Token(word=" ".join(meta[:-1]) if len(meta) > 1 else " ".join(meta))
                token.features = [int(p.split(":")[0]) - 1 for p in parts[1:]] + [UNSET]
                if len(meta) > 1:
                    # Words may contain spaces; the gold label is always the last field.
                    token.gold_label = meta[-1]
                    state.labels.observe(token.gold_label)
                    token.correct_label_index = state.labels.extract_label(token)
                else:
                    token.correct_label_index = int(parts[0]) - 1
                    token.gold_label = state.labels.get_label(token.correct_label_index)
                sentence.append(token)

                if eos:
                    sentences.append(sentence)
                    sentence = Sentence()
    except OSError as e:
        print(f"Warning: Could not read features from {path}: {e}")
        return []
    except (ValueError, IndexError) as e:
        print(f"Warning: Malformed feature file {path} at line {lineno}: {e}")
        return []

    if sentence:
        sentences.append(sentence)
    return sentences


def save_state(path: str, state: TaggerState) -> None:
    """Serializes the interner, labels and lexical sets to JSON."""
    lex = state.lexicon
    data = {
        "features": state.features.symbols(),
        "labels": state.labels.symbols(),
        "observed_labels": state.labels.observed(),
        "lexicon": {
            "determiner_tags": list(lex.determiner_tags),
            "adjective_tags": list(lex.adjective_tags),
            "proper_noun_tags": list(lex.proper_noun_tags),
            "determiners": sorted(lex.determiners),
            "adjectives": sorted(lex.adjectives),
            "proper_nouns": sorted(lex.proper_nouns),
        },
    }
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
    except OSError as e:
        print(f"Warning: Could not write tagger state to {path}: {e}")


def load_state(path: str) -> TaggerState:
    """
    Restores a `TaggerState` written by `save_state`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON.
        TypeError: If the JSON is not a state object.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise FileNotFoundError(f"Tagger state file not found at: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from {path}: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise TypeError(f"Expected a tagger state object with a 'features' list in {path}")

    lex = data.get("lexicon", {})
    return TaggerState(
        features=SymbolInterner(data["features"]),
        labels=LabelExtractor(data.get("labels", []), data.get("observed_labels", [])),
        lexicon=LexicalSets(
            determiner_tags=tuple(lex.get("determiner_tags", ("DT",))),
            adjective_tags=tuple(lex.get("adjective_tags", ("JJ",))),
            proper_noun_tags=tuple(lex.get("proper_noun_tags", ("NNP",))),
            determiners=set(lex.get("determiners", [])),
            adjectives=set(lex.get("adjectives", [])),
            proper_nouns=set(lex.get("proper_nouns", [])),
        ),
    )
