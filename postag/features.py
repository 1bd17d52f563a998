"""Sequential feature extraction for the perceptron tagger.

Every token is turned into a list of interned feature ids with a fixed slot
layout:

    [suffixes (<=5) | prefixes (<=3) | word | prev word | next word | cap |
     digit | determiner | adjective | proper noun | colon | period | prev tag]

The number of suffix and prefix slots depends on the word length, so vectors
differ in length between tokens but never change length once extracted. The
final slot holds the tag predicted for the previous token. It cannot be known
at extraction time, so it is reserved as `UNSET` and filled in by
`extract_previous_tag` once the previous token has been predicted.
"""
from __future__ import annotations
from typing import List

from .state import TaggerState
from .types import UNSET, Sentence, Token

MAX_SUFFIX_LEN = 5
MAX_PREFIX_LEN = 3
# word, prev word, next word, 7 boolean checks, previous tag
FIXED_FEATURE_COUNT = 11

BOS = "BOS"
EOS = "EOS"


def _flag(name: str, value: bool) -> str:
    return f"{name}={'true' if value else 'false'}"


def feature_vector_size(word: str) -> int:
    return min(len(word), MAX_SUFFIX_LEN) + min(len(word), MAX_PREFIX_LEN) + FIXED_FEATURE_COUNT


def extract_suffixes(word: str, state: TaggerState) -> List[int]:
    """Ids of the word's suffixes, from the 1-character suffix upwards."""
    n = min(len(word), MAX_SUFFIX_LEN)
    return [state.features.lookup("suf=" + word[-k:]) for k in range(1, n + 1)]


def extract_prefixes(word: str, state: TaggerState) -> List[int]:
    """Ids of the word's prefixes, from the 1-character prefix upwards."""
    n = min(len(word), MAX_PREFIX_LEN)
    return [state.features.lookup("pre=" + word[:k]) for k in range(1, n + 1)]


def extract_current_word(token: Token, state: TaggerState) -> int:
    return state.features.lookup(token.word)


def extract_prev_word(token: Token, sentence: Sentence, state: TaggerState) -> int:
    prev = sentence.previous(token)
    return state.features.lookup("prev:" + (prev.word if prev is not None else BOS))


def extract_next_word(token: Token, sentence: Sentence, state: TaggerState) -> int:
    nxt = sentence.next(token)
    return state.features.lookup("next:" + (nxt.word if nxt is not None else EOS))


def extract_capitalization(word: str, state: TaggerState) -> int:
    return state.features.lookup(_flag("cap", word[:1].isupper()))


def extract_contains_digit(word: str, state: TaggerState) -> int:
    return state.features.lookup(_flag("digit", any(c.isdigit() for c in word)))


def extract_lexicon_membership(word: str, state: TaggerState) -> List[int]:
    """Determiner, adjective and proper-noun membership, in that order."""
    lex = state.lexicon
    return [
        state.features.lookup(_flag("det", word in lex.determiners)),
        state.features.lookup(_flag("adj", word in lex.adjectives)),
        state.features.lookup(_flag("nnp", word in lex.proper_nouns)),
    ]


def extract_contains_colon(word: str, state: TaggerState) -> int:
    return state.features.lookup(_flag("colon", ":" in word))


def extract_contains_period(word: str, state: TaggerState) -> int:
    return state.features.lookup(_flag("dot", "." in word))


def extract_features(token: Token, sentence: Sentence, state: TaggerState) -> List[int]:
    """
    Computes the feature vector of a token and stores it on the token.

    Besides filling `token.features`, this interns the token's gold label and
    records its class id in `token.correct_label_index`. The previous-tag slot
    is left as `UNSET`.

    Args:
        token: The token to featurize. Must belong to `sentence`.
        sentence: The sentence owning the token, used to resolve its neighbours.
        state: The tagger state holding the interner, labels and lexical sets.

    Returns:
        The freshly computed feature vector (also stored on the token).
    """
    word = token.word
    features = extract_suffixes(word, state) + extract_prefixes(word, state)
    features.append(extract_current_word(token, state))
    features.append(extract_prev_word(token, sentence, state))
    features.append(extract_next_word(token, sentence, state))
    features.append(extract_capitalization(word, state))
    features.append(extract_contains_digit(word, state))
    features.extend(extract_lexicon_membership(word, state))
    features.append(extract_contains_colon(word, state))
    features.append(extract_contains_period(word, state))
    features.append(UNSET)

    token.features = features
    token.correct_label_index = state.labels.extract_label(token)
    return features


def extract_previous_tag(token: Token, sentence: Sentence, state: TaggerState) -> None:
    """
    Writes the previous token's predicted class into the last feature slot.

    Does nothing for the first token of a sentence or for tokens whose
    features have not been extracted.
    """
    prev = sentence.previous(token)
    if prev is None or not token.features:
        return
    token.features[-1] = state.features.lookup(f"prevTag={prev.predicted_label_index}")


def extract_all_features(sentences: List[Sentence], state: TaggerState) -> None:
    """Extracts the features of every token, in chain order."""
    for sentence in sentences:
        for token in sentence.chain():
            extract_features(token, sentence, state)
