from postag.interner import LabelExtractor, SymbolInterner
from postag.types import Token


def test_lookup_is_idempotent_and_invertible() -> None:
    interner = SymbolInterner()
    words = ["suf=s", "prev:BOS", "dog", "suf=s", "dog", "cap=true"]

    ids = [interner.lookup(w) for w in words]

    assert ids == [0, 1, 2, 0, 2, 3]
    for w in words:
        assert interner.inverse_lookup(interner.lookup(w)) == w
    assert interner.size() == 4
    assert len(interner) == 4


def test_ids_are_dense_in_first_seen_order() -> None:
    interner = SymbolInterner(["b", "a", "c"])

    assert interner.symbols() == ["b", "a", "c"]
    assert sorted(interner.lookup(s) for s in interner.symbols()) == list(range(interner.size()))
    assert "a" in interner
    assert "z" not in interner


def test_inverse_lookup_unknown_id_is_none() -> None:
    interner = SymbolInterner(["x"])

    assert interner.inverse_lookup(1) is None
    assert interner.inverse_lookup(-1) is None


def test_clear_restarts_id_space() -> None:
    interner = SymbolInterner(["x", "y"])
    interner.clear()

    assert interner.size() == 0
    assert interner.inverse_lookup(0) is None
    assert interner.lookup("y") == 0


def test_label_extractor_counts_gold_and_predicted_labels() -> None:
    labels = LabelExtractor()
    for gold, pred in [("NN", "NN"), ("VBZ", "VB"), ("DT", "DT")]:
        labels.observe(gold)
        labels.observe(pred)

    # Only gold labels get class ids, but every observed label is a class.
    assert labels.extract_label(Token("dog", gold_label="NN")) == 0
    assert labels.extract_label(Token("runs", gold_label="VBZ")) == 1
    assert labels.num_classes() == 4
    assert labels.get_label(1) == "VBZ"
    assert labels.get_label(3) is None


def test_label_extractor_clear_resets_observed_labels() -> None:
    labels = LabelExtractor(["NN"], observed=["NN", "VB"])
    labels.clear()

    assert labels.num_classes() == 0
    assert labels.size() == 0
