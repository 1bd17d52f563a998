from pathlib import Path

from conftest import conll_lines

from postag.corpus import parse_lines, read_data
from postag.state import TaggerState


def test_sentences_are_split_on_token_id_one(state) -> None:
    text = conll_lines([
        [("The", "DT", "DT"), ("dog", "NN", "NN"), ("runs", "VBZ", "VB")],
        [("Cats", "NNS", "NNS"), ("sleep", "VBP", "VBP")],
    ]).replace("\n\n", "\n")

    sentences = parse_lines(text.splitlines(), state)

    assert [[t.word for t in s.chain()] for s in sentences] == [["The", "dog", "runs"], ["Cats", "sleep"]]
    runs = sentences[0][2]
    assert (runs.gold_label, runs.prediction) == ("VBZ", "VB")
    assert runs.prev_idx == 1 and runs.next_idx is None
    assert sentences[1][0].prev_idx is None


def test_blank_lines_and_short_lines_are_handled(state) -> None:
    lines = [
        "# a comment line",
        "1\tHello\t_\t_\tUH\tUH",
        "",
        "",
        "1\tWorld\t_\t_\tNN\tNN",
        "2\t!\t_\t_\t.",
    ]

    sentences = parse_lines(lines, state)

    assert [len(s) for s in sentences] == [1, 1]


def test_underscore_ids_carry_the_sentence_number(state) -> None:
    lines = [
        "1_1\tA\t_\t_\tDT\tDT",
        "1_2\tdog\t_\t_\tNN\tNN",
        "2_1\tIt\t_\t_\tPRP\tPRP",
        "2_2\tbarks\t_\t_\tVBZ\tVBZ",
    ]

    sentences = parse_lines(lines, state)

    assert [[t.word for t in s.chain()] for s in sentences] == [["A", "dog"], ["It", "barks"]]


def test_labels_are_counted_from_gold_and_predicted_columns(state) -> None:
    text = conll_lines([[("runs", "VBZ", "VB"), ("fast", "RB", "RB")]])

    parse_lines(text.splitlines(), state)

    assert state.num_classes() == 3
    assert state.labels.size() == 0


def test_lexical_sets_only_grow_from_training_data() -> None:
    text = conll_lines([[("the", "DT", "DT"), ("big", "JJ", "JJ"), ("Paris", "NNP", "NNP")]])
    train_state = TaggerState()
    test_state = TaggerState()

    parse_lines(text.splitlines(), train_state, training=True)
    parse_lines(text.splitlines(), test_state, training=False)

    assert train_state.lexicon.determiners == {"the"}
    assert train_state.lexicon.adjectives == {"big"}
    assert train_state.lexicon.proper_nouns == {"Paris"}
    assert not test_state.lexicon.determiners


def test_custom_lexicon_tags() -> None:
    state = TaggerState.from_tags(determiner_tags=["ART"], adjective_tags=["ADJA"], proper_noun_tags=["NE"])
    text = conll_lines([[("die", "ART", "ART"), ("Berlin", "NE", "NE")]])

    parse_lines(text.splitlines(), state)

    assert state.lexicon.determiners == {"die"}
    assert state.lexicon.proper_nouns == {"Berlin"}


def test_malformed_token_ids_are_skipped(state, capsys) -> None:
    lines = ["x\tbad\t_\t_\tNN\tNN", "1\tgood\t_\t_\tJJ\tJJ"]

    sentences = parse_lines(lines, state)

    assert [t.word for t in sentences[0]] == ["good"]
    assert "Warning" in capsys.readouterr().out


def test_read_data_from_file(tmp_path: Path, state, toy_corpus_text) -> None:
    path = tmp_path / "train.conll"
    path.write_text(toy_corpus_text, encoding="utf-8")

    sentences = read_data(str(path), state)

    assert len(sentences) == 10
    assert state.num_classes() == 3


def test_read_data_missing_file_yields_empty_list(tmp_path: Path, state, capsys) -> None:
    assert read_data(str(tmp_path / "missing.conll"), state) == []
    assert "Warning" in capsys.readouterr().out
