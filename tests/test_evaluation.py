from postag.evaluation import ConfusionMatrix, accuracy, extract_instances
from postag.types import Sentence, Token


def _tagged(*triples):
    return Sentence([Token(word, gold_label=gold, prediction=pred) for word, gold, pred in triples])


def test_confusion_matrix_counts_gold_prediction_pairs() -> None:
    data = [_tagged(("w1", "A", "B"), ("w2", "A", "A"), ("w3", "B", "B"))]

    matrix = ConfusionMatrix(data)

    assert matrix.number_errors("A", "B") == 1
    assert matrix.number_errors("A", "A") == 1
    assert matrix.number_errors("B", "B") == 1
    assert matrix.number_errors("B", "A") == 0
    assert matrix.number_errors("C", "A") == 0


def test_labels_are_ordered_by_frequency_then_name() -> None:
    data = [
        _tagged(("a", "NN", "NN"), ("b", "NN", "JJ"), ("c", "VB", "VB")),
        _tagged(("d", "NN", "NN"), ("e", "DT", "DT")),
    ]

    matrix = ConfusionMatrix(data)

    assert matrix.labels == ["NN", "DT", "VB", "JJ"]
    assert list(matrix.matrix.index) == matrix.labels
    assert list(matrix.matrix.columns) == matrix.labels


def test_format_limits_the_rendered_dimension() -> None:
    data = [_tagged(("a", "NN", "NN"), ("b", "NN", "JJ"), ("c", "VB", "VB"))]

    rendered = ConfusionMatrix(data).format(2)

    # NN (3 occurrences) and VB (2) outrank JJ (1)
    assert "NN" in rendered and "VB" in rendered
    assert "JJ" not in rendered


def test_most_confused_skips_the_diagonal() -> None:
    data = [_tagged(("a", "NN", "JJ"), ("b", "NN", "JJ"), ("c", "VB", "NN"), ("d", "NN", "NN"))]

    assert ConfusionMatrix(data).most_confused(5) == [("NN", "JJ", 2), ("VB", "NN", 1)]


def test_empty_data() -> None:
    matrix = ConfusionMatrix([])

    assert matrix.labels == []
    assert matrix.number_errors("A", "A") == 0
    assert accuracy([]) == 0.0


def test_accuracy_over_all_tokens() -> None:
    data = [_tagged(("w1", "A", "B"), ("w2", "A", "A")), _tagged(("w3", "B", "B"))]

    assert accuracy(data) == 2 / 3


def test_missing_predictions_count_as_errors() -> None:
    data = [_tagged(("w1", "A", None))]

    assert accuracy(data) == 0.0
    assert ConfusionMatrix(data).number_errors("A", "<none>") == 1


def test_extract_instances_marks_the_confused_token() -> None:
    data = [_tagged(
        ("one", "CD", "CD"), ("two", "CD", "CD"), ("three", "CD", "CD"),
        ("that", "IN", "DT"), ("four", "CD", "CD"), ("five", "CD", "CD"),
        ("six", "CD", "CD"), ("seven", "CD", "CD"),
    )]

    blocks = extract_instances(data, "IN", "DT")

    assert len(blocks) == 1
    rows = blocks[0].splitlines()
    assert rows[0].startswith("one")
    assert rows[3].startswith("*that*")
    assert rows[6].startswith("six")
    assert rows[-1] == "*" * 22
    assert extract_instances(data, "DT", "IN") == []
