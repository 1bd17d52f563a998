"""Smoke tests for the CLI entrypoint in ``main.py``."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest

from conftest import conll_lines


@pytest.fixture(autouse=True)
def restore_argv():
    original = sys.argv[:]
    try:
        yield
    finally:
        sys.argv = original


def _run(*args: str) -> None:
    sys.argv = ["main", *args]
    main_module = importlib.import_module("main")
    main_module.main()


def test_main_requires_a_training_file():
    with pytest.raises(SystemExit):
        _run()


def test_main_reports_missing_training_file(tmp_path: Path, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(str(tmp_path / "missing.conll"))

    assert exc.value.code == 1
    assert "Training file not found" in capsys.readouterr().err


def test_main_rejects_empty_training_data(tmp_path: Path, capsys):
    empty = tmp_path / "empty.conll"
    empty.write_text("\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        _run(str(empty))

    assert "No sentences" in capsys.readouterr().err


def test_main_trains_and_writes_outputs(tmp_path: Path, toy_corpus_text: str, capsys):
    train_path = tmp_path / "train.conll"
    test_path = tmp_path / "test.conll"
    train_path.write_text(toy_corpus_text, encoding="utf-8")
    test_path.write_text(conll_lines([[("a", "DT", "_"), ("dog", "NN", "_"), ("sleeps", "VBZ", "_")]]),
                         encoding="utf-8")
    prefix = tmp_path / "pred"

    _run(str(train_path), "--test", str(test_path), "--epochs", "5", "--seed", "3", "--no-progress",
         "--weights", str(tmp_path / "weights.txt"), "--predictions", str(prefix),
         "--save-features", str(tmp_path / "train.svm"))

    out = capsys.readouterr().out
    assert "Accuracy on training data" in out
    assert "Accuracy on test data" in out
    assert (tmp_path / "weights.txt").exists()
    assert len((tmp_path / "pred-train").read_text(encoding="utf-8").splitlines()) == 30
    assert len((tmp_path / "pred-test").read_text(encoding="utf-8").splitlines()) == 3
    assert (tmp_path / "train.svm").exists()
    assert (tmp_path / "train.svm.state.json").exists()


def test_main_trains_from_saved_features(tmp_path: Path, toy_corpus_text: str, capsys):
    train_path = tmp_path / "train.conll"
    train_path.write_text(toy_corpus_text, encoding="utf-8")
    features = tmp_path / "train.svm"
    _run(str(train_path), "--epochs", "2", "--no-progress", "--save-features", str(features))
    capsys.readouterr()

    _run(str(features), "--read-features", "--epochs", "2", "--no-progress",
         "--predictions", str(tmp_path / "again"))

    assert "Accuracy on training data" in capsys.readouterr().out
    assert len((tmp_path / "again-train").read_text(encoding="utf-8").splitlines()) == 30
