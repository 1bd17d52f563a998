"""Averaged-perceptron part-of-speech tagger."""

from .perceptron import Perceptron
from .pipeline import extract_all_features, train
from .state import TaggerState

__all__ = ["Perceptron", "TaggerState", "extract_all_features", "train"]
