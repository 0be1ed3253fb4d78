"""Language classification and aggregation."""

from langbox.analysis.aggregator import aggregate, rank, render
from langbox.analysis.classifier import LanguageClassifier

__all__ = [
    "LanguageClassifier",
    "aggregate",
    "rank",
    "render",
]
