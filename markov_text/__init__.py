"""
Markov chain sentence generator with corpus-overlap rejection.
"""

from markov_text.services import (
    Chain,
    EmptyCorpusError,
    StateNotFoundError,
    Text,
    TextOptions,
    TextStats,
    Vocab,
)

__version__ = "1.0.0"

__all__ = [
    "Chain",
    "EmptyCorpusError",
    "StateNotFoundError",
    "Text",
    "TextOptions",
    "TextStats",
    "Vocab",
]
