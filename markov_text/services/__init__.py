"""
Markov text services: vocabulary, chain and sentence generator.
"""

from .vocab import Vocab
from .chain import Chain, StateNotFoundError
from .text import Text, TextOptions, TextStats, EmptyCorpusError

__all__ = [
    "Vocab",
    "Chain",
    "StateNotFoundError",
    "Text",
    "TextOptions",
    "TextStats",
    "EmptyCorpusError",
]
