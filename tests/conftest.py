"""
Shared pytest fixtures for Markov text tests.
"""
import random
from pathlib import Path
from typing import List

import pytest


# Two sentences sharing the "likes green" bridge; the only novel
# sentences are the two crossovers.
BRIDGE_CORPUS = "alice likes green pears\nbob likes green apples\n"

BRIDGE_CROSSOVERS = {"alice likes green apples", "bob likes green pears"}


@pytest.fixture
def bridge_corpus() -> str:
    """Corpus with exactly two acceptable generations."""
    return BRIDGE_CORPUS


@pytest.fixture
def bridge_crossovers() -> set:
    """Sentences the bridge corpus can produce without copying a line."""
    return set(BRIDGE_CROSSOVERS)


@pytest.fixture
def sample_corpus() -> str:
    """Larger corpus, including lines that the parser must reject."""
    return "\n".join(
        [
            "The universe is full of amazing things to explore.",
            "The universe is vast and the stars are bright tonight.",
            "My friend said the stars are calling us home.",
            "We explore the stars because the universe is calling.",
            "",
            "   ",
            'She said "hello" to everyone.',
            "This line (with parentheses) is skipped.",
            "Brackets [like these] are skipped too.",
            "'Leading quote lines are skipped",
            "Every friend of mine is full of hope tonight.",
        ]
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible sampling."""
    return random.Random(1234)


@pytest.fixture
def token_runs() -> List[List[str]]:
    """Small string-token training runs for Chain tests."""
    return [
        ["a", "b", "c"],
        ["a", "b", "d"],
        ["x", "b", "c"],
    ]


@pytest.fixture
def write_corpus(tmp_path: Path):
    """Factory writing a temporary corpus file."""

    def _write(text: str, filename: str = "corpus.txt") -> Path:
        file_path = tmp_path / filename
        file_path.write_text(text, encoding="utf-8")
        return file_path

    return _write
