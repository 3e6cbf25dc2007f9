"""
Vocabulary: bidirectional word <-> token id mapping.

Ids are dense integers assigned in first-seen order starting at 0.
The mapping only grows; nothing is ever removed or renumbered.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional


class Vocab:
    """Append-only word/token table."""

    def __init__(self, words: Optional[Iterable[str]] = None):
        self.word_to_id: Dict[str, int] = {}
        self.id_to_word: List[str] = []

        for word in words or ():
            self.to_token(word)

    def to_token(self, word: str) -> int:
        """Return the token for word, registering it on first sight."""
        token = self.word_to_id.get(word)
        if token is None:
            token = len(self.id_to_word)
            self.word_to_id[word] = token
            self.id_to_word.append(word)
        return token

    def to_token_lookup(self, word: str) -> Optional[int]:
        return self.word_to_id.get(word)

    def to_word(self, token: int) -> str:
        """Return the word for token, or "" when the id was never assigned."""
        if 0 <= token < len(self.id_to_word):
            return self.id_to_word[token]
        return ""

    def __len__(self) -> int:
        return len(self.id_to_word)

    def __contains__(self, word: object) -> bool:
        return word in self.word_to_id
