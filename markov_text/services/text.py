"""
Sentence generator on top of the Markov chain.

Raw text is split into one sentence per line, filtered, tokenized through a
Vocab and used to train a Chain. Generation samples candidates from the
chain and keeps the first one that fits the word window and does not copy
long runs of the training text verbatim.
"""
from __future__ import annotations

import logging
import math
import random
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from unidecode import unidecode

from .chain import Chain
from .vocab import Vocab

logger = logging.getLogger(__name__)

BEGIN = "___BEGIN__"
END = "___END__"
SENTINELS = frozenset((BEGIN, END))

DEFAULT_MAX_OVERLAP_RATIO = 0.7
DEFAULT_MAX_OVERLAP_TOTAL = 15

# Lines with quotes, parentheses or brackets, or apostrophes at word edges.
REJECT_PATTERN = re.compile(r"(^')|('$)|\s'|'\s|[\"(\(\)\[\])]")


class EmptyCorpusError(ValueError):
    """Raised when no usable sentence survives parsing."""


@dataclass
class TextOptions:
    """Generation limits."""
    tries: int = 999
    min_words: int = 0
    max_words: int = 100


@dataclass
class TextStats:
    """Size summary of a trained Text."""
    sentences: int = 0
    vocab_size: int = 0
    states: int = 0


class Text:
    """
    Markov sentence generator.

    Owns the vocabulary, the parsed corpus and the chain built from it.
    """

    def __init__(
        self,
        raw_text: str,
        state_size: int = 2,
        rng: Optional[random.Random] = None,
        max_overlap_ratio: float = DEFAULT_MAX_OVERLAP_RATIO,
        max_overlap_total: int = DEFAULT_MAX_OVERLAP_TOTAL,
    ):
        """
        Parse raw_text and train the chain.

        Args:
            raw_text: Corpus, one sentence per line
            state_size: Chain order
            rng: Random source shared with the chain
            max_overlap_ratio: Default ratio for `verify`
            max_overlap_total: Default absolute cap for `verify`

        Raises:
            EmptyCorpusError: No line survived filtering
        """
        self.state_size = state_size
        self.rng = rng or random.Random()
        self.max_overlap_ratio = max_overlap_ratio
        self.max_overlap_total = max_overlap_total

        self.vocab = Vocab()
        self.parsed_sentences, self.rejoined_text = self.parse(raw_text)
        if not self.parsed_sentences:
            raise EmptyCorpusError("corpus contains no usable sentences")

        self.begin = self.vocab.to_token(BEGIN)
        self.end = self.vocab.to_token(END)
        self.chain: Chain[int] = Chain(
            self.parsed_sentences,
            self.begin,
            self.end,
            state_size=state_size,
            rng=self.rng,
        )

        logger.info(
            f"[Markov] Text ready: {len(self.parsed_sentences)} sentences, "
            f"{len(self.vocab)} words"
        )

    # --- parsing ---
    def sentence_input(self, sentence: str) -> bool:
        """Whether a raw line is usable as a training sentence."""
        if not sentence.strip():
            return False
        if REJECT_PATTERN.search(unidecode(sentence)):
            return False
        if SENTINELS.intersection(sentence.split()):
            return False
        return True

    def parse(self, raw_text: str) -> Tuple[List[List[int]], str]:
        sentences = [s for s in raw_text.split("\n") if self.sentence_input(s)]
        rejoined = " ".join(sentences)
        parsed = [[self.vocab.to_token(w) for w in s.split()] for s in sentences]
        return parsed, rejoined

    # --- filtering ---
    def verify(
        self,
        words: Sequence[str],
        max_overlap_ratio: Optional[float] = None,
        max_overlap_total: Optional[int] = None,
    ) -> bool:
        """
        Reject candidates that copy too much of the corpus.

        The longest allowed verbatim run is `max_overlap_ratio` of the
        candidate length, capped at `max_overlap_total` words. Every window
        one word longer than that is searched for in the rejoined corpus.
        """
        if max_overlap_ratio is None:
            max_overlap_ratio = self.max_overlap_ratio
        if max_overlap_total is None:
            max_overlap_total = self.max_overlap_total

        overlap_ratio = math.floor(max_overlap_ratio * len(words) + 0.5)
        overlap_max = min(max_overlap_total, overlap_ratio)
        overlap_over = overlap_max + 1
        gram_count = max(len(words) - overlap_max, 1)

        for i in range(gram_count):
            gram = " ".join(words[i : i + overlap_over])
            if gram in self.rejoined_text:
                return False
        return True

    # --- generation ---
    def detokenize(self, tokens: Sequence[int]) -> List[str]:
        return [self.vocab.to_word(t) for t in tokens]

    def _try_generate(
        self,
        options: TextOptions,
        init_state: Optional[Tuple[int, ...]] = None,
    ) -> Optional[str]:
        prefix: List[int] = []
        if init_state is not None:
            prefix = [t for t in init_state if t != self.begin]
        max_steps = max(0, options.max_words + 1 - len(prefix))

        for _ in range(options.tries):
            tokens = prefix + self.chain.generate(init_state, max_steps=max_steps)
            if not options.min_words <= len(tokens) <= options.max_words:
                continue
            words = self.detokenize(tokens)
            if self.verify(words):
                return " ".join(words)
        return None

    def generate(self, options: Optional[TextOptions] = None) -> str:
        """
        Generate one sentence.

        Returns:
            The sentence, or "" when no candidate passed within `tries`
        """
        options = options or TextOptions()
        result = self._try_generate(options)
        if result is None:
            logger.debug(f"[Markov] No acceptable sentence in {options.tries} tries")
            return ""
        return result

    def generate_with_start(
        self,
        beginning: str,
        options: Optional[TextOptions] = None,
        strict: bool = True,
    ) -> str:
        """
        Generate a sentence containing the given start words.

        With strict, the words padded with BEGIN to the state size must be a
        stored state and the output starts with them. Fewer words than the
        state size must open a training sentence; a full state may come
        from anywhere in one. Otherwise any state holding the words is a
        candidate starting point.

        Raises:
            ValueError: Unknown start word, too many words, or (strict) the
                padded start is not a stored state
        """
        options = options or TextOptions()
        words = beginning.split()
        if not words:
            raise ValueError("beginning must contain at least one word")
        if len(words) > self.state_size:
            raise ValueError(
                f"beginning has {len(words)} words, state size is {self.state_size}"
            )

        tokens = []
        for word in words:
            token = self.vocab.to_token_lookup(word)
            if token is None or token in (self.begin, self.end):
                raise ValueError(f"word not in corpus: {word!r}")
            tokens.append(token)

        if strict:
            init_state = (self.begin,) * (self.state_size - len(tokens)) + tuple(tokens)
            if init_state not in self.chain:
                raise ValueError(f"{beginning!r} is not a known start state")
            init_states = [init_state]
        else:
            init_states = [
                state
                for state in self.chain.find_states_containing(tokens[0])
                if _contains_run(state, tokens)
            ]
            self.rng.shuffle(init_states)

        for init_state in init_states:
            result = self._try_generate(options, init_state)
            if result is not None:
                return result
        return ""

    def stats(self) -> TextStats:
        return TextStats(
            sentences=len(self.parsed_sentences),
            vocab_size=len(self.vocab),
            states=len(self.chain),
        )


def _contains_run(state: Tuple[int, ...], run: Sequence[int]) -> bool:
    n = len(run)
    return any(tuple(state[i : i + n]) == tuple(run) for i in range(len(state) - n + 1))
