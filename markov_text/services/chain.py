"""
Markov chain over token sequences (CPU-only).

Each state is a fixed-size window of preceding tokens; the model maps a
state to the observed counts of the token that followed it. Sampling uses
the cumulative (prefix-sum) distribution of those counts.
"""
from __future__ import annotations

import bisect
import logging
import random
from collections import defaultdict
from typing import Dict, Generic, Hashable, List, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)

State = Tuple[T, ...]


class StateNotFoundError(LookupError):
    """Raised when stepping from a state the model has no successors for."""


def accumulate(weights: Sequence[int]) -> List[int]:
    """Running totals of weights, e.g. [1, 3, 2] -> [1, 4, 6]."""
    total = 0
    cumdist = []
    for w in weights:
        total += w
        cumdist.append(total)
    return cumdist


def compile_next(weights: Dict[T, int]) -> Tuple[List[T], List[int]]:
    """Split a weight table into (choices, cumulative weights)."""
    choices = list(weights.keys())
    return choices, accumulate(list(weights.values()))


class Chain(Generic[T]):
    """
    Fixed-order Markov chain.

    The model is built once from the training runs and is read-only
    afterwards, so a single instance can serve many `generate` calls.
    """

    def __init__(
        self,
        corpus: Sequence[Sequence[T]],
        begin: T,
        end: T,
        state_size: int = 2,
        rng: Optional[random.Random] = None,
    ):
        """
        Build the chain.

        Args:
            corpus: Training runs, each a sequence of tokens
            begin: Sentinel token padding the start of every run
            end: Sentinel token terminating every run
            state_size: Number of preceding tokens forming a state
            rng: Random source; defaults to a fresh `random.Random()`
        """
        if state_size < 1:
            raise ValueError("state_size must be >= 1")

        self.begin = begin
        self.end = end
        self.state_size = state_size
        self.rng = rng or random.Random()

        self.model: Dict[State, Dict[T, int]] = self.build(corpus)

        self.begin_choices: List[T] = []
        self.begin_cumdist: List[int] = []
        self._precompute_begin_state()

        logger.info(
            f"[Markov] Chain built: {len(corpus)} runs, {len(self.model)} states"
        )

    def build(self, corpus: Sequence[Sequence[T]]) -> Dict[State, Dict[T, int]]:
        """Count (state -> next token) transitions over all runs."""
        model: Dict[State, Dict[T, int]] = defaultdict(lambda: defaultdict(int))

        for run in corpus:
            items = [self.begin] * self.state_size + list(run) + [self.end]
            for i in range(len(run) + 1):
                state = tuple(items[i : i + self.state_size])
                follow = items[i + self.state_size]
                model[state][follow] += 1

        # freeze into plain dicts so lookups never insert
        return {state: dict(weights) for state, weights in model.items()}

    @property
    def begin_state(self) -> State:
        return (self.begin,) * self.state_size

    def _precompute_begin_state(self):
        weights = self.model.get(self.begin_state)
        if weights:
            self.begin_choices, self.begin_cumdist = compile_next(weights)

    def step(self, state: Sequence[T]) -> T:
        """
        Sample the token following state.

        Raises:
            StateNotFoundError: state has no recorded successors
        """
        state = tuple(state)
        if state == self.begin_state:
            choices, cumdist = self.begin_choices, self.begin_cumdist
        else:
            weights = self.model.get(state)
            if not weights:
                raise StateNotFoundError(f"state not found in model: {state!r}")
            choices, cumdist = compile_next(weights)

        if not cumdist:
            raise StateNotFoundError("begin state has no successors (empty corpus)")

        r = int(self.rng.random() * cumdist[-1])
        return choices[bisect.bisect_right(cumdist, r)]

    move = step

    def generate(
        self,
        init_state: Optional[Sequence[T]] = None,
        max_steps: Optional[int] = None,
    ) -> List[T]:
        """
        Walk the chain until END is sampled.

        Args:
            init_state: Starting state; defaults to the all-BEGIN state
            max_steps: Stop after this many tokens even if END was not reached

        Returns:
            Generated tokens, END excluded
        """
        state = list(init_state) if init_state is not None else list(self.begin_state)
        if len(state) != self.state_size:
            raise ValueError(
                f"init_state must have {self.state_size} tokens, got {len(state)}"
            )

        result: List[T] = []
        while max_steps is None or len(result) < max_steps:
            next_token = self.step(state)
            if next_token == self.end:
                break
            result.append(next_token)
            state = state[1:] + [next_token]
        return result

    def find_states_containing(self, token: T) -> List[State]:
        """All stored states with token anywhere in the window."""
        return [state for state in self.model if token in state]

    def __contains__(self, state: object) -> bool:
        return isinstance(state, tuple) and state in self.model

    def __len__(self) -> int:
        return len(self.model)
