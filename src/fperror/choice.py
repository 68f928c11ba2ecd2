"""
Nondeterministic Choice Sources

The model never decides an UNCERTAIN comparison itself. Whoever drives
the evaluation supplies a choice source: a callable that, given a
probability, returns a Boolean. The sources here cover the two common
drivers:

- RandomChoice: sampling, seeded and reproducible, with a history of
  every outcome it produced
- ScriptedChoice: replay of a recorded history (or any fixed script),
  which lets a driver retry or fork an evaluation at a choice point
"""

from typing import Iterable, List, Optional, Protocol

import numpy as np

from .core.tristate import Tri


FAIR = 0.5


class ChoiceSource(Protocol):
    """Yields True with the requested probability."""

    def __call__(self, probability: float = FAIR) -> bool:
        ...


def _check_probability(probability: float) -> None:
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"Probability must lie in [0, 1]: {probability}")


class RandomChoice:
    """
    Pseudo-random choice source.

    All outcomes are reproducible given the same seed; `history` keeps
    them in order so a run can be replayed with ScriptedChoice.
    """

    def __init__(self, seed: Optional[int] = 42):
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self.history: List[bool] = []

    def __call__(self, probability: float = FAIR) -> bool:
        _check_probability(probability)
        outcome = bool(self._rng.random() < probability)
        self.history.append(outcome)
        return outcome

    def reset(self) -> None:
        """Restart the sequence from the seed."""
        self._rng = np.random.default_rng(self.seed)
        self.history = []


class ScriptedChoice:
    """Replays a fixed sequence of outcomes, ignoring probabilities."""

    def __init__(self, outcomes: Iterable[bool]):
        self.outcomes = [bool(o) for o in outcomes]
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self.outcomes) - self._position

    def __call__(self, probability: float = FAIR) -> bool:
        _check_probability(probability)
        if self._position >= len(self.outcomes):
            raise ValueError(
                f"Scripted choices exhausted after {len(self.outcomes)} outcomes"
            )
        outcome = self.outcomes[self._position]
        self._position += 1
        return outcome


def resolve(outcome: Tri, choice: ChoiceSource, probability: float = FAIR) -> bool:
    """
    Turn a three-valued outcome into a Boolean.

    TRUE and FALSE are returned as is; only UNCERTAIN consults `choice`.
    """
    if outcome is Tri.TRUE:
        return True
    if outcome is Tri.FALSE:
        return False
    return choice(probability)
