"""
elmodiff.policy — Step policies for the edit-graph search.

At every step after the first, the search asks its policy whether to
SAMPLE the frontier (weighted random draw, exploration) or POP it
(take the best-scoring node, greedy expansion).

A policy is any callable

    policy(step: int, rng: random.Random) -> bool

returning True to sample and False to pop.  `step` is the number of
steps already completed, so it is >= 1 whenever a policy is consulted.

The classes below cover the schedules that were compared when the
default was picked:

    1/t, 1/sqrt(t), 1/log(t), t^-0.666, t^-0.45, t^-0.333, exp(-t/2)

t^-0.45 gave the shortest scripts on average and is the default.
"""

import math
import random
from typing import Callable


DEFAULT_DECAY_EXPONENT = 0.45


class DecayPolicy:
    """Sample with probability step^-exponent."""

    def __init__(self, exponent: float = DEFAULT_DECAY_EXPONENT):
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent!r}")
        self.exponent = exponent

    def probability(self, step: int) -> float:
        return min(1.0, max(step, 1) ** -self.exponent)

    def __call__(self, step: int, rng: random.Random) -> bool:
        return rng.random() < self.probability(step)

    def __repr__(self) -> str:
        return f"DecayPolicy(exponent={self.exponent})"


class ConstantPolicy:
    """
    Sample with a fixed probability.

    ConstantPolicy(0.0) is a purely greedy best-first search;
    ConstantPolicy(1.0) always samples.
    """

    def __init__(self, probability: float):
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"probability must be in [0, 1], got {probability!r}")
        self._probability = probability

    def probability(self, step: int) -> float:
        return self._probability

    def __call__(self, step: int, rng: random.Random) -> bool:
        return rng.random() < self._probability

    def __repr__(self) -> str:
        return f"ConstantPolicy({self._probability})"


class SchedulePolicy:
    """Sample with probability schedule(step), clamped to [0, 1]."""

    def __init__(self, schedule: Callable[[int], float], name: str = ""):
        self.schedule = schedule
        self.name = name or getattr(schedule, "__name__", "schedule")

    def probability(self, step: int) -> float:
        return min(1.0, max(0.0, self.schedule(step)))

    def __call__(self, step: int, rng: random.Random) -> bool:
        return rng.random() < self.probability(step)

    def __repr__(self) -> str:
        return f"SchedulePolicy({self.name})"


# ═══════════════════════════════════════════════════════════════════
#  NAMED SCHEDULES
# ═══════════════════════════════════════════════════════════════════

def inverse() -> SchedulePolicy:
    """1/t"""
    return SchedulePolicy(lambda t: 1.0 / t, name="1/t")


def inverse_sqrt() -> SchedulePolicy:
    """1/sqrt(t)"""
    return SchedulePolicy(lambda t: 1.0 / math.sqrt(t), name="1/sqrt(t)")


def inverse_log() -> SchedulePolicy:
    """1/ln(t+1); shifted by one so the first consultation is finite."""
    return SchedulePolicy(lambda t: 1.0 / math.log(t + 1), name="1/log(t+1)")


def exponential() -> SchedulePolicy:
    """exp(-t/2)"""
    return SchedulePolicy(lambda t: math.exp(-t / 2), name="exp(-t/2)")
