"""
Thin sampler wrappers over a NumPy random generator.

Samplers hold only their validated parameters; every draw takes the run's
``np.random.Generator`` so all randomness flows from one seeded stream.

Usage:
    statuses = WeightedIndex([2, 2, 14, 1, 1, 1])
    idx = statuses.sample(rng)

    on_vacation = Bernoulli(0.15).sample(rng)
    color = UniformChoice(list(Color)).sample(rng)
"""

from __future__ import annotations

import math
from typing import Generic, Sequence, TypeVar

import numpy as np

from .errors import DistributionError

T = TypeVar("T")


class WeightedIndex:
    """
    Categorical sampler over indices ``0..K-1`` with probability
    proportional to each weight.

    Raises:
        DistributionError: If weights are empty, negative, non-finite or all zero
    """

    __slots__ = ("weights", "_probs")

    def __init__(self, weights: Sequence[float]) -> None:
        weights = list(weights)
        if not weights:
            raise DistributionError("Weighted sampler needs at least one weight")
        if any(not math.isfinite(w) or w < 0 for w in weights):
            raise DistributionError(f"Weights must be finite and non-negative: {weights}")
        total = float(sum(weights))
        if total <= 0:
            raise DistributionError(f"Weights must not all be zero: {weights}")

        self.weights = tuple(weights)
        self._probs = np.array(weights, dtype=float) / total

    def __len__(self) -> int:
        return len(self.weights)

    def sample(self, rng: np.random.Generator) -> int:
        return int(rng.choice(len(self._probs), p=self._probs))

    def sample_n(self, rng: np.random.Generator, n: int) -> list[int]:
        if n == 0:
            return []
        return rng.choice(len(self._probs), size=n, p=self._probs).tolist()

    def __repr__(self) -> str:
        return f"WeightedIndex(weights={list(self.weights)})"


class Bernoulli:
    """Boolean sampler that returns True with probability ``p``."""

    __slots__ = ("p",)

    def __init__(self, p: float) -> None:
        if not (0.0 <= p <= 1.0):
            raise DistributionError(f"Probability must be within [0, 1], got {p}")
        self.p = float(p)

    def sample(self, rng: np.random.Generator) -> bool:
        return bool(rng.random() < self.p)

    def __repr__(self) -> str:
        return f"Bernoulli(p={self.p})"


class UniformChoice(Generic[T]):
    """Uniform sampler over a fixed, non-empty set of values."""

    __slots__ = ("values",)

    def __init__(self, values: Sequence[T]) -> None:
        if len(values) == 0:
            raise DistributionError("Uniform sampler needs at least one value")
        self.values = tuple(values)

    def sample(self, rng: np.random.Generator) -> T:
        return self.values[int(rng.integers(len(self.values)))]

    def __repr__(self) -> str:
        return f"UniformChoice({list(self.values)})"


def uniform_band(rng: np.random.Generator, base: float, scatter: float) -> float:
    """Draw uniformly from ``[base - base*scatter, base + base*scatter]``."""
    spread = abs(base * scatter)
    if spread == 0:
        return base
    return float(rng.uniform(base - spread, base + spread))


def digit_string(rng: np.random.Generator, length: int) -> str:
    """Random string of decimal digits (leading zeros allowed)."""
    return "".join(str(d) for d in rng.integers(0, 10, size=length))
