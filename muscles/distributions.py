"""muscles/distributions.py
Minimal Gaussian-moments distribution used for predictions and sensations.

The plants only ever need the first two moments of whatever an estimator hands
them, so any object exposing ``mean()`` and ``variance()`` (or ``var()``, or a
combined ``mean_var()``) is accepted as a prediction.  Frozen
``scipy.stats.norm`` objects therefore work unchanged.
"""
from __future__ import annotations

import math
from typing import Optional, Protocol, Tuple, runtime_checkable

import numpy as np


@runtime_checkable
class Distribution(Protocol):
    """Capability required from predictions and produced as sensations."""

    def mean(self) -> float: ...

    def variance(self) -> float: ...


class Gaussian:
    """Univariate normal parameterised by mean and *variance*.

    Parameters
    ----------
    mean : float
        Location of the distribution.
    var : float, optional
        Variance (not standard deviation).  Defaults to ``1.0``.
    """

    __slots__ = ('_mean', '_var')

    def __init__(self, mean: float = 0.0, var: float = 1.0):
        self._mean = float(mean)
        self._var = float(var)

    @classmethod
    def from_std(cls, mean: float, sd: float) -> "Gaussian":
        """Build from a standard deviation instead of a variance."""
        return cls(mean, float(sd) ** 2)

    def mean(self) -> float:
        return self._mean

    def variance(self) -> float:
        return self._var

    # scipy.stats spelling
    var = variance

    def std(self) -> float:
        return math.sqrt(self._var)

    def mean_var(self) -> Tuple[float, float]:
        return self._mean, self._var

    def sample(self, rng: Optional[np.random.Generator] = None) -> float:
        """Draw one reading, e.g. a noisy measurement described by a sensation."""
        if rng is None:
            rng = np.random.default_rng()
        return float(self._mean + rng.standard_normal() * self.std())

    def __eq__(self, other):
        if not isinstance(other, Gaussian):
            return NotImplemented
        return self._mean == other._mean and self._var == other._var

    def __hash__(self):
        return hash((self._mean, self._var))

    def __repr__(self):
        return f"Gaussian(mean={self._mean}, var={self._var})"


def mean_var(dist) -> Tuple[float, float]:
    """Return ``(mean, variance)`` of *dist*.

    Tries a combined ``mean_var()`` accessor first, then ``mean()`` together
    with ``variance()`` or ``var()``.
    """
    combined = getattr(dist, 'mean_var', None)
    if callable(combined):
        m, v = combined()
        return float(m), float(v)
    var_fn = getattr(dist, 'variance', None) or getattr(dist, 'var', None)
    if not callable(getattr(dist, 'mean', None)) or not callable(var_fn):
        raise TypeError(f"{type(dist).__name__} does not expose mean() and variance()")
    return float(dist.mean()), float(var_fn())
