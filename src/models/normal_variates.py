"""
Standard Normal Variate Generator
==================================

Box-Muller transform in polar (radius/angle) form:

    R     = sqrt(-2 ln U1),  theta = 2 pi U2
    Z1    = R cos(theta),    Z2    = R sin(theta)

Each transform yields two independent N(0,1) draws. Z1 is returned at once
and Z2 is cached for the following call, so the uniform source is consumed
only on every other call.

The uniform source is injected: any zero-argument callable returning a float
in [0, 1]. One generator instance is one stream of normal variates; parallel
workers must each own their own generator.

Author: Jose Orlando Bobadilla Fuentes | CQF
"""

import math
import numpy as np
from typing import Callable

from src.exceptions import UniformSourceError

UniformSource = Callable[[], float]

TWO_PI = 2.0 * math.pi


def numpy_uniform_source(seed=None) -> UniformSource:
    """Uniform(0,1) draws from a numpy Generator seeded by an int or SeedSequence."""
    rng = np.random.default_rng(seed)
    return rng.random


class NormalVariateGenerator:
    """
    Stateful Box-Muller N(0,1) generator with one-value caching.

    Usage:
        >>> gen = NormalVariateGenerator(numpy_uniform_source(42))
        >>> z = gen.next()
    """

    def __init__(self, uniform_source: UniformSource):
        self.uniform_source = uniform_source
        self._cached_value = 0.0
        self._has_cached = False

    @property
    def has_cached(self) -> bool:
        return self._has_cached

    def _draw_uniform(self) -> float:
        u = self.uniform_source()
        if not 0.0 <= u <= 1.0:   # also catches NaN
            raise UniformSourceError(f"Uniform source returned {u!r}, expected a value in [0, 1]")
        return u

    def next(self) -> float:
        """Return the next standard normal variate."""
        if self._has_cached:
            self._has_cached = False
            return self._cached_value

        u1 = self._draw_uniform()
        while u1 == 0.0:          # log(0) is undefined
            u1 = self._draw_uniform()
        u2 = self._draw_uniform()

        radius = math.sqrt(-2.0 * math.log(u1))
        theta = TWO_PI * u2

        self._cached_value = radius * math.sin(theta)
        self._has_cached = True
        return radius * math.cos(theta)

    def reset(self):
        """Drop any cached variate so the next call starts a fresh pair."""
        self._cached_value = 0.0
        self._has_cached = False

    def sample(self, size: int) -> np.ndarray:
        """Draw `size` successive variates into an array."""
        out = np.empty(size)
        for i in range(size):
            out[i] = self.next()
        return out
