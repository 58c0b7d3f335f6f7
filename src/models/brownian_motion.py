"""
Wiener Process Path Simulator
==============================

Discretizes standard Brownian motion W(t), W(0) = 0, on n equal steps over
[0, T]:

    W(t_i) = W(t_{i-1}) + sqrt(dt) * Z_i,   Z_i ~ N(0,1),   dt = T/n

Stored positions are W(dt), W(2dt), ..., W(T); W(0) is implicit.

    E[W(t)] = 0,  Var[W(t)] = t

Author: Jose Orlando Bobadilla Fuentes | CQF
"""

import math
import numbers
import numpy as np
from dataclasses import dataclass
from typing import Optional

from src.exceptions import InvalidParameterError
from src.models.normal_variates import NormalVariateGenerator, numpy_uniform_source
from src.utils.helpers import get_logger, validate_horizon, validate_positive_int

logger = get_logger(__name__)


@dataclass
class SimConfig:
    """
    Shared simulation configuration.

    Attributes:
        T: Time horizon (T > 0)
        n_steps: Time steps per path
        n_paths: Ensemble size for the terminal distribution
        n_bins: Histogram bins
        seed: Seed for the default uniform source (None = fresh entropy)
    """
    T: float = 1.0
    n_steps: int = 1000
    n_paths: int = 1000
    n_bins: int = 20
    seed: Optional[int] = 42

    def __post_init__(self):
        self.T = validate_horizon(self.T)
        self.n_steps = validate_positive_int(self.n_steps, "n_steps")
        self.n_paths = validate_positive_int(self.n_paths, "n_paths")
        self.n_bins = validate_positive_int(self.n_bins, "n_bins")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral)):
            raise InvalidParameterError(f"seed must be an int or None, got {self.seed!r}")

    @property
    def dt(self) -> float:
        return self.T / self.n_steps


@dataclass
class BrownianPath:
    path: np.ndarray
    final: float
    T: float
    n_steps: int

    @property
    def dt(self) -> float:
        return self.T / self.n_steps

    @property
    def time_grid(self) -> np.ndarray:
        """Times dt, 2dt, ..., T matching the stored positions."""
        return np.arange(1, self.n_steps + 1) * self.dt


def theoretical_mean(t):
    return np.zeros_like(np.asarray(t, dtype=float))


def theoretical_var(t):
    return np.asarray(t, dtype=float)


class PathSimulator:
    """
    Builds discretized Wiener paths from a normal variate stream.

    Usage:
        >>> sim = PathSimulator.from_config(SimConfig(seed=7))
        >>> bp = sim.simulate(T=1.0, n=1000)
        >>> bp.final == bp.path[-1]
        True
    """

    def __init__(self, generator: NormalVariateGenerator, reset_per_path: bool = False):
        self.generator = generator
        self.reset_per_path = reset_per_path

    @classmethod
    def from_config(cls, config: SimConfig) -> "PathSimulator":
        return cls(NormalVariateGenerator(numpy_uniform_source(config.seed)))

    def _simulate_path(self, T: float, n: int) -> np.ndarray:
        if self.reset_per_path:   # path starts on a fresh Box-Muller pair
            self.generator.reset()
        sqrt_dt = math.sqrt(T / n)
        next_z = self.generator.next
        path = np.empty(n)
        current = 0.0
        for i in range(n):
            current += sqrt_dt * next_z()
            path[i] = current
        return path

    def simulate(self, T: float, n: int) -> BrownianPath:
        """One path of n steps over [0, T]."""
        T = validate_horizon(T)
        n = validate_positive_int(n, "n")
        path = self._simulate_path(T, n)
        return BrownianPath(path=path, final=float(path[-1]), T=T, n_steps=n)

    def simulate_many(self, T: float, n: int, m: int) -> np.ndarray:
        """m paths stacked into an (m, n) array, drawn sequentially."""
        T = validate_horizon(T)
        n = validate_positive_int(n, "n")
        m = validate_positive_int(m, "m")
        logger.debug("Simulating %d paths (T=%s, n=%d)", m, T, n)
        paths = np.empty((m, n))
        for j in range(m):
            paths[j] = self._simulate_path(T, n)
        return paths
