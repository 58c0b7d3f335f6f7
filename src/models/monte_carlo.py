"""
Monte Carlo Terminal Distribution of W(T)
==========================================

Simulates m independent Wiener paths, collects W(T) for each, bins the
ensemble into equal-width bins over [min, max] and compares the empirical
density against the closed-form N(0, T) density at every bin centre:

    observed(i)    = (count_i / m) / bin_width
    theoretical(i) = phi(center_i; 0, sqrt(T))

By construction sum(observed * bin_width) = 1 whatever the sample quality.

Ensembles can also be generated across worker processes; every worker owns
an independent uniform source / generator pair spawned from one
numpy SeedSequence, so no variate cache is ever shared.

Author: Jose Orlando Bobadilla Fuentes | CQF
"""

import os
import numpy as np
from scipy.stats import kstest
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple

from src.exceptions import InvalidParameterError
from src.models.brownian_motion import BrownianPath, PathSimulator, SimConfig
from src.models.density import terminal_pdf
from src.models.normal_variates import NormalVariateGenerator, numpy_uniform_source
from src.utils.helpers import get_logger, timeit, validate_horizon, validate_positive_int

logger = get_logger(__name__)

N_BINS = 20


@dataclass
class DensityPoint:
    center: float
    observed_density: float
    theoretical_density: float
    count: int


@dataclass
class Ensemble:
    final_values: np.ndarray
    min: float
    max: float


@dataclass
class DistributionResult:
    """
    Binned terminal distribution with its theoretical counterpart.

    Attributes:
        T: Horizon used for the theoretical N(0, T) density
        final_values: The m terminal values W(T)
        min, max: Ensemble extremes
        bin_width: Width of every bin (1.0 when degenerate)
        counts: Samples per bin, sums to m
        density_points: One DensityPoint per bin, ordered by centre
        degenerate: True when the bin width collapsed to zero
    """
    T: float
    final_values: np.ndarray
    min: float
    max: float
    bin_width: float
    counts: np.ndarray
    density_points: List[DensityPoint]
    degenerate: bool = False

    @property
    def centers(self) -> np.ndarray:
        return np.array([p.center for p in self.density_points])

    @property
    def observed_density(self) -> np.ndarray:
        return np.array([p.observed_density for p in self.density_points])

    @property
    def theoretical_density(self) -> np.ndarray:
        return np.array([p.theoretical_density for p in self.density_points])

    def ks_test(self) -> Tuple[float, float]:
        """One-sample Kolmogorov-Smirnov test of W(T) against N(0, T)."""
        res = kstest(self.final_values, "norm", args=(0.0, np.sqrt(self.T)))
        return float(res.statistic), float(res.pvalue)


def histogram_density(final_values, lo: Optional[float], hi: Optional[float], T: float,
                      n_bins: int = N_BINS) -> DistributionResult:
    """
    Bin an ensemble on [lo, hi] and attach observed/theoretical densities.

    lo and hi default to the ensemble extremes when None. Bounds that are
    reversed or that exclude any sample raise InvalidParameterError.

    When (hi - lo) / n_bins is zero (identical samples, or a span too small
    to split) every sample goes to bin 0, the bin width is taken as 1.0 and
    bin 0 is centred on lo, keeping all densities finite.
    """
    T = validate_horizon(T)
    n_bins = validate_positive_int(n_bins, "n_bins")
    values = np.asarray(final_values, dtype=float).ravel()
    m = values.size
    if m < 1:
        raise InvalidParameterError("Cannot bin an empty ensemble")
    if not np.all(np.isfinite(values)):
        raise InvalidParameterError("Ensemble contains NaN or infinite values")

    lo = float(values.min()) if lo is None else float(lo)
    hi = float(values.max()) if hi is None else float(hi)
    if not lo <= hi:
        raise InvalidParameterError(f"Bin range is reversed or NaN: lo={lo}, hi={hi}")
    if values.min() < lo or values.max() > hi:
        raise InvalidParameterError(
            f"Samples span [{values.min()}, {values.max()}], outside bin range [{lo}, {hi}]")

    bin_width = (hi - lo) / n_bins
    degenerate = not bin_width > 0
    if degenerate:
        logger.warning("Degenerate ensemble: %d samples in a zero-width range at %.6g", m, lo)
        bin_width = 1.0
        left = lo - 0.5 * bin_width
        idx = np.zeros(m, dtype=np.int64)
    else:
        left = lo
        idx = np.floor((values - lo) / bin_width).astype(np.int64)
        np.clip(idx, 0, n_bins - 1, out=idx)   # value == hi lands in the last bin

    counts = np.bincount(idx, minlength=n_bins)
    centers = left + (np.arange(n_bins) + 0.5) * bin_width
    observed = counts / m / bin_width
    theoretical = terminal_pdf(centers, T)

    points = [DensityPoint(float(c), float(o), float(t), int(k))
              for c, o, t, k in zip(centers, observed, theoretical, counts)]
    return DistributionResult(T=T, final_values=values, min=float(lo), max=float(hi),
                              bin_width=float(bin_width), counts=counts,
                              density_points=points, degenerate=degenerate)


class MonteCarloAggregator:
    """
    Sequential ensemble of terminal values plus density comparison.

    Usage:
        >>> agg = MonteCarloAggregator.from_config(SimConfig(seed=1))
        >>> res = agg.aggregate(T=4.0, n=500, m=200)
        >>> len(res.density_points)
        20
    """

    def __init__(self, simulator: PathSimulator, n_bins: int = N_BINS):
        self.simulator = simulator
        self.n_bins = validate_positive_int(n_bins, "n_bins")

    @classmethod
    def from_config(cls, config: SimConfig) -> "MonteCarloAggregator":
        return cls(PathSimulator.from_config(config), n_bins=config.n_bins)

    def run_ensemble(self, T: float, n: int, m: int) -> Ensemble:
        """Terminal values of m paths with running min/max."""
        T = validate_horizon(T)
        n = validate_positive_int(n, "n")
        m = validate_positive_int(m, "m")

        finals = np.empty(m)
        lo, hi = np.inf, -np.inf
        for j in range(m):
            x = self.simulator.simulate(T, n).final
            finals[j] = x
            if x < lo:
                lo = x
            if x > hi:
                hi = x
        return Ensemble(final_values=finals, min=float(lo), max=float(hi))

    @timeit
    def aggregate(self, T: float, n: int, m: int) -> DistributionResult:
        """Simulate m paths and bin their terminal values."""
        logger.debug("Aggregating m=%s paths (T=%s, n=%s)", m, T, n)
        ens = self.run_ensemble(T, n, m)
        return histogram_density(ens.final_values, ens.min, ens.max, T, self.n_bins)


def _worker_ensemble(T: float, n: int, m: int,
                     seed_seq: np.random.SeedSequence) -> Ensemble:
    sim = PathSimulator(NormalVariateGenerator(numpy_uniform_source(seed_seq)))
    return MonteCarloAggregator(sim).run_ensemble(T, n, m)


def _split(m: int, workers: int) -> List[int]:
    base, extra = divmod(m, workers)
    return [base + (1 if i < extra else 0) for i in range(workers)]


@timeit
def parallel_terminal_values(T: float, n: int, m: int, seed: Optional[int] = None,
                             workers: Optional[int] = None) -> Ensemble:
    """
    Terminal values of m paths spread across worker processes.

    Each worker gets its own generator seeded from SeedSequence(seed).spawn(),
    so the result is reproducible for a fixed (seed, workers) pair.
    """
    T = validate_horizon(T)
    n = validate_positive_int(n, "n")
    m = validate_positive_int(m, "m")
    if workers is None:
        workers = os.cpu_count() or 1
    workers = validate_positive_int(workers, "workers")
    workers = min(workers, m)

    children = np.random.SeedSequence(seed).spawn(workers)
    sizes = _split(m, workers)
    logger.debug("Parallel ensemble: m=%d over %d workers", m, workers)

    with ProcessPoolExecutor(max_workers=workers) as pool:
        chunks = list(pool.map(_worker_ensemble,
                               [T] * workers, [n] * workers, sizes, children))

    finals = np.concatenate([c.final_values for c in chunks])
    return Ensemble(final_values=finals,
                    min=min(c.min for c in chunks), max=max(c.max for c in chunks))


def aggregate_parallel(T: float, n: int, m: int, seed: Optional[int] = None,
                       workers: Optional[int] = None, n_bins: int = N_BINS) -> DistributionResult:
    n_bins = validate_positive_int(n_bins, "n_bins")
    ens = parallel_terminal_values(T, n, m, seed=seed, workers=workers)
    return histogram_density(ens.final_values, ens.min, ens.max, T, n_bins)


@dataclass
class SimulationReport:
    config: SimConfig
    path: BrownianPath
    distribution: DistributionResult


def run_simulation(config: SimConfig) -> SimulationReport:
    """
    One display path followed by the terminal-distribution ensemble, both
    drawn from the same seeded variate stream.
    """
    agg = MonteCarloAggregator.from_config(config)
    path = agg.simulator.simulate(config.T, config.n_steps)
    dist = agg.aggregate(config.T, config.n_steps, config.n_paths)
    logger.debug("W(T) sample mean %.4f, var %.4f (theoretical 0, %.4f)",
                dist.final_values.mean(), dist.final_values.var(), config.T)
    return SimulationReport(config=config, path=path, distribution=dist)
