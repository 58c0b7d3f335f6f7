"""
Simulation models: variate generator, path simulator, Monte Carlo aggregator.
"""
from src.models.normal_variates import NormalVariateGenerator, numpy_uniform_source
from src.models.density import normal_pdf, terminal_pdf
from src.models.brownian_motion import (
    SimConfig, BrownianPath, PathSimulator, theoretical_mean, theoretical_var,
)
from src.models.monte_carlo import (
    DensityPoint, Ensemble, DistributionResult, MonteCarloAggregator,
    SimulationReport, histogram_density, parallel_terminal_values,
    aggregate_parallel, run_simulation,
)
