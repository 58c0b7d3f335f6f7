"""
Brownian Motion Simulator
==========================
Box-Muller normal variates, discretized Wiener paths, and a Monte Carlo
comparison of the empirical W(T) density against N(0, T).

Modules:
    models.normal_variates  - Cached Box-Muller generator over an injected uniform source
    models.brownian_motion  - SimConfig, BrownianPath, PathSimulator
    models.monte_carlo      - Ensemble binning, density comparison, parallel ensembles
    models.density          - Closed-form normal densities
    utils.helpers           - Logging, timing, parameter validation

Author: Jose Orlando Bobadilla Fuentes, CQF
"""

__version__ = "1.0.0"
__author__ = "Jose Orlando Bobadilla Fuentes"
