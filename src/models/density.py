"""
Theoretical densities for the Wiener process.

W(T) ~ N(0, T), so the terminal density is normal_pdf(x, 0, sqrt(T)).

Author: Jose Orlando Bobadilla Fuentes | CQF
"""

import numpy as np


def normal_pdf(x, mu: float, sigma: float):
    """
    Density of N(mu, sigma^2) evaluated at x (float or array).

    Precondition: sigma > 0. Not checked; sigma <= 0 gives an undefined result.
    """
    var = sigma * sigma
    return np.exp(-0.5 * ((x - mu) / sigma) ** 2) / np.sqrt(2.0 * np.pi * var)


def terminal_pdf(x, T: float):
    """Density of W(T) at x."""
    return normal_pdf(x, 0.0, np.sqrt(T))
