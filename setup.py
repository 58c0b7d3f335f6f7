"""
Setup for the Brownian Motion Simulator.

Author: Jose Orlando Bobadilla Fuentes, CQF
"""
from setuptools import setup, find_packages

setup(
    name="brownian-motion-simulator",
    version="1.0.0",
    author="Jose Orlando Bobadilla Fuentes",
    description=(
        "Box-Muller normal variates, discretized Wiener paths and Monte Carlo "
        "terminal-density comparison against N(0, T)."
    ),
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24.0",
        "scipy>=1.11.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    keywords=["brownian-motion", "wiener-process", "box-muller",
              "monte-carlo", "stochastic-processes"],
)
