"""Anomaly conversions for Kepler orbits.

This sub-module provides functions for:

- **Elliptic anomalies**: converting between true, eccentric and mean
  anomaly for ``0 <= e < 1``.
- **Hyperbolic anomalies**: converting between true, hyperbolic and mean
  hyperbolic anomaly for ``e > 1``.
- **Kepler equation solvers**: JAX-traceable Newton-Raphson solvers that
  report whether their iteration cap was reached.
"""

from ._types import KeplerSolution, KeplerSolverConfig
from .anomaly import (
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_hyperbolic_mean_to_true,
    anomaly_hyperbolic_to_mean,
    anomaly_hyperbolic_to_true,
    anomaly_mean_to_eccentric,
    anomaly_mean_to_hyperbolic,
    anomaly_mean_to_true,
    anomaly_true_to_eccentric,
    anomaly_true_to_hyperbolic,
    anomaly_true_to_hyperbolic_mean,
    anomaly_true_to_mean,
    solve_kepler_elliptic,
    solve_kepler_hyperbolic,
)

__all__ = [
    "KeplerSolution",
    "KeplerSolverConfig",
    "anomaly_eccentric_to_true",
    "anomaly_true_to_eccentric",
    "anomaly_eccentric_to_mean",
    "anomaly_mean_to_eccentric",
    "anomaly_true_to_mean",
    "anomaly_mean_to_true",
    "anomaly_true_to_hyperbolic",
    "anomaly_hyperbolic_to_true",
    "anomaly_hyperbolic_to_mean",
    "anomaly_mean_to_hyperbolic",
    "anomaly_true_to_hyperbolic_mean",
    "anomaly_hyperbolic_mean_to_true",
    "solve_kepler_elliptic",
    "solve_kepler_hyperbolic",
]
