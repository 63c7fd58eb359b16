"""Keplerian element ↔ Cartesian state conversions.

This sub-module provides:

- **Element types**: :class:`ClassicalElements` with a tagged
  :class:`Anomaly`, and the :class:`OrbitRegime` classification.
- **Conversions**: :func:`state_koe_to_eci` and :func:`state_eci_to_koe`
  covering circular, elliptic, rectilinear, parabolic and hyperbolic
  orbits.
"""

from ._types import Anomaly, AnomalyKind, ClassicalElements, OrbitRegime
from .keplerian import orbit_regime, state_eci_to_koe, state_koe_to_eci

__all__ = [
    "Anomaly",
    "AnomalyKind",
    "ClassicalElements",
    "OrbitRegime",
    "orbit_regime",
    "state_koe_to_eci",
    "state_eci_to_koe",
]
