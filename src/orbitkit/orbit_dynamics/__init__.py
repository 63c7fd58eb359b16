"""Perturbing accelerations and environment models.

Provides the force and environment models acting on a spacecraft in
orbit about the Earth:

- **Density**: U.S. Standard Atmosphere 1976 curve fit
- **Drag**: Atmospheric drag acceleration
- **Gravity**: J2..J6 zonal harmonic perturbations
- **SRP**: Solar radiation pressure
- **Plasma**: Debye length lookup
- **Factory**: composition of the above from a :class:`PerturbationConfig`
"""

from .config import PerturbationConfig, SpacecraftParams
from .density import density_standard_atmosphere
from .drag import accel_drag
from .factory import create_perturbation_model
from .gravity import accel_zonal_harmonics, zonal_harmonic_terms
from .plasma import debye_length
from .srp import accel_srp

__all__ = [
    # Density
    "density_standard_atmosphere",
    # Drag
    "accel_drag",
    # Gravity
    "accel_zonal_harmonics",
    "zonal_harmonic_terms",
    # SRP
    "accel_srp",
    # Plasma
    "debye_length",
    # Factory
    "PerturbationConfig",
    "SpacecraftParams",
    "create_perturbation_model",
]
