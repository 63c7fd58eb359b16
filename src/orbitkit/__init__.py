"""
orbitkit is a small orbital-mechanics transformation library implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    MU_EARTH,
    REQ_EARTH,
    J2_EARTH,
    J3_EARTH,
    J4_EARTH,
    J5_EARTH,
    J6_EARTH,
    J_EARTH,
    SOLAR_FLUX,
    C_LIGHT,
    CR_DEFAULT,
)

from .config import set_dtype, get_dtype

from .vectors import add, cross, dot, equal, mult, norm, set3

from .results import DomainError, NonConvergence, OrbitkitError, Result

from .orbits import (
    KeplerSolution,
    KeplerSolverConfig,
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

from .coordinates import (
    Anomaly,
    AnomalyKind,
    ClassicalElements,
    OrbitRegime,
    orbit_regime,
    state_eci_to_koe,
    state_koe_to_eci,
)

from .orbit_dynamics import (
    PerturbationConfig,
    SpacecraftParams,
    accel_drag,
    accel_srp,
    accel_zonal_harmonics,
    create_perturbation_model,
    debye_length,
    density_standard_atmosphere,
    zonal_harmonic_terms,
)

from . import checked

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "MU_EARTH",
    "REQ_EARTH",
    "J2_EARTH",
    "J3_EARTH",
    "J4_EARTH",
    "J5_EARTH",
    "J6_EARTH",
    "J_EARTH",
    "SOLAR_FLUX",
    "C_LIGHT",
    "CR_DEFAULT",
    # Config
    "set_dtype",
    "get_dtype",
    # Vectors
    "add",
    "cross",
    "dot",
    "equal",
    "mult",
    "norm",
    "set3",
    # Results
    "DomainError",
    "NonConvergence",
    "OrbitkitError",
    "Result",
    "checked",
    # Orbits
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
    # Coordinates
    "Anomaly",
    "AnomalyKind",
    "ClassicalElements",
    "OrbitRegime",
    "orbit_regime",
    "state_koe_to_eci",
    "state_eci_to_koe",
    # Orbit dynamics
    "density_standard_atmosphere",
    "accel_drag",
    "accel_zonal_harmonics",
    "zonal_harmonic_terms",
    "accel_srp",
    "debye_length",
    "PerturbationConfig",
    "SpacecraftParams",
    "create_perturbation_model",
]
