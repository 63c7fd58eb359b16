"""Curve-fit atmospheric density model.

Computes the atmospheric density from altitude using a fit to the U.S.
Standard Atmosphere 1976 tables: a scaled 6th-order polynomial in the
log of density up to 1000 km, and a log-linear decay above.  The fit is
intended for 100-1000 km; outside that range it extrapolates without any
check.

Altitude is in *km*, density in *kg/m^3*.

References:
    1. U.S. Standard Atmosphere, 1976, U.S. Government Printing Office,
       Washington, D.C., 1976.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit.config import get_dtype

# Altitude normalisation of the polynomial fit [km]
_FIT_MEAN = 526.8000
_FIT_SCALE = 292.8563

# log10-density polynomial coefficients, highest degree first
_FIT_COEFFS = jnp.array([0.34047, -0.5889, -0.5269, 1.0036, 0.60713, -2.3024, -12.575])

# Log-linear decay above the polynomial range
_UPPER_LIMIT = 1000.0  # [km]
_UPPER_SLOPE = -7e-05  # [1/km]
_UPPER_OFFSET = -14.464


def density_standard_atmosphere(alt: ArrayLike) -> Array:
    """Atmospheric density from a U.S. Standard Atmosphere 1976 fit.

    Args:
        alt: Altitude above the Earth's equatorial radius [km].

    Returns:
        Atmospheric density [kg/m^3].

    Examples:
        ```python
        from orbitkit.orbit_dynamics import density_standard_atmosphere
        rho = density_standard_atmosphere(400.0)
        ```
    """
    _float = get_dtype()
    alt = jnp.asarray(alt, dtype=_float)

    x = (alt - _FIT_MEAN) / _FIT_SCALE
    log_density = jnp.polyval(_FIT_COEFFS.astype(_float), x)

    # Smooth exponential drop-off above 1000 km
    log_density_upper = _UPPER_SLOPE * alt + _UPPER_OFFSET

    return jnp.power(10.0, jnp.where(alt > _UPPER_LIMIT, log_density_upper, log_density))
