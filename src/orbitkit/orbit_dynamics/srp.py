"""Solar radiation pressure acceleration.

A cannonball model with a fixed reflectivity: the pressure falls off with
the square of the distance from the Sun, measured in astronomical units,
and acts along the Sun-planet line.  No shadow model is applied.

References:
    1. Earth Planets Space, Vol. 51, 1999, pp. 979-986.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit.config import get_dtype
from orbitkit.constants import C_LIGHT, CR_DEFAULT, SOLAR_FLUX
from orbitkit.vectors import mult, norm


def accel_srp(
    area: float,
    mass: float,
    sun_vec: ArrayLike,
    cr: float = CR_DEFAULT,
    flux: float = SOLAR_FLUX,
    c: float = C_LIGHT,
) -> Array:
    """Acceleration due to solar radiation pressure.

    ``a = -(Cr A flux) / (m c d^3) / 1000 * sun_vec`` with
    ``d = |sun_vec|``.  The result has the same components as *sun_vec*.

    Args:
        area: Sun-facing cross-sectional area [m^2].
        mass: Spacecraft mass [kg].
        sun_vec: Position vector from the Sun to the orbited planet [AU],
            shape ``(3,)``.  The Earth is at a distance of 1 AU.
        cr: Radiation pressure coefficient [dimensionless].
        flux: Solar flux at 1 AU [W/m^2].
        c: Speed of light [m/s].

    Returns:
        SRP acceleration [km/s^2], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitkit.orbit_dynamics import accel_srp
        a = accel_srp(1.0, 100.0, jnp.array([1.0, 0.0, 0.0]))
        ```
    """
    _float = get_dtype()
    sun_vec = jnp.asarray(sun_vec, dtype=_float)[:3]
    d = norm(sun_vec)

    scale = (-_float(cr) * _float(area) * _float(flux)) / (_float(mass) * _float(c) * d**3) / 1000.0
    return mult(scale, sun_vec)
