"""Atmospheric drag acceleration model.

Computes the drag acceleration of a spacecraft from its inertial position
and velocity, using the curve-fit density of
:func:`~orbitkit.orbit_dynamics.density.density_standard_atmosphere`.
The atmosphere is taken to be at rest in the inertial frame.

Positions are in *km*, velocities in *km/s*, accelerations in *km/s^2*;
area is in *m^2* and mass in *kg*.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit._diagnostics import DRAG_ALTITUDE, report_domain
from orbitkit.config import get_dtype
from orbitkit.constants import REQ_EARTH
from orbitkit.orbit_dynamics.density import density_standard_atmosphere
from orbitkit.vectors import mult, norm


def accel_drag(
    cd: float,
    area: float,
    mass: float,
    r_eci: ArrayLike,
    v_eci: ArrayLike,
    r_body: float = REQ_EARTH,
) -> Array:
    """Acceleration due to atmospheric drag.

    ``a = -1/2 rho (Cd A / m) |v|^2 v_hat``, with the velocity converted
    to m/s for the force and the result converted back to km/s^2.

    A position at or below the surface (altitude ``<= 0``) yields a
    ``nan`` vector and a logged diagnostic.

    Args:
        cd: Coefficient of drag [dimensionless].
        area: Cross-sectional area [m^2].
        mass: Spacecraft mass [kg].
        r_eci: Inertial position [km], shape ``(3,)``.
        v_eci: Inertial velocity [km/s], shape ``(3,)``.
        r_body: Radius of the central body [km].

    Returns:
        Drag acceleration [km/s^2], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitkit.orbit_dynamics import accel_drag
        r = jnp.array([6778.0, 0.0, 0.0])
        v = jnp.array([0.0, 7.67, 0.0])
        a = accel_drag(2.2, 1.0, 100.0, r, v)
        ```
    """
    _float = get_dtype()
    r_eci = jnp.asarray(r_eci, dtype=_float)[:3]
    v_eci = jnp.asarray(v_eci, dtype=_float)[:3]

    r = norm(r_eci)
    v = norm(v_eci)
    alt = r - _float(r_body)

    valid = report_domain("accel_drag", DRAG_ALTITUDE, alt)

    density = density_standard_atmosphere(alt)
    ad = (-0.5 * density * (_float(cd) * _float(area) / _float(mass)) * (v * 1000.0) ** 2) / 1000.0

    return jnp.where(valid, mult(ad / v, v_eci), jnp.nan)
