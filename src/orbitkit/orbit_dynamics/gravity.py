"""Zonal harmonic gravity perturbations.

Closed-form accelerations of the J2 through J6 zonal harmonics of an
axially symmetric central body.  Each degree contributes one complete
vector term in ``z/r`` and ``R_eq/r``; the terms are summed up to the
requested degree, with no recursion or iteration.

Positions are in *km* and accelerations in *km/s^2*.

References:
    1. H. Schaub and J. L. Junkins, *Analytical Mechanics of Space
       Systems*, AIAA, 2003, Sec. 11.3.
"""

from __future__ import annotations

from collections.abc import Sequence

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit._diagnostics import ZONAL_DEGREE, report_domain
from orbitkit.config import get_dtype
from orbitkit.constants import J_EARTH, MU_EARTH, REQ_EARTH
from orbitkit.vectors import mult, norm, set3

MIN_ZONAL_DEGREE = 2
MAX_ZONAL_DEGREE = 6


def zonal_harmonic_terms(
    r_eci: ArrayLike,
    mu: float = MU_EARTH,
    req: float = REQ_EARTH,
    coefficients: Sequence[float] = J_EARTH,
) -> Array:
    """Individual J2..J6 acceleration terms.

    Args:
        r_eci: Position relative to the central body [km], shape ``(3,)``.
        mu: Gravitational parameter [km^3/s^2].
        req: Equatorial radius [km].
        coefficients: Zonal coefficients ``(J2, J3, J4, J5, J6)``.

    Returns:
        Accelerations [km/s^2], shape ``(5, 3)``; row ``k`` is the
        contribution of degree ``k + 2``.
    """
    _float = get_dtype()
    r_eci = jnp.asarray(r_eci, dtype=_float)[:3]
    j2, j3, j4, j5, j6 = (_float(c) for c in coefficients)

    r = norm(r_eci)
    xr = r_eci[0] / r
    yr = r_eci[1] / r
    zr = r_eci[2] / r
    zr2 = zr * zr
    zr4 = zr2 * zr2
    zr6 = zr4 * zr2
    g = mu / r**2
    q = req / r

    s2 = 1.0 - 5.0 * zr2
    a2 = mult(-1.5 * j2 * g * q**2, set3(s2 * xr, s2 * yr, (3.0 - 5.0 * zr2) * zr))

    s3 = 5.0 * (7.0 * zr2 * zr - 3.0 * zr)
    a3 = mult(
        0.5 * j3 * g * q**3,
        set3(s3 * xr, s3 * yr, -3.0 * (10.0 * zr2 - (35.0 / 3.0) * zr4 - 1.0)),
    )

    s4 = 3.0 - 42.0 * zr2 + 63.0 * zr4
    a4 = mult(
        5.0 / 8.0 * j4 * g * q**4,
        set3(s4 * xr, s4 * yr, (15.0 - 70.0 * zr2 + 63.0 * zr4) * zr),
    )

    s5 = 3.0 * (35.0 * zr - 210.0 * zr2 * zr + 231.0 * zr4 * zr)
    a5 = mult(
        1.0 / 8.0 * j5 * g * q**5,
        set3(s5 * xr, s5 * yr, -(15.0 - 315.0 * zr2 + 945.0 * zr4 - 693.0 * zr6)),
    )

    s6 = 35.0 - 945.0 * zr2 + 3465.0 * zr4 - 3003.0 * zr6
    a6 = mult(
        -1.0 / 16.0 * j6 * g * q**6,
        set3(s6 * xr, s6 * yr, -(3003.0 * zr6 - 4851.0 * zr4 + 2205.0 * zr2 - 245.0) * zr),
    )

    return jnp.stack([a2, a3, a4, a5, a6])


def accel_zonal_harmonics(
    r_eci: ArrayLike,
    degree: ArrayLike,
    mu: float = MU_EARTH,
    req: float = REQ_EARTH,
    coefficients: Sequence[float] = J_EARTH,
) -> Array:
    """Cumulative zonal harmonic perturbation up to *degree*.

    ``degree = 2`` gives the J2 acceleration, ``degree = 3`` adds J3, and
    so on up to J6.  A degree outside ``[2, 6]`` yields a ``nan`` vector
    and a logged diagnostic.  *degree* may be a traced integer.

    Args:
        r_eci: Position relative to the central body [km], shape ``(3,)``.
        degree: Highest zonal degree to include, ``2 <= degree <= 6``.
        mu: Gravitational parameter [km^3/s^2].
        req: Equatorial radius [km].
        coefficients: Zonal coefficients ``(J2, J3, J4, J5, J6)``.

    Returns:
        Perturbing acceleration [km/s^2], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitkit.orbit_dynamics import accel_zonal_harmonics
        r = jnp.array([7000.0, 0.0, 1000.0])
        a_j2 = accel_zonal_harmonics(r, 2)
        ```
    """
    degree = jnp.asarray(degree)
    valid = report_domain("accel_zonal_harmonics", ZONAL_DEGREE, degree)

    terms = zonal_harmonic_terms(r_eci, mu, req, coefficients)
    included = jnp.arange(MIN_ZONAL_DEGREE, MAX_ZONAL_DEGREE + 1) <= degree
    total = jnp.sum(jnp.where(included[:, None], terms, 0.0), axis=0)

    return jnp.where(valid, total, jnp.nan)
