"""Classical orbital element ↔ inertial Cartesian state conversions.

Handles every orbit geometry of the two-body problem:

| Regime               | Condition            | Anomaly stored        |
|----------------------|----------------------|-----------------------|
| circular             | ``e == 0``, ``a > 0``  | true                  |
| elliptic             | ``0 < e < 1``        | true                  |
| rectilinear elliptic | ``e == 1``, ``a > 0``  | eccentric             |
| parabolic            | ``e == 1``, ``a < 0``  | true (``a = -r_p``)   |
| hyperbolic           | ``e > 1``, ``a < 0``   | true                  |

The regime tests are exact comparisons, so ``e`` must be exactly ``1.0``
to select a rectilinear or parabolic branch.  Branches are selected with
``jnp.where`` and both functions are compatible with ``jax.jit`` and
``jax.vmap``.

Positions are in *km*, velocities in *km/s*, the gravitational parameter
in *km^3/s^2*.

References:
    1. H. Schaub and J. L. Junkins, *Analytical Mechanics of Space
       Systems*, AIAA, 2003, Ch. 9.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit._diagnostics import ANOMALY_KIND, NONNEGATIVE_ECCENTRICITY, report_domain
from orbitkit.config import get_degeneracy_tolerance, get_dtype
from orbitkit.coordinates._types import (
    Anomaly,
    AnomalyKind,
    ClassicalElements,
    OrbitRegime,
)
from orbitkit.utils import from_radians, to_radians
from orbitkit.vectors import add, cross, dot, mult, norm, set3


def orbit_regime(a: ArrayLike, e: ArrayLike) -> Array:
    """Classify the orbit geometry of ``(a, e)``.

    Tests are exact and applied in order: ``e == 1 and a > 0`` is
    rectilinear elliptic, ``e == 1 and a < 0`` parabolic, ``e == 0``
    circular, ``e < 1`` elliptic, anything else hyperbolic.

    Args:
        a: Semi-major axis [km] (``-r_p`` for a parabola).
        e: Eccentricity.

    Returns:
        jax.Array: Integer array holding an :class:`OrbitRegime`.

    Examples:
        ```python
        from orbitkit.coordinates import OrbitRegime, orbit_regime
        orbit_regime(-7000.0, 1.0) == OrbitRegime.PARABOLIC
        ```
    """
    _float = get_dtype()
    a = jnp.asarray(a, dtype=_float)
    e = jnp.asarray(e, dtype=_float)
    regime = jnp.where(e < 1.0, OrbitRegime.ELLIPTIC, OrbitRegime.HYPERBOLIC)
    regime = jnp.where(e == 0.0, OrbitRegime.CIRCULAR, regime)
    regime = jnp.where((e == 1.0) & (a < 0.0), OrbitRegime.PARABOLIC, regime)
    regime = jnp.where((e == 1.0) & (a > 0.0), OrbitRegime.RECTILINEAR_ELLIPTIC, regime)
    return regime.astype(jnp.int32)


def state_koe_to_eci(
    mu: ArrayLike,
    elements: ClassicalElements,
    use_degrees: bool = False,
) -> tuple[Array, Array]:
    """Convert classical orbital elements to inertial position and velocity.

    For the rectilinear elliptic case (``e == 1``, ``a > 0``) the anomaly
    must be an eccentric anomaly.  The radius follows from
    ``r = a(1 - e cos E)`` and the speed from vis-viva; the 3-1-3 rotation
    collapses to a single direction, and the velocity points inward while
    ``sin E > 0``.

    All other cases require a true anomaly and use the semi-latus rectum
    ``p = a(1 - e^2)``, or ``p = 2 r_p`` for a parabola (``a = -r_p``),
    with ``r = p / (1 + e cos f)`` and the closed-form 3-1-3
    (Ω, i, ω + f) rotation of the perifocal position and velocity.

    An anomaly of the wrong kind for the regime, or a negative
    eccentricity, produces ``nan`` vectors and a logged diagnostic.
    Rectilinear hyperbolic element sets cannot be converted.

    Args:
        mu: Gravitational parameter of the central body [km^3/s^2].
        elements: Classical orbital elements.
        use_degrees: If ``True``, interpret angular elements as degrees.

    Returns:
        tuple: ``(r, v)`` inertial position [km] and velocity [km/s], each
        of shape ``(3,)``.

    Examples:
        ```python
        from orbitkit.constants import MU_EARTH
        from orbitkit.coordinates import ClassicalElements, state_koe_to_eci
        oe = ClassicalElements.from_true_anomaly(7000.0, 0.01, 0.9, 0.1, 0.2, 0.3)
        r, v = state_koe_to_eci(MU_EARTH, oe)
        ```
    """
    _float = get_dtype()
    mu = jnp.asarray(mu, dtype=_float)
    a = jnp.asarray(elements.a, dtype=_float)
    e = jnp.asarray(elements.e, dtype=_float)
    i = jnp.asarray(elements.i, dtype=_float)
    raan = jnp.asarray(elements.raan, dtype=_float)
    argp = jnp.asarray(elements.argp, dtype=_float)
    kind = jnp.asarray(elements.anom.kind, dtype=jnp.int32)
    anom = jnp.asarray(elements.anom.angle, dtype=_float)

    i = to_radians(i, use_degrees)
    raan = to_radians(raan, use_degrees)
    argp = to_radians(argp, use_degrees)
    anom = to_radians(anom, use_degrees)

    rectilinear = (e == 1.0) & (a > 0.0)
    parabolic = (e == 1.0) & (a < 0.0)

    expected_kind = jnp.where(rectilinear, AnomalyKind.ECCENTRIC, AnomalyKind.TRUE)
    valid = report_domain("state_koe_to_eci", ANOMALY_KIND, kind, kind == expected_kind)
    valid = valid & report_domain("state_koe_to_eci", NONNEGATIVE_ECCENTRICITY, e)

    cos_R = jnp.cos(raan)
    sin_R = jnp.sin(raan)
    cos_i = jnp.cos(i)
    sin_i = jnp.sin(i)
    cos_w = jnp.cos(argp)
    sin_w = jnp.sin(argp)

    # Rectilinear elliptic: anom is the eccentric anomaly
    ecc_anom = anom
    r_rect = a * (1.0 - e * jnp.cos(ecc_anom))
    v_rect = jnp.sqrt(2.0 * mu / r_rect - mu / a)
    ir = set3(
        cos_R * cos_w - sin_R * sin_w * cos_i,
        sin_R * cos_w + cos_R * sin_w * cos_i,
        sin_w * sin_i,
    )
    r_vec_rect = mult(r_rect, ir)
    v_vec_rect = mult(jnp.where(jnp.sin(ecc_anom) > 0.0, -v_rect, v_rect), ir)

    # Parabolic, elliptic and hyperbolic: anom is the true anomaly
    p = jnp.where(parabolic, -2.0 * a, a * (1.0 - e * e))
    r = p / (1.0 + e * jnp.cos(anom))
    theta = argp + anom
    h = jnp.sqrt(mu * p)
    cos_t = jnp.cos(theta)
    sin_t = jnp.sin(theta)

    r_vec = mult(
        r,
        set3(
            cos_R * cos_t - sin_R * sin_t * cos_i,
            sin_R * cos_t + cos_R * sin_t * cos_i,
            sin_t * sin_i,
        ),
    )
    v_vec = mult(
        -mu / h,
        set3(
            cos_R * (sin_t + e * sin_w) + sin_R * (cos_t + e * cos_w) * cos_i,
            sin_R * (sin_t + e * sin_w) - cos_R * (cos_t + e * cos_w) * cos_i,
            -(cos_t + e * cos_w) * sin_i,
        ),
    )

    r_out = jnp.where(rectilinear, r_vec_rect, r_vec)
    v_out = jnp.where(rectilinear, v_vec_rect, v_vec)
    return jnp.where(valid, r_out, jnp.nan), jnp.where(valid, v_out, jnp.nan)


def state_eci_to_koe(
    mu: ArrayLike,
    r_eci: ArrayLike,
    v_eci: ArrayLike,
    use_degrees: bool = False,
) -> ClassicalElements:
    """Convert inertial position and velocity to classical orbital elements.

    The eccentricity vector is ``(v x h - (mu/r) r) / mu`` and the
    semi-major axis follows from ``1/a = 2/r - v^2/mu``.  Degenerate
    geometry is detected with :func:`~orbitkit.config.get_degeneracy_tolerance`
    (``1e-12`` in double precision):

    - ``|1/a|`` below tolerance: parabola.  ``a`` is returned as
      ``-r_p = -h^2 / (2 mu)`` and ``e`` as exactly ``1``.
    - ``|h|`` below tolerance: rectilinear motion.  The orbit plane is
      undefined; the periapsis direction is the radial direction and the
      normal is the larger of ``i_r x z`` and ``i_r x y``, normalised.  The
      anomaly is the eccentric anomaly (``1/a > 0``) or hyperbolic anomaly
      (``1/a <= 0``), folded to ``2 pi - E`` when moving outward or
      ``2 pi - H`` when moving inward.
    - ``e`` below tolerance: circular orbit.  The periapsis direction is
      set to the current radial direction, so the true anomaly is ``0``
      and ``ω`` holds the argument of latitude.

    The orientation angles are ``Ω = atan2(i_h.x, -i_h.y)``,
    ``i = acos(i_h.z)`` and ``ω = atan2(i_e.z, i_p.z)``; none are wrapped.
    For circular and rectilinear orbits Ω, ω and the anomaly are
    conventions, not unique values.

    Args:
        mu: Gravitational parameter of the central body [km^3/s^2].
        r_eci: Inertial position [km], shape ``(3,)``.
        v_eci: Inertial velocity [km/s], shape ``(3,)``.
        use_degrees: If ``True``, return angular elements in degrees.

    Returns:
        ClassicalElements: Element set with a tagged anomaly.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitkit.constants import MU_EARTH
        from orbitkit.coordinates import state_eci_to_koe
        r = jnp.array([7000.0, 0.0, 0.0])
        v = jnp.array([0.0, 7.546, 0.0])
        oe = state_eci_to_koe(MU_EARTH, r, v)
        ```
    """
    _float = get_dtype()
    eps = get_degeneracy_tolerance()
    mu = jnp.asarray(mu, dtype=_float)
    r_vec = jnp.asarray(r_eci, dtype=_float)
    v_vec = jnp.asarray(v_eci, dtype=_float)

    r = norm(r_vec)
    ir = mult(1.0 / r, r_vec)

    # Angular momentum and (mu-scaled) eccentricity vector
    h_vec = cross(r_vec, v_vec)
    h = norm(h_vec)
    c_vec = add(cross(v_vec, h_vec), mult(-mu / r, r_vec))
    e = norm(c_vec) / mu

    # Semi-major axis, -r_p for a parabola
    ai = 2.0 / r - dot(v_vec, v_vec) / mu
    parabolic = ~(jnp.abs(ai) > eps)
    a = jnp.where(parabolic, -(h * h / mu) / 2.0, 1.0 / ai)
    e = jnp.where(parabolic, 1.0, e)

    # Rectilinear: the orbit plane is arbitrary, pick the better conditioned normal
    rectilinear = h < eps
    ie_rect = ir
    n_z = cross(ie_rect, set3(0.0, 0.0, 1.0))
    n_y = cross(ie_rect, set3(0.0, 1.0, 0.0))
    ih_rect = jnp.where(norm(n_z) > norm(n_y), n_z / norm(n_z), n_y / norm(n_y))
    ip_rect = cross(ih_rect, ie_rect)

    # General case; circular orbits measure from the current radial direction
    ih_gen = mult(1.0 / h, h_vec)
    circular = ~(jnp.abs(e) > eps)
    ie_gen = jnp.where(circular, ir, mult(1.0 / mu / e, c_vec))
    ip_gen = cross(ih_gen, ie_gen)

    ih = jnp.where(rectilinear, ih_rect, ih_gen)
    ie = jnp.where(rectilinear, ie_rect, ie_gen)
    ip = jnp.where(rectilinear, ip_rect, ip_gen)

    # 3-1-3 orientation angles
    raan = jnp.arctan2(ih[0], -ih[1])
    inc = jnp.arccos(jnp.clip(ih[2], -1.0, 1.0))
    argp = jnp.arctan2(ie[2], ip[2])

    # Rectilinear anomalies, folded by the direction of motion
    rv = dot(r_vec, v_vec)
    ecc_anom = jnp.arccos(1.0 - r * ai)
    ecc_anom = jnp.where(rv > 0.0, 2.0 * jnp.pi - ecc_anom, ecc_anom)
    hyp_anom = jnp.arccosh(1.0 - r * ai)
    hyp_anom = jnp.where(rv < 0.0, 2.0 * jnp.pi - hyp_anom, hyp_anom)

    nu = jnp.arctan2(dot(cross(ie, ir), ih), dot(ie, ir))

    elliptic = ai > 0.0
    kind = jnp.where(
        rectilinear,
        jnp.where(elliptic, AnomalyKind.ECCENTRIC, AnomalyKind.HYPERBOLIC),
        AnomalyKind.TRUE,
    ).astype(jnp.int32)
    anom = jnp.where(rectilinear, jnp.where(elliptic, ecc_anom, hyp_anom), nu)

    inc = from_radians(inc, use_degrees)
    raan = from_radians(raan, use_degrees)
    argp = from_radians(argp, use_degrees)
    anom = from_radians(anom, use_degrees)

    return ClassicalElements(a, e, inc, raan, argp, Anomaly(kind, anom))
