"""Element-set types for the Keplerian state conversions.

- :class:`AnomalyKind` / :class:`Anomaly`: a tagged anomaly angle.  The
  tag says whether the angle is a true anomaly (the normal case) or the
  eccentric / hyperbolic anomaly used for rectilinear motion, where the
  true anomaly is undefined.
- :class:`ClassicalElements`: the six classical orbital elements.
- :class:`OrbitRegime`: the orbit geometries distinguished by the
  conversions.

:class:`Anomaly` and :class:`ClassicalElements` are
:class:`~typing.NamedTuple` instances and therefore JAX pytrees.  The
anomaly tag is stored as an integer array so that
:func:`~orbitkit.coordinates.state_eci_to_koe` stays traceable.
"""

from __future__ import annotations

import enum
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit.config import get_dtype


class AnomalyKind(enum.IntEnum):
    """Which anomaly an :class:`Anomaly` angle holds."""

    TRUE = 0
    ECCENTRIC = 1
    HYPERBOLIC = 2


class OrbitRegime(enum.IntEnum):
    """Orbit geometry as classified by :func:`~orbitkit.coordinates.orbit_regime`."""

    CIRCULAR = 0
    ELLIPTIC = 1
    RECTILINEAR_ELLIPTIC = 2
    PARABOLIC = 3
    HYPERBOLIC = 4


class Anomaly(NamedTuple):
    """Anomaly angle tagged with its kind.

    Attributes:
        kind: Integer array holding an :class:`AnomalyKind`.
        angle: Anomaly angle. Units: *rad* (or *deg* when the element set
            is used with ``use_degrees=True``).
    """

    kind: Array
    angle: Array

    @classmethod
    def from_true(cls, angle: ArrayLike) -> Anomaly:
        """True anomaly."""
        return cls(jnp.asarray(AnomalyKind.TRUE, dtype=jnp.int32), jnp.asarray(angle, dtype=get_dtype()))

    @classmethod
    def from_eccentric(cls, angle: ArrayLike) -> Anomaly:
        """Eccentric anomaly of a rectilinear elliptic orbit."""
        return cls(jnp.asarray(AnomalyKind.ECCENTRIC, dtype=jnp.int32), jnp.asarray(angle, dtype=get_dtype()))

    @classmethod
    def from_hyperbolic(cls, angle: ArrayLike) -> Anomaly:
        """Hyperbolic anomaly of a rectilinear hyperbolic orbit."""
        return cls(jnp.asarray(AnomalyKind.HYPERBOLIC, dtype=jnp.int32), jnp.asarray(angle, dtype=get_dtype()))


class ClassicalElements(NamedTuple):
    """Classical orbital elements.

    Attributes:
        a: Semi-major axis [km].  For a parabola, where the semi-major axis
            is undefined, the negative periapsis radius ``-r_p`` is stored
            instead; ``a < 0`` together with ``e == 1`` identifies the
            parabolic case.
        e: Eccentricity, ``e >= 0``.
        i: Inclination [rad].
        raan: Right ascension of the ascending node, Ω [rad].
        argp: Argument of periapsis, ω [rad].
        anom: Tagged anomaly.
    """

    a: Array
    e: Array
    i: Array
    raan: Array
    argp: Array
    anom: Anomaly

    @classmethod
    def from_true_anomaly(
        cls,
        a: ArrayLike,
        e: ArrayLike,
        i: ArrayLike,
        raan: ArrayLike,
        argp: ArrayLike,
        nu: ArrayLike,
    ) -> ClassicalElements:
        """Build an element set whose anomaly is a true anomaly.

        Examples:
            ```python
            from orbitkit.coordinates import ClassicalElements
            oe = ClassicalElements.from_true_anomaly(7000.0, 0.01, 0.9, 0.1, 0.2, 0.3)
            ```
        """
        _float = get_dtype()
        return cls(
            jnp.asarray(a, dtype=_float),
            jnp.asarray(e, dtype=_float),
            jnp.asarray(i, dtype=_float),
            jnp.asarray(raan, dtype=_float),
            jnp.asarray(argp, dtype=_float),
            Anomaly.from_true(nu),
        )
