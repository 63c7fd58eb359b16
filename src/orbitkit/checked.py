"""Result-returning variants of the fallible orbitkit operations.

The kernels in :mod:`orbitkit.orbits`, :mod:`orbitkit.coordinates` and
:mod:`orbitkit.orbit_dynamics` signal invalid arguments with ``nan`` and a
log message, and return the last Newton iterate when a Kepler solver hits
its iteration cap.  The functions here run the same kernels eagerly on
scalar arguments and wrap the output in a :class:`~orbitkit.results.Result`
whose ``failure`` tells the caller what went wrong.

These wrappers inspect concrete values and cannot be traced by
``jax.jit``; use the kernels directly inside compiled code.
"""

from __future__ import annotations

from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit import orbits
from orbitkit._diagnostics import (
    ANOMALY_KIND,
    DEBYE_ALTITUDE,
    DRAG_ALTITUDE,
    ELLIPTIC_ECCENTRICITY,
    HYPERBOLIC_ECCENTRICITY,
    NONNEGATIVE_ECCENTRICITY,
    ZONAL_DEGREE,
    Domain,
)
from orbitkit.constants import J_EARTH, MU_EARTH, REQ_EARTH
from orbitkit.coordinates import AnomalyKind, ClassicalElements
from orbitkit.coordinates import state_koe_to_eci as _state_koe_to_eci
from orbitkit.orbit_dynamics import accel_drag as _accel_drag
from orbitkit.orbit_dynamics import accel_zonal_harmonics as _accel_zonal_harmonics
from orbitkit.orbit_dynamics import debye_length as _debye_length
from orbitkit.orbits import KeplerSolverConfig
from orbitkit.results import DomainError, NonConvergence, Result
from orbitkit.vectors import norm


def _check(function: str, domain: Domain, value: ArrayLike) -> DomainError | None:
    if bool(domain.contains(jnp.asarray(value))):
        return None
    return DomainError(function, domain.parameter, float(value), domain.valid_range)


def _checked_anomaly(
    kernel: Callable[..., Array], domain: Domain
) -> Callable[..., Result[Array]]:
    name = kernel.__name__

    def checked(angle: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Result[Array]:
        return Result(kernel(angle, e, use_degrees), _check(name, domain, e))

    checked.__name__ = name
    checked.__qualname__ = name
    checked.__doc__ = (
        f"Result-returning :func:`orbitkit.orbits.{name}`.\n\n"
        f"Fails with a :class:`~orbitkit.results.DomainError` unless {domain.valid_range}."
    )
    return checked


anomaly_eccentric_to_true = _checked_anomaly(orbits.anomaly_eccentric_to_true, ELLIPTIC_ECCENTRICITY)
anomaly_true_to_eccentric = _checked_anomaly(orbits.anomaly_true_to_eccentric, ELLIPTIC_ECCENTRICITY)
anomaly_eccentric_to_mean = _checked_anomaly(orbits.anomaly_eccentric_to_mean, ELLIPTIC_ECCENTRICITY)
anomaly_true_to_hyperbolic = _checked_anomaly(orbits.anomaly_true_to_hyperbolic, HYPERBOLIC_ECCENTRICITY)
anomaly_hyperbolic_to_true = _checked_anomaly(orbits.anomaly_hyperbolic_to_true, HYPERBOLIC_ECCENTRICITY)
anomaly_hyperbolic_to_mean = _checked_anomaly(orbits.anomaly_hyperbolic_to_mean, HYPERBOLIC_ECCENTRICITY)


def anomaly_mean_to_eccentric(
    anm_mean: ArrayLike,
    e: ArrayLike,
    config: KeplerSolverConfig = KeplerSolverConfig(),
    use_degrees: bool = False,
) -> Result[Array]:
    """Solve Kepler's equation, reporting domain errors and non-convergence.

    Returns:
        Result: Eccentric anomaly.  Fails with a
        :class:`~orbitkit.results.DomainError` unless ``0 <= e < 1``, or
        with a :class:`~orbitkit.results.NonConvergence` (carrying the
        last estimate) when the iteration cap was reached.

    Examples:
        ```python
        from orbitkit import checked
        from orbitkit.orbits import KeplerSolverConfig
        res = checked.anomaly_mean_to_eccentric(1.0, 0.9, KeplerSolverConfig(max_iterations=2))
        res.failure.iterations
        ```
    """
    return _solve("anomaly_mean_to_eccentric", orbits.solve_kepler_elliptic,
                  ELLIPTIC_ECCENTRICITY, anm_mean, e, config, use_degrees)


def anomaly_mean_to_hyperbolic(
    anm_mean_hyp: ArrayLike,
    e: ArrayLike,
    config: KeplerSolverConfig = KeplerSolverConfig(),
    use_degrees: bool = False,
) -> Result[Array]:
    """Solve the hyperbolic Kepler equation, reporting failures.

    Returns:
        Result: Hyperbolic anomaly.  Fails with a
        :class:`~orbitkit.results.DomainError` unless ``e > 1``, or with a
        :class:`~orbitkit.results.NonConvergence` when the iteration cap
        was reached.
    """
    return _solve("anomaly_mean_to_hyperbolic", orbits.solve_kepler_hyperbolic,
                  HYPERBOLIC_ECCENTRICITY, anm_mean_hyp, e, config, use_degrees)


def _solve(function, solver, domain, anomaly, e, config, use_degrees) -> Result[Array]:
    solution = solver(anomaly, e, config, use_degrees)
    failure = _check(function, domain, e)
    if failure is None and not bool(solution.converged):
        failure = NonConvergence(function, int(solution.iterations), float(jnp.abs(solution.last_delta)))
    return Result(solution.anomaly, failure)


def state_koe_to_eci(
    mu: ArrayLike,
    elements: ClassicalElements,
    use_degrees: bool = False,
) -> Result[tuple[Array, Array]]:
    """Result-returning :func:`orbitkit.coordinates.state_koe_to_eci`.

    Fails with a :class:`~orbitkit.results.DomainError` for a negative
    eccentricity or an anomaly whose kind does not match the orbit
    regime (an eccentric anomaly is required when ``e == 1`` and
    ``a > 0``, a true anomaly otherwise).
    """
    function = "state_koe_to_eci"
    state = _state_koe_to_eci(mu, elements, use_degrees)

    failure = _check(function, NONNEGATIVE_ECCENTRICITY, elements.e)
    if failure is None:
        rectilinear = float(elements.e) == 1.0 and float(elements.a) > 0.0
        expected = AnomalyKind.ECCENTRIC if rectilinear else AnomalyKind.TRUE
        kind = int(elements.anom.kind)
        if kind != expected:
            failure = DomainError(function, ANOMALY_KIND.parameter, float(kind), ANOMALY_KIND.valid_range)
    return Result(state, failure)


def accel_drag(
    cd: float,
    area: float,
    mass: float,
    r_eci: ArrayLike,
    v_eci: ArrayLike,
    r_body: float = REQ_EARTH,
) -> Result[Array]:
    """Result-returning :func:`orbitkit.orbit_dynamics.accel_drag`.

    Fails with a :class:`~orbitkit.results.DomainError` when the position
    is at or below the surface of the central body.
    """
    accel = _accel_drag(cd, area, mass, r_eci, v_eci, r_body)
    alt = norm(jnp.asarray(r_eci)[:3]) - r_body
    return Result(accel, _check("accel_drag", DRAG_ALTITUDE, alt))


def accel_zonal_harmonics(
    r_eci: ArrayLike,
    degree: int,
    mu: float = MU_EARTH,
    req: float = REQ_EARTH,
    coefficients=J_EARTH,
) -> Result[Array]:
    """Result-returning :func:`orbitkit.orbit_dynamics.accel_zonal_harmonics`.

    Fails with a :class:`~orbitkit.results.DomainError` unless
    ``2 <= degree <= 6``.
    """
    accel = _accel_zonal_harmonics(r_eci, degree, mu, req, coefficients)
    return Result(accel, _check("accel_zonal_harmonics", ZONAL_DEGREE, degree))


def debye_length(alt: ArrayLike) -> Result[Array]:
    """Result-returning :func:`orbitkit.orbit_dynamics.debye_length`.

    Fails with a :class:`~orbitkit.results.DomainError` unless
    ``200 <= alt <= 35000`` km.
    """
    return Result(_debye_length(alt), _check("debye_length", DEBYE_ALTITUDE, alt))


__all__ = [
    "anomaly_eccentric_to_true",
    "anomaly_true_to_eccentric",
    "anomaly_eccentric_to_mean",
    "anomaly_mean_to_eccentric",
    "anomaly_true_to_hyperbolic",
    "anomaly_hyperbolic_to_true",
    "anomaly_hyperbolic_to_mean",
    "anomaly_mean_to_hyperbolic",
    "state_koe_to_eci",
    "accel_drag",
    "accel_zonal_harmonics",
    "debye_length",
]
