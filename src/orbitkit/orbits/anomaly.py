"""Anomaly conversions for elliptic and hyperbolic Kepler orbits.

Converts between the true, eccentric and mean anomaly of an elliptic
orbit (``0 <= e < 1``) and between the true, hyperbolic and mean
hyperbolic anomaly of a hyperbolic orbit (``e > 1``).  Both directions of
Kepler's equation are provided; the inverse is solved by Newton-Raphson
iteration implemented with ``jax.lax.while_loop``.

An eccentricity outside a function's domain is not an exception: the
function returns ``nan`` and logs a diagnostic.  See
:mod:`orbitkit.checked` for variants returning an explicit
:class:`~orbitkit.results.Result`.

All functions use JAX operations and are compatible with ``jax.jit`` and
``jax.vmap``.  Inputs are coerced to the configured float dtype (see
:func:`orbitkit.config.set_dtype`).
"""

from __future__ import annotations

from collections.abc import Callable

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit._diagnostics import (
    ELLIPTIC_ECCENTRICITY,
    HYPERBOLIC_ECCENTRICITY,
    report_domain,
    report_non_convergence,
)
from orbitkit.config import get_dtype
from orbitkit.orbits._types import KeplerSolution, KeplerSolverConfig
from orbitkit.utils import from_radians, to_radians


def _newton(
    correction: Callable[[Array], Array],
    x0: Array,
    config: KeplerSolverConfig,
) -> tuple[Array, Array, Array]:
    """Run ``x <- x - correction(x)`` until the correction is below tolerance.

    Works element-wise on an array of starting points: an element stops
    updating once its own correction is within ``config.tol``, and the
    loop ends when every element has converged or the iteration cap is
    reached.

    Returns:
        tuple: ``(x, last_delta, iterations)``, all shaped like *x0*.
    """
    tol = config.tol

    def cond(state):
        _, delta, _, step = state
        return jnp.any(jnp.abs(delta) > tol) & (step < config.max_iterations)

    def body(state):
        x, delta, count, step = state
        active = jnp.abs(delta) > tol
        d = correction(x)
        x = jnp.where(active, x - d, x)
        delta = jnp.where(active, d, delta)
        return x, delta, count + active.astype(jnp.int32), step + 1

    # Force the first iteration
    init_state = (
        x0,
        jnp.full_like(x0, 10.0 * tol),
        jnp.zeros(jnp.shape(x0), dtype=jnp.int32),
        jnp.int32(0),
    )
    x, delta, count, _ = jax.lax.while_loop(cond, body, init_state)
    return x, delta, count


# ──────────────────────────────────────────────
# Elliptic anomalies
# ──────────────────────────────────────────────


def anomaly_eccentric_to_true(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to true anomaly.

    Uses the half-angle form
    ``f = 2 atan2(sqrt(1 + e) sin(E/2), sqrt(1 - e) cos(E/2))``, which
    keeps the result on the same revolution as the input.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly. Units: *rad* or *deg*.  ``nan`` if *e* is out of range.

    Examples:
        ```python
        from orbitkit.orbits import anomaly_eccentric_to_true
        nu = anomaly_eccentric_to_true(90.0, 0.1, use_degrees=True)
        ```
    """
    _float = get_dtype()
    E = to_radians(jnp.asarray(anm_ecc, dtype=_float), use_degrees)
    e = jnp.asarray(e, dtype=_float)

    valid = report_domain("anomaly_eccentric_to_true", ELLIPTIC_ECCENTRICITY, e)
    nu = 2.0 * jnp.arctan2(
        jnp.sqrt(1.0 + e) * jnp.sin(E / 2.0), jnp.sqrt(1.0 - e) * jnp.cos(E / 2.0)
    )
    return from_radians(jnp.where(valid, nu, jnp.nan), use_degrees)


def anomaly_true_to_eccentric(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to eccentric anomaly.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly. Units: *rad* or *deg*.  ``nan`` if *e* is out
        of range.

    Examples:
        ```python
        from orbitkit.orbits import anomaly_true_to_eccentric
        E = anomaly_true_to_eccentric(90.0, 0.1, use_degrees=True)
        ```
    """
    _float = get_dtype()
    nu = to_radians(jnp.asarray(anm_true, dtype=_float), use_degrees)
    e = jnp.asarray(e, dtype=_float)

    valid = report_domain("anomaly_true_to_eccentric", ELLIPTIC_ECCENTRICITY, e)
    E = 2.0 * jnp.arctan2(
        jnp.sqrt(1.0 - e) * jnp.sin(nu / 2.0), jnp.sqrt(1.0 + e) * jnp.cos(nu / 2.0)
    )
    return from_radians(jnp.where(valid, E, jnp.nan), use_degrees)


def anomaly_eccentric_to_mean(anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert eccentric anomaly to mean anomaly.

    Applies Kepler's equation: ``M = E - e * sin(E)``.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*.  ``nan`` if *e* is out of range.

    References:
        O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
        Applications*, 2012. Eq. 2.65.
    """
    _float = get_dtype()
    E = to_radians(jnp.asarray(anm_ecc, dtype=_float), use_degrees)
    e = jnp.asarray(e, dtype=_float)

    valid = report_domain("anomaly_eccentric_to_mean", ELLIPTIC_ECCENTRICITY, e)
    M = E - e * jnp.sin(E)
    return from_radians(jnp.where(valid, M, jnp.nan), use_degrees)


def solve_kepler_elliptic(
    anm_mean: ArrayLike,
    e: ArrayLike,
    config: KeplerSolverConfig = KeplerSolverConfig(),
    use_degrees: bool = False,
) -> KeplerSolution:
    """Solve Kepler's equation ``M = E - e sin(E)`` for ``E``.

    Newton-Raphson iteration
    ``E <- E - (E - e sin(E) - M) / (1 - e cos(E))`` seeded at ``E = M``.
    The iteration stops when the correction falls to ``config.tol`` or
    after ``config.max_iterations`` steps.  Reaching the cap is not an
    error: the last estimate is returned with ``converged = False`` and a
    diagnostic is logged.

    The mean anomaly is not wrapped, so the result lies on the same
    revolution as *anm_mean*.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``.
        config: Solver tolerance and iteration cap.
        use_degrees: If ``True``, the mean and returned eccentric anomaly
            are in degrees.  ``last_delta`` is always in radians.

    Returns:
        KeplerSolution: Eccentric anomaly with convergence information.

    Examples:
        ```python
        from orbitkit.orbits import solve_kepler_elliptic
        sol = solve_kepler_elliptic(1.0, 0.9)
        sol.converged
        ```
    """
    _float = get_dtype()
    M = to_radians(jnp.asarray(anm_mean, dtype=_float), use_degrees)
    e = jnp.asarray(e, dtype=_float)

    valid = report_domain("anomaly_mean_to_eccentric", ELLIPTIC_ECCENTRICITY, e)
    # Iterate on a harmless eccentricity when the input is rejected
    e_it = jnp.where(valid, e, 0.0)
    M, e_it = jnp.broadcast_arrays(M, e_it)

    def correction(E):
        return (E - e_it * jnp.sin(E) - M) / (1.0 - e_it * jnp.cos(E))

    E, delta, count = _newton(correction, M, config)
    converged = ~(jnp.abs(delta) > config.tol)
    report_non_convergence("anomaly_mean_to_eccentric", M, e, converged | ~valid)

    return KeplerSolution(
        anomaly=from_radians(jnp.where(valid, E, jnp.nan), use_degrees),
        iterations=count,
        last_delta=delta,
        converged=converged & valid,
    )


def anomaly_mean_to_eccentric(anm_mean: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean anomaly to eccentric anomaly.

    Thin wrapper over :func:`solve_kepler_elliptic` returning only the
    anomaly.  A solve that hits the iteration cap is returned as if it had
    converged; use :func:`solve_kepler_elliptic` to inspect convergence.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly. Units: *rad* or *deg*

    Examples:
        ```python
        from orbitkit.orbits import anomaly_mean_to_eccentric
        E = anomaly_mean_to_eccentric(84.27, 0.1, use_degrees=True)
        ```
    """
    return solve_kepler_elliptic(anm_mean, e, use_degrees=use_degrees).anomaly


def anomaly_true_to_mean(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to mean anomaly.

    Composite conversion: true -> eccentric -> mean.
    """
    return anomaly_eccentric_to_mean(
        anomaly_true_to_eccentric(anm_true, e, use_degrees),
        e,
        use_degrees,
    )


def anomaly_mean_to_true(anm_mean: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean anomaly to true anomaly.

    Composite conversion: mean -> eccentric -> true.
    """
    return anomaly_eccentric_to_true(
        anomaly_mean_to_eccentric(anm_mean, e, use_degrees),
        e,
        use_degrees,
    )


# ──────────────────────────────────────────────
# Hyperbolic anomalies
# ──────────────────────────────────────────────


def anomaly_true_to_hyperbolic(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to hyperbolic anomaly.

    ``H = 2 atanh(sqrt((e - 1)/(e + 1)) tan(f/2))``.  A true anomaly
    beyond the asymptote of the hyperbola has no hyperbolic anomaly and
    yields ``nan``.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Hyperbolic anomaly. Units: *rad* or *deg*.  ``nan`` if *e* is out
        of range.
    """
    _float = get_dtype()
    nu = to_radians(jnp.asarray(anm_true, dtype=_float), use_degrees)
    e = jnp.asarray(e, dtype=_float)

    valid = report_domain("anomaly_true_to_hyperbolic", HYPERBOLIC_ECCENTRICITY, e)
    H = 2.0 * jnp.arctanh(jnp.sqrt((e - 1.0) / (e + 1.0)) * jnp.tan(nu / 2.0))
    return from_radians(jnp.where(valid, H, jnp.nan), use_degrees)


def anomaly_hyperbolic_to_true(anm_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert hyperbolic anomaly to true anomaly.

    ``f = 2 atan(sqrt((e + 1)/(e - 1)) tanh(H/2))``.

    Args:
        anm_hyp: Hyperbolic anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly. Units: *rad* or *deg*.  ``nan`` if *e* is out of range.
    """
    _float = get_dtype()
    H = to_radians(jnp.asarray(anm_hyp, dtype=_float), use_degrees)
    e = jnp.asarray(e, dtype=_float)

    valid = report_domain("anomaly_hyperbolic_to_true", HYPERBOLIC_ECCENTRICITY, e)
    nu = 2.0 * jnp.arctan(jnp.sqrt((e + 1.0) / (e - 1.0)) * jnp.tanh(H / 2.0))
    return from_radians(jnp.where(valid, nu, jnp.nan), use_degrees)


def anomaly_hyperbolic_to_mean(anm_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert hyperbolic anomaly to mean hyperbolic anomaly.

    Hyperbolic Kepler equation: ``N = e * sinh(H) - H``.

    Args:
        anm_hyp: Hyperbolic anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean hyperbolic anomaly. Units: *rad* or *deg*.  ``nan`` if *e* is
        out of range.
    """
    _float = get_dtype()
    H = to_radians(jnp.asarray(anm_hyp, dtype=_float), use_degrees)
    e = jnp.asarray(e, dtype=_float)

    valid = report_domain("anomaly_hyperbolic_to_mean", HYPERBOLIC_ECCENTRICITY, e)
    N = e * jnp.sinh(H) - H
    return from_radians(jnp.where(valid, N, jnp.nan), use_degrees)


def solve_kepler_hyperbolic(
    anm_mean_hyp: ArrayLike,
    e: ArrayLike,
    config: KeplerSolverConfig = KeplerSolverConfig(),
    use_degrees: bool = False,
) -> KeplerSolution:
    """Solve the hyperbolic Kepler equation ``N = e sinh(H) - H`` for ``H``.

    Same Newton-Raphson scheme as :func:`solve_kepler_elliptic`, with
    correction ``(e sinh(H) - H - N) / (e cosh(H) - 1)`` seeded at
    ``H = N``.

    Args:
        anm_mean_hyp: Mean hyperbolic anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``.
        config: Solver tolerance and iteration cap.
        use_degrees: If ``True``, the mean and returned hyperbolic anomaly
            are in degrees.  ``last_delta`` is always in radians.

    Returns:
        KeplerSolution: Hyperbolic anomaly with convergence information.
    """
    _float = get_dtype()
    N = to_radians(jnp.asarray(anm_mean_hyp, dtype=_float), use_degrees)
    e = jnp.asarray(e, dtype=_float)

    valid = report_domain("anomaly_mean_to_hyperbolic", HYPERBOLIC_ECCENTRICITY, e)
    e_it = jnp.where(valid, e, 2.0)
    N, e_it = jnp.broadcast_arrays(N, e_it)

    def correction(H):
        return (e_it * jnp.sinh(H) - H - N) / (e_it * jnp.cosh(H) - 1.0)

    H, delta, count = _newton(correction, N, config)
    converged = ~(jnp.abs(delta) > config.tol)
    report_non_convergence("anomaly_mean_to_hyperbolic", N, e, converged | ~valid)

    return KeplerSolution(
        anomaly=from_radians(jnp.where(valid, H, jnp.nan), use_degrees),
        iterations=count,
        last_delta=delta,
        converged=converged & valid,
    )


def anomaly_mean_to_hyperbolic(anm_mean_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean hyperbolic anomaly to hyperbolic anomaly.

    Thin wrapper over :func:`solve_kepler_hyperbolic` returning only the
    anomaly.

    Args:
        anm_mean_hyp: Mean hyperbolic anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Hyperbolic anomaly. Units: *rad* or *deg*
    """
    return solve_kepler_hyperbolic(anm_mean_hyp, e, use_degrees=use_degrees).anomaly


def anomaly_true_to_hyperbolic_mean(anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert true anomaly to mean hyperbolic anomaly.

    Composite conversion: true -> hyperbolic -> mean hyperbolic.
    """
    return anomaly_hyperbolic_to_mean(
        anomaly_true_to_hyperbolic(anm_true, e, use_degrees),
        e,
        use_degrees,
    )


def anomaly_hyperbolic_mean_to_true(anm_mean_hyp: ArrayLike, e: ArrayLike, use_degrees: bool = False) -> Array:
    """Convert mean hyperbolic anomaly to true anomaly.

    Composite conversion: mean hyperbolic -> hyperbolic -> true.
    """
    return anomaly_hyperbolic_to_true(
        anomaly_mean_to_hyperbolic(anm_mean_hyp, e, use_degrees),
        e,
        use_degrees,
    )
