"""Argument domains and the diagnostic side channel of the kernels.

A :class:`Domain` pairs a JAX-traceable membership predicate with the
human-readable description used in log messages and in
:class:`~orbitkit.results.DomainError`.  Kernels call :func:`report_domain`
to obtain the validity mask; the diagnostic itself is emitted through
``jax.debug.callback`` so that it also fires under ``jax.jit`` and
``jax.vmap``.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import NamedTuple

import jax
import numpy as np
from jax import Array
from jax.typing import ArrayLike

logger = logging.getLogger(__name__)


class Domain(NamedTuple):
    """Valid range of a scalar argument.

    Attributes:
        parameter: Parameter name used in diagnostics.
        valid_range: Human-readable description of the range.
        contains: Traceable predicate returning a boolean mask.
    """

    parameter: str
    valid_range: str
    contains: Callable[[ArrayLike], Array]


ELLIPTIC_ECCENTRICITY = Domain("e", "0 <= e < 1", lambda e: (e >= 0.0) & (e < 1.0))
HYPERBOLIC_ECCENTRICITY = Domain("e", "1 < e", lambda e: e > 1.0)
NONNEGATIVE_ECCENTRICITY = Domain("e", "0 <= e", lambda e: e >= 0.0)
DRAG_ALTITUDE = Domain("alt", "0 < alt (km)", lambda alt: alt > 0.0)
ZONAL_DEGREE = Domain("degree", "2 <= degree <= 6", lambda n: (n >= 2) & (n <= 6))
DEBYE_ALTITUDE = Domain(
    "alt", "200 <= alt <= 35000 (km)", lambda alt: (alt >= 200.0) & (alt <= 35000.0)
)
ANOMALY_KIND = Domain(
    "anom.kind",
    "ECCENTRIC for rectilinear elliptic orbits, TRUE otherwise",
    lambda kind: kind == 0,
)


def _log_domain_violation(function: str, domain: Domain, value, valid) -> None:
    value = np.atleast_1d(np.asarray(value))
    valid = np.broadcast_to(np.atleast_1d(np.asarray(valid)), value.shape)
    for bad in value[~valid]:
        logger.warning(
            "%s() received %s = %g; the value of %s should be %s",
            function,
            domain.parameter,
            bad,
            domain.parameter,
            domain.valid_range,
        )


def _log_non_convergence(function: str, anomaly, e, converged) -> None:
    anomaly = np.atleast_1d(np.asarray(anomaly))
    e = np.broadcast_to(np.atleast_1d(np.asarray(e)), anomaly.shape)
    converged = np.broadcast_to(np.atleast_1d(np.asarray(converged)), anomaly.shape)
    for m, ecc in zip(anomaly[~converged], e[~converged]):
        logger.warning("iteration error in %s(%f, %f)", function, m, ecc)


def report_domain(
    function: str,
    domain: Domain,
    value: ArrayLike,
    valid: ArrayLike | None = None,
) -> Array:
    """Check *value* against *domain* and log a diagnostic when it is outside.

    Args:
        function: Name of the calling function, used in the message.
        domain: Domain to check against.
        value: Argument value (may be traced).
        valid: Precomputed validity mask.  Defaults to
            ``domain.contains(value)``.

    Returns:
        jax.Array: Boolean validity mask.
    """
    if valid is None:
        valid = domain.contains(value)
    jax.debug.callback(
        functools.partial(_log_domain_violation, function, domain), value, valid
    )
    return valid


def report_non_convergence(
    function: str, anomaly: ArrayLike, e: ArrayLike, converged: ArrayLike
) -> None:
    """Log a diagnostic for every solve that hit its iteration cap."""
    jax.debug.callback(
        functools.partial(_log_non_convergence, function), anomaly, e, converged
    )
