"""Type definitions for the Kepler equation solvers.

- :class:`KeplerSolverConfig`: tolerance and iteration cap of the
  Newton-Raphson iteration.
- :class:`KeplerSolution`: solver output, exposing whether the iteration
  cap was reached.

Both types are :class:`~typing.NamedTuple` instances, which JAX treats as
pytrees automatically, so they pass through ``jax.jit`` and ``jax.vmap``
unchanged.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array


class KeplerSolverConfig(NamedTuple):
    """Convergence settings for the Kepler equation solvers.

    Attributes:
        tol: Iteration stops once the magnitude of the Newton correction
            drops to or below this value [rad].
        max_iterations: Iteration cap.  When it is reached the current
            estimate is returned and the solution is flagged as not
            converged.
    """

    tol: float = 1e-13
    max_iterations: int = 200


class KeplerSolution(NamedTuple):
    """Result of solving Kepler's equation.

    Attributes:
        anomaly: Eccentric or hyperbolic anomaly.  ``nan`` if the
            eccentricity was outside the solver's domain.
        iterations: Number of Newton-Raphson steps taken, per element
            for array input.
        last_delta: Final Newton correction [rad].
        converged: ``False`` if the iteration cap was reached (or the
            eccentricity was invalid).
    """

    anomaly: Array
    iterations: Array
    last_delta: Array
    converged: Array
