"""Configurable perturbation model factory.

Composes the individual perturbation models into a single
``accel(r, v, sun_vec) -> acceleration`` closure.  The factory captures
static configuration at Python trace time: toggles like ``config.drag``
become Python ``if`` branches that are resolved during ``jax.jit``
tracing.
"""

from __future__ import annotations

from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit.config import get_dtype
from orbitkit.orbit_dynamics.config import PerturbationConfig
from orbitkit.orbit_dynamics.drag import accel_drag
from orbitkit.orbit_dynamics.gravity import accel_zonal_harmonics
from orbitkit.orbit_dynamics.srp import accel_srp


def create_perturbation_model(
    config: PerturbationConfig | None = None,
) -> Callable[..., Array]:
    """Create a configurable perturbing-acceleration function.

    Args:
        config: Perturbation selection.  Defaults to
            ``PerturbationConfig.none()``.

    Returns:
        A callable ``accel(r, v, sun_vec=None) -> acceleration`` where:

        - *r*: inertial position [km].
        - *v*: inertial velocity [km/s].
        - *sun_vec*: Sun-to-planet vector [AU].  Required when SRP is
          enabled.
        - *acceleration*: summed perturbing acceleration [km/s^2].

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitkit.orbit_dynamics import PerturbationConfig, create_perturbation_model
        accel = create_perturbation_model(PerturbationConfig(zonal_degree=2))
        a = accel(jnp.array([7000.0, 0.0, 0.0]), jnp.array([0.0, 7.5, 0.0]))
        ```
    """
    if config is None:
        config = PerturbationConfig.none()

    _drag = config.drag
    _zonal_degree = config.zonal_degree
    _srp = config.srp

    _mass = config.spacecraft.mass
    _drag_area = config.spacecraft.drag_area
    _srp_area = config.spacecraft.srp_area
    _cd = config.spacecraft.cd
    _cr = config.spacecraft.cr

    def accel(r: ArrayLike, v: ArrayLike, sun_vec: ArrayLike | None = None) -> Array:
        """Summed perturbing acceleration [km/s^2]."""
        a = jnp.zeros(3, dtype=get_dtype())

        if _zonal_degree is not None:
            a = a + accel_zonal_harmonics(r, _zonal_degree)

        if _drag:
            a = a + accel_drag(_cd, _drag_area, _mass, r, v)

        if _srp:
            if sun_vec is None:
                raise ValueError("sun_vec is required when solar radiation pressure is enabled")
            a = a + accel_srp(_srp_area, _mass, sun_vec, cr=_cr)

        return a

    return accel
