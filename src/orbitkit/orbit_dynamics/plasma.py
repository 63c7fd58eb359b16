"""Debye length of the ambient space plasma.

Table lookup of the Debye length against altitude, from 200 km up to
geostationary altitude.  Values above 1000 km are highly speculative.

- 200 <= alt <= 2000 km: linear interpolation over 37 samples spaced
  every 50 km.
- 2000 < alt <= 30000 km: held at the 2000 km value.
- 30000 < alt <= 35000 km: linear ramp ``0.1 alt - 2999.7``.
- Anywhere else: ``nan`` and a logged diagnostic.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit._diagnostics import DEBYE_ALTITUDE, report_domain
from orbitkit.config import get_dtype

# Sample altitudes [km]
_DEBYE_ALT = jnp.arange(200.0, 2001.0, 50.0)

# Debye length at the sample altitudes [m]
_DEBYE_LENGTH = jnp.array([
    5.64e-03, 3.92e-03, 3.24e-03, 3.59e-03, 4.04e-03, 4.28e-03, 4.54e-03,
    5.30e-03, 6.55e-03, 7.30e-03, 8.31e-03, 8.38e-03, 8.45e-03, 9.84e-03,
    1.22e-02, 1.37e-02, 1.59e-02, 1.75e-02, 1.95e-02, 2.09e-02, 2.25e-02,
    2.25e-02, 2.25e-02, 2.47e-02, 2.76e-02, 2.76e-02, 2.76e-02, 2.76e-02,
    2.76e-02, 2.76e-02, 2.76e-02, 3.21e-02, 3.96e-02, 3.96e-02, 3.96e-02,
    3.96e-02, 3.96e-02,
])

_TABLE_TOP = 2000.0   # [km]
_FLAT_TOP = 30000.0   # [km]


def debye_length(alt: ArrayLike) -> Array:
    """Debye length at the given altitude.

    Args:
        alt: Altitude [km], ``200 <= alt <= 35000``.

    Returns:
        Debye length [m].  ``nan`` outside the valid range.

    Examples:
        ```python
        from orbitkit.orbit_dynamics import debye_length
        lam = debye_length(425.0)
        ```
    """
    _float = get_dtype()
    alt = jnp.asarray(alt, dtype=_float)
    xs = _DEBYE_ALT.astype(_float)
    ys = _DEBYE_LENGTH.astype(_float)

    valid = report_domain("debye_length", DEBYE_ALTITUDE, alt)

    # Flat Debye length between the table top and 30000 km
    h = jnp.where((alt > _TABLE_TOP) & (alt <= _FLAT_TOP), _TABLE_TOP, alt)

    # Left bracket index, clamped so that the table top interpolates to the last sample
    idx = jnp.searchsorted(xs, h, side="right") - 1
    idx = jnp.clip(idx, 0, xs.shape[0] - 2)
    frac = (h - xs[idx]) / (xs[idx + 1] - xs[idx])
    table = ys[idx] + frac * (ys[idx + 1] - ys[idx])

    ramp = 0.1 * alt - 2999.7
    length = jnp.where(alt > _FLAT_TOP, ramp, table)

    return jnp.where(valid, length, jnp.nan)
