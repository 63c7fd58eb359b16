"""Degree/radian helpers for the ``use_degrees`` keyword.

Every angular function in orbitkit accepts ``use_degrees``.  The helpers
below select the conversion with ``jnp.where``, so the flag may be a
Python bool or a traced boolean.
"""

from jax import Array
import jax.numpy as jnp
from jax.typing import ArrayLike


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Interpret *angle* as degrees when ``use_degrees`` is set.

    Args:
        angle (ArrayLike): Angle in degrees or radians.
        use_degrees (bool): If ``True``, *angle* is in degrees.

    Returns:
        Angle in radians.

    Examples:
        ```python
        from orbitkit.utils import to_radians
        to_radians(180.0, True)  # pi
        ```
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Express a radian *angle* in degrees when ``use_degrees`` is set.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, return degrees.

    Returns:
        Angle in degrees or radians.
    """
    return jnp.where(use_degrees, jnp.rad2deg(angle), angle)
