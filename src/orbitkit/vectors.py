"""Three-component vector primitives.

The leaf layer shared by the element conversions and the perturbation
models.  Every function returns a fresh ``jax.Array``; inputs are never
modified, so an output can never alias one of its own inputs.

All functions are JAX-traceable and are also batched by ``jax.vmap``.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitkit.config import get_dtype


def set3(x: ArrayLike, y: ArrayLike, z: ArrayLike) -> Array:
    """Build a 3-vector from its components.

    Args:
        x: First component.
        y: Second component.
        z: Third component.

    Returns:
        Vector ``[x, y, z]``, shape ``(3,)``.
    """
    _float = get_dtype()
    return jnp.array([x, y, z], dtype=_float)


def equal(v: ArrayLike) -> Array:
    """Return a copy of *v*."""
    return jnp.array(v, dtype=get_dtype(), copy=True)


def norm(v: ArrayLike) -> Array:
    """Euclidean norm of *v*.  The zero vector has norm ``0``."""
    v = jnp.asarray(v, dtype=get_dtype())
    return jnp.sqrt(jnp.sum(v * v, axis=-1))


def dot(a: ArrayLike, b: ArrayLike) -> Array:
    """Scalar product of *a* and *b*."""
    _float = get_dtype()
    a = jnp.asarray(a, dtype=_float)
    b = jnp.asarray(b, dtype=_float)
    return jnp.sum(a * b, axis=-1)


def cross(a: ArrayLike, b: ArrayLike) -> Array:
    """Vector product ``a x b``."""
    _float = get_dtype()
    return jnp.cross(jnp.asarray(a, dtype=_float), jnp.asarray(b, dtype=_float))


def mult(s: ArrayLike, v: ArrayLike) -> Array:
    """Scale vector *v* by the scalar *s*."""
    _float = get_dtype()
    return jnp.asarray(s, dtype=_float) * jnp.asarray(v, dtype=_float)


def add(a: ArrayLike, b: ArrayLike) -> Array:
    """Component-wise sum ``a + b``."""
    _float = get_dtype()
    return jnp.asarray(a, dtype=_float) + jnp.asarray(b, dtype=_float)
