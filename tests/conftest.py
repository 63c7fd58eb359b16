import jax.numpy as jnp
import pytest

from orbitkit.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py switches the dtype inside individual tests; this
    fixture makes sure no other test inherits a lower precision.
    """
    set_dtype(jnp.float64)
