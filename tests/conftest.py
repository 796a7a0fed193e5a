import jax.numpy as jnp
import pytest

from pluto99.coefficients import load_default_coefficients
from pluto99.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py switches the dtype on purpose; this keeps the rest of the
    suite independent of test ordering.
    """
    set_dtype(jnp.float64)


@pytest.fixture(autouse=True)
def _builtin_coefficients(monkeypatch):
    """Run every test against the built-in tables unless it opts out."""
    monkeypatch.delenv("PLUTO99_COEFFICIENTS", raising=False)
    load_default_coefficients.cache_clear()
    yield
    load_default_coefficients.cache_clear()
