"""Module-wide floating-point precision and data-source configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout pluto99.  The default is ``jnp.float64``: the series arguments
``frequency * t`` reach tens of radians, and float32 loses roughly 1e-5 rad
there, which is an order of magnitude more than the Pluto99 error budget.
Importing this module therefore enables JAX's 64-bit mode.

Call ``set_dtype`` **before** any JIT compilation, just like JAX's own
``jax.config.update("jax_enable_x64", True)``.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.

The location of an external coefficient file is read from the
``PLUTO99_COEFFICIENTS`` environment variable; see
:func:`get_coefficients_path`.
"""

from __future__ import annotations

import os
from pathlib import Path

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float32, jnp.float64)

_ENV_VAR = "PLUTO99_COEFFICIENTS"

jax.config.update("jax_enable_x64", True)
_dtype = jnp.float64


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for pluto99.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is (re-)enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: Either ``jnp.float32`` or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_coefficients_path() -> Path | None:
    """Return the coefficient file configured through the environment.

    The path is taken from ``$PLUTO99_COEFFICIENTS``.  An unset or empty
    variable means "use the built-in tables".

    Returns:
        :class:`~pathlib.Path` to a JSON coefficient file, or ``None``.
    """
    env = os.environ.get(_ENV_VAR)
    if not env:
        return None
    return Path(env).expanduser()
