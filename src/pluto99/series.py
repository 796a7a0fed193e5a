"""Pluto99 series evaluation.

Each coordinate of Pluto is reconstructed from three trigonometric series,
weighted by the powers of a normalized time parameter ``X``:

    S_i = sum_k A_k * sin(w_k * t + p_k)        over degree table i
    value = S_0 + S_1 * X + S_2 * X**2

where *t* is Julian centuries since J2000 and ``X`` maps the validity
window JDE 626150.5 .. 2811150.5 linearly onto ``[-1, 1]``.  Letting the
series amplitudes drift with ``X`` avoids a single very long series over
six millennia.  A fixed per-axis linear correction (:func:`axis_value`)
then restores the residual drift the trigonometric fit leaves out.

Nothing here validates the epoch range: arguments outside the window
extrapolate with degraded accuracy, and NaN or Inf inputs propagate.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import PLUTO99_JDE_END, PLUTO99_JDE_SPAN, PLUTO99_JDE_START

#: Number of degree tables per axis (constant, linear, quadratic in X)
SERIES_DEGREES = 3


def normalize(jde: ArrayLike) -> jax.Array:
    """Map a Julian Ephemeris Day onto the Pluto99 interpolation parameter.

    ``X = -1 + 2 * (jde - 626150.5) / 2185000``, so the window endpoints
    map exactly onto -1 and 1.

    Args:
        jde: Julian Ephemeris Day, scalar or array.

    Returns:
        Normalized parameter ``X``, nominally in ``[-1, 1]``.

    Examples:
        ```python
        from pluto99.series import normalize
        normalize(626150.5)   # -1.0
        normalize(2811150.5)  #  1.0
        ```
    """
    jde = jnp.asarray(jde, dtype=get_dtype())
    return -1.0 + 2.0 * (jde - PLUTO99_JDE_START) / PLUTO99_JDE_SPAN


def in_validity_window(jde: ArrayLike) -> jax.Array:
    """Return whether *jde* lies within JDE 626150.5 .. 2811150.5 (inclusive)."""
    jde = jnp.asarray(jde, dtype=get_dtype())
    return (jde >= PLUTO99_JDE_START) & (jde <= PLUTO99_JDE_END)


def _check_table(table) -> None:
    # Stacked (degrees, n, 3) arrays
    if hasattr(table, "ndim") and hasattr(table, "shape"):
        if table.ndim == 3 and table.shape[-1] == 3:
            return
        raise TypeError(
            f"The param table should be a sequence of degree tables or an array "
            f"of shape (degrees, n, 3), got shape {tuple(table.shape)}."
        )
    if (not isinstance(table, Sequence)
            or isinstance(table, (str, bytes))
            or isinstance(table, Mapping)):
        raise TypeError(
            f"The param table should be a sequence of degree tables, "
            f"got {type(table).__name__}."
        )


def _degree_sum(terms, t: jax.Array) -> jax.Array:
    """Sum ``A * sin(w * t + p)`` over one degree table."""
    _float = get_dtype()
    terms = jnp.asarray(terms, dtype=_float)
    if terms.size == 0:
        return jnp.zeros_like(t)
    terms = terms.reshape(-1, 3)
    amplitude, frequency, phase = terms[:, 0], terms[:, 1], terms[:, 2]
    return jnp.sum(amplitude * jnp.sin(frequency * t[..., None] + phase), axis=-1)


def evaluate(table: Sequence, X: ArrayLike, t: ArrayLike) -> jax.Array:
    """Evaluate one Pluto99 coordinate series.

    Args:
        table: Ordered sequence of degree tables.  Table *i* is weighted by
            ``X**i``; each table is a sequence (or ``(n, 3)`` array) of
            ``(amplitude, frequency, phase)`` terms.  A stacked array of shape
            ``(degrees, n, 3)`` is accepted too.  Missing trailing degrees
            contribute nothing.
        X: Normalized time parameter, see :func:`normalize`.
        t: Julian centuries since J2000. Units: cy

    Returns:
        ``S_0 + S_1 * X + S_2 * X**2``. Units: AU

    Raises:
        TypeError: If *table* is neither an ordered sequence nor a
            ``(degrees, n, 3)`` array.
        ValueError: If *table* holds more than three degree tables.
    """
    _check_table(table)
    if len(table) > SERIES_DEGREES:
        raise ValueError(
            f"A series holds at most {SERIES_DEGREES} degree tables, got {len(table)}."
        )

    _float = get_dtype()
    X = jnp.asarray(X, dtype=_float)
    t = jnp.asarray(t, dtype=_float)

    weights = (jnp.ones_like(X), X, X * X)
    result = jnp.zeros(jnp.broadcast_shapes(X.shape, t.shape), dtype=_float)
    for degree, terms in enumerate(table):
        result = result + _degree_sum(terms, t) * weights[degree]
    return result


def axis_value(series_result: ArrayLike, offset: float, slope: float, X: ArrayLike) -> jax.Array:
    """Apply the fixed linear correction of one axis.

    Args:
        series_result: Output of :func:`evaluate`. Units: AU
        offset: Axis offset. Units: AU
        slope: Axis slope per unit of ``X``. Units: AU
        X: Normalized time parameter.

    Returns:
        ``series_result + offset + slope * X``. Units: AU
    """
    return series_result + offset + slope * X
