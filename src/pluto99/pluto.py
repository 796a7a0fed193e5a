"""Heliocentric ecliptic position of Pluto from the Pluto99 series.

Two entry points are provided:

- :class:`Pluto99`, a stateful engine bound to one mutable observation
  epoch.  Every derived quantity (the normalized parameter ``X``, the
  centuries ``t`` and each axis) is computed at most once per epoch and
  memoized; assigning a new epoch invalidates all of them at once.
- :func:`pluto_position`, a pure function with no cache, traceable under
  ``jax.jit`` and ``jax.vmap``.

Positions are heliocentric, referred to the J2000 ecliptic, in AU.  With
the published Pluto99 tables the error against DE406 stays below
0.00005 AU over JDE 626150.5 .. 2811150.5 (-2998-04-23 .. 2984-07-26).
The error is largest when the Earth-Pluto distance is smallest, about
28.65 AU, where 0.00005 AU amounts to 0.37 arcseconds.

Outside the window the series extrapolates silently with degraded
accuracy, unless the engine is created with ``check_range=True``.

The engine is not thread-safe; guard shared instances externally.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array

from pluto99 import series
from pluto99.cache import EpochCache
from pluto99.coefficients import Pluto99Coefficients, load_default_coefficients
from pluto99.config import get_dtype
from pluto99.constants import (
    PLUTO99_JDE_END,
    PLUTO99_JDE_START,
    X_OFFSET,
    X_SLOPE,
    Y_OFFSET,
    Y_SLOPE,
    Z_OFFSET,
    Z_SLOPE,
)
from pluto99.coordinates import RectangularCoordinate3D
from pluto99.epoch import Epoch, TimeReference

logger = logging.getLogger(__name__)

# (offset, slope) per axis
_AXIS_CORRECTIONS = {
    "x": (X_OFFSET, X_SLOPE),
    "y": (Y_OFFSET, Y_SLOPE),
    "z": (Z_OFFSET, Z_SLOPE),
}


class Pluto99:
    """Pluto J2000 heliocentric ecliptic coordinates.

    Args:
        ob_time: Observation epoch; any :class:`~pluto99.epoch.TimeReference`.
        coefficients: Series tables.  Defaults to
            :func:`~pluto99.coefficients.load_default_coefficients`.
        check_range: Raise ``ValueError`` when a value is read at an epoch
            outside the Pluto99 validity window.  Default: ``False``.

    Raises:
        TypeError: If *ob_time* is not a time reference, or *coefficients*
            is not a :class:`~pluto99.coefficients.Pluto99Coefficients`.

    Examples:
        ```python
        from pluto99 import Epoch, Pluto99
        pluto = Pluto99(Epoch.from_jde(2446896.0))
        pluto.rc            # RectangularCoordinate3D(x=..., y=..., z=...)
        pluto.ob_time = Epoch(2015, 7, 14)
        pluto.x
        ```
    """

    def __init__(
        self,
        ob_time: TimeReference,
        coefficients: Pluto99Coefficients | None = None,
        *,
        check_range: bool = False,
    ) -> None:
        self._cache = EpochCache(ob_time, "ob_time")
        if coefficients is None:
            coefficients = load_default_coefficients()
        elif not isinstance(coefficients, Pluto99Coefficients):
            raise TypeError(
                f"The param coefficients should be Pluto99Coefficients, "
                f"got {type(coefficients).__name__}."
            )
        self._coefficients = coefficients
        self._check_range = check_range

    # Epoch control

    @property
    def ob_time(self) -> TimeReference:
        """The observation epoch all cached values belong to."""
        return self._cache.epoch

    @ob_time.setter
    def ob_time(self, epoch: TimeReference) -> None:
        self._cache.rebind(epoch, "ob_time")

    def get_epoch(self) -> TimeReference:
        return self.ob_time

    def set_epoch(self, epoch: TimeReference) -> None:
        """Adopt *epoch* and invalidate every cached value.

        Raises:
            TypeError: If *epoch* is not a time reference.
        """
        self.ob_time = epoch

    @property
    def coefficients(self) -> Pluto99Coefficients:
        return self._coefficients

    # Derived scalars

    def _jde(self) -> Array:
        def compute():
            jde = jnp.asarray(self.ob_time.jde(), dtype=get_dtype())
            outside = not (PLUTO99_JDE_START <= float(jde) <= PLUTO99_JDE_END)
            if outside:
                if self._check_range:
                    raise ValueError(
                        f"JDE {float(jde)} is outside the Pluto99 validity window "
                        f"[{PLUTO99_JDE_START}, {PLUTO99_JDE_END}]"
                    )
                logger.debug("JDE %s is outside the Pluto99 window; extrapolating", float(jde))
            return jde

        return self._cache.get_or_compute("jde", compute)

    def _X(self) -> Array:
        return self._cache.get_or_compute("X", lambda: series.normalize(self._jde()))

    def _t(self) -> Array:
        return self._cache.get_or_compute(
            "t", lambda: jnp.asarray(self.ob_time.jdec(), dtype=get_dtype())
        )

    def _axis(self, axis: str) -> Array:
        def compute():
            offset, slope = _AXIS_CORRECTIONS[axis]
            X = self._X()
            value = series.evaluate(getattr(self._coefficients, axis), X, self._t())
            return series.axis_value(value, offset, slope, X)

        return self._cache.get_or_compute(axis, compute)

    @property
    def x(self) -> Array:
        """Heliocentric ecliptic x coordinate (J2000). Units: AU"""
        return self._axis("x")

    @property
    def y(self) -> Array:
        """Heliocentric ecliptic y coordinate (J2000). Units: AU"""
        return self._axis("y")

    @property
    def z(self) -> Array:
        """Heliocentric ecliptic z coordinate (J2000). Units: AU"""
        return self._axis("z")

    @property
    def rc(self) -> RectangularCoordinate3D:
        """Snapshot of the heliocentric ecliptic rectangular coordinates."""
        return RectangularCoordinate3D(self.x, self.y, self.z)

    def __repr__(self):
        return f"Pluto99(ob_time={self.ob_time!r})"


def pluto_position(epc: Epoch, coefficients: Pluto99Coefficients | None = None) -> Array:
    """Heliocentric ecliptic position of Pluto (J2000), without caching.

    Traceable under ``jax.jit`` and ``jax.vmap`` when *epc* is an
    :class:`~pluto99.epoch.Epoch`.

    Args:
        epc: Epoch at which to compute the position.
        coefficients: Series tables.  Defaults to
            :func:`~pluto99.coefficients.load_default_coefficients`.

    Returns:
        Position vector ``[x, y, z]`` in AU. Shape ``(3,)``.

    Examples:
        ```python
        from pluto99 import Epoch
        from pluto99.pluto import pluto_position
        r = pluto_position(Epoch(1987, 4, 27))
        ```
    """
    if coefficients is None:
        coefficients = load_default_coefficients()

    X = series.normalize(epc.jde())
    t = epc.jdec()
    components = []
    for axis, (offset, slope) in _AXIS_CORRECTIONS.items():
        value = series.evaluate(getattr(coefficients, axis), X, t)
        components.append(series.axis_value(value, offset, slope, X))
    return jnp.stack(components)
