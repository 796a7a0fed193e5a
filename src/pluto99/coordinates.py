"""Rectangular coordinate container.

:class:`RectangularCoordinate3D` is a :class:`~typing.NamedTuple`, which JAX
treats as a pytree automatically, so it can be returned from ``jax.jit``
compiled functions.  It is an immutable snapshot: once built it does not
follow later epoch changes of the engine that produced it.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from .config import get_dtype


class RectangularCoordinate3D(NamedTuple):
    """Heliocentric ecliptic rectangular coordinates (J2000).

    Attributes:
        x: x component. Units: AU
        y: y component. Units: AU
        z: z component. Units: AU
    """

    x: Array
    y: Array
    z: Array

    def to_array(self) -> Array:
        """Return the coordinates as a ``(3,)`` array in the configured dtype."""
        return jnp.array([self.x, self.y, self.z], dtype=get_dtype())

    def radius(self) -> Array:
        """Distance from the origin. Units: AU"""
        return jnp.linalg.norm(self.to_array())
