"""The epoch module provides the time reference consumed by the Pluto99 engine.

Two things live here:

- :class:`TimeReference`, the capability every time reference must offer:
  a Julian Ephemeris Day (``jde()``) and Julian centuries since J2000
  (``jdec()``).  The engine only ever talks to this protocol, so any object
  with those two methods can drive it.
- :class:`Epoch`, the concrete time reference shipped with pluto99.  It
  represents an instant in dynamical time (TT) as an integer Julian Day
  number plus a fraction of a day, which keeps sub-millisecond resolution
  across the whole six-millennium Pluto99 window.

The Epoch class is registered as a JAX pytree, making it compatible with
``jax.jit`` and ``jax.vmap``.
"""

from __future__ import annotations

import math
import re
from typing import Any, Protocol, runtime_checkable

import jax
import jax.numpy as jnp

from .config import get_dtype
from .constants import DAYS_PER_CENTURY, JD_J2000, JD_MJD_OFFSET, SECONDS_PER_DAY
from .time import caldate_to_jd, day_number_to_date, split_milliseconds

# Two epochs closer than this are equal (1 microsecond)
_EQ_TOL_DAYS = 1e-6 / SECONDS_PER_DAY

# Valid ISO 8601 epoch string patterns, negative years allowed
_EPOCH_PATTERNS = [
    # YYYY-MM-DD
    re.compile(r'^(-?\d{4,})-(\d{2})-(\d{2})$'),
    # YYYY-MM-DDTHH:MM:SSZ
    re.compile(r'^(-?\d{4,})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})Z$'),
    # YYYY-MM-DDTHH:MM:SS.fffZ
    re.compile(r'^(-?\d{4,})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d+)Z$'),
]


@runtime_checkable
class TimeReference(Protocol):
    """Protocol for objects that can serve as the engine's current epoch."""

    def jde(self) -> Any: ...

    def jdec(self) -> Any: ...


def is_time_reference(obj: Any) -> bool:
    """Return ``True`` if *obj* exposes callable ``jde()`` and ``jdec()``."""
    # isinstance on a runtime Protocol only checks that the attributes exist
    return (obj is not None
            and isinstance(obj, TimeReference)
            and callable(obj.jde)
            and callable(obj.jdec))


def validate_time_reference(obj: Any, name: str = "epoch") -> TimeReference:
    """Check that *obj* satisfies the :class:`TimeReference` protocol.

    Args:
        obj: Candidate time reference.
        name: Argument name used in the error message.

    Returns:
        *obj*, unchanged.

    Raises:
        TypeError: If *obj* lacks ``jde()`` or ``jdec()``.
    """
    if not is_time_reference(obj):
        raise TypeError(
            f"The param {name} should provide jde() and jdec(), "
            f"got {type(obj).__name__}."
        )
    return obj


class Epoch:
    """A single instant of dynamical time (TT).

    The internal representation uses two private components:
        ``_jd`` (jnp.int32), the integer part of the Julian Ephemeris Day,
        and ``_frac`` (configured float dtype), the fraction of a day in
        ``[0, 1)``.

    Constructors:
        Epoch(2000, 1, 1)
        Epoch(2000, 1, 1, 12, 0, 0.0)
        Epoch("2000-01-01T12:00:00Z")
        Epoch("-2998-04-23")
        Epoch(other_epoch)
        Epoch.from_jde(2451545.0)
    """

    __slots__ = ('_jd', '_frac')

    def __init__(self, *args: int | float | str | Epoch) -> None:
        """Initialize Epoch. Supports multiple constructor forms.

        Args:
            *args: Either (year, month, day[, hour, minute, second]),
                a string in ISO 8601 format, or another Epoch instance.

        Raises:
            ValueError: If the arguments match none of the constructor forms.
        """
        self._jd = jnp.int32(0)
        self._frac = get_dtype()(0.0)

        if len(args) == 1:
            if isinstance(args[0], str):
                self._init_string(args[0])
            elif isinstance(args[0], Epoch):
                self._jd = args[0]._jd
                self._frac = args[0]._frac
            else:
                raise ValueError(f"Cannot construct Epoch from {type(args[0])}")
        elif 3 <= len(args) <= 6:
            self._init_date(*args)
        else:
            raise ValueError(
                "Epoch requires date components (3-6 args), a string, or an Epoch"
            )

    @classmethod
    def from_jde(cls, jde: float) -> Epoch:
        """Create an Epoch from a Julian Ephemeris Day.

        Args:
            jde (float): Julian Ephemeris Day.

        Returns:
            Epoch: New Epoch instance.
        """
        jde = float(jde)
        jd_int = math.floor(jde)
        return cls._from_internal(jnp.int32(jd_int), get_dtype()(jde - jd_int))

    @classmethod
    def _from_internal(cls, jd, frac):
        """Create an Epoch from raw JAX arrays without Python-side processing.

        Used by pytree unflatten and arithmetic operators. The caller must
        ensure *frac* lies in ``[0, 1)``.
        """
        obj = object.__new__(cls)
        obj._jd = jd
        obj._frac = frac
        return obj

    def _init_date(self, year, month, day, hour=0, minute=0, second=0.0):
        jd_full = float(caldate_to_jd(year, month, day))
        jd_int = math.floor(jd_full)
        frac = (jd_full - jd_int
                + (hour * 3600.0 + minute * 60.0 + second) / SECONDS_PER_DAY)

        day_offset = math.floor(frac)
        self._jd = jnp.int32(jd_int + day_offset)
        self._frac = get_dtype()(frac - day_offset)

    def _init_string(self, string):
        """Initialize from an ISO 8601 string.

        Supported formats:
            - ``YYYY-MM-DD``
            - ``YYYY-MM-DDTHH:MM:SSZ``
            - ``YYYY-MM-DDTHH:MM:SS.fffZ``

        The year may be negative and longer than four digits.
        """
        for pattern in _EPOCH_PATTERNS:
            m = pattern.match(string)
            if m:
                groups = m.groups()
                year, month, day = int(groups[0]), int(groups[1]), int(groups[2])

                hour = 0
                minute = 0
                second = 0.0
                if len(groups) >= 6:
                    hour = int(groups[3])
                    minute = int(groups[4])
                    second = float(groups[5])
                if len(groups) == 7:
                    second += float(f"0.{groups[6]}")

                self._init_date(year, month, day, hour, minute, second)
                return

        raise ValueError(
            f'Invalid Epoch string: "{string}" is not ISO 8601 compliant'
        )

    # Time reference capability

    def jde(self) -> jax.Array:
        """Return the Julian Ephemeris Day.

        Returns:
            Julian Ephemeris Day in the configured float dtype.
        """
        _float = get_dtype()
        return _float(self._jd) + _float(self._frac)

    def jdec(self) -> jax.Array:
        """Return Julian centuries since J2000.0.

        The integer day difference is taken before converting to float, so
        no precision is lost to the large Julian Day magnitude.

        Returns:
            Julian centuries from J2000.0 in the configured float dtype.
        """
        _float = get_dtype()
        days_from_j2000 = _float(self._jd - jnp.int32(JD_J2000))
        return (days_from_j2000 + _float(self._frac)) / _float(DAYS_PER_CENTURY)

    def mjd(self) -> jax.Array:
        """Return the Modified Julian Date (TT)."""
        return self.jde() - get_dtype()(JD_MJD_OFFSET)

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Return the calendar date components.

        Not traceable under ``jax.jit``; call it on concrete epochs only.

        Returns:
            tuple: (year, month, day, hour, minute, second) where second
                includes the fractional part, rounded to whole milliseconds.
        """
        # JD days start at noon, so civil time runs half a day ahead.
        civil_ms = round(float(self._frac) * SECONDS_PER_DAY * 1000.0) + 43200000
        day_offset, civil_ms = divmod(civil_ms, 86400000)

        year, month, day = day_number_to_date(int(self._jd) + day_offset)
        hour, minute, second = split_milliseconds(civil_ms)

        return int(year), int(month), int(day), int(hour), int(minute), float(second)

    # Arithmetic operators, offsets in days

    def __add__(self, days: float) -> Epoch:
        """Return a new Epoch advanced by *days*.

        Args:
            days (float): Days to add, may be negative or fractional.

        Returns:
            Epoch: New Epoch.
        """
        _float = get_dtype()
        frac = self._frac + _float(days)
        day_offset = jnp.floor(frac)
        return Epoch._from_internal(
            self._jd + day_offset.astype(jnp.int32), frac - day_offset
        )

    def __sub__(self, other: Epoch | float) -> Epoch | jax.Array:
        """Subtract days or compute the difference between Epochs.

        Args:
            other: If Epoch, returns the time difference in days.
                If numeric, returns a new Epoch moved back by that many days.

        Returns:
            Time difference in days, or new Epoch.
        """
        if isinstance(other, Epoch):
            _float = get_dtype()
            return _float(self._jd - other._jd) + (self._frac - other._frac)
        return self.__add__(-other)

    # Comparison operators

    def __eq__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return jnp.abs(self - other) < _EQ_TOL_DAYS

    def __ne__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return ~self.__eq__(other)

    def __lt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self - other) < -_EQ_TOL_DAYS

    def __le__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.__lt__(other) | self.__eq__(other)

    def __gt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return (self - other) > _EQ_TOL_DAYS

    def __ge__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.__gt__(other) | self.__eq__(other)

    # String representations

    def __str__(self):
        year, month, day, hour, minute, second = self.caldate()
        return (f'{year:04d}-{month:02d}-{day:02d}T'
                f'{hour:02d}:{minute:02d}:{second:06.3f}Z')

    def __repr__(self):
        return f'Epoch(_jd={int(self._jd)}, _frac={float(self._frac)})'

    def __hash__(self):
        return hash((int(self._jd), round(float(self._frac) * SECONDS_PER_DAY, 6)))


# Register Epoch as a JAX pytree so it can be used with jit, vmap, etc.
jax.tree_util.register_pytree_node(
    Epoch,
    lambda e: ((e._jd, e._frac), None),
    lambda _, children: Epoch._from_internal(*children),
)
