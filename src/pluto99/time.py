"""Calendar and Julian Day conversions.

The conversions follow Meeus and cover both calendars: dates before
1582-10-15 are interpreted in the (proleptic) Julian calendar, later dates
in the Gregorian calendar.  Years use astronomical numbering, so 1 BC is
year 0 and 2999 BC is year -2998.  This covers the whole Pluto99 validity
window, which starts on -2998-04-23.

All functions accept scalars or arrays and are traceable under ``jax.jit``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import DAYS_PER_CENTURY, JD_GREGORIAN_START, JD_J2000, JD_MJD_OFFSET


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a calendar date to Julian Date.

    Args:
        year (ArrayLike): Astronomical year (year 0 is 1 BC).
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Julian Date.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 7.
    """
    _float = get_dtype()
    year = jnp.asarray(year, dtype=_float)
    month = jnp.asarray(month, dtype=_float)

    is_jan_or_feb = month <= 2
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    frac_day = (hour + (minute + second / 60.0) / 60.0) / 24.0

    jd_julian = (jnp.floor(365.25 * (year + 4716))
                 + jnp.floor(30.6001 * (month + 1))
                 + day + frac_day - 1524.5)

    centuries = jnp.floor(year / 100)
    gregorian_shift = 2 - centuries + jnp.floor(centuries / 4)
    jd_gregorian = jd_julian + gregorian_shift

    return jnp.where(jd_gregorian >= JD_GREGORIAN_START, jd_gregorian, jd_julian)


# Whole milliseconds per day
_MS_PER_DAY = 86400000

# Richards' calendar constants, common to both calendars
_R_J, _R_Y, _R_N, _R_M = 1401, 4716, 12, 2
_R_P, _R_S = 1461, 153
# Gregorian correction terms
_R_B, _R_C = 274277, -38


def day_number_to_date(jdn: ArrayLike) -> tuple[jax.Array, jax.Array, jax.Array]:
    """Calendar date of a Julian Day Number.

    The Julian Day Number of a civil date is the integer Julian Date at its
    noon.  Day numbers from 2299161 (1582-10-15) on map to Gregorian dates,
    earlier ones to Julian-calendar dates.

    Args:
        jdn (ArrayLike): Julian Day Number, non-negative integer.

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: int32 (year, month, day).

    References:

        1. E. G. Richards, *Mapping Time*, 1998, algorithm F.
    """
    jdn = jnp.asarray(jdn, dtype=jnp.int32)

    gregorian = (((4 * jdn + _R_B) // 146097) * 3) // 4 + _R_C
    f = jdn + _R_J + jnp.where(jdn >= 2299161, gregorian, 0)

    e = 4 * f + 3
    h = 5 * ((e % _R_P) // 4) + 2
    day = (h % _R_S) // 5 + 1
    month = (h // _R_S + _R_M) % _R_N + 1
    year = e // _R_P - _R_Y + (_R_N + _R_M - month) // _R_N
    return year, month, day


def split_milliseconds(ms: ArrayLike) -> tuple[jax.Array, jax.Array, jax.Array]:
    """Split whole milliseconds into (hour, minute, second).

    Args:
        ms (ArrayLike): Milliseconds since the start of the day.

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: int32 hour and minute, and
            second in the configured float dtype.
    """
    minutes, ms = jnp.divmod(jnp.asarray(ms, dtype=jnp.int32), 60000)
    hour, minute = jnp.divmod(minutes, 60)
    return hour, minute, get_dtype()(ms) / 1000.0


def jd_to_caldate(
    jd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Convert Julian Date to calendar date.

    Julian Dates before 2299160.5 give Julian-calendar dates.  Only
    non-negative Julian Dates are supported.  The time of day is rounded to
    whole milliseconds, carrying into the next day when it rounds up to
    midnight.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        tuple[jax.Array, ...]: (year, month, day, hour, minute, second) where
            year/month/day/hour/minute are int32 and second is the configured
            float dtype.
    """
    civil = jnp.asarray(jd, dtype=get_dtype()) + 0.5
    jdn = jnp.floor(civil)
    ms = jnp.round((civil - jdn) * _MS_PER_DAY).astype(jnp.int32)
    carry, ms = jnp.divmod(ms, _MS_PER_DAY)

    year, month, day = day_number_to_date(jdn.astype(jnp.int32) + carry)
    hour, minute, second = split_milliseconds(ms)
    return year, month, day, hour, minute, second


def jd_to_mjd(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to Modified Julian Date.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        Modified Julian Date.
    """
    return jd - JD_MJD_OFFSET


def mjd_to_jd(mjd: ArrayLike) -> jax.Array:
    """Convert Modified Julian Date to Julian Date.

    Args:
        mjd (ArrayLike): Modified Julian Date.

    Returns:
        Julian Date.
    """
    return mjd + JD_MJD_OFFSET


def jd_to_centuries(jd: ArrayLike) -> jax.Array:
    """Julian centuries elapsed since J2000.0.

    Args:
        jd (ArrayLike): Julian (Ephemeris) Date.

    Returns:
        Julian centuries from J2000.0, negative before it.
    """
    return (jnp.asarray(jd, dtype=get_dtype()) - JD_J2000) / DAYS_PER_CENTURY
