"""Pluto99 coefficient tables.

A coefficient set holds one :data:`SeriesTable` per ecliptic axis.  A
series table is a tuple of exactly three degree tables (weighted by 1, X
and X**2), and each degree table is an ``(n, 3)`` array of
``(amplitude, frequency, phase)`` terms.  Term counts vary per axis and
degree; an empty degree table is a ``(0, 3)`` array.

Coefficient sets are immutable process-wide data and can be shared by any
number of engines.  Sources:

- :func:`load_coefficients_from_file`: a JSON document holding the published
  Pluto99 tables, ``{"x": [deg0, deg1, deg2], "y": [...], "z": [...]}``.
- :func:`keplerian_coefficients`: built-in tables from Pluto's mean
  Keplerian orbit (see :mod:`pluto99._keplerian_coefficients`).
- :func:`load_default_coefficients`: the file named by
  ``$PLUTO99_COEFFICIENTS`` when set, otherwise the built-in tables.
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from pluto99._keplerian_coefficients import DEFAULT_HARMONICS, keplerian_series_terms
from pluto99.config import get_coefficients_path, get_dtype
from pluto99.series import SERIES_DEGREES

logger = logging.getLogger(__name__)

SeriesTable = tuple[Array, Array, Array]
"""Three ``(n, 3)`` degree tables, weighted by 1, X and X**2."""

_AXES = ("x", "y", "z")


class Pluto99Coefficients(NamedTuple):
    """Series tables for the three heliocentric ecliptic axes.

    Attributes:
        x: Series table of the x axis.
        y: Series table of the y axis.
        z: Series table of the z axis.
    """

    x: SeriesTable
    y: SeriesTable
    z: SeriesTable

    def term_counts(self) -> dict[str, tuple[int, int, int]]:
        """Number of terms per degree table, keyed by axis name."""
        return {
            axis: tuple(int(degree.shape[0]) for degree in table)
            for axis, table in zip(_AXES, self)
        }


def _is_sequence(obj) -> bool:
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, Mapping))


def _as_degree_table(raw, label: str) -> Array:
    if hasattr(raw, "shape"):
        arr = jnp.asarray(raw, dtype=get_dtype())
    elif _is_sequence(raw):
        for term in raw:
            if not _is_sequence(term) or len(term) != 3:
                raise ValueError(
                    f"{label}: every term must be (amplitude, frequency, phase), got {term!r}"
                )
        arr = jnp.asarray(raw, dtype=get_dtype())
    else:
        raise TypeError(f"{label}: expected a sequence of terms, got {type(raw).__name__}")

    if arr.size == 0:
        return arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{label}: expected shape (n, 3), got {arr.shape}")
    return arr


def as_series_table(raw, name: str = "table") -> SeriesTable:
    """Validate and convert nested sequences into a :data:`SeriesTable`.

    Args:
        raw: Sequence of exactly three degree tables.
        name: Label used in error messages.

    Returns:
        Tuple of three ``(n, 3)`` arrays in the configured dtype.

    Raises:
        TypeError: If *raw* or one of its degree tables is not a sequence.
        ValueError: If *raw* does not hold three degree tables, or a term is
            not a triple.
    """
    if not _is_sequence(raw):
        raise TypeError(f"{name}: expected a sequence of degree tables, got {type(raw).__name__}")
    if len(raw) != SERIES_DEGREES:
        raise ValueError(
            f"{name}: expected {SERIES_DEGREES} degree tables, got {len(raw)}"
        )
    return tuple(
        _as_degree_table(degree, f"{name}[{i}]") for i, degree in enumerate(raw)
    )


def coefficients_from_mapping(data: Mapping) -> Pluto99Coefficients:
    """Build a coefficient set from a ``{"x": ..., "y": ..., "z": ...}`` mapping.

    Raises:
        ValueError: If an axis is missing or malformed.
        TypeError: If an axis entry is not a sequence.
    """
    missing = [axis for axis in _AXES if axis not in data]
    if missing:
        raise ValueError(f"Coefficient data is missing axes: {', '.join(missing)}")
    return Pluto99Coefficients(*(as_series_table(data[axis], axis) for axis in _AXES))


def load_coefficients_from_file(filepath: str | Path) -> Pluto99Coefficients:
    """Load Pluto99 series tables from a JSON file.

    Args:
        filepath: Path to a JSON document with ``x``, ``y`` and ``z`` keys,
            each a list of three degree tables of ``[A, w, p]`` triples.

    Returns:
        The loaded coefficient set.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not valid JSON or a table is malformed.

    Examples:
        ```python
        from pluto99.coefficients import load_coefficients_from_file
        coeffs = load_coefficients_from_file("pluto99.json")
        coeffs.term_counts()
        ```
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Coefficient file not found: {filepath}")

    logger.info("Loading Pluto99 coefficients from %s", filepath)
    with open(filepath, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, Mapping):
        raise ValueError(f"Coefficient file {filepath} must hold a JSON object")

    coeffs = coefficients_from_mapping(data)
    logger.info("Loaded Pluto99 coefficients: %s", coeffs.term_counts())
    return coeffs


def keplerian_coefficients(harmonics: int = DEFAULT_HARMONICS) -> Pluto99Coefficients:
    """Series tables generated from Pluto's J2000 mean Keplerian orbit.

    Args:
        harmonics: Number of mean-anomaly harmonics per axis.

    Returns:
        Coefficient set with only the constant degree table populated.
    """
    empty = ()
    return Pluto99Coefficients(*(
        as_series_table((terms, empty, empty), axis)
        for axis, terms in zip(_AXES, keplerian_series_terms(harmonics))
    ))


@functools.lru_cache(maxsize=None)
def load_default_coefficients() -> Pluto99Coefficients:
    """Return the process-wide default coefficient set.

    Uses the file named by ``$PLUTO99_COEFFICIENTS`` when set.  If that file
    cannot be read or parsed, a warning is logged and the built-in
    mean-element tables are returned instead.  The result is cached; call
    ``load_default_coefficients.cache_clear()`` after changing the variable.

    Returns:
        The default coefficient set.
    """
    filepath = get_coefficients_path()
    if filepath is None:
        logger.debug("No coefficient file configured; using built-in mean-element tables")
        return keplerian_coefficients()

    try:
        return load_coefficients_from_file(filepath)
    except (OSError, ValueError, TypeError):
        logger.warning(
            "Failed to load Pluto99 coefficients from %s; falling back to "
            "built-in mean-element tables.",
            filepath,
            exc_info=True,
        )
        return keplerian_coefficients()
