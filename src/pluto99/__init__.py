"""
pluto99 computes Pluto's heliocentric J2000 ecliptic coordinates from the Pluto99 series, implemented in JAX.
"""

from .constants import (
    JD_J2000,
    DAYS_PER_CENTURY,
    JD_MJD_OFFSET,
    PLUTO99_JDE_START,
    PLUTO99_JDE_END,
    PLUTO99_JDE_SPAN,
    PLUTO99_MAX_ERROR_AU,
)

from .config import set_dtype, get_dtype, get_coefficients_path
from .epoch import Epoch, TimeReference, is_time_reference, validate_time_reference
from .cache import EpochCache
from .coordinates import RectangularCoordinate3D

from .series import (
    normalize,
    in_validity_window,
    evaluate,
    axis_value,
)

from .coefficients import (
    Pluto99Coefficients,
    as_series_table,
    keplerian_coefficients,
    load_coefficients_from_file,
    load_default_coefficients,
)

from .pluto import Pluto99, pluto_position

__all__ = [
    # Constants
    "JD_J2000",
    "DAYS_PER_CENTURY",
    "JD_MJD_OFFSET",
    "PLUTO99_JDE_START",
    "PLUTO99_JDE_END",
    "PLUTO99_JDE_SPAN",
    "PLUTO99_MAX_ERROR_AU",
    # Config
    "set_dtype",
    "get_dtype",
    "get_coefficients_path",
    # Time reference
    "Epoch",
    "TimeReference",
    "is_time_reference",
    "validate_time_reference",
    "EpochCache",
    # Coordinates
    "RectangularCoordinate3D",
    # Series
    "normalize",
    "in_validity_window",
    "evaluate",
    "axis_value",
    # Coefficients
    "Pluto99Coefficients",
    "as_series_table",
    "keplerian_coefficients",
    "load_coefficients_from_file",
    "load_default_coefficients",
    # Engine
    "Pluto99",
    "pluto_position",
]
