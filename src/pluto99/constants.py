"""
The `constants` module defines the time constants and the fixed Pluto99 fit constants.
"""

# Time Constants

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
JD_J2000 = 2451545.0

"""
Length of a Julian century. Units: *days*
"""
DAYS_PER_CENTURY = 36525.0

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Seconds in a day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

"""
First day of the Gregorian calendar (1582-10-15) as a Julian Date. Units: *days*
"""
JD_GREGORIAN_START = 2299160.5

# Pluto99 validity window

"""
Start of the Pluto99 validity window, -2998-04-23. Units: *days (JDE)*
"""
PLUTO99_JDE_START = 626150.5

"""
End of the Pluto99 validity window, 2984-07-26. Units: *days (JDE)*
"""
PLUTO99_JDE_END = 2811150.5

"""
Length of the Pluto99 validity window. Units: *days*
"""
PLUTO99_JDE_SPAN = 2185000.0

"""
Maximum error of the published Pluto99 series with respect to DE406. Units: *AU*

Largest when Pluto is near perihelion (29.65 AU) with the Earth between it and the
Sun; 0.00005 AU at 28.65 AU corresponds to about 0.37 arcseconds.
"""
PLUTO99_MAX_ERROR_AU = 0.00005

# Per-axis linear corrections, coordinate = series + OFFSET + SLOPE * X. Units: *AU*

X_OFFSET = 9.922274
X_SLOPE = 0.154154

Y_OFFSET = 10.016090
Y_SLOPE = 0.064073

Z_OFFSET = -3.947474
Z_SLOPE = -0.042746
