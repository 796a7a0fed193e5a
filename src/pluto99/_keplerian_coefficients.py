"""Built-in Pluto series tables derived from mean Keplerian elements.

The published Pluto99 coefficients are a least-squares fit to DE406.  When
they are not configured, pluto99 falls back on the tables generated here:
the Fourier expansion of Pluto's J2000 mean Keplerian orbit, laid out in the
Pluto99 ``(amplitude, frequency, phase)`` format.

In the orbital plane, with mean anomaly ``M = M0 + n t``:

    a (cos E - e)        = a (-3e/2 + sum_k C_k cos kM)
    a sqrt(1-e^2) sin E  = a sqrt(1-e^2) sum_k S_k sin kM

    C_k = (J_{k-1}(ke) - J_{k+1}(ke)) / k
    S_k = 2 J_k(ke) / (ke)

Rotating by the perifocal unit vectors P and Q gives one sine series per
ecliptic axis.  The constant ``-3/2 a e P`` is left out: the fixed Pluto99
axis offsets already carry Pluto's mean position.  Only the constant degree
table is populated.

These tables reproduce Pluto's position to a few hundredths of an AU near
the present; they do not reach the accuracy of the published fit.

References:
    E.M. Standish & J.G. Williams, "Keplerian Elements for
    Approximate Positions of the Major Planets",
    https://ssd.jpl.nasa.gov/planets/approx_pos.html
"""

from __future__ import annotations

import math

# fmt: off
# Pluto, JPL Table 1 (1800-2050 AD): [value_at_J2000, rate_per_century]
PLUTO_ELEMENTS = {
    "a":        (39.48211675,   -0.00031596),   # AU
    "e":        (0.24882730,     0.00005170),
    "incl":     (17.14001206,    0.00004818),   # deg
    "L":        (238.92903833,   145.20780515),  # deg
    "lon_peri": (224.06891629,  -0.04062942),   # deg
    "lon_node": (110.30393684,  -0.01183482),   # deg
}
# fmt: on

#: Harmonics kept by default; the k-th amplitude falls off roughly as 3**-k
DEFAULT_HARMONICS = 16

_TWO_PI = 2.0 * math.pi


def _bessel_j(n: int, x: float, terms: int = 40) -> float:
    """Bessel function of the first kind by its power series (small x)."""
    half = 0.5 * x
    total = 0.0
    for m in range(terms):
        total += ((-1) ** m * half ** (2 * m + n)
                  / (math.factorial(m) * math.factorial(m + n)))
    return total


def _perifocal_axes(incl: float, arg_peri: float, lon_node: float):
    """Ecliptic components of the perifocal unit vectors P and Q (radians in)."""
    ci, si = math.cos(incl), math.sin(incl)
    cw, sw = math.cos(arg_peri), math.sin(arg_peri)
    cn, sn = math.cos(lon_node), math.sin(lon_node)
    p = (cw * cn - sw * sn * ci,
         cw * sn + sw * cn * ci,
         sw * si)
    q = (-sw * cn - cw * sn * ci,
         -sw * sn + cw * cn * ci,
         cw * si)
    return p, q


def keplerian_series_terms(harmonics: int = DEFAULT_HARMONICS):
    """Generate per-axis sine terms from :data:`PLUTO_ELEMENTS`.

    Args:
        harmonics: Number of mean-anomaly harmonics to keep.

    Returns:
        tuple: ``(x_terms, y_terms, z_terms)``, each a list of
            ``(amplitude [AU], frequency [rad/cy], phase [rad])`` triples.

    Raises:
        ValueError: If *harmonics* is smaller than 1.
    """
    if harmonics < 1:
        raise ValueError(f"harmonics must be at least 1, got {harmonics}")

    a = PLUTO_ELEMENTS["a"][0]
    e = PLUTO_ELEMENTS["e"][0]
    incl = math.radians(PLUTO_ELEMENTS["incl"][0])
    L, L_dot = PLUTO_ELEMENTS["L"]
    lon_peri, lon_peri_dot = PLUTO_ELEMENTS["lon_peri"]
    lon_node = PLUTO_ELEMENTS["lon_node"][0]

    mean_anomaly = math.radians(L - lon_peri)
    mean_motion = math.radians(L_dot - lon_peri_dot)
    p, q = _perifocal_axes(incl, math.radians(lon_peri - lon_node), math.radians(lon_node))
    beta = math.sqrt(1.0 - e * e)

    axes = ([], [], [])
    for k in range(1, harmonics + 1):
        ke = k * e
        c_k = (_bessel_j(k - 1, ke) - _bessel_j(k + 1, ke)) / k
        s_k = 2.0 * _bessel_j(k, ke) / ke
        frequency = k * mean_motion
        phase = (k * mean_anomaly) % _TWO_PI
        for terms, p_j, q_j in zip(axes, p, q):
            # cos(kM) written as sin(kM + pi/2)
            terms.append((a * c_k * p_j, frequency, (phase + 0.5 * math.pi) % _TWO_PI))
            terms.append((a * beta * s_k * q_j, frequency, phase))
    return axes
