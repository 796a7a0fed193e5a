# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "pluto99"]
#
# [tool.uv.sources]
# pluto99 = { path = ".." }
# ///
"""Print a heliocentric ephemeris of Pluto from the Pluto99 series.

Steps one engine through a range of epochs by reassigning its observation
time, then cross-checks the last row against the JIT-compiled functional
form.

Requires pluto99 to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/pluto_ephemeris.py [OPTIONS]

Examples:
    # Ten yearly positions starting at the reference epoch
    uv run examples/pluto_ephemeris.py --start 1987-04-10 --step 365.25 --count 10

    # Published coefficient tables instead of the built-in ones
    PLUTO99_COEFFICIENTS=pluto99.json uv run examples/pluto_ephemeris.py
"""

import logging
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from pluto99 import Epoch, Pluto99, in_validity_window, pluto_position


def main(
    start: Annotated[str, typer.Option(help="First epoch, ISO 8601 (TT)")] = "1987-04-10",
    step: Annotated[float, typer.Option(help="Step between rows in days")] = 365.25,
    count: Annotated[int, typer.Option(help="Number of rows")] = 10,
    strict: Annotated[bool, typer.Option(help="Reject epochs outside the validity window")] = False,
    verbose: Annotated[bool, typer.Option(help="Enable debug logging")] = False,
):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    epc = Epoch(start)
    pluto = Pluto99(epc, check_range=strict)

    print(f"{'epoch (TT)':<26}{'JDE':>14}{'x [AU]':>14}{'y [AU]':>14}{'z [AU]':>14}{'r [AU]':>10}")
    for _ in range(count):
        rc = pluto.rc
        flag = "" if bool(in_validity_window(epc.jde())) else "  (extrapolated)"
        print(
            f"{str(epc):<26}{float(epc.jde()):>14.5f}"
            f"{float(rc.x):>14.6f}{float(rc.y):>14.6f}{float(rc.z):>14.6f}"
            f"{float(rc.radius()):>10.4f}{flag}"
        )
        epc = epc + step
        pluto.ob_time = epc

    last = pluto.ob_time - step
    r_jit = jax.jit(pluto_position)(last)
    r_eng = Pluto99(last).rc.to_array()
    print(f"\nmax |jit - engine| on last row: {float(jnp.max(jnp.abs(r_jit - r_eng))):.3e} AU")


if __name__ == "__main__":
    typer.run(main)
