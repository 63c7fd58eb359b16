# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "orbitkit"]
#
# [tool.uv.sources]
# orbitkit = { path = ".." }
# ///
"""Sweep one orbit in true anomaly and report the perturbing accelerations.

Converts a set of classical elements to inertial states at evenly spaced
true anomalies (JIT + vmap), evaluates the configured perturbation model
at each state, and prints the magnitude of each force contribution along
with a round trip of the states back to elements.

Requires orbitkit to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/perturbation_sweep.py [OPTIONS]

Examples:
    # ISS-like orbit, all perturbations
    uv run examples/perturbation_sweep.py

    # Molniya orbit, zonal harmonics only
    uv run examples/perturbation_sweep.py --a 26560 --e 0.74 --i 63.4 --no-drag --no-srp
"""

import time
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from orbitkit import (
    MU_EARTH,
    REQ_EARTH,
    ClassicalElements,
    PerturbationConfig,
    SpacecraftParams,
    accel_drag,
    accel_srp,
    accel_zonal_harmonics,
    create_perturbation_model,
    state_eci_to_koe,
    state_koe_to_eci,
)


def main(
    a: Annotated[float, typer.Option(help="Semi-major axis [km]")] = 6778.0,
    e: Annotated[float, typer.Option(help="Eccentricity")] = 0.001,
    i: Annotated[float, typer.Option(help="Inclination [deg]")] = 51.6,
    raan: Annotated[float, typer.Option(help="Right ascension of the ascending node [deg]")] = 30.0,
    argp: Annotated[float, typer.Option(help="Argument of periapsis [deg]")] = 45.0,
    samples: Annotated[int, typer.Option(help="Number of true anomaly samples")] = 360,
    zonal_degree: Annotated[int, typer.Option(help="Highest zonal degree (2..6)")] = 6,
    drag: Annotated[bool, typer.Option(help="Include atmospheric drag")] = True,
    srp: Annotated[bool, typer.Option(help="Include solar radiation pressure")] = True,
    mass: Annotated[float, typer.Option(help="Spacecraft mass [kg]")] = 1000.0,
) -> None:
    """Evaluate perturbations around one orbit."""
    spacecraft = SpacecraftParams(mass=mass)
    config = PerturbationConfig(drag=drag, zonal_degree=zonal_degree, srp=srp, spacecraft=spacecraft)
    sun_vec = jnp.array([1.0, 0.0, 0.0])

    # ── Stage 1: Elements to states ──────────────────────────────────────
    print("── Stage 1: Converting elements to inertial states (JIT + vmap) ──")
    t0 = time.perf_counter()

    def state_at(nu):
        oe = ClassicalElements.from_true_anomaly(a, e, i, raan, argp, nu)
        return state_koe_to_eci(MU_EARTH, oe, use_degrees=True)

    nus = jnp.linspace(0.0, 360.0, samples, endpoint=False)
    rs, vs = jax.jit(jax.vmap(state_at))(nus)
    rs.block_until_ready()
    alts = jnp.linalg.norm(rs, axis=-1) - REQ_EARTH
    print(f"  {samples} states in {time.perf_counter() - t0:.2f}s")
    print(f"  Altitude range: {float(alts.min()):.1f} .. {float(alts.max()):.1f} km")

    # ── Stage 2: Perturbing accelerations ────────────────────────────────
    print("\n── Stage 2: Evaluating perturbing accelerations ──")
    accel = create_perturbation_model(config)
    total = jax.jit(jax.vmap(accel, in_axes=(0, 0, None)))(rs, vs, sun_vec)

    contributions = {
        f"J2..J{zonal_degree}": jax.vmap(accel_zonal_harmonics, in_axes=(0, None))(rs, zonal_degree),
    }
    if drag:
        contributions["drag"] = jax.vmap(
            lambda r, v: accel_drag(spacecraft.cd, spacecraft.drag_area, mass, r, v)
        )(rs, vs)
    if srp:
        contributions["srp"] = jnp.broadcast_to(
            accel_srp(spacecraft.srp_area, mass, sun_vec, cr=spacecraft.cr), rs.shape
        )

    for name, values in contributions.items():
        mag = jnp.linalg.norm(values, axis=-1)
        print(f"  {name:>8s}: max {float(mag.max()):.3e} km/s^2, mean {float(mag.mean()):.3e} km/s^2")
    print(f"  {'total':>8s}: max {float(jnp.linalg.norm(total, axis=-1).max()):.3e} km/s^2")

    # ── Stage 3: Round trip back to elements ─────────────────────────────
    print("\n── Stage 3: Converting states back to elements ──")
    oes = jax.vmap(lambda r, v: state_eci_to_koe(MU_EARTH, r, v, use_degrees=True))(rs, vs)
    print(f"  max |da| = {float(jnp.abs(oes.a - a).max()):.3e} km")
    print(f"  max |de| = {float(jnp.abs(oes.e - e).max()):.3e}")
    print(f"  max |di| = {float(jnp.abs(oes.i - i).max()):.3e} deg")


if __name__ == "__main__":
    typer.run(main)
