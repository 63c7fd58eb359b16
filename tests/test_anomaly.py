"""Tests for the orbitkit.orbits anomaly conversions and Kepler solvers."""

import logging

import jax
import jax.numpy as jnp
import pytest

from orbitkit.orbits import (
    KeplerSolverConfig,
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_hyperbolic_mean_to_true,
    anomaly_hyperbolic_to_mean,
    anomaly_hyperbolic_to_true,
    anomaly_mean_to_eccentric,
    anomaly_mean_to_hyperbolic,
    anomaly_mean_to_true,
    anomaly_true_to_eccentric,
    anomaly_true_to_hyperbolic,
    anomaly_true_to_hyperbolic_mean,
    anomaly_true_to_mean,
    solve_kepler_elliptic,
    solve_kepler_hyperbolic,
)

_ANOMALY_DEG_TOL = 1e-3
_ANOMALY_RAD_TOL = 1e-4
_ROUND_TRIP_TOL = 1e-9

_ELLIPTIC_GRID = [
    (M, e)
    for M in (-6.0, -4.0, -2.0, -0.5, 0.0, 0.3, 1.0, 2.5, 3.0, 4.0, 5.5, 6.2)
    for e in (0.0, 0.1, 0.3, 0.5, 0.7)
]


def _wrap(angle):
    """Wrap an angle difference into [-pi, pi)."""
    return (angle + jnp.pi) % (2.0 * jnp.pi) - jnp.pi


# ──────────────────────────────────────────────
# Elliptic reference values
# ──────────────────────────────────────────────


class TestEllipticReferenceValues:
    def test_eccentric_to_true_90_deg(self):
        nu = anomaly_eccentric_to_true(90.0, 0.1, use_degrees=True)
        assert jnp.abs(nu - 95.739) < _ANOMALY_DEG_TOL

    def test_eccentric_to_true_rad(self):
        nu = anomaly_eccentric_to_true(jnp.pi / 2.0, 0.1)
        assert jnp.abs(nu - 1.67096) < _ANOMALY_RAD_TOL

    def test_true_to_eccentric_90_deg(self):
        E = anomaly_true_to_eccentric(90.0, 0.1, use_degrees=True)
        assert jnp.abs(E - 84.2608) < _ANOMALY_DEG_TOL

    def test_true_to_eccentric_rad(self):
        E = anomaly_true_to_eccentric(jnp.pi / 2.0, 0.1)
        assert jnp.abs(E - 1.47063) < _ANOMALY_RAD_TOL

    def test_eccentric_to_mean_90_deg(self):
        M = anomaly_eccentric_to_mean(90.0, 0.1, use_degrees=True)
        assert jnp.abs(M - 84.2704) < _ANOMALY_DEG_TOL

    def test_eccentric_to_mean_rad(self):
        M = anomaly_eccentric_to_mean(jnp.pi / 2.0, 0.1)
        assert jnp.abs(M - 1.47080) < _ANOMALY_RAD_TOL

    def test_mean_to_eccentric_deg(self):
        E = anomaly_mean_to_eccentric(84.2704, 0.1, use_degrees=True)
        assert jnp.abs(E - 90.0) < _ANOMALY_DEG_TOL

    def test_true_to_mean_90_deg(self):
        M = anomaly_true_to_mean(90.0, 0.1, use_degrees=True)
        assert jnp.abs(M - 78.56) < 1e-2

    def test_mean_to_true_90_deg(self):
        nu = anomaly_mean_to_true(90.0, 0.1, use_degrees=True)
        assert jnp.abs(nu - 101.38) < 1e-2

    def test_circular_orbit_anomalies_coincide(self):
        for angle in (0.0, 0.7, 2.0, 4.5):
            assert jnp.abs(anomaly_eccentric_to_true(angle, 0.0) - angle) < 1e-14
            assert jnp.abs(anomaly_eccentric_to_mean(angle, 0.0) - angle) < 1e-14
            assert jnp.abs(anomaly_mean_to_eccentric(angle, 0.0) - angle) < 1e-14

    def test_periapsis_and_apoapsis(self):
        """At E = 0 and E = pi all three anomalies agree."""
        assert anomaly_eccentric_to_true(0.0, 0.5) == 0.0
        assert anomaly_eccentric_to_mean(0.0, 0.5) == 0.0
        assert jnp.abs(anomaly_eccentric_to_true(jnp.pi, 0.5) - jnp.pi) < 1e-12
        assert jnp.abs(anomaly_eccentric_to_mean(jnp.pi, 0.5) - jnp.pi) < 1e-12

    def test_same_revolution_as_input(self):
        """E and f share the half-plane of the input angle."""
        E = 4.0
        nu = anomaly_eccentric_to_true(E, 0.3)
        assert jnp.sin(nu) < 0.0
        assert jnp.pi < nu < 2.0 * jnp.pi


# ──────────────────────────────────────────────
# Elliptic round trips
# ──────────────────────────────────────────────


class TestEllipticRoundTrips:
    @pytest.mark.parametrize("E, e", _ELLIPTIC_GRID)
    def test_true_eccentric_round_trip(self, E, e):
        nu = anomaly_eccentric_to_true(E, e)
        assert jnp.abs(_wrap(anomaly_true_to_eccentric(nu, e) - E)) < _ROUND_TRIP_TOL

    @pytest.mark.parametrize("M, e", _ELLIPTIC_GRID)
    def test_kepler_round_trip(self, M, e):
        E = anomaly_mean_to_eccentric(M, e)
        assert jnp.abs(anomaly_eccentric_to_mean(E, e) - M) < _ROUND_TRIP_TOL

    @pytest.mark.parametrize("M, e", _ELLIPTIC_GRID)
    def test_mean_true_round_trip(self, M, e):
        nu = anomaly_mean_to_true(M, e)
        assert jnp.abs(_wrap(anomaly_true_to_mean(nu, e) - M)) < _ROUND_TRIP_TOL

    def test_degrees_round_trip(self):
        M = anomaly_eccentric_to_mean(anomaly_mean_to_eccentric(200.0, 0.4, use_degrees=True), 0.4, use_degrees=True)
        assert jnp.abs(M - 200.0) < 1e-8

    def test_mean_anomaly_not_wrapped(self):
        """A mean anomaly beyond 2 pi yields an eccentric anomaly on the same revolution."""
        M = 2.0 * jnp.pi + 1.0
        E = anomaly_mean_to_eccentric(M, 0.3)
        assert E > 2.0 * jnp.pi
        assert jnp.abs(E - 2.0 * jnp.pi - anomaly_mean_to_eccentric(1.0, 0.3)) < 1e-12


# ──────────────────────────────────────────────
# Elliptic Kepler solver
# ──────────────────────────────────────────────


class TestSolveKeplerElliptic:
    def test_high_eccentricity_converges(self):
        sol = solve_kepler_elliptic(1.0, 0.9)
        residual = sol.anomaly - 0.9 * jnp.sin(sol.anomaly) - 1.0
        assert jnp.abs(residual) < 1e-12
        assert bool(sol.converged)
        assert int(sol.iterations) < 200

    def test_iteration_cap_reports_non_convergence(self):
        sol = solve_kepler_elliptic(1.0, 0.9, KeplerSolverConfig(max_iterations=2))
        assert not bool(sol.converged)
        assert int(sol.iterations) == 2
        assert jnp.isfinite(sol.anomaly)
        assert jnp.abs(sol.last_delta) > 1e-13

    def test_iteration_cap_logs_diagnostic(self, caplog):
        caplog.set_level(logging.WARNING, logger="orbitkit")
        solve_kepler_elliptic(1.0, 0.9, KeplerSolverConfig(max_iterations=2))
        jax.effects_barrier()
        assert "iteration error in anomaly_mean_to_eccentric" in caplog.text

    def test_converged_solve_logs_nothing(self, caplog):
        caplog.set_level(logging.WARNING, logger="orbitkit")
        solve_kepler_elliptic(1.0, 0.5)
        jax.effects_barrier()
        assert not [r for r in caplog.records if r.name.startswith("orbitkit")]

    def test_zero_mean_anomaly(self):
        sol = solve_kepler_elliptic(0.0, 0.5)
        assert sol.anomaly == 0.0
        assert bool(sol.converged)

    def test_loose_tolerance_stops_early(self):
        tight = solve_kepler_elliptic(2.0, 0.6)
        loose = solve_kepler_elliptic(2.0, 0.6, KeplerSolverConfig(tol=1e-3))
        assert int(loose.iterations) <= int(tight.iterations)
        assert jnp.abs(loose.anomaly - tight.anomaly) < 1e-3

    def test_derivative_forward_mode(self):
        """dE/dM = 1 / (1 - e cos E) via forward-mode differentiation."""
        e = 0.4
        dE_dM = jax.jacfwd(lambda M: anomaly_mean_to_eccentric(M, e))(1.2)
        E = anomaly_mean_to_eccentric(1.2, e)
        assert jnp.abs(dE_dM - 1.0 / (1.0 - e * jnp.cos(E))) < 1e-10


# ──────────────────────────────────────────────
# Elliptic domain errors
# ──────────────────────────────────────────────


class TestEllipticDomain:
    @pytest.mark.parametrize(
        "func",
        [
            anomaly_eccentric_to_true,
            anomaly_true_to_eccentric,
            anomaly_eccentric_to_mean,
            anomaly_mean_to_eccentric,
            anomaly_true_to_mean,
            anomaly_mean_to_true,
        ],
    )
    @pytest.mark.parametrize("e", [1.0, 1.5, -0.1])
    def test_out_of_range_eccentricity_is_nan(self, func, e):
        assert jnp.isnan(func(1.0, e))

    def test_out_of_range_is_logged(self, caplog):
        caplog.set_level(logging.WARNING, logger="orbitkit")
        anomaly_eccentric_to_true(1.0, 1.5)
        jax.effects_barrier()
        assert "anomaly_eccentric_to_true() received e = 1.5" in caplog.text
        assert "0 <= e < 1" in caplog.text

    def test_solver_rejects_eccentricity(self):
        sol = solve_kepler_elliptic(1.0, 1.2)
        assert jnp.isnan(sol.anomaly)
        assert not bool(sol.converged)


# ──────────────────────────────────────────────
# Hyperbolic anomalies
# ──────────────────────────────────────────────


class TestHyperbolic:
    def test_hyperbolic_to_mean_value(self):
        H = 1.0
        e = 2.0
        assert jnp.abs(anomaly_hyperbolic_to_mean(H, e) - (e * jnp.sinh(H) - H)) < 1e-14

    def test_true_hyperbolic_consistency(self):
        """cos(f) = (e - cosh H) / (e cosh H - 1)."""
        e = 1.8
        nu = 1.2
        H = anomaly_true_to_hyperbolic(nu, e)
        assert jnp.abs(jnp.cos(nu) - (e - jnp.cosh(H)) / (e * jnp.cosh(H) - 1.0)) < 1e-12

    @pytest.mark.parametrize("N", [-3.0, 0.5, 2.0, 10.0])
    @pytest.mark.parametrize("e", [1.5, 2.0, 5.0])
    def test_kepler_round_trip(self, N, e):
        H = anomaly_mean_to_hyperbolic(N, e)
        assert jnp.abs(anomaly_hyperbolic_to_mean(H, e) - N) < _ROUND_TRIP_TOL

    @pytest.mark.parametrize("nu", [-1.5, -0.4, 0.0, 0.9, 1.7])
    def test_true_round_trip(self, nu):
        e = 2.5
        H = anomaly_true_to_hyperbolic(nu, e)
        assert jnp.abs(anomaly_hyperbolic_to_true(H, e) - nu) < _ROUND_TRIP_TOL

    def test_true_mean_round_trip_deg(self):
        N = anomaly_true_to_hyperbolic_mean(60.0, 3.0, use_degrees=True)
        nu = anomaly_hyperbolic_mean_to_true(N, 3.0, use_degrees=True)
        assert jnp.abs(nu - 60.0) < 1e-8

    def test_beyond_asymptote_is_nan(self):
        """For e = 2 the asymptote is at f = 120 deg."""
        assert jnp.isnan(anomaly_true_to_hyperbolic(170.0, 2.0, use_degrees=True))

    def test_solver_converges(self):
        sol = solve_kepler_hyperbolic(10.0, 1.5)
        assert bool(sol.converged)
        assert jnp.abs(1.5 * jnp.sinh(sol.anomaly) - sol.anomaly - 10.0) < 1e-10

    @pytest.mark.parametrize(
        "func",
        [
            anomaly_true_to_hyperbolic,
            anomaly_hyperbolic_to_true,
            anomaly_hyperbolic_to_mean,
            anomaly_mean_to_hyperbolic,
            anomaly_true_to_hyperbolic_mean,
            anomaly_hyperbolic_mean_to_true,
        ],
    )
    @pytest.mark.parametrize("e", [0.5, 1.0])
    def test_out_of_range_eccentricity_is_nan(self, func, e):
        assert jnp.isnan(func(0.5, e))


# ──────────────────────────────────────────────
# JAX transforms
# ──────────────────────────────────────────────


class TestAnomalyTransforms:
    def test_jit_eccentric_to_true(self):
        f = jax.jit(anomaly_eccentric_to_true, static_argnums=2)
        assert jnp.abs(f(jnp.pi / 2.0, 0.1, False) - anomaly_eccentric_to_true(jnp.pi / 2.0, 0.1)) < 1e-14

    def test_jit_mean_to_eccentric(self):
        f = jax.jit(anomaly_mean_to_eccentric, static_argnums=2)
        E = f(1.0, 0.3, False)
        assert jnp.abs(E - 0.3 * jnp.sin(E) - 1.0) < 1e-12

    def test_jit_solver_with_config(self):
        config = KeplerSolverConfig(max_iterations=2)
        sol = jax.jit(lambda M, e: solve_kepler_elliptic(M, e, config))(1.0, 0.9)
        assert not bool(sol.converged)

    def test_vmap_mean_to_eccentric(self):
        Ms = jnp.linspace(0.0, 2.0 * jnp.pi, 16)
        Es = jax.vmap(anomaly_mean_to_eccentric, in_axes=(0, None))(Ms, 0.5)
        assert Es.shape == (16,)
        assert jnp.max(jnp.abs(Es - 0.5 * jnp.sin(Es) - Ms)) < 1e-12

    def test_vmap_mixed_validity(self):
        """Invalid elements of a batch are nan, valid ones are unaffected."""
        es = jnp.array([0.1, 1.5, 0.3])
        nus = jax.vmap(anomaly_eccentric_to_true, in_axes=(None, 0))(1.0, es)
        assert jnp.isfinite(nus[0])
        assert jnp.isnan(nus[1])
        assert jnp.abs(nus[2] - anomaly_eccentric_to_true(1.0, 0.3)) < 1e-14

    def test_broadcast_arrays(self):
        Ms = jnp.array([0.5, 1.0, 1.5])
        Es = anomaly_mean_to_eccentric(Ms, 0.2)
        assert Es.shape == (3,)
        assert jnp.max(jnp.abs(anomaly_eccentric_to_mean(Es, 0.2) - Ms)) < 1e-12


class TestSolverArrayInput:
    def test_elliptic_array(self):
        Ms = jnp.array([0.5, 1.0, 1.5])
        sol = solve_kepler_elliptic(Ms, 0.2)
        assert sol.anomaly.shape == (3,)
        assert bool(jnp.all(sol.converged))
        assert jnp.max(jnp.abs(sol.anomaly - 0.2 * jnp.sin(sol.anomaly) - Ms)) < 1e-12

    def test_scalar_mean_array_eccentricity(self):
        es = jnp.array([0.0, 0.3, 0.9])
        E = anomaly_mean_to_eccentric(1.0, es)
        assert E.shape == (3,)
        assert jnp.max(jnp.abs(E - es * jnp.sin(E) - 1.0)) < 1e-12

    def test_iterations_counted_per_element(self):
        """A circular element converges at once while its neighbour keeps iterating."""
        sol = solve_kepler_elliptic(jnp.array([1.0, 1.0]), jnp.array([0.0, 0.9]))
        assert int(sol.iterations[0]) == 1
        assert int(sol.iterations[1]) > 1
        assert sol.anomaly[0] == 1.0

    def test_converged_elements_match_scalar_solve(self):
        Ms = jnp.array([0.2, 2.0, 5.0])
        es = jnp.array([0.1, 0.6, 0.8])
        batch = anomaly_mean_to_eccentric(Ms, es)
        for k in range(3):
            assert jnp.abs(batch[k] - anomaly_mean_to_eccentric(Ms[k], es[k])) < 1e-14

    def test_cap_flags_only_unconverged_elements(self):
        sol = solve_kepler_elliptic(jnp.array([1.0, 1.0]), jnp.array([0.0, 0.9]), KeplerSolverConfig(max_iterations=2))
        assert sol.converged.tolist() == [True, False]

    def test_invalid_element_in_batch(self):
        E = anomaly_mean_to_eccentric(jnp.array([1.0, 1.0]), jnp.array([0.5, 1.5]))
        assert jnp.isfinite(E[0])
        assert jnp.isnan(E[1])

    def test_mean_to_true_array(self):
        Ms = jnp.array([0.5, 1.0, 1.5])
        nus = anomaly_mean_to_true(Ms, 0.3)
        assert jnp.max(jnp.abs(anomaly_true_to_mean(nus, 0.3) - Ms)) < 1e-12

    def test_hyperbolic_array(self):
        Ns = jnp.array([-3.0, 0.5, 10.0])
        sol = solve_kepler_hyperbolic(Ns, 1.5)
        assert bool(jnp.all(sol.converged))
        assert jnp.max(jnp.abs(1.5 * jnp.sinh(sol.anomaly) - sol.anomaly - Ns)) < 1e-9

    def test_hyperbolic_mean_to_true_array(self):
        nus = jnp.array([-0.8, 0.2, 1.1])
        Ns = anomaly_true_to_hyperbolic_mean(nus, 2.0)
        assert jnp.max(jnp.abs(anomaly_hyperbolic_mean_to_true(Ns, 2.0) - nus)) < 1e-9

    def test_jit_array(self):
        f = jax.jit(anomaly_mean_to_eccentric, static_argnums=2)
        Ms = jnp.linspace(0.0, 6.0, 7)
        E = f(Ms, 0.5, False)
        assert jnp.max(jnp.abs(E - 0.5 * jnp.sin(E) - Ms)) < 1e-12
