"""Tests for the Pluto99 normalized time mapping and series evaluation."""

import functools
import math

import jax
import jax.numpy as jnp
import pytest

from pluto99.series import axis_value, evaluate, in_validity_window, normalize

_HALF_PI = 0.5 * math.pi

# Degree tables whose only term is the constant 1: sin(0 * t + pi/2)
_ONE = [(1.0, 0.0, _HALF_PI)]


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_window_start(self):
        assert float(normalize(626150.5)) == -1.0

    def test_window_end(self):
        assert float(normalize(2811150.5)) == 1.0

    def test_window_midpoint(self):
        assert float(normalize(1718650.5)) == 0.0

    def test_j2000(self):
        assert float(normalize(2451545.0)) == pytest.approx(-1.0 + 2.0 * 1825394.5 / 2185000.0)

    def test_extrapolates_without_error(self):
        assert float(normalize(3000000.0)) > 1.0
        assert float(normalize(0.0)) < -1.0

    def test_array(self):
        X = normalize(jnp.array([626150.5, 1718650.5, 2811150.5]))
        assert jnp.array_equal(X, jnp.array([-1.0, 0.0, 1.0]))


class TestValidityWindow:
    @pytest.mark.parametrize("jde", [626150.5, 2446896.0, 2811150.5])
    def test_inside(self, jde):
        assert bool(in_validity_window(jde))

    @pytest.mark.parametrize("jde", [626150.0, 2811151.0, float("nan")])
    def test_outside(self, jde):
        assert not bool(in_validity_window(jde))


# ---------------------------------------------------------------------------
# evaluate
# ---------------------------------------------------------------------------


class TestEvaluate:
    def test_single_term(self):
        table = [[(3.0, 2.0, 0.1)], [], []]
        expected = 3.0 * math.sin(2.0 * 0.3 + 0.1)
        assert float(evaluate(table, 0.5, 0.3)) == pytest.approx(expected, rel=1e-14)

    def test_terms_are_summed(self):
        table = [[(3.0, 2.0, 0.1), (-1.5, 0.5, 1.0)], [], []]
        expected = 3.0 * math.sin(0.7) - 1.5 * math.sin(0.5 * 0.3 + 1.0)
        assert float(evaluate(table, 0.0, 0.3)) == pytest.approx(expected, rel=1e-14)

    def test_degree_weighting(self):
        table = [_ONE, _ONE, _ONE]
        assert float(evaluate(table, 0.5, 0.0)) == pytest.approx(1.0 + 0.5 + 0.25)

    def test_quadratic_degree_only(self):
        table = [[], [], [(2.0, 0.0, _HALF_PI)]]
        assert float(evaluate(table, -0.5, 7.0)) == pytest.approx(0.5)

    def test_empty_tables_give_zero(self):
        assert float(evaluate([[], [], []], 0.3, 0.1)) == 0.0

    def test_array_tables(self):
        table = (jnp.array([[3.0, 2.0, 0.1]]), jnp.zeros((0, 3)), jnp.zeros((0, 3)))
        assert float(evaluate(table, 0.5, 0.3)) == pytest.approx(3.0 * math.sin(0.7))

    def test_deterministic(self):
        table = [[(3.0, 2.0, 0.1), (-1.5, 0.5, 1.0)], [(0.2, 1.0, 0.0)], [(0.01, 3.0, 2.0)]]
        first = evaluate(table, 0.123, -0.456)
        second = evaluate(table, 0.123, -0.456)
        assert float(first) == float(second)

    def test_vectorized_over_time(self):
        table = [[(3.0, 2.0, 0.1)], [(1.0, 1.0, 0.0)], []]
        t = jnp.array([-1.0, 0.0, 0.5, 2.0])
        X = normalize(2451545.0 + 36525.0 * t)
        result = evaluate(table, X, t)
        assert result.shape == (4,)
        for i in range(4):
            assert float(result[i]) == pytest.approx(float(evaluate(table, X[i], t[i])), rel=1e-14)

    def test_nan_propagates(self):
        table = [[(3.0, 2.0, 0.1)], _ONE, []]
        assert math.isnan(float(evaluate(table, 0.5, float("nan"))))
        assert math.isnan(float(evaluate(table, float("nan"), 0.1)))

    def test_jit_compatible(self):
        table = [[(3.0, 2.0, 0.1)], [(1.0, 1.0, 0.0)], _ONE]
        f = jax.jit(functools.partial(evaluate, table))
        assert float(f(0.4, 0.2)) == pytest.approx(float(evaluate(table, 0.4, 0.2)), rel=1e-14)

    @pytest.mark.parametrize(
        "table", [{"x": []}, 5.0, "abc", None, jnp.zeros((3, 1)), jnp.zeros((3, 1, 2))]
    )
    def test_invalid_table_type(self, table):
        with pytest.raises(TypeError, match="sequence"):
            evaluate(table, 0.0, 0.0)

    def test_stacked_array_table(self):
        nested = [[(3.0, 2.0, 0.1)], [(1.0, 1.0, 0.0)], [(0.5, 0.0, 1.2)]]
        stacked = jnp.array(nested)
        assert stacked.shape == (3, 1, 3)
        assert float(evaluate(stacked, 0.4, 0.2)) == pytest.approx(
            float(evaluate(nested, 0.4, 0.2)), rel=1e-14
        )

    def test_stacked_array_too_many_degrees(self):
        with pytest.raises(ValueError, match="at most 3"):
            evaluate(jnp.zeros((4, 1, 3)), 0.0, 0.0)

    def test_too_many_degrees(self):
        with pytest.raises(ValueError, match="at most 3"):
            evaluate([_ONE, _ONE, _ONE, _ONE], 0.0, 0.0)


# ---------------------------------------------------------------------------
# axis_value
# ---------------------------------------------------------------------------


class TestAxisValue:
    def test_linear_correction(self):
        assert axis_value(1.0, 2.0, 0.5, 0.5) == pytest.approx(3.25)

    def test_slope_isolated(self):
        x1 = axis_value(0.25, 9.922274, 0.154154, -0.3)
        x2 = axis_value(0.25, 9.922274, 0.154154, 0.6)
        assert x2 - x1 == pytest.approx(0.154154 * 0.9, abs=1e-14)
