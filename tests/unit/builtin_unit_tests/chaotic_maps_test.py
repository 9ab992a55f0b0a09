# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Unit Tests for the Builtin Chaotic Maps

Tests cover:
- LogisticMap: orbit values, derivative, fixed points, parameter warnings
- HenonMap: orbit values, analytic vs automatic Jacobian, fixed points
- StandardMap: wrapping, analytic Jacobian vs finite differences
- CoupledStandardMaps: analytic Jacobian vs finite differences, reduction
  to independent standard maps without coupling, validation
"""

import numpy as np
import pytest

jax_available = True
try:
    import jax.numpy as jnp
except ImportError:
    jax_available = False

from dmsym import (
    CoupledStandardMaps,
    DiscreteDS,
    HenonMap,
    InvalidArgument,
    LogisticMap,
    StandardMap,
    SystemKind,
)
from dmsym.systems.builtin.deterministic.discrete.standard_map import TWO_PI

# ============================================================================
# Helpers
# ============================================================================


def central_difference_jacobian(system, x, eps=1e-6):
    """Jacobian of system.step by central differences, column by column."""
    x = np.asarray(x, dtype=np.float64)
    D = x.shape[0]
    J = np.zeros((D, D))
    for j in range(D):
        dx = np.zeros(D)
        dx[j] = eps
        J[:, j] = (system.step(x + dx) - system.step(x - dx)) / (2.0 * eps)
    return J


# ============================================================================
# Test LogisticMap
# ============================================================================


class TestLogisticMap:
    """Test the logistic map."""

    def test_kind(self):
        """Test LogisticMap is a one-dimensional system with default parameters."""
        ds = LogisticMap()
        assert ds.kind is SystemKind.SCALAR
        assert ds.state == 0.4
        assert ds.r == 4.0

    def test_orbit(self):
        """Test the logistic orbit from x0 = 0.2."""
        ts = LogisticMap(x0=0.2, r=4.0).trajectory(5)
        np.testing.assert_allclose(
            ts, [0.2, 0.64, 0.9216, 0.28901376, 0.8219392261226496], rtol=1e-12
        )

    def test_derivative(self):
        """Test the analytic logistic derivative."""
        ds = LogisticMap(x0=0.25, r=4.0)
        assert ds.derivative() == pytest.approx(2.0)
        assert ds.jacobian(0.5) == pytest.approx(0.0)

    @pytest.mark.parametrize("r", [0.5, 2.5, 3.2, 4.0])
    def test_fixed_points(self, r):
        """Test logistic fixed points are invariant under one step."""
        ds = LogisticMap(r=r)
        for x in ds.fixed_points():
            assert ds.step(x) == pytest.approx(x)

    def test_zero_rate_fixed_points(self):
        """Test zero rate fixed points."""
        assert LogisticMap(r=0.0).fixed_points() == [0.0]

    def test_orbit_stays_in_unit_interval(self):
        """Test orbit stays in unit interval."""
        ts = LogisticMap(x0=0.123, r=4.0).trajectory(1000)
        assert np.all((ts >= 0.0) & (ts <= 1.0))

    def test_rate_warning(self):
        """Test rate warning."""
        with pytest.warns(UserWarning, match="outside"):
            LogisticMap(r=4.5)

    def test_summary_names_rules(self):
        """Test summary names rules."""
        text = LogisticMap().summary()
        assert "e.o.m.: logistic_rule" in text
        assert "derivative: logistic_derivative" in text


# ============================================================================
# Test HenonMap
# ============================================================================


class TestHenonMap:
    """Test the Hénon map."""

    def test_defaults(self):
        """Test HenonMap default parameters and state."""
        ds = HenonMap()
        assert ds.kind is SystemKind.SMALL
        assert ds.dimension == 2
        assert (ds.a, ds.b) == (1.4, 0.3)
        np.testing.assert_array_equal(ds.state, [0.0, 0.0])

    def test_orbit(self):
        """Test the first Hénon iterates from the origin."""
        ds = HenonMap()
        np.testing.assert_allclose(ds.evolve(1), [1.0, 0.0])
        np.testing.assert_allclose(ds.evolve(2), [-0.4, 0.3])

    @pytest.mark.skipif(not jax_available, reason="JAX not installed")
    def test_analytic_matches_automatic(self):
        """Test analytic matches automatic."""
        automatic = DiscreteDS(
            [0.0, 0.0],
            lambda x: jnp.array([1.0 - 1.4 * x[0] ** 2 + x[1], 0.3 * x[0]]),
        )
        analytic = HenonMap()
        for x in np.random.default_rng(0).uniform(-1.0, 1.0, size=(5, 2)):
            np.testing.assert_allclose(analytic.jacobian(x), automatic.jacobian(x), rtol=1e-12)

    def test_jacobian_determinant(self):
        """Test Jacobian determinant."""
        ds = HenonMap(b=0.3)
        assert np.linalg.det(ds.jacobian([0.7, -0.2])) == pytest.approx(-0.3)
        assert ds.area_contraction_rate == 0.3

    def test_fixed_points(self):
        """Test both Hénon fixed points are invariant under one step."""
        ds = HenonMap()
        points = ds.fixed_points()
        assert len(points) == 2
        for x in points:
            np.testing.assert_allclose(ds.step(x), x, atol=1e-12)

    def test_fixed_point_linear_case(self):
        """Test fixed point linear case."""
        ds = HenonMap(a=0.0, b=0.5)
        (x,) = ds.fixed_points()
        np.testing.assert_allclose(ds.step(x), x)

    def test_no_real_fixed_points(self):
        """Test no real fixed points."""
        assert HenonMap(a=-1.0, b=0.3).fixed_points() == []

    def test_parameter_warnings(self):
        """Test parameter warnings."""
        with pytest.warns(UserWarning, match="area expansion"):
            HenonMap(b=1.2)
        with pytest.warns(UserWarning, match="escape to infinity"):
            HenonMap(a=1.6)


# ============================================================================
# Test StandardMap
# ============================================================================


class TestStandardMap:
    """Test the Chirikov standard map."""

    def test_step(self):
        """Test one unwrapped standard map step."""
        ds = StandardMap(x0=[0.5, 1.0], k=1.0, wrap=False)
        p_next = 1.0 + np.sin(0.5)
        np.testing.assert_allclose(ds.step(), [0.5 + p_next, p_next])

    def test_wrapping(self):
        """Test standard map coordinates stay in [0, 2π)."""
        data = StandardMap(x0=[3.0, 5.0], k=2.0).trajectory(500)
        assert np.all(data.minima() >= 0.0)
        assert np.all(data.maxima() < TWO_PI)

    def test_seeded_default_state(self):
        """Test the seeded random default state of StandardMap."""
        a = StandardMap(seed=7)
        b = StandardMap(seed=7)
        np.testing.assert_array_equal(a.state, b.state)
        assert np.all((a.state >= 0.0) & (a.state < 0.001))

    def test_jacobian_matches_finite_differences(self):
        """Test the standard map Jacobian against central differences."""
        ds = StandardMap(k=0.971635, wrap=False)
        for x in ([0.3, 1.2], [2.0, -0.5], [5.5, 3.0]):
            np.testing.assert_allclose(
                ds.jacobian(x), central_difference_jacobian(ds, x), atol=1e-7
            )

    def test_area_preserving(self):
        """Test area preserving."""
        ds = StandardMap(k=3.0)
        assert np.linalg.det(ds.jacobian([1.3, 0.2])) == pytest.approx(1.0)


# ============================================================================
# Test CoupledStandardMaps
# ============================================================================


class TestCoupledStandardMaps:
    """Test the ring of coupled standard maps."""

    @staticmethod
    def interior_state(M, seed=0):
        # Away from the wrapping boundaries for one step
        rng = np.random.default_rng(seed)
        return np.concatenate([rng.uniform(0.5, 1.0, M), rng.uniform(1.0, 2.0, M)])

    def test_construction(self):
        """Test CoupledStandardMaps dimensions and defaults."""
        ds = CoupledStandardMaps(50, seed=1)
        assert ds.kind is SystemKind.LARGE
        assert ds.dimension == 100
        assert ds.J.shape == (100, 100)
        np.testing.assert_array_equal(ds.ks, np.ones(50))
        assert np.all(ds.state < 0.001)

    def test_seeded_default_state(self):
        """Test the seeded random default state of CoupledStandardMaps."""
        np.testing.assert_array_equal(
            CoupledStandardMaps(10, seed=3).state, CoupledStandardMaps(10, seed=3).state
        )

    @pytest.mark.parametrize("M", [1, 2, 3, 10])
    def test_jacobian_matches_finite_differences(self, M):
        """Test the coupled map Jacobian against central differences."""
        x0 = self.interior_state(M)
        ds = CoupledStandardMaps(M, x0=x0, gamma=0.1)
        J = ds.jacobian()
        assert J is ds.J
        np.testing.assert_allclose(J, central_difference_jacobian(ds, x0), atol=1e-7)

    def test_jacobian_with_distinct_kicks(self):
        """Test Jacobian with distinct kicks."""
        M = 6
        x0 = self.interior_state(M, seed=5)
        ds = CoupledStandardMaps(M, x0=x0, ks=np.linspace(0.5, 1.0, M), gamma=0.1)
        np.testing.assert_allclose(
            ds.jacobian(), central_difference_jacobian(ds, x0), atol=1e-7
        )

    def test_jacobian_is_symplectic(self):
        """Test Jacobian is symplectic."""
        M = 4
        ds = CoupledStandardMaps(M, x0=self.interior_state(M), gamma=0.3)
        assert np.linalg.det(ds.jacobian()) == pytest.approx(1.0)

    def test_uncoupled_reduces_to_standard_maps(self):
        """Test uncoupled reduces to standard maps."""
        M = 3
        ks = np.array([0.5, 1.0, 1.5])
        x0 = self.interior_state(M)
        coupled = CoupledStandardMaps(M, x0=x0, ks=ks, gamma=0.0)
        final = coupled.evolve(5)
        for i in range(M):
            single = StandardMap(x0=[x0[i], x0[M + i]], k=ks[i])
            np.testing.assert_allclose(single.evolve(5), [final[i], final[M + i]], rtol=1e-9)

    def test_evolve_in_place_wraps(self):
        """Test evolve in place wraps."""
        ds = CoupledStandardMaps(20, x0=self.interior_state(20), gamma=1.0)
        buffer = ds.state
        ds.evolve_in_place(200)
        assert ds.state is buffer
        assert np.all((ds.state >= 0.0) & (ds.state < TWO_PI))

    def test_trajectory(self):
        """Test coupled map trajectories agree with evolve()."""
        ds = CoupledStandardMaps(5, seed=2)
        data = ds.trajectory(30)
        assert data.shape == (30, 10)
        np.testing.assert_allclose(data[29], ds.evolve(29))

    def test_invalid_size(self):
        """Test zero coupled maps are rejected."""
        with pytest.raises(InvalidArgument):
            CoupledStandardMaps(0)

    def test_invalid_kicks(self):
        """Test a kick strength vector of the wrong length is rejected."""
        with pytest.raises(InvalidArgument, match="kick strengths"):
            CoupledStandardMaps(4, ks=[1.0, 1.0])
