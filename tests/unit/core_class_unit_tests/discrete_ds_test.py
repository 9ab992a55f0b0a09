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
Unit Tests for DiscreteDS (small, fixed-dimension systems)

Tests cover:
- Construction and validation
- Jacobian synthesis when no Jacobian is given
- State immutability and reassignment
- step / step_in_place / jacobian
- Identity semantics and copy()
- summary() and repr()
"""

import warnings

import numpy as np
import pytest

jax_available = True
try:
    import jax.numpy as jnp
except ImportError:
    jax_available = False

torch_available = True
try:
    import torch
except ImportError:
    torch_available = False

from dmsym import (
    DimensionMismatch,
    DiscreteDS,
    DifferentiationFailure,
    MissingRuleError,
    SystemKind,
    summary,
)

# ============================================================================
# Rules
# ============================================================================


def henon_rule(x):
    return np.array([1.0 - 1.4 * x[0] ** 2 + x[1], 0.3 * x[0]])


def henon_jacob(x):
    return np.array([[-2.8 * x[0], 1.0], [0.3, 0.0]])


def henon_jax(x):
    return jnp.array([1.0 - 1.4 * x[0] ** 2 + x[1], 0.3 * x[0]])


@pytest.fixture
def henon():
    return DiscreteDS([0.1, 0.2], henon_rule, henon_jacob)


# ============================================================================
# Test Construction
# ============================================================================


class TestConstruction:
    """Test DiscreteDS creation and validation."""

    def test_basic(self, henon):
        """Test basic construction of a small system."""
        assert henon.kind is SystemKind.SMALL
        assert henon.dimension == 2
        np.testing.assert_array_equal(henon.state, [0.1, 0.2])
        assert henon.eom is henon_rule
        assert henon.jacob is henon_jacob

    def test_integer_state_promoted(self):
        """Test integer state promoted."""
        ds = DiscreteDS([0, 1], henon_rule, henon_jacob)
        assert ds.state.dtype == np.float64

    def test_declared_dimension(self):
        """Test declared dimension."""
        ds = DiscreteDS([0.0, 0.0], henon_rule, henon_jacob, dimension=2)
        assert ds.dimension == 2

    def test_declared_dimension_mismatch(self):
        """Test declared dimension mismatch."""
        with pytest.raises(DimensionMismatch):
            DiscreteDS([0.0, 0.0, 0.0], henon_rule, henon_jacob, dimension=2)

    def test_matrix_state_rejected(self):
        """Test matrix state rejected."""
        with pytest.raises(DimensionMismatch):
            DiscreteDS(np.zeros((2, 2)), henon_rule, henon_jacob)

    def test_missing_eom(self):
        """Test missing eom."""
        with pytest.raises(MissingRuleError):
            DiscreteDS([0.0, 0.0], None, henon_jacob)

    def test_non_callable_jacobian(self):
        """Test non-callable jacobian."""
        with pytest.raises(MissingRuleError, match="jacob"):
            DiscreteDS([0.0, 0.0], henon_rule, np.eye(2))

    def test_large_dimension_warns(self):
        """Test large dimension warns."""
        with pytest.warns(UserWarning, match="BigDiscreteDS"):
            DiscreteDS(np.zeros(11), lambda x: x, lambda x: np.eye(11))

    def test_dimension_ten_does_not_warn(self):
        """Test dimension ten does not warn."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            DiscreteDS(np.zeros(10), lambda x: x, lambda x: np.eye(10))

    def test_invalid_ad_backend(self):
        """Test invalid AD backend."""
        with pytest.raises(ValueError, match="Invalid differentiation backend"):
            DiscreteDS([0.0, 0.0], henon_rule, ad_backend="numpy")


# ============================================================================
# Test Jacobian Synthesis
# ============================================================================


class TestJacobianSynthesis:
    """Test automatic Jacobians when none is supplied."""

    @pytest.mark.skipif(not jax_available, reason="JAX not installed")
    def test_jax_synthesized(self):
        """Test JAX synthesized."""
        ds = DiscreteDS([0.1, 0.2], henon_jax)
        np.testing.assert_allclose(ds.jacobian(), henon_jacob([0.1, 0.2]), rtol=1e-12)
        assert ds.jacob.__name__ == "forward_jacobian(henon_jax)"

    @pytest.mark.skipif(not jax_available, reason="JAX not installed")
    def test_jax_rule_steps_to_numpy(self):
        """Test JAX rule steps to NumPy."""
        ds = DiscreteDS([0.0, 0.0], henon_jax)
        x1 = ds.step()
        assert isinstance(x1, np.ndarray)
        np.testing.assert_allclose(x1, [1.0, 0.0])

    @pytest.mark.skipif(not torch_available, reason="PyTorch not installed")
    def test_torch_synthesized(self):
        """Test PyTorch synthesized."""
        ds = DiscreteDS(
            [0.1, 0.2],
            lambda x: torch.stack([1.0 - 1.4 * x[0] ** 2 + x[1], 0.3 * x[0]]),
            ad_backend="torch",
        )
        x = np.array([0.3, -0.1])
        np.testing.assert_allclose(ds.jacobian(x), henon_jacob(x), rtol=1e-12)

    @pytest.mark.skipif(not jax_available, reason="JAX not installed")
    def test_untraceable_rule_fails_at_evaluation(self):
        """Test untraceable rule fails at evaluation."""
        ds = DiscreteDS([1.0, 2.0], lambda x: np.array([x[0] ** 2, x[1]]))
        with pytest.raises(DifferentiationFailure):
            ds.jacobian()


# ============================================================================
# Test State and Stepping
# ============================================================================


class TestStepping:
    """Test state handling, step and jacobian."""

    def test_state_is_read_only(self, henon):
        """Test state is read-only."""
        with pytest.raises(ValueError):
            henon.state[0] = 5.0

    def test_state_copied_from_input(self):
        """Test state copied from input."""
        x0 = np.array([0.1, 0.2])
        ds = DiscreteDS(x0, henon_rule, henon_jacob)
        x0[0] = 9.0
        assert ds.state[0] == 0.1

    def test_state_reassignment(self, henon):
        """Test state reassignment."""
        henon.state = [0.5, 0.5]
        np.testing.assert_array_equal(henon.state, [0.5, 0.5])
        assert not henon.state.flags.writeable

    def test_state_reassignment_wrong_length(self, henon):
        """Test state reassignment wrong length."""
        with pytest.raises(DimensionMismatch):
            henon.state = [0.5, 0.5, 0.5]

    def test_step_leaves_state(self, henon):
        """Test step leaves state."""
        x1 = henon.step()
        np.testing.assert_allclose(x1, henon_rule(np.array([0.1, 0.2])))
        np.testing.assert_array_equal(henon.state, [0.1, 0.2])

    def test_step_explicit_state(self, henon):
        """Test step explicit state."""
        np.testing.assert_allclose(henon.step(np.array([0.0, 0.0])), [1.0, 0.0])

    def test_step_in_place(self, henon):
        """Test step in place."""
        expected = henon.step()
        assert henon.step_in_place() is henon
        np.testing.assert_array_equal(henon.state, expected)

    def test_caller_owned_result_not_frozen(self):
        """Test that stepping never freezes or aliases an array returned by eom."""
        table = np.array([1.0, 2.0])
        ds = DiscreteDS([0.0, 0.0], lambda x: table, henon_jacob)
        x1 = ds.step()
        assert table.flags.writeable
        assert not x1.flags.writeable
        assert not np.shares_memory(x1, table)
        ds.step_in_place()
        table[0] = 5.0
        np.testing.assert_array_equal(ds.state, [1.0, 2.0])

    def test_eom_wrong_shape(self):
        """Test eom wrong shape."""
        ds = DiscreteDS([0.0, 0.0], lambda x: np.zeros(3), henon_jacob)
        with pytest.raises(DimensionMismatch, match=r"\(2,\)"):
            ds.step()

    def test_jacobian(self, henon):
        """Test the Jacobian at the current and an explicit state."""
        np.testing.assert_allclose(henon.jacobian(), henon_jacob([0.1, 0.2]))
        np.testing.assert_allclose(henon.jacobian([1.0, 0.0]), [[-2.8, 1.0], [0.3, 0.0]])

    def test_jacobian_wrong_shape(self):
        """Test Jacobian wrong shape."""
        ds = DiscreteDS([0.0, 0.0], henon_rule, lambda x: np.eye(3))
        with pytest.raises(DimensionMismatch):
            ds.jacobian()


# ============================================================================
# Test Identity and Copy
# ============================================================================


class TestIdentity:
    """Test reference semantics."""

    def test_equal_states_are_distinct_systems(self):
        """Test equal states are distinct systems."""
        a = DiscreteDS([0.1, 0.2], henon_rule, henon_jacob)
        b = DiscreteDS([0.1, 0.2], henon_rule, henon_jacob)
        assert a != b
        assert a == a

    def test_copy_is_independent(self, henon):
        """Test copy is independent."""
        clone = henon.copy()
        assert clone is not henon
        assert clone.eom is henon.eom
        clone.evolve_in_place(3)
        np.testing.assert_array_equal(henon.state, [0.1, 0.2])


# ============================================================================
# Test String Representations
# ============================================================================


class TestRepresentation:
    """Test summary() and repr()."""

    def test_summary(self, henon):
        """Test summary() lists state and rule names."""
        text = summary(henon)
        assert text.startswith("2-dimensional discrete dynamical system:")
        assert "e.o.m.: henon_rule" in text
        assert "jacobian: henon_jacob" in text
        assert text == str(henon)

    def test_lambda_name(self):
        """Test lambda name."""
        ds = DiscreteDS([0.0, 0.0], lambda x: x, lambda x: np.eye(2))
        assert "e.o.m.: <lambda>" in ds.summary()

    def test_repr(self, henon):
        """Test repr() of a small system."""
        assert repr(henon) == "DiscreteDS(dimension=2, kind=small)"
