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
Core Types - Fundamental Building Blocks

Defines the most basic types used throughout the package:
- Multi-backend array types (NumPy, PyTorch, JAX)
- Semantic state types (vector state, scalar state)
- Jacobian types
- Function signatures for update rules and derivative rules
- The closed set of system variants (SystemKind)

Usage
-----
>>> from dmsym.types.core import StateVector, EquationsOfMotion
>>>
>>> def henon(x: StateVector) -> StateVector:
...     return jnp.array([1.0 - 1.4 * x[0] ** 2 + x[1], 0.3 * x[0]])
"""

from enum import Enum
from typing import TYPE_CHECKING, Callable, Union

import numpy as np

if TYPE_CHECKING:
    import jax.numpy as jnp
    import torch


# ============================================================================
# Basic Array Types - Multi-Backend Support
# ============================================================================

ArrayLike = Union[np.ndarray, "torch.Tensor", "jnp.ndarray"]
"""
Array-like type supporting multiple backends.

States are stored as NumPy arrays, but update rules may receive JAX tracers
or PyTorch dual tensors while a derivative is being synthesized, and may
return arrays of any of the three backends.
"""

ScalarLike = Union[float, int, complex, np.number]
"""
Scalar value (Python number or NumPy scalar).

Used as the state of one-dimensional systems.
"""


# ============================================================================
# State Types
# ============================================================================

StateVector = ArrayLike
"""
State vector x ∈ ℝᴰ.

Shapes:
- Single state: (D,)

Small systems store it read-only; large systems store it writable and
mutate it in place.
"""

ScalarState = ScalarLike
"""State of a one-dimensional system x ∈ ℝ, represented as a bare number."""

JacobianMatrix = ArrayLike
"""
Jacobian matrix J = ∂f/∂x of shape (D, D).

Row i holds the partial derivatives of the i-th component of the update
rule with respect to every state component.
"""


# ============================================================================
# Function Signatures
# ============================================================================

EquationsOfMotion = Callable[[StateVector], StateVector]
"""Out-of-place update rule: eom(x) -> x_next (pure, no side effects)."""

JacobianFunction = Callable[[StateVector], JacobianMatrix]
"""Out-of-place Jacobian rule: jacob(x) -> (D, D) matrix."""

ScalarMap = Callable[[ScalarState], ScalarState]
"""Scalar update rule or scalar derivative rule: f(x) -> number."""

InPlaceEquationsOfMotion = Callable[[np.ndarray, np.ndarray], None]
"""
In-place update rule: eom_inplace(xnew, x).

Writes the next state into ``xnew`` given the current state ``x``. The
two buffers are always distinct memory.
"""

InPlaceJacobianFunction = Callable[[np.ndarray, np.ndarray], None]
"""In-place Jacobian rule: jacob_inplace(J, x) writes ∂f/∂x into ``J``."""


# ============================================================================
# System Variants
# ============================================================================


class SystemKind(Enum):
    """
    Closed set of discrete system variants.

    The evolution engine dispatches on this tag, each variant having its
    own allocation strategy:

    - SMALL: fixed dimension D, immutable states, new array per step
    - SCALAR: one-dimensional, states are bare numbers
    - LARGE: variable dimension, mutable state updated through scratch buffers
    """

    SMALL = "small"
    SCALAR = "scalar"
    LARGE = "large"


__all__ = [
    "ArrayLike",
    "ScalarLike",
    "StateVector",
    "ScalarState",
    "JacobianMatrix",
    "EquationsOfMotion",
    "JacobianFunction",
    "ScalarMap",
    "InPlaceEquationsOfMotion",
    "InPlaceJacobianFunction",
    "SystemKind",
]
