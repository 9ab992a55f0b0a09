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
System Validator for Discrete Dynamical Systems

Validates the inputs handed to system constructors and evolution calls:
- Initial states for each size regime (small, scalar, large)
- Jacobian buffers for in-place systems
- Update and derivative rules
- Step counts

Also defines the error taxonomy raised across the package. All errors are
raised at the point of detection and are never recovered or retried.
"""

import operator
from typing import Callable, Optional

import numpy as np

from dmsym.types.backends import DEFAULT_DTYPE
from dmsym.types.core import ScalarState
from dmsym.types.utilities import ensure_numpy, is_scalar_like

# ============================================================================
# Exceptions
# ============================================================================


class DynamicalSystemError(Exception):
    """Base class for all errors raised by discrete dynamical systems"""
    pass


class DimensionMismatch(DynamicalSystemError, ValueError):
    """Raised when a state or buffer disagrees with the system dimension"""
    pass


class MissingRuleError(DynamicalSystemError, TypeError):
    """Raised when a required update or derivative rule is absent"""
    pass


class InvalidArgument(DynamicalSystemError, ValueError):
    """Raised for invalid step counts passed to evolve or trajectory"""
    pass


class DifferentiationFailure(DynamicalSystemError, RuntimeError):
    """
    Raised when automatic differentiation cannot evaluate a rule.

    The exception raised by the differentiation backend is chained as
    ``__cause__``.
    """
    pass


# ============================================================================
# State Validation
# ============================================================================


def _as_float_array(state) -> np.ndarray:
    """Convert to NumPy, promoting integer/bool dtypes to DEFAULT_DTYPE."""
    arr = ensure_numpy(state)
    if not np.issubdtype(arr.dtype, np.inexact):
        arr = arr.astype(DEFAULT_DTYPE)
    return arr


def validate_small_state(state, dimension: Optional[int] = None) -> np.ndarray:
    """
    Validate and freeze the initial state of a small system.

    Parameters
    ----------
    state : array_like
        Initial state, must be 1-D and non-empty
    dimension : Optional[int]
        Declared dimension. If given, the state length must match it.

    Returns
    -------
    np.ndarray
        Read-only copy of the state

    Raises
    ------
    DimensionMismatch
        If the state is not a non-empty 1-D vector or its length differs
        from ``dimension``
    """
    arr = np.array(_as_float_array(state))

    if arr.ndim != 1 or arr.shape[0] == 0:
        raise DimensionMismatch(
            f"State of a D-dimensional system must be a non-empty 1-D vector, "
            f"got shape {arr.shape}"
        )
    if dimension is not None and arr.shape[0] != dimension:
        raise DimensionMismatch(
            f"State has length {arr.shape[0]} but the system was declared "
            f"{dimension}-dimensional"
        )

    arr.flags.writeable = False
    return arr


def validate_scalar_state(state) -> ScalarState:
    """
    Validate the state of a one-dimensional system.

    Accepts Python numbers, NumPy scalars and 0-d arrays. Integers are
    promoted to float.

    Raises
    ------
    DimensionMismatch
        If the state is not a scalar
    """
    if not is_scalar_like(state):
        shape = getattr(state, "shape", None)
        raise DimensionMismatch(
            f"State of a 1-dimensional system must be a scalar, "
            f"got {type(state).__name__}" + (f" with shape {tuple(shape)}" if shape is not None else "")
        )

    if isinstance(state, (int, np.integer)):
        return float(state)
    if isinstance(state, (float, complex, np.inexact)):
        return state
    # 0-d arrays of any backend
    return _as_float_array(state)[()]


def validate_large_state(state) -> np.ndarray:
    """
    Validate the initial state of a large (in-place) system.

    Returns
    -------
    np.ndarray
        Writable copy of the state, owned by the system

    Raises
    ------
    DimensionMismatch
        If the state is not a non-empty 1-D vector
    """
    arr = np.array(_as_float_array(state), copy=True)

    if arr.ndim != 1 or arr.shape[0] == 0:
        raise DimensionMismatch(
            f"State of a D-dimensional system must be a non-empty 1-D vector, "
            f"got shape {arr.shape}"
        )
    return arr


def validate_jacobian_buffer(J, dimension: int, dtype) -> np.ndarray:
    """
    Validate or allocate the Jacobian buffer of a large system.

    Parameters
    ----------
    J : Optional[array_like]
        User supplied buffer. If None, a zero (D, D) matrix is allocated.
    dimension : int
        System dimension D
    dtype : np.dtype
        dtype used when allocating

    Raises
    ------
    DimensionMismatch
        If the supplied buffer is not (D, D)
    """
    if J is None:
        return np.zeros((dimension, dimension), dtype=dtype)

    J = np.asarray(J)
    if J.shape != (dimension, dimension):
        raise DimensionMismatch(
            f"Jacobian buffer must have shape ({dimension}, {dimension}), got {J.shape}"
        )
    if not J.flags.writeable:
        J = J.copy()
    return J


# ============================================================================
# Rule Validation
# ============================================================================


def validate_rule(rule: Optional[Callable], name: str, required: bool = True) -> Optional[Callable]:
    """
    Validate an update or derivative rule.

    Parameters
    ----------
    rule : Optional[Callable]
        The rule to check
    name : str
        Rule name for error messages (e.g. 'eom_inplace')
    required : bool
        If False, None is accepted and returned unchanged

    Raises
    ------
    MissingRuleError
        If the rule is required and None, or given but not callable
    """
    if rule is None:
        if required:
            raise MissingRuleError(
                f"Rule '{name}' is required and cannot be synthesized"
            )
        return None

    if not callable(rule):
        raise MissingRuleError(
            f"Rule '{name}' must be callable, got {type(rule).__name__}"
        )
    return rule


# ============================================================================
# Argument Validation
# ============================================================================


def validate_steps(steps, minimum: int = 0) -> int:
    """
    Validate a discrete step count.

    Parameters
    ----------
    steps : int
        Step count (Python or NumPy integer)
    minimum : int
        Smallest accepted value (0 for evolve, 1 for trajectory)

    Returns
    -------
    int
        The step count as a Python int

    Raises
    ------
    InvalidArgument
        If steps is not an integer or is below ``minimum``
    """
    if isinstance(steps, (bool, np.bool_)):
        raise InvalidArgument(f"Step count must be an integer, got {steps!r}")
    try:
        n = operator.index(steps)
    except TypeError:
        raise InvalidArgument(
            f"Step count must be an integer, got {type(steps).__name__}"
        ) from None

    if n < minimum:
        raise InvalidArgument(
            f"Step count must be >= {minimum}, got {n}"
        )
    return n


__all__ = [
    "DynamicalSystemError",
    "DimensionMismatch",
    "MissingRuleError",
    "InvalidArgument",
    "DifferentiationFailure",
    "validate_small_state",
    "validate_scalar_state",
    "validate_large_state",
    "validate_jacobian_buffer",
    "validate_rule",
    "validate_steps",
]
