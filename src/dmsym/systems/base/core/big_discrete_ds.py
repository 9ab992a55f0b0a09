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
Large Discrete Dynamical System
===============================

D-dimensional discrete system whose rules work in place, intended for
D > SMALL_SYSTEM_MAX_DIMENSION.

Memory layout
-------------
The system owns three buffers, allocated once at construction and never
reallocated:

- ``state`` (D,): the live state
- ``dummystate`` (D,): scratch copy read by ``eom_inplace`` during a step
- ``J`` (D, D): Jacobian written by ``jacob_inplace``

A step copies the source into ``dummystate`` and calls
``eom_inplace(out, dummystate)``, so the rule never reads and writes the
same memory even when advancing the live state.
"""

import copy
from typing import Optional, Tuple

import numpy as np

from dmsym.systems.base.core.discrete_system_base import DiscreteDynamicalSystem, rule_name
from dmsym.systems.base.utils.differentiation import DifferentiationAdapter
from dmsym.systems.base.utils.system_validator import (
    DimensionMismatch,
    InvalidArgument,
    validate_jacobian_buffer,
    validate_large_state,
    validate_rule,
)
from dmsym.types.core import (
    InPlaceEquationsOfMotion,
    InPlaceJacobianFunction,
    StateVector,
    SystemKind,
)
from dmsym.types.utilities import ensure_numpy


class BigDiscreteDS(DiscreteDynamicalSystem):
    """
    D-dimensional discrete dynamical system with in-place updates (D > 10).

    Fields
    ------
    state : np.ndarray
        Current state (D,). Owned by the system and mutated in place by
        evolve_in_place(); assigning a new state copies it into the buffer.
    eom_inplace : Callable[[np.ndarray, np.ndarray], None]
        Equations of motion ``eom_inplace(xnew, x)``: given the state ``x``,
        write the next state into ``xnew``.
    jacob_inplace : Callable[[np.ndarray, np.ndarray], None]
        Jacobian rule ``jacob_inplace(J, x)`` writing ∂f/∂x into ``J``.
        If not provided it is synthesized at construction with forward-mode
        automatic differentiation (PyTorch), in which case ``eom_inplace``
        must accept torch tensors (arithmetic and indexing only).
    J : np.ndarray
        Jacobian buffer (D, D), zeros unless supplied.
    dummystate : np.ndarray
        Scratch buffer, same shape as ``state``. Not displayed.

    Only one caller at a time may evolve a given system: ``dummystate`` and
    ``J`` are shared by every call on the instance.

    Raises
    ------
    MissingRuleError
        If ``eom_inplace`` is None or not callable (in-place update rules are
        never synthesized)
    DimensionMismatch
        If the state is not 1-D or ``J`` is not (D, D)

    Examples
    --------
    >>> def decay(xnew, x):
    ...     xnew[:] = 0.5 * x
    >>> ds = BigDiscreteDS(np.ones(20), decay)
    >>> ds.evolve_in_place(3).state[:3]
    array([0.125, 0.125, 0.125])
    """

    kind = SystemKind.LARGE

    def __init__(
        self,
        state: StateVector,
        eom_inplace: InPlaceEquationsOfMotion,
        jacob_inplace: Optional[InPlaceJacobianFunction] = None,
        J: Optional[np.ndarray] = None,
    ):
        self.eom_inplace = validate_rule(eom_inplace, "eom_inplace")
        jacob_inplace = validate_rule(jacob_inplace, "jacob_inplace", required=False)

        self._state = validate_large_state(state)
        self.J = validate_jacobian_buffer(J, self._state.shape[0], self._state.dtype)
        self.dummystate = self._state.copy()

        if jacob_inplace is None:
            jacob_inplace = DifferentiationAdapter("torch").inplace_jacobian(eom_inplace)
        self.jacob_inplace = jacob_inplace

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> np.ndarray:
        """Current state (D,), the live buffer."""
        return self._state

    @state.setter
    def state(self, value: StateVector):
        value = ensure_numpy(value)
        if value.shape != self._state.shape:
            raise DimensionMismatch(
                f"State must have shape {self._state.shape}, got {value.shape}"
            )
        self._state[:] = value

    @property
    def dimension(self) -> int:
        """D, the length of the state buffer."""
        return self._state.shape[0]

    # =========================================================================
    # Single Step and Jacobian
    # =========================================================================

    def step_into(self, out: np.ndarray, source: np.ndarray) -> np.ndarray:
        """
        Write f(source) into ``out`` through the scratch buffer.

        ``source`` is copied into ``dummystate`` first, so ``out`` may be
        ``source`` itself (this is how the live state is advanced).

        Raises
        ------
        InvalidArgument
            If ``out`` overlaps the scratch buffer
        """
        if np.may_share_memory(out, self.dummystate):
            raise InvalidArgument("Output buffer must not overlap the scratch buffer")

        self.dummystate[:] = source
        self.eom_inplace(out, self.dummystate)
        return out

    def step(self, state: Optional[StateVector] = None) -> np.ndarray:
        """Compute x[k+1] into a newly allocated array."""
        source = self._state if state is None else self._check_shape(state)
        return self.step_into(np.zeros_like(self._state), source)

    def step_in_place(self) -> "BigDiscreteDS":
        """Advance the live state by one step (no allocation) and return self."""
        self.step_into(self._state, self._state)
        return self

    def jacobian(self, state: Optional[StateVector] = None) -> np.ndarray:
        """
        Evaluate the Jacobian into the persisted buffer ``J``.

        Returns
        -------
        np.ndarray
            ``self.J`` itself, overwritten on every call. Copy it to keep it.
        """
        x = self._state if state is None else self._check_shape(state)
        self.jacob_inplace(self.J, x)
        return self.J

    def _check_shape(self, state: StateVector) -> np.ndarray:
        state = ensure_numpy(state)
        if state.shape != self._state.shape:
            raise DimensionMismatch(
                f"State must have shape {self._state.shape}, got {state.shape}"
            )
        return state

    # =========================================================================
    # Copying and Display
    # =========================================================================

    def copy(self) -> "BigDiscreteDS":
        """Independent system with freshly allocated state, scratch and Jacobian buffers."""
        new = copy.copy(self)
        new._state = self._state.copy()
        new.dummystate = self._state.copy()
        new.J = self.J.copy()
        return new

    def _rule_names(self) -> Tuple[str, str, str]:
        return rule_name(self.eom_inplace), "jacobian", rule_name(self.jacob_inplace)


__all__ = ["BigDiscreteDS"]
