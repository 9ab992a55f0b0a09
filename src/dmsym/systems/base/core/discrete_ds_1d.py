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
One-Dimensional Discrete Dynamical System
=========================================

Discrete map on the real line, x[k+1] = f(x[k]), with states stored as bare
numbers.
"""

import numbers
from typing import Optional, Tuple

import numpy as np

from dmsym.systems.base.core.discrete_system_base import DiscreteDynamicalSystem, rule_name
from dmsym.systems.base.utils.differentiation import DifferentiationAdapter
from dmsym.systems.base.utils.system_validator import (
    DimensionMismatch,
    validate_rule,
    validate_scalar_state,
)
from dmsym.types.backends import DEFAULT_AD_BACKEND, DifferentiationBackend
from dmsym.types.core import ScalarMap, ScalarState, SystemKind
from dmsym.types.utilities import ensure_numpy, is_scalar_like


def _as_scalar(value, source: str) -> ScalarState:
    if not is_scalar_like(value):
        raise DimensionMismatch(
            f"{source} of a 1-dimensional system must return a scalar, "
            f"got {type(value).__name__}"
        )
    if isinstance(value, (numbers.Number, np.generic)):
        return value
    # 0-d arrays and tensors
    return ensure_numpy(value)[()]


class DiscreteDS1D(DiscreteDynamicalSystem):
    """
    One-dimensional discrete dynamical system.

    Fields
    ------
    state : number
        Current state.
    eom : Callable[[number], number]
        Equation of motion ``eom(x) -> x_next``.
    deriv : Callable[[number], number]
        Derivative ``deriv(x) -> f'(x)``. If not provided it is synthesized
        once at construction with forward-mode automatic differentiation.

    Raises
    ------
    DimensionMismatch
        If the initial state is not a scalar
    MissingRuleError
        If ``eom`` is not callable, or ``deriv`` is given but not callable

    Examples
    --------
    >>> ds = DiscreteDS1D(0.2, lambda x: 4.0 * x * (1.0 - x))
    >>> ds.trajectory(3)
    array([0.2   , 0.64  , 0.9216])
    >>> ds.derivative()
    2.4
    """

    kind = SystemKind.SCALAR

    def __init__(
        self,
        state: ScalarState,
        eom: ScalarMap,
        deriv: Optional[ScalarMap] = None,
        *,
        ad_backend: DifferentiationBackend = DEFAULT_AD_BACKEND,
    ):
        self.eom = validate_rule(eom, "eom")
        deriv = validate_rule(deriv, "deriv", required=False)

        self._state = validate_scalar_state(state)

        if deriv is None:
            deriv = DifferentiationAdapter(ad_backend).derivative(eom)
        self.deriv = deriv

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> ScalarState:
        """Current state."""
        return self._state

    @state.setter
    def state(self, value: ScalarState):
        self._state = validate_scalar_state(value)

    @property
    def dimension(self) -> int:
        """Always 1."""
        return 1

    # =========================================================================
    # Single Step and Derivative
    # =========================================================================

    def step(self, state: Optional[ScalarState] = None) -> ScalarState:
        """
        Compute x[k+1] = eom(x[k]).

        Raises
        ------
        DimensionMismatch
            If eom does not return a scalar
        """
        x = self._state if state is None else state
        return _as_scalar(self.eom(x), "eom")

    def jacobian(self, state: Optional[ScalarState] = None) -> ScalarState:
        """The 1x1 Jacobian, i.e. the derivative f'(x). Same as derivative()."""
        return self.derivative(state)

    def derivative(self, state: Optional[ScalarState] = None) -> ScalarState:
        """Evaluate f'(x) at ``state`` (default: current state)."""
        x = self._state if state is None else state
        return _as_scalar(self.deriv(x), "deriv")

    def _rule_names(self) -> Tuple[str, str, str]:
        return rule_name(self.eom), "derivative", rule_name(self.deriv)


__all__ = ["DiscreteDS1D"]
