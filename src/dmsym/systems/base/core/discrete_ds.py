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
Small Discrete Dynamical System
===============================

D-dimensional discrete system with immutable states, intended for
D ≤ SMALL_SYSTEM_MAX_DIMENSION. Every step produces a new read-only state
array; nothing is ever written in place.
"""

import warnings
from typing import Optional, Tuple

import numpy as np

from dmsym.systems.base.core.discrete_system_base import DiscreteDynamicalSystem, rule_name
from dmsym.systems.base.utils.differentiation import DifferentiationAdapter
from dmsym.systems.base.utils.system_validator import (
    DimensionMismatch,
    validate_rule,
    validate_small_state,
)
from dmsym.types.backends import (
    DEFAULT_AD_BACKEND,
    SMALL_SYSTEM_MAX_DIMENSION,
    DifferentiationBackend,
)
from dmsym.types.core import (
    EquationsOfMotion,
    JacobianFunction,
    JacobianMatrix,
    StateVector,
    SystemKind,
)
from dmsym.types.utilities import ensure_numpy


class DiscreteDS(DiscreteDynamicalSystem):
    """
    D-dimensional discrete dynamical system (used for D ≤ 10).

    Fields
    ------
    state : np.ndarray
        Current state, shape (D,), read-only. Assigning a new state validates
        its length and stores a frozen copy.
    eom : Callable[[StateVector], StateVector]
        Equations of motion ``eom(x) -> x_next``. Must be pure.
    jacob : Callable[[StateVector], JacobianMatrix]
        Jacobian rule ``jacob(x) -> (D, D)``.

    If ``jacob`` is not provided it is synthesized once at construction
    with forward-mode automatic differentiation (see DifferentiationAdapter).
    In that case ``eom`` must be traceable by the chosen backend, e.g.
    written with ``jax.numpy`` for the default 'jax' backend.

    Parameters
    ----------
    state : array_like
        Initial state (D,)
    eom : Callable
        Update rule
    jacob : Optional[Callable]
        Jacobian rule. Synthesized when None.
    dimension : Optional[int]
        Declared dimension; the initial state must have this length.
    ad_backend : DifferentiationBackend
        Backend used when synthesizing the Jacobian ('jax' or 'torch')

    Raises
    ------
    DimensionMismatch
        If the state is not 1-D or disagrees with ``dimension``
    MissingRuleError
        If ``eom`` is not callable, or ``jacob`` is given but not callable

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> def henon(x):
    ...     return jnp.array([1.0 - 1.4 * x[0] ** 2 + x[1], 0.3 * x[0]])
    >>> ds = DiscreteDS([0.0, 0.0], henon)
    >>> ds.evolve(2)
    array([-0.4,  0.3])
    >>> ds.jacobian()
    array([[-0. ,  1. ],
           [ 0.3,  0. ]])
    """

    kind = SystemKind.SMALL

    def __init__(
        self,
        state: StateVector,
        eom: EquationsOfMotion,
        jacob: Optional[JacobianFunction] = None,
        *,
        dimension: Optional[int] = None,
        ad_backend: DifferentiationBackend = DEFAULT_AD_BACKEND,
    ):
        self.eom = validate_rule(eom, "eom")
        jacob = validate_rule(jacob, "jacob", required=False)

        self._state = validate_small_state(state, dimension)
        self._dimension = self._state.shape[0]

        if self._dimension > SMALL_SYSTEM_MAX_DIMENSION:
            warnings.warn(
                f"DiscreteDS allocates a new state every step; for D={self._dimension} "
                f"> {SMALL_SYSTEM_MAX_DIMENSION} consider BigDiscreteDS (in-place updates).",
                UserWarning,
                stacklevel=2,
            )

        if jacob is None:
            jacob = DifferentiationAdapter(ad_backend).jacobian(eom)
        self.jacob = jacob

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> np.ndarray:
        """Current state (D,), read-only."""
        return self._state

    @state.setter
    def state(self, value: StateVector):
        self._state = validate_small_state(value, self._dimension)

    @property
    def dimension(self) -> int:
        """D, fixed at construction."""
        return self._dimension

    # =========================================================================
    # Single Step and Jacobian
    # =========================================================================

    def step(self, state: Optional[StateVector] = None) -> np.ndarray:
        """
        Compute x[k+1] = eom(x[k]) as a new read-only array.

        Raises
        ------
        DimensionMismatch
            If eom returns a state of a different shape than (D,)
        """
        x = self._state if state is None else state
        # Copied so that freezing never touches an array owned by the caller
        x_next = np.array(ensure_numpy(self.eom(x)))

        if x_next.shape != (self._dimension,):
            raise DimensionMismatch(
                f"eom returned a state with shape {x_next.shape}, "
                f"expected ({self._dimension},)"
            )

        x_next.flags.writeable = False
        return x_next

    def jacobian(self, state: Optional[StateVector] = None) -> JacobianMatrix:
        """
        Evaluate the Jacobian at ``state`` (default: current state).

        Returns
        -------
        np.ndarray
            (D, D) matrix, J[i, j] = ∂f_i/∂x_j

        Raises
        ------
        DimensionMismatch
            If jacob returns a matrix of a different shape than (D, D)
        DifferentiationFailure
            If the synthesized Jacobian cannot trace eom
        """
        x = self._state if state is None else state
        J = ensure_numpy(self.jacob(x))

        if J.shape != (self._dimension, self._dimension):
            raise DimensionMismatch(
                f"jacob returned a matrix with shape {J.shape}, "
                f"expected ({self._dimension}, {self._dimension})"
            )
        return J

    def _rule_names(self) -> Tuple[str, str, str]:
        return rule_name(self.eom), "jacobian", rule_name(self.jacob)


__all__ = ["DiscreteDS"]
