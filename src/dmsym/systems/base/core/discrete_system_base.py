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
Discrete Dynamical System Base Class
====================================

Abstract base class for the three discrete system variants:

    x[k+1] = f(x[k])

- DiscreteDS: small, fixed dimension, immutable states
- DiscreteDS1D: one-dimensional, scalar states
- BigDiscreteDS: large, in-place updates through scratch buffers

Every variant exposes the same interface (dimension, step, step_in_place,
jacobian) and carries a ``kind`` tag on which the evolution engine
dispatches.
"""

import copy
from abc import ABC, abstractmethod
from typing import Tuple, Union

from dmsym.systems.base.evolution import evolution_engine, trajectory_builder
from dmsym.types.core import JacobianMatrix, ScalarState, StateVector, SystemKind
from dmsym.types.trajectories import Dataset, ScalarTrajectory


class DiscreteDynamicalSystem(ABC):
    """
    Abstract base class for discrete-time dynamical systems.

    Subclasses must implement:
    1. dimension (property): Number of state variables
    2. step(state): Single update, without touching the stored state
    3. jacobian(state): Derivative of the update rule at a state
    4. _rule_names(): Labels shown by summary()

    Systems are identified by reference: two systems with equal states are
    still distinct entities (no value-based ``__eq__``).

    Evolution is single-threaded. A system owns its state (and, for the
    in-place variant, its scratch buffers); only one caller at a time may
    evolve a given system.

    Examples
    --------
    >>> ds = DiscreteDS1D(0.2, lambda x: 4.0 * x * (1.0 - x))
    >>> ds.evolve(4)
    0.8219392261...
    >>> ds.trajectory(3)
    array([0.2   , 0.64  , 0.9216])
    """

    kind: SystemKind

    # =========================================================================
    # Abstract Interface (MUST be implemented by subclasses)
    # =========================================================================

    @property
    @abstractmethod
    def dimension(self) -> int:
        """
        Number of state variables D.

        Constant for the lifetime of the system.
        """
        pass

    @abstractmethod
    def step(self, state=None):
        """
        Compute the next state x[k+1] = f(x[k]).

        Parameters
        ----------
        state : optional
            State to advance. Defaults to the stored state.

        Returns
        -------
        The next state. The stored state is not modified.
        """
        pass

    @abstractmethod
    def jacobian(self, state=None) -> Union[JacobianMatrix, ScalarState]:
        """
        Evaluate ∂f/∂x at ``state`` (default: the stored state).
        """
        pass

    @abstractmethod
    def _rule_names(self) -> Tuple[str, str, str]:
        """Return (eom label, derivative field label, derivative label)."""
        pass

    # =========================================================================
    # Concrete Methods
    # =========================================================================

    def step_in_place(self) -> "DiscreteDynamicalSystem":
        """Advance the stored state by one step and return self."""
        self.state = self.step()
        return self

    def evolve(self, steps: int = 1) -> Union[StateVector, ScalarState]:
        """Final state after ``steps`` steps; the system is untouched. See evolve()."""
        return evolution_engine.evolve(self, steps)

    def evolve_in_place(self, steps: int = 1) -> "DiscreteDynamicalSystem":
        """Evolve the stored state by ``steps`` steps. See evolve_in_place()."""
        return evolution_engine.evolve_in_place(self, steps)

    def trajectory(self, steps: int) -> Union[Dataset, ScalarTrajectory]:
        """Trajectory of ``steps`` points starting at the stored state. See trajectory()."""
        return trajectory_builder.trajectory(self, steps)

    def copy(self) -> "DiscreteDynamicalSystem":
        """
        Independent system with the same rules and a copy of the state.

        Derivative rules (supplied or synthesized) are shared, not rebuilt.
        """
        return copy.copy(self)

    # =========================================================================
    # String Representations
    # =========================================================================

    def summary(self) -> str:
        """
        Human-readable description (dimension, state, rules).

        Advisory only, the format is not part of the functional contract.
        """
        eom_name, derivative_field, derivative_name = self._rule_names()
        return (
            f"{self.dimension}-dimensional discrete dynamical system:\n"
            f" state: {self.state}\n"
            f" e.o.m.: {eom_name}\n"
            f" {derivative_field}: {derivative_name}"
        )

    def __str__(self) -> str:
        return self.summary()

    def __repr__(self) -> str:
        """
        String representation of the discrete system.

        Examples
        --------
        >>> repr(ds)
        'HenonMap(dimension=2, kind=small)'
        """
        class_name = self.__class__.__name__
        return f"{class_name}(dimension={self.dimension}, kind={self.kind.value})"


def rule_name(rule) -> str:
    """Display name of a rule (function name, or its type for callables)."""
    return getattr(rule, "__name__", type(rule).__name__)


def summary(system: DiscreteDynamicalSystem) -> str:
    """Plain textual summary of a system (see DiscreteDynamicalSystem.summary)."""
    return system.summary()


__all__ = [
    "DiscreteDynamicalSystem",
    "rule_name",
    "summary",
]
