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
Evolution Engine for Discrete Dynamical Systems

Advances a system by a number of discrete steps:
- evolve: compute the final state, leaving the system untouched
- evolve_in_place: write the final state into the system

Dispatches on ``system.kind``:
- SMALL / SCALAR: repeated calls to ``system.step`` on immutable values
- LARGE: one local buffer (or the live state) advanced through the
  system's scratch buffer, no allocation per step

Both functions run synchronously to completion. A caller wanting early
termination must bound ``steps`` itself.
"""

from typing import TYPE_CHECKING, Union

from dmsym.systems.base.utils.system_validator import validate_steps
from dmsym.types.core import ScalarState, StateVector, SystemKind

if TYPE_CHECKING:
    from dmsym.systems.base.core.discrete_system_base import DiscreteDynamicalSystem


def dimension(system: "DiscreteDynamicalSystem") -> int:
    """
    Number of state variables of ``system``.

    - small: D fixed at construction
    - scalar: 1
    - large: length of the state buffer
    """
    return system.dimension


def evolve(system: "DiscreteDynamicalSystem", steps: int = 1) -> Union[StateVector, ScalarState]:
    """
    Evolve ``system`` for ``steps`` steps and return the final state.

    Does not change ``system.state``. This function does not store
    intermediate states; use trajectory() for that.

    Parameters
    ----------
    system : DiscreteDynamicalSystem
        System to evolve
    steps : int
        Number of steps, >= 0. ``steps=0`` returns the current state (a copy
        for large systems).

    Returns
    -------
    Final state. For large systems a new array owned by the caller.

    Raises
    ------
    InvalidArgument
        If steps is negative or not an integer (the update rule is not
        assumed invertible)

    Examples
    --------
    >>> ds = DiscreteDS1D(0.2, lambda x: 4.0 * x * (1.0 - x))
    >>> evolve(ds, 2)
    0.9216
    >>> ds.state
    0.2
    """
    steps = validate_steps(steps, minimum=0)

    if system.kind is SystemKind.LARGE:
        st = system.state.copy()
        for _ in range(steps):
            system.step_into(st, st)
        return st

    st = system.state
    for _ in range(steps):
        st = system.step(st)
    return st


def evolve_in_place(system: "DiscreteDynamicalSystem", steps: int = 1) -> "DiscreteDynamicalSystem":
    """
    Evolve ``system`` for ``steps`` steps, updating its state.

    Small and scalar systems get their ``state`` field replaced by the final
    state; large systems have their state buffer overwritten each step, with
    ``dummystate`` as the read side.

    Parameters
    ----------
    system : DiscreteDynamicalSystem
        System to evolve
    steps : int
        Number of steps, >= 0

    Returns
    -------
    DiscreteDynamicalSystem
        ``system`` itself, for chaining

    Raises
    ------
    InvalidArgument
        If steps is negative or not an integer

    Examples
    --------
    >>> evolve_in_place(ds, 2).state
    0.9216
    """
    steps = validate_steps(steps, minimum=0)

    if system.kind is SystemKind.LARGE:
        for _ in range(steps):
            system.step_in_place()
        return system

    if steps > 0:
        system.state = evolve(system, steps)
    return system


__all__ = [
    "dimension",
    "evolve",
    "evolve_in_place",
]
