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
Trajectory Builder for Discrete Dynamical Systems

Collects the orbit x[0], x[1], ..., x[steps-1] of a system, starting from
its state at call time, into a time-major table. The system itself is never
modified, and no returned point aliases the system's buffers.
"""

from typing import TYPE_CHECKING, Union

import numpy as np

from dmsym.systems.base.utils.system_validator import validate_steps
from dmsym.types.core import SystemKind
from dmsym.types.trajectories import Dataset, ScalarTrajectory

if TYPE_CHECKING:
    from dmsym.systems.base.core.discrete_system_base import DiscreteDynamicalSystem


def trajectory(system: "DiscreteDynamicalSystem", steps: int) -> Union[Dataset, ScalarTrajectory]:
    """
    Return the trajectory of ``system`` as ``steps`` points.

    Point 0 is the current state, point k is f applied k times to it.

    Parameters
    ----------
    system : DiscreteDynamicalSystem
        System to iterate
    steps : int
        Number of points, >= 1. ``steps=1`` yields only the current state.

    Returns
    -------
    Dataset
        (steps, D) point table, for small and large systems
    ScalarTrajectory
        Read-only (steps,) array, for one-dimensional systems

    Raises
    ------
    InvalidArgument
        If steps < 1 or not an integer

    Examples
    --------
    >>> ds = DiscreteDS1D(0.2, lambda x: 4.0 * x * (1.0 - x))
    >>> trajectory(ds, 5)
    array([0.2       , 0.64      , 0.9216    , 0.28901376, 0.82193923])
    >>>
    >>> henon = HenonMap()
    >>> data = trajectory(henon, 1000)
    >>> data.shape
    (1000, 2)
    """
    steps = validate_steps(steps, minimum=1)

    if system.kind is SystemKind.LARGE:
        return _trajectory_large(system, steps)
    elif system.kind is SystemKind.SCALAR:
        return _trajectory_scalar(system, steps)
    else:
        return _trajectory_small(system, steps)


def _trajectory_small(system, steps: int) -> Dataset:
    x = system.state
    points = [x]
    for _ in range(1, steps):
        x = system.step(x)
        points.append(x)
    return Dataset(np.stack(points), copy=False)


def _trajectory_scalar(system, steps: int) -> ScalarTrajectory:
    x = system.state
    points = [x]
    for _ in range(1, steps):
        x = system.step(x)
        points.append(x)

    ts = np.asarray(points)
    ts.flags.writeable = False
    return ts


def _trajectory_large(system, steps: int) -> Dataset:
    # Each row is the output buffer of one step
    ts = np.zeros((steps, system.dimension), dtype=system.state.dtype)
    ts[0] = system.state
    for i in range(1, steps):
        system.step_into(ts[i], ts[i - 1])
    return Dataset(ts, copy=False)


__all__ = ["trajectory"]
