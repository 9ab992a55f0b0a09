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
Trajectory and Dataset Types

Defines the containers returned by trajectory generation:
- StateTrajectory: time-major array of states (n_steps, D)
- ScalarTrajectory: 1-D array of scalar states (n_steps,)
- Dataset: immutable point table wrapping a StateTrajectory

Mathematical Context
-------------------
Discrete trajectories are orbits {x[k]} of x[k+1] = f(x[k]).

Shape Conventions:
- Row k is the state at step k, starting from the state at call time
- Column j is the j-th coordinate over time

Usage
-----
>>> data = trajectory(system, 1000)
>>> len(data)
1000
>>> x_coordinate = data.column(0)
>>> first_point = data[0]
"""

import operator
from typing import Iterator, List, Sequence, Union

import numpy as np

from .core import ArrayLike

# ============================================================================
# Trajectory Types
# ============================================================================

StateTrajectory = ArrayLike
"""
State trajectory over discrete time.

Shapes:
- Single trajectory: (n_steps, D)
  Each row is x[k]

Indexing:
- trajectory[k] -> state at step k (D,)
- trajectory[:, i] -> i-th state component over time (n_steps,)
"""

ScalarTrajectory = np.ndarray
"""
Trajectory of a one-dimensional system.

Shape (n_steps,), read-only. Entry k is x[k].
"""


# ============================================================================
# Dataset
# ============================================================================


class Dataset:
    """
    Immutable, time-ordered table of D-dimensional points.

    Rows are time steps, columns are coordinates. A Dataset is the output of
    trajectory generation for vector systems and is consumable by any routine
    that expects a (n_points, D) array (it implements ``__array__``).

    The underlying array is read-only; use ``to_numpy()`` to obtain a
    writable copy.

    Parameters
    ----------
    points : Sequence of points or 2-D array
        The points, in time order
    copy : bool
        If False and ``points`` is already a 2-D NumPy array, take ownership
        of it instead of copying (the array is made read-only)

    Raises
    ------
    ValueError
        If the points do not form a 2-D table

    Examples
    --------
    >>> data = Dataset([[0.0, 1.0], [0.5, 0.2], [0.1, 0.3]])
    >>> len(data), data.dimension
    (3, 2)
    >>> data.minima()
    array([0. , 0.2])
    """

    def __init__(self, points: Union[Sequence[ArrayLike], np.ndarray], copy: bool = True):
        data = np.array(points) if copy else np.asarray(points)

        if data.ndim != 2:
            raise ValueError(
                f"Dataset requires a 2-D table of points (n_points, D), "
                f"got array with shape {data.shape}"
            )

        data.flags.writeable = False
        self._data = data

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def data(self) -> np.ndarray:
        """Read-only (n_points, D) array backing the dataset."""
        return self._data

    @property
    def dimension(self) -> int:
        """Number of coordinates per point."""
        return self._data.shape[1]

    @property
    def shape(self):
        """(n_points, D)"""
        return self._data.shape

    # ========================================================================
    # Sequence Protocol
    # ========================================================================

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self._data)

    def __getitem__(self, key):
        """
        Index the dataset.

        - ``data[k]`` -> point k (read-only (D,) array)
        - ``data[a:b]`` -> Dataset of the selected points
        - ``data[k, j]`` / ``data[:, j]`` -> delegated to NumPy
        """
        if isinstance(key, slice):
            return Dataset(self._data[key], copy=False)
        if isinstance(key, tuple):
            return self._data[key]
        return self._data[operator.index(key)]

    def __array__(self, dtype=None, copy=None):
        if copy:
            return np.array(self._data, dtype=dtype)
        return np.asarray(self._data, dtype=dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    # ========================================================================
    # Column Access and Statistics
    # ========================================================================

    def column(self, j: int) -> np.ndarray:
        """Timeseries of coordinate j, shape (n_points,)."""
        return self._data[:, j]

    def columns(self) -> List[np.ndarray]:
        """All coordinate timeseries, one array per dimension."""
        return [self._data[:, j] for j in range(self.dimension)]

    def minima(self) -> np.ndarray:
        """Per-coordinate minimum over all points, shape (D,)."""
        return self._data.min(axis=0)

    def maxima(self) -> np.ndarray:
        """Per-coordinate maximum over all points, shape (D,)."""
        return self._data.max(axis=0)

    def to_numpy(self) -> np.ndarray:
        """Writable copy of the underlying array."""
        return self._data.copy()

    # ========================================================================
    # String Representations
    # ========================================================================

    def __repr__(self) -> str:
        return (
            f"{self.dimension}-dimensional Dataset{{{self._data.dtype}}} "
            f"with {len(self)} points"
        )

    def __str__(self) -> str:
        return f"{self!r}\n{self._data}"


__all__ = [
    "StateTrajectory",
    "ScalarTrajectory",
    "Dataset",
]
