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
Discrete-time logistic map (chaotic population dynamics).

The classic one-dimensional map

    x[k+1] = r·x[k]·(1 - x[k])

introduced by Robert May (1976). For r ∈ [0, 4] the unit interval is
invariant; the map goes through period doubling to chaos as r grows, and
is fully chaotic at r = 4.
"""

import warnings
from typing import List

from dmsym.systems.base.core.discrete_ds_1d import DiscreteDS1D


class LogisticMap(DiscreteDS1D):
    """
    The logistic map: x[k+1] = r·x[k]·(1 - x[k])

    Derivative (supplied analytically):

        f'(x) = r - 2·r·x

    Parameters
    ----------
    x0 : float
        Initial population fraction (default 0.4)
    r : float
        Growth rate (default 4.0, fully chaotic)

    Examples
    --------
    >>> ds = LogisticMap(x0=0.2, r=4.0)
    >>> ds.trajectory(3)
    array([0.2   , 0.64  , 0.9216])
    >>> ds.fixed_points()
    [0.0, 0.75]
    """

    def __init__(self, x0: float = 0.4, r: float = 4.0):
        if not 0.0 <= r <= 4.0:
            warnings.warn(
                f"Growth rate r = {r} outside [0, 4]: orbits may leave [0, 1] "
                "and escape to infinity.",
                UserWarning,
            )
        self.r = r

        def logistic_rule(x):
            return r * x * (1.0 - x)

        def logistic_derivative(x):
            return r - 2.0 * r * x

        super().__init__(x0, logistic_rule, logistic_derivative)

    def fixed_points(self) -> List[float]:
        """
        Fixed points x* = f(x*).

        x* = 0 always, and x* = 1 - 1/r when r ≠ 0.
        """
        if self.r == 0:
            return [0.0]
        return [0.0, 1.0 - 1.0 / self.r]


__all__ = ["LogisticMap"]
