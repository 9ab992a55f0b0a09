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
Hénon map - 2D dissipative chaotic map.

    x[k+1] = 1 - a·x[k]² + y[k]
    y[k+1] = b·x[k]

With the canonical parameters a = 1.4, b = 0.3 orbits settle on the Hénon
strange attractor (fractal dimension ≈ 1.26).
"""

import warnings
from typing import List, Sequence

import numpy as np

from dmsym.systems.base.core.discrete_ds import DiscreteDS


class HenonMap(DiscreteDS):
    """
    The Hénon map.

    Jacobian (supplied analytically):

        J = | -2ax    1 |
            |   b     0 |

    Its determinant is constant, det(J) = -b, so phase space area contracts
    by |b| each step.

    Parameters
    ----------
    x0 : Sequence[float]
        Initial state [x, y] (default [0, 0])
    a : float
        Nonlinearity parameter (controls folding)
    b : float
        Dissipation parameter (controls area contraction)

    Examples
    --------
    >>> ds = HenonMap()
    >>> ds.evolve(2)
    array([-0.4,  0.3])
    """

    def __init__(self, x0: Sequence[float] = (0.0, 0.0), a: float = 1.4, b: float = 0.3):
        if abs(b) > 1:
            warnings.warn(
                f"Dissipation parameter |b| = {abs(b)} > 1 causes area expansion. "
                "Orbits may escape to infinity. Typical range: |b| < 1.",
                UserWarning,
            )

        if a > 1.5:
            warnings.warn(
                f"Nonlinearity parameter a = {a} > 1.5 may cause escape to infinity. "
                "Canonical value is a = 1.4.",
                UserWarning,
            )

        self.a = a
        self.b = b

        def henon_rule(x):
            return np.array([1.0 - a * x[0] ** 2 + x[1], b * x[0]])

        def henon_jacobian(x):
            return np.array([[-2.0 * a * x[0], 1.0], [b, 0.0]])

        super().__init__(x0, henon_rule, henon_jacobian, dimension=2)

    @property
    def area_contraction_rate(self) -> float:
        """Phase space area contraction rate (|det(J)| = |b|)."""
        return abs(self.b)

    def fixed_points(self) -> List[np.ndarray]:
        """
        Real fixed points of the map.

        Fixed points satisfy y* = b·x* and a·x*² + (1 - b)·x* - 1 = 0.

        Returns
        -------
        List[np.ndarray]
            Zero, one or two points [x*, y*]
        """
        a, b = self.a, self.b
        if a == 0:
            if b == 1:
                return []
            x = 1.0 / (1.0 - b)
            return [np.array([x, b * x])]

        discriminant = (1.0 - b) ** 2 + 4.0 * a
        if discriminant < 0:
            return []

        roots = sorted({
            (-(1.0 - b) + np.sqrt(discriminant)) / (2.0 * a),
            (-(1.0 - b) - np.sqrt(discriminant)) / (2.0 * a),
        })
        return [np.array([x, b * x]) for x in roots]


__all__ = ["HenonMap"]
