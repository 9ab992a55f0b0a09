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
Chirikov standard map - 2D area-preserving (Hamiltonian) chaos.

    p[k+1] = p[k] + k·sin(θ[k])
    θ[k+1] = θ[k] + p[k+1]

State is ordered [θ, p]. Both coordinates are wrapped to [0, 2π) by default.
The last KAM torus breaks near k ≈ 0.971635.
"""

from typing import Optional, Sequence

import numpy as np

from dmsym.systems.base.core.discrete_ds import DiscreteDS

TWO_PI = 2.0 * np.pi


class StandardMap(DiscreteDS):
    """
    The standard map (kicked rotor).

    Jacobian (supplied analytically, wrapping ignored):

        J = | 1 + k·cos(θ)    1 |
            | k·cos(θ)        1 |

    det(J) = 1 everywhere (area-preserving).

    Parameters
    ----------
    x0 : Optional[Sequence[float]]
        Initial state [θ, p]. Default: small random state 0.001·U(0, 1).
    k : float
        Kick strength (default 0.971635)
    wrap : bool
        Wrap θ and p to [0, 2π) after each step
    seed : Optional[int]
        Seed for the default random initial state

    Examples
    --------
    >>> ds = StandardMap(x0=[0.1, 0.2], k=1.0)
    >>> ds.trajectory(100).shape
    (100, 2)
    """

    def __init__(
        self,
        x0: Optional[Sequence[float]] = None,
        k: float = 0.971635,
        wrap: bool = True,
        seed: Optional[int] = None,
    ):
        if x0 is None:
            x0 = 0.001 * np.random.default_rng(seed).random(2)
        self.k = k
        self.wrap = wrap

        def standard_map_rule(x):
            theta, p = x[0], x[1]
            p_next = p + k * np.sin(theta)
            theta_next = theta + p_next
            if wrap:
                p_next = np.mod(p_next, TWO_PI)
                theta_next = np.mod(theta + p_next, TWO_PI)
            return np.array([theta_next, p_next])

        def standard_map_jacobian(x):
            kc = k * np.cos(x[0])
            return np.array([[1.0 + kc, 1.0], [kc, 1.0]])

        super().__init__(x0, standard_map_rule, standard_map_jacobian, dimension=2)


__all__ = ["StandardMap", "TWO_PI"]
