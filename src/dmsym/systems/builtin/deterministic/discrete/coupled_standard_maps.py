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
Coupled standard maps - a ring of M nearest-neighbour coupled kicked rotors.

    p_i[k+1] = p_i + k_i·sin(θ_i) - Γ·[sin(θ_{i+1} - θ_i) + sin(θ_{i-1} - θ_i)]
    θ_i[k+1] = θ_i + p_i[k+1]

with periodic boundary conditions (θ_{M+1} = θ_1). The state has 2M entries
ordered [θ_1, ..., θ_M, p_1, ..., p_M], all wrapped to [0, 2π).

Implemented as a large (buffer-based) system: both the rule and the
Jacobian write into caller-provided buffers.
"""

from typing import Optional, Sequence

import numpy as np

from dmsym.systems.base.core.big_discrete_ds import BigDiscreteDS
from dmsym.systems.base.utils.system_validator import InvalidArgument
from dmsym.systems.builtin.deterministic.discrete.standard_map import TWO_PI


class CoupledStandardMaps(BigDiscreteDS):
    """
    M coupled standard maps on a ring.

    Jacobian (supplied analytically, wrapping ignored). With
    c⁺_i = Γ·cos(θ_{i+1} - θ_i) and c⁻_i = Γ·cos(θ_{i-1} - θ_i):

        ∂p'_i/∂θ_i     = k_i·cos(θ_i) + c⁺_i + c⁻_i
        ∂p'_i/∂θ_{i+1} = -c⁺_i
        ∂p'_i/∂θ_{i-1} = -c⁻_i
        ∂p'_i/∂p_i     = 1

    and the θ' rows equal the p' rows plus the identity on θ.

    Parameters
    ----------
    M : int
        Number of coupled maps (state dimension 2M)
    x0 : Optional[Sequence[float]]
        Initial state of length 2M. Default: 0.001·U(0, 1) per entry.
    ks : Optional[Sequence[float]]
        Kick strength of each map (default all ones)
    gamma : float
        Coupling strength Γ
    seed : Optional[int]
        Seed for the default random initial state

    Examples
    --------
    >>> ds = CoupledStandardMaps(100, seed=1)
    >>> ds.dimension
    200
    >>> data = ds.trajectory(1000)
    >>> data.shape
    (1000, 200)
    """

    def __init__(
        self,
        M: int,
        x0: Optional[Sequence[float]] = None,
        ks: Optional[Sequence[float]] = None,
        gamma: float = 1.0,
        seed: Optional[int] = None,
    ):
        if M < 1:
            raise InvalidArgument(f"Number of coupled maps must be >= 1, got {M}")

        if x0 is None:
            x0 = 0.001 * np.random.default_rng(seed).random(2 * M)
        ks = np.ones(M) if ks is None else np.asarray(ks, dtype=np.float64)
        if ks.shape != (M,):
            raise InvalidArgument(f"Expected {M} kick strengths, got shape {ks.shape}")

        self.M = M
        self.ks = ks
        self.gamma = gamma

        idx = np.arange(M)
        pos = np.roll(idx, -1)  # i + 1 on the ring
        neg = np.roll(idx, 1)  # i - 1 on the ring

        def coupled_rule(xnew, x):
            theta, p = x[:M], x[M:]
            coupling = np.sin(theta[pos] - theta) + np.sin(theta[neg] - theta)
            xnew[M:] = np.mod(p + ks * np.sin(theta) - gamma * coupling, TWO_PI)
            xnew[:M] = np.mod(theta + xnew[M:], TWO_PI)

        def coupled_jacobian(J, x):
            theta = x[:M]
            cp = gamma * np.cos(theta[pos] - theta)
            cm = gamma * np.cos(theta[neg] - theta)

            J[:, :] = 0.0
            # add.at accumulates when neighbours coincide (M <= 2)
            np.add.at(J, (M + idx, idx), ks * np.cos(theta) + cp + cm)
            np.add.at(J, (M + idx, pos), -cp)
            np.add.at(J, (M + idx, neg), -cm)
            J[M + idx, M + idx] = 1.0
            J[:M] = J[M:]
            J[idx, idx] += 1.0

        super().__init__(x0, coupled_rule, coupled_jacobian)


__all__ = ["CoupledStandardMaps"]
