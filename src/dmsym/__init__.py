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
dmsym - Discrete Map Symulation
===============================

Discrete-time dynamical systems x[k+1] = f(x[k]) in three flavours
(small vectors, scalars, large in-place buffers) sharing one interface
for stepping, evolution, trajectories and Jacobians. Missing Jacobians
and derivatives are synthesized with forward-mode automatic
differentiation (JAX or PyTorch).

Examples
--------
>>> import numpy as np
>>> from dmsym import DiscreteDS1D, HenonMap
>>>
>>> logistic = DiscreteDS1D(0.2, lambda x: 4.0 * x * (1.0 - x))
>>> logistic.evolve(2)
0.9216
>>> logistic.jacobian(0.25)
2.0
>>>
>>> henon = HenonMap()
>>> data = henon.trajectory(10000)
>>> data.shape
(10000, 2)
"""

__version__ = "0.1.0"

from dmsym.types import Dataset, SystemKind
from dmsym.systems import (
    BigDiscreteDS,
    CoupledStandardMaps,
    DifferentiationAdapter,
    DifferentiationFailure,
    DimensionMismatch,
    DiscreteDS,
    DiscreteDS1D,
    DiscreteDynamicalSystem,
    DynamicalSystemError,
    HenonMap,
    InvalidArgument,
    LogisticMap,
    MissingRuleError,
    StandardMap,
    derive,
    dimension,
    evolve,
    evolve_in_place,
    summary,
    trajectory,
)

__all__ = [
    "__version__",
    "SystemKind",
    "Dataset",
    "DiscreteDynamicalSystem",
    "DiscreteDS",
    "DiscreteDS1D",
    "BigDiscreteDS",
    "dimension",
    "evolve",
    "evolve_in_place",
    "trajectory",
    "summary",
    "DifferentiationAdapter",
    "derive",
    "DynamicalSystemError",
    "DimensionMismatch",
    "MissingRuleError",
    "InvalidArgument",
    "DifferentiationFailure",
    "LogisticMap",
    "HenonMap",
    "StandardMap",
    "CoupledStandardMaps",
]
