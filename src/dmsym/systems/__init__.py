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
Discrete Dynamical Systems
==========================

- base: system classes, evolution engine, derivative synthesis
- builtin: ready-made chaotic maps
"""

from dmsym.systems.base import (
    BigDiscreteDS,
    DifferentiationAdapter,
    DifferentiationFailure,
    DimensionMismatch,
    DiscreteDS,
    DiscreteDS1D,
    DiscreteDynamicalSystem,
    DynamicalSystemError,
    InvalidArgument,
    MissingRuleError,
    derive,
    dimension,
    evolve,
    evolve_in_place,
    summary,
    trajectory,
)
from dmsym.systems.builtin import (
    CoupledStandardMaps,
    HenonMap,
    LogisticMap,
    StandardMap,
)

__all__ = [
    # System classes
    "DiscreteDynamicalSystem",
    "DiscreteDS",
    "DiscreteDS1D",
    "BigDiscreteDS",
    # Operations
    "dimension",
    "evolve",
    "evolve_in_place",
    "trajectory",
    "summary",
    # Derivative synthesis
    "DifferentiationAdapter",
    "derive",
    # Errors
    "DynamicalSystemError",
    "DimensionMismatch",
    "MissingRuleError",
    "InvalidArgument",
    "DifferentiationFailure",
    # Builtin maps
    "LogisticMap",
    "HenonMap",
    "StandardMap",
    "CoupledStandardMaps",
]
