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
Base Components for Discrete Dynamical Systems
==============================================

- utils: validation, errors, derivative synthesis
- evolution: evolve / evolve_in_place / trajectory
- core: the system classes
"""

from dmsym.systems.base.utils import (
    DifferentiationAdapter,
    DifferentiationFailure,
    DimensionMismatch,
    DynamicalSystemError,
    InvalidArgument,
    MissingRuleError,
    derive,
)
from dmsym.systems.base.evolution import dimension, evolve, evolve_in_place, trajectory
from dmsym.systems.base.core import (
    BigDiscreteDS,
    DiscreteDS,
    DiscreteDS1D,
    DiscreteDynamicalSystem,
    summary,
)

__all__ = [
    "DiscreteDynamicalSystem",
    "DiscreteDS",
    "DiscreteDS1D",
    "BigDiscreteDS",
    "summary",
    "dimension",
    "evolve",
    "evolve_in_place",
    "trajectory",
    "DifferentiationAdapter",
    "derive",
    "DynamicalSystemError",
    "DimensionMismatch",
    "MissingRuleError",
    "InvalidArgument",
    "DifferentiationFailure",
]
