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
Core System Classes
===================

The closed set of discrete system variants:

    DiscreteDynamicalSystem (abstract)
    ├── DiscreteDS       small, fixed dimension, immutable states
    ├── DiscreteDS1D     one-dimensional, scalar states
    └── BigDiscreteDS    large, in-place updates through scratch buffers

Method Interfaces
----------------
dimension (property) → int
step(state) → next state, system untouched
step_in_place() → self, state advanced by one step
jacobian(state) → ∂f/∂x at state
evolve(steps) / evolve_in_place(steps) / trajectory(steps)
summary() → str
"""

from dmsym.systems.base.core.discrete_system_base import DiscreteDynamicalSystem, summary
from dmsym.systems.base.core.discrete_ds import DiscreteDS
from dmsym.systems.base.core.discrete_ds_1d import DiscreteDS1D
from dmsym.systems.base.core.big_discrete_ds import BigDiscreteDS

__all__ = [
    "DiscreteDynamicalSystem",
    "DiscreteDS",
    "DiscreteDS1D",
    "BigDiscreteDS",
    "summary",
]
