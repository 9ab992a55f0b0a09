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
Discrete-Time Deterministic Chaotic Maps
========================================

Small systems:
- LogisticMap: x' = r·x·(1 - x)  (one-dimensional)
- HenonMap: 2D dissipative map with a strange attractor
- StandardMap: 2D area-preserving kicked rotor

Large systems:
- CoupledStandardMaps: ring of M coupled standard maps (in-place updates)
"""

from .logistic_map import LogisticMap
from .henon_map import HenonMap
from .standard_map import StandardMap
from .coupled_standard_maps import CoupledStandardMaps

__all__ = [
    "LogisticMap",
    "HenonMap",
    "StandardMap",
    "CoupledStandardMaps",
]
