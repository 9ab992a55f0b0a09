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
Evolution of Discrete Dynamical Systems
=======================================

- evolution_engine: evolve, evolve_in_place, dimension
- trajectory_builder: trajectory
"""

from dmsym.systems.base.evolution.evolution_engine import dimension, evolve, evolve_in_place
from dmsym.systems.base.evolution.trajectory_builder import trajectory

__all__ = [
    "dimension",
    "evolve",
    "evolve_in_place",
    "trajectory",
]
