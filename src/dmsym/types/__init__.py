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
Types Module - Type Definitions for DiscreteMapSymulation

Central import point for all type definitions.

Module Organization
------------------
- core: Arrays, states, Jacobians, rule signatures, SystemKind
- trajectories: Trajectory arrays and the Dataset container
- backends: Differentiation backends and numerical defaults
- utilities: Type guards, converters, execution statistics
"""

# ============================================================================
# Core Types
# ============================================================================

from .core import (
    ArrayLike,
    EquationsOfMotion,
    InPlaceEquationsOfMotion,
    InPlaceJacobianFunction,
    JacobianFunction,
    JacobianMatrix,
    ScalarLike,
    ScalarMap,
    ScalarState,
    StateVector,
    SystemKind,
)

# ============================================================================
# Trajectories
# ============================================================================

from .trajectories import Dataset, ScalarTrajectory, StateTrajectory

# ============================================================================
# Backends and Configuration
# ============================================================================

from .backends import (
    DEFAULT_AD_BACKEND,
    DEFAULT_DTYPE,
    SMALL_SYSTEM_MAX_DIMENSION,
    VALID_AD_BACKENDS,
    DifferentiationBackend,
    DifferentiationConfig,
    validate_ad_backend,
)

# ============================================================================
# Utilities
# ============================================================================

from .utilities import (
    ExecutionStats,
    ensure_numpy,
    get_backend,
    is_jax,
    is_numpy,
    is_scalar_like,
    is_torch,
)

__all__ = [
    # Core
    "ArrayLike",
    "ScalarLike",
    "StateVector",
    "ScalarState",
    "JacobianMatrix",
    "EquationsOfMotion",
    "JacobianFunction",
    "ScalarMap",
    "InPlaceEquationsOfMotion",
    "InPlaceJacobianFunction",
    "SystemKind",
    # Trajectories
    "StateTrajectory",
    "ScalarTrajectory",
    "Dataset",
    # Backends
    "DifferentiationBackend",
    "DifferentiationConfig",
    "VALID_AD_BACKENDS",
    "DEFAULT_AD_BACKEND",
    "DEFAULT_DTYPE",
    "SMALL_SYSTEM_MAX_DIMENSION",
    "validate_ad_backend",
    # Utilities
    "ExecutionStats",
    "ensure_numpy",
    "get_backend",
    "is_jax",
    "is_numpy",
    "is_scalar_like",
    "is_torch",
]
