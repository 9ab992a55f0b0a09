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
Utility Components for Discrete Dynamical Systems
=================================================

- system_validator: input validation and the error taxonomy
- differentiation: forward-mode derivative synthesis (JAX, PyTorch)
"""

from dmsym.systems.base.utils.system_validator import (
    DifferentiationFailure,
    DimensionMismatch,
    DynamicalSystemError,
    InvalidArgument,
    MissingRuleError,
    validate_jacobian_buffer,
    validate_large_state,
    validate_rule,
    validate_scalar_state,
    validate_small_state,
    validate_steps,
)
from dmsym.systems.base.utils.differentiation import DifferentiationAdapter, derive

__all__ = [
    # Errors
    "DynamicalSystemError",
    "DimensionMismatch",
    "MissingRuleError",
    "InvalidArgument",
    "DifferentiationFailure",
    # Validation
    "validate_small_state",
    "validate_scalar_state",
    "validate_large_state",
    "validate_jacobian_buffer",
    "validate_rule",
    "validate_steps",
    # Differentiation
    "DifferentiationAdapter",
    "derive",
]
