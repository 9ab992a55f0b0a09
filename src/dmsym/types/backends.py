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
Backend and Configuration Types

Defines types and defaults related to:
- Automatic differentiation backends (JAX, PyTorch)
- Numerical defaults (dtype)
- Size regime thresholds for discrete systems

Usage
-----
>>> from dmsym.types.backends import DifferentiationBackend, validate_ad_backend
>>>
>>> def make_adapter(backend: DifferentiationBackend = "jax"):
...     backend = validate_ad_backend(backend)
...     ...
"""

from typing import Literal

import numpy as np
from typing_extensions import TypedDict

# ============================================================================
# Differentiation Backend Types
# ============================================================================

DifferentiationBackend = Literal["jax", "torch"]
"""
Automatic differentiation backend.

- 'jax': jax.jacfwd / jax.jvp (default for out-of-place rules)
- 'torch': torch.func.jacfwd / torch.func.jvp and torch.autograd.forward_ad

In-place rules are always differentiated with PyTorch, since JAX arrays
cannot be written to.
"""


class DifferentiationConfig(TypedDict, total=False):
    """
    Differentiation adapter configuration.

    Attributes
    ----------
    backend : DifferentiationBackend
        Backend used for out-of-place rules
    enable_x64 : bool
        Whether JAX runs in 64-bit mode
    """

    backend: DifferentiationBackend
    enable_x64: bool


# ============================================================================
# Constants
# ============================================================================

VALID_AD_BACKENDS = ("jax", "torch")
"""Tuple of valid differentiation backend names."""

DEFAULT_AD_BACKEND: DifferentiationBackend = "jax"
"""Default differentiation backend for out-of-place rules."""

DEFAULT_DTYPE = np.float64
"""
Default floating point dtype.

Integer initial states are promoted to this dtype.
"""

SMALL_SYSTEM_MAX_DIMENSION = 10
"""
Largest dimension recommended for DiscreteDS.

Above it, allocating a fresh state each step dominates and BigDiscreteDS
(in-place updates) should be preferred.
"""


# ============================================================================
# Validation Helpers
# ============================================================================


def validate_ad_backend(backend: str) -> DifferentiationBackend:
    """
    Validate a differentiation backend name.

    Parameters
    ----------
    backend : str
        Backend name to validate

    Returns
    -------
    DifferentiationBackend
        The validated backend name

    Raises
    ------
    ValueError
        If backend is not one of VALID_AD_BACKENDS

    Examples
    --------
    >>> validate_ad_backend("jax")
    'jax'
    >>> validate_ad_backend("numpy")
    Traceback (most recent call last):
    ...
    ValueError: Invalid differentiation backend 'numpy'. Must be one of: jax, torch
    """
    if backend not in VALID_AD_BACKENDS:
        raise ValueError(
            f"Invalid differentiation backend '{backend}'. "
            f"Must be one of: {', '.join(VALID_AD_BACKENDS)}"
        )
    return backend


__all__ = [
    "DifferentiationBackend",
    "DifferentiationConfig",
    "VALID_AD_BACKENDS",
    "DEFAULT_AD_BACKEND",
    "DEFAULT_DTYPE",
    "SMALL_SYSTEM_MAX_DIMENSION",
    "validate_ad_backend",
]
