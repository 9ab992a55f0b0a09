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
Utility Types and Helpers

Provides:
- Type guards (is_numpy, is_torch, is_jax, is_scalar_like)
- Backend detection (get_backend)
- Conversion to NumPy (ensure_numpy)
- Execution statistics (ExecutionStats)

Update rules may return arrays from any backend; these helpers bring their
results back to NumPy so that stored states are always NumPy.
"""

import numbers

import numpy as np
from typing_extensions import TypedDict

from .core import ArrayLike

# ============================================================================
# Type Guards
# ============================================================================


def is_numpy(x: ArrayLike) -> bool:
    """
    Check if array is NumPy ndarray.

    Examples
    --------
    >>> is_numpy(np.array([1.0, 2.0]))
    True
    """
    return isinstance(x, np.ndarray)


def is_torch(x: ArrayLike) -> bool:
    """
    Check if array is PyTorch tensor.

    Examples
    --------
    >>> import torch
    >>> is_torch(torch.tensor([1.0]))
    True
    >>> is_torch(np.array([1.0]))
    False
    """
    try:
        import torch

        return isinstance(x, torch.Tensor)
    except ImportError:
        return False


def is_jax(x: ArrayLike) -> bool:
    """
    Check if array is JAX array.

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> is_jax(jnp.array([1.0]))
    True
    >>> is_jax(np.array([1.0]))
    False
    """
    try:
        import jax

        return isinstance(x, jax.Array)
    except ImportError:
        return False


def is_scalar_like(x) -> bool:
    """
    Check if value is a bare number or a 0-d array.

    Parameters
    ----------
    x : Any
        Value to check

    Returns
    -------
    bool
        True for Python numbers, NumPy scalars and 0-d arrays of any backend.
        Booleans are not considered scalars.

    Examples
    --------
    >>> is_scalar_like(0.2)
    True
    >>> is_scalar_like(np.float32(0.2))
    True
    >>> is_scalar_like(np.array([0.2]))
    False
    """
    if isinstance(x, (bool, np.bool_)):
        return False
    if isinstance(x, (numbers.Number, np.number)):
        return True
    shape = getattr(x, "shape", None)
    return shape is not None and tuple(shape) == ()


def get_backend(x: ArrayLike) -> str:
    """
    Detect backend from array type.

    Returns
    -------
    str
        'numpy', 'torch', or 'jax'

    Raises
    ------
    TypeError
        If backend cannot be determined
    """
    if is_numpy(x):
        return "numpy"
    elif is_torch(x):
        return "torch"
    elif is_jax(x):
        return "jax"
    else:
        raise TypeError(f"Unknown backend for type {type(x)}")


# ============================================================================
# Type Conversion Functions
# ============================================================================


def ensure_numpy(x: ArrayLike) -> np.ndarray:
    """
    Convert to NumPy array regardless of backend.

    Handles conversion from PyTorch tensors and JAX arrays. NumPy arrays
    are returned as-is (no copy).

    Examples
    --------
    >>> import torch
    >>> type(ensure_numpy(torch.tensor([1.0, 2.0])))
    <class 'numpy.ndarray'>
    """
    if isinstance(x, np.ndarray):
        return x

    if is_torch(x):
        return x.detach().cpu().numpy()

    if is_jax(x):
        return np.asarray(x)

    # Lists, tuples, Python scalars
    return np.asarray(x)


# ============================================================================
# Performance Types
# ============================================================================


class ExecutionStats(TypedDict):
    """Execution statistics for tracking function performance.

    Tracks runtime performance of any callable component:
    - Call frequency
    - Total evaluation time
    - Average execution time
    """

    calls: int
    total_time: float
    avg_time: float


__all__ = [
    "is_numpy",
    "is_torch",
    "is_jax",
    "is_scalar_like",
    "get_backend",
    "ensure_numpy",
    "ExecutionStats",
]
