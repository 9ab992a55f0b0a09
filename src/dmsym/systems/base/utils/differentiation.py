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
Differentiation Adapter for Discrete Dynamical Systems

Synthesizes derivative rules for systems constructed without one.

Responsibilities:
- Jacobian of an out-of-place vector rule: J = ∂f/∂x (D, D)
- Derivative of a scalar rule: f'(x)
- Jacobian of an in-place rule, written into a caller-supplied buffer
- Backend dispatch (JAX, PyTorch)
- Performance tracking

All derivatives are computed with forward-mode automatic differentiation,
exact to floating point precision. No finite differences and no symbolic
manipulation are involved. Behaviour at non-differentiable points is
whatever the dual-number arithmetic yields.

Importing this module switches JAX to 64-bit mode so that JAX-traced rules
evaluate in float64, like the NumPy states they are applied to.
"""

import time
from typing import Callable, Optional

import jax
import jax.numpy as jnp
import numpy as np

from dmsym.systems.base.utils.system_validator import (
    DifferentiationFailure,
    DynamicalSystemError,
)
from dmsym.types.backends import (
    DEFAULT_AD_BACKEND,
    DifferentiationBackend,
    DifferentiationConfig,
    validate_ad_backend,
)
from dmsym.types.core import (
    EquationsOfMotion,
    InPlaceEquationsOfMotion,
    InPlaceJacobianFunction,
    JacobianFunction,
    ScalarMap,
)
from dmsym.types.utilities import ExecutionStats

jax.config.update("jax_enable_x64", True)
_JAX_X64 = True

# Errors raised by the AD machinery when a rule cannot be traced
_AD_ERRORS = (TypeError, ValueError, RuntimeError)


def _rule_name(rule: Callable) -> str:
    return getattr(rule, "__name__", type(rule).__name__)


class DifferentiationAdapter:
    """
    Builds derivative callables from update rules via forward-mode AD.

    Each ``jacobian``/``derivative``/``inplace_jacobian`` call returns a new
    callable bound to the given rule. Systems call these once at
    construction and store the result.

    Example:
        >>> adapter = DifferentiationAdapter(backend='jax')
        >>> henon = lambda x: jnp.array([1 - 1.4 * x[0]**2 + x[1], 0.3 * x[0]])
        >>> jac = adapter.jacobian(henon)
        >>> jac(np.array([0.1, 0.2]))
        array([[-0.28,  1.  ],
               [ 0.3 ,  0.  ]])
        >>>
        >>> # Get performance stats
        >>> stats = adapter.get_stats()
        >>> print(f"Average time: {stats['avg_time']:.6f}s")
    """

    def __init__(self, backend: DifferentiationBackend = DEFAULT_AD_BACKEND):
        """
        Initialize differentiation adapter.

        Args:
            backend: Backend for out-of-place rules ('jax' or 'torch').
                In-place rules always use PyTorch.

        Raises:
            ValueError: If backend is not a valid differentiation backend
        """
        self.backend = validate_ad_backend(backend)

        # Performance tracking
        self._stats = {
            "calls": 0,
            "time": 0.0,
        }

    # ========================================================================
    # Main Differentiation API
    # ========================================================================

    def jacobian(self, eom: EquationsOfMotion) -> JacobianFunction:
        """
        Synthesize the Jacobian rule of a vector update rule.

        Args:
            eom: Pure rule x -> x_next. Must be written with operations the
                backend can trace (jax.numpy or torch, indexing, arithmetic).

        Returns:
            Callable x -> (D, D) NumPy array

        Example:
            >>> jac = adapter.jacobian(eom)
            >>> J = jac(np.array([0.1, 0.2]))
        """
        if self.backend == "jax":
            jac_fn = jax.jacfwd(eom)

            def evaluate(x):
                return np.array(jac_fn(jnp.asarray(x)))

        else:
            import torch
            from torch.func import jacfwd

            jac_fn = jacfwd(eom)

            def evaluate(x):
                return jac_fn(torch.from_numpy(np.array(x))).detach().cpu().numpy()

        def forward_jacobian(x):
            return self._run(evaluate, x, eom, self.backend)

        forward_jacobian.__name__ = f"forward_jacobian({_rule_name(eom)})"
        return forward_jacobian

    def derivative(self, eom: ScalarMap) -> ScalarMap:
        """
        Synthesize the derivative of a scalar update rule.

        Computed as a single Jacobian-vector product with unit tangent.

        Args:
            eom: Pure rule x -> x_next on numbers

        Returns:
            Callable x -> f'(x) (Python number)

        Example:
            >>> deriv = adapter.derivative(lambda x: 4.0 * x * (1 - x))
            >>> deriv(0.2)
            2.4
        """
        if self.backend == "jax":

            def evaluate(x):
                x = jnp.asarray(x)
                _, tangent = jax.jvp(eom, (x,), (jnp.ones_like(x),))
                return np.asarray(tangent).item()

        else:
            import torch
            from torch.func import jvp

            def evaluate(x):
                x = torch.from_numpy(np.array(x))
                _, tangent = jvp(eom, (x,), (torch.ones_like(x),))
                return tangent.item()

        def forward_derivative(x):
            return self._run(evaluate, x, eom, self.backend)

        forward_derivative.__name__ = f"forward_derivative({_rule_name(eom)})"
        return forward_derivative

    def inplace_jacobian(self, eom_inplace: InPlaceEquationsOfMotion) -> InPlaceJacobianFunction:
        """
        Synthesize the in-place Jacobian rule of an in-place update rule.

        The in-place rule is wrapped in a temporary out-of-place closure that
        allocates a fresh output tensor, and one forward-mode pass is made per
        basis direction e_i, yielding column i of the Jacobian. Uses
        ``torch.autograd.forward_ad`` since the rule has to write into its
        output buffer.

        Args:
            eom_inplace: Rule eom_inplace(xnew, x) writing into xnew

        Returns:
            Callable jacob_inplace(J, x) writing ∂f/∂x into J

        Raises:
            DifferentiationFailure: When evaluated, if the rule converts its
                tensor arguments to NumPy (e.g. ``np.sin(x)``), which would
                silently discard the tangents
        """
        import torch
        import torch.autograd.forward_ad as fwAD
        from torch.overrides import TorchFunctionMode

        class RejectNumpyConversion(TorchFunctionMode):
            # NumPy conversion drops the tangent and would leave a zero column
            def __torch_function__(self, func, types, args=(), kwargs=None):
                if func in (torch.Tensor.__array__, torch.Tensor.numpy, torch.Tensor.tolist):
                    raise RuntimeError(
                        "rule converted a tensor to NumPy during differentiation; "
                        "write it with torch-compatible operations or supply jacob_inplace"
                    )
                return func(*args, **(kwargs or {}))

        def out_of_place(x):
            out = torch.zeros_like(x)
            with RejectNumpyConversion():
                eom_inplace(out, x)
            return out

        def evaluate(J, x):
            x_t = torch.from_numpy(np.array(x))
            dimension = x_t.shape[0]
            with fwAD.dual_level():
                for i in range(dimension):
                    direction = torch.zeros_like(x_t)
                    direction[i] = 1.0
                    out = out_of_place(fwAD.make_dual(x_t, direction))
                    column = fwAD.unpack_dual(out).tangent
                    # Outputs that never touched the input carry no tangent
                    J[:, i] = 0.0 if column is None else column.detach().cpu().numpy()

        def forward_jacobian_inplace(J, x):
            self._run(lambda state: evaluate(J, state), x, eom_inplace, "torch")

        forward_jacobian_inplace.__name__ = f"forward_jacobian_inplace({_rule_name(eom_inplace)})"
        return forward_jacobian_inplace

    # ========================================================================
    # Evaluation and Error Handling
    # ========================================================================

    def _run(self, evaluate: Callable, x, rule: Callable, backend: str):
        """Evaluate a synthesized derivative, tracking time and wrapping AD errors."""
        start_time = time.time()

        try:
            result = evaluate(x)
        except DynamicalSystemError:
            raise
        except _AD_ERRORS as exc:
            raise DifferentiationFailure(
                f"Automatic differentiation ({backend}) failed to evaluate rule "
                f"'{_rule_name(rule)}': {exc}"
            ) from exc

        # Update performance stats
        self._stats["calls"] += 1
        self._stats["time"] += time.time() - start_time

        return result

    # ========================================================================
    # Configuration and Performance Tracking
    # ========================================================================

    def get_config(self) -> DifferentiationConfig:
        """Get adapter configuration."""
        return {
            "backend": self.backend,
            "enable_x64": _JAX_X64,
        }

    def get_stats(self) -> ExecutionStats:
        """
        Get performance statistics.

        Returns:
            Dict with call count, total time, and average time
        """
        return {
            "calls": self._stats["calls"],
            "total_time": self._stats["time"],
            "avg_time": self._stats["time"] / max(1, self._stats["calls"]),
        }

    def reset_stats(self):
        """Reset performance counters."""
        self._stats["calls"] = 0
        self._stats["time"] = 0.0

    # ========================================================================
    # String Representations
    # ========================================================================

    def __repr__(self) -> str:
        return f"DifferentiationAdapter(backend='{self.backend}')"


# ============================================================================
# Convenience Function
# ============================================================================


def derive(
    f: Callable,
    form: str = "vector",
    backend: Optional[DifferentiationBackend] = None,
) -> Callable:
    """
    Synthesize the derivative rule of ``f``.

    Parameters
    ----------
    f : Callable
        Update rule
    form : str
        - 'vector': f(x) -> x_next, returns x -> (D, D) Jacobian
        - 'scalar': f(x) -> number, returns x -> f'(x)
        - 'inplace': f(xnew, x), returns (J, x) -> None writing into J
    backend : Optional[DifferentiationBackend]
        Backend for out-of-place forms (default: DEFAULT_AD_BACKEND)

    Returns
    -------
    Callable
        The derivative rule

    Raises
    ------
    ValueError
        If form is unknown

    Examples
    --------
    >>> deriv = derive(lambda x: 4.0 * x * (1 - x), form="scalar")
    >>> deriv(0.5)
    0.0
    """
    adapter = DifferentiationAdapter(backend or DEFAULT_AD_BACKEND)

    if form == "vector":
        return adapter.jacobian(f)
    elif form == "scalar":
        return adapter.derivative(f)
    elif form == "inplace":
        return adapter.inplace_jacobian(f)
    else:
        raise ValueError(
            f"Unknown derivative form '{form}'. Must be one of: vector, scalar, inplace"
        )


__all__ = [
    "DifferentiationAdapter",
    "derive",
]
