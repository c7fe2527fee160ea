"""Normalize user function inputs into safe scalar callables.

Purpose
-------
Every detector and sampler in :mod:`funcgraph` evaluates functions one
x-value at a time and treats "undefined here" as ``nan``. This module turns
the accepted function forms into :class:`RealFunction` objects that honor that
contract:

- plain Python callables of one positional argument,
- SymPy expressions in (at most) one free symbol,
- strings parsed with :func:`sympy.sympify` (e.g. ``"x**2 - 4"``).

Concepts and structure
----------------------
``RealFunction`` wraps the underlying callable and converts numerical failure
into ``nan`` instead of raising:

- ``ZeroDivisionError`` (``1/x`` at ``x = 0`` with Python floats),
- ``OverflowError`` (``math.exp(1000)``),
- ``ValueError`` (``math.sqrt(-1)``, ``math.log(0)``),
- complex or SymPy ``zoo``/``nan`` results.

NumPy floating-point warnings are silenced with :func:`numpy.errstate` while
the callable runs. Anything else (a callable returning ``None`` or a string)
is a programming error and propagates as ``TypeError``.

Symbolic inputs are compiled with :func:`sympy.lambdify` through an LRU cache
so repeated graphs of the same expression reuse the compiled callable.

Examples
--------
>>> import sympy as sp
>>> from funcgraph.function_input import as_real_function
>>> f = as_real_function(lambda x: 1 / x)
>>> f(0.0)
nan
>>> x = sp.Symbol("x")
>>> g = as_real_function(x**2 - 4)
>>> g(3.0)
5.0
"""

from __future__ import annotations

import inspect
import logging
import math
from functools import lru_cache
from typing import Any, Callable, Optional, Union

import numpy as np
import sympy as sp
from sympy.core.expr import Expr

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

FunctionLike = Union[Callable[[float], Any], Expr, str]

# Errors a numeric callback raises when it is undefined at a point.
_UNDEFINED_ERRORS = (ZeroDivisionError, OverflowError, ValueError, FloatingPointError)


class RealFunction:
    """Scalar real function ℝ→ℝ that reports undefined values as ``nan``.

    Parameters
    ----------
    fn : callable
        Underlying single-argument callable.
    symbolic : sympy.Expr or None, optional
        Symbolic source when the function was compiled from SymPy.
    name : str, optional
        Display name used in reprs and Plotly trace labels.
    """

    __slots__ = ("_fn", "symbolic", "name")

    def __init__(
        self,
        fn: Callable[[float], Any],
        *,
        symbolic: Optional[Expr] = None,
        name: str = "",
    ) -> None:
        self._fn = fn
        self.symbolic = symbolic
        self.name = name or getattr(fn, "__name__", "") or "f"

    def __call__(self, x: float) -> float:
        with np.errstate(all="ignore"):
            try:
                value = self._fn(x)
            except _UNDEFINED_ERRORS:
                return math.nan
        return _to_real(value)

    def evaluate(self, xs: np.ndarray) -> np.ndarray:
        """Evaluate at every x in ``xs`` and return a float array (``nan`` when undefined)."""
        return np.fromiter((self(float(x)) for x in xs), dtype=float, count=len(xs))

    def __repr__(self) -> str:
        if self.symbolic is not None:
            return f"RealFunction({self.symbolic!r})"
        return f"RealFunction({self.name})"


def _to_real(value: Any) -> float:
    """Coerce one callback result to ``float``; non-real results become ``nan``."""
    if isinstance(value, (float, int)) and not isinstance(value, bool):
        return float(value)

    if isinstance(value, sp.Basic):
        if value.free_symbols:
            raise TypeError(
                f"function returned a symbolic value with free symbols: {value!r}"
            )
        if value.is_extended_real:
            return float(value)
        return math.nan

    if isinstance(value, complex):
        return float(value.real) if value.imag == 0 else math.nan

    arr = np.asarray(value)
    if arr.dtype == object or arr.dtype.kind not in "biufc":
        raise TypeError(
            f"function must return a real number, got {type(value).__name__}"
        )
    if arr.size != 1:
        raise TypeError(
            f"function must return one value per x, got an array of shape {arr.shape}"
        )
    scalar = arr.reshape(())
    if np.iscomplexobj(scalar):
        return float(scalar.real) if scalar.imag == 0 else math.nan
    return float(scalar)


@lru_cache(maxsize=256)
def _compile_expression_cached(expr: Expr, var: Optional[sp.Symbol]) -> Callable[[float], Any]:
    if var is None:
        constant = expr
        return lambda _x: constant
    return sp.lambdify(var, expr, modules="numpy")


def _single_free_symbol(expr: Expr) -> Optional[sp.Symbol]:
    symbols = sorted(expr.free_symbols, key=lambda s: s.sort_key())
    if len(symbols) > 1:
        raise TypeError(
            "function expressions must have at most one free symbol, "
            f"got {', '.join(str(s) for s in symbols)}"
        )
    return symbols[0] if symbols else None


def _check_callable_signature(fn: Callable[..., Any]) -> None:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins (and C extensions) do not expose a signature.
        return
    params = list(sig.parameters.values())
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return
    positional = [
        p
        for p in params
        if p.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    required = [
        p
        for p in params
        if p.default is inspect.Parameter.empty
        and p.kind
        not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if not positional:
        raise TypeError("function callables must accept one positional argument x")
    if len(required) > 1:
        raise TypeError(
            "function callables must take exactly one required argument x, "
            f"got {len(required)} ({', '.join(p.name for p in required)})"
        )


def as_real_function(spec: Any, *, name: str = "") -> RealFunction:
    """Return ``spec`` normalized to a :class:`RealFunction`.

    Parameters
    ----------
    spec : callable, sympy.Expr, str or RealFunction
        Function to normalize. SymPy expressions and strings must have at most
        one free symbol; a constant expression becomes a constant function.
    name : str, optional
        Display name override.

    Returns
    -------
    RealFunction

    Raises
    ------
    TypeError
        If ``spec`` is not a supported function form.
    """
    if isinstance(spec, RealFunction):
        if name and name != spec.name:
            return RealFunction(spec._fn, symbolic=spec.symbolic, name=name)
        return spec

    if isinstance(spec, str):
        try:
            spec = sp.sympify(spec)
        except (sp.SympifyError, SyntaxError) as exc:
            raise TypeError(f"could not parse function string {spec!r}") from exc

    if isinstance(spec, (int, float)) and not isinstance(spec, bool):
        spec = sp.Float(spec)

    if isinstance(spec, sp.Basic):
        if not isinstance(spec, Expr):
            raise TypeError(f"unsupported SymPy object for a function: {type(spec).__name__}")
        var = _single_free_symbol(spec)
        compiled = _compile_expression_cached(spec, var)
        logger.debug("compiled %s in %s", spec, var)
        return RealFunction(compiled, symbolic=spec, name=name or str(spec))

    if callable(spec):
        _check_callable_signature(spec)
        return RealFunction(spec, name=name)

    raise TypeError(
        "functions must be callables, SymPy expressions, or strings, "
        f"got {type(spec).__name__}"
    )


__all__ = ["FunctionLike", "RealFunction", "as_real_function"]
