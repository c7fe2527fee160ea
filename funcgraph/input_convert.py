# === SECTION: InputConvert [id: InputConvert]===
from __future__ import annotations

import math
from typing import Any, Type, TypeVar

import sympy as sp

T = TypeVar("T", int, float)


def _as_real(value: complex, dest_type: Type[T], truncate: bool, original: Any) -> T:
    if value.imag != 0:
        raise ValueError(
            f"Could not convert non-real {original!r} to {dest_type.__name__}: imaginary part is non-zero."
        )
    real = value.real
    if dest_type is float:
        return float(real)  # type: ignore[return-value]
    if not math.isfinite(real):
        raise ValueError(f"Could not convert non-finite {original!r} to int.")
    if not truncate and not real.is_integer():
        raise ValueError(f"Could not convert {original!r} to int: value is not an exact integer.")
    return int(real)  # type: ignore[return-value]


def _from_sympy(expr: sp.Basic, dest_type: Type[T], truncate: bool, original: Any) -> T:
    if expr.free_symbols:
        names = ", ".join(sorted(str(s) for s in expr.free_symbols))
        raise ValueError(
            f"Could not convert {original!r} to {dest_type.__name__}: expression has free symbols ({names})."
        )
    try:
        numeric = complex(expr.evalf())
    except TypeError as exc:
        raise ValueError(f"Could not convert {original!r} to {dest_type.__name__}.") from exc
    return _as_real(numeric, dest_type, truncate, original)


def _from_string(text: str, dest_type: Type[T], truncate: bool) -> T:
    stripped = text.strip()
    if not stripped:
        raise ValueError(f"Cannot convert empty string to {dest_type.__name__}.")
    try:
        return _as_real(complex(float(stripped)), dest_type, truncate, text)
    except ValueError:
        pass
    try:
        expr = sp.sympify(stripped)
    except (sp.SympifyError, SyntaxError, TypeError) as exc:
        raise ValueError(
            f"Could not convert {text!r} to {dest_type.__name__} (neither directly nor via SymPy)."
        ) from exc
    if not isinstance(expr, sp.Basic):
        raise ValueError(f"Could not convert {text!r} to {dest_type.__name__}.")
    return _from_sympy(expr, dest_type, truncate, text)


def InputConvert(obj: Any, dest_type: Type[T] = float, truncate: bool = True) -> T:
    """
    Convert a configuration value (size, interval bound, sample count) to a real number.

    Supported destination types are ``float`` and ``int``.

    Accepted inputs:
    - Python and NumPy real scalars.
    - Strings: parsed with ``float`` first, then as a SymPy expression such as
      ``"pi"``, ``"2*pi"`` or ``"sqrt(2)"``.
    - SymPy expressions without free symbols, evaluated numerically.

    Booleans and values with a non-zero imaginary part are rejected. For
    ``int`` destinations, ``truncate=True`` drops the fractional part
    (``3.9 -> 3``); ``truncate=False`` requires an exact integer.

    Raises
    ------
    NotImplementedError
        If dest_type is unsupported.
    ValueError
        If the value does not denote one real number, or violates truncation rules.
    """
    if dest_type not in (float, int):
        raise NotImplementedError(
            f"Unsupported destination type: {dest_type!r}. Only float and int are supported."
        )

    # bool is an int subclass but never a meaningful coordinate
    if isinstance(obj, bool):
        raise ValueError(f"Could not convert boolean {obj!r} to {dest_type.__name__}.")
    if isinstance(obj, str):
        return _from_string(obj, dest_type, truncate)
    if isinstance(obj, sp.Basic):
        return _from_sympy(obj, dest_type, truncate, obj)

    try:
        numeric = complex(obj)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}.") from exc
    return _as_real(numeric, dest_type, truncate, obj)

# === END OF SECTION: InputConvert [id: InputConvert]===
