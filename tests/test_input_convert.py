"""Regression tests for numeric configuration coercion."""

from __future__ import annotations

import math
from importlib import import_module

import numpy as np
import pytest
import sympy as sp

InputConvert = import_module("funcgraph.input_convert").InputConvert


def test_inputconvert_accepts_plain_numbers_and_numpy_scalars() -> None:
    """Python and NumPy scalars should convert directly."""
    assert InputConvert(3) == 3.0
    assert InputConvert(np.float32(0.5)) == pytest.approx(0.5)
    assert InputConvert(np.int64(7), int) == 7


def test_inputconvert_parses_symbolic_strings() -> None:
    """Strings go through ``float`` first and SymPy second."""
    assert InputConvert("2.5") == 2.5
    assert InputConvert("2*pi") == pytest.approx(2 * math.pi)
    assert InputConvert("sqrt(16)", int, truncate=False) == 4


def test_inputconvert_evaluates_closed_sympy_expressions() -> None:
    """Expressions without free symbols evaluate numerically."""
    assert InputConvert(sp.pi / 2) == pytest.approx(math.pi / 2)


def test_inputconvert_rejects_free_symbols_bool_and_blank() -> None:
    """Values that do not denote one real number raise ``ValueError``."""
    with pytest.raises(ValueError, match="free symbols"):
        InputConvert(sp.Symbol("x") + 1)
    with pytest.raises(ValueError, match="boolean"):
        InputConvert(True)
    with pytest.raises(ValueError, match="empty string"):
        InputConvert("   ")
    with pytest.raises(ValueError):
        InputConvert("not a number!")


def test_inputconvert_int_truncation_flag() -> None:
    """Float -> int truncates only when allowed."""
    assert InputConvert(3.9, int) == 3
    with pytest.raises(ValueError, match="exact integer"):
        InputConvert(3.9, int, truncate=False)


def test_inputconvert_complex_requires_zero_imaginary_part() -> None:
    """Complex values must be real."""
    assert InputConvert(np.complex128(2 + 0j)) == 2.0
    with pytest.raises(ValueError):
        InputConvert(3 + 4j)


def test_inputconvert_unsupported_destination() -> None:
    """Only float and int destinations exist."""
    with pytest.raises(NotImplementedError):
        InputConvert(1, complex)  # type: ignore[arg-type]
