# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Integer element types and the conversion rule for scalar literals.

Every scalar operand handed to an ``*_elem`` or ``*_scalar`` operation goes
through :func:`to_elem`:

* ``bool`` values become ``0`` or ``1``;
* integers are kept as-is and must fit the element type;
* finite floats are truncated toward zero and must then fit the element type;
* ``nan`` and infinities are rejected.

This is the only place where an implicit loss of precision is permitted.
"""

from __future__ import annotations

import math
from numbers import Integral, Real
from typing import Any, Dict, Union

import numpy as np

from .errors import InvalidArgumentError, OutOfRangeError


class IntDType:
    """A signed integer element type of a fixed bit width."""

    __slots__ = ("name", "bits")

    def __init__(self, name: str, bits: int):
        self.name = name
        self.bits = bits

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1

    @property
    def numpy_dtype(self) -> "np.dtype":
        return np.dtype(self.name)

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IntDType):
            return self.name == other.name
        if isinstance(other, str):
            return self.name == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"IntDType({self.name!r})"

    def __str__(self) -> str:
        return self.name


INT32 = IntDType("int32", 32)
INT64 = IntDType("int64", 64)

_DTYPES: Dict[str, IntDType] = {INT32.name: INT32, INT64.name: INT64}


def get_dtype(dtype: Union[str, IntDType, "np.dtype"]) -> IntDType:
    """Resolve ``dtype`` to one of the supported integer element types."""

    if isinstance(dtype, IntDType):
        return dtype
    key = str(np.dtype(dtype)) if not isinstance(dtype, str) else dtype
    try:
        return _DTYPES[key]
    except KeyError:
        supported = ", ".join(sorted(_DTYPES))
        raise ValueError(
            f"Unsupported integer dtype '{dtype}'; expected one of: {supported}"
        ) from None


def supported_dtypes() -> tuple[str, ...]:
    return tuple(sorted(_DTYPES))


def to_elem(value: Any, dtype: Union[str, IntDType] = INT64) -> int:
    """Convert a numeric literal to a value of the integer element type ``dtype``."""

    target = get_dtype(dtype)

    if isinstance(value, (bool, np.bool_)):
        return int(value)

    if isinstance(value, Integral):
        converted = int(value)
    elif isinstance(value, Real):
        as_float = float(value)
        if not math.isfinite(as_float):
            raise InvalidArgumentError(
                f"cannot convert non-finite value {as_float!r} to {target.name}"
            )
        converted = math.trunc(as_float)
    elif hasattr(value, "__index__"):
        converted = value.__index__()
    else:
        raise TypeError(
            f"expected a numeric scalar, got {type(value).__name__}"
        )

    if not target.contains(converted):
        raise OutOfRangeError(
            f"value {value!r} is not representable as {target.name} "
            f"(valid range [{target.min}, {target.max}])"
        )
    return converted


def elem_to_float(value: Any) -> float:
    """Widen an element value to a Python float."""

    if isinstance(value, (bool, np.bool_)):
        return float(int(value))
    if isinstance(value, Real):
        return float(value)
    raise TypeError(f"expected a numeric scalar, got {type(value).__name__}")


__all__ = [
    "IntDType",
    "INT32",
    "INT64",
    "get_dtype",
    "supported_dtypes",
    "to_elem",
    "elem_to_float",
]
