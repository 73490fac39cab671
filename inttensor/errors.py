# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Exception types raised by the integer tensor operations.

The classes also derive from the matching built-in exception so callers that
only catch ``ValueError`` or ``IndexError`` keep working.
"""

from __future__ import annotations


class TensorOpError(Exception):
    """Base class for every error raised by ``inttensor``."""


class ShapeMismatchError(TensorOpError, ValueError):
    """Operand ranks or extents violate an operation's compatibility rule."""


class OutOfRangeError(TensorOpError, IndexError):
    """An index, range bound, dimension or scalar lies outside its valid range."""


class InvalidArgumentError(TensorOpError, ValueError):
    """A structural precondition of an operation is violated."""


class BackendCapabilityError(TensorOpError, RuntimeError):
    """The backend does not provide an operation the contract requires."""


__all__ = [
    "TensorOpError",
    "ShapeMismatchError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "BackendCapabilityError",
]
