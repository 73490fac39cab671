# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Operation contracts: backend primitives, derived defaults and the validating facades."""

from . import derived, windowing
from .base import (
    BOOL_PRIMITIVES,
    FLOAT_PRIMITIVES,
    INT_PRIMITIVES,
    BoolTensorBackend,
    FloatTensorBackend,
    IntTensorBackend,
)
from .bool_tensor import BoolTensorOps
from .derived import DERIVED_OPERATIONS
from .float_tensor import FloatTensorOps
from .int_tensor import IntTensorOps

__all__ = [
    "derived",
    "windowing",
    "IntTensorBackend",
    "FloatTensorBackend",
    "BoolTensorBackend",
    "INT_PRIMITIVES",
    "FLOAT_PRIMITIVES",
    "BOOL_PRIMITIVES",
    "DERIVED_OPERATIONS",
    "IntTensorOps",
    "FloatTensorOps",
    "BoolTensorOps",
]
