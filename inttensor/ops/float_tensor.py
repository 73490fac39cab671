# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Validated access to the float operations the integer contract delegates to."""

from __future__ import annotations

from typing import Any

from .. import _backend
from ..data import Data, Reader, Shape
from ..device import DeviceLike, normalize_device
from ..element import elem_to_float
from ..errors import ShapeMismatchError
from .base import FLOAT_PRIMITIVES


class FloatTensorOps:
    """Float companion of :class:`~inttensor.ops.int_tensor.IntTensorOps`."""

    def __init__(self, backend: Any):
        _backend.ensure_operations(backend, FLOAT_PRIMITIVES, "float")
        self.backend = backend

    def float_from_data(self, data: Data, device: DeviceLike = None) -> Any:
        return self.backend.float_from_data(data, normalize_device(device))

    def float_into_data(self, tensor: Any) -> Reader[Data]:
        return self.backend.float_into_data(tensor)

    def float_shape(self, tensor: Any) -> Shape:
        return self.backend.float_shape(tensor)

    def float_device(self, tensor: Any):
        return self.backend.float_device(tensor)

    def float_into_int(self, tensor: Any) -> Any:
        return self.backend.float_into_int(tensor)

    def float_powf(self, lhs: Any, rhs: Any) -> Any:
        lhs_shape = self.float_shape(lhs)
        rhs_shape = self.float_shape(rhs)
        if lhs_shape != rhs_shape:
            raise ShapeMismatchError(
                f"float_powf expects equal shapes, got {list(lhs_shape)} and {list(rhs_shape)}"
            )
        return self.backend.float_powf(lhs, rhs)

    def float_powf_scalar(self, lhs: Any, rhs: float) -> Any:
        return self.backend.float_powf_scalar(lhs, elem_to_float(rhs))


__all__ = ["FloatTensorOps"]
