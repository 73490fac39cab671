# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Creation and inspection of mask tensors."""

from __future__ import annotations

from typing import Any

from .. import _backend
from ..data import Data, Reader, Shape
from ..device import DeviceLike, normalize_device
from ..errors import InvalidArgumentError
from .base import BOOL_PRIMITIVES


class BoolTensorOps:
    def __init__(self, backend: Any):
        _backend.ensure_operations(backend, BOOL_PRIMITIVES, "bool")
        self.backend = backend

    def bool_from_data(self, data: Data, device: DeviceLike = None) -> Any:
        for value in data.value:
            if value not in (0, 1):
                raise InvalidArgumentError(f"mask values must be 0/1 or booleans, got {value!r}")
        return self.backend.bool_from_data(data, normalize_device(device))

    def bool_into_data(self, tensor: Any) -> Reader[Data]:
        return self.backend.bool_into_data(tensor)

    def bool_shape(self, tensor: Any) -> Shape:
        return self.backend.bool_shape(tensor)

    def bool_device(self, tensor: Any):
        return self.backend.bool_device(tensor)


__all__ = ["BoolTensorOps"]
