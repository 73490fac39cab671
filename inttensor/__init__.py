# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from . import backends, ops
from ._backend import (
    available_backends,
    get_backend,
    get_default_backend,
    get_default_dtype,
    register_backend,
    set_default_backend,
    set_default_dtype,
)
from .backends import NdArrayBackend
from .data import Data, Reader, Shape
from .device import Device, normalize_device
from .element import INT32, INT64, IntDType, get_dtype, to_elem
from .errors import (
    BackendCapabilityError,
    InvalidArgumentError,
    OutOfRangeError,
    ShapeMismatchError,
    TensorOpError,
)
from .ops import (
    BoolTensorBackend,
    BoolTensorOps,
    FloatTensorBackend,
    FloatTensorOps,
    IntTensorBackend,
    IntTensorOps,
)

__version__ = "0.1.0"
__version_tuple__ = (0, 1, 0)

device = Device
cpu = Device.cpu
cuda = Device.cuda

__all__ = [
    "IntTensorOps",
    "FloatTensorOps",
    "BoolTensorOps",
    "IntTensorBackend",
    "FloatTensorBackend",
    "BoolTensorBackend",
    "NdArrayBackend",
    "Data",
    "Reader",
    "Shape",
    "Device",
    "device",
    "cpu",
    "cuda",
    "normalize_device",
    "IntDType",
    "INT32",
    "INT64",
    "get_dtype",
    "to_elem",
    "TensorOpError",
    "ShapeMismatchError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "BackendCapabilityError",
    "register_backend",
    "get_backend",
    "set_default_backend",
    "get_default_backend",
    "available_backends",
    "set_default_dtype",
    "get_default_dtype",
    "backends",
    "ops",
]
