# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Primitive capability sets a backend implements natively.

Backends receive arguments that :class:`~inttensor.ops.int_tensor.IntTensorOps`
has already validated: shapes are :class:`~inttensor.data.Shape` objects,
devices are :class:`~inttensor.device.Device` objects, dimensions are
non-negative, slice ranges are full-rank ``(start, end)`` pairs and scalars
are already converted to the backend's element type. Backends remain
responsible for checking the *contents* of index tensors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Sequence, Tuple

from ..data import Data, Reader, Shape
from ..device import Device
from ..element import IntDType

IntTensor = Any
FloatTensor = Any
BoolTensor = Any
Ranges = Sequence[Tuple[int, int]]


class IntTensorBackend(ABC):
    """Integer operations every backend must provide."""

    #: Element type of the integer tensors this backend creates.
    int_dtype: IntDType

    def default_device(self) -> Device:
        return Device.cpu()

    # Lifecycle and metadata
    @abstractmethod
    def int_empty(self, shape: Shape, device: Device) -> IntTensor:
        """Allocate a tensor whose contents are unspecified."""

    @abstractmethod
    def int_shape(self, tensor: IntTensor) -> Shape:
        ...

    @abstractmethod
    def int_device(self, tensor: IntTensor) -> Device:
        ...

    @abstractmethod
    def int_to_device(self, tensor: IntTensor, device: Device) -> IntTensor:
        ...

    @abstractmethod
    def int_reshape(self, tensor: IntTensor, shape: Shape) -> IntTensor:
        ...

    @abstractmethod
    def int_into_data(self, tensor: IntTensor) -> Reader[Data]:
        """Snapshot ``tensor``; the snapshot must not observe later operations."""

    @abstractmethod
    def int_from_data(self, data: Data, device: Device) -> IntTensor:
        ...

    @abstractmethod
    def int_into_float(self, tensor: IntTensor) -> FloatTensor:
        ...

    # Indexing and slicing
    @abstractmethod
    def int_slice(self, tensor: IntTensor, ranges: Ranges) -> IntTensor:
        ...

    @abstractmethod
    def int_slice_assign(self, tensor: IntTensor, ranges: Ranges, value: IntTensor) -> IntTensor:
        ...

    # Masking
    @abstractmethod
    def int_mask_where(self, tensor: IntTensor, mask: BoolTensor, source: IntTensor) -> IntTensor:
        """Take ``source`` where ``mask`` is true and ``tensor`` elsewhere."""

    @abstractmethod
    def int_mask_fill(self, tensor: IntTensor, mask: BoolTensor, value: int) -> IntTensor:
        ...

    # Gather and scatter
    @abstractmethod
    def int_gather(self, dim: int, tensor: IntTensor, indices: IntTensor) -> IntTensor:
        ...

    @abstractmethod
    def int_scatter(self, dim: int, tensor: IntTensor, indices: IntTensor, value: IntTensor) -> IntTensor:
        """Add ``value`` into ``tensor`` at ``indices``; collisions accumulate."""

    @abstractmethod
    def int_select(self, tensor: IntTensor, dim: int, indices: IntTensor) -> IntTensor:
        ...

    @abstractmethod
    def int_select_assign(self, tensor: IntTensor, dim: int, indices: IntTensor, value: IntTensor) -> IntTensor:
        """Add the slices of ``value`` into the selected slices; repeated indices accumulate."""

    @abstractmethod
    def int_cat(self, tensors: List[IntTensor], dim: int) -> IntTensor:
        ...

    # Comparisons
    @abstractmethod
    def int_equal(self, lhs: IntTensor, rhs: IntTensor) -> BoolTensor:
        ...

    @abstractmethod
    def int_equal_elem(self, lhs: IntTensor, rhs: int) -> BoolTensor:
        ...

    @abstractmethod
    def int_greater(self, lhs: IntTensor, rhs: IntTensor) -> BoolTensor:
        ...

    @abstractmethod
    def int_greater_elem(self, lhs: IntTensor, rhs: int) -> BoolTensor:
        ...

    @abstractmethod
    def int_greater_equal(self, lhs: IntTensor, rhs: IntTensor) -> BoolTensor:
        ...

    @abstractmethod
    def int_greater_equal_elem(self, lhs: IntTensor, rhs: int) -> BoolTensor:
        ...

    @abstractmethod
    def int_lower(self, lhs: IntTensor, rhs: IntTensor) -> BoolTensor:
        ...

    @abstractmethod
    def int_lower_elem(self, lhs: IntTensor, rhs: int) -> BoolTensor:
        ...

    @abstractmethod
    def int_lower_equal(self, lhs: IntTensor, rhs: IntTensor) -> BoolTensor:
        ...

    @abstractmethod
    def int_lower_equal_elem(self, lhs: IntTensor, rhs: int) -> BoolTensor:
        ...

    # Arithmetic
    @abstractmethod
    def int_add(self, lhs: IntTensor, rhs: IntTensor) -> IntTensor:
        ...

    @abstractmethod
    def int_add_scalar(self, lhs: IntTensor, rhs: int) -> IntTensor:
        ...

    @abstractmethod
    def int_sub(self, lhs: IntTensor, rhs: IntTensor) -> IntTensor:
        ...

    @abstractmethod
    def int_sub_scalar(self, lhs: IntTensor, rhs: int) -> IntTensor:
        ...

    @abstractmethod
    def int_mul(self, lhs: IntTensor, rhs: IntTensor) -> IntTensor:
        ...

    @abstractmethod
    def int_mul_scalar(self, lhs: IntTensor, rhs: int) -> IntTensor:
        ...

    @abstractmethod
    def int_div(self, lhs: IntTensor, rhs: IntTensor) -> IntTensor:
        ...

    @abstractmethod
    def int_div_scalar(self, lhs: IntTensor, rhs: int) -> IntTensor:
        ...

    # Factories
    @abstractmethod
    def int_zeros(self, shape: Shape, device: Device) -> IntTensor:
        ...

    @abstractmethod
    def int_ones(self, shape: Shape, device: Device) -> IntTensor:
        ...

    # Reductions
    @abstractmethod
    def int_sum(self, tensor: IntTensor) -> IntTensor:
        """Sum of every element as a tensor of shape ``[1]``."""

    @abstractmethod
    def int_sum_dim(self, tensor: IntTensor, dim: int) -> IntTensor:
        ...

    @abstractmethod
    def int_argmax(self, tensor: IntTensor, dim: int) -> IntTensor:
        """Index of the first maximum along ``dim``, which collapses to extent 1."""

    @abstractmethod
    def int_argmin(self, tensor: IntTensor, dim: int) -> IntTensor:
        """Index of the first minimum along ``dim``, which collapses to extent 1."""

    # Unary and axis manipulation
    @abstractmethod
    def int_abs(self, tensor: IntTensor) -> IntTensor:
        ...

    @abstractmethod
    def int_swap_dims(self, tensor: IntTensor, dim1: int, dim2: int) -> IntTensor:
        ...


class FloatTensorBackend(ABC):
    """The part of the float contract the integer operations depend on."""

    @abstractmethod
    def float_from_data(self, data: Data, device: Device) -> FloatTensor:
        ...

    @abstractmethod
    def float_into_data(self, tensor: FloatTensor) -> Reader[Data]:
        ...

    @abstractmethod
    def float_shape(self, tensor: FloatTensor) -> Shape:
        ...

    @abstractmethod
    def float_device(self, tensor: FloatTensor) -> Device:
        ...

    @abstractmethod
    def float_into_int(self, tensor: FloatTensor) -> IntTensor:
        """Convert to the integer element type using the backend's documented rounding rule."""

    @abstractmethod
    def float_powf(self, lhs: FloatTensor, rhs: FloatTensor) -> FloatTensor:
        ...

    @abstractmethod
    def float_powf_scalar(self, lhs: FloatTensor, rhs: float) -> FloatTensor:
        ...


class BoolTensorBackend(ABC):
    """Mask creation and inspection."""

    @abstractmethod
    def bool_from_data(self, data: Data, device: Device) -> BoolTensor:
        ...

    @abstractmethod
    def bool_into_data(self, tensor: BoolTensor) -> Reader[Data]:
        ...

    @abstractmethod
    def bool_shape(self, tensor: BoolTensor) -> Shape:
        ...

    @abstractmethod
    def bool_device(self, tensor: BoolTensor) -> Device:
        ...


def _abstract_names(cls: type) -> Tuple[str, ...]:
    return tuple(sorted(cls.__abstractmethods__))


INT_PRIMITIVES: Tuple[str, ...] = _abstract_names(IntTensorBackend)
FLOAT_PRIMITIVES: Tuple[str, ...] = _abstract_names(FloatTensorBackend)
BOOL_PRIMITIVES: Tuple[str, ...] = _abstract_names(BoolTensorBackend)


__all__ = [
    "IntTensorBackend",
    "FloatTensorBackend",
    "BoolTensorBackend",
    "INT_PRIMITIVES",
    "FLOAT_PRIMITIVES",
    "BOOL_PRIMITIVES",
]
