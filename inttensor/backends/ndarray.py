# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
NumPy reference backend.

Numeric behaviour of this backend:

* integer arithmetic, sums and ``int_abs`` wrap around in the element type
  (two's complement), exactly like NumPy's fixed-width integers;
* division truncates toward zero; a zero divisor raises ``ZeroDivisionError``;
* ``float_into_int`` truncates toward zero, maps ``nan`` to 0 and saturates
  values beyond the element type's range;
* float tensors are ``float64``.

Arrays are never written in place: every operation that writes copies first,
so handles stay valid after being passed to an operation.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .._backend import get_default_dtype
from ..data import Data, Reader, Shape
from ..device import Device
from ..element import IntDType, get_dtype
from ..errors import InvalidArgumentError, OutOfRangeError
from ..ops.base import BoolTensorBackend, FloatTensorBackend, IntTensorBackend

logger = logging.getLogger(__name__)


class NdArrayTensor:
    """A NumPy array bound to a device."""

    __slots__ = ("array", "device")

    def __init__(self, array: "np.ndarray", device: Device):
        self.array = array
        self.device = device

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.array.shape

    @property
    def dtype(self) -> "np.dtype":
        return self.array.dtype

    def __repr__(self) -> str:
        return f"NdArrayTensor(shape={list(self.array.shape)}, dtype={self.array.dtype}, device={self.device})"


def _slices(ranges: Sequence[Tuple[int, int]]) -> Tuple[slice, ...]:
    return tuple(slice(start, end) for start, end in ranges)


def _along_axis(indices: "np.ndarray", dim: int) -> Tuple["np.ndarray", ...]:
    """Fancy index addressing ``target[..., indices[pos], ...]`` for every position of ``indices``."""

    grid = list(np.indices(indices.shape, sparse=True))
    grid[dim] = indices
    return tuple(grid)


class NdArrayBackend(IntTensorBackend, FloatTensorBackend, BoolTensorBackend):
    """CPU backend storing tensors as NumPy arrays.

    Args:
        dtype: Integer element type (``"int32"`` or ``"int64"``). Defaults to
            :func:`inttensor.get_default_dtype`.
        deferred_reads: When true, ``*_into_data`` return readers that build
            the :class:`Data` only when resolved, like a backend whose memory
            is not host-readable.
    """

    float_dtype = np.dtype(np.float64)

    def __init__(self, dtype: Optional[str] = None, deferred_reads: bool = False):
        self.int_dtype: IntDType = get_dtype(dtype if dtype is not None else get_default_dtype())
        self.deferred_reads = deferred_reads
        self._np_int = self.int_dtype.numpy_dtype

    def __repr__(self) -> str:
        return f"NdArrayBackend(dtype={self.int_dtype.name!r}, deferred_reads={self.deferred_reads})"

    # ------------------------------------------------------------------ helpers

    def _wrap(self, array: "np.ndarray", device: Device) -> NdArrayTensor:
        return NdArrayTensor(array, device)

    def _int(self, array: Any, device: Device) -> NdArrayTensor:
        return NdArrayTensor(np.asarray(array, dtype=self._np_int), device)

    def _check_device(self, device: Device) -> Device:
        if device.kind != "cpu":
            raise InvalidArgumentError(
                f"{type(self).__name__} only runs on cpu devices, got {device}"
            )
        return device

    def _read(self, array: "np.ndarray") -> Reader[Data]:
        snapshot = np.array(array, copy=True)
        if self.deferred_reads:
            return Reader.deferred(lambda: Data.from_numpy(snapshot))
        return Reader.concrete(Data.from_numpy(snapshot))

    def _scalar(self, value: int) -> Any:
        return self._np_int.type(value)

    def _check_indices(self, indices: "np.ndarray", extent: int, dim: int) -> "np.ndarray":
        if indices.size and (indices.min() < 0 or indices.max() >= extent):
            raise OutOfRangeError(
                f"indices must lie in [0, {extent}) for dimension {dim}, "
                f"got values in [{indices.min()}, {indices.max()}]"
            )
        return indices.astype(np.intp, copy=False)

    # ------------------------------------------------------ lifecycle/metadata

    def int_empty(self, shape: Shape, device: Device) -> NdArrayTensor:
        return self._wrap(np.empty(shape.dims, dtype=self._np_int), self._check_device(device))

    def int_shape(self, tensor: NdArrayTensor) -> Shape:
        return Shape(tensor.array.shape)

    def int_device(self, tensor: NdArrayTensor) -> Device:
        return tensor.device

    def int_to_device(self, tensor: NdArrayTensor, device: Device) -> NdArrayTensor:
        self._check_device(device)
        logger.debug("Moving %s from %s to %s", tensor, tensor.device, device)
        return self._wrap(tensor.array.copy(), device)

    def int_reshape(self, tensor: NdArrayTensor, shape: Shape) -> NdArrayTensor:
        return self._wrap(tensor.array.reshape(shape.dims), tensor.device)

    def int_into_data(self, tensor: NdArrayTensor) -> Reader[Data]:
        return self._read(tensor.array)

    def int_from_data(self, data: Data, device: Device) -> NdArrayTensor:
        converted = data.convert(self.int_dtype)
        array = np.asarray(converted.value, dtype=self._np_int).reshape(converted.shape.dims)
        return self._wrap(array, self._check_device(device))

    def int_into_float(self, tensor: NdArrayTensor) -> NdArrayTensor:
        return self._wrap(tensor.array.astype(self.float_dtype), tensor.device)

    # -------------------------------------------------------- indexing/slicing

    def int_slice(self, tensor: NdArrayTensor, ranges: Sequence[Tuple[int, int]]) -> NdArrayTensor:
        return self._wrap(tensor.array[_slices(ranges)].copy(), tensor.device)

    def int_slice_assign(
        self, tensor: NdArrayTensor, ranges: Sequence[Tuple[int, int]], value: NdArrayTensor
    ) -> NdArrayTensor:
        out = tensor.array.copy()
        out[_slices(ranges)] = value.array
        return self._wrap(out, tensor.device)

    # ----------------------------------------------------------------- masking

    def int_mask_where(self, tensor: NdArrayTensor, mask: NdArrayTensor, source: NdArrayTensor) -> NdArrayTensor:
        return self._int(np.where(mask.array, source.array, tensor.array), tensor.device)

    def int_mask_fill(self, tensor: NdArrayTensor, mask: NdArrayTensor, value: int) -> NdArrayTensor:
        return self._int(np.where(mask.array, self._scalar(value), tensor.array), tensor.device)

    # ---------------------------------------------------------- gather/scatter

    def int_gather(self, dim: int, tensor: NdArrayTensor, indices: NdArrayTensor) -> NdArrayTensor:
        index = self._check_indices(indices.array, tensor.array.shape[dim], dim)
        return self._wrap(np.take_along_axis(tensor.array, index, axis=dim), tensor.device)

    def int_scatter(
        self, dim: int, tensor: NdArrayTensor, indices: NdArrayTensor, value: NdArrayTensor
    ) -> NdArrayTensor:
        index = self._check_indices(indices.array, tensor.array.shape[dim], dim)
        out = tensor.array.copy()
        np.add.at(out, _along_axis(index, dim), value.array)
        return self._wrap(out, tensor.device)

    def int_select(self, tensor: NdArrayTensor, dim: int, indices: NdArrayTensor) -> NdArrayTensor:
        index = self._check_indices(indices.array, tensor.array.shape[dim], dim)
        return self._wrap(np.take(tensor.array, index, axis=dim), tensor.device)

    def int_select_assign(
        self, tensor: NdArrayTensor, dim: int, indices: NdArrayTensor, value: NdArrayTensor
    ) -> NdArrayTensor:
        index = self._check_indices(indices.array, tensor.array.shape[dim], dim)
        out = tensor.array.copy()
        target = [slice(None)] * out.ndim
        target[dim] = index
        np.add.at(out, tuple(target), value.array)
        return self._wrap(out, tensor.device)

    def int_cat(self, tensors: List[NdArrayTensor], dim: int) -> NdArrayTensor:
        array = np.concatenate([t.array for t in tensors], axis=dim)
        return self._wrap(array, tensors[0].device)

    # ------------------------------------------------------------- comparisons

    def int_equal(self, lhs, rhs):
        return self._wrap(np.equal(lhs.array, rhs.array), lhs.device)

    def int_equal_elem(self, lhs, rhs):
        return self._wrap(np.equal(lhs.array, self._scalar(rhs)), lhs.device)

    def int_greater(self, lhs, rhs):
        return self._wrap(np.greater(lhs.array, rhs.array), lhs.device)

    def int_greater_elem(self, lhs, rhs):
        return self._wrap(np.greater(lhs.array, self._scalar(rhs)), lhs.device)

    def int_greater_equal(self, lhs, rhs):
        return self._wrap(np.greater_equal(lhs.array, rhs.array), lhs.device)

    def int_greater_equal_elem(self, lhs, rhs):
        return self._wrap(np.greater_equal(lhs.array, self._scalar(rhs)), lhs.device)

    def int_lower(self, lhs, rhs):
        return self._wrap(np.less(lhs.array, rhs.array), lhs.device)

    def int_lower_elem(self, lhs, rhs):
        return self._wrap(np.less(lhs.array, self._scalar(rhs)), lhs.device)

    def int_lower_equal(self, lhs, rhs):
        return self._wrap(np.less_equal(lhs.array, rhs.array), lhs.device)

    def int_lower_equal_elem(self, lhs, rhs):
        return self._wrap(np.less_equal(lhs.array, self._scalar(rhs)), lhs.device)

    # -------------------------------------------------------------- arithmetic

    def _arith(self, ufunc, lhs: NdArrayTensor, rhs: Any) -> NdArrayTensor:
        with np.errstate(over="ignore"):
            return self._int(ufunc(lhs.array, rhs, dtype=self._np_int), lhs.device)

    def int_add(self, lhs, rhs):
        return self._arith(np.add, lhs, rhs.array)

    def int_add_scalar(self, lhs, rhs):
        return self._arith(np.add, lhs, self._scalar(rhs))

    def int_sub(self, lhs, rhs):
        return self._arith(np.subtract, lhs, rhs.array)

    def int_sub_scalar(self, lhs, rhs):
        return self._arith(np.subtract, lhs, self._scalar(rhs))

    def int_mul(self, lhs, rhs):
        return self._arith(np.multiply, lhs, rhs.array)

    def int_mul_scalar(self, lhs, rhs):
        return self._arith(np.multiply, lhs, self._scalar(rhs))

    def _truncating_divide(self, lhs: "np.ndarray", rhs: Any) -> "np.ndarray":
        if np.any(np.asarray(rhs) == 0):
            raise ZeroDivisionError("integer division by zero")
        with np.errstate(over="ignore", divide="ignore"):
            quotient = np.floor_divide(lhs, rhs, dtype=self._np_int)
            remainder = np.subtract(lhs, np.multiply(quotient, rhs, dtype=self._np_int), dtype=self._np_int)
        # floor and truncation differ only for inexact negative quotients
        adjust = (remainder != 0) & ((np.asarray(lhs) < 0) != (np.asarray(rhs) < 0))
        return np.add(quotient, adjust.astype(self._np_int), dtype=self._np_int)

    def int_div(self, lhs, rhs):
        return self._int(self._truncating_divide(lhs.array, rhs.array), lhs.device)

    def int_div_scalar(self, lhs, rhs):
        return self._int(self._truncating_divide(lhs.array, self._scalar(rhs)), lhs.device)

    # --------------------------------------------------------------- factories

    def int_zeros(self, shape: Shape, device: Device) -> NdArrayTensor:
        return self._wrap(np.zeros(shape.dims, dtype=self._np_int), self._check_device(device))

    def int_ones(self, shape: Shape, device: Device) -> NdArrayTensor:
        return self._wrap(np.ones(shape.dims, dtype=self._np_int), self._check_device(device))

    # -------------------------------------------------------------- reductions

    def int_sum(self, tensor: NdArrayTensor) -> NdArrayTensor:
        total = tensor.array.sum(dtype=self._np_int)
        return self._int([total], tensor.device)

    def int_sum_dim(self, tensor: NdArrayTensor, dim: int) -> NdArrayTensor:
        return self._int(tensor.array.sum(axis=dim, keepdims=True, dtype=self._np_int), tensor.device)

    def int_argmax(self, tensor: NdArrayTensor, dim: int) -> NdArrayTensor:
        return self._int(np.argmax(tensor.array, axis=dim, keepdims=True), tensor.device)

    def int_argmin(self, tensor: NdArrayTensor, dim: int) -> NdArrayTensor:
        return self._int(np.argmin(tensor.array, axis=dim, keepdims=True), tensor.device)

    # -------------------------------------------------------------- unary/axes

    def int_abs(self, tensor: NdArrayTensor) -> NdArrayTensor:
        return self._int(np.abs(tensor.array), tensor.device)

    def int_swap_dims(self, tensor: NdArrayTensor, dim1: int, dim2: int) -> NdArrayTensor:
        return self._wrap(np.swapaxes(tensor.array, dim1, dim2), tensor.device)

    # ------------------------------------------------------------------- float

    def float_from_data(self, data: Data, device: Device) -> NdArrayTensor:
        array = np.asarray(data.value, dtype=self.float_dtype).reshape(data.shape.dims)
        return self._wrap(array, self._check_device(device))

    def float_into_data(self, tensor: NdArrayTensor) -> Reader[Data]:
        return self._read(tensor.array)

    def float_shape(self, tensor: NdArrayTensor) -> Shape:
        return Shape(tensor.array.shape)

    def float_device(self, tensor: NdArrayTensor) -> Device:
        return tensor.device

    def float_into_int(self, tensor: NdArrayTensor) -> NdArrayTensor:
        values = tensor.array
        with np.errstate(invalid="ignore"):
            truncated = np.trunc(values)
        bound = float(1 << (self.int_dtype.bits - 1))
        nan = np.isnan(truncated)
        high = truncated >= bound
        low = truncated < -bound
        safe = np.where(nan | high | low, 0.0, truncated).astype(self._np_int)
        safe[high] = self.int_dtype.max
        safe[low] = self.int_dtype.min
        return self._wrap(safe, tensor.device)

    def float_powf(self, lhs: NdArrayTensor, rhs: NdArrayTensor) -> NdArrayTensor:
        with np.errstate(all="ignore"):
            return self._wrap(np.power(lhs.array, rhs.array), lhs.device)

    def float_powf_scalar(self, lhs: NdArrayTensor, rhs: float) -> NdArrayTensor:
        with np.errstate(all="ignore"):
            return self._wrap(np.power(lhs.array, self.float_dtype.type(rhs)), lhs.device)

    # -------------------------------------------------------------------- bool

    def bool_from_data(self, data: Data, device: Device) -> NdArrayTensor:
        array = np.asarray(data.value, dtype=bool).reshape(data.shape.dims)
        return self._wrap(array, self._check_device(device))

    def bool_into_data(self, tensor: NdArrayTensor) -> Reader[Data]:
        return self._read(tensor.array)

    def bool_shape(self, tensor: NdArrayTensor) -> Shape:
        return Shape(tensor.array.shape)

    def bool_device(self, tensor: NdArrayTensor) -> Device:
        return tensor.device


__all__ = ["NdArrayBackend", "NdArrayTensor"]
