# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Default bodies of the derived integer operations.

Each function receives the :class:`~inttensor.ops.int_tensor.IntTensorOps`
facade as ``ops`` and is written only in terms of its primitives and of the
float facade at ``ops.float``, so every backend gets the same behaviour. A
backend may still define a method of the same name; the facade then calls
that instead.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from ..data import Data, Reader, Shape
from ..device import Device
from ..element import elem_to_float, to_elem
from ..errors import InvalidArgumentError
from . import windowing


def int_to_data(ops, tensor: Any) -> Reader[Data]:
    # Backends never write into an operand, so reading does not consume.
    return ops.int_into_data(tensor)


def int_repeat(ops, tensor: Any, dim: int, times: int) -> Any:
    shape = ops.int_shape(tensor)
    if shape[dim] != 1:
        raise InvalidArgumentError(
            f"can only repeat a singleton dimension, but dimension {dim} has extent {shape[dim]}"
        )
    if times < 0:
        raise InvalidArgumentError(f"times must be non-negative, got {times}")

    out_shape = shape.with_dim(dim, times)
    ranges = [(0, extent) for extent in out_shape]

    output = ops.int_empty(out_shape, ops.int_device(tensor))
    for i in range(times):
        ranges[dim] = (i, i + 1)
        output = ops.int_slice_assign(output, ranges, tensor)
    return output


def int_powi(ops, lhs: Any, rhs: Any) -> Any:
    floats = ops.float
    return floats.float_into_int(
        floats.float_powf(ops.int_into_float(lhs), ops.int_into_float(rhs))
    )


def int_powf(ops, lhs: Any, rhs: Any) -> Any:
    floats = ops.float
    return floats.float_into_int(floats.float_powf(ops.int_into_float(lhs), rhs))


def int_powi_scalar(ops, lhs: Any, rhs: int) -> Any:
    floats = ops.float
    return floats.float_into_int(
        floats.float_powf_scalar(ops.int_into_float(lhs), elem_to_float(rhs))
    )


def int_powf_scalar(ops, lhs: Any, rhs: float) -> Any:
    floats = ops.float
    return floats.float_into_int(floats.float_powf_scalar(ops.int_into_float(lhs), rhs))


def int_clamp_min(ops, tensor: Any, min: int) -> Any:
    mask = ops.int_lower_elem(tensor, min)
    return ops.int_mask_fill(tensor, mask, min)


def int_clamp_max(ops, tensor: Any, max: int) -> Any:
    mask = ops.int_greater_elem(tensor, max)
    return ops.int_mask_fill(tensor, mask, max)


def int_clamp(ops, tensor: Any, min: int, max: int) -> Any:
    # When min > max every element ends up equal to min.
    return ops.int_clamp_min(ops.int_clamp_max(tensor, max), min)


def int_neg(ops, tensor: Any) -> Any:
    return ops.int_mul_scalar(tensor, to_elem(-1.0, ops.dtype))


def int_full(ops, shape: Shape, fill_value: int, device: Device) -> Any:
    return ops.int_add_scalar(ops.int_zeros(shape, device), fill_value)


def int_mean(ops, tensor: Any) -> Any:
    num_elements = ops.int_shape(tensor).num_elements()
    if num_elements == 0:
        raise InvalidArgumentError("cannot take the mean of an empty tensor")
    return ops.int_div_scalar(ops.int_sum(tensor), to_elem(num_elements, ops.dtype))


def int_mean_dim(ops, tensor: Any, dim: int) -> Any:
    extent = ops.int_shape(tensor)[dim]
    if extent == 0:
        raise InvalidArgumentError(
            f"cannot take the mean along dimension {dim}, which is empty"
        )
    return ops.int_div_scalar(ops.int_sum_dim(tensor, dim), to_elem(extent, ops.dtype))


def _flatten(ops, tensor: Any) -> Any:
    num_elements = ops.int_shape(tensor).num_elements()
    return ops.int_reshape(tensor, Shape([num_elements]))


def int_max(ops, tensor: Any) -> Any:
    return ops.int_max_dim(_flatten(ops, tensor), 0)


def int_min(ops, tensor: Any) -> Any:
    return ops.int_min_dim(_flatten(ops, tensor), 0)


def int_max_dim(ops, tensor: Any, dim: int) -> Any:
    values, _ = ops.int_max_dim_with_indices(tensor, dim)
    return values


def int_max_dim_with_indices(ops, tensor: Any, dim: int) -> Tuple[Any, Any]:
    # Gathering along ``dim`` itself keeps this correct for every dimension.
    indices = ops.int_argmax(tensor, dim)
    return ops.int_gather(dim, tensor, indices), indices


def int_min_dim(ops, tensor: Any, dim: int) -> Any:
    values, _ = ops.int_min_dim_with_indices(tensor, dim)
    return values


def int_min_dim_with_indices(ops, tensor: Any, dim: int) -> Tuple[Any, Any]:
    indices = ops.int_argmin(tensor, dim)
    return ops.int_gather(dim, tensor, indices), indices


def int_transpose(ops, tensor: Any) -> Any:
    rank = ops.int_shape(tensor).rank
    if rank < 2:
        raise InvalidArgumentError(
            f"transpose needs a tensor of rank 2 or more, got rank {rank}"
        )
    return ops.int_swap_dims(tensor, rank - 2, rank - 1)


def int_narrow(ops, tensor: Any, dim: int, start: int, length: int) -> Any:
    return windowing.narrow(
        tensor, dim, start, length, shape_of=ops.int_shape, slice_fn=ops.int_slice
    )


def int_chunk(ops, tensor: Any, chunks: int, dim: int) -> List[Any]:
    return windowing.chunk(
        tensor, chunks, dim, shape_of=ops.int_shape, slice_fn=ops.int_slice
    )


def int_arange_step(ops, start: int, end: int, step: int, device: Device) -> Any:
    if step < 1:
        raise InvalidArgumentError(f"step must be at least 1, got {step}")

    values = [to_elem(i, ops.dtype) for i in range(start, end, step)]
    data = Data(values, Shape([len(values)]))
    return ops.int_from_data(data, device)


def int_arange(ops, start: int, end: int, device: Device) -> Any:
    return ops.int_arange_step((start, end), 1, device)


DERIVED_OPERATIONS: Tuple[str, ...] = (
    "int_to_data",
    "int_repeat",
    "int_powi",
    "int_powf",
    "int_powi_scalar",
    "int_powf_scalar",
    "int_clamp_min",
    "int_clamp_max",
    "int_clamp",
    "int_neg",
    "int_full",
    "int_mean",
    "int_mean_dim",
    "int_max",
    "int_max_dim",
    "int_max_dim_with_indices",
    "int_min",
    "int_min_dim",
    "int_min_dim_with_indices",
    "int_transpose",
    "int_narrow",
    "int_chunk",
    "int_arange_step",
    "int_arange",
)
