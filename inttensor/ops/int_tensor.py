# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
The integer tensor operation contract.

:class:`IntTensorOps` is the single entry point callers use. It checks the
preconditions of every operation (ranks, shapes, dimensions, ranges, scalar
conversion) before anything reaches the backend, so a violation raises
immediately and never leaves a partially computed tensor behind. Primitive
operations are forwarded to the backend; derived operations run the backend's
own method when it defines one and the shared body from
:mod:`inttensor.ops.derived` otherwise.

Example:
    >>> from inttensor import IntTensorOps, Data
    >>> ops = IntTensorOps()
    >>> t = ops.int_from_data(Data.from_list([[1, 2, 3], [4, 5, 6]]))
    >>> ops.int_into_data(ops.int_sum_dim(t, 1)).read().tolist()
    [[6], [15]]
"""

from __future__ import annotations

import logging
import operator
from typing import Any, List, Sequence, Tuple, Union

from .. import _backend
from ..data import Data, Reader, Shape, normalize_ranges
from ..device import Device, DeviceLike, normalize_device
from ..element import IntDType, elem_to_float, to_elem
from ..errors import InvalidArgumentError, OutOfRangeError, ShapeMismatchError
from . import derived
from .base import INT_PRIMITIVES
from .bool_tensor import BoolTensorOps
from .float_tensor import FloatTensorOps

logger = logging.getLogger(__name__)

ShapeLike = Union[Shape, Sequence[int]]
RangeLike = Union[range, Tuple[int, int]]


def _normalize_dim(dim: int, rank: int) -> int:
    dim = operator.index(dim)
    if not -rank <= dim < rank:
        raise OutOfRangeError(
            f"dimension {dim} is out of range for a tensor of rank {rank}"
        )
    return dim + rank if dim < 0 else dim


def _bounds(range_: RangeLike) -> Tuple[int, int]:
    if isinstance(range_, range):
        if range_.step != 1:
            raise InvalidArgumentError(
                "pass the step separately; the range itself must have step 1"
            )
        return range_.start, range_.stop
    try:
        start, end = range_
    except (TypeError, ValueError):
        raise TypeError(f"expected a range or a (start, end) pair, got {range_!r}") from None
    return operator.index(start), operator.index(end)


class IntTensorOps:
    """Validated integer tensor operations over a backend.

    Args:
        backend: Object implementing the primitives of
            :class:`~inttensor.ops.base.IntTensorBackend`. Defaults to a fresh
            instance of the default registered backend.
        float_backend: Provider of the float primitives used by the power
            operations. Defaults to ``backend``.
        bool_backend: Provider of the mask primitives. Defaults to ``backend``.

    Raises:
        BackendCapabilityError: If a backend lacks a required primitive.
    """

    def __init__(self, backend: Any = None, float_backend: Any = None, bool_backend: Any = None):
        if backend is None:
            backend = _backend.get_backend()
        _backend.ensure_operations(backend, INT_PRIMITIVES, "int")
        self.backend = backend
        self.float = FloatTensorOps(backend if float_backend is None else float_backend)
        self.bool = BoolTensorOps(backend if bool_backend is None else bool_backend)
        self._announced: set = set()

    def __repr__(self) -> str:
        return f"IntTensorOps(backend={type(self.backend).__name__}, dtype={self.dtype.name})"

    @property
    def dtype(self) -> IntDType:
        """Element type of the backend's integer tensors."""
        return self.backend.int_dtype

    def default_device(self) -> Device:
        return self.backend.default_device()

    # ------------------------------------------------------------------ helpers

    def _device(self, device: DeviceLike) -> Device:
        return normalize_device(device, self.default_device())

    def _elem(self, value: Any) -> int:
        return to_elem(value, self.dtype)

    def _derived(self, name: str, *args: Any) -> Any:
        override = _backend.resolve_override(self.backend, name)
        if name not in self._announced:
            self._announced.add(name)
            logger.debug(
                "%s: using %s",
                name,
                f"{type(self.backend).__name__}.{name}" if override else "the default composition",
            )
        if override is not None:
            return override(*args)
        return getattr(derived, name)(self, *args)

    def _same_device(self, op: str, *tensors: Any) -> None:
        devices = {self.backend.int_device(t) for t in tensors}
        if len(devices) > 1:
            names = ", ".join(sorted(str(d) for d in devices))
            raise InvalidArgumentError(f"{op}: operands live on different devices ({names})")

    def _broadcast(self, op: str, lhs: Any, rhs: Any) -> Shape:
        lhs_shape = self.int_shape(lhs)
        rhs_shape = self.int_shape(rhs)
        if lhs_shape.rank != rhs_shape.rank:
            raise ShapeMismatchError(
                f"{op}: operands must share rank, got {lhs_shape.rank} and {rhs_shape.rank}"
            )
        dims = []
        for a, b in zip(lhs_shape, rhs_shape):
            if a != b and a != 1 and b != 1:
                raise ShapeMismatchError(
                    f"{op}: shapes {list(lhs_shape)} and {list(rhs_shape)} are not compatible"
                )
            dims.append(b if a == 1 else a)
        self._same_device(op, lhs, rhs)
        return Shape(dims)

    def _check_mask(self, op: str, tensor: Any, mask: Any) -> None:
        shape = self.int_shape(tensor)
        mask_shape = self.bool.bool_shape(mask)
        if mask_shape != shape:
            raise ShapeMismatchError(
                f"{op}: mask shape {list(mask_shape)} does not match tensor shape {list(shape)}"
            )
        mask_device = self.bool.bool_device(mask)
        device = self.int_device(tensor)
        if mask_device != device:
            raise InvalidArgumentError(
                f"{op}: mask lives on {mask_device} but the tensor lives on {device}"
            )

    def _dim_of(self, tensor: Any, dim: int) -> int:
        return _normalize_dim(dim, self.int_shape(tensor).rank)

    # ------------------------------------------------------ lifecycle/metadata

    def int_empty(self, shape: ShapeLike, device: DeviceLike = None) -> Any:
        """Allocate a tensor of ``shape`` whose contents are unspecified."""
        return self.backend.int_empty(Shape.of(shape), self._device(device))

    def int_shape(self, tensor: Any) -> Shape:
        return self.backend.int_shape(tensor)

    def int_device(self, tensor: Any) -> Device:
        return self.backend.int_device(tensor)

    def int_to_device(self, tensor: Any, device: DeviceLike) -> Any:
        target = self._device(device)
        if self.int_device(tensor) == target:
            return tensor
        return self.backend.int_to_device(tensor, target)

    def int_reshape(self, tensor: Any, shape: ShapeLike) -> Any:
        """Reshape ``tensor``; the rank may change but the element count may not.

        Raises:
            ShapeMismatchError: If the element counts differ.
        """
        target = Shape.of(shape)
        current = self.int_shape(tensor)
        if current.num_elements() != target.num_elements():
            raise ShapeMismatchError(
                f"cannot reshape a tensor of shape {list(current)} "
                f"({current.num_elements()} elements) to {list(target)}"
            )
        return self.backend.int_reshape(tensor, target)

    def int_into_data(self, tensor: Any) -> Reader[Data]:
        """Materialize ``tensor``; resolve the returned reader before use."""
        return self.backend.int_into_data(tensor)

    def int_to_data(self, tensor: Any) -> Reader[Data]:
        """Like :meth:`int_into_data`, documented as leaving ``tensor`` usable."""
        return self._derived("int_to_data", tensor)

    def int_from_data(self, data: Any, device: DeviceLike = None) -> Any:
        """Load ``data`` (a :class:`Data` or nested sequences) onto ``device``."""
        if not isinstance(data, Data):
            data = Data.from_list(data)
        return self.backend.int_from_data(data, self._device(device))

    def int_into_float(self, tensor: Any) -> Any:
        return self.backend.int_into_float(tensor)

    # -------------------------------------------------------- indexing/slicing

    def int_slice(self, tensor: Any, ranges: Sequence[RangeLike]) -> Any:
        """Extract the sub-tensor covered by one half-open range per leading dimension.

        Dimensions past the last range are kept whole.

        Raises:
            OutOfRangeError: If a range does not fit its dimension.
            ShapeMismatchError: If there are more ranges than dimensions.
        """
        bounds = normalize_ranges(ranges, self.int_shape(tensor))
        return self.backend.int_slice(tensor, bounds)

    def int_slice_assign(self, tensor: Any, ranges: Sequence[RangeLike], value: Any) -> Any:
        """Return a copy of ``tensor`` with the sliced region replaced by ``value``."""
        shape = self.int_shape(tensor)
        bounds = normalize_ranges(ranges, shape)
        value_shape = self.int_shape(value)
        expected = [end - start for start, end in bounds]
        if value_shape != expected:
            raise ShapeMismatchError(
                f"value of shape {list(value_shape)} does not fit the slice of shape {expected}"
            )
        self._same_device("int_slice_assign", tensor, value)
        return self.backend.int_slice_assign(tensor, bounds, value)

    # ----------------------------------------------------------------- masking

    def int_mask_where(self, tensor: Any, mask: Any, source: Any) -> Any:
        """Take ``source`` where ``mask`` is true and keep ``tensor`` elsewhere."""
        self._check_mask("int_mask_where", tensor, mask)
        source_shape = self.int_shape(source)
        if source_shape != self.int_shape(tensor):
            raise ShapeMismatchError(
                f"int_mask_where: source shape {list(source_shape)} does not match "
                f"tensor shape {list(self.int_shape(tensor))}"
            )
        self._same_device("int_mask_where", tensor, source)
        return self.backend.int_mask_where(tensor, mask, source)

    def int_mask_fill(self, tensor: Any, mask: Any, value: Any) -> Any:
        self._check_mask("int_mask_fill", tensor, mask)
        return self.backend.int_mask_fill(tensor, mask, self._elem(value))

    # ---------------------------------------------------------- gather/scatter

    def _check_index_shape(self, op: str, dim: int, shape: Shape, index_shape: Shape) -> None:
        if index_shape.rank != shape.rank:
            raise ShapeMismatchError(
                f"{op}: indices must have rank {shape.rank}, got {index_shape.rank}"
            )
        for d, (extent, index_extent) in enumerate(zip(shape, index_shape)):
            if d != dim and extent != index_extent:
                raise ShapeMismatchError(
                    f"{op}: indices of shape {list(index_shape)} do not match tensor "
                    f"shape {list(shape)} outside dimension {dim}"
                )

    def int_gather(self, dim: int, tensor: Any, indices: Any) -> Any:
        """Read ``tensor`` at ``indices`` along ``dim``.

        The result has the shape of ``indices``, whose extents must equal the
        tensor's on every dimension except ``dim``.
        """
        shape = self.int_shape(tensor)
        dim = _normalize_dim(dim, shape.rank)
        self._check_index_shape("int_gather", dim, shape, self.int_shape(indices))
        self._same_device("int_gather", tensor, indices)
        return self.backend.int_gather(dim, tensor, indices)

    def int_scatter(self, dim: int, tensor: Any, indices: Any, value: Any) -> Any:
        """Add ``value`` into ``tensor`` at ``indices`` along ``dim``.

        Several values aimed at the same position are summed; nothing is
        overwritten.
        """
        shape = self.int_shape(tensor)
        dim = _normalize_dim(dim, shape.rank)
        index_shape = self.int_shape(indices)
        self._check_index_shape("int_scatter", dim, shape, index_shape)
        value_shape = self.int_shape(value)
        if value_shape != index_shape:
            raise ShapeMismatchError(
                f"int_scatter: value shape {list(value_shape)} must equal index shape {list(index_shape)}"
            )
        self._same_device("int_scatter", tensor, indices, value)
        return self.backend.int_scatter(dim, tensor, indices, value)

    def _check_select_indices(self, op: str, indices: Any) -> int:
        index_shape = self.int_shape(indices)
        if index_shape.rank != 1:
            raise ShapeMismatchError(f"{op}: indices must have rank 1, got {index_shape.rank}")
        return index_shape[0]

    def int_select(self, tensor: Any, dim: int, indices: Any) -> Any:
        """Select whole sub-slices of ``tensor`` along ``dim`` by a rank-1 index list."""
        dim = self._dim_of(tensor, dim)
        self._check_select_indices("int_select", indices)
        self._same_device("int_select", tensor, indices)
        return self.backend.int_select(tensor, dim, indices)

    def int_select_assign(self, tensor: Any, dim: int, indices: Any, value: Any) -> Any:
        """Add the slices of ``value`` into the slices of ``tensor`` picked by ``indices``."""
        shape = self.int_shape(tensor)
        dim = _normalize_dim(dim, shape.rank)
        count = self._check_select_indices("int_select_assign", indices)
        value_shape = self.int_shape(value)
        expected = shape.with_dim(dim, count)
        if value_shape != expected:
            raise ShapeMismatchError(
                f"int_select_assign: value shape {list(value_shape)} must be {list(expected)}"
            )
        self._same_device("int_select_assign", tensor, indices, value)
        return self.backend.int_select_assign(tensor, dim, indices, value)

    # ------------------------------------------------------------ concatenation

    def int_cat(self, tensors: Sequence[Any], dim: int) -> Any:
        """Join ``tensors`` along ``dim``.

        Raises:
            InvalidArgumentError: If ``tensors`` is empty.
            ShapeMismatchError: If ranks or extents off ``dim`` disagree.
        """
        tensors = list(tensors)
        if not tensors:
            raise InvalidArgumentError("int_cat needs at least one tensor")

        first = self.int_shape(tensors[0])
        dim = _normalize_dim(dim, first.rank)
        for position, tensor in enumerate(tensors[1:], start=1):
            shape = self.int_shape(tensor)
            if shape.rank != first.rank:
                raise ShapeMismatchError(
                    f"int_cat: tensor {position} has rank {shape.rank}, expected {first.rank}"
                )
            for d, (a, b) in enumerate(zip(first, shape)):
                if d != dim and a != b:
                    raise ShapeMismatchError(
                        f"int_cat: tensor {position} has shape {list(shape)}, which does not "
                        f"match {list(first)} outside dimension {dim}"
                    )
        self._same_device("int_cat", *tensors)
        return self.backend.int_cat(tensors, dim)

    # ------------------------------------------------------------- comparisons

    def _compare(self, op: str, lhs: Any, rhs: Any) -> Any:
        self._broadcast(op, lhs, rhs)
        return getattr(self.backend, op)(lhs, rhs)

    def _compare_elem(self, op: str, lhs: Any, rhs: Any) -> Any:
        return getattr(self.backend, op)(lhs, self._elem(rhs))

    def int_equal(self, lhs: Any, rhs: Any) -> Any:
        return self._compare("int_equal", lhs, rhs)

    def int_equal_elem(self, lhs: Any, rhs: Any) -> Any:
        return self._compare_elem("int_equal_elem", lhs, rhs)

    def int_greater(self, lhs: Any, rhs: Any) -> Any:
        return self._compare("int_greater", lhs, rhs)

    def int_greater_elem(self, lhs: Any, rhs: Any) -> Any:
        return self._compare_elem("int_greater_elem", lhs, rhs)

    def int_greater_equal(self, lhs: Any, rhs: Any) -> Any:
        return self._compare("int_greater_equal", lhs, rhs)

    def int_greater_equal_elem(self, lhs: Any, rhs: Any) -> Any:
        return self._compare_elem("int_greater_equal_elem", lhs, rhs)

    def int_lower(self, lhs: Any, rhs: Any) -> Any:
        return self._compare("int_lower", lhs, rhs)

    def int_lower_elem(self, lhs: Any, rhs: Any) -> Any:
        return self._compare_elem("int_lower_elem", lhs, rhs)

    def int_lower_equal(self, lhs: Any, rhs: Any) -> Any:
        return self._compare("int_lower_equal", lhs, rhs)

    def int_lower_equal_elem(self, lhs: Any, rhs: Any) -> Any:
        return self._compare_elem("int_lower_equal_elem", lhs, rhs)

    # -------------------------------------------------------------- arithmetic

    def int_add(self, lhs: Any, rhs: Any) -> Any:
        self._broadcast("int_add", lhs, rhs)
        return self.backend.int_add(lhs, rhs)

    def int_add_scalar(self, lhs: Any, rhs: Any) -> Any:
        return self.backend.int_add_scalar(lhs, self._elem(rhs))

    def int_sub(self, lhs: Any, rhs: Any) -> Any:
        self._broadcast("int_sub", lhs, rhs)
        return self.backend.int_sub(lhs, rhs)

    def int_sub_scalar(self, lhs: Any, rhs: Any) -> Any:
        return self.backend.int_sub_scalar(lhs, self._elem(rhs))

    def int_mul(self, lhs: Any, rhs: Any) -> Any:
        self._broadcast("int_mul", lhs, rhs)
        return self.backend.int_mul(lhs, rhs)

    def int_mul_scalar(self, lhs: Any, rhs: Any) -> Any:
        return self.backend.int_mul_scalar(lhs, self._elem(rhs))

    def int_div(self, lhs: Any, rhs: Any) -> Any:
        """Elementwise integer division; zero divisors follow the backend's rule."""
        self._broadcast("int_div", lhs, rhs)
        return self.backend.int_div(lhs, rhs)

    def int_div_scalar(self, lhs: Any, rhs: Any) -> Any:
        return self.backend.int_div_scalar(lhs, self._elem(rhs))

    def int_neg(self, tensor: Any) -> Any:
        return self._derived("int_neg", tensor)

    def int_abs(self, tensor: Any) -> Any:
        return self.backend.int_abs(tensor)

    def int_powi(self, lhs: Any, rhs: Any) -> Any:
        """Raise ``lhs`` to the integer powers in ``rhs``, computed in floating point.

        Results are truncated back to integers, so negative exponents give 0
        for bases other than 1 and -1, and magnitudes beyond 2**53 lose
        precision.
        """
        lhs_shape, rhs_shape = self.int_shape(lhs), self.int_shape(rhs)
        if lhs_shape != rhs_shape:
            raise ShapeMismatchError(
                f"int_powi expects equal shapes, got {list(lhs_shape)} and {list(rhs_shape)}"
            )
        self._same_device("int_powi", lhs, rhs)
        return self._derived("int_powi", lhs, rhs)

    def int_powf(self, lhs: Any, rhs: Any) -> Any:
        lhs_shape, rhs_shape = self.int_shape(lhs), self.float.float_shape(rhs)
        if lhs_shape != rhs_shape:
            raise ShapeMismatchError(
                f"int_powf expects equal shapes, got {list(lhs_shape)} and {list(rhs_shape)}"
            )
        return self._derived("int_powf", lhs, rhs)

    def int_powi_scalar(self, lhs: Any, rhs: Any) -> Any:
        return self._derived("int_powi_scalar", lhs, self._elem(rhs))

    def int_powf_scalar(self, lhs: Any, rhs: float) -> Any:
        return self._derived("int_powf_scalar", lhs, elem_to_float(rhs))

    def int_clamp_min(self, tensor: Any, min: Any) -> Any:
        return self._derived("int_clamp_min", tensor, self._elem(min))

    def int_clamp_max(self, tensor: Any, max: Any) -> Any:
        return self._derived("int_clamp_max", tensor, self._elem(max))

    def int_clamp(self, tensor: Any, min: Any, max: Any) -> Any:
        """Clamp into ``[min, max]``: the upper bound applies first, then the lower one."""
        return self._derived("int_clamp", tensor, self._elem(min), self._elem(max))

    # --------------------------------------------------------------- factories

    def int_zeros(self, shape: ShapeLike, device: DeviceLike = None) -> Any:
        return self.backend.int_zeros(Shape.of(shape), self._device(device))

    def int_ones(self, shape: ShapeLike, device: DeviceLike = None) -> Any:
        return self.backend.int_ones(Shape.of(shape), self._device(device))

    def int_full(self, shape: ShapeLike, fill_value: Any, device: DeviceLike = None) -> Any:
        return self._derived(
            "int_full", Shape.of(shape), self._elem(fill_value), self._device(device)
        )

    def int_arange_step(self, range_: RangeLike, step: int, device: DeviceLike = None) -> Any:
        """Rank-1 tensor holding ``start, start + step, ...`` below ``end``.

        Raises:
            InvalidArgumentError: If ``step`` is smaller than 1.
        """
        start, end = _bounds(range_)
        return self._derived(
            "int_arange_step", start, end, operator.index(step), self._device(device)
        )

    def int_arange(self, range_: RangeLike, device: DeviceLike = None) -> Any:
        start, end = _bounds(range_)
        return self._derived("int_arange", start, end, self._device(device))

    # -------------------------------------------------------------- reductions

    def int_sum(self, tensor: Any) -> Any:
        """Sum of all elements, as a tensor of shape ``[1]``."""
        return self.backend.int_sum(tensor)

    def int_sum_dim(self, tensor: Any, dim: int) -> Any:
        return self.backend.int_sum_dim(tensor, self._dim_of(tensor, dim))

    def int_mean(self, tensor: Any) -> Any:
        """Truncated integer mean of all elements, as a tensor of shape ``[1]``."""
        return self._derived("int_mean", tensor)

    def int_mean_dim(self, tensor: Any, dim: int) -> Any:
        """Truncated integer mean along ``dim``, which collapses to extent 1."""
        return self._derived("int_mean_dim", tensor, self._dim_of(tensor, dim))

    def _reducible_dim(self, op: str, tensor: Any, dim: int) -> int:
        shape = self.int_shape(tensor)
        dim = _normalize_dim(dim, shape.rank)
        if shape[dim] == 0:
            raise InvalidArgumentError(f"{op}: cannot reduce the empty dimension {dim}")
        return dim

    def int_argmax(self, tensor: Any, dim: int) -> Any:
        return self.backend.int_argmax(tensor, self._reducible_dim("int_argmax", tensor, dim))

    def int_argmin(self, tensor: Any, dim: int) -> Any:
        return self.backend.int_argmin(tensor, self._reducible_dim("int_argmin", tensor, dim))

    def int_max(self, tensor: Any) -> Any:
        return self._derived("int_max", tensor)

    def int_max_dim(self, tensor: Any, dim: int) -> Any:
        return self._derived("int_max_dim", tensor, self._dim_of(tensor, dim))

    def int_max_dim_with_indices(self, tensor: Any, dim: int) -> Tuple[Any, Any]:
        return self._derived("int_max_dim_with_indices", tensor, self._dim_of(tensor, dim))

    def int_min(self, tensor: Any) -> Any:
        return self._derived("int_min", tensor)

    def int_min_dim(self, tensor: Any, dim: int) -> Any:
        return self._derived("int_min_dim", tensor, self._dim_of(tensor, dim))

    def int_min_dim_with_indices(self, tensor: Any, dim: int) -> Tuple[Any, Any]:
        return self._derived("int_min_dim_with_indices", tensor, self._dim_of(tensor, dim))

    # -------------------------------------------------------- axis/windowing

    def int_swap_dims(self, tensor: Any, dim1: int, dim2: int) -> Any:
        rank = self.int_shape(tensor).rank
        return self.backend.int_swap_dims(
            tensor, _normalize_dim(dim1, rank), _normalize_dim(dim2, rank)
        )

    def int_transpose(self, tensor: Any) -> Any:
        """Swap the last two dimensions."""
        return self._derived("int_transpose", tensor)

    def int_repeat(self, tensor: Any, dim: int, times: int) -> Any:
        """Repeat the singleton dimension ``dim`` ``times`` times.

        Raises:
            InvalidArgumentError: If ``dim`` does not have extent 1.
        """
        return self._derived(
            "int_repeat", tensor, self._dim_of(tensor, dim), operator.index(times)
        )

    def int_narrow(self, tensor: Any, dim: int, start: int, length: int) -> Any:
        return self._derived(
            "int_narrow",
            tensor,
            self._dim_of(tensor, dim),
            operator.index(start),
            operator.index(length),
        )

    def int_chunk(self, tensor: Any, chunks: int, dim: int = 0) -> List[Any]:
        """Split ``tensor`` along ``dim`` into at most ``chunks`` near-equal pieces."""
        return self._derived(
            "int_chunk", tensor, operator.index(chunks), self._dim_of(tensor, dim)
        )


__all__ = ["IntTensorOps"]
