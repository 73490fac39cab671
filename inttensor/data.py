# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Shapes, host-side tensor snapshots and deferred read results.

``Data`` is the exchange format between backends and host code: a shape and
the tensor's values flattened in row-major order. Backends hand it out
wrapped in a :class:`Reader`, because some of them cannot read device memory
synchronously.
"""

from __future__ import annotations

import asyncio
import operator
from functools import reduce
from numbers import Integral
from threading import Lock
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar, Union

import numpy as np

from .element import IntDType, to_elem
from .errors import OutOfRangeError, ShapeMismatchError

T = TypeVar("T")
U = TypeVar("U")


class Shape:
    """Immutable per-dimension extents of a tensor."""

    __slots__ = ("dims",)

    def __init__(self, dims: Iterable[int]):
        extents = []
        for extent in dims:
            value = operator.index(extent)
            if value < 0:
                raise ShapeMismatchError(f"shape extents must be non-negative, got {value}")
            extents.append(value)
        self.dims: Tuple[int, ...] = tuple(extents)

    @classmethod
    def of(cls, shape: Union["Shape", Sequence[int]]) -> "Shape":
        if isinstance(shape, Shape):
            return shape
        return cls(shape)

    @property
    def rank(self) -> int:
        return len(self.dims)

    def num_elements(self) -> int:
        return reduce(operator.mul, self.dims, 1)

    def with_dim(self, dim: int, extent: int) -> "Shape":
        dims = list(self.dims)
        dims[dim] = extent
        return Shape(dims)

    def __len__(self) -> int:
        return len(self.dims)

    def __iter__(self) -> Iterator[int]:
        return iter(self.dims)

    def __getitem__(self, index):
        return self.dims[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Shape):
            return self.dims == other.dims
        if isinstance(other, (tuple, list)):
            return self.dims == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.dims)

    def __repr__(self) -> str:
        return f"Shape({list(self.dims)})"


def _flatten_integers(values: Any) -> Optional[Tuple[List[int], Tuple[int, ...]]]:
    """Flatten rectangular nested sequences of integers, or return ``None``."""

    if isinstance(values, Integral):
        return [int(values)], ()
    if not isinstance(values, (list, tuple)):
        return None

    flat: List[int] = []
    inner: Optional[Tuple[int, ...]] = None
    for item in values:
        nested = _flatten_integers(item)
        if nested is None:
            return None
        item_flat, item_shape = nested
        if inner is None:
            inner = item_shape
        elif item_shape != inner:
            return None
        flat.extend(item_flat)
    return flat, (len(values),) + (inner or ())


class Data:
    """A host-readable snapshot: flat row-major values plus their shape."""

    __slots__ = ("value", "shape")

    def __init__(self, value: Sequence[Any], shape: Union[Shape, Sequence[int]]):
        self.value: List[Any] = list(value)
        self.shape = Shape.of(shape)
        if len(self.value) != self.shape.num_elements():
            raise ShapeMismatchError(
                f"{len(self.value)} values cannot fill a tensor of shape {list(self.shape)}"
            )

    @classmethod
    def from_numpy(cls, array: "np.ndarray") -> "Data":
        array = np.asarray(array)
        return cls(array.ravel().tolist(), array.shape)

    @classmethod
    def from_list(cls, values: Any) -> "Data":
        """Build ``Data`` from (possibly nested) Python sequences or a scalar."""

        try:
            array = np.array(values)
        except ValueError as exc:
            raise ShapeMismatchError(f"nested sequences are ragged: {exc}") from exc
        except OverflowError:
            array = None
        if array is None or array.dtype == object:
            # Integers too wide for any NumPy dtype; range checks happen in to_elem.
            nested = _flatten_integers(values)
            if nested is None:
                raise ShapeMismatchError("nested sequences are ragged or hold non-numeric values")
            flat, shape = nested
            return cls(flat, shape)
        return cls.from_numpy(array)

    def num_elements(self) -> int:
        return len(self.value)

    def convert(self, dtype: Union[str, IntDType]) -> "Data":
        """Return a copy with every value converted by :func:`to_elem`."""

        return Data([to_elem(v, dtype) for v in self.value], self.shape)

    def to_numpy(self, dtype: Optional[Any] = None) -> "np.ndarray":
        return np.asarray(self.value, dtype=dtype).reshape(self.shape.dims)

    def tolist(self) -> Any:
        """Nested Python lists following ``shape``; a scalar for rank 0."""

        return np.asarray(self.value, dtype=object).reshape(self.shape.dims).tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Data):
            return NotImplemented
        return self.shape == other.shape and self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Data(shape={list(self.shape)}, value={self.value!r})"


_PENDING = object()


class Reader(Generic[T]):
    """A result that may not be available yet.

    ``read()`` blocks until the value is available and caches it; the
    resolver runs at most once even when several threads read concurrently.
    Inside ``asyncio`` code ``await reader`` resolves on the default executor
    so the event loop keeps running.
    """

    def __init__(self, value: Any = _PENDING, resolver: Optional[Callable[[], T]] = None):
        if value is _PENDING and resolver is None:
            raise ValueError("Reader needs either a value or a resolver")
        self._value = value
        self._resolver = resolver
        self._lock = Lock()

    @classmethod
    def concrete(cls, value: T) -> "Reader[T]":
        return cls(value=value)

    @classmethod
    def deferred(cls, resolver: Callable[[], T]) -> "Reader[T]":
        return cls(resolver=resolver)

    def is_ready(self) -> bool:
        return self._value is not _PENDING

    def read(self) -> T:
        if self._value is _PENDING:
            with self._lock:
                if self._value is _PENDING:
                    self._value = self._resolver()
                    self._resolver = None
        return self._value

    def map(self, func: Callable[[T], U]) -> "Reader[U]":
        """Chain ``func`` onto the result without forcing resolution."""

        if self.is_ready():
            return Reader.concrete(func(self._value))
        return Reader.deferred(lambda: func(self.read()))

    async def read_async(self) -> T:
        if self.is_ready():
            return self._value
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.read)

    def __await__(self):
        return self.read_async().__await__()

    def __repr__(self) -> str:
        state = "ready" if self.is_ready() else "pending"
        return f"Reader<{state}>"


def normalize_ranges(ranges: Sequence[Any], shape: Shape) -> List[Tuple[int, int]]:
    """Validate half-open ranges against ``shape`` and pad them to full rank.

    Each entry may be a ``(start, end)`` pair or a ``range`` with step 1.
    Dimensions without an entry are taken whole.
    """

    if len(ranges) > shape.rank:
        raise ShapeMismatchError(
            f"got {len(ranges)} ranges for a tensor of rank {shape.rank}"
        )

    bounds: List[Tuple[int, int]] = []
    for dim, spec in enumerate(ranges):
        if isinstance(spec, range):
            if spec.step != 1:
                raise OutOfRangeError(f"range for dimension {dim} must have step 1, got {spec.step}")
            start, end = spec.start, spec.stop
        else:
            try:
                start, end = spec
            except (TypeError, ValueError):
                raise TypeError(
                    f"range for dimension {dim} must be a (start, end) pair or a range, got {spec!r}"
                ) from None
            start, end = operator.index(start), operator.index(end)

        extent = shape[dim]
        if start < 0 or start > end or end > extent:
            raise OutOfRangeError(
                f"range {start}..{end} is out of bounds for dimension {dim} with extent {extent}"
            )
        bounds.append((start, end))

    for dim in range(len(ranges), shape.rank):
        bounds.append((0, shape[dim]))
    return bounds


__all__ = ["Shape", "Data", "Reader", "normalize_ranges"]
