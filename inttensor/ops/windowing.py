# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Rank-generic windowing shared by every tensor kind.

Both helpers only need a way to read a tensor's shape and a way to slice it,
so the int, float and bool contracts can all reuse them.
"""

from __future__ import annotations

from typing import Any, Callable, List, Sequence, Tuple

from ..data import Shape
from ..errors import InvalidArgumentError, OutOfRangeError

ShapeOf = Callable[[Any], Shape]
SliceFn = Callable[[Any, Sequence[Tuple[int, int]]], Any]


def narrow(
    tensor: Any,
    dim: int,
    start: int,
    length: int,
    *,
    shape_of: ShapeOf,
    slice_fn: SliceFn,
) -> Any:
    """Return the window ``start:start + length`` of ``tensor`` along ``dim``.

    Raises:
        OutOfRangeError: If ``dim`` is not a dimension of the tensor, or the
            window does not fit in that dimension.
    """

    shape = shape_of(tensor)
    if not 0 <= dim < shape.rank:
        raise OutOfRangeError(
            f"dimension {dim} is out of range for a tensor of rank {shape.rank}"
        )
    if start < 0 or length < 0 or start + length > shape[dim]:
        raise OutOfRangeError(
            f"window {start}..{start + length} exceeds the extent {shape[dim]} "
            f"of dimension {dim}"
        )

    ranges = [(0, extent) for extent in shape]
    ranges[dim] = (start, start + length)
    return slice_fn(tensor, ranges)


def chunk(
    tensor: Any,
    chunks: int,
    dim: int,
    *,
    shape_of: ShapeOf,
    slice_fn: SliceFn,
) -> List[Any]:
    """Split ``tensor`` along ``dim`` into at most ``chunks`` pieces.

    Every piece spans ``ceil(extent / chunks)`` positions except the last,
    which holds what remains. When the extent does not divide evenly fewer
    than ``chunks`` pieces can come back. A zero extent gives a single empty
    piece rather than an empty list, so the result is never empty.
    """

    if chunks < 1:
        raise InvalidArgumentError(f"chunks must be at least 1, got {chunks}")

    shape = shape_of(tensor)
    if not 0 <= dim < shape.rank:
        raise OutOfRangeError(
            f"dimension {dim} is out of range for a tensor of rank {shape.rank}"
        )

    extent = shape[dim]
    if extent == 0:
        return [narrow(tensor, dim, 0, 0, shape_of=shape_of, slice_fn=slice_fn)]

    size = -(-extent // chunks)
    pieces = []
    for start in range(0, extent, size):
        length = min(size, extent - start)
        pieces.append(narrow(tensor, dim, start, length, shape_of=shape_of, slice_fn=slice_fn))
    return pieces


__all__ = ["narrow", "chunk"]
