# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

from inttensor import InvalidArgumentError, OutOfRangeError, Shape
from inttensor.ops import windowing


def test_narrow(ops, read):
    tensor = ops.int_arange((0, 10))
    assert read(ops.int_narrow(tensor, 0, 2, 5)) == [2, 3, 4, 5, 6]
    assert read(ops.int_narrow(tensor, 0, 10, 0)) == []


def test_narrow_negative_dim(ops, read):
    tensor = ops.int_reshape(ops.int_arange((0, 12)), [3, 4])
    assert read(ops.int_narrow(tensor, -1, 1, 2)) == [[1, 2], [5, 6], [9, 10]]


def test_narrow_out_of_bounds(ops):
    tensor = ops.int_arange((0, 4))
    with pytest.raises(OutOfRangeError):
        ops.int_narrow(tensor, 0, 3, 2)
    with pytest.raises(OutOfRangeError):
        ops.int_narrow(tensor, 0, -1, 1)


def test_chunk_even_split(ops, read):
    tensor = ops.int_reshape(ops.int_arange((0, 8)), [2, 4])
    pieces = ops.int_chunk(tensor, 2, dim=1)
    assert [read(p) for p in pieces] == [[[0, 1], [4, 5]], [[2, 3], [6, 7]]]


@pytest.mark.parametrize(
    "extent, chunks, expected",
    [
        (5, 2, [[0, 1, 2], [3, 4]]),
        (5, 4, [[0, 1], [2, 3], [4]]),
        (3, 5, [[0], [1], [2]]),
        (6, 1, [[0, 1, 2, 3, 4, 5]]),
    ],
)
def test_chunk_sizes(ops, read, extent, chunks, expected):
    pieces = ops.int_chunk(ops.int_arange((0, extent)), chunks)
    assert [read(p) for p in pieces] == expected


def test_chunk_of_empty_dim(ops):
    pieces = ops.int_chunk(ops.int_zeros([0, 2]), 3)
    assert len(pieces) == 1
    assert ops.int_shape(pieces[0]) == (0, 2)


def test_chunk_requires_positive_count(ops):
    with pytest.raises(InvalidArgumentError):
        ops.int_chunk(ops.int_arange((0, 4)), 0)


def _numpy_slice(array, ranges):
    return array[tuple(slice(start, end) for start, end in ranges)]


def _numpy_shape(array):
    return Shape(array.shape)


def test_windowing_is_rank_generic():
    array = np.arange(24).reshape(2, 3, 4)
    window = windowing.narrow(array, 2, 1, 2, shape_of=_numpy_shape, slice_fn=_numpy_slice)
    np.testing.assert_array_equal(window, array[:, :, 1:3])

    pieces = windowing.chunk(array, 2, 1, shape_of=_numpy_shape, slice_fn=_numpy_slice)
    assert [p.shape for p in pieces] == [(2, 2, 4), (2, 1, 4)]

    with pytest.raises(OutOfRangeError):
        windowing.narrow(array, 3, 0, 1, shape_of=_numpy_shape, slice_fn=_numpy_slice)
