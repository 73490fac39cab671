# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

from inttensor import InvalidArgumentError, OutOfRangeError


def test_swap_dims(ops, read):
    tensor = ops.int_from_data([[1, 2, 3], [4, 5, 6]])
    assert read(ops.int_swap_dims(tensor, 0, 1)) == [[1, 4], [2, 5], [3, 6]]
    assert read(ops.int_swap_dims(tensor, 1, 1)) == [[1, 2, 3], [4, 5, 6]]


def test_swap_dims_rank_three(ops, read):
    tensor = ops.int_reshape(ops.int_arange((0, 24)), [2, 3, 4])
    swapped = ops.int_swap_dims(tensor, 0, 2)
    assert ops.int_shape(swapped) == (4, 3, 2)
    assert read(ops.int_slice(swapped, [(1, 2), (2, 3)])) == [[[9, 21]]]


def test_transpose_swaps_last_two_dims(ops, read):
    tensor = ops.int_reshape(ops.int_arange((0, 24)), [2, 3, 4])
    transposed = ops.int_transpose(tensor)
    assert ops.int_shape(transposed) == (2, 4, 3)
    assert read(ops.int_transpose(transposed)) == read(tensor)


def test_transpose_needs_two_dims(ops):
    with pytest.raises(InvalidArgumentError):
        ops.int_transpose(ops.int_arange((0, 3)))


def test_swap_dims_out_of_range(ops):
    with pytest.raises(OutOfRangeError):
        ops.int_swap_dims(ops.int_zeros([2, 2]), 0, 2)
