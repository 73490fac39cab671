# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

from inttensor import InvalidArgumentError, ShapeMismatchError


def test_cat_along_first_dim(ops, read):
    a = ops.int_from_data([[1, 2], [3, 4]])
    b = ops.int_from_data([[5, 6], [7, 8], [9, 10]])
    joined = ops.int_cat([a, b], 0)
    assert ops.int_shape(joined) == (5, 2)
    assert read(joined) == [[1, 2], [3, 4], [5, 6], [7, 8], [9, 10]]


def test_cat_along_last_dim(ops, read):
    a = ops.int_from_data([[1], [2]])
    b = ops.int_from_data([[3, 4], [5, 6]])
    assert read(ops.int_cat([a, b], -1)) == [[1, 3, 4], [2, 5, 6]]


def test_cat_single_tensor(ops, read):
    a = ops.int_from_data([1, 2, 3])
    assert read(ops.int_cat([a], 0)) == [1, 2, 3]


def test_cat_extent_mismatch(ops):
    a = ops.int_zeros([2, 2])
    b = ops.int_zeros([3, 3])
    with pytest.raises(ShapeMismatchError):
        ops.int_cat([a, b], 0)


def test_cat_rank_mismatch(ops):
    with pytest.raises(ShapeMismatchError):
        ops.int_cat([ops.int_zeros([2, 2]), ops.int_zeros([2])], 0)


def test_cat_empty_sequence(ops):
    with pytest.raises(InvalidArgumentError):
        ops.int_cat([], 0)
