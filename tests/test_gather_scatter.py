# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

from inttensor import OutOfRangeError, ShapeMismatchError


@pytest.fixture
def matrix(ops):
    return ops.int_from_data([[1, 2, 3], [4, 5, 6]])


def test_gather_along_last_dim(ops, read, matrix):
    indices = ops.int_from_data([[0, 1, 1], [2, 0, 0]])
    assert read(ops.int_gather(1, matrix, indices)) == [[1, 2, 2], [6, 4, 4]]


def test_gather_along_first_dim(ops, read, matrix):
    indices = ops.int_from_data([[1, 0, 1]])
    assert read(ops.int_gather(0, matrix, indices)) == [[4, 2, 6]]


def test_gather_shorter_index_along_dim(ops, read, matrix):
    indices = ops.int_from_data([[2], [0]])
    assert read(ops.int_gather(-1, matrix, indices)) == [[3], [4]]


def test_gather_index_out_of_range(ops, matrix):
    with pytest.raises(OutOfRangeError):
        ops.int_gather(1, matrix, ops.int_from_data([[0, 3, 1], [0, 0, 0]]))
    with pytest.raises(OutOfRangeError):
        ops.int_gather(1, matrix, ops.int_from_data([[0, -1, 1], [0, 0, 0]]))


def test_gather_index_shape_mismatch(ops, matrix):
    with pytest.raises(ShapeMismatchError):
        ops.int_gather(1, matrix, ops.int_from_data([[0, 1, 1]]))
    with pytest.raises(ShapeMismatchError):
        ops.int_gather(1, matrix, ops.int_from_data([0, 1]))


def test_scatter_accumulates_duplicates(ops, read):
    tensor = ops.int_zeros([3])
    indices = ops.int_from_data([0, 0, 2])
    value = ops.int_from_data([1, 2, 3])
    assert read(ops.int_scatter(0, tensor, indices, value)) == [3, 0, 3]


def test_scatter_along_last_dim(ops, read):
    tensor = ops.int_zeros([2, 3])
    indices = ops.int_from_data([[0, 0], [2, 1]])
    value = ops.int_from_data([[1, 1], [5, 7]])
    assert read(ops.int_scatter(1, tensor, indices, value)) == [[2, 0, 0], [0, 7, 5]]


def test_scatter_adds_to_existing_values(ops, read, matrix):
    indices = ops.int_from_data([[1, 1, 0]])
    value = ops.int_from_data([[10, 10, 10]])
    assert read(ops.int_scatter(0, matrix, indices, value)) == [[1, 2, 13], [14, 15, 6]]
    assert read(matrix) == [[1, 2, 3], [4, 5, 6]]


def test_scatter_value_must_match_indices(ops, matrix):
    indices = ops.int_from_data([[0, 1, 1], [1, 0, 0]])
    with pytest.raises(ShapeMismatchError):
        ops.int_scatter(1, matrix, indices, ops.int_ones([2, 2]))


def test_select(ops, read, matrix):
    assert read(ops.int_select(matrix, 1, ops.int_from_data([2, 0]))) == [[3, 1], [6, 4]]
    assert read(ops.int_select(matrix, 0, ops.int_from_data([1, 1]))) == [[4, 5, 6], [4, 5, 6]]


def test_select_requires_rank_one_indices(ops, matrix):
    with pytest.raises(ShapeMismatchError):
        ops.int_select(matrix, 0, ops.int_from_data([[0]]))


def test_select_out_of_range(ops, matrix):
    with pytest.raises(OutOfRangeError):
        ops.int_select(matrix, 0, ops.int_from_data([2]))
    with pytest.raises(OutOfRangeError):
        ops.int_select(matrix, 2, ops.int_from_data([0]))


def test_select_assign_accumulates(ops, read, matrix):
    indices = ops.int_from_data([0, 0])
    value = ops.int_from_data([[10, 20], [30, 40]])
    result = ops.int_select_assign(matrix, 1, indices, value)
    assert read(result) == [[31, 2, 3], [74, 5, 6]]


def test_select_assign_value_shape(ops, matrix):
    indices = ops.int_from_data([1])
    with pytest.raises(ShapeMismatchError):
        ops.int_select_assign(matrix, 0, indices, ops.int_ones([2, 3]))
    result = ops.int_select_assign(matrix, 0, indices, ops.int_ones([1, 3]))
    assert ops.int_into_data(result).read().tolist() == [[1, 2, 3], [5, 6, 7]]
