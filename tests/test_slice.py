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


def test_slice_with_pairs(ops, read, matrix):
    assert read(ops.int_slice(matrix, [(0, 1), (1, 3)])) == [[2, 3]]


def test_slice_pads_trailing_dimensions(ops, read, matrix):
    assert read(ops.int_slice(matrix, [(1, 2)])) == [[4, 5, 6]]
    assert read(ops.int_slice(matrix, [])) == [[1, 2, 3], [4, 5, 6]]


def test_slice_with_range_objects(ops, read, matrix):
    assert read(ops.int_slice(matrix, [range(0, 2), range(2, 3)])) == [[3], [6]]


def test_empty_slice(ops, matrix):
    assert ops.int_shape(ops.int_slice(matrix, [(1, 1)])) == (0, 3)


@pytest.mark.parametrize("ranges", [[(0, 3)], [(0, 1), (0, 4)], [(2, 1)], [(-1, 1)]])
def test_slice_out_of_bounds(ops, matrix, ranges):
    with pytest.raises(OutOfRangeError):
        ops.int_slice(matrix, ranges)


def test_slice_too_many_ranges(ops, matrix):
    with pytest.raises(ShapeMismatchError):
        ops.int_slice(matrix, [(0, 1), (0, 1), (0, 1)])


def test_slice_assign(ops, read, matrix):
    value = ops.int_from_data([[9, 9]])
    updated = ops.int_slice_assign(matrix, [(1, 2), (0, 2)], value)
    assert read(updated) == [[1, 2, 3], [9, 9, 6]]
    assert read(matrix) == [[1, 2, 3], [4, 5, 6]]


@pytest.mark.parametrize(
    "ranges", [[(0, 2), (0, 3)], [(1, 2)], [(0, 1), (1, 2)], [(0, 2), (2, 3)], [(1, 1)]]
)
def test_assigning_a_slice_to_itself_is_identity(ops, read, matrix, ranges):
    region = ops.int_slice(matrix, ranges)
    assert read(ops.int_slice_assign(matrix, ranges, region)) == read(matrix)


def test_slice_assign_shape_mismatch(ops, matrix):
    value = ops.int_from_data([[1, 2, 3]])
    with pytest.raises(ShapeMismatchError):
        ops.int_slice_assign(matrix, [(0, 1), (0, 2)], value)
