# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

from inttensor import ShapeMismatchError


@pytest.fixture
def pair(ops):
    return ops.int_from_data([1, 5, 3]), ops.int_from_data([2, 5, 1])


@pytest.mark.parametrize(
    "name, expected",
    [
        ("int_equal", [False, True, False]),
        ("int_greater", [False, False, True]),
        ("int_greater_equal", [False, True, True]),
        ("int_lower", [True, False, False]),
        ("int_lower_equal", [True, True, False]),
    ],
)
def test_elementwise_comparisons(ops, read_bool, pair, name, expected):
    lhs, rhs = pair
    assert read_bool(getattr(ops, name)(lhs, rhs)) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("int_equal_elem", [False, False, True]),
        ("int_greater_elem", [False, True, False]),
        ("int_greater_equal_elem", [False, True, True]),
        ("int_lower_elem", [True, False, False]),
        ("int_lower_equal_elem", [True, False, True]),
    ],
)
def test_scalar_comparisons(ops, read_bool, pair, name, expected):
    lhs, _ = pair
    assert read_bool(getattr(ops, name)(lhs, 3)) == expected


def test_scalar_comparison_truncates_float_operand(ops, read_bool):
    tensor = ops.int_from_data([0, 1, 2])
    assert read_bool(ops.int_greater_elem(tensor, 1.5)) == [False, False, True]
    assert read_bool(ops.int_equal_elem(tensor, -0.5)) == [True, False, False]


def test_comparison_broadcasts_unit_extents(ops, read_bool):
    column = ops.int_from_data([[1], [3]])
    row = ops.int_from_data([[0, 1, 2, 3]])
    assert read_bool(ops.int_greater_equal(column, row)) == [
        [True, True, False, False],
        [True, True, True, True],
    ]


def test_comparison_shape_mismatch(ops):
    with pytest.raises(ShapeMismatchError):
        ops.int_equal(ops.int_zeros([2, 3]), ops.int_zeros([3, 2]))
    with pytest.raises(ShapeMismatchError):
        ops.int_lower(ops.int_zeros([3]), ops.int_zeros([1, 3]))
