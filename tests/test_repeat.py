# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

from inttensor import InvalidArgumentError


def test_repeat_leading_dim(ops, read):
    tensor = ops.int_from_data([[1, 2, 3]])
    repeated = ops.int_repeat(tensor, 0, 3)
    assert ops.int_shape(repeated) == (3, 3)
    for i in range(3):
        assert read(ops.int_slice(repeated, [(i, i + 1)])) == read(tensor)


def test_repeat_inner_dim(ops, read):
    tensor = ops.int_from_data([[[1, 2]], [[3, 4]]])
    repeated = ops.int_repeat(tensor, 1, 2)
    assert read(repeated) == [[[1, 2], [1, 2]], [[3, 4], [3, 4]]]


def test_repeat_zero_times(ops):
    tensor = ops.int_from_data([[1, 2, 3]])
    assert ops.int_shape(ops.int_repeat(tensor, 0, 0)) == (0, 3)


def test_repeat_requires_singleton_dim(ops):
    tensor = ops.int_from_data([[1, 2], [3, 4]])
    with pytest.raises(InvalidArgumentError, match="singleton"):
        ops.int_repeat(tensor, 0, 2)


def test_repeat_negative_times(ops):
    with pytest.raises(InvalidArgumentError):
        ops.int_repeat(ops.int_from_data([[1]]), 0, -1)
