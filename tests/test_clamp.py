# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest


@pytest.fixture
def values(ops):
    return ops.int_from_data([-5, 0, 3, 10, -1, 5])


def test_clamp(ops, read, values):
    assert read(ops.int_clamp(values, -1, 5)) == [-1, 0, 3, 5, -1, 5]


@pytest.mark.parametrize("low, high", [(-1, 5), (0, 0), (-10, 20), (4, 6)])
def test_clamp_bounds_hold(ops, read, values, low, high):
    before = read(values)
    after = read(ops.int_clamp(values, low, high))
    for original, clamped in zip(before, after):
        assert low <= clamped <= high
        if low <= original <= high:
            assert clamped == original


def test_clamp_min_and_max(ops, read, values):
    assert read(ops.int_clamp_min(values, 0)) == [0, 0, 3, 10, 0, 5]
    assert read(ops.int_clamp_max(values, 0)) == [-5, 0, 0, 0, -1, 0]


def test_clamp_with_inverted_bounds(ops, read, values):
    assert read(ops.int_clamp(values, 5, 1)) == [5] * 6


def test_clamp_truncates_float_bounds(ops, read, values):
    assert read(ops.int_clamp_min(values, 1.7)) == [1, 1, 3, 10, 1, 5]
    assert read(ops.int_clamp_max(values, -0.9)) == [-5, 0, 0, 0, -1, 0]
