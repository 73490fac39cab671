# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

from inttensor import Data, IntTensorOps, NdArrayBackend, ShapeMismatchError


def test_powi(ops, read):
    base = ops.int_from_data([2, 3, 4, -2])
    exponent = ops.int_from_data([3, 2, 0, 3])
    assert read(ops.int_powi(base, exponent)) == [8, 9, 1, -8]


def test_powi_scalar(ops, read):
    assert read(ops.int_powi_scalar(ops.int_from_data([2, -3, 0]), 3)) == [8, -27, 0]


def test_powf_scalar_truncates(ops, read):
    assert read(ops.int_powf_scalar(ops.int_from_data([4, 9, 10]), 0.5)) == [2, 3, 3]


def test_powf_with_float_exponents(ops, read):
    base = ops.int_from_data([4, 3])
    exponent = ops.float.float_from_data(Data([0.5, 2.0], [2]))
    assert read(ops.int_powf(base, exponent)) == [2, 9]


def test_negative_exponents(ops, read):
    tensor = ops.int_from_data([2, 1, -1, 5])
    assert read(ops.int_powi_scalar(tensor, -1)) == [0, 1, -1, 0]


def test_non_finite_results_are_saturated(ops, read):
    top = ops.dtype.max
    assert read(ops.int_powi_scalar(ops.int_from_data([0]), -1)) == [top]
    assert read(ops.int_powf_scalar(ops.int_from_data([-8]), 0.5)) == [0]


def test_int32_power_saturates():
    ops = IntTensorOps(NdArrayBackend("int32"))
    result = ops.int_powi_scalar(ops.int_from_data([10, -10]), 11)
    assert ops.int_into_data(result).read().value == [2**31 - 1, -(2**31)]


def test_power_shape_mismatch(ops):
    with pytest.raises(ShapeMismatchError):
        ops.int_powi(ops.int_from_data([1, 2]), ops.int_from_data([1]))
    with pytest.raises(ShapeMismatchError):
        ops.int_powf(ops.int_from_data([1, 2]), ops.float.float_from_data(Data([1.0], [1])))
