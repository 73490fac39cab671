# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from inttensor import IntTensorOps, NdArrayBackend  # noqa: E402

BACKEND_CONFIGS = [
    pytest.param({"dtype": "int64"}, id="int64"),
    pytest.param({"dtype": "int32", "deferred_reads": True}, id="int32-deferred"),
]


@pytest.fixture(params=BACKEND_CONFIGS)
def ops(request):
    return IntTensorOps(NdArrayBackend(**request.param))


@pytest.fixture
def read(ops):
    def _read(tensor):
        return ops.int_into_data(tensor).read().tolist()

    return _read


@pytest.fixture
def read_bool(ops):
    def _read(tensor):
        return ops.bool.bool_into_data(tensor).read().tolist()

    return _read
