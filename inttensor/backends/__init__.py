# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Backends shipped with inttensor."""

from .._backend import register_backend
from .ndarray import NdArrayBackend, NdArrayTensor

register_backend("ndarray", NdArrayBackend)

__all__ = ["NdArrayBackend", "NdArrayTensor"]
