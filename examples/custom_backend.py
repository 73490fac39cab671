# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Custom backend example for inttensor.

This script builds a token histogram with ``int_scatter``, then clips and
ranks the counts. The backend is a small subclass of the NumPy reference
backend that supplies its own ``int_clamp``; every other derived operation
keeps the shared default.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import numpy as np

import inttensor as it
from inttensor import IntTensorOps, NdArrayBackend

TOKENS = [3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5, 8, 9, 7, 9, 3, 2, 3, 8, 4]


class ClippingBackend(NdArrayBackend):
    """NumPy backend with a one-pass ``int_clamp``."""

    def int_clamp(self, tensor, min, max):
        # min wins over max, like the default composition
        clipped = np.maximum(np.minimum(tensor.array, max), min)
        return self._int(clipped, tensor.device)


def token_histogram(ops: IntTensorOps, tokens, vocab_size: int):
    """Count how often each id in ``tokens`` occurs."""

    ids = ops.int_from_data(tokens)
    ones = ops.int_ones([len(tokens)])
    return ops.int_scatter(0, ops.int_zeros([vocab_size]), ids, ones)


def run_demo(verbose: bool = True):
    """Run the histogram pipeline.

    Returns
    -------
    tuple[list[int], list[int], int]
        Raw counts, counts clamped to ``[1, 3]`` and the most frequent id.
    """

    ops = IntTensorOps(ClippingBackend(deferred_reads=True))
    counts = token_histogram(ops, TOKENS, 10)
    clamped = ops.int_clamp(counts, 1, 3)
    top = ops.int_argmax(counts, 0)

    async def collect():
        return await asyncio.gather(
            ops.int_into_data(counts).read_async(),
            ops.int_into_data(clamped).read_async(),
            ops.int_into_data(top).read_async(),
        )

    raw, clipped, best = asyncio.run(collect())
    if verbose:
        print(f"backend:  {ops!r}")
        print(f"counts:   {raw.tolist()}")
        print(f"clamped:  {clipped.tolist()}")
        print(f"top id:   {best.value[0]}")
    return raw.tolist(), clipped.tolist(), best.value[0]


def main():
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO)
    print(f"inttensor {it.__version__}, backends: {', '.join(it.available_backends())}")
    run_demo()


if __name__ == "__main__":
    main()
