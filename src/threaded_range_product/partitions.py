# Copyright (c) 2025 Jose Blanca
# Licensed under the MIT License. See LICENSE file for details.

from enum import Enum
import logging

from threaded_range_product.products import check_fits_int_width, wrap_int

logger = logging.getLogger(__name__)


class LastChunkPolicy(Enum):
    CLAMP = 1
    OVERSHOOT = 2


def check_num_computing_threads(num_computing_threads):
    if isinstance(num_computing_threads, bool) or not isinstance(
        num_computing_threads, int
    ):
        raise TypeError(
            f"num_computing_threads should be an int, got {type(num_computing_threads).__name__}"
        )
    if num_computing_threads < 1:
        raise ValueError(
            f"num_computing_threads should be at least 1, got {num_computing_threads}"
        )


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def compute_partitions(
    num_computing_threads: int,
    start: int,
    end: int,
    last_chunk_policy: LastChunkPolicy = LastChunkPolicy.CLAMP,
    int_width: int | None = None,
) -> list[tuple[int, int]]:
    """
    Split the half-open range ``[start, end)`` into contiguous chunks.

    Every chunk has ``ceil((end - start) / num_computing_threads)`` integers,
    so when the range width is not a multiple of ``num_computing_threads`` the
    chunks computed for the last indexes reach beyond ``end``. The chunk size is
    the exact integer ceiling, whatever the width of the range.

    Parameters
    ----------
    num_computing_threads
        Number of chunks to create, one per computing thread.
    start
        First integer of the range.
    end
        Integer one past the last one of the range.
    last_chunk_policy
        ``LastChunkPolicy.CLAMP`` (default) clamps both bounds of every chunk to
        ``end``, so the trailing chunks can be empty. ``LastChunkPolicy.OVERSHOOT``
        keeps the chunks as computed, including integers at or beyond ``end``.
    int_width
        ``None`` (default) for exact integers. With 32 or 64, ``start`` and
        ``end`` must fit in integers of that width and the chunk bounds wrap
        around on overflow, so a chunk reaching beyond the largest integer
        becomes empty.

    Returns
    -------
    list[tuple[int, int]]
        ``num_computing_threads`` ``(lo, hi)`` pairs in ascending order.

    Examples
    --------
    >>> compute_partitions(4, 1, 11)
    [(1, 4), (4, 7), (7, 10), (10, 11)]
    >>> compute_partitions(4, 1, 11, LastChunkPolicy.OVERSHOOT)
    [(1, 4), (4, 7), (7, 10), (10, 13)]
    """
    check_num_computing_threads(num_computing_threads)
    check_fits_int_width((start, end), int_width)

    chunk_size = _ceil_div(end - start, num_computing_threads)

    partitions = []
    for idx in range(num_computing_threads):
        lo = start + chunk_size * idx
        hi = start + chunk_size * (idx + 1)
        if last_chunk_policy is LastChunkPolicy.CLAMP:
            lo = min(lo, end)
            hi = min(hi, end)
        partitions.append((wrap_int(lo, int_width), wrap_int(hi, int_width)))

    logger.debug(
        "range [%d, %d) split in %d chunks of %d (%s)",
        start,
        end,
        num_computing_threads,
        chunk_size,
        last_chunk_policy.name,
    )
    return partitions
