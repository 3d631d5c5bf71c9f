# Copyright (c) 2025 Jose Blanca
# Licensed under the MIT License. See LICENSE file for details.

import concurrent.futures
import functools
import logging
import operator
import queue
import threading

from threaded_range_product.partitions import (
    LastChunkPolicy,
    compute_partitions,
)
from threaded_range_product.products import (
    ChunkProductCancelledError,
    chunk_product,
    get_int_dtype,
    wrapping_fold,
)

logger = logging.getLogger(__name__)


class _WorkerError:
    def __init__(self, idx, exc):
        self.idx = idx
        self.exc = exc


def _fold_partial_products(partial_products, int_width):
    dtype = get_int_dtype(int_width)
    if dtype is None:
        return functools.reduce(operator.mul, partial_products, 1)
    else:
        return wrapping_fold(partial_products, dtype)


def _compute_chunk_product(idx, lo, hi, results_queue, int_width, stop_event):
    try:
        result = chunk_product(lo, hi, int_width=int_width, stop_event=stop_event)
    except BaseException as exception:
        results_queue.put(_WorkerError(idx, exception))
    else:
        results_queue.put((idx, result))


def _collect_partial_products(results_queue, num_computing_threads, stop_event):
    partial_products = {}
    first_error = None
    for _ in range(num_computing_threads):
        idx_result = results_queue.get()
        if isinstance(idx_result, _WorkerError):
            if isinstance(idx_result.exc, ChunkProductCancelledError):
                continue
            logger.debug("comp_thread_%d failed: %r", idx_result.idx, idx_result.exc)
            if first_error is None:
                first_error = idx_result.exc
                # ask the sibling threads to stop
                stop_event.set()
        else:
            idx, result = idx_result
            partial_products[idx] = result

    if first_error is not None:
        raise first_error
    return [partial_products[idx] for idx in range(num_computing_threads)]


def range_product(
    num_computing_threads: int,
    start: int,
    end: int,
    last_chunk_policy: LastChunkPolicy = LastChunkPolicy.CLAMP,
    int_width: int | None = None,
) -> int:
    """
    Multiply the integers in ``[start, end)`` using several threads.

    The range is split by :func:`compute_partitions` into
    ``num_computing_threads`` contiguous chunks, and the product of every chunk
    is computed in its own thread. Once every thread has finished, the partial
    products are multiplied in chunk order.

    For CPU-bound workloads this is most effective on free-threaded Python
    builds. On other builds the result is the same, only slower.

    Parameters
    ----------
    num_computing_threads
        Number of chunks, and of threads used to compute them. Must be at
        least 1.
    start
        First integer of the range.
    end
        Integer one past the last one of the range.
    last_chunk_policy
        How the chunks that reach beyond ``end`` are treated (default:
        ``LastChunkPolicy.CLAMP``). See :func:`compute_partitions`.
    int_width
        ``None`` (default) for exact integers, or 32 or 64 to compute with
        fixed-width integers that wrap around on overflow.

    Returns
    -------
    int
        The product. An empty range gives 1.

    Notes
    -----
    * Invalid arguments are rejected before any thread is started.
    * If the computation fails in any thread, the other threads are asked to
      stop, all threads are joined and the exception is raised. A partial
      product is never returned.

    Examples
    --------
    >>> from threaded_range_product import range_product
    >>> range_product(4, 1, 11)
    3628800
    """
    partitions = compute_partitions(
        num_computing_threads,
        start,
        end,
        last_chunk_policy=last_chunk_policy,
        int_width=int_width,
    )

    results_queue = queue.Queue()
    stop_event = threading.Event()

    computing_threads = []
    try:
        for idx, (lo, hi) in enumerate(partitions):
            thread = threading.Thread(
                target=_compute_chunk_product,
                args=(idx, lo, hi, results_queue, int_width, stop_event),
                name=f"comp_thread_{idx}",
            )
            thread.start()
            computing_threads.append(thread)
            logger.debug("comp_thread_%d started for [%d, %d)", idx, lo, hi)

        partial_products = _collect_partial_products(
            results_queue, len(computing_threads), stop_event
        )
    finally:
        stop_event.set()
        for thread in computing_threads:
            thread.join()

    result = _fold_partial_products(partial_products, int_width)
    logger.debug("folded %d partial products", len(partial_products))
    return result


def range_product_with_executor(
    num_computing_threads: int,
    start: int,
    end: int,
    last_chunk_policy: LastChunkPolicy = LastChunkPolicy.CLAMP,
    int_width: int | None = None,
) -> int:
    """
    Multiply the integers in ``[start, end)`` using a thread pool executor.

    Same arguments and result as :func:`range_product`, but every chunk is
    submitted to a ``concurrent.futures.ThreadPoolExecutor`` with
    ``num_computing_threads`` workers.
    """
    partitions = compute_partitions(
        num_computing_threads,
        start,
        end,
        last_chunk_policy=last_chunk_policy,
        int_width=int_width,
    )

    stop_event = threading.Event()
    compute_chunk = functools.partial(
        chunk_product, int_width=int_width, stop_event=stop_event
    )

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=num_computing_threads, thread_name_prefix="comp_thread"
    ) as executor:
        futures = [executor.submit(compute_chunk, lo, hi) for lo, hi in partitions]
        try:
            done, _ = concurrent.futures.wait(
                futures, return_when=concurrent.futures.FIRST_EXCEPTION
            )
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()
            partial_products = [future.result() for future in futures]
        except BaseException:
            stop_event.set()
            for future in futures:
                future.cancel()
            raise

    return _fold_partial_products(partial_products, int_width)
