# Copyright (c) 2025 Jose Blanca
# Licensed under the MIT License. See LICENSE file for details.

import math
import threading

import numpy

PRODUCT_BLOCK_SIZE = 100_000

INT_DTYPES = {32: numpy.int32, 64: numpy.int64}


class ChunkProductCancelledError(RuntimeError):
    pass


def get_int_dtype(int_width):
    if int_width is None:
        return None
    try:
        return INT_DTYPES[int_width]
    except KeyError:
        raise ValueError(
            f"int_width should be None or one of {sorted(INT_DTYPES)}, got {int_width}"
        ) from None


def check_fits_int_width(values, int_width):
    dtype = get_int_dtype(int_width)
    if dtype is None:
        return
    info = numpy.iinfo(dtype)
    for value in values:
        if not info.min <= value <= info.max:
            raise ValueError(
                f"{value} is out of the range of {int_width} bit integers [{info.min}, {info.max}]"
            )


def wrap_int(value, int_width):
    dtype = get_int_dtype(int_width)
    if dtype is None:
        return value
    info = numpy.iinfo(dtype)
    span = int(info.max) - int(info.min) + 1
    return (value - int(info.min)) % span + int(info.min)


def _iter_blocks(lo, hi, block_size):
    for block_lo in range(lo, hi, block_size):
        yield block_lo, min(block_lo + block_size, hi)


def _check_not_cancelled(stop_event):
    if stop_event is not None and stop_event.is_set():
        raise ChunkProductCancelledError("chunk product cancelled")


def _exact_product(lo, hi, stop_event):
    result = 1
    for block_lo, block_hi in _iter_blocks(lo, hi, PRODUCT_BLOCK_SIZE):
        _check_not_cancelled(stop_event)
        result *= math.prod(range(block_lo, block_hi))
        if result == 0:
            break
    return result


def _wrapping_product(lo, hi, dtype, stop_event):
    # integer array reductions wrap around silently, scalar operations would warn
    block_products = []
    for block_lo, block_hi in _iter_blocks(lo, hi, PRODUCT_BLOCK_SIZE):
        _check_not_cancelled(stop_event)
        block = numpy.arange(block_lo, block_hi, dtype=dtype)
        block_products.append(numpy.multiply.reduce(block, dtype=dtype))
    return wrapping_fold(block_products, dtype)


def wrapping_fold(values, dtype):
    values = numpy.array(values, dtype=dtype)
    return int(numpy.multiply.reduce(values, dtype=dtype))


def chunk_product(
    lo: int,
    hi: int,
    int_width: int | None = None,
    stop_event: threading.Event | None = None,
) -> int:
    """
    Multiply all integers in ``[lo, hi)``.

    An empty chunk (``lo >= hi``) has product 1.

    With ``int_width`` set to 32 or 64 the product is computed with numpy
    integers of that width and overflow wraps around, as in fixed-width machine
    arithmetic. With the default ``None`` the product is exact.

    The chunk is processed in blocks of ``PRODUCT_BLOCK_SIZE`` integers. If
    ``stop_event`` is set between two blocks a ``ChunkProductCancelledError``
    is raised.
    """
    dtype = get_int_dtype(int_width)
    if lo >= hi:
        return 1
    if dtype is None:
        return _exact_product(lo, hi, stop_event)
    else:
        return _wrapping_product(lo, hi, dtype, stop_event)
