import math
import threading

import pytest

from threaded_range_product import ChunkProductCancelledError, chunk_product
from threaded_range_product import products


def test_chunk_product():
    assert chunk_product(1, 11) == 3628800
    assert chunk_product(5, 6) == 5
    assert chunk_product(-3, 0) == -6
    assert chunk_product(-2, 3) == 0
    assert chunk_product(7, 7) == 1
    assert chunk_product(9, 2) == 1


def test_exact_product_does_not_overflow():
    assert chunk_product(1, 31) == math.factorial(30)


def test_wrapping_product():
    # 13! does not fit in 32 bits
    assert chunk_product(1, 14, int_width=32) == 1932053504
    assert chunk_product(1, 14, int_width=64) == math.factorial(13)
    assert chunk_product(1, 21, int_width=64) == math.factorial(20)
    assert chunk_product(1, 22, int_width=64) == -4249290049419214848
    assert chunk_product(4, 4, int_width=32) == 1


def test_product_in_blocks(monkeypatch):
    monkeypatch.setattr(products, "PRODUCT_BLOCK_SIZE", 3)
    assert chunk_product(1, 11) == 3628800
    assert chunk_product(1, 14, int_width=32) == 1932053504


def test_cancelled_product():
    stop_event = threading.Event()
    stop_event.set()
    with pytest.raises(ChunkProductCancelledError):
        chunk_product(1, 10, stop_event=stop_event)
    with pytest.raises(ChunkProductCancelledError):
        chunk_product(1, 10, int_width=32, stop_event=stop_event)
    assert chunk_product(3, 3, stop_event=stop_event) == 1


def test_wrong_int_width():
    with pytest.raises(ValueError):
        chunk_product(1, 10, int_width=16)


def test_wrap_int():
    assert products.wrap_int(2**31, 32) == -(2**31)
    assert products.wrap_int(-(2**31) - 1, 32) == 2**31 - 1
    assert products.wrap_int(2**64 + 5, 64) == 5
    assert products.wrap_int(2**64 + 5, None) == 2**64 + 5
