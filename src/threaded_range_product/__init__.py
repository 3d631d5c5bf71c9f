from threaded_range_product.partitions import LastChunkPolicy, compute_partitions
from threaded_range_product.products import ChunkProductCancelledError, chunk_product
from threaded_range_product.reducer import range_product, range_product_with_executor

__all__ = [
    "LastChunkPolicy",
    "compute_partitions",
    "ChunkProductCancelledError",
    "chunk_product",
    "range_product",
    "range_product_with_executor",
]
