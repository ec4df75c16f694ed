"""Chunk count and boundary calculations for a file of a given size."""

from common.constants import MAX_CHUNK_SIZE, MIN_CHUNK_SIZE


def get_num_chunks(file_size: int) -> int:
    """
    Number of chunks a file of file_size bytes is split into.

    Files smaller than three minimum-size chunks are not split at all (0).
    Files smaller than three maximum-size chunks are split into exactly 3.
    """
    if file_size < 3 * MIN_CHUNK_SIZE:
        return 0
    if file_size < 3 * MAX_CHUNK_SIZE:
        return 3
    if file_size % MAX_CHUNK_SIZE == 0:
        return file_size // MAX_CHUNK_SIZE
    return file_size // MAX_CHUNK_SIZE + 1


def get_chunk_size(file_size: int, chunk_num: int) -> int:
    """
    Size of chunk chunk_num for a file of file_size bytes.

    The last two chunks are rebalanced so that the final chunk is never
    smaller than MIN_CHUNK_SIZE.
    """
    num_chunks = get_num_chunks(file_size)
    if num_chunks == 0 or chunk_num >= num_chunks:
        return 0
    if num_chunks == 3:
        if chunk_num < 2:
            return file_size // 3
        return file_size - 2 * (file_size // 3)

    remainder = file_size % MAX_CHUNK_SIZE
    if chunk_num < num_chunks - 2:
        return MAX_CHUNK_SIZE
    if chunk_num == num_chunks - 2:
        if remainder != 0 and remainder < MIN_CHUNK_SIZE:
            return MAX_CHUNK_SIZE - MIN_CHUNK_SIZE
        return MAX_CHUNK_SIZE
    if remainder == 0:
        return MAX_CHUNK_SIZE
    if remainder < MIN_CHUNK_SIZE:
        return MIN_CHUNK_SIZE + remainder
    return remainder


def get_start_end_positions(file_size: int, chunk_num: int) -> tuple[int, int]:
    """Half-open byte range [start, end) of chunk chunk_num."""
    num_chunks = get_num_chunks(file_size)
    size = get_chunk_size(file_size, chunk_num)
    if chunk_num == num_chunks - 1:
        start = file_size - size
    else:
        start = chunk_num * get_chunk_size(file_size, 0)
    return start, start + size


def chunk_ranges(file_size: int) -> list[tuple[int, int]]:
    """Byte ranges of every chunk, in order."""
    return [get_start_end_positions(file_size, i) for i in range(get_num_chunks(file_size))]
