"""Tests for chunk count and boundary calculations."""

import pytest

from common.constants import MAX_CHUNK_SIZE, MIN_CHUNK_SIZE
from encryptor.chunking import chunk_ranges, get_chunk_size, get_num_chunks


@pytest.mark.parametrize("size, expected", [
    (0, 0),
    (3 * MIN_CHUNK_SIZE - 1, 0),
    (3 * MIN_CHUNK_SIZE, 3),
    (3 * MAX_CHUNK_SIZE - 1, 3),
    (3 * MAX_CHUNK_SIZE, 3),
    (3 * MAX_CHUNK_SIZE + 1, 4),
    (10 * MAX_CHUNK_SIZE, 10),
])
def test_num_chunks(size, expected):
    assert get_num_chunks(size) == expected


@pytest.mark.parametrize("size", [
    3 * MIN_CHUNK_SIZE,
    3 * MIN_CHUNK_SIZE + 2,
    3 * MAX_CHUNK_SIZE - 1,
    3 * MAX_CHUNK_SIZE + 1,
    4 * MAX_CHUNK_SIZE + MIN_CHUNK_SIZE - 1,
    5 * MAX_CHUNK_SIZE,
    5 * MAX_CHUNK_SIZE + 12345,
])
def test_ranges_cover_file_contiguously(size):
    ranges = chunk_ranges(size)

    assert ranges[0][0] == 0
    assert ranges[-1][1] == size
    for (_, end), (next_start, _) in zip(ranges, ranges[1:]):
        assert end == next_start
    for chunk_num, (start, end) in enumerate(ranges):
        assert end - start == get_chunk_size(size, chunk_num)


def test_last_chunk_never_below_minimum():
    size = 4 * MAX_CHUNK_SIZE + 10
    sizes = [get_chunk_size(size, i) for i in range(get_num_chunks(size))]

    assert sizes[-1] == MIN_CHUNK_SIZE + 10
    assert sizes[-2] == MAX_CHUNK_SIZE - MIN_CHUNK_SIZE
    assert sum(sizes) == size


def test_three_chunk_split_puts_remainder_last():
    size = 3 * MIN_CHUNK_SIZE + 2
    assert [get_chunk_size(size, i) for i in range(3)] == [1024, 1024, 1026]


def test_unsplit_file_has_no_ranges():
    assert chunk_ranges(100) == []
