"""In-memory chunk storage, interchangeable with the disk-backed store."""

import logging
from typing import Dict

from chunkstore.addressing import address_to_hex, generate_address
from common.exceptions import ChunkNotFoundError

logger = logging.getLogger(__name__)


class MemoryChunkStore:
    """
    Dict-backed chunk storage.

    Keeps counters of get/put calls so callers can tell whether an operation
    touched storage at all.
    """

    def __init__(self):
        self._chunks: Dict[bytes, bytes] = {}
        self.get_count = 0
        self.put_count = 0

    def generate_address(self, data: bytes) -> bytes:
        return generate_address(data)

    async def get(self, address: bytes) -> bytes:
        self.get_count += 1
        try:
            return self._chunks[address]
        except KeyError as e:
            raise ChunkNotFoundError(f"No chunk stored at {address_to_hex(address)}") from e

    async def put(self, address: bytes, data: bytes) -> None:
        self.put_count += 1
        self._chunks[address] = bytes(data)
        logger.debug(f"Chunk stored in memory at {address_to_hex(address)}")

    def __len__(self) -> int:
        return len(self._chunks)

    def __contains__(self, address: bytes) -> bool:
        return address in self._chunks
