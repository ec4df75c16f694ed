"""Encryption session bound to a data map and a storage capability."""

import logging
from typing import Optional

from chunkstore.storage import ChunkStorage
from common.constants import MAX_FILE_SIZE
from common.exceptions import DecryptionError, EncryptionError
from encryptor.chunking import chunk_ranges, get_num_chunks
from encryptor.cipher import decrypt_chunk, derive_keys, encrypt_chunk, hash_content
from encryptor.data_map import (
    ChunkDetails,
    ChunksDataMap,
    ContentDataMap,
    DataMap,
    EmptyDataMap,
)

logger = logging.getLogger(__name__)


class SelfEncryptor:
    """
    Stateful encryption session.

    The session owns the storage capability from construction until close(),
    which hands it back together with the finished data map. Content written
    to the session is held in memory and only chunked and stored on close.
    Reads from an unmodified session fetch just the chunks covering the range.

    Args:
        storage: Storage the session takes over for its lifetime.
        data_map: Existing data map to read or modify. None starts empty.
    """

    def __init__(self, storage: ChunkStorage, data_map: Optional[DataMap] = None):
        self._storage: Optional[ChunkStorage] = storage
        self._data_map: DataMap = data_map if data_map is not None else EmptyDataMap()
        self._buffer: Optional[bytearray] = None

    @property
    def closed(self) -> bool:
        return self._storage is None

    async def length(self) -> int:
        """Logical length of the content held by the session."""
        self._require_open()
        if self._buffer is not None:
            return len(self._buffer)
        return self._data_map.file_size()

    async def write(self, data: bytes | bytearray, offset: int) -> None:
        """
        Write data at offset, zero-filling any gap past the current end.

        A bytearray written at offset 0 into an empty session is taken over
        as the session buffer instead of being copied; the caller must not
        modify it afterwards.

        Raises:
            EncryptionError: If the session is closed, offset is negative,
                or the content would exceed MAX_FILE_SIZE
        """
        self._require_open()
        if offset < 0:
            raise EncryptionError(f"Invalid write offset {offset}")

        end = offset + len(data)
        if end > MAX_FILE_SIZE:
            raise EncryptionError(f"Write would grow content to {end} bytes, limit is {MAX_FILE_SIZE}")

        if offset == 0 and self._buffer is None and isinstance(data, bytearray) \
                and isinstance(self._data_map, EmptyDataMap):
            self._buffer = data
            logger.debug(f"Adopted {len(data)} bytes as session content")
            return

        buffer = await self._load_buffer()
        if offset > len(buffer):
            buffer.extend(bytes(offset - len(buffer)))
        buffer[offset:end] = data
        logger.debug(f"Wrote {len(data)} bytes at offset {offset}")

    async def read(self, offset: int, length: int) -> bytes:
        """
        Read up to length bytes starting at offset.

        The range is clipped to the logical length of the content.
        """
        self._require_open()
        if offset < 0 or length < 0:
            raise EncryptionError(f"Invalid read range offset={offset} length={length}")

        if self._buffer is not None:
            return bytes(self._buffer[offset:offset + length])
        return await self._read_stored(offset, length)

    async def truncate(self, new_length: int) -> None:
        """Shrink the content to new_length bytes, or zero-extend it."""
        self._require_open()
        if new_length < 0 or new_length > MAX_FILE_SIZE:
            raise EncryptionError(f"Invalid truncate length {new_length}")

        buffer = await self._load_buffer()
        if new_length < len(buffer):
            del buffer[new_length:]
        else:
            buffer.extend(bytes(new_length - len(buffer)))

    async def close(self) -> tuple[DataMap, ChunkStorage]:
        """
        Finish the session.

        Modified content is chunked, encrypted and stored; an untouched
        session returns its original data map without touching storage.

        Returns:
            Tuple of (finished data map, storage handed back to the caller)
        """
        self._require_open()
        if self._buffer is None:
            data_map = self._data_map
        else:
            data_map = await self._store_content(memoryview(self._buffer))

        storage = self.release()
        self._data_map = data_map
        return data_map, storage

    def release(self) -> ChunkStorage:
        """
        Give up the session without storing anything and return the storage.

        Used to reclaim the storage after a failed write or close.
        """
        self._require_open()
        storage = self._storage
        self._storage = None
        self._buffer = None
        return storage

    def _require_open(self) -> None:
        if self._storage is None:
            raise EncryptionError("Encryptor session is closed")

    async def _load_buffer(self) -> bytearray:
        if self._buffer is None:
            existing = await self._read_stored(0, self._data_map.file_size())
            self._buffer = bytearray(existing)
        return self._buffer

    async def _read_stored(self, offset: int, length: int) -> bytes:
        data_map = self._data_map
        end = offset + length

        if length == 0 or isinstance(data_map, EmptyDataMap):
            return b""
        if isinstance(data_map, ContentDataMap):
            return data_map.content[offset:end]

        pieces = []
        chunk_start = 0
        first_start = None
        for chunk in data_map.chunks:
            chunk_end = chunk_start + chunk.source_size
            if chunk_end > offset and chunk_start < end:
                if first_start is None:
                    first_start = chunk_start
                pieces.append(await self._decrypt_stored_chunk(chunk, data_map))
            chunk_start = chunk_end

        if first_start is None:
            return b""
        joined = b"".join(pieces)
        return joined[offset - first_start:end - first_start]

    async def _decrypt_stored_chunk(self, chunk: ChunkDetails, data_map: ChunksDataMap) -> bytes:
        encrypted = await self._storage.get(chunk.hash)
        keys = derive_keys(chunk.chunk_num, data_map.pre_hashes())
        content = decrypt_chunk(encrypted, keys)

        if hash_content(content) != chunk.pre_hash or len(content) != chunk.source_size:
            raise DecryptionError(f"Chunk {chunk.chunk_num} decrypted to unexpected content")
        return content

    async def _store_content(self, content: memoryview) -> DataMap:
        if not content:
            return EmptyDataMap()
        if get_num_chunks(len(content)) == 0:
            return ContentDataMap(content=bytes(content))

        pieces = [content[start:end] for start, end in chunk_ranges(len(content))]
        pre_hashes = [hash_content(piece) for piece in pieces]

        chunks = []
        for chunk_num, piece in enumerate(pieces):
            encrypted = encrypt_chunk(piece, derive_keys(chunk_num, pre_hashes))
            address = self._storage.generate_address(encrypted)
            await self._storage.put(address, encrypted)
            chunks.append(ChunkDetails(
                chunk_num=chunk_num,
                hash=address,
                pre_hash=pre_hashes[chunk_num],
                source_size=len(piece),
            ))

        logger.info(f"Stored {len(chunks)} chunks for {len(content)} bytes")
        return ChunksDataMap(chunks=tuple(chunks))
