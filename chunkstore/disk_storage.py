"""Manages physical chunk files on disk: read/write keyed by content address."""

import asyncio
import errno
import logging
from pathlib import Path
from typing import Callable, TypeVar

from chunkstore.addressing import address_to_hex, generate_address, verify_address
from common.exceptions import ChunkIntegrityError, ChunkNotFoundError, StorageIOError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DiskChunkStore:
    """
    Filesystem-backed chunk storage.

    Each chunk is a file directly under the storage directory, named by the
    lowercase hex encoding of its address. There is no locking: concurrent
    writers to the same address race and the last one wins.
    """

    def __init__(self, storage_dir: str | Path, verify_reads: bool = True):
        """
        Initialize the chunk store.

        Args:
            storage_dir: Directory where chunks are stored
            verify_reads: Re-derive the address of every chunk read and
                reject content that does not match it
        """
        self.storage_dir = Path(storage_dir)
        self.verify_reads = verify_reads

    def ensure_directory(self) -> None:
        """Ensure the storage directory exists."""
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def get_chunk_path(self, address: bytes) -> Path:
        """
        Get file path for a chunk.

        Args:
            address: Raw chunk address

        Returns:
            Path object for chunk file
        """
        return self.storage_dir / address_to_hex(address)

    def generate_address(self, data: bytes) -> bytes:
        return generate_address(data)

    async def get(self, address: bytes) -> bytes:
        """
        Read an entire chunk from disk.

        Args:
            address: Raw chunk address

        Returns:
            Raw chunk data

        Raises:
            ChunkNotFoundError: If no chunk file exists for the address
            ChunkIntegrityError: If verify_reads is set and the content does not match
            StorageIOError: If the read fails for any other reason
        """
        path = self.get_chunk_path(address)
        try:
            data = await self._run(path.read_bytes)
        except FileNotFoundError as e:
            raise ChunkNotFoundError(f"No chunk stored at {path}") from e
        except OSError as e:
            raise StorageIOError(f"I/O error getting chunk {path}: {e}") from e

        if self.verify_reads and not verify_address(data, address):
            raise ChunkIntegrityError(
                f"Chunk at {path} does not match its address ({len(data)} bytes read)"
            )

        logger.debug(f"Chunk read from {path} ({len(data)} bytes)")
        return data

    async def put(self, address: bytes, data: bytes) -> None:
        """
        Write chunk data to disk, overwriting any existing file.

        Args:
            address: Raw chunk address
            data: Raw chunk data

        Raises:
            StorageIOError: If the write fails (missing directory, permissions, disk full)
        """
        path = self.get_chunk_path(address)
        try:
            await self._run(path.write_bytes, data)
        except OSError as e:
            if e.errno == errno.ENOSPC:
                raise StorageIOError(f"I/O error putting chunk {path}: storage full") from e
            raise StorageIOError(f"I/O error putting chunk {path}: {e}") from e

        logger.info(f"Chunk written to {path}")

    def exists(self, address: bytes) -> bool:
        """
        Check if a chunk file exists on disk.

        Args:
            address: Raw chunk address

        Returns:
            True if chunk file exists, False otherwise
        """
        return self.get_chunk_path(address).is_file()

    def list_addresses(self) -> list[bytes]:
        """
        List the addresses of all chunks in the storage directory.

        Files whose names are not hex addresses (such as the data map) are skipped.

        Returns:
            List of raw chunk addresses
        """
        if not self.storage_dir.exists():
            return []

        addresses = []
        for filepath in sorted(self.storage_dir.iterdir()):
            if not filepath.is_file():
                continue
            try:
                addresses.append(bytes.fromhex(filepath.name))
            except ValueError:
                continue
        return addresses

    async def _run(self, func: Callable[..., T], *args) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)
