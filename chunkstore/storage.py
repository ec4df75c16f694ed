"""Storage capability required by the self-encryptor."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ChunkStorage(Protocol):
    """Protocol for chunk storage backends.

    Chunks are keyed by an address derived from their content. Backends
    only need to honour get/put/generate_address; the workflow and the
    encryptor never depend on a concrete type.
    """

    async def get(self, address: bytes) -> bytes:
        """Retrieve a chunk by address.

        Args:
            address: Raw address bytes

        Returns:
            Chunk content exactly as stored

        Raises:
            ChunkNotFoundError: If nothing is stored at the address
            StorageIOError: For any other read failure
        """
        ...

    async def put(self, address: bytes, data: bytes) -> None:
        """Store a chunk, creating or overwriting it.

        Args:
            address: Raw address bytes
            data: Chunk content

        Raises:
            StorageIOError: If the chunk cannot be written
        """
        ...

    def generate_address(self, data: bytes) -> bytes:
        """Derive the address for chunk content."""
        ...
