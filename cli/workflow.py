"""Encrypt/decrypt workflow: source file -> chunks + data map -> destination file."""

import os
import stat
from enum import Enum
from pathlib import Path
from typing import Optional

from chunkstore.storage import ChunkStorage
from common.constants import MAX_FILE_SIZE
from common.exceptions import (
    DataMapUnreadableError,
    DataMapWriteError,
    DestinationUnwritableError,
    EncryptionError,
    FileTooLargeError,
    SelfEncryptionError,
    SourceUnreadableError,
)
from common.logging_config import get_logger
from encryptor.codec import deserialize, serialize
from encryptor.data_map import DataMap
from encryptor.self_encryptor import SelfEncryptor

logger = get_logger(__name__)


class WorkflowState(Enum):
    IDLE = "idle"
    READING_SOURCE = "reading_source"
    ENCRYPTING = "encrypting"
    PERSISTING_DATA_MAP = "persisting_data_map"
    LOADING_DATA_MAP = "loading_data_map"
    DECRYPTING = "decrypting"
    WRITING_DESTINATION = "writing_destination"
    DONE = "done"
    FAILED = "failed"


class EncryptionWorkflow:
    """
    Drives the self-encryptor against a chunk store and a data map file.

    Each step runs to completion before the next starts: all chunk writes
    finish before the data map is persisted, and the data map is fully loaded
    before any chunk is read. Nothing is retried or rolled back on failure.

    The storage is lent to each encryption session and reclaimed when the
    session closes (or is released after a failure).
    """

    def __init__(
        self,
        storage: ChunkStorage,
        data_map_path: str | Path,
        max_file_size: int = MAX_FILE_SIZE,
    ):
        """
        Args:
            storage: Chunk storage capability used by every session
            data_map_path: File the data map is written to and loaded from
            max_file_size: Largest source file accepted for encryption
        """
        self.storage: Optional[ChunkStorage] = storage
        self.data_map_path = Path(data_map_path)
        self.max_file_size = max_file_size
        self.state = WorkflowState.IDLE

    async def encrypt(self, target: str | Path) -> DataMap:
        """
        Encrypt target into chunks and persist its data map.

        Returns:
            The data map that was written

        Raises:
            SourceUnreadableError: If target cannot be opened or read
            FileTooLargeError: If target exceeds max_file_size (no chunks written)
            StorageIOError: If a chunk cannot be stored
            DataMapWriteError: If the data map file cannot be written
        """
        target = Path(target)
        try:
            self._transition(WorkflowState.READING_SOURCE)
            content = self._read_source(target)

            self._transition(WorkflowState.ENCRYPTING)
            data_map = await self._encrypt_content(content)

            self._transition(WorkflowState.PERSISTING_DATA_MAP)
            self._persist_data_map(data_map)
        except SelfEncryptionError:
            self._transition(WorkflowState.FAILED)
            raise

        self._transition(WorkflowState.DONE)
        return data_map

    async def decrypt(self, destination: str | Path) -> int:
        """
        Rebuild the file described by the persisted data map into destination.

        Returns:
            Number of bytes written to destination

        Raises:
            DataMapUnreadableError: If the data map file is missing or unreadable (no chunks read)
            DataMapParseError: If the data map is malformed
            StorageIOError: If a referenced chunk is missing or corrupted
            DecryptionError: If a chunk does not decrypt to its recorded content
            DestinationUnwritableError: If destination cannot be created or written
        """
        destination = Path(destination)
        try:
            self._transition(WorkflowState.LOADING_DATA_MAP)
            data_map = self.load_data_map()

            self._transition(WorkflowState.DECRYPTING)
            content = await self._decrypt_content(data_map)

            self._transition(WorkflowState.WRITING_DESTINATION)
            self._write_destination(destination, content)
        except SelfEncryptionError:
            self._transition(WorkflowState.FAILED)
            raise

        self._transition(WorkflowState.DONE)
        return len(content)

    def load_data_map(self) -> DataMap:
        """
        Read and decode the persisted data map.

        Raises:
            DataMapUnreadableError: If the file is missing or unreadable
            DataMapParseError: If the content is malformed
        """
        try:
            encoded = self.data_map_path.read_bytes()
        except OSError as e:
            raise DataMapUnreadableError(
                f"Failed to open data map at {self.data_map_path}: {e.strerror or e}"
            ) from e
        return deserialize(encoded)

    def _transition(self, state: WorkflowState) -> None:
        logger.debug(f"Workflow state {self.state.value} -> {state.value}")
        self.state = state

    def _read_source(self, target: Path) -> bytearray:
        try:
            with open(target, 'rb') as f:
                info = os.fstat(f.fileno())
                if info.st_size > self.max_file_size:
                    raise FileTooLargeError(info.st_size, self.max_file_size)
                if stat.S_ISREG(info.st_mode):
                    content = bytearray(info.st_size)
                    del content[f.readinto(content):]
                else:
                    # pipes and devices report no size up front
                    content = bytearray(f.read(self.max_file_size + 1))
                    if len(content) > self.max_file_size:
                        raise FileTooLargeError(len(content), self.max_file_size)
        except OSError as e:
            raise SourceUnreadableError(f"Failed to open {target}: {e.strerror or e}") from e

        logger.debug(f"Read {len(content)} bytes from {target}")
        return content

    async def _encrypt_content(self, content: bytearray) -> DataMap:
        session = SelfEncryptor(self._lend_storage())
        try:
            await session.write(content, 0)
            data_map, self.storage = await session.close()
        finally:
            if self.storage is None:
                self.storage = session.release()
        return data_map

    async def _decrypt_content(self, data_map: DataMap) -> bytes:
        session = SelfEncryptor(self._lend_storage(), data_map)
        try:
            length = await session.length()
            content = await session.read(0, length)
            _, self.storage = await session.close()
        finally:
            if self.storage is None:
                self.storage = session.release()
        return content

    def _lend_storage(self) -> ChunkStorage:
        if self.storage is None:
            raise EncryptionError("Storage is already in use by another session")
        storage = self.storage
        self.storage = None
        return storage

    def _persist_data_map(self, data_map: DataMap) -> None:
        encoded = serialize(data_map)
        try:
            self.data_map_path.write_bytes(encoded)
        except OSError as e:
            raise DataMapWriteError(
                f"Failed to write data map to {self.data_map_path} - {e.strerror or e}"
            ) from e
        logger.debug(f"Data map written to {self.data_map_path}")

    def _write_destination(self, destination: Path, content: bytes) -> None:
        try:
            f = open(destination, 'wb')
        except OSError as e:
            raise DestinationUnwritableError(f"Failed to create {destination}: {e.strerror or e}") from e

        try:
            with f:
                f.write(content)
        except OSError as e:
            raise DestinationUnwritableError(f"File write failed - {destination}: {e.strerror or e}") from e
        logger.debug(f"File decrypted to {destination}")
