"""Custom exception classes for the chunk store and encrypt/decrypt workflow."""


class SelfEncryptionError(Exception):
    """
    Base exception class for all errors raised by this package.
    """
    pass


class SourceUnreadableError(SelfEncryptionError):
    """
    Raised when the file to encrypt cannot be opened or read.
    """
    pass


class FileTooLargeError(SelfEncryptionError):
    """
    Raised when the file to encrypt exceeds the supported size limit.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"File size too large {size} is greater than the {limit} byte limit")


class StorageIOError(SelfEncryptionError):
    """
    Raised when a chunk cannot be read from or written to storage.
    """
    pass


class ChunkNotFoundError(StorageIOError):
    """
    Raised when no chunk is stored at the requested address.
    """
    pass


class ChunkIntegrityError(StorageIOError):
    """
    Raised when stored chunk content does not hash to its address.
    """
    pass


class DataMapUnreadableError(SelfEncryptionError):
    """
    Raised when the persisted data map is missing or cannot be read.
    """
    pass


class DataMapParseError(SelfEncryptionError):
    """
    Raised when the persisted data map is malformed (possible corruption).
    """
    pass


class DataMapWriteError(SelfEncryptionError):
    """
    Raised when the data map cannot be written after a successful encryption.
    """
    pass


class DestinationUnwritableError(SelfEncryptionError):
    """
    Raised when the decryption destination cannot be created or written.
    """
    pass


class EncryptionError(SelfEncryptionError):
    """
    Raised when an encryption session is misused or cannot encrypt a chunk.
    """
    pass


class DecryptionError(SelfEncryptionError):
    """
    Raised when a chunk cannot be decrypted back to its source bytes.
    """
    pass
