"""Self-encryption session and data map persistence."""

from encryptor.codec import deserialize, serialize
from encryptor.data_map import ChunkDetails, ChunksDataMap, ContentDataMap, DataMap, EmptyDataMap
from encryptor.self_encryptor import SelfEncryptor

__all__ = [
    "SelfEncryptor",
    "DataMap",
    "EmptyDataMap",
    "ContentDataMap",
    "ChunksDataMap",
    "ChunkDetails",
    "serialize",
    "deserialize",
]
