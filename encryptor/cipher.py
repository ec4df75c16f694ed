"""
Per-chunk encryption.

Each chunk is keyed by the pre-encryption hashes of its neighbours:
  key = pre_hash[i-1]
  iv  = pre_hash[i-2][:16]
  pad = pre_hash[i] + pre_hash[i-2][16:]
(indices wrap around), so no chunk can be decrypted without the data map.
Content is zlib compressed, AES-256-CBC encrypted with PKCS7 padding, then
XORed with the repeating pad.
"""

import hashlib
import zlib
from dataclasses import dataclass

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from common.exceptions import DecryptionError, EncryptionError

HASH_SIZE = 32
KEY_SIZE = 32    # 256 bits
IV_SIZE = 16     # AES block size
PAD_SIZE = 3 * HASH_SIZE - KEY_SIZE - IV_SIZE

COMPRESSION_LEVEL = 6


@dataclass(frozen=True)
class ChunkKeys:
    """Key material for one chunk."""
    key: bytes
    iv: bytes
    pad: bytes

    def __repr__(self) -> str:
        return "ChunkKeys(key=..., iv=..., pad=...)"


def hash_content(data: bytes) -> bytes:
    """Pre-encryption hash of chunk content."""
    return hashlib.sha3_256(data).digest()


def derive_keys(chunk_num: int, pre_hashes: list[bytes]) -> ChunkKeys:
    """
    Derive key, IV and pad for a chunk from the pre-hashes of all chunks.

    Args:
        chunk_num: Index of the chunk
        pre_hashes: Pre-encryption hashes of every chunk, in order (at least 3)

    Returns:
        ChunkKeys for the chunk
    """
    count = len(pre_hashes)
    if count < 3:
        raise EncryptionError(f"Key derivation needs at least 3 chunks, got {count}")

    this_hash = pre_hashes[chunk_num]
    n_1 = pre_hashes[(chunk_num - 1) % count]
    n_2 = pre_hashes[(chunk_num - 2) % count]

    return ChunkKeys(
        key=n_1[:KEY_SIZE],
        iv=n_2[:IV_SIZE],
        pad=this_hash + n_2[IV_SIZE:],
    )


def xor_with_pad(data: bytes, pad: bytes) -> bytes:
    """XOR data with pad repeated to the data's length."""
    if not data:
        return b""
    repeats = len(data) // len(pad) + 1
    stream = (pad * repeats)[:len(data)]
    mixed = int.from_bytes(data, "big") ^ int.from_bytes(stream, "big")
    return mixed.to_bytes(len(data), "big")


def encrypt_chunk(content: bytes, keys: ChunkKeys) -> bytes:
    """Compress, encrypt and obfuscate one chunk."""
    compressed = zlib.compress(content, COMPRESSION_LEVEL)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(compressed) + padder.finalize()

    encryptor = Cipher(algorithms.AES(keys.key), modes.CBC(keys.iv)).encryptor()
    encrypted = encryptor.update(padded) + encryptor.finalize()

    return xor_with_pad(encrypted, keys.pad)


def decrypt_chunk(content: bytes, keys: ChunkKeys) -> bytes:
    """
    Reverse encrypt_chunk.

    Raises:
        DecryptionError: If the content is not a valid encrypted chunk for these keys
    """
    encrypted = xor_with_pad(content, keys.pad)
    try:
        decryptor = Cipher(algorithms.AES(keys.key), modes.CBC(keys.iv)).decryptor()
        padded = decryptor.update(encrypted) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        compressed = unpadder.update(padded) + unpadder.finalize()

        return zlib.decompress(compressed)
    except (ValueError, zlib.error) as e:
        raise DecryptionError(f"Chunk decryption failed: {e}") from e
