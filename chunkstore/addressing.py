"""Derives content addresses (SHA3-256) for chunks and their on-disk names."""

import hashlib


def generate_address(data: bytes) -> bytes:
    """
    Compute the storage address for given chunk bytes.

    Args:
        data: Chunk bytes (may be empty)

    Returns:
        32-byte SHA3-256 digest of the data
    """
    return hashlib.sha3_256(data).digest()


def address_to_hex(address: bytes) -> str:
    """
    Encode an address as the filename used for its chunk.

    Args:
        address: Raw address bytes

    Returns:
        Lowercase hex string, two characters per byte, no separators
    """
    return address.hex()


def verify_address(data: bytes, address: bytes) -> bool:
    """
    Verify that data hashes to the expected address.

    Args:
        data: Bytes to verify
        address: Expected raw address

    Returns:
        True if the address matches, False otherwise
    """
    return generate_address(data) == address
