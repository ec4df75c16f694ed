"""Serializes data maps to bytes for persistence and back."""

import logging

from pydantic import TypeAdapter, ValidationError

from common.exceptions import DataMapParseError
from encryptor.data_map import DataMap

logger = logging.getLogger(__name__)

_DATA_MAP_ADAPTER = TypeAdapter(DataMap)


def serialize(data_map: DataMap) -> bytes:
    """
    Encode a data map as JSON bytes (byte fields hex encoded).

    Args:
        data_map: Any data map variant

    Returns:
        UTF-8 encoded JSON document
    """
    return _DATA_MAP_ADAPTER.dump_json(data_map)


def deserialize(data: bytes) -> DataMap:
    """
    Decode a data map previously produced by serialize().

    Args:
        data: Raw bytes read from the data map file

    Returns:
        The decoded data map

    Raises:
        DataMapParseError: If the bytes are malformed, truncated or inconsistent
    """
    try:
        return _DATA_MAP_ADAPTER.validate_json(data)
    except ValidationError as e:
        logger.debug(f"Data map validation failed: {e}")
        raise DataMapParseError(
            f"Failed to parse data map - possible corruption ({e.error_count()} error(s))"
        ) from e
