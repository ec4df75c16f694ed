"""Data map models describing how to rebuild a file from its chunks."""

from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)

from common.constants import ADDRESS_SIZE_BYTES


def _decode_hex(value):
    if isinstance(value, str):
        return bytes.fromhex(value)
    return value


HexBytes = Annotated[
    bytes,
    BeforeValidator(_decode_hex),
    PlainSerializer(lambda value: value.hex(), return_type=str, when_used="json"),
]


class ChunkDetails(BaseModel):
    """Location and key material for a single encrypted chunk."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    chunk_num: int = Field(ge=0)
    hash: HexBytes
    pre_hash: HexBytes
    source_size: int = Field(ge=0)

    @field_validator("hash", "pre_hash")
    @classmethod
    def _check_digest_length(cls, value: bytes) -> bytes:
        if len(value) != ADDRESS_SIZE_BYTES:
            raise ValueError(f"expected {ADDRESS_SIZE_BYTES} byte digest, got {len(value)}")
        return value


class EmptyDataMap(BaseModel):
    """Data map of a session that holds no content."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["none"] = "none"

    def file_size(self) -> int:
        return 0


class ContentDataMap(BaseModel):
    """Data map holding content too small to split into chunks."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["content"] = "content"
    content: HexBytes

    def file_size(self) -> int:
        return len(self.content)


class ChunksDataMap(BaseModel):
    """Data map referencing at least three stored chunks, in order."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["chunks"] = "chunks"
    chunks: tuple[ChunkDetails, ...]

    @model_validator(mode="after")
    def _check_chunk_order(self) -> "ChunksDataMap":
        if len(self.chunks) < 3:
            raise ValueError(f"chunked data map needs at least 3 chunks, got {len(self.chunks)}")
        for index, chunk in enumerate(self.chunks):
            if chunk.chunk_num != index:
                raise ValueError(f"chunk {index} is numbered {chunk.chunk_num}")
        return self

    def file_size(self) -> int:
        return sum(chunk.source_size for chunk in self.chunks)

    def pre_hashes(self) -> list[bytes]:
        return [chunk.pre_hash for chunk in self.chunks]


DataMap = Annotated[
    Union[EmptyDataMap, ContentDataMap, ChunksDataMap],
    Field(discriminator="kind"),
]
