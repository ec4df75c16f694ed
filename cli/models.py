"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class EncryptCommand:
    """Encrypt a file into chunks and persist its data map."""

    target: str
    command: Literal["encrypt"] = "encrypt"


@dataclass(frozen=True)
class DecryptCommand:
    """Rebuild the file described by the data map into destination."""

    destination: str
    command: Literal["decrypt"] = "decrypt"


CommandRequest = EncryptCommand | DecryptCommand


@dataclass(frozen=True)
class CliOptions:
    """Parsed command line: commands to run, in order, plus global options."""

    commands: tuple[CommandRequest, ...]
    storage_dir: Optional[str] = None
    config_path: Optional[str] = None
    debug: bool = False
