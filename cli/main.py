"""CLI entry point."""

import asyncio
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from chunkstore.disk_storage import DiskChunkStore
from cli.commands import execute_command
from cli.config import Config
from cli.models import CliOptions
from cli.parser import parse_command_line
from cli.workflow import EncryptionWorkflow
from common.constants import DATA_MAP_FILENAME, DEFAULT_CONFIG_PATH
from common.exceptions import SelfEncryptionError
from common.logging_config import get_logger, setup_logging


def resolve_config_path(options: CliOptions) -> Path:
    """Config file from --config, SELFENCRYPT_CONFIG, or the default location."""
    path = options.config_path or os.environ.get("SELFENCRYPT_CONFIG", DEFAULT_CONFIG_PATH)
    return Path(path).expanduser()


async def run(options: CliOptions, workflow: EncryptionWorkflow) -> int:
    """
    Run each requested command in order, stopping at the first failure.

    Returns:
        0 on success, 1 if a command failed
    """
    logger = get_logger('selfencrypt')
    for cmd in options.commands:
        try:
            message = await execute_command(cmd, workflow)
        except SelfEncryptionError as e:
            logger.debug(f"{cmd.command} failed: {e}", exc_info=True)
            print(e)
            return 1
        print(message)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for CLI."""
    options = parse_command_line(argv)
    config = Config(resolve_config_path(options))

    log_level = 'DEBUG' if options.debug else config.get_log_level()
    logger = setup_logging('selfencrypt', log_level=log_level)
    if options.debug:
        logger.info("Debug logging enabled")

    storage_dir = Path(options.storage_dir) if options.storage_dir else config.get_storage_dir()
    storage = DiskChunkStore(storage_dir, verify_reads=config.get_verify_reads())
    try:
        storage.ensure_directory()
    except OSError as e:
        print(f"Failed to create chunk store at {storage_dir}: {e}")
        return 1

    workflow = EncryptionWorkflow(
        storage,
        storage_dir / DATA_MAP_FILENAME,
        max_file_size=config.get_max_file_size(),
    )
    logger.debug(f"Chunk store at {storage_dir}")
    return asyncio.run(run(options, workflow))


if __name__ == "__main__":
    sys.exit(main())
