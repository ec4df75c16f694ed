"""Command handler functions for CLI operations."""

from cli.models import CommandRequest, DecryptCommand, EncryptCommand
from cli.workflow import EncryptionWorkflow
from common.logging_config import get_logger

logger = get_logger(__name__)


async def handle_encrypt(cmd: EncryptCommand, workflow: EncryptionWorkflow) -> str:
    """
    Handle the encrypt action.

    Args:
        cmd: EncryptCommand with the file to encrypt
        workflow: Workflow bound to the chunk store and data map path

    Returns:
        Success message
    """
    data_map = await workflow.encrypt(cmd.target)
    logger.debug(f"Encrypted {cmd.target} ({data_map.file_size()} bytes, {data_map.kind} data map)")
    return f"Data map written to {workflow.data_map_path}"


async def handle_decrypt(cmd: DecryptCommand, workflow: EncryptionWorkflow) -> str:
    """
    Handle the decrypt action.

    Args:
        cmd: DecryptCommand with the destination file
        workflow: Workflow bound to the chunk store and data map path

    Returns:
        Success message
    """
    written = await workflow.decrypt(cmd.destination)
    logger.debug(f"Decrypted {written} bytes")
    return f"File decrypted to {cmd.destination}"


async def execute_command(cmd: CommandRequest, workflow: EncryptionWorkflow) -> str:
    """Dispatch a command to its handler."""
    if isinstance(cmd, EncryptCommand):
        return await handle_encrypt(cmd, workflow)
    if isinstance(cmd, DecryptCommand):
        return await handle_decrypt(cmd, workflow)
    raise ValueError(f"Unknown command: {cmd!r}")
