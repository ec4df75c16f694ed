"""Shared pytest fixtures for all tests."""

import os

import pytest

from chunkstore.disk_storage import DiskChunkStore
from chunkstore.memory_storage import MemoryChunkStore
from cli.config import Config
from cli.workflow import EncryptionWorkflow
from common.constants import DATA_MAP_FILENAME


@pytest.fixture
def storage_dir(tmp_path):
    """
    Create temporary chunk store directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to an empty storage directory
    """
    path = tmp_path / 'chunk_store'
    path.mkdir()
    return path


@pytest.fixture
def disk_store(storage_dir):
    """DiskChunkStore rooted at the temporary storage directory."""
    return DiskChunkStore(storage_dir)


@pytest.fixture
def memory_store():
    """Empty in-memory chunk store."""
    return MemoryChunkStore()


@pytest.fixture
def disk_workflow(disk_store, storage_dir):
    """Workflow over the disk store with the data map in the storage directory."""
    return EncryptionWorkflow(disk_store, storage_dir / DATA_MAP_FILENAME)


@pytest.fixture
def memory_workflow(memory_store, tmp_path):
    """Workflow over the in-memory store."""
    return EncryptionWorkflow(memory_store, tmp_path / DATA_MAP_FILENAME)


@pytest.fixture
def make_file(tmp_path):
    """
    Factory creating a file with random content of a given size.

    Returns:
        Callable (size, name='source.bin') -> (path, content)
    """
    def _make(size: int, name: str = 'source.bin'):
        content = os.urandom(size)
        path = tmp_path / name
        path.write_bytes(content)
        return path, content
    return _make


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .selfencrypt directory
    """
    config_dir = tmp_path / '.selfencrypt'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')
