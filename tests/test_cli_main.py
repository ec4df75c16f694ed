"""Tests for the CLI entry point."""

import logging
import os

import pytest

from cli.main import main


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to the captured stdout of the previous test."""
    yield
    for name in ('selfencrypt', 'chunkstore', 'encryptor', 'cli'):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True


def _args(tmp_path, *extra):
    return ['--config', str(tmp_path / 'config.json'), '--storage-dir', str(tmp_path / 'store'), *extra]


def test_encrypt_then_decrypt(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv('LOG_LEVEL', raising=False)
    content = os.urandom(20_000)
    source = tmp_path / 'plain.bin'
    source.write_bytes(content)
    restored = tmp_path / 'restored.bin'

    assert main(_args(tmp_path, '-e', str(source))) == 0
    assert main(_args(tmp_path, '-d', str(restored))) == 0

    out = capsys.readouterr().out
    assert f"Data map written to {tmp_path / 'store' / 'data_map'}" in out
    assert f"File decrypted to {restored}" in out
    assert "Chunk written to" in out
    assert restored.read_bytes() == content


def test_both_actions_in_one_run(tmp_path):
    source = tmp_path / 'plain.txt'
    source.write_bytes(b'hello world')
    restored = tmp_path / 'restored.txt'

    assert main(_args(tmp_path, '-d', str(restored), '-e', str(source))) == 0
    assert restored.read_bytes() == b'hello world'


def test_missing_source_reports_error(tmp_path, capsys):
    assert main(_args(tmp_path, '-e', str(tmp_path / 'missing.bin'))) == 1
    assert 'Failed to open' in capsys.readouterr().out


def test_missing_data_map_reports_error(tmp_path, capsys):
    assert main(_args(tmp_path, '-d', str(tmp_path / 'out.bin'))) == 1
    assert 'Failed to open data map' in capsys.readouterr().out
    assert not (tmp_path / 'out.bin').exists()


def test_corrupted_data_map_reports_possible_corruption(tmp_path, capsys):
    store = tmp_path / 'store'
    store.mkdir()
    (store / 'data_map').write_bytes(b'{"kind": "chunks", "chunks": [')

    assert main(_args(tmp_path, '-d', str(tmp_path / 'out.bin'))) == 1
    assert 'possible corruption' in capsys.readouterr().out


def test_no_action_does_nothing(tmp_path):
    assert main(_args(tmp_path)) == 0
    assert list((tmp_path / 'store').iterdir()) == []


def test_storage_dir_from_config(tmp_path):
    config_path = tmp_path / 'config.json'
    config_path.write_text('{"storage_dir": "%s"}' % (tmp_path / 'configured'))
    source = tmp_path / 'plain.txt'
    source.write_bytes(b'x' * 5000)

    assert main(['--config', str(config_path), '-e', str(source)]) == 0
    assert (tmp_path / 'configured' / 'data_map').exists()


@pytest.mark.skipif(not os.path.exists('/dev/full'), reason="requires /dev/full")
def test_full_destination_reports_error(tmp_path, capsys):
    source = tmp_path / 'plain.txt'
    source.write_bytes(b'hello world')

    assert main(_args(tmp_path, '-e', str(source))) == 0
    assert main(_args(tmp_path, '-d', '/dev/full')) == 1
    assert 'File write failed' in capsys.readouterr().out


def test_malformed_config_values_do_not_abort(tmp_path):
    config_path = tmp_path / 'config.json'
    config_path.write_text('{"storage_dir": "%s", "max_file_size": "1GiB"}' % (tmp_path / 'store'))
    source = tmp_path / 'plain.txt'
    source.write_bytes(b'x' * 5000)

    assert main(['--config', str(config_path), '-e', str(source)]) == 0
    assert (tmp_path / 'store' / 'data_map').exists()
