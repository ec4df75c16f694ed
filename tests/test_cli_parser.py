"""Tests for command line parsing."""

import pytest

from cli.models import DecryptCommand, EncryptCommand
from cli.parser import parse_command_line


def test_encrypt_flag():
    options = parse_command_line(['-e', 'file.txt'])
    assert options.commands == (EncryptCommand(target='file.txt'),)


def test_decrypt_flag():
    options = parse_command_line(['-d', 'out.txt'])
    assert options.commands == (DecryptCommand(destination='out.txt'),)


def test_long_flags():
    options = parse_command_line(['--encrypt', 'a', '--decrypt', 'b'])
    assert [c.command for c in options.commands] == ['encrypt', 'decrypt']


def test_encrypt_runs_before_decrypt_regardless_of_order():
    options = parse_command_line(['-d', 'out.txt', '-e', 'in.txt'])
    assert options.commands == (
        EncryptCommand(target='in.txt'),
        DecryptCommand(destination='out.txt'),
    )


def test_flag_without_argument_is_skipped():
    assert parse_command_line(['-e']).commands == ()
    assert parse_command_line(['-d']).commands == ()
    assert parse_command_line(['-e', '-d', 'out.txt']).commands == (DecryptCommand(destination='out.txt'),)


def test_no_arguments():
    options = parse_command_line([])
    assert options.commands == ()
    assert options.storage_dir is None
    assert options.config_path is None
    assert not options.debug


def test_global_options():
    options = parse_command_line(['--storage-dir', '/tmp/store', '--config', 'c.json', '--debug', '-e', 'x'])
    assert options.storage_dir == '/tmp/store'
    assert options.config_path == 'c.json'
    assert options.debug


def test_help_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_command_line(['-h'])
    assert exc_info.value.code == 0
    assert 'selfencrypt -e <target>' in capsys.readouterr().out
