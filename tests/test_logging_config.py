"""Tests for logging setup and key material masking."""

import logging

from common.logging_config import SensitiveDataFilter, get_logger, setup_logging


def _record(msg, args=()):
    return logging.LogRecord('test', logging.INFO, __file__, 1, msg, args, None)


def test_filter_masks_key_material_in_message():
    record = _record("derived key=deadbeef iv=0011 pad: cafe")
    SensitiveDataFilter().filter(record)

    assert 'deadbeef' not in record.msg
    assert '0011' not in record.msg
    assert 'cafe' not in record.msg
    assert record.msg.count('***MASKED***') == 3


def test_filter_masks_arguments():
    record = _record("chunk %s", ("pre_hash=abcdef",))
    SensitiveDataFilter().filter(record)

    assert record.args == ("pre_hash=***MASKED***",)


def test_filter_leaves_ordinary_messages():
    record = _record("Chunk written to /tmp/store/00ff")
    SensitiveDataFilter().filter(record)

    assert record.msg == "Chunk written to /tmp/store/00ff"


def test_setup_logging_configures_package_loggers():
    logger = setup_logging('selfencrypt-test', log_level='debug')
    try:
        assert logger.level == logging.DEBUG
        assert get_logger('chunkstore').level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert not logger.propagate

        setup_logging('selfencrypt-test', log_level='WARNING')
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING
    finally:
        for name in ('selfencrypt-test', 'chunkstore', 'encryptor', 'cli'):
            configured = logging.getLogger(name)
            for handler in list(configured.handlers):
                configured.removeHandler(handler)
            configured.propagate = True
            configured.setLevel(logging.NOTSET)
