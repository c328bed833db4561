import json
import logging
import sys

import pytest

from config.log_config import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_includes_exception():
    try:
        raise ValueError('boom')
    except ValueError:
        record = logging.LogRecord(
            'application.services.rate_service', logging.ERROR, __file__, 10,
            'Rate refresh failed', None, sys.exc_info(),
        )

    entry = json.loads(JSONFormatter().format(record))

    assert entry['level'] == 'ERROR'
    assert entry['logger'] == 'application.services.rate_service'
    assert entry['message'] == 'Rate refresh failed'
    assert entry['exception']['type'] == 'ValueError'


def test_setup_logging_console_only(restore_root_logger):
    setup_logging(level='WARNING')

    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.handlers[0].level == logging.WARNING
    assert logging.getLogger('httpx').level == logging.WARNING


def test_setup_logging_writes_json_files(restore_root_logger, tmp_path):
    setup_logging(log_directory=str(tmp_path / 'logs'))

    logging.getLogger('tests').warning('History could not be saved')
    for handler in restore_root_logger.handlers:
        handler.flush()

    line = (tmp_path / 'logs' / 'errors.log').read_text(encoding='utf-8').strip()
    assert json.loads(line)['message'] == 'History could not be saved'
    assert (tmp_path / 'logs' / 'app.log').exists()
