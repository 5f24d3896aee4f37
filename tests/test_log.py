import logging
from src.lib.log import LOGGER_NAME, setup_logging


def test_lowercase_level_accepted(tmp_path):
    logger = logging.getLogger(LOGGER_NAME)
    before = logger.level
    try:
        assert setup_logging(tmp_path / 'x.log', 'debug') is logger
        assert logger.level == logging.DEBUG
        setup_logging(tmp_path / 'x.log', 'warning')
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(before)
