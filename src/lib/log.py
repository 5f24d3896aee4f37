"""Logging setup for the command-line front end.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
installed here, once, by whoever owns the process.
"""
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from config.settings import LOG_FILE, LOG_LEVEL

LOGGER_NAME = 'src'

def setup_logging(log_file: str | Path | None = None, level: str | int | None = None) -> logging.Logger:
	logger = logging.getLogger(LOGGER_NAME)
	level = level or LOG_LEVEL
	logger.setLevel(level.upper() if isinstance(level, str) else level)

	# Prevent duplicate handlers when the CLI is invoked repeatedly in-process
	if logger.handlers:
		return logger

	path = Path(log_file or LOG_FILE)
	path.parent.mkdir(parents=True, exist_ok=True)
	# Rotating file log: ~2MB per file, keep 5 backups
	handler = RotatingFileHandler(path, maxBytes=2_000_000, backupCount=5, encoding='utf-8')
	handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))
	logger.addHandler(handler)
	logger.propagate = False
	logger.debug('Logger initialized')
	return logger
