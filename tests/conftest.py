import pytest
from src.lib.log import setup_logging

@pytest.fixture(autouse=True, scope='session')
def _log_to_tmp(tmp_path_factory):
	# first call wins; keeps CLI tests from writing to the home directory
	setup_logging(tmp_path_factory.mktemp('logs') / 'pwvault.log', 'DEBUG')
