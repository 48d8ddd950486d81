import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tenfoot.utils import logging as tenfoot_logging


@pytest.fixture(autouse=True)
def error_log(tmp_path):
    """Send error logging to a temporary file for every test."""
    previous = tenfoot_logging.get_log_file()
    path = tmp_path / "error.log"
    tenfoot_logging.set_log_file(str(path))
    yield path
    tenfoot_logging.set_log_file(previous)
