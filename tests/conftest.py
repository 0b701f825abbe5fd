# tests/conftest.py
import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_package_log_level():
    # Session.from_config applies the configured level to the "pathgrid" logger
    pkg_logger = logging.getLogger("pathgrid")
    saved = pkg_logger.level
    yield
    pkg_logger.setLevel(saved)
