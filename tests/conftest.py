from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.resource_builder import ResourceDirBuilder


@pytest.fixture
def resource_dir(tmp_path: Path) -> ResourceDirBuilder:
    """Provide a reusable resource project rooted at the pytest tmp_path."""
    return ResourceDirBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_resgen_logger():
    """Drop handlers installed by CLI runs so later tests do not log to closed streams."""
    yield
    logger = logging.getLogger("resgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
