import logging

import pytest
import structlog

@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI configures logging against the runner's streams; undo it after each test."""
    yield
    structlog.reset_defaults()
    logging.getLogger("hbswriter").handlers.clear()
