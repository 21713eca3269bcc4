import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks added by a test so later tests never write to a closed stream."""
    yield
    logger.remove()
