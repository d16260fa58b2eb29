"""
Shared fixtures
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_kuroe_logging():
    """Drop handlers installed by setup_logging so they don't outlive captured streams"""
    yield
    kuroe_logger = logging.getLogger("kuroe")
    for handler in kuroe_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()
    kuroe_logger.handlers.clear()
    kuroe_logger.setLevel(logging.NOTSET)
