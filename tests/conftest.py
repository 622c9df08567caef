# tests/conftest.py
"""Shared test setup for project."""

import logging
from collections.abc import Generator

import pytest

import slspack.logs as mod_logs


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Run every test at debug level and restore the level afterwards.

    The app logger is a module-level singleton, so a CLI test that passes
    --quiet would otherwise leak its level into the next test.
    """
    logger = mod_logs.getAppLogger()
    old_level = logger.level
    logger.setLevel(logging.DEBUG)
    yield
    logger.setLevel(old_level)
