"""Shared pytest fixtures for roomgate tests."""
import logging
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_cached_dependencies():
    """Settings and the default client are cached per process; reset between tests."""
    from roomgate.api import deps

    deps.get_settings.cache_clear()
    deps._default_client.cache_clear()
    yield
    deps.get_settings.cache_clear()
    deps._default_client.cache_clear()


@pytest.fixture
def capture_logger(caplog):
    """Attach caplog to a roomgate logger; they do not propagate to root."""

    attached = []

    def _attach(name: str):
        logger = logging.getLogger(name)
        logger.addHandler(caplog.handler)
        attached.append(logger)
        return caplog

    yield _attach
    for logger in attached:
        logger.removeHandler(caplog.handler)
