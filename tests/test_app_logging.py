"""Tests for logging configuration."""

import logging

from fastapi.testclient import TestClient

from photo_deleter.api.app import create_app
from photo_deleter.app_logging import configure_logging
from photo_deleter.containers import AppContainer


def _package_logger() -> logging.Logger:
    logger = logging.getLogger("photo_deleter")
    logger.handlers.clear()
    return logger


def test_configure_logging_adds_single_handler() -> None:
    logger = _package_logger()

    configure_logging("warning")
    configure_logging("debug")

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_configure_logging_unknown_level_uses_info() -> None:
    logger = _package_logger()

    configure_logging("chatty")

    assert logger.level == logging.INFO


def test_app_uses_configured_log_level(container: AppContainer) -> None:
    logger = _package_logger()
    container.settings.log_level = "ERROR"

    with TestClient(create_app(container)) as client:
        client.get("/health")

    assert logger.level == logging.ERROR
