"""Tests for logging configuration helpers."""

import logging
import sys
from unittest.mock import Mock

from appearance_monitor.logging.config import (
    configure_logging,
    get_logger,
    get_portal_logger,
    log_snapshot_change,
)
from appearance_monitor.models import AppearanceSnapshot, ColorScheme


class TestLoggingConfiguration:
    """Test structlog setup."""

    def test_logs_go_to_stderr(self):
        """Test that the root handler never writes to stdout."""
        configure_logging(level="DEBUG", format_json=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        streams = [getattr(h, "stream", None) for h in root.handlers]
        assert sys.stderr in streams
        assert sys.stdout not in streams

    def test_loggers_are_usable(self):
        configure_logging(level="WARNING")
        get_logger(__name__).info("quiet")
        get_portal_logger(__name__).warning("portal message", key="color-scheme")


class TestSnapshotChangeLogging:
    """Test the standardized snapshot log entry."""

    def test_log_snapshot_change(self):
        logger = Mock()
        bound = logger.bind.return_value
        snapshot = AppearanceSnapshot(color_scheme=ColorScheme.DARK)

        log_snapshot_change(logger, 3, ("color_scheme",), snapshot)

        kwargs = logger.bind.call_args.kwargs
        assert kwargs["sequence"] == 3
        assert kwargs["changed"] == ["color_scheme"]
        assert "DARK" in kwargs["snapshot"]
        bound.debug.assert_called_once_with("Snapshot emitted")

    def test_log_snapshot_change_with_context(self):
        logger = Mock()
        bound = logger.bind.return_value

        log_snapshot_change(logger, 0, (), AppearanceSnapshot(), context={"source": "test"})

        bound.bind.assert_called_once_with(context={"source": "test"})
        bound.bind.return_value.debug.assert_called_once_with("Snapshot emitted")
