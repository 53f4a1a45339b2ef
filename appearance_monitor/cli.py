"""
Command line entry point.

Takes no arguments: prints one JSON line per appearance snapshot until it
is interrupted or a fatal error occurs.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .delivery.stdout_delivery import StdoutSnapshotWriter
from .errors import AppearanceMonitorError
from .logging.config import configure_logging
from .monitor.appearance import AppearanceMonitor
from .portal.dbus import PortalSettingsProvider

logger = structlog.get_logger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


async def run(config: DefaultConfig, writer: Optional[StdoutSnapshotWriter] = None) -> None:
    """Connect to the settings portal and stream snapshots to stdout."""
    writer = writer or StdoutSnapshotWriter()
    async with await PortalSettingsProvider.connect(config.portal) as provider:
        async with AppearanceMonitor(provider).watch() as snapshots:
            async for snapshot in snapshots:
                writer.write(snapshot)


def main(config_path: Optional[Path] = None) -> int:
    try:
        config = ConfigLoader.create(config_path).load()
    except AppearanceMonitorError as e:
        print(f"appearance-monitor: {e}", file=sys.stderr)
        return EXIT_FAILURE

    configure_logging(
        level=config.logging.level,
        format_json=config.logging.format_json,
        include_timestamp=config.logging.include_timestamp,
        include_caller=config.logging.include_caller,
    )

    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except AppearanceMonitorError as e:
        logger.error("Fatal error", error=str(e), error_type=type(e).__name__)
        print(f"appearance-monitor: {e}", file=sys.stderr)
        return EXIT_FAILURE

    logger.warning("Snapshot stream ended")
    print("appearance-monitor: change notifications ended", file=sys.stderr)
    return EXIT_FAILURE
