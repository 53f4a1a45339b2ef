"""Integration tests for the command line pipeline."""

import asyncio
import io
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from appearance_monitor import cli
from appearance_monitor.config.defaults import get_default_config
from appearance_monitor.delivery.stdout_delivery import StdoutSnapshotWriter
from appearance_monitor.errors import PortalConnectionError
from appearance_monitor.models import ColorScheme


class ScriptedWriter(StdoutSnapshotWriter):
    """Writer that drives provider changes after each delivered line."""

    def __init__(self, stream, actions):
        super().__init__(stream)
        self.actions = list(actions)

    def write(self, snapshot):
        super().write(snapshot)
        if self.actions:
            self.actions.pop(0)()


@pytest.mark.integration
class TestRunPipeline:
    """Run the monitor end to end against a fake provider."""

    def test_dark_to_light_scenario(self, dark_provider):
        """Test the documented two-line output for one color-scheme change."""
        stream = io.StringIO()

        def change_scheme():
            dark_provider.color_scheme.emit(ColorScheme.LIGHT)
            dark_provider.contrast.subscriptions[0].finish()

        writer = ScriptedWriter(stream, [change_scheme])

        with patch.object(cli.PortalSettingsProvider, "connect", AsyncMock(return_value=dark_provider)):
            asyncio.run(cli.run(get_default_config(), writer))

        assert stream.getvalue().splitlines() == [
            '{"accent-color":"#3584e4","color-scheme":"dark"}',
            '{"accent-color":"#3584e4","color-scheme":"light"}',
        ]
        assert dark_provider.closed
        assert dark_provider.color_scheme.open_subscriptions == 0


@pytest.mark.integration
class TestMain:
    """Exit status and diagnostics of the entry point."""

    def test_fatal_error_exits_non_zero(self, tmp_path: Path, capsys):
        async def failing_run(config):
            raise PortalConnectionError("Cannot connect to the session bus: no socket")

        with patch.object(cli, "run", failing_run):
            status = cli.main(tmp_path / "absent.yaml")

        captured = capsys.readouterr()
        assert status == cli.EXIT_FAILURE
        assert captured.out == ""
        assert "appearance-monitor: Cannot connect to the session bus" in captured.err

    def test_invalid_config_exits_non_zero(self, tmp_path: Path, capsys):
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: LOUD\n")

        status = cli.main(path)

        assert status == cli.EXIT_FAILURE
        assert "Invalid configuration" in capsys.readouterr().err

    def test_keyboard_interrupt(self, tmp_path: Path):
        def interrupted(coro):
            coro.close()
            raise KeyboardInterrupt

        with patch.object(cli.asyncio, "run", interrupted):
            assert cli.main(tmp_path / "absent.yaml") == cli.EXIT_INTERRUPTED

    def test_stream_end_is_reported(self, tmp_path: Path, capsys):
        async def finished_run(config):
            return None

        with patch.object(cli, "run", finished_run):
            status = cli.main(tmp_path / "absent.yaml")

        assert status == cli.EXIT_FAILURE
        assert "change notifications ended" in capsys.readouterr().err
