"""Tests for absence normalization."""

import asyncio

import pytest

from appearance_monitor.errors import PortalConnectionError, PortalRequestError, SettingNotFoundError
from appearance_monitor.models import ColorScheme
from appearance_monitor.monitor.normalizer import not_found_as_none


class TestNotFoundAsNone:
    """Test the single place absence and failure are told apart."""

    def test_value_passes_through(self):
        assert not_found_as_none(ColorScheme.DARK) is ColorScheme.DARK

    def test_none_value_passes_through(self):
        assert not_found_as_none(None) is None

    def test_not_found_becomes_none(self, not_found):
        assert not_found_as_none(not_found("contrast")) is None

    @pytest.mark.parametrize("error", [
        PortalRequestError("denied", error_name="org.freedesktop.DBus.Error.AccessDenied"),
        PortalConnectionError("bus gone"),
        RuntimeError("unexpected"),
    ])
    def test_other_failures_are_reraised(self, error):
        with pytest.raises(type(error)) as exc_info:
            not_found_as_none(error)
        assert exc_info.value is error

    def test_cancellation_is_reraised(self):
        with pytest.raises(asyncio.CancelledError):
            not_found_as_none(asyncio.CancelledError())

    def test_subclass_of_not_found_is_absence(self):
        class UnsupportedSetting(SettingNotFoundError):
            pass

        assert not_found_as_none(UnsupportedSetting("unsupported")) is None
