"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Any, Callable, Optional

import pytest

from appearance_monitor.errors import SettingNotFoundError
from appearance_monitor.models import AppearanceSnapshot, Color, ColorScheme
from appearance_monitor.portal.base import SettingSource, SettingsProvider, Subscription

NAMESPACE = "org.freedesktop.appearance"


class FakeSettingSource(SettingSource):
    """In-memory setting: a fixed read result plus manually emitted changes."""

    def __init__(
        self,
        key: str,
        value: Any = None,
        error: Optional[BaseException] = None,
        subscribe_error: Optional[BaseException] = None,
        delay: float = 0.0,
    ):
        self.namespace = NAMESPACE
        self.key = key
        self.value = value
        self.error = error
        self.subscribe_error = subscribe_error
        self.delay = delay
        self.get_calls = 0
        self.settled_calls = 0
        self.subscriptions: list[Subscription] = []

    async def get(self) -> Any:
        self.get_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        self.settled_calls += 1
        if self.error is not None:
            raise self.error
        return self.value

    async def subscribe(self) -> Subscription:
        if self.subscribe_error is not None:
            raise self.subscribe_error
        subscription: Subscription = Subscription(self.key)
        self.subscriptions.append(subscription)
        return subscription

    def emit(self, value: Any) -> None:
        for subscription in self.subscriptions:
            subscription.push(value)

    @property
    def open_subscriptions(self) -> int:
        return sum(1 for s in self.subscriptions if not s.closed)


class FakeSettingsProvider(SettingsProvider):
    """Provider over three FakeSettingSource instances."""

    def __init__(
        self,
        color_scheme: Optional[FakeSettingSource] = None,
        accent_color: Optional[FakeSettingSource] = None,
        contrast: Optional[FakeSettingSource] = None,
    ):
        self._color_scheme = color_scheme or FakeSettingSource("color-scheme")
        self._accent_color = accent_color or FakeSettingSource("accent-color")
        self._contrast = contrast or FakeSettingSource("contrast")
        self.closed = False

    @property
    def color_scheme(self) -> FakeSettingSource:
        return self._color_scheme

    @property
    def accent_color(self) -> FakeSettingSource:
        return self._accent_color

    @property
    def contrast(self) -> FakeSettingSource:
        return self._contrast

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_source() -> Callable[..., FakeSettingSource]:
    """Factory for fake setting sources."""
    return FakeSettingSource


@pytest.fixture
def make_provider() -> Callable[..., FakeSettingsProvider]:
    """Factory for fake settings providers."""
    return FakeSettingsProvider


@pytest.fixture
def not_found() -> Callable[[str], SettingNotFoundError]:
    """Factory for the portal's not-found failure."""
    def _make(key: str) -> SettingNotFoundError:
        return SettingNotFoundError(f"Setting not found: {NAMESPACE} {key}", namespace=NAMESPACE, key=key)
    return _make


@pytest.fixture
def gnome_blue() -> Color:
    """GNOME's default accent color."""
    return Color.from_hex("#3584E4")


@pytest.fixture
def dark_provider(make_provider, make_source, gnome_blue, not_found) -> FakeSettingsProvider:
    """Dark scheme, blue accent, no contrast support."""
    return make_provider(
        color_scheme=make_source("color-scheme", ColorScheme.DARK),
        accent_color=make_source("accent-color", gnome_blue),
        contrast=make_source("contrast", error=not_found("contrast")),
    )


@pytest.fixture
def dark_snapshot(gnome_blue) -> AppearanceSnapshot:
    """Snapshot matching dark_provider."""
    return AppearanceSnapshot(accent_color=gnome_blue, color_scheme=ColorScheme.DARK, contrast=None)
