"""
XDG desktop portal settings provider over the D-Bus session bus.

Reads and watches the ``org.freedesktop.appearance`` namespace of
``org.freedesktop.portal.Settings`` with dbus-fast. D-Bus failures are
translated into the provider error taxonomy here and nowhere else.
"""

import asyncio
from typing import Any, Callable, Optional

from dbus_fast import BusType, Variant
from dbus_fast.aio import MessageBus
from dbus_fast.errors import AuthError, DBusError

from ..config.defaults import PortalParams
from ..errors import PortalConnectionError, PortalRequestError, ProviderError, SettingNotFoundError
from ..logging.config import get_portal_logger
from ..models import Color, ColorScheme, Contrast
from .base import SettingSource, SettingsProvider, Subscription

logger = get_portal_logger(__name__)

NOT_FOUND_ERROR = "org.freedesktop.portal.Error.NotFound"

# ReadOne appeared in version 2 of the Settings interface
READ_ONE_MIN_VERSION = 2

COLOR_SCHEME_KEY = "color-scheme"
ACCENT_COLOR_KEY = "accent-color"
CONTRAST_KEY = "contrast"


def unwrap_variant(value: Any) -> Any:
    """Strip (possibly nested) variant wrappers from a portal value."""
    while isinstance(value, Variant):
        value = value.value
    return value


def _decode_uint(raw: Any, key: str, values: dict) -> Any:
    if not isinstance(raw, int) or isinstance(raw, bool):
        raise PortalRequestError(f"Malformed {key} value: {raw!r}", key=key)
    return values.get(raw)


def decode_color_scheme(raw: Any) -> Optional[ColorScheme]:
    """0 = no preference, 1 = prefer dark, 2 = prefer light."""
    return _decode_uint(raw, COLOR_SCHEME_KEY, {1: ColorScheme.DARK, 2: ColorScheme.LIGHT})


def decode_contrast(raw: Any) -> Optional[Contrast]:
    """0 = no preference, 1 = higher contrast."""
    return _decode_uint(raw, CONTRAST_KEY, {1: Contrast.HIGH})


def decode_accent_color(raw: Any) -> Optional[Color]:
    """(ddd) triple; any channel outside 0..1 means the accent color is unset."""
    try:
        red, green, blue = (float(channel) for channel in raw)
    except (TypeError, ValueError) as e:
        raise PortalRequestError(
            f"Malformed accent-color value: {raw!r}",
            key=ACCENT_COLOR_KEY
        ) from e

    if not all(0.0 <= channel <= 1.0 for channel in (red, green, blue)):
        return None
    return Color(red, green, blue)


def translate_dbus_error(error: DBusError, namespace: str, key: Optional[str] = None) -> ProviderError:
    """Map a D-Bus error reply onto the provider error taxonomy."""
    where = f"{namespace} {key}" if key else namespace
    if error.type == NOT_FOUND_ERROR:
        return SettingNotFoundError(
            f"Setting not found: {where}",
            namespace=namespace,
            key=key,
            error_name=error.type
        )
    return PortalRequestError(
        f"Portal request failed for {where}: {error.type}: {error.text}",
        namespace=namespace,
        key=key,
        error_name=error.type
    )


class PortalSettingSource(SettingSource):
    """One key of the appearance namespace."""

    def __init__(self, provider: "PortalSettingsProvider", key: str, decode: Callable[[Any], Any]):
        self._provider = provider
        self.namespace = provider.namespace
        self.key = key
        self._decode = decode

    async def get(self) -> Any:
        raw = await self._provider.read(self.key)
        return self._decode(raw)

    async def subscribe(self) -> Subscription:
        return self._provider.watch(self.key, self._decode)

    def __repr__(self) -> str:
        return f"<PortalSettingSource {self.namespace} {self.key}>"


class PortalSettingsProvider(SettingsProvider):
    """Settings provider backed by org.freedesktop.portal.Settings."""

    def __init__(self, bus: MessageBus, interface: Any, version: int,
                 params: Optional[PortalParams] = None):
        self.params = params or PortalParams()
        self.namespace = self.params.namespace
        self.version = version
        self._bus = bus
        self._interface = interface
        self._subscriptions: set[Subscription] = set()
        self._closed = False
        self._disconnect_error: Optional[PortalConnectionError] = None

        self._color_scheme = PortalSettingSource(self, COLOR_SCHEME_KEY, decode_color_scheme)
        self._accent_color = PortalSettingSource(self, ACCENT_COLOR_KEY, decode_accent_color)
        self._contrast = PortalSettingSource(self, CONTRAST_KEY, decode_contrast)

        self._watcher = asyncio.get_running_loop().create_task(self._watch_disconnect())

    @classmethod
    async def connect(cls, params: Optional[PortalParams] = None) -> "PortalSettingsProvider":
        """Connect to the session bus and bind the Settings interface."""
        params = params or PortalParams()

        try:
            bus = await MessageBus(bus_type=BusType.SESSION).connect()
        except (OSError, AuthError) as e:
            raise PortalConnectionError(f"Cannot connect to the session bus: {e}") from e

        try:
            introspection = await bus.introspect(params.bus_name, params.object_path)
            proxy = bus.get_proxy_object(params.bus_name, params.object_path, introspection)
            interface = proxy.get_interface(params.interface)
            version = await interface.get_version()
        except DBusError as e:
            bus.disconnect()
            raise translate_dbus_error(e, params.namespace) from e
        except Exception:
            bus.disconnect()
            raise

        logger.info(
            "Connected to settings portal",
            bus_name=params.bus_name,
            interface=params.interface,
            version=version
        )
        return cls(bus, interface, version, params)

    @property
    def color_scheme(self) -> PortalSettingSource:
        return self._color_scheme

    @property
    def accent_color(self) -> PortalSettingSource:
        return self._accent_color

    @property
    def contrast(self) -> PortalSettingSource:
        return self._contrast

    async def read(self, key: str) -> Any:
        """Read one raw value from the appearance namespace."""
        try:
            if self.version >= READ_ONE_MIN_VERSION:
                value = await self._interface.call_read_one(self.namespace, key)
            else:
                value = await self._interface.call_read(self.namespace, key)
        except DBusError as e:
            error = translate_dbus_error(e, self.namespace, key)
            logger.debug("Portal read failed", key=key, error_name=e.type)
            raise error from e
        except (OSError, EOFError) as e:
            raise PortalConnectionError(
                f"Session bus connection lost while reading {key}: {e}",
                namespace=self.namespace,
                key=key
            ) from e

        value = unwrap_variant(value)
        logger.debug("Portal read", key=key, value=value)
        return value

    def watch(self, key: str, decode: Callable[[Any], Any]) -> Subscription:
        """Subscribe to SettingChanged signals for one key."""
        if self._closed:
            raise PortalConnectionError(
                "Settings provider is closed",
                namespace=self.namespace,
                key=key
            )
        if self._disconnect_error is not None:
            raise PortalConnectionError(
                f"Cannot subscribe to {key}: {self._disconnect_error}",
                namespace=self.namespace,
                key=key
            ) from self._disconnect_error

        def on_setting_changed(namespace: str, changed_key: str, value: Any) -> None:
            if namespace != self.namespace or changed_key != key:
                return
            raw = unwrap_variant(value)
            logger.debug("Setting changed", key=key, value=raw)
            try:
                subscription.push(decode(raw))
            except ProviderError as e:
                subscription.fail(e)

        def release() -> None:
            self._subscriptions.discard(subscription)
            self._interface.off_setting_changed(on_setting_changed)
            logger.debug("Unsubscribed", key=key)

        subscription: Subscription = Subscription(key, on_close=release)
        self._interface.on_setting_changed(on_setting_changed)
        self._subscriptions.add(subscription)
        logger.debug("Subscribed", key=key)
        return subscription

    async def _watch_disconnect(self) -> None:
        try:
            await self._bus.wait_for_disconnect()
            error = PortalConnectionError("Session bus disconnected", namespace=self.namespace)
        except Exception as e:
            error = PortalConnectionError(f"Session bus connection lost: {e}", namespace=self.namespace)

        if self._closed:
            return
        self._disconnect_error = error
        logger.error("Settings portal connection lost", error=str(error))
        for subscription in list(self._subscriptions):
            subscription.fail(error)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for subscription in list(self._subscriptions):
            await subscription.aclose()
        self._watcher.cancel()
        await asyncio.gather(self._watcher, return_exceptions=True)
        self._bus.disconnect()
        logger.info("Disconnected from settings portal")
