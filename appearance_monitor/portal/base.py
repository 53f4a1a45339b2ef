"""
Settings provider contract.

A provider exposes one SettingSource per appearance attribute. Each source
can be read once (``get``) or watched (``subscribe``). Subscriptions are
queue-backed async iterators that the concrete adapter feeds from its
transport callbacks.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, TypeVar

from ..models import Color, ColorScheme, Contrast

T = TypeVar("T")

_END = object()


class Subscription(Generic[T]):
    """
    Standing notification source for one setting.

    The adapter pushes replacement values, ends the stream with ``finish``
    or fails it with ``fail``. Consumers iterate with ``async for`` and must
    release the subscription with ``aclose`` (or ``async with``).
    """

    def __init__(self, name: str, on_close: Optional[Callable[[], Any]] = None):
        self.name = name
        self._queue: asyncio.Queue = asyncio.Queue()
        self._on_close = on_close
        self._closed = False
        self._ended = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, value: T) -> None:
        """Deliver one changed value."""
        if not self._closed and not self._ended:
            self._queue.put_nowait(value)

    def finish(self) -> None:
        """End the stream after the values already pushed."""
        if not self._closed and not self._ended:
            self._ended = True
            self._queue.put_nowait(_END)

    def fail(self, error: BaseException) -> None:
        """End the stream with an error after the values already pushed."""
        if not self._closed and not self._ended:
            self._ended = True
            self._queue.put_nowait(error)

    def __aiter__(self) -> "Subscription[T]":
        return self

    async def __anext__(self) -> T:
        if self._closed:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _END:
            raise StopAsyncIteration
        if isinstance(item, BaseException):
            raise item
        return item

    async def aclose(self) -> None:
        """Release the subscription; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_END)
        if self._on_close is not None:
            result = self._on_close()
            if asyncio.iscoroutine(result):
                await result

    async def __aenter__(self) -> "Subscription[T]":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<Subscription {self.name} closed={self._closed}>"


class SettingSource(ABC, Generic[T]):
    """One readable and watchable setting of the provider."""

    namespace: str
    key: str

    @abstractmethod
    async def get(self) -> T:
        """
        Read the current value.

        Raises:
            SettingNotFoundError: the provider does not know the setting
            ProviderError: any other provider failure
        """

    @abstractmethod
    async def subscribe(self) -> Subscription[T]:
        """Start receiving changes of this setting."""


class SettingsProvider(ABC):
    """Source of the three appearance settings."""

    @property
    @abstractmethod
    def color_scheme(self) -> SettingSource[Optional[ColorScheme]]:
        ...

    @property
    @abstractmethod
    def accent_color(self) -> SettingSource[Optional[Color]]:
        ...

    @property
    @abstractmethod
    def contrast(self) -> SettingSource[Optional[Contrast]]:
        ...

    async def close(self) -> None:
        """Release transport resources."""

    async def __aenter__(self) -> "SettingsProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
