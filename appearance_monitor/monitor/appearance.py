"""
Appearance monitor: initial snapshot followed by live changes.
"""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator

import structlog

from ..models import AppearanceSnapshot
from ..portal.base import SettingsProvider, Subscription
from .builder import build_initial
from .multiplexer import merge_updates

logger = structlog.get_logger(__name__)


class AppearanceMonitor:
    """
    Composes the snapshot builder and the change merge over one provider.

    Usage::

        async with AppearanceMonitor(provider).watch() as snapshots:
            async for snapshot in snapshots:
                ...
    """

    def __init__(self, provider: SettingsProvider) -> None:
        self.provider = provider

    async def current(self) -> AppearanceSnapshot:
        """Read the current appearance once."""
        return await build_initial(self.provider)

    @asynccontextmanager
    async def watch(self) -> AsyncIterator[AsyncIterator[AppearanceSnapshot]]:
        """
        Open the live snapshot sequence.

        Raises on entry, before any snapshot is produced, when the initial
        read or any of the subscriptions fails. Subscriptions are released
        when the block exits, however it exits.
        """
        initial = await build_initial(self.provider)

        async with AsyncExitStack() as stack:
            subscriptions = await self._subscribe_all(stack)
            snapshots = merge_updates(initial, subscriptions)
            stack.push_async_callback(snapshots.aclose)
            logger.info("Watching appearance changes")
            yield snapshots

    async def _subscribe_all(self, stack: AsyncExitStack) -> dict[str, Subscription]:
        sources = {
            "color_scheme": self.provider.color_scheme,
            "accent_color": self.provider.accent_color,
            "contrast": self.provider.contrast,
        }
        outcomes = await asyncio.gather(
            *(source.subscribe() for source in sources.values()),
            return_exceptions=True,
        )

        subscriptions = {}
        for field, outcome in zip(sources, outcomes):
            if not isinstance(outcome, BaseException):
                stack.push_async_callback(outcome.aclose)
                subscriptions[field] = outcome

        for field, outcome in zip(sources, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Subscription failed", field=field, error=str(outcome))
                raise outcome

        return subscriptions
