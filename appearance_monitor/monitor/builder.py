"""Initial snapshot construction."""

import asyncio

import structlog

from ..models import AppearanceSnapshot
from ..portal.base import SettingsProvider
from .normalizer import not_found_as_none

logger = structlog.get_logger(__name__)


async def build_initial(provider: SettingsProvider) -> AppearanceSnapshot:
    """
    Read all three settings concurrently and build one complete snapshot.

    All reads are awaited to completion before any result is inspected.
    Results are then checked in the order color-scheme, accent-color,
    contrast, and the first fatal failure in that order is raised.
    """
    color_scheme, accent_color, contrast = await asyncio.gather(
        provider.color_scheme.get(),
        provider.accent_color.get(),
        provider.contrast.get(),
        return_exceptions=True,
    )

    snapshot = AppearanceSnapshot(
        color_scheme=not_found_as_none(color_scheme),
        accent_color=not_found_as_none(accent_color),
        contrast=not_found_as_none(contrast),
    )

    logger.info("Initial appearance read", snapshot=repr(snapshot))
    return snapshot
