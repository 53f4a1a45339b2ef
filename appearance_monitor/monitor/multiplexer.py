"""
Merge of independently arriving setting changes into one snapshot sequence.

Every source keeps exactly one pending read. A read that completes is
recorded in completion order; each step consumes the oldest completed read,
applies it to the previous snapshot and yields the result. Reads that
complete together are therefore served on consecutive steps, one snapshot
each.
"""

import asyncio
from collections import deque
from typing import Any, AsyncIterator, Mapping

import structlog

from ..logging.config import log_snapshot_change
from ..models import AppearanceSnapshot

logger = structlog.get_logger(__name__)

_EXHAUSTED = object()


async def _next_update(source: AsyncIterator[Any]) -> Any:
    try:
        return await source.__anext__()
    except StopAsyncIteration:
        return _EXHAUSTED


async def merge_updates(
    initial: AppearanceSnapshot,
    sources: Mapping[str, AsyncIterator[Any]],
) -> AsyncIterator[AppearanceSnapshot]:
    """
    Yield ``initial``, then one snapshot per change from any source.

    Args:
        initial: First snapshot, yielded before any source is read
        sources: Snapshot field name -> async iterator of replacement values

    The sequence ends when any source ends (immediately after ``initial``
    when there are no sources) and raises when any source
    raises. Pending reads are cancelled on every exit path; closing the
    sources themselves is left to their owner.
    """
    snapshot = initial
    sequence = 0
    log_snapshot_change(logger, sequence, (), snapshot)
    yield snapshot

    if not sources:
        logger.warning("No change subscriptions to merge, stopping")
        return

    loop = asyncio.get_running_loop()
    pending: dict[str, asyncio.Task] = {}
    ready: deque[str] = deque()

    def arm(field: str) -> None:
        task = loop.create_task(_next_update(sources[field]))
        task.add_done_callback(lambda _task, field=field: ready.append(field))
        pending[field] = task

    try:
        for field in sources:
            arm(field)

        while True:
            if not ready:
                await asyncio.wait(pending.values(), return_when=asyncio.FIRST_COMPLETED)

            field = ready.popleft()
            value = pending.pop(field).result()
            if value is _EXHAUSTED:
                logger.warning("Change subscription ended, stopping", field=field)
                return

            snapshot = snapshot.with_update(field, value)
            sequence += 1
            arm(field)
            log_snapshot_change(logger, sequence, (field,), snapshot)
            yield snapshot
    finally:
        for task in pending.values():
            task.cancel()
        if pending:
            await asyncio.gather(*pending.values(), return_exceptions=True)
