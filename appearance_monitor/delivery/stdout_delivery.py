"""Standard output snapshot delivery."""

import json
import sys
from typing import Any, Optional, TextIO

import structlog

from ..errors import DeliveryError, SerializationError
from ..models import AppearanceSnapshot

logger = structlog.get_logger(__name__)


def snapshot_to_payload(snapshot: AppearanceSnapshot) -> dict[str, Any]:
    """Output mapping with hyphenated keys; absent fields are left out."""
    payload: dict[str, Any] = {}
    if snapshot.accent_color is not None:
        payload["accent-color"] = snapshot.accent_color.to_hex()
    if snapshot.color_scheme is not None:
        payload["color-scheme"] = snapshot.color_scheme.value
    if snapshot.contrast is not None:
        payload["contrast"] = snapshot.contrast.value
    return payload


def format_snapshot(snapshot: AppearanceSnapshot) -> str:
    """Encode a snapshot as one compact JSON object."""
    try:
        return json.dumps(snapshot_to_payload(snapshot), separators=(",", ":"))
    except (TypeError, ValueError, AttributeError) as e:
        raise SerializationError(f"Cannot encode snapshot: {e}", snapshot=snapshot) from e


class StdoutSnapshotWriter:
    """Writes one JSON line per snapshot and flushes after each."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.delivery_count = 0

    def write(self, snapshot: AppearanceSnapshot) -> None:
        line = format_snapshot(snapshot)
        try:
            print(line, file=self.stream, flush=True)
        except OSError as e:
            raise DeliveryError(f"Cannot write snapshot: {e}", delivery_method="stdout") from e

        self.delivery_count += 1
        logger.debug("Snapshot written", delivery_count=self.delivery_count)
