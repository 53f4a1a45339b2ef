"""
Snapshot output.

JSON-line encoding of snapshots and the stdout writer used by the CLI.
"""
from .stdout_delivery import StdoutSnapshotWriter, format_snapshot, snapshot_to_payload

__all__ = ["StdoutSnapshotWriter", "format_snapshot", "snapshot_to_payload"]
