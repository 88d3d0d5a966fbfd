"""JSON encoding helpers for the encrypted cache payload."""

from __future__ import annotations

import json


def dump_json_bytes(payload: object) -> bytes:
    """Serialize a payload to deterministic UTF-8 JSON bytes."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")


def load_json_bytes(data: bytes) -> object:
    """Parse UTF-8 JSON bytes."""
    return json.loads(data.decode("utf-8"))
