"""Typed cache payload structures."""

from __future__ import annotations

from typing import NotRequired, TypedDict


class EntryPayload(TypedDict):
    """Serialized form of one cached entry."""

    name: str
    password: NotRequired[str]
    username: NotRequired[str]
    otp_secret: NotRequired[str]
    tan: NotRequired[list[str]]
    window: NotRequired[str]
    autotype: NotRequired[dict[str, list[str]]]
    attributes: NotRequired[dict[str, str]]
    error: NotRequired[str]


class CachePayload(TypedDict):
    """Top-level cache payload, encrypted before it is written to disk."""

    version: int
    fingerprints: dict[str, str]
    entries: dict[str, EntryPayload]
