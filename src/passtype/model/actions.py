"""Resolved autotype actions."""

from __future__ import annotations

from dataclasses import dataclass

from passtype.types.common import ActionKind


@dataclass(frozen=True)
class Action:
    """One step of an autotype sequence.

    ``control`` actions carry a control name (``tab``, ``otp``...), ``text``
    actions carry the literal value to type. ``source`` names the attribute a
    text value came from and is safe to log; ``value`` is not.
    """

    kind: ActionKind
    value: str
    source: str = ""

    @classmethod
    def control(cls, name: str) -> Action:
        return cls(kind="control", value=name, source=name)

    @classmethod
    def text(cls, value: str, source: str = "") -> Action:
        return cls(kind="text", value=value, source=source)

    def __repr__(self) -> str:
        shown = self.value if self.kind == "control" else "***"
        return f"Action(kind={self.kind!r}, value={shown!r}, source={self.source!r})"
