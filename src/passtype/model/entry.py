"""Credential entry model and autotype action resolution."""

from __future__ import annotations

import binascii
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType

from passtype.config.model import AttributeKeys
from passtype.constants.entry import BUILTIN_SLOT_COUNT, CONTROL_OTP, CONTROL_PREFIX, CONTROL_TAB, OTP_URI_PREFIX
from passtype.exceptions import ActionError, EntryParseError
from passtype.model.actions import Action
from passtype.types.cache import EntryPayload
from passtype.utils import leaf_name, split_tokens

try:
    import pyotp
except ImportError:  # pragma: no cover - exercised only without the otp extra
    pyotp = None

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One credential record.

    Reserved attributes live in named fields; every other key of the metadata
    document is kept as a string in ``attributes``. An entry whose content
    could not be parsed has ``error`` set and nothing else.
    """

    name: str
    password: str | None = None
    username: str | None = None
    otp_secret: str | None = None
    tan: tuple[str, ...] = ()
    window: str | None = None
    autotype: Mapping[int, tuple[str, ...]] = field(default_factory=dict, hash=False)
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    error: str | None = None

    def __post_init__(self) -> None:
        # Copy into read-only views so a built entry cannot change under the cache.
        object.__setattr__(self, "tan", tuple(self.tan))
        object.__setattr__(self, "autotype", MappingProxyType(dict(self.autotype)))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def failure(cls, name: str, message: str) -> Entry:
        """Return an error-flagged entry carrying ``message``."""
        return cls(name=name, error=message)

    @classmethod
    def from_attributes(cls, name: str, attributes: Mapping[object, object], keys: AttributeKeys) -> Entry:
        """Build an entry from a merged attribute mapping, validating reserved keys.

        Raises:
            EntryParseError: when a reserved key holds a value of the wrong type.
        """
        scalars: dict[str, str | None] = {}
        tan: tuple[str, ...] = ()
        autotype: dict[int, tuple[str, ...]] = {}
        residual: dict[str, str] = {}

        for raw_key, value in attributes.items():
            key = str(raw_key)
            if value is None:
                continue
            slot = keys.slot_for_key(key)
            if slot is not None:
                tokens = split_tokens(value)
                if tokens is None:
                    raise EntryParseError(f"'{key}' must be a string or a list of strings")
                autotype[slot] = tokens
            elif key == keys.tan:
                tan = _split_tan(value, key)
            elif key in keys.scalar_keys:
                text = _scalar_text(value)
                if text is None:
                    raise EntryParseError(f"'{key}' must be a single value")
                scalars[key] = text
            else:
                text = _scalar_text(value)
                if text is None:
                    logger.warning("Ignoring non-scalar attribute '%s' in %s", key, name)
                    continue
                residual[key] = text

        return cls(
            name=name,
            password=scalars.get(keys.password),
            username=scalars.get(keys.username),
            otp_secret=scalars.get(keys.otp_secret),
            tan=tan,
            window=scalars.get(keys.window),
            autotype=autotype,
            attributes=residual,
        )

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def display_name(self) -> str:
        """Leaf component of the entry name."""
        return leaf_name(self.name)

    def lookup(self, key: str, keys: AttributeKeys) -> str | None:
        """Return the value stored under attribute ``key``, if any."""
        if key == keys.password:
            return self.password
        if key == keys.username:
            return self.username
        if key == keys.otp_secret:
            return self.otp_secret
        if key == keys.window:
            return self.window
        return self.attributes.get(key)

    def slot_tokens(
        self,
        slot: int,
        keys: AttributeKeys,
        defaults: Mapping[int, tuple[str, ...]],
    ) -> tuple[str, ...]:
        """Return the raw token sequence for ``slot``: entry override, then config default, then built-in."""
        if slot in self.autotype:
            return self.autotype[slot]
        if slot in defaults:
            return defaults[slot]
        return builtin_slot_tokens(slot, keys)

    def resolve_actions(
        self,
        slot: int,
        keys: AttributeKeys,
        defaults: Mapping[int, tuple[str, ...]] | None = None,
    ) -> tuple[Action, ...]:
        """Resolve ``slot`` into concrete actions.

        Tokens starting with ``:`` become control actions; every other token is
        an attribute lookup, and lookups that miss are dropped.
        """
        actions: list[Action] = []
        for token in self.slot_tokens(slot, keys, defaults or {}):
            if token.startswith(CONTROL_PREFIX) and len(token) > len(CONTROL_PREFIX):
                actions.append(Action.control(token[len(CONTROL_PREFIX) :]))
                continue
            value = self.lookup(token, keys)
            if value is None:
                logger.debug("Dropping missing attribute '%s' from %s slot %d", token, self.name, slot)
                continue
            actions.append(Action.text(value, source=token))
        return tuple(actions)

    def tan_action(self, index: int) -> Action:
        """Return the TAN at 1-based ``index`` as a text action."""
        if not self.tan:
            raise ActionError(f"{self.name} has no TAN list")
        if not 1 <= index <= len(self.tan):
            raise ActionError(f"TAN index must be between 1 and {len(self.tan)}")
        return Action.text(self.tan[index - 1], source="tan")

    def otp_code(self, for_time: datetime | None = None) -> str:
        """Return the current TOTP code derived from ``otp_secret``.

        Raises:
            ActionError: when the entry has no secret, the secret is invalid,
                or OTP support is not installed.
        """
        if not self.otp_secret:
            raise ActionError(f"{self.name} has no OTP secret")
        if pyotp is None:
            raise ActionError("OTP support is not installed (pip install 'passtype[otp]')")
        try:
            if self.otp_secret.startswith(OTP_URI_PREFIX):
                generator = pyotp.parse_uri(self.otp_secret)
            else:
                generator = pyotp.TOTP(self.otp_secret.replace(" ", ""))
            if for_time is None:
                return generator.now()
            return generator.at(for_time)
        except (ValueError, TypeError, binascii.Error) as exc:
            raise ActionError(f"{self.name} has an invalid OTP secret: {exc}") from exc

    def to_payload(self) -> EntryPayload:
        """Serialize for the encrypted cache."""
        payload: EntryPayload = {"name": self.name}
        if self.error is not None:
            payload["error"] = self.error
            return payload
        for field_name in ("password", "username", "otp_secret", "window"):
            value = getattr(self, field_name)
            if value is not None:
                payload[field_name] = value  # type: ignore[literal-required]
        if self.tan:
            payload["tan"] = list(self.tan)
        if self.autotype:
            payload["autotype"] = {str(slot): list(tokens) for slot, tokens in self.autotype.items()}
        if self.attributes:
            payload["attributes"] = dict(self.attributes)
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> Entry | None:
        """Rebuild an entry from its cached form; returns None for malformed payloads."""
        name = payload.get("name")
        if not isinstance(name, str):
            return None
        error = payload.get("error")
        if isinstance(error, str):
            return cls.failure(name, error)

        scalars: dict[str, str | None] = {}
        for field_name in ("password", "username", "otp_secret", "window"):
            value = payload.get(field_name)
            if value is not None and not isinstance(value, str):
                return None
            scalars[field_name] = value

        tan = payload.get("tan", [])
        autotype = payload.get("autotype", {})
        attributes = payload.get("attributes", {})
        if not isinstance(tan, list) or not all(isinstance(code, str) for code in tan):
            return None
        if not isinstance(autotype, dict) or not isinstance(attributes, dict):
            return None

        slots: dict[int, tuple[str, ...]] = {}
        for slot, tokens in autotype.items():
            parsed = split_tokens(tokens)
            if not isinstance(slot, str) or not slot.isdecimal() or parsed is None:
                return None
            slots[int(slot)] = parsed

        return cls(
            name=name,
            tan=tuple(tan),
            autotype=slots,
            attributes={str(key): str(value) for key, value in attributes.items()},
            **scalars,
        )


def builtin_slot_tokens(slot: int, keys: AttributeKeys) -> tuple[str, ...]:
    """Return the built-in token sequence for ``slot``."""
    if slot >= BUILTIN_SLOT_COUNT or slot < 0:
        return ()
    builtins: tuple[tuple[str, ...], ...] = (
        (keys.username, f"{CONTROL_PREFIX}{CONTROL_TAB}", keys.password),
        (keys.password,),
        (keys.username,),
        (f"{CONTROL_PREFIX}{CONTROL_OTP}",),
    )
    return builtins[slot]


def _scalar_text(value: object) -> str | None:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return None


def _split_tan(value: object, key: str) -> tuple[str, ...]:
    if isinstance(value, (str, int)):
        lines = str(value).splitlines()
    elif isinstance(value, list) and all(isinstance(item, (str, int)) for item in value):
        lines = [str(item) for item in value]
    else:
        raise EntryParseError(f"'{key}' must be a newline-separated string or a list of codes")
    return tuple(line.strip() for line in lines if line.strip())
