"""Credential store and cache encryption exceptions."""

from __future__ import annotations

from passtype.exceptions.base import PasstypeError


class StoreError(PasstypeError):
    """Raised when the credential store cannot reveal an entry."""


class CipherError(PasstypeError):
    """Raised when the encryption tool fails."""


class CacheDecryptError(CipherError):
    """Raised when an existing persisted cache cannot be decrypted or read."""
