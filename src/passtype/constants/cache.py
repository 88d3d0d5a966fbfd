"""Constants used by the metadata cache and hashing."""

from __future__ import annotations

CACHE_VERSION: int = 1
CACHE_TEMP_PREFIX: str = ".cache-"
CACHE_TEMP_SUFFIX: str = ".tmp"
CACHE_FILE_MODE: int = 0o600
CACHE_DIR_MODE: int = 0o700
FILE_HASH_CHUNK_SIZE: int = 65536
