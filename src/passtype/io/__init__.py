"""Shared file I/O helpers."""

from .files import file_sha256, write_bytes_atomic
from .json_io import dump_json_bytes, load_json_bytes

__all__ = ["dump_json_bytes", "file_sha256", "load_json_bytes", "write_bytes_atomic"]
