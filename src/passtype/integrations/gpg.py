"""gpg-backed cipher for the metadata cache blob."""

from __future__ import annotations

from passtype.exceptions import CipherError
from passtype.integrations.process import run_command


class GpgCipher:
    """Encrypts to a recipient key and decrypts with whatever key gpg-agent holds."""

    def __init__(self, binary: str = "gpg"):
        self.binary = binary

    def encrypt(self, data: bytes, recipient: str) -> bytes:
        command = [
            self.binary,
            "--batch",
            "--yes",
            "--quiet",
            "--encrypt",
            "--recipient",
            recipient,
            "--output",
            "-",
        ]
        return run_command(command, error=CipherError, input_bytes=data)

    def decrypt(self, data: bytes) -> bytes:
        command = [self.binary, "--quiet", "--decrypt", "--output", "-"]
        return run_command(command, error=CipherError, input_bytes=data)
