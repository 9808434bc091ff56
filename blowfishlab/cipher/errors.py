from __future__ import annotations


class BlowfishError(Exception):
    """Base class for errors raised by the Blowfish primitive."""


class KeysizeError(BlowfishError, ValueError):
    """Key length outside the accepted 4..56 byte range."""

    def __init__(self, key_len: int, min_len: int = 4, max_len: int = 56):
        self.key_len = key_len
        self.min_len = min_len
        self.max_len = max_len
        super().__init__(
            f"Invalid keysize: got {key_len} bytes, expected {min_len}..{max_len}"
        )
