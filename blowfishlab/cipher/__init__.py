"""Blowfish block cipher primitive.

Key schedule, round function, Feistel network and 64-bit block codec.
No modes of operation and no padding.
"""

from .blowfish import (
    BLOCK_SIZE,
    MAX_KEY_SIZE,
    MIN_KEY_SIZE,
    ROUNDS,
    Blowfish,
    new,
)
from .errors import BlowfishError, KeysizeError

__all__ = [
    "BLOCK_SIZE",
    "MAX_KEY_SIZE",
    "MIN_KEY_SIZE",
    "ROUNDS",
    "Blowfish",
    "new",
    "BlowfishError",
    "KeysizeError",
]
