"""Blowfish block cipher (Schneier, 1993).

16-round Feistel network over 64-bit blocks with key-dependent P-array and
S-boxes. This module only provides the raw primitive: one block at a time,
no chaining mode, no padding. Lookups are not hardened against cache timing.

Research / education only. Do NOT use in production.

Usage:
    cipher = new(b"verysecretpasswd")
    block = bytearray(b"abcd1234")
    cipher.encrypt_block(block)        # in place
    l, r = cipher.encrypt_lr(l, r)     # raw word pair
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple, Union

from .constants import P_INIT, S_INIT
from .errors import KeysizeError

logger = logging.getLogger(__name__)

BLOCK_SIZE = 8     # 64 bits
MIN_KEY_SIZE = 4   # 32 bits
MAX_KEY_SIZE = 56  # 448 bits
ROUNDS = 16

MASK32 = 0xFFFFFFFF

WritableBlock = Union[bytearray, memoryview]


def _f(sbox: Sequence[Sequence[int]], x: int) -> int:
    """F(x) = ((S0[a] + S1[b]) ^ S2[c]) + S3[d], a..d from MSB to LSB."""
    s0, s1, s2, s3 = sbox
    a = s0[(x >> 24) & 0xFF]
    b = s1[(x >> 16) & 0xFF]
    c = s2[(x >> 8) & 0xFF]
    d = s3[x & 0xFF]
    return (d + (c ^ ((b + a) & MASK32))) & MASK32


def _encrypt_words(
    pbox: Sequence[int], sbox: Sequence[Sequence[int]], l: int, r: int
) -> Tuple[int, int]:
    l &= MASK32
    r &= MASK32

    for i in range(0, ROUNDS, 2):
        l ^= pbox[i]
        r ^= _f(sbox, l)
        r ^= pbox[i + 1]
        l ^= _f(sbox, r)

    l ^= pbox[16]
    r ^= pbox[17]
    return r, l


def _key_schedule(key: bytes) -> Tuple[Tuple[int, ...], Tuple[Tuple[int, ...], ...]]:
    """
    Derive the key-dependent P-array and S-boxes.

    - XOR the cyclically repeated key, read as big-endian words, into P
    - encrypt a running (L, R) starting from zero, 9 times to refill P
      and 4 x 128 times to refill the S-boxes (521 encryptions)

    Each encryption uses the tables as left by the previous one.
    """
    pbox: List[int] = list(P_INIT)
    sbox: List[List[int]] = [list(s) for s in S_INIT]

    key_len = len(key)
    pos = 0
    for i in range(len(pbox)):
        word = 0
        for _ in range(4):
            word = (word << 8) | key[pos % key_len]
            pos += 1
        pbox[i] ^= word

    l = r = 0
    for i in range(0, len(pbox), 2):
        l, r = _encrypt_words(pbox, sbox, l, r)
        pbox[i] = l
        pbox[i + 1] = r

    for box in sbox:
        for j in range(0, len(box), 2):
            l, r = _encrypt_words(pbox, sbox, l, r)
            box[j] = l
            box[j + 1] = r

    return tuple(pbox), tuple(tuple(box) for box in sbox)


class Blowfish:
    """Blowfish cipher instance holding the key-dependent tables.

    The tables are tuples, fixed once the key schedule completes, so an
    instance can be shared between threads without locking.
    """

    def __init__(self, key: bytes):
        """
        Initialize Blowfish with a 4 to 56 byte key.

        Args:
            key: raw key material (32 to 448 bits)

        Raises:
            KeysizeError: if the key length is out of range
        """
        if len(key) < MIN_KEY_SIZE or len(key) > MAX_KEY_SIZE:
            raise KeysizeError(len(key), MIN_KEY_SIZE, MAX_KEY_SIZE)

        self._pbox: Tuple[int, ...]
        self._sbox: Tuple[Tuple[int, ...], ...]
        self._pbox, self._sbox = _key_schedule(bytes(key))

        logger.debug("Blowfish key schedule complete (key_len=%d)", len(key))

    @property
    def pbox(self) -> Tuple[int, ...]:
        return self._pbox

    @property
    def sbox(self) -> Tuple[Tuple[int, ...], ...]:
        return self._sbox

    # =========================================================================
    # FEISTEL NETWORK
    # =========================================================================

    def encrypt_lr(self, l: int, r: int) -> Tuple[int, int]:
        """Encrypt one (L, R) word pair and return the new pair."""
        return _encrypt_words(self._pbox, self._sbox, l, r)

    def decrypt_lr(self, l: int, r: int) -> Tuple[int, int]:
        """Inverse of encrypt_lr: walks the P-array pairs from the top down."""
        p = self._pbox
        s = self._sbox
        l &= MASK32
        r &= MASK32

        for i in range(ROUNDS, 0, -2):
            l ^= p[i + 1]
            r ^= _f(s, l)
            r ^= p[i]
            l ^= _f(s, r)

        # Whitening undoes the first encryption pair, hence P[1] / P[0].
        l ^= p[1]
        r ^= p[0]
        return r, l

    # =========================================================================
    # BLOCK CODEC
    # =========================================================================

    @staticmethod
    def _check_block(block) -> None:
        try:
            readonly = memoryview(block).readonly
        except TypeError:
            readonly = True
        if readonly or len(block) != BLOCK_SIZE:
            raise ValueError(
                f"block must be a writable {BLOCK_SIZE}-byte buffer "
                f"({type(block).__name__} of length {len(block)} given)"
            )

    def encrypt_block(self, block: WritableBlock) -> None:
        """Encrypt an 8-byte writable buffer in place.

        Raises:
            ValueError: if `block` is read-only (e.g. bytes) or not 8 bytes long
        """
        self._check_block(block)
        l = int.from_bytes(block[:4], "big")
        r = int.from_bytes(block[4:], "big")

        l, r = self.encrypt_lr(l, r)

        block[:4] = l.to_bytes(4, "big")
        block[4:] = r.to_bytes(4, "big")

    def decrypt_block(self, block: WritableBlock) -> None:
        """Decrypt an 8-byte writable buffer in place."""
        self._check_block(block)
        l = int.from_bytes(block[:4], "big")
        r = int.from_bytes(block[4:], "big")

        l, r = self.decrypt_lr(l, r)

        block[:4] = l.to_bytes(4, "big")
        block[4:] = r.to_bytes(4, "big")

    def encrypt(self, block: bytes) -> bytes:
        """Return the encryption of a single 8-byte block."""
        buf = bytearray(block)
        self.encrypt_block(buf)
        return bytes(buf)

    def decrypt(self, block: bytes) -> bytes:
        """Return the decryption of a single 8-byte block."""
        buf = bytearray(block)
        self.decrypt_block(buf)
        return bytes(buf)


def new(key: bytes) -> Blowfish:
    """Create a Blowfish cipher for `key` (4..56 bytes)."""
    return Blowfish(key)
