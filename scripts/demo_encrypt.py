"""Encrypt a single 64-bit block and print the ciphertext as hex.

Usage:
    python scripts/demo_encrypt.py                                   # verysecretpasswd / abcd1234
    python scripts/demo_encrypt.py --key mykey1234 --plaintext 8bytes!!
    python scripts/demo_encrypt.py --decrypt-check
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from blowfishlab.cipher import BLOCK_SIZE, KeysizeError, new


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Blowfish single-block demo")
    parser.add_argument("--key", type=str, default="verysecretpasswd", help="Key (4-56 bytes, UTF-8)")
    parser.add_argument("--plaintext", type=str, default="abcd1234", help="Exactly 8 bytes (UTF-8)")
    parser.add_argument("--decrypt-check", action="store_true", help="Decrypt again and verify")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    block = bytearray(args.plaintext.encode("utf-8"))
    if len(block) != BLOCK_SIZE:
        print(f"ERROR: plaintext must be {BLOCK_SIZE} bytes, got {len(block)}", file=sys.stderr)
        return 2

    try:
        bf = new(args.key.encode("utf-8"))
    except KeysizeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    bf.encrypt_block(block)
    print(block.hex())

    if args.decrypt_check:
        bf.decrypt_block(block)
        ok = block.decode("utf-8", errors="replace") == args.plaintext
        print(f"decrypt check: {'OK' if ok else 'MISMATCH'}")
        return 0 if ok else 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
