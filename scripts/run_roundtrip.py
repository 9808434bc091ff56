"""Roundtrip and known-answer verification for the Blowfish primitive.

Usage:
    python scripts/run_roundtrip.py                      # 1000 random vectors
    python scripts/run_roundtrip.py --vectors 100 -v
    python scripts/run_roundtrip.py --key-sizes 4 16 56
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

from blowfishlab.config import load_settings
from blowfishlab.evaluation.roundtrip import run_known_answer_tests, run_roundtrip_tests
from blowfishlab.utils.repro import set_global_seed


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Blowfish roundtrip verification")
    parser.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Random vectors to test (default: {settings.roundtrip_vectors})",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Random seed (default: {settings.global_seed})",
    )
    parser.add_argument(
        "--key-sizes", type=int, nargs="+", default=None,
        help="Key lengths in bytes to draw from (default: 4..56)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    set_global_seed(args.seed)

    ok = True
    for kat in run_known_answer_tests():
        status = "PASS" if kat.passed else "FAIL"
        print(f"[{status}] KAT {kat.name}: expected={kat.expected_hex} actual={kat.actual_hex}")
        ok = ok and kat.passed

    result = run_roundtrip_tests(
        num_vectors=args.vectors,
        seed=args.seed,
        key_sizes=args.key_sizes,
    )
    print(result.summary())
    for f in result.failures:
        print(f"  vector {f.vector_index}: key={f.key_hex} pt={f.plaintext_hex} "
              f"ct={f.ciphertext_hex} rt={f.decrypted_hex} err={f.error}")

    return 0 if ok and result.is_perfect else 1


if __name__ == "__main__":
    sys.exit(main())
