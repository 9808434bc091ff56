"""Algebraic roundtrip verification P = D(E(P, K), K) for Blowfish.

Generates randomized (key, block) vectors over the whole 4..56 byte key
range and checks that decryption exactly inverts encryption. Also checks a
small set of published known-answer vectors.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional, Sequence

from blowfishlab.cipher import BLOCK_SIZE, MAX_KEY_SIZE, MIN_KEY_SIZE, Blowfish

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KnownAnswerVector:
    name: str
    key_hex: str
    plaintext_hex: str
    ciphertext_hex: str


KNOWN_ANSWER_VECTORS: List[KnownAnswerVector] = [
    KnownAnswerVector(
        name="128-bit key",
        key_hex="00112233445566778899aabbccddeeff",
        plaintext_hex="6518a1f5c8d9b63c",
        ciphertext_hex="dac636861d70bd8a",
    ),
    # Eric Young's reference vectors (8-byte keys)
    KnownAnswerVector(
        name="all zero",
        key_hex="0000000000000000",
        plaintext_hex="0000000000000000",
        ciphertext_hex="4ef997456198dd78",
    ),
    KnownAnswerVector(
        name="all ones",
        key_hex="ffffffffffffffff",
        plaintext_hex="ffffffffffffffff",
        ciphertext_hex="51866fd5b85ecb8a",
    ),
]


@dataclass
class KnownAnswerResult:
    name: str
    expected_hex: str
    actual_hex: str
    decrypted_ok: bool

    @property
    def passed(self) -> bool:
        return self.expected_hex == self.actual_hex and self.decrypted_ok


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    plaintext_hex: str
    key_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned (should equal plaintext)
    error: Optional[str]     # Exception message if decrypt/encrypt threw


@dataclass
class RoundtripResult:
    """Aggregate result of a roundtrip run."""
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["success_rate"] = self.success_rate
        return d

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] Blowfish roundtrip: "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def run_roundtrip_tests(
    *,
    num_vectors: int = 1000,
    seed: int = 1337,
    key_sizes: Optional[Sequence[int]] = None,
    max_failures_recorded: int = 10,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> RoundtripResult:
    """Run roundtrip verification P = D(E(P, K), K) across many test vectors.

    Args:
        num_vectors: Number of random (plaintext, key) pairs to test.
        seed: Random seed for deterministic reproducibility.
        key_sizes: Key lengths in bytes to draw from; defaults to 4..56.
        max_failures_recorded: Maximum number of failure details to keep.
        progress_callback: Optional callback(current_index, total).

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    sizes = list(key_sizes) if key_sizes else list(range(MIN_KEY_SIZE, MAX_KEY_SIZE + 1))

    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        if progress_callback:
            progress_callback(i, num_vectors)

        key = _rand_bytes(rng, rng.choice(sizes))
        pt = _rand_bytes(rng, BLOCK_SIZE)

        try:
            cipher = Blowfish(key)
            ct = cipher.encrypt(pt)
            pt2 = cipher.decrypt(ct)

            if pt == pt2:
                passed += 1
            else:
                failed += 1
                if len(failures) < max_failures_recorded:
                    failures.append(RoundtripFailure(
                        vector_index=i,
                        plaintext_hex=pt.hex(),
                        key_hex=key.hex(),
                        ciphertext_hex=ct.hex(),
                        decrypted_hex=pt2.hex(),
                        error=None,
                    ))
        except Exception as exc:
            failed += 1
            logger.warning("Roundtrip vector %d raised %s: %s", i, type(exc).__name__, exc)
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    plaintext_hex=pt.hex(),
                    key_hex=key.hex(),
                    ciphertext_hex="<error>",
                    decrypted_hex="<error>",
                    error=str(exc),
                ))

    elapsed = time.perf_counter() - start

    result = RoundtripResult(
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
    logger.info(result.summary())
    return result


def run_known_answer_tests(
    vectors: Optional[Sequence[KnownAnswerVector]] = None,
) -> List[KnownAnswerResult]:
    results: List[KnownAnswerResult] = []
    for vec in vectors or KNOWN_ANSWER_VECTORS:
        cipher = Blowfish(bytes.fromhex(vec.key_hex))
        pt = bytes.fromhex(vec.plaintext_hex)
        ct = cipher.encrypt(pt)
        res = KnownAnswerResult(
            name=vec.name,
            expected_hex=vec.ciphertext_hex,
            actual_hex=ct.hex(),
            decrypted_ok=cipher.decrypt(ct) == pt,
        )
        if not res.passed:
            logger.error(
                "Known-answer vector %r failed: expected %s, got %s",
                vec.name, res.expected_hex, res.actual_hex,
            )
        results.append(res)
    return results
