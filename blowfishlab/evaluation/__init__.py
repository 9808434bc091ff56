"""Evaluation harnesses for the Blowfish primitive.

Roundtrip verification (randomized and known-answer) and timing
benchmarks for key setup and bulk block encryption.

Research / education only. Do NOT use in production.
"""

from .roundtrip import (
    KNOWN_ANSWER_VECTORS,
    KnownAnswerResult,
    KnownAnswerVector,
    RoundtripFailure,
    RoundtripResult,
    run_known_answer_tests,
    run_roundtrip_tests,
)
from .benchmark import (
    BenchmarkConfig,
    BenchmarkResult,
    TimingStats,
    encrypt_ecb_inplace,
    run_benchmark,
    save_benchmark,
    time_ecb_encrypt,
    time_key_setup,
)

__all__ = [
    "KNOWN_ANSWER_VECTORS",
    "KnownAnswerResult",
    "KnownAnswerVector",
    "RoundtripFailure",
    "RoundtripResult",
    "run_known_answer_tests",
    "run_roundtrip_tests",
    "BenchmarkConfig",
    "BenchmarkResult",
    "TimingStats",
    "encrypt_ecb_inplace",
    "run_benchmark",
    "save_benchmark",
    "time_ecb_encrypt",
    "time_key_setup",
]
