import sys
from pathlib import Path

import pytest

# Ensure project root is on path for blowfishlab imports
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from blowfishlab.evaluation.roundtrip import (
    KNOWN_ANSWER_VECTORS,
    KnownAnswerVector,
    RoundtripResult,
    run_known_answer_tests,
    run_roundtrip_tests,
)


def test_roundtrip_harness_all_pass():
    result = run_roundtrip_tests(num_vectors=40, seed=1337)
    assert isinstance(result, RoundtripResult)
    assert result.total_vectors == 40
    assert result.passed == 40
    assert result.failed == 0
    assert result.is_perfect
    assert result.success_rate == 1.0
    assert result.failures == []
    assert result.summary().startswith("[PASS]")


@pytest.mark.parametrize("key_size", [4, 56])
def test_roundtrip_harness_boundary_key_sizes(key_size):
    result = run_roundtrip_tests(num_vectors=10, seed=42, key_sizes=[key_size])
    assert result.is_perfect


def test_roundtrip_harness_records_errors():
    # 3-byte keys are rejected at construction; every vector must be reported
    result = run_roundtrip_tests(num_vectors=5, seed=1, key_sizes=[3], max_failures_recorded=2)
    assert result.failed == 5
    assert result.passed == 0
    assert not result.is_perfect
    assert len(result.failures) == 2
    assert all(f.ciphertext_hex == "<error>" for f in result.failures)
    assert all("Invalid keysize" in f.error for f in result.failures)
    assert result.summary().startswith("[FAIL]")


def test_roundtrip_harness_progress_callback():
    seen = []
    run_roundtrip_tests(num_vectors=3, seed=5, progress_callback=lambda i, n: seen.append((i, n)))
    assert seen == [(0, 3), (1, 3), (2, 3)]


def test_roundtrip_result_to_dict():
    d = run_roundtrip_tests(num_vectors=2, seed=3).to_dict()
    assert d["total_vectors"] == 2
    assert d["success_rate"] == 1.0
    assert d["seed"] == 3


def test_known_answer_vectors_pass():
    results = run_known_answer_tests()
    assert len(results) == len(KNOWN_ANSWER_VECTORS)
    for res in results:
        assert res.passed, f"{res.name}: expected {res.expected_hex}, got {res.actual_hex}"


def test_known_answer_detects_wrong_vector():
    bogus = KnownAnswerVector(
        name="bogus",
        key_hex="00112233445566778899aabbccddeeff",
        plaintext_hex="6518a1f5c8d9b63c",
        ciphertext_hex="0000000000000000",
    )
    (res,) = run_known_answer_tests([bogus])
    assert not res.passed
    assert res.actual_hex == "dac636861d70bd8a"
    assert res.decrypted_ok
