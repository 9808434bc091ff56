import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Ensure project root is on path for blowfishlab imports
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from blowfishlab.cipher import new
from blowfishlab.config import Settings
from blowfishlab.evaluation.benchmark import (
    BenchmarkConfig,
    TimingStats,
    encrypt_ecb_inplace,
    run_benchmark,
    save_benchmark,
    time_ecb_encrypt,
    time_key_setup,
)
from blowfishlab.utils.repro import read_json


def test_ecb_inplace_matches_per_block():
    bf = new(b"0123456789abcdef0123456789abcdef")
    data = bytes(range(64))
    buf = bytearray(data)
    encrypt_ecb_inplace(bf, buf)
    expected = b"".join(bf.encrypt(data[i:i + 8]) for i in range(0, 64, 8))
    assert bytes(buf) == expected


def test_ecb_identical_blocks_identical_ciphertext():
    bf = new(b"verysecretpasswd")
    buf = bytearray(32)
    encrypt_ecb_inplace(bf, buf)
    assert buf[:8] == buf[8:16] == buf[16:24] == buf[24:32]
    assert buf[:8] != bytes(8)


def test_ecb_rejects_partial_block():
    bf = new(b"verysecretpasswd")
    with pytest.raises(ValueError):
        encrypt_ecb_inplace(bf, bytearray(12))


def test_time_key_setup_samples():
    stats = time_key_setup(b"verysecretpasswd", reps=2)
    assert stats.reps == 2
    assert len(stats.samples) == 2
    assert stats.min_seconds <= stats.mean_seconds <= stats.max_seconds
    assert stats.throughput_mib_s is None


def test_time_ecb_encrypt_throughput():
    bf = new(b"verysecretpasswd")
    stats = time_ecb_encrypt(bf, bytearray(1024), reps=2)
    assert stats.bytes_per_rep == 1024
    assert stats.name == "Blowfish encrypt 1024B (ECB)"
    assert stats.throughput_mib_s is not None and stats.throughput_mib_s > 0


def test_timing_stats_empty():
    stats = TimingStats(name="empty", reps=0)
    assert stats.mean_seconds == 0.0
    assert stats.std_seconds == 0.0
    assert stats.throughput_mib_s is None


def test_benchmark_config_validation():
    with pytest.raises(ValidationError):
        BenchmarkConfig(buffer_size=12)
    with pytest.raises(ValidationError):
        BenchmarkConfig(key="abc")
    with pytest.raises(ValidationError):
        BenchmarkConfig(encrypt_reps=0)


def test_benchmark_config_from_settings():
    settings = Settings(bench_key="k" * 16, bench_buffer_size=64, bench_key_setup_reps=2, bench_encrypt_reps=1)
    cfg = BenchmarkConfig.from_settings(settings)
    assert cfg.key == "k" * 16
    assert cfg.buffer_size == 64
    assert cfg.key_setup_reps == 2
    assert cfg.encrypt_reps == 1


def test_run_and_save_benchmark(tmp_path):
    cfg = BenchmarkConfig(buffer_size=256, key_setup_reps=1, encrypt_reps=1)
    progress = []
    result = run_benchmark(cfg, progress_callback=lambda m, i, n: progress.append(m))
    assert progress == ["key setup", "encrypt"]
    assert result.buffer_size == 256
    assert result.key_len == 32
    assert len(result.key_setup.samples) == 1
    assert len(result.encrypt.samples) == 1
    assert "key setup" in result.summary()

    path = save_benchmark(result, tmp_path, cfg)
    assert path.name == "results.json"
    data = read_json(path)
    assert data["buffer_size"] == 256
    assert data["encrypt"]["bytes_per_rep"] == 256
    saved_cfg = read_json(path.parent / "settings.json")
    assert "key" not in saved_cfg
    assert saved_cfg["buffer_size"] == 256


def test_benchmark_config_key_counts_utf8_bytes():
    # 29 two-byte characters: 29 chars, 58 bytes
    with pytest.raises(ValidationError):
        BenchmarkConfig(key="é" * 29)
    with pytest.raises(ValidationError):
        Settings(bench_key="é" * 29)
    # 2 chars but 4 bytes
    assert BenchmarkConfig(key="éé").key == "éé"
    cfg = BenchmarkConfig(key="é" * 28, buffer_size=64, key_setup_reps=1, encrypt_reps=1)
    assert run_benchmark(cfg).key_len == 56
