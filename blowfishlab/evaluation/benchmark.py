"""Timing harness for the Blowfish primitive.

Two measurements, matching the classic Blowfish benchmarks:
- key setup: repeated construction from a fixed key
- bulk encryption: every 8-byte block of a buffer (1 MiB by default)
  encrypted independently and in place ("ECB-like", no chaining)
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator

from blowfishlab.cipher import BLOCK_SIZE, Blowfish
from blowfishlab.config import DEFAULT_BENCH_KEY, Settings, check_key_bytes
from blowfishlab.utils.repro import make_run_dir, utc_timestamp, write_json

logger = logging.getLogger(__name__)


class BenchmarkConfig(BaseModel):
    """Parameters for one benchmark run."""
    key: str = Field(default=DEFAULT_BENCH_KEY, description="UTF-8 encodes to 4..56 bytes")
    buffer_size: int = Field(default=1024 * 1024, ge=BLOCK_SIZE)
    key_setup_reps: int = Field(default=20, ge=1)
    encrypt_reps: int = Field(default=3, ge=1)

    @field_validator("key")
    @classmethod
    def _key_bytes(cls, v: str) -> str:
        return check_key_bytes(v, "key")

    @field_validator("buffer_size")
    @classmethod
    def _whole_blocks(cls, v: int) -> int:
        if v % BLOCK_SIZE != 0:
            raise ValueError(f"buffer_size must be a multiple of {BLOCK_SIZE}")
        return v

    @classmethod
    def from_settings(cls, settings: Settings) -> "BenchmarkConfig":
        return cls(
            key=settings.bench_key,
            buffer_size=settings.bench_buffer_size,
            key_setup_reps=settings.bench_key_setup_reps,
            encrypt_reps=settings.bench_encrypt_reps,
        )


@dataclass
class TimingStats:
    """Wall-clock statistics over repeated runs of one operation."""
    name: str
    reps: int
    samples: List[float] = field(default_factory=list)
    bytes_per_rep: int = 0

    @property
    def mean_seconds(self) -> float:
        return float(np.mean(self.samples)) if self.samples else 0.0

    @property
    def min_seconds(self) -> float:
        return float(np.min(self.samples)) if self.samples else 0.0

    @property
    def max_seconds(self) -> float:
        return float(np.max(self.samples)) if self.samples else 0.0

    @property
    def std_seconds(self) -> float:
        return float(np.std(self.samples)) if len(self.samples) > 1 else 0.0

    @property
    def throughput_mib_s(self) -> Optional[float]:
        if not self.bytes_per_rep or self.mean_seconds <= 0:
            return None
        return self.bytes_per_rep / (1024 * 1024) / self.mean_seconds

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d.update(
            mean_seconds=self.mean_seconds,
            min_seconds=self.min_seconds,
            max_seconds=self.max_seconds,
            std_seconds=self.std_seconds,
            throughput_mib_s=self.throughput_mib_s,
        )
        return d

    def summary(self) -> str:
        line = (
            f"{self.name}: mean={self.mean_seconds * 1e3:.3f}ms "
            f"min={self.min_seconds * 1e3:.3f}ms max={self.max_seconds * 1e3:.3f}ms "
            f"(n={self.reps})"
        )
        if self.throughput_mib_s is not None:
            line += f", {self.throughput_mib_s:.3f} MiB/s"
        return line


@dataclass
class BenchmarkResult:
    timestamp: str
    key_len: int
    buffer_size: int
    key_setup: TimingStats
    encrypt: TimingStats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "key_len": self.key_len,
            "buffer_size": self.buffer_size,
            "key_setup": self.key_setup.to_dict(),
            "encrypt": self.encrypt.to_dict(),
        }

    def summary(self) -> str:
        return "\n".join([self.key_setup.summary(), self.encrypt.summary()])


def encrypt_ecb_inplace(cipher: Blowfish, buffer: bytearray) -> None:
    """Encrypt each 8-byte block of `buffer` independently, in place."""
    if len(buffer) % BLOCK_SIZE != 0:
        raise ValueError(f"buffer length must be a multiple of {BLOCK_SIZE}, got {len(buffer)}")
    view = memoryview(buffer)
    for off in range(0, len(buffer), BLOCK_SIZE):
        cipher.encrypt_block(view[off:off + BLOCK_SIZE])


def time_key_setup(key: bytes, reps: int) -> TimingStats:
    stats = TimingStats(name="Blowfish key setup", reps=reps)
    for _ in range(reps):
        start = time.perf_counter()
        Blowfish(key)
        stats.samples.append(time.perf_counter() - start)
    return stats


def time_ecb_encrypt(cipher: Blowfish, buffer: bytearray, reps: int) -> TimingStats:
    size = len(buffer)
    label = f"{size // (1024 * 1024)}M" if size % (1024 * 1024) == 0 else f"{size}B"
    stats = TimingStats(name=f"Blowfish encrypt {label} (ECB)", reps=reps, bytes_per_rep=size)
    for _ in range(reps):
        start = time.perf_counter()
        encrypt_ecb_inplace(cipher, buffer)
        stats.samples.append(time.perf_counter() - start)
    return stats


def run_benchmark(
    config: BenchmarkConfig,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> BenchmarkResult:
    """Run the key setup and bulk encryption measurements.

    Args:
        config: Key, buffer size and repetition counts.
        progress_callback: Optional callback(stage_name, current, total).

    Returns:
        BenchmarkResult with both timing series.
    """
    key = config.key.encode("utf-8")

    if progress_callback:
        progress_callback("key setup", 0, 2)
    logger.info("Timing key setup (%d reps)", config.key_setup_reps)
    key_setup = time_key_setup(key, config.key_setup_reps)

    if progress_callback:
        progress_callback("encrypt", 1, 2)
    logger.info(
        "Timing ECB encryption of %d bytes (%d reps)",
        config.buffer_size, config.encrypt_reps,
    )
    cipher = Blowfish(key)
    buffer = bytearray(config.buffer_size)
    encrypt = time_ecb_encrypt(cipher, buffer, config.encrypt_reps)

    return BenchmarkResult(
        timestamp=utc_timestamp(),
        key_len=len(key),
        buffer_size=config.buffer_size,
        key_setup=key_setup,
        encrypt=encrypt,
    )


def save_benchmark(result: BenchmarkResult, output_dir: str | Path, config: Optional[BenchmarkConfig] = None) -> Path:
    """Write results.json (and the run configuration) into a fresh run directory."""
    paths = make_run_dir(output_dir, "blowfish_benchmark")
    write_json(paths.results_json, result.to_dict())
    if config is not None:
        cfg = config.model_dump()
        cfg.pop("key", None)
        write_json(paths.settings_json, cfg)
    logger.info("Benchmark results saved to %s", paths.results_json)
    return paths.results_json
