from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from blowfishlab.cipher import MAX_KEY_SIZE, MIN_KEY_SIZE


DEFAULT_BENCH_KEY = "0123456789abcdef0123456789abcdef"


def check_key_bytes(v: str, field_name: str = "key") -> str:
    """Keys are handed to the cipher UTF-8 encoded, so bound the encoded length."""
    n = len(v.encode("utf-8"))
    if n < MIN_KEY_SIZE or n > MAX_KEY_SIZE:
        raise ValueError(f"{field_name} must encode to {MIN_KEY_SIZE}..{MAX_KEY_SIZE} bytes, got {n}")
    return v


class Settings(BaseModel):
    # Benchmark
    bench_key: str = Field(default=DEFAULT_BENCH_KEY, description="UTF-8 encodes to 4..56 bytes")
    bench_buffer_size: int = Field(default=1024 * 1024, ge=8, description="Bytes encrypted per ECB pass")
    bench_key_setup_reps: int = Field(default=20, ge=1)
    bench_encrypt_reps: int = Field(default=3, ge=1)

    # Roundtrip
    roundtrip_vectors: int = Field(default=1000, ge=1)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Logging
    log_level: str = Field(default="INFO")

    # Paths
    project_root: str = Field(default=os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)))
    runs_dir: str = Field(default="benchmarks")

    @field_validator("bench_key")
    @classmethod
    def _key_bytes(cls, v: str) -> str:
        return check_key_bytes(v, "bench_key")

    @field_validator("bench_buffer_size")
    @classmethod
    def _buffer_blocks(cls, v: int) -> int:
        if v % 8 != 0:
            raise ValueError("bench_buffer_size must be a multiple of 8")
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper()


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        bench_key=os.getenv("BENCH_KEY", DEFAULT_BENCH_KEY),
        bench_buffer_size=int(os.getenv("BENCH_BUFFER_SIZE", str(1024 * 1024))),
        bench_key_setup_reps=int(os.getenv("BENCH_KEY_SETUP_REPS", "20")),
        bench_encrypt_reps=int(os.getenv("BENCH_ENCRYPT_REPS", "3")),
        roundtrip_vectors=int(os.getenv("ROUNDTRIP_VECTORS", "1000")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        runs_dir=os.getenv("RUNS_DIR", "benchmarks"),
    )


def resolve_runs_dir(settings: Settings) -> Path:
    # An absolute runs_dir wins over project_root in the join.
    root = Path(settings.project_root)
    return root / settings.runs_dir
