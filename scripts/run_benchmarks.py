"""CLI entry point for Blowfish benchmarking.

Usage:
    python scripts/run_benchmarks.py                                   # 1 MiB buffer, default reps
    python scripts/run_benchmarks.py --buffer-size 65536 --encrypt-reps 1
    python scripts/run_benchmarks.py --no-save
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

from pydantic import ValidationError

from blowfishlab.config import load_settings, resolve_runs_dir
from blowfishlab.evaluation.benchmark import BenchmarkConfig, run_benchmark, save_benchmark


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Blowfish benchmark - key setup and ECB-like bulk encryption",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python scripts/run_benchmarks.py --encrypt-reps 1          # quick run\n"
            "  python scripts/run_benchmarks.py --output-dir out           # custom output\n"
        ),
    )

    parser.add_argument(
        "--key", type=str, default=settings.bench_key,
        help="Benchmark key (4-56 bytes, UTF-8)",
    )
    parser.add_argument(
        "--buffer-size", type=int, default=settings.bench_buffer_size,
        help=f"Bytes encrypted per pass (default: {settings.bench_buffer_size})",
    )
    parser.add_argument(
        "--key-setup-reps", type=int, default=settings.bench_key_setup_reps,
        help=f"Key setup repetitions (default: {settings.bench_key_setup_reps})",
    )
    parser.add_argument(
        "--encrypt-reps", type=int, default=settings.bench_encrypt_reps,
        help=f"Bulk encryption repetitions (default: {settings.bench_encrypt_reps})",
    )
    parser.add_argument(
        "--output-dir", type=str, default=str(resolve_runs_dir(settings)),
        help=f"Output directory (default: {resolve_runs_dir(settings)})",
    )
    parser.add_argument(
        "--no-save", action="store_true",
        help="Print results without writing results.json",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = BenchmarkConfig(
            key=args.key,
            buffer_size=args.buffer_size,
            key_setup_reps=args.key_setup_reps,
            encrypt_reps=args.encrypt_reps,
        )
    except ValidationError as e:
        print(f"ERROR: invalid benchmark configuration:\n{e}", file=sys.stderr)
        return 2

    print(f"Benchmark: key_len={len(config.key.encode('utf-8'))}, buffer={config.buffer_size} bytes")
    print(f"  Key setup reps: {config.key_setup_reps}")
    print(f"  Encrypt reps:   {config.encrypt_reps}")
    print()

    result = run_benchmark(config, progress_callback=_cli_progress)
    print(result.summary())

    if not args.no_save:
        path = save_benchmark(result, args.output_dir, config)
        print(f"\nResults saved to: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
