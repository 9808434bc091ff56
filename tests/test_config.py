import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Ensure project root is on path for blowfishlab imports
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from blowfishlab.config import DEFAULT_BENCH_KEY, Settings, load_settings, resolve_runs_dir


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


def test_defaults():
    s = Settings()
    assert s.bench_key == DEFAULT_BENCH_KEY
    assert s.bench_buffer_size == 1024 * 1024
    assert s.global_seed == 1337
    assert s.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("BENCH_BUFFER_SIZE", "4096")
    monkeypatch.setenv("BENCH_ENCRYPT_REPS", "7")
    monkeypatch.setenv("GLOBAL_SEED", "99")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = load_settings()
    assert s.bench_buffer_size == 4096
    assert s.bench_encrypt_reps == 7
    assert s.global_seed == 99
    assert s.log_level == "DEBUG"


def test_buffer_size_must_be_whole_blocks():
    with pytest.raises(ValidationError):
        Settings(bench_buffer_size=1000 + 1)


def test_bench_key_length_bounds():
    with pytest.raises(ValidationError):
        Settings(bench_key="abc")
    with pytest.raises(ValidationError):
        Settings(bench_key="k" * 57)


def test_runs_dir_resolved_against_project_root():
    s = Settings(runs_dir="bench_out")
    assert resolve_runs_dir(s) == Path(s.project_root) / "bench_out"
    assert Path(s.project_root).resolve() == _project_root.resolve()


def test_absolute_runs_dir_kept(tmp_path):
    s = Settings(project_root="/somewhere/else", runs_dir=str(tmp_path))
    assert resolve_runs_dir(s) == tmp_path
