import importlib.util
import sys
from pathlib import Path

import numpy as np
import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from blowfishlab.cipher import new
from blowfishlab.config import load_settings


def _load_script(name: str):
    path = _project_root / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(f"_script_{name}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_demo_encrypt_prints_ciphertext(capsys):
    demo = _load_script("demo_encrypt")
    assert demo.main([]) == 0
    out = capsys.readouterr().out.strip()
    assert out == new(b"verysecretpasswd").encrypt(b"abcd1234").hex()


def test_demo_encrypt_decrypt_check(capsys):
    demo = _load_script("demo_encrypt")
    assert demo.main(["--key", "secretkey", "--plaintext", "12345678", "--decrypt-check"]) == 0
    assert "decrypt check: OK" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["--key", "abc"], ["--plaintext", "short"]])
def test_demo_encrypt_bad_input(argv, capsys):
    demo = _load_script("demo_encrypt")
    assert demo.main(argv) == 2
    assert "ERROR" in capsys.readouterr().err


def test_run_roundtrip_script(capsys):
    script = _load_script("run_roundtrip")
    assert script.main(["--vectors", "5", "--seed", "11"]) == 0
    out = capsys.readouterr().out
    assert "[PASS] Blowfish roundtrip: 5/5" in out


def test_run_benchmarks_script(tmp_path, capsys):
    script = _load_script("run_benchmarks")
    rc = script.main([
        "--buffer-size", "64", "--key-setup-reps", "1", "--encrypt-reps", "1",
        "--output-dir", str(tmp_path),
    ])
    assert rc == 0
    assert list(tmp_path.glob("*/results.json"))


def test_run_benchmarks_script_rejects_bad_buffer(capsys):
    script = _load_script("run_benchmarks")
    assert script.main(["--buffer-size", "10", "--no-save"]) == 2


def test_run_roundtrip_script_seeds_global_rng(capsys):
    script = _load_script("run_roundtrip")
    assert script.main(["--vectors", "1", "--seed", "5"]) == 0
    first = np.random.random()
    assert script.main(["--vectors", "1", "--seed", "5"]) == 0
    assert np.random.random() == first


def test_run_benchmarks_script_rejects_multibyte_key(capsys):
    script = _load_script("run_benchmarks")
    rc = script.main([
        "--key", "é" * 29, "--buffer-size", "64",
        "--key-setup-reps", "1", "--encrypt-reps", "1", "--no-save",
    ])
    assert rc == 2
    assert "ERROR" in capsys.readouterr().err


def test_run_benchmarks_default_output_dir_from_settings(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("RUNS_DIR", str(tmp_path))
    load_settings.cache_clear()
    try:
        script = _load_script("run_benchmarks")
        rc = script.main(["--buffer-size", "64", "--key-setup-reps", "1", "--encrypt-reps", "1"])
    finally:
        load_settings.cache_clear()
    assert rc == 0
    assert list(tmp_path.glob("*/results.json"))
