"""Tests for CLI tool."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from dynbson import decode, encode
from dynbson.cli.main import main


def run_cli(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "dynbson.cli.main", *args],
        capture_output=True,
        text=True,
    )


@pytest.fixture
def json_file(tmp_path: Path) -> Path:
    path = tmp_path / "value.json"
    path.write_text(json.dumps({"name": "x", "tags": ["a", "b"], "n": 3}), encoding="utf-8")
    return path


@pytest.fixture
def bson_file(tmp_path: Path) -> Path:
    path = tmp_path / "value.bson"
    path.write_bytes(encode({"name": "x", "meta": {"level": 2}, "tags": [1, 2]}))
    return path


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert "dynbson: BSON codec for dynamic values" in result.stdout
    assert "--inspect" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert "dynbson 0.1.0" in result.stdout


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = run_cli()
    assert result.returncode == 0
    assert "dynbson: BSON codec for dynamic values" in result.stdout


def test_cli_encode_to_file(json_file: Path, tmp_path: Path) -> None:
    """Test --encode writes a BSON document."""
    output = tmp_path / "out.bson"
    result = run_cli("--encode", str(json_file), "--output", str(output))
    assert result.returncode == 0
    assert decode(output.read_bytes()) == {"name": "x", "tags": ["a", "b"], "n": 3}


def test_cli_encode_hex(json_file: Path) -> None:
    """Test --encode prints hex without --output."""
    result = run_cli("--encode", str(json_file))
    assert result.returncode == 0
    assert bytes.fromhex(result.stdout.strip()) == encode(
        {"name": "x", "tags": ["a", "b"], "n": 3}
    )


def test_cli_decode(bson_file: Path) -> None:
    """Test --decode prints JSON."""
    result = run_cli("--decode", str(bson_file))
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"name": "x", "meta": {"level": 2}, "tags": [1, 2]}


def test_cli_decode_array_as_dict(bson_file: Path) -> None:
    result = run_cli("--decode", str(bson_file), "--array-type", "dict")
    assert result.returncode == 0
    assert json.loads(result.stdout)["tags"] == {"0": 1, "1": 2}


def test_cli_inspect(bson_file: Path) -> None:
    """Test --inspect prints the element layout."""
    result = run_cli("--inspect", str(bson_file))
    assert result.returncode == 0
    assert "3 top-level elements loaded." in result.stdout
    assert "meta" in result.stdout
    assert "int64" in result.stdout
    assert "Maximum depth: 2" in result.stdout


def test_cli_missing_file() -> None:
    """Test CLI with missing file."""
    result = run_cli("--inspect", "nonexistent.bson")
    assert result.returncode == 1
    assert "not found" in result.stderr.lower()


def test_cli_corrupt_file(tmp_path: Path) -> None:
    """Test decode errors are reported, not raised."""
    path = tmp_path / "bad.bson"
    path.write_bytes(b"\x05\x00\x00\x00\x01")
    result = run_cli("--decode", str(path))
    assert result.returncode == 1
    assert "Error" in result.stderr


def test_main_in_process(json_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test main() can be called directly with argv."""
    assert main(["--encode", str(json_file)]) == 0
    assert capsys.readouterr().out.strip() == encode(
        {"name": "x", "tags": ["a", "b"], "n": 3}
    ).hex()


def test_main_scalar_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test a JSON scalar is rejected as a document root."""
    path = tmp_path / "scalar.json"
    path.write_text("42", encoding="utf-8")
    assert main(["--encode", str(path)]) == 1
    assert "must be a container" in capsys.readouterr().err
