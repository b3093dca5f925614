from __future__ import annotations

import json
from pathlib import Path

import pytest
from conftest import FIXTURES_DIR

from abi_lens import cli
from abi_lens.schema import validate_analysis_json


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


def test_signature_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(["signature", str(FIXTURES_DIR / "erc20.json")]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "allowance(address,address)"
    assert "Transfer(address,address,uint256)" in lines
    assert len(lines) == 9


def test_analyze_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(["analyze", str(FIXTURES_DIR / "router.json"), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    validate_analysis_json(data)
    assert data["payable_count"] == 2


def test_analyze_json_search(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(["analyze", str(FIXTURES_DIR / "erc20.json"), "--json", "--search", "allow"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [f["name"] for f in data["functions"]] == ["allowance"]


def test_analyze_tables(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(["analyze", str(FIXTURES_DIR / "erc20.json")]) == 0
    out = capsys.readouterr().out
    assert "Read Functions" in out
    assert "Write Functions" in out
    assert "read=4 write=3 payable=0 events=2" in out


def test_analyze_malformed_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    p = tmp_path / "bad.json"
    p.write_text("{oops")
    assert _run(["analyze", str(p)]) == 1
    assert "Invalid interface manifest" in capsys.readouterr().out


def test_analyze_missing_file(tmp_path: Path) -> None:
    assert "Could not read manifest" in str(_run(["analyze", str(tmp_path / "missing.json")]))


def test_env_file_sets_nesting_ceiling(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("ABI_LENS_MAX_NESTING_DEPTH=1\n")
    assert _run(["analyze", str(FIXTURES_DIR / "router.json"), "--json", "--env-file", str(env_file)]) == 1
    data = json.loads(capsys.readouterr().out)
    assert data["status"] == "too_deep"
    assert data["functions"] == []


def test_validate_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(["validate", "uint8", "12"]) == 0
    assert "valid" in capsys.readouterr().out
    assert _run(["validate", "address", "0x12"]) == 1
    assert "Invalid address format" in capsys.readouterr().out


def test_subcommand_required() -> None:
    assert _run([]) == 2
