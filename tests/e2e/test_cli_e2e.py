from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and file system side effects (CSV export).
"""

import codecs
import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "reviewtree" / "main.py"


def run_cli(args: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH to ensure the package
    is resolvable without being installed in site-packages.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def batch_file(tmp_path: Path, raw_batch: List[Dict[str, Any]]) -> Path:
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(raw_batch), encoding="utf-8")
    return path

# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------

def test_cli_prints_tree_and_progress(batch_file: Path) -> None:
    result = run_cli(["-i", str(batch_file)])

    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert lines[0] == "├── [ ] README.md (2)"
    assert "├── [x] docs/ (10) …" in lines
    assert "├── [ ] src/app/ (1,242)" in lines
    assert "Reviewed: 3.90% (52 / 1,334)" in lines


def test_cli_expand_all_shows_reviewed_children(batch_file: Path) -> None:
    result = run_cli(["-i", str(batch_file), "--expand-all"])

    assert result.returncode == 0
    assert "├── [x] docs/ (10)" in result.stdout.splitlines()
    assert "guide.md" in result.stdout


def test_cli_json_output(batch_file: Path) -> None:
    result = run_cli(["-i", str(batch_file), "--json"])

    assert result.returncode == 0, result.stderr
    doc = json.loads(result.stdout)
    assert doc["ok"] is True
    assert [n["key"] for n in doc["tree"]] == ["README.md", "docs", "src/app", "tests/unit"]
    assert doc["progress"]["total_magnitude"] == 1334
    assert doc["files"][0] == {"origin_path": "README.md", "magnitude": 2, "reviewed": False}
    assert doc["summary"]["files"] == 7


def test_cli_writes_csv_export(batch_file: Path, tmp_path: Path) -> None:
    target = tmp_path / "out" / "review.csv"
    result = run_cli(["-i", str(batch_file), "--no-tree", "--export", str(target)])

    assert result.returncode == 0, result.stderr
    assert "Export written" in result.stdout
    payload = target.read_bytes()
    assert payload.startswith(codecs.BOM_UTF8 + b"FilePath,Magnitude,Reviewed\r\n")
    assert b"src/app/core/engine.py,1200,false\r\n" in payload
    assert payload.count(b"\r\n") == 8


def test_cli_empty_batch_is_no_data(tmp_path: Path) -> None:
    path = tmp_path / "empty.json"
    path.write_text("[]", encoding="utf-8")
    target = tmp_path / "review.csv"

    result = run_cli(["-i", str(path), "--export", str(target)])

    assert result.returncode == 3
    assert "No difference found" in result.stderr
    assert "Export skipped" in result.stderr
    assert not target.exists()


def test_cli_missing_input_file(tmp_path: Path) -> None:
    result = run_cli(["-i", str(tmp_path / "missing.json")])

    assert result.returncode == 2
    assert "Input file does not exist" in result.stderr


def test_cli_without_source_is_bad_input() -> None:
    result = run_cli([])
    assert result.returncode == 2
    assert "No record source given" in result.stderr


def test_cli_dump_config_merges_file(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"expand_all": True, "source_timeout": 5}), encoding="utf-8")

    result = run_cli(["-c", str(cfg), "--dedupe", "--dump-config"])

    assert result.returncode == 0
    dumped = json.loads(result.stdout)
    assert dumped["expand_all"] is True
    assert dumped["source_timeout"] == 5
    assert dumped["duplicate_policy"] == "last_wins"


def test_cli_log_file_receives_diagnostics(batch_file: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "reviewtree.log"
    result = run_cli(["-i", str(batch_file), "--no-tree", "--log-file", str(log_file)])

    assert result.returncode == 0
    assert "Pipeline finished" in log_file.read_text(encoding="utf-8")
