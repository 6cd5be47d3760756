from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
TOOL = REPO_ROOT / "tools" / "lint_svg.py"
RULES = REPO_ROOT / "config" / "svglint.v1.yaml"

VALID_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"></svg>'


def _run(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(TOOL), *args],
        cwd=cwd or REPO_ROOT,
        capture_output=True,
        text=True,
        check=False,
    )


def test_valid_tree_exits_zero(tmp_path: Path) -> None:
    (tmp_path / "file.svg").write_text(VALID_SVG)
    result = _run(str(tmp_path))
    assert result.returncode == 0, result.stdout + result.stderr
    assert result.stdout == ""


def test_invalid_file_exits_one(tmp_path: Path) -> None:
    (tmp_path / "good.svg").write_text(VALID_SVG)
    (tmp_path / "file.svg").write_text("<svg><image/></svg>")
    result = _run(str(tmp_path))
    assert result.returncode == 1
    assert result.stdout.splitlines() == ["Missing 'viewBox' attribute in 'file.svg'"]


def test_defaults_to_working_directory(tmp_path: Path) -> None:
    (tmp_path / "file.svg").write_text('<svg viewBox="0 0 1 1"><image/></svg>')
    result = _run(cwd=tmp_path)
    assert result.returncode == 1
    assert result.stdout.splitlines() == ["Invalid element <image> in 'file.svg'"]


def test_invalid_files_under_node_modules(tmp_path: Path) -> None:
    nested = tmp_path / "node_modules" / "icons"
    nested.mkdir(parents=True)
    (nested / "bad.svg").write_text("<svg/>")
    result = _run(str(tmp_path))
    assert result.returncode == 0
    assert result.stdout == ""


def test_ext_and_ignore_options(tmp_path: Path) -> None:
    (tmp_path / "vendor").mkdir()
    (tmp_path / "vendor" / "bad.xml").write_text("<svg/>")
    (tmp_path / "bad.svg").write_text("<svg/>")
    (tmp_path / "bad.xml").write_text('<svg viewBox="0 0 1 1" style="x"/>')
    result = _run(str(tmp_path), "--ext", "xml", "--ignore", "vendor")
    assert result.returncode == 1
    assert result.stdout.splitlines() == ["<svg> has invalid attribute, 'style' in 'bad.xml'"]


def test_rules_file_and_report(tmp_path: Path) -> None:
    rules = tmp_path / "rules.yaml"
    rules.write_text("svg:\n  required_root_attributes: [viewBox, width]\n")
    tree = tmp_path / "tree"
    tree.mkdir()
    (tree / "file.svg").write_text(VALID_SVG)
    report = tmp_path / "report.json"
    result = _run(str(tree), "--rules", str(rules), "--report", str(report))
    assert result.returncode == 1
    assert result.stdout.splitlines() == ["Missing 'width' attribute in 'file.svg'"]
    payload = json.loads(report.read_text())
    assert payload["status"] == "fail"
    assert payload["stats"] == {"files_checked": 1, "files_failed": 1, "dirs_failed": 0}
    assert payload["errors"][0]["code"] == "E2002_MISSING_REQUIRED_ATTRIBUTE"


def test_shipped_rules_file_matches_defaults(tmp_path: Path) -> None:
    (tmp_path / "file.svg").write_text(VALID_SVG)
    result = _run(str(tmp_path), "--rules", str(RULES))
    assert result.returncode == 0, result.stdout + result.stderr


def test_bad_rules_file_exits_two(tmp_path: Path) -> None:
    rules = tmp_path / "rules.yaml"
    rules.write_text("- not a mapping\n")
    result = _run(str(tmp_path), "--rules", str(rules))
    assert result.returncode == 2
    assert "Expected mapping" in result.stderr


def test_verbose_logs_to_stderr(tmp_path: Path) -> None:
    (tmp_path / "file.svg").write_text(VALID_SVG)
    result = _run(str(tmp_path), "--verbose")
    assert result.returncode == 0
    assert result.stdout == ""
    assert "Entering directory" in result.stderr
