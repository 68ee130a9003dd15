from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate exit codes, stream output
and the generated project files.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "vcxgen" / "main.py"


def run_cli(args: List[str], cwd: Optional[Path] = None, stdin: str = "") -> subprocess.CompletedProcess:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Create a small C++ project:
    /repo
      main.cpp
      /core
        engine.cpp
        engine.h
      CMakeLists.txt
    """
    repo = tmp_path / "repo"
    (repo / "core").mkdir(parents=True)
    (repo / "main.cpp").write_text("int main() {}\n", encoding="utf-8")
    (repo / "core" / "engine.cpp").write_text("", encoding="utf-8")
    (repo / "core" / "engine.h").write_text("", encoding="utf-8")
    (repo / "CMakeLists.txt").write_text("", encoding="utf-8")
    return repo


def test_cli_scan_generates_project(tmp_path: Path, sample_tree: Path) -> None:
    out = tmp_path / "out"

    result = run_cli(["--scan", ".", "-o", str(out), "-n", "repo", "--filter-separator", "/"], cwd=sample_tree)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert "Project generated." in result.stdout

    project = (out / "repo.vcxproj").read_text(encoding="utf-8")
    filters = (out / "repo.vcxproj.filters").read_text(encoding="utf-8")

    assert '<ClCompile Include="./main.cpp" />' in project
    assert '<ClInclude Include="./core/engine.h" />' in project
    assert "CMakeLists.txt" not in project
    assert '<Filter Include="Source Files/core">' in filters


def test_cli_reads_files_from_stdin(tmp_path: Path) -> None:
    result = run_cli(
        ["--files-from", "-", "--json", "--dry-run", "--root", str(tmp_path)],
        cwd=tmp_path,
        stdin="# generated list\na.cpp\nb.h\n",
    )

    assert result.returncode == 0, result.stderr
    data = json.loads(result.stdout)
    assert data["input_files"] == 2
    assert data["dry_run"] is True
    assert not (tmp_path / "project.vcxproj").exists()


def test_cli_without_input_exits_with_usage_error(tmp_path: Path) -> None:
    result = run_cli([], cwd=tmp_path)

    assert result.returncode == 2
    assert "No input files" in result.stderr


def test_cli_malformed_template_fails(tmp_path: Path) -> None:
    template = tmp_path / "broken.vcxproj"
    template.write_text("<Project>", encoding="utf-8")

    result = run_cli(["a.cpp", "--template", str(template)], cwd=tmp_path)

    assert result.returncode == 1
    assert "Malformed document" in result.stderr
    assert not (tmp_path / "project.vcxproj").exists()


def test_cli_help_message() -> None:
    result = run_cli(["--help"])

    assert result.returncode == 0
    assert "usage: vcxgen" in result.stdout
    assert "--files-from" in result.stdout
