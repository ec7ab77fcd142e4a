"""Tests for ghfetch.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from ghfetch.core.result import Err, Ok
from ghfetch.platform.process import ProcessError, run


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(
            command=("git", "fetch"),
            returncode=1,
            stdout="",
            stderr="fatal: not a git repository",
        )
        assert str(error) == "git fetch failed (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("git", "-C", "repo", "fetch", "--all"),
            returncode=128,
            stdout="",
            stderr="",
        )
        assert str(error) == "git -C repo ... failed (exit 128)"

    def test_detail_prefers_stderr(self) -> None:
        error = ProcessError(("git",), 1, "", "  fatal: boom\n")
        assert error.detail == "fatal: boom"

    def test_detail_falls_back_to_summary(self) -> None:
        error = ProcessError(("git", "clone"), 128, "", "")
        assert error.detail == "git clone failed (exit 128)"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "import sys; sys.exit(42)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 42

    def test_captures_stderr(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import sys; sys.stderr.write('error msg'); sys.exit(1)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert "error msg" in result.error.stderr

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert len(result.error.stderr) > 0

    def test_timeout(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import time; time.sleep(5)"],
            cwd=tmp_path,
            timeout=0.2,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert "timed out" in result.error.stderr

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").write_text("x", encoding="utf-8")

        result = run([sys.executable, "-c", "import os; print(os.listdir('.'))"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "marker.txt" in result.value

    def test_undecodable_output_does_not_raise(self, tmp_path: Path) -> None:
        script = (
            "import sys; sys.stdout.buffer.write(b'\\xff\\xfe ok\\n'); "
            "sys.stderr.buffer.write(b'\\xc3 bad\\n'); sys.exit(1)"
        )

        result = run([sys.executable, "-c", script], cwd=tmp_path)

        assert isinstance(result, Err)
        assert "ok" in result.error.stdout
        assert "bad" in result.error.stderr
