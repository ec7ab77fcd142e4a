"""Tests for ghfetch.output.console module."""

from __future__ import annotations

import pytest

from ghfetch.output.console import MockConsole, RichConsole, Style


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.ERROR) == "error"
        assert str(Style.DIM) == "dim"


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_prefixed_helpers(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")

        assert console.messages == ["OK done", "error: broken", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.count(Style.SUCCESS) == 1

    def test_find_and_clear(self) -> None:
        console = MockConsole()
        console.print("clone a")
        console.print("fetch b")

        assert len(console.find("clone")) == 1
        assert console.text == "clone a\nfetch b"

        console.clear()
        assert console.outputs == []


class TestRichConsole:
    def test_prints_brackets_verbatim(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole(no_color=True)
        console.print("[bold]repo[/bold]")
        console.error("[x] failed")

        out = capsys.readouterr().out
        assert "[bold]repo[/bold]" in out
        assert "error: [x] failed" in out
