from __future__ import annotations

import runpy
import sys
from pathlib import Path

import pytest

import lifecal_app.__main__ as desktop_main


@pytest.fixture()
def recorded(monkeypatch) -> list[list[str]]:
    calls: list[list[str]] = []
    monkeypatch.setattr(desktop_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)
    return calls


def test_no_arguments_opens_preview(recorded) -> None:
    assert desktop_main.main([]) == 0
    assert recorded == [[desktop_main.DEFAULT_COMMAND]]


def test_subcommand_is_forwarded(recorded) -> None:
    assert desktop_main.main(["render", "--type", "life"]) == 0
    assert recorded == [["render", "--type", "life"]]


def test_reads_process_arguments(recorded, monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["lifecal", "devices"])
    desktop_main.main()
    assert recorded == [["devices"]]


def test_script_execution_without_package() -> None:
    main_path = Path(__file__).resolve().parents[1] / "apps" / "desktop" / "lifecal_app" / "__main__.py"
    namespace = runpy.run_path(str(main_path))
    assert namespace["DEFAULT_COMMAND"] == "run"
