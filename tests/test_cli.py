"""
Unit tests for the CLI helpers.
"""

import asyncio
import threading

from atlas_access import cli
from atlas_access.models import MapConfig, ResolutionResult


def test_prompt_reads_off_the_event_loop_thread(monkeypatch):
    seen = {}

    def fake_input(label):
        seen["label"] = label
        seen["thread"] = threading.current_thread()
        return "  key-linked  "

    monkeypatch.setattr("builtins.input", fake_input)

    async def _go():
        return await cli._prompt("Key: "), threading.current_thread()

    value, loop_thread = asyncio.run(_go())
    assert value == "key-linked"
    assert seen["label"] == "Key: "
    assert seen["thread"] is not loop_thread


def test_prompt_secret_uses_getpass(monkeypatch):
    monkeypatch.setattr(cli.getpass, "getpass", lambda label: "tok-123\n")
    assert asyncio.run(cli._prompt("Token: ", secret=True)) == "tok-123"


def test_format_result_marks_default_map():
    result = ResolutionResult(
        accessible=[MapConfig("Utilities", "r1"), MapConfig("Public", "p1", title="Public Parcels")],
        has_completed=True,
    )
    text = cli.format_result(result)
    assert " *1. Utilities  [r1]" in text
    assert "  2. Public Parcels  [p1]" in text
    assert "map_picker=True" in text


def test_format_result_empty():
    text = cli.format_result(ResolutionResult(login_required=True, has_completed=True))
    assert "(no accessible maps)" in text
    assert "login_required=True" in text
