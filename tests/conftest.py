"""Pytest configuration & custom summary hook.

Also ensures the project root is on sys.path so 'shopsim' imports work
without an editable install.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from shopsim.parser import load_table  # noqa: E402


@pytest.fixture
def shared_machine_table() -> list[list[object]]:
    """Two single-operation jobs competing for one machine ``M``."""
    return [
        ["Pikj", "O", "M"],
        ["J1", "A", 5],
        ["J2", "B", 3],
    ]


@pytest.fixture
def shared_machine_context(shared_machine_table):
    return load_table(shared_machine_table)


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    collected = terminalreporter._numcollected  # type: ignore[attr-defined]
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        "Collected: "
        f"{collected} | Passed: {passed} | Failed: {failed} | "
        f"Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
