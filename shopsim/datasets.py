"""Dataset sources producing tables for ``shopsim.parser.load_table``.

``SAMPLE_TABLE`` is a 4-job, 12-operation, 5-machine demo instance. CSV files
use the same layout: header row first, then one row per operation.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

SAMPLE_TABLE: list[list[Any]] = [
    ["Pikj", "O", "M1", "M2", "M3", "M4", "M5"],
    ["J1", "O11", 2, 5, 4, 1, 2],
    ["", "O12", 5, 4, 5, 7, 5],
    ["", "O13", 4, 5, 5, 4, 5],
    ["J2", "O21", 2, 5, 4, 7, 8],
    ["", "O22", 5, 6, 9, 8, 5],
    ["", "O23", 4, 5, 4, 54, 5],
    ["J3", "O31", 9, 8, 6, 7, 9],
    ["", "O32", 6, 1, 2, 5, 4],
    ["", "O33", 2, 5, 4, 2, 4],
    ["", "O34", 4, 5, 2, 1, 5],
    ["J4", "O41", 1, 5, 2, 4, 12],
    ["", "O42", 5, 1, 2, 1, 2],
]


def read_table_csv(path: str | Path) -> list[list[str]]:
    """Read a CSV table, skipping blank lines.

    Cells are returned as strings; the loader converts durations.
    """
    with open(path, "r", newline="", encoding="utf-8") as f:
        return [row for row in csv.reader(f) if any(cell.strip() for cell in row)]


def resolve_table(dataset: str) -> list[list[Any]]:
    """Return the table named by ``dataset``: ``"sample"`` or a CSV path.

    Raises:
        FileNotFoundError: If ``dataset`` is a path that does not exist.
    """
    if dataset == "sample":
        return [list(row) for row in SAMPLE_TABLE]
    if not Path(dataset).is_file():
        raise FileNotFoundError(f"Dataset file not found: {dataset}")
    return read_table_csv(dataset)
