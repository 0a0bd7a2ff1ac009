"""Table loader: builds a ``SimulationContext`` from a rectangular table.

Table layout
------------
Row 0
    ``[label, label, M1, M2, ...]`` -- columns from index 2 name the machines.
Rows 1..n
    ``[job, operation, d1, d2, ...]`` -- one operation per row. An empty job
    cell continues the most recently named job. Durations are aligned with
    the machine columns of the header and every machine column yields one
    action.

Loading is all-or-nothing: the graph is assembled in local lists and only
returned once every row has been validated.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from shopsim.models import Action, Job, Machine, Operation, SimulationContext

logger = logging.getLogger("shopsim.parser")

MACHINE_COLUMN_OFFSET = 2


class MalformedInputError(ValueError):
    """Structural problem in an input table.

    Attributes:
        row: Zero-based row index of the offending cell (header is row 0).
        column: Zero-based column index, or ``None`` when the whole row is
            at fault.
    """

    def __init__(self, message: str, row: int | None = None, column: int | None = None):
        location = []
        if row is not None:
            location.append(f"row {row}")
        if column is not None:
            location.append(f"column {column}")
        text = f"{message} ({', '.join(location)})" if location else message
        super().__init__(text)
        self.row = row
        self.column = column


def _name_cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _duration_cell(value: Any, row: int, column: int) -> int:
    """Coerce a duration cell to ``int``.

    Accepts ints (not bools) and base-10 integer strings.

    Raises:
        MalformedInputError: On any other value or a negative duration.
    """
    if isinstance(value, bool):
        raise MalformedInputError(f"Duration must be an integer, got {value!r}", row, column)
    if isinstance(value, int):
        duration = value
    elif isinstance(value, str):
        try:
            duration = int(value.strip(), 10)
        except ValueError:
            raise MalformedInputError(
                f"Duration must be an integer, got {value!r}", row, column
            ) from None
    else:
        raise MalformedInputError(f"Duration must be an integer, got {value!r}", row, column)
    if duration < 0:
        raise MalformedInputError(f"Duration must be non-negative, got {duration}", row, column)
    return duration


def load_table(table: Sequence[Sequence[Any]]) -> SimulationContext:
    """Build machines, jobs, operations and actions from ``table``.

    Args:
        table: Header row followed by at least one operation row.

    Returns:
        SimulationContext with machines in header order and jobs, operations
        and actions in row/column order. All actions are unassigned
        (``start``/``end`` are ``None``) and PENDING.

    Raises:
        MalformedInputError: If the table is empty, has no machine columns
            or no data rows, a row width differs from the header, the first
            row continues a job that was never named, or a duration cell is
            not a non-negative integer.
    """
    if not table:
        raise MalformedInputError("Table is empty")
    header = table[0]
    if len(header) <= MACHINE_COLUMN_OFFSET:
        raise MalformedInputError("Header lists no machine columns", 0)
    if len(table) < 2:
        raise MalformedInputError("Table has no operation rows", 0)

    machines = [Machine(_name_cell(cell)) for cell in header[MACHINE_COLUMN_OFFSET:]]
    width = len(header)
    jobs: list[Job] = []
    actions: list[Action] = []

    for row_index in range(1, len(table)):
        row = table[row_index]
        if len(row) != width:
            column = min(len(row), width)
            raise MalformedInputError(
                f"Expected {len(machines)} duration cells, got "
                f"{max(len(row) - MACHINE_COLUMN_OFFSET, 0)}",
                row_index,
                column,
            )
        job_name = _name_cell(row[0])
        if job_name:
            jobs.append(Job(job_name))
        elif not jobs:
            raise MalformedInputError("First operation row must name a job", row_index, 0)
        job_index = len(jobs) - 1
        job = jobs[job_index]

        operation = Operation(_name_cell(row[1]), job_index)
        key = (job_index, len(job.operations))
        for offset, machine in enumerate(machines):
            column = MACHINE_COLUMN_OFFSET + offset
            duration = _duration_cell(row[column], row_index, column)
            action = Action(duration=duration, machine=machine, operation=key)
            operation.actions.append(action)
            actions.append(action)
        job.operations.append(operation)

    logger.info(
        "Loaded table: machines=%d jobs=%d operations=%d actions=%d",
        len(machines),
        len(jobs),
        sum(len(j.operations) for j in jobs),
        len(actions),
    )
    return SimulationContext(machines=machines, jobs=jobs, actions=actions)
