"""Pytest tests for `load_table`.

Covers the sample dataset shape, job continuation rows, CSV-style string
cells and the structural errors that abort a load.
"""

from __future__ import annotations

import pytest

from shopsim.datasets import SAMPLE_TABLE, read_table_csv, resolve_table
from shopsim.models import ActionState
from shopsim.parser import MalformedInputError, load_table


def test_load_sample_shape():
    ctx = load_table(SAMPLE_TABLE)
    assert [m.name for m in ctx.machines] == ["M1", "M2", "M3", "M4", "M5"]
    assert [j.name for j in ctx.jobs] == ["J1", "J2", "J3", "J4"]
    assert [len(j.operations) for j in ctx.jobs] == [3, 3, 4, 2]
    assert len(ctx.actions) == 12 * 5
    assert all(not m.occupied for m in ctx.machines)
    assert all(a.state is ActionState.PENDING and a.start is None for a in ctx.actions)


def test_one_action_per_machine_in_column_order():
    ctx = load_table(SAMPLE_TABLE)
    first = ctx.jobs[0].operations[0]
    assert first.name == "O11"
    assert [a.duration for a in first.actions] == [2, 5, 4, 1, 2]
    assert [a.machine for a in first.actions] == ctx.machines
    # flat list mirrors row-major order
    assert ctx.actions[:5] == first.actions
    assert ctx.actions[5] is ctx.jobs[0].operations[1].actions[0]


def test_machines_are_shared_instances():
    ctx = load_table(SAMPLE_TABLE)
    m1 = ctx.machines[0]
    on_m1 = [a for a in ctx.actions if a.machine is m1]
    assert len(on_m1) == 12


def test_back_references_resolve_through_context():
    ctx = load_table(SAMPLE_TABLE)
    action = ctx.jobs[2].operations[3].actions[1]
    operation = ctx.operation_of(action)
    assert operation.name == "O34"
    assert ctx.job_of(operation).name == "J3"
    assert ctx.describe(action) == "J3/O34@M2"


def test_empty_job_cell_continues_previous_job():
    table = [
        ["", "", "A", "B"],
        ["J1", "op1", 1, 2],
        ["", "op2", 3, 4],
        [None, "op3", 5, 6],
        ["J2", "op4", 7, 8],
    ]
    ctx = load_table(table)
    assert [op.name for op in ctx.jobs[0].operations] == ["op1", "op2", "op3"]
    assert [op.name for op in ctx.jobs[1].operations] == ["op4"]


def test_empty_operation_name_is_allowed():
    ctx = load_table([["", "", "M"], ["J", "", 1]])
    assert ctx.jobs[0].operations[0].name == ""


def test_string_cells_are_parsed():
    ctx = load_table([["", "", "M1", "M2"], ["J1", "O1", " 3", "0"]])
    assert [a.duration for a in ctx.actions] == [3, 0]


def test_load_is_repeatable_into_independent_graphs():
    first = load_table(SAMPLE_TABLE)
    second = load_table(SAMPLE_TABLE)

    def shape(ctx):
        return [
            (job.name, [(op.name, [a.duration for a in op.actions]) for op in job.operations])
            for job in ctx.jobs
        ]

    assert shape(first) == shape(second)
    assert first.machines[0] is not second.machines[0]


@pytest.mark.parametrize(
    "table, row, column",
    [
        ([["", "", "M1", "M2"], ["J1", "O1", 3]], 1, 3),  # short row
        ([["", "", "M1"], ["J1", "O1", 3, 4]], 1, 3),  # long row
        ([["", "", "M1", "M2"], ["J1", "O1", 3, "x"]], 1, 3),  # not an integer
        ([["", "", "M1"], ["J1", "O1", 2.5]], 1, 2),  # float
        ([["", "", "M1"], ["J1", "O1", True]], 1, 2),  # bool
        ([["", "", "M1"], ["J1", "O1", -1]], 1, 2),  # negative
        ([["", "", "M1"], ["", "O1", 1]], 1, 0),  # continuation without a job
        ([["", "", "M1"], ["J1", "O1", 1], ["", "O2", None]], 2, 2),  # missing cell
    ],
)
def test_malformed_cells(table, row, column):
    with pytest.raises(MalformedInputError) as excinfo:
        load_table(table)
    assert excinfo.value.row == row
    assert excinfo.value.column == column


@pytest.mark.parametrize(
    "table",
    [
        [],  # empty
        [["", "", "M1"]],  # header only
        [["", ""], ["J1", "O1"]],  # no machine columns
    ],
)
def test_malformed_tables(table):
    with pytest.raises(ValueError):
        load_table(table)


def test_csv_dataset_roundtrip(tmp_path):
    path = tmp_path / "shop.csv"
    path.write_text("Pikj,O,M1,M2\nJ1,O11,2,5\n\n,O12,5,4\n", encoding="utf-8")
    table = read_table_csv(path)
    assert len(table) == 3
    ctx = load_table(resolve_table(str(path)))
    assert [a.duration for a in ctx.actions] == [2, 5, 5, 4]


def test_resolve_missing_dataset(tmp_path):
    with pytest.raises(FileNotFoundError):
        resolve_table(str(tmp_path / "missing.csv"))


def test_resolve_sample_is_a_copy():
    table = resolve_table("sample")
    table[1][2] = 999
    assert SAMPLE_TABLE[1][2] == 2
