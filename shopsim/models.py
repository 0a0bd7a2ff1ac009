"""Core data structures for job-shop schedule replay.

This module defines:
    Machine           -- unit of exclusive capacity, shared by many actions.
    Action            -- single unit of work on a single machine.
    Operation         -- named step of a job, owns its actions.
    Job               -- named unit of work, owns its operations.
    SimulationContext -- owner of one machine registry and one job graph.
    Violation         -- collision / omission record produced by a replay.

Back-references from an action to its operation, and from an operation to its
job, are index handles resolved through the owning ``SimulationContext``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

OperationKey = tuple[int, int]  # OperationKey = (job_index, operation_index)


class ActionState(str, Enum):
    """Lifecycle of an action during a replay."""

    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"


class ViolationKind(str, Enum):
    COLLISION = "collision"
    OMISSION = "omission"


@dataclass(eq=False)
class Machine:
    """One machine of the registry.

    Attributes:
        name: Display name taken from the table header.
        occupied: True while some running action holds the machine.
    """

    name: str
    occupied: bool = False

    def __str__(self) -> str:
        return f"Machine [name={self.name}, occupied={self.occupied}]"


@dataclass(eq=False)
class Action:
    """Single action on a single machine.

    ``start`` and ``end`` stay ``None`` until a time assigner fills them in;
    afterwards ``end == start + duration``.

    Attributes:
        duration: Processing time in ticks.
        machine: Machine instance from the context registry (not owned).
        operation: ``(job_index, operation_index)`` of the owning operation.
        start: Start tick.
        end: End tick.
        state: Current lifecycle state, mutated only by the simulator.
    """

    duration: int
    machine: Machine
    operation: OperationKey
    start: Optional[int] = None
    end: Optional[int] = None
    state: ActionState = ActionState.PENDING

    def __post_init__(self) -> None:
        if self.machine is None:
            raise ValueError("Action requires a machine")
        if self.operation is None:
            raise ValueError("Action requires an owning operation")

    @property
    def done(self) -> bool:
        return self.state is ActionState.DONE

    @property
    def assigned(self) -> bool:
        return self.start is not None and self.end is not None

    def __str__(self) -> str:
        return (
            f"Action [start={self.start}, duration={self.duration}, end={self.end}, "
            f"done={self.done}, machine={self.machine}]"
        )


@dataclass(eq=False)
class Operation:
    """Named step of a job.

    Attributes:
        name: Diagnostic label, may be empty.
        job: Index of the owning job inside ``SimulationContext.jobs``.
        actions: Owned actions, one per machine column in header order.
    """

    name: str
    job: int
    actions: list[Action] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Operation [name={self.name}, actions={len(self.actions)}]"


@dataclass(eq=False)
class Job:
    name: str
    operations: list[Operation] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Job [name={self.name}, operations={len(self.operations)}]"


@dataclass(eq=False)
class SimulationContext:
    """Everything a single replay works on.

    Fields:
        machines: Machine registry in header order.
        jobs: Jobs in table order (each owns its operations and actions).
        actions: Flat view of every action in insertion order; this is the
            scan order of the simulator.
    """

    machines: list[Machine]
    jobs: list[Job]
    actions: list[Action]

    def operation_of(self, action: Action) -> Operation:
        job_index, operation_index = action.operation
        return self.jobs[job_index].operations[operation_index]

    def job_of(self, operation: Operation) -> Job:
        return self.jobs[operation.job]

    def describe(self, action: Action) -> str:
        """Render ``job/operation@machine`` for diagnostics."""
        operation = self.operation_of(action)
        job = self.job_of(operation)
        return f"{job.name}/{operation.name}@{action.machine.name}"

    def reset(self) -> None:
        """Free every machine and put every action back to PENDING.

        Assigned start/end times are kept so the same schedule can be
        replayed again.
        """
        for machine in self.machines:
            machine.occupied = False
        for action in self.actions:
            action.state = ActionState.PENDING


@dataclass(frozen=True)
class Violation:
    """Single collision or omission observed during a replay.

    Fields:
        kind: COLLISION (machine already busy at a start event) or OMISSION
            (machine already free at an end event).
        tick: Simulated time of the event.
        action: Action whose event triggered the report.
        machine: Machine the action is bound to.
    """

    kind: ViolationKind
    tick: int
    action: Action
    machine: Machine

    def __str__(self) -> str:
        return f"Schedule {self.kind.value} at t={self.tick} for: {self.action}"
