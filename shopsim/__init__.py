"""Discrete-time replay of job-shop schedules.

Exports the entity model, the table loader, time assignment and the
simulator.
"""

from shopsim.models import (  # noqa: F401
    Action,
    ActionState,
    Job,
    Machine,
    Operation,
    SimulationContext,
    Violation,
    ViolationKind,
)
from shopsim.parser import MalformedInputError, load_table  # noqa: F401
from shopsim.simulator import simulate, simulate_context, unfinished_actions  # noqa: F401
from shopsim.timing import assign_fixed_times, assign_random_times, check_assigned  # noqa: F401

__all__ = [
    "Action",
    "ActionState",
    "Job",
    "Machine",
    "MalformedInputError",
    "Operation",
    "SimulationContext",
    "Violation",
    "ViolationKind",
    "assign_fixed_times",
    "assign_random_times",
    "check_assigned",
    "load_table",
    "simulate",
    "simulate_context",
    "unfinished_actions",
]
