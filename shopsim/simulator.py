"""Discrete-time replay of an assigned schedule.

Every tick ``t`` in ``[0, limit)`` visits the actions in insertion order:

* ``t == start`` claims the action's machine; a machine that is already
  occupied is a *collision*.
* ``t == end`` releases the machine and marks the action done; a machine
  that is already free is an *omission*.

Violations never stop the replay. They are logged and returned in the order
they were observed. Actions whose events fall outside the horizon stay
PENDING and are not reported.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Sequence

from shopsim.models import (
    Action,
    ActionState,
    Job,
    Machine,
    SimulationContext,
    Violation,
    ViolationKind,
)
from shopsim.timing import check_assigned

logger = logging.getLogger("shopsim.simulator")


def _step(action: Action, tick: int, violations: list[Violation]) -> None:
    """Process the start and end events of ``action`` at ``tick``."""
    if action.done:
        return
    machine = action.machine
    if action.start == tick:
        if not machine.occupied:
            machine.occupied = True
            action.state = ActionState.RUNNING
            logger.debug("t=%d start %s", tick, action)
        else:
            violation = Violation(ViolationKind.COLLISION, tick, action, machine)
            logger.warning("%s", violation)
            violations.append(violation)
    if action.end == tick:
        if machine.occupied:
            action.state = ActionState.DONE
            machine.occupied = False
            logger.debug("t=%d end %s", tick, action)
        else:
            violation = Violation(ViolationKind.OMISSION, tick, action, machine)
            logger.warning("%s", violation)
            violations.append(violation)


def _scan(limit: int, actions: Sequence[Action], violations: list[Violation]) -> None:
    for tick in range(limit):
        for action in actions:
            _step(action, tick, violations)


def _scan_indexed(limit: int, actions: Sequence[Action], violations: list[Violation]) -> None:
    """Visit only ticks at which some action starts or ends.

    Buckets keep actions in insertion order, so per-tick processing is the
    same as in the full scan.
    """
    events: dict[int, list[Action]] = defaultdict(list)
    for action in actions:
        events[action.start].append(action)
        if action.end != action.start:
            events[action.end].append(action)
    for tick in sorted(t for t in events if 0 <= t < limit):
        for action in events[tick]:
            _step(action, tick, violations)


def simulate(
    limit: int,
    machines: Sequence[Machine],
    jobs: Sequence[Job],
    actions: Sequence[Action],
    *,
    indexed: bool = False,
) -> list[Violation]:
    """Replay ``actions`` over ticks ``0 .. limit - 1``.

    Args:
        limit: Exclusive simulation horizon.
        machines: Machine registry the actions point into.
        jobs: Owning jobs (only used for the summary log line).
        actions: Assigned actions in scan order.
        indexed: When True visit only event ticks instead of every tick.
            Reports and final states are identical either way.

    Returns:
        Collisions and omissions in the order they were observed.

    Raises:
        ValueError: If ``limit`` is negative or some action has no
            consistent start/end time. Raised before any state changes.
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    check_assigned(actions)

    violations: list[Violation] = []
    if indexed:
        _scan_indexed(limit, actions, violations)
    else:
        _scan(limit, actions, violations)

    collisions = sum(1 for v in violations if v.kind is ViolationKind.COLLISION)
    logger.info(
        "Simulated %d ticks: jobs=%d machines=%d actions=%d done=%d collisions=%d omissions=%d",
        limit,
        len(jobs),
        len(machines),
        len(actions),
        sum(1 for a in actions if a.done),
        collisions,
        len(violations) - collisions,
    )
    return violations


def simulate_context(limit: int, context: SimulationContext, *, indexed: bool = False) -> list[Violation]:
    return simulate(limit, context.machines, context.jobs, context.actions, indexed=indexed)


def unfinished_actions(actions: Sequence[Action]) -> list[Action]:
    """Return actions that did not reach DONE, in scan order."""
    return [a for a in actions if not a.done]
