"""Start-time assignment for actions.

A time assigner fills ``start`` and ``end`` on every action so that
``end == start + duration``. It never touches action state or machine
occupancy; those belong to the simulator.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Protocol, Sequence

from shopsim.models import Action

logger = logging.getLogger("shopsim.timing")


class TimeAssigner(Protocol):
    def __call__(self, actions: Sequence[Action], min_time: int, max_time: int) -> None: ...


def assign_random_times(
    actions: Sequence[Action],
    min_time: int,
    max_time: int,
    *,
    rng: Optional[random.Random] = None,
) -> None:
    """Pick a uniform random start in ``[min_time, max_time]`` for each action.

    Args:
        actions: Actions to assign, visited in the given order.
        min_time: Lowest allowed start tick (inclusive).
        max_time: Highest allowed start tick (inclusive).
        rng: Optional random.Random instance (for reproducibility). If
            None uses module-level random.

    Raises:
        ValueError: If ``min_time > max_time``.
    """
    if min_time > max_time:
        raise ValueError(f"min_time {min_time} is greater than max_time {max_time}")
    if rng is None:
        rng = random
    for action in actions:
        action.start = rng.randint(min_time, max_time)
        action.end = action.start + action.duration
    logger.info("Assigned random start times in [%d, %d] to %d actions", min_time, max_time, len(actions))


def assign_fixed_times(actions: Sequence[Action], starts: Sequence[int]) -> None:
    """Assign explicit start ticks, ``starts[i]`` going to ``actions[i]``.

    Raises:
        ValueError: If the two sequences differ in length.
    """
    if len(actions) != len(starts):
        raise ValueError(f"Got {len(starts)} start times for {len(actions)} actions")
    for action, start in zip(actions, starts):
        action.start = int(start)
        action.end = action.start + action.duration


def check_assigned(actions: Sequence[Action]) -> bool:
    """Verify ``end == start + duration`` for every action.

    Returns:
        True if every action is assigned consistently.

    Raises:
        ValueError: On the first unassigned or inconsistent action.
    """
    for index, action in enumerate(actions):
        if not action.assigned:
            raise ValueError(f"Action #{index} has no start/end time: {action}")
        if action.end != action.start + action.duration:
            raise ValueError(f"Action #{index} violates end == start + duration: {action}")
    return True
