import argparse
import logging
import os
import random
import sys
from datetime import datetime
from typing import Optional, Sequence

from shopsim.config import SimulationConfig, load_config
from shopsim.datasets import resolve_table
from shopsim.models import Violation
from shopsim.parser import load_table
from shopsim.simulator import simulate_context, unfinished_actions
from shopsim.timing import assign_random_times
from shopsim.visualization import plot_schedule

logger = logging.getLogger("shopsim")


def run(config: SimulationConfig) -> list[Violation]:
    """Load the dataset, assign random start times and replay the schedule.

    Raises:
        MalformedInputError: If the dataset table is structurally invalid;
            nothing is simulated in that case.
    """
    context = load_table(resolve_table(config.dataset))
    rng = random.Random(config.seed) if config.seed is not None else random.Random()
    assign_random_times(context.actions, config.min_start, config.max_start, rng=rng)

    violations = simulate_context(config.limit, context, indexed=config.indexed)
    pending = unfinished_actions(context.actions)
    logger.info(
        "Dataset=%s seed=%s violations=%d unfinished=%d",
        config.dataset,
        config.seed,
        len(violations),
        len(pending),
    )

    if config.charts_dir:
        name = f"schedule_{datetime.now().strftime('%Y%m%d_%H%M%S')}.png"
        out_path = plot_schedule(
            context, violations, os.path.join(config.charts_dir, name), limit=config.limit
        )
        logger.info(f"Saved schedule chart to {out_path}")
    return violations


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a job-shop schedule and report machine conflicts")
    parser.add_argument(
        "--config",
        required=True,
        help="Path to a YAML/JSON configuration file",
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    violations = run(config)
    if config.strict and violations:
        logger.error("Strict mode: %d violations reported", len(violations))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
