import os
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from shopsim.models import SimulationContext, Violation  # noqa: E402


def plot_schedule(
    context: SimulationContext,
    violations: Sequence[Violation],
    save_path: str,
    limit: Optional[int] = None,
    show_legend: Optional[bool] = None,
) -> str:
    """Draw the assigned schedule as a Gantt chart and save it.

    One lane per machine, one bar per action coloured by job. Actions that
    triggered a collision or omission get a red outline; ``limit`` (if given
    and inside the plotted range) is drawn as a dashed vertical line.

    Returns:
        The path the figure was written to.
    """
    m = len(context.machines)
    n = len(context.jobs)
    lane = {id(machine): i for i, machine in enumerate(context.machines)}
    flagged = {id(v.action) for v in violations}

    fig, ax = plt.subplots(figsize=(12, min(0.6 * m + 2, 16)), constrained_layout=True)
    cmap = plt.get_cmap("tab20")
    colors = [cmap(i % 20) for i in range(max(n, 1))]
    latest = 0
    for action in context.actions:
        if not action.assigned:
            continue
        job_index = action.operation[0]
        bad = id(action) in flagged
        ax.barh(
            lane[id(action.machine)],
            action.duration,
            left=action.start,
            height=0.8,
            color=colors[job_index],
            alpha=0.6 if bad else 0.85,
            edgecolor="red" if bad else "black",
            linewidth=1.6 if bad else 0.6,
        )
        latest = max(latest, action.end)
    if limit is not None and limit <= latest:
        ax.axvline(x=limit, color="red", linestyle="--", linewidth=1.2, zorder=5)
    ax.set_xlabel("Tick", fontsize=12)
    ax.set_ylabel("Machine", fontsize=12)
    ax.set_title(f"Schedule replay - violations = {len(violations)}", fontsize=14, fontweight="bold")
    ax.set_yticks(range(m))
    ax.set_yticklabels([machine.name for machine in context.machines])
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)
    ax.set_ylim(-0.5, m - 0.5)

    if show_legend is None:
        show_legend = n <= 40
    if show_legend:
        legend_elements = [
            plt.Rectangle((0, 0), 1, 1, facecolor=colors[i], alpha=0.85, edgecolor="black", label=job.name)
            for i, job in enumerate(context.jobs)
        ]
        ax.legend(
            handles=legend_elements,
            bbox_to_anchor=(1.02, 1),
            loc="upper left",
            borderaxespad=0.0,
            fontsize=8,
            frameon=False,
        )

    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(save_path, dpi=180)
    plt.close(fig)
    return save_path
