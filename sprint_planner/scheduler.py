import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .heuristics import DEFAULT_HEURISTICS, Heuristics
from .inference import work_tasks

if TYPE_CHECKING:
    from .parser import Task

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENGINEERS = 5


@dataclass
class ExecutionPlan:
    batches: list[list[str]]  # Tasks grouped by batch (parallel within batch)
    critical_path: list[str]  # Longest dependency chain, first to last
    timeline: str = ""
    unresolved: list[str] = field(default_factory=list)  # Dumped by the cycle fallback


def compute_batches(tasks: list["Task"]) -> tuple[list[list[str]], list[str]]:
    """Partition tasks into batches whose dependencies are met by earlier batches.

    Dependencies on ids outside the task set count as satisfied. If a round
    finds nothing ready the remaining tasks form a cycle; they are returned as
    one final batch and also as the second element of the result.
    """
    ids = {t.id for t in tasks}
    remaining = {t.id: t for t in tasks}
    batches = []

    while remaining:
        batch = [
            task_id
            for task_id, task in remaining.items()
            if all(dep not in remaining or dep not in ids for dep in task.blocked_by)
        ]

        if not batch:
            unresolved = list(remaining)
            logger.warning(
                "Circular dependency among tasks %s; placing them in one unordered batch",
                unresolved,
            )
            batches.append(unresolved)
            return batches, unresolved

        for task_id in batch:
            del remaining[task_id]
        batches.append(batch)

    return batches, []


def compute_critical_path(tasks: list["Task"]) -> list[str]:
    """Longest chain of blocked_by edges through the task set.

    Depth-first with an explicit stack. A dependency that is still being
    visited when reached again closes a cycle; that edge is ignored, so the
    result is always a real chain over the remaining edges.
    """
    task_map = {t.id: t for t in tasks}
    # chain[id] = (length of longest chain ending at id, predecessor on it)
    chain: dict[str, tuple[int, str | None]] = {}
    visiting: set[str] = set()

    def deps_of(task_id: str) -> list[str]:
        return [dep for dep in task_map[task_id].blocked_by if dep in task_map]

    for root in task_map:
        stack = [root]
        while stack:
            task_id = stack[-1]
            if task_id in chain:
                stack.pop()
                continue

            if task_id not in visiting:
                visiting.add(task_id)
                pending = [dep for dep in deps_of(task_id) if dep not in chain and dep not in visiting]
                stack.extend(reversed(pending))
                continue

            best = 0
            best_prev = None
            for dep in deps_of(task_id):
                if dep in chain and chain[dep][0] > best:
                    best, best_prev = chain[dep][0], dep

            chain[task_id] = (best + 1, best_prev)
            visiting.discard(task_id)
            stack.pop()

    tail = None
    max_len = 0
    for task_id in task_map:
        length = chain[task_id][0]
        if length > max_len:
            max_len, tail = length, task_id

    path = []
    while tail is not None:
        path.append(tail)
        tail = chain[tail][1]
    path.reverse()
    return path


def render_timeline(batches: list[list[str]]) -> str:
    lines = []
    for i, batch in enumerate(batches):
        label = "parallel" if len(batch) > 1 else "sequential"
        lines.append(f"Batch {i + 1} ({label}): {', '.join(f'#{task_id}' for task_id in batch)}")
    return "\n".join(lines)


def build_execution_plan(
    tasks: list["Task"],
    heuristics: Heuristics = DEFAULT_HEURISTICS,
) -> ExecutionPlan:
    """Create the batch plan and critical path for the non-internal tasks.

    Tasks should already carry merged (declared and inferred) dependencies.
    """
    planned = work_tasks(tasks, heuristics)
    if not planned:
        return ExecutionPlan(batches=[], critical_path=[])

    batches, unresolved = compute_batches(planned)
    return ExecutionPlan(
        batches=batches,
        critical_path=compute_critical_path(planned),
        timeline=render_timeline(batches),
        unresolved=unresolved,
    )


def recommend_engineers(plan: ExecutionPlan, max_engineers: int = DEFAULT_MAX_ENGINEERS) -> int:
    """Number of engineers worth running: the widest batch, capped."""
    if not plan.batches:
        return 1
    widest = max(len(batch) for batch in plan.batches)
    return min(max(1, widest), max_engineers)
