from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .complexity import ComplexityResult, score_task_complexity
from .heuristics import DEFAULT_HEURISTICS, Heuristics
from .inference import work_tasks
from .scheduler import compute_batches

if TYPE_CHECKING:
    from .parser import Task

SPLIT_THRESHOLD = 8
SPLIT_SUGGESTION = "Consider splitting: high complexity task with no sub-tasks"


@dataclass
class TaskAnalysis:
    task_id: str
    complexity: ComplexityResult
    split_suggestion: str | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class SprintPlan:
    analyses: list[TaskAnalysis]
    suggested_order: list[list[str]]
    total_estimated_complexity: int


def analyze_task(task: "Task", heuristics: Heuristics = DEFAULT_HEURISTICS) -> TaskAnalysis:
    complexity = score_task_complexity(task, heuristics)

    warnings = []
    if not task.description:
        warnings.append("no description")
    if complexity.tier == "complex":
        warnings.append("very high complexity")

    split_suggestion = None
    if complexity.score >= SPLIT_THRESHOLD and not task.blocked_by:
        split_suggestion = SPLIT_SUGGESTION

    return TaskAnalysis(
        task_id=task.id,
        complexity=complexity,
        split_suggestion=split_suggestion,
        warnings=warnings,
    )


def analyze_sprint_tasks(
    tasks: list["Task"],
    heuristics: Heuristics = DEFAULT_HEURISTICS,
) -> SprintPlan:
    planned = work_tasks(tasks, heuristics)
    analyses = [analyze_task(task, heuristics) for task in planned]
    suggested_order, _ = compute_batches(planned)

    return SprintPlan(
        analyses=analyses,
        suggested_order=suggested_order,
        total_estimated_complexity=sum(a.complexity.score for a in analyses),
    )
