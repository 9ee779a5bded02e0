from dataclasses import dataclass
from typing import TYPE_CHECKING

from .complexity import Tier, score_task_complexity
from .heuristics import DEFAULT_HEURISTICS, Heuristics

if TYPE_CHECKING:
    from .parser import Task


MODEL_FOR_TIER: dict[str, str] = {
    "simple": "claude-haiku-4-5-20251001",
    "medium": "claude-sonnet-4-6",
    "complex": "claude-opus-4-6",
}


@dataclass(frozen=True)
class ModelRoutingDecision:
    model: str
    tier: Tier
    score: int
    reason: str


def route_task_to_model(
    task: "Task",
    overrides: dict[str, str] | None = None,
    heuristics: Heuristics = DEFAULT_HEURISTICS,
) -> ModelRoutingDecision:
    """Pick the model for a task from its complexity tier.

    A per-task override replaces the model only; tier and score are still
    the scored values.
    """
    complexity = score_task_complexity(task, heuristics)

    if overrides and overrides.get(task.id):
        return ModelRoutingDecision(
            model=overrides[task.id],
            tier=complexity.tier,
            score=complexity.score,
            reason=f"manual override (complexity: {complexity.reason})",
        )

    return ModelRoutingDecision(
        model=MODEL_FOR_TIER[complexity.tier],
        tier=complexity.tier,
        score=complexity.score,
        reason=complexity.reason,
    )
