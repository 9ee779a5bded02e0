"""Sprint planner - runs the full planning pipeline over a task snapshot."""

import logging
from dataclasses import dataclass, field

from .analysis import SprintPlan, analyze_sprint_tasks
from .config import PlannerConfig
from .inference import apply_inferred_dependencies, infer_dependencies, work_tasks
from .parser import Task, parse_task_folder
from .router import ModelRoutingDecision, route_task_to_model
from .scheduler import ExecutionPlan, build_execution_plan, recommend_engineers

logger = logging.getLogger(__name__)


@dataclass
class PlanReport:
    sprint_plan: SprintPlan
    execution_plan: ExecutionPlan
    model_routing: dict[str, ModelRoutingDecision]
    inferred_dependencies: dict[str, list[str]] = field(default_factory=dict)
    recommended_engineers: int = 1


def plan_sprint(
    tasks: list[Task],
    config: PlannerConfig | None = None,
    infer: bool = True,
) -> PlanReport:
    """Plan a snapshot of tasks.

    Args:
        tasks: Task snapshot as loaded from the task files
        config: Overrides, engineer cap and heuristic tables; defaults if None
        infer: Whether to add inferred dependencies before planning

    Returns:
        PlanReport with analysis, batches, critical path and model per task
    """
    config = config or PlannerConfig()
    heuristics = config.heuristics

    inferred = infer_dependencies(tasks, heuristics) if infer else {}
    planned = apply_inferred_dependencies(tasks, inferred)

    execution_plan = build_execution_plan(planned, heuristics)
    model_routing = {
        task.id: route_task_to_model(task, config.model_overrides, heuristics)
        for task in work_tasks(planned, heuristics)
    }

    return PlanReport(
        sprint_plan=analyze_sprint_tasks(planned, heuristics),
        execution_plan=execution_plan,
        model_routing=model_routing,
        inferred_dependencies=inferred,
        recommended_engineers=recommend_engineers(execution_plan, config.max_engineers),
    )


def plan_task_folder(
    task_folder: str,
    config: PlannerConfig | None = None,
    infer: bool = True,
) -> PlanReport:
    logger.info("Parsing task folder: %s", task_folder)
    tasks = parse_task_folder(task_folder)
    logger.info("Found %d tasks", len(tasks))
    return plan_sprint(tasks, config, infer=infer)


def format_plan(report: PlanReport, tasks: list[Task]) -> str:
    """Human-readable summary of a plan, one section per concern."""
    task_map = {t.id: t for t in tasks}
    plan = report.execution_plan
    lines = [f"Tasks: {sum(len(batch) for batch in plan.batches)}"]

    lines.append("\nExecution Plan (tasks in the same batch run in parallel):")
    if plan.timeline:
        lines.extend(f"  {line}" for line in plan.timeline.splitlines())
    else:
        lines.append("  (no tasks)")
    if plan.unresolved:
        lines.append(f"  Unresolved cycle, sequence manually: {', '.join(plan.unresolved)}")

    if plan.critical_path:
        lines.append(f"\nCritical path: {' -> '.join(f'#{task_id}' for task_id in plan.critical_path)}")
    lines.append(f"Recommended engineers: {report.recommended_engineers}")

    lines.append("\nTasks:")
    for analysis in report.sprint_plan.analyses:
        task = task_map.get(analysis.task_id)
        subject = task.subject if task else "unknown"
        decision = report.model_routing.get(analysis.task_id)
        model = decision.model if decision else "-"
        complexity = analysis.complexity
        lines.append(
            f"  #{analysis.task_id} {subject} [{complexity.tier} {complexity.score}/10] "
            f"-> {model} ({decision.reason if decision else complexity.reason})"
        )
        for warning in analysis.warnings:
            lines.append(f"      warning: {warning}")
        if analysis.split_suggestion:
            lines.append(f"      {analysis.split_suggestion}")

    if report.inferred_dependencies:
        lines.append("\nInferred dependencies:")
        for task_id, deps in report.inferred_dependencies.items():
            lines.append(f"  Task #{task_id} depends on: {', '.join(f'#{d}' for d in deps)}")

    lines.append(f"\nTotal estimated complexity: {report.sprint_plan.total_estimated_complexity}")
    return "\n".join(lines)


def dry_run(task_folder: str, config: PlannerConfig | None = None, infer: bool = True) -> PlanReport:
    """Parse, plan and print without writing anything."""
    tasks = parse_task_folder(task_folder)
    report = plan_sprint(tasks, config, infer=infer)

    print(f"Task folder: {task_folder}")
    print(format_plan(report, tasks))

    return report
