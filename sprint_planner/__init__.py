"""Sprint planner - complexity scoring, dependency inference and batch planning for agent task files."""

from .parser import Task, parse_task_file, parse_task_folder
from .heuristics import Heuristics, DEFAULT_HEURISTICS
from .complexity import ComplexityResult, score_task_complexity
from .inference import is_internal_task, infer_dependencies, apply_inferred_dependencies
from .scheduler import ExecutionPlan, build_execution_plan, recommend_engineers, render_timeline
from .router import MODEL_FOR_TIER, ModelRoutingDecision, route_task_to_model
from .analysis import TaskAnalysis, SprintPlan, analyze_sprint_tasks
from .config import PlannerConfig, load_config, load_model_overrides
from .planner import PlanReport, plan_sprint, plan_task_folder, dry_run
from .report import report_to_dict, write_plan_report

__all__ = [
    "Task",
    "parse_task_file",
    "parse_task_folder",
    "Heuristics",
    "DEFAULT_HEURISTICS",
    "ComplexityResult",
    "score_task_complexity",
    "is_internal_task",
    "infer_dependencies",
    "apply_inferred_dependencies",
    "ExecutionPlan",
    "build_execution_plan",
    "recommend_engineers",
    "render_timeline",
    "MODEL_FOR_TIER",
    "ModelRoutingDecision",
    "route_task_to_model",
    "TaskAnalysis",
    "SprintPlan",
    "analyze_sprint_tasks",
    "PlannerConfig",
    "load_config",
    "load_model_overrides",
    "PlanReport",
    "plan_sprint",
    "plan_task_folder",
    "dry_run",
    "report_to_dict",
    "write_plan_report",
]
