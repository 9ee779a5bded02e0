import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from .planner import PlanReport


def report_to_dict(report: "PlanReport") -> dict:
    """Plain-data view of a report with the camelCase keys the dashboard reads."""
    plan = report.execution_plan
    sprint = report.sprint_plan
    return {
        "sprintPlan": {
            "analyses": [
                {
                    "taskId": a.task_id,
                    "complexity": asdict(a.complexity),
                    "splitSuggestion": a.split_suggestion,
                    "warnings": list(a.warnings),
                }
                for a in sprint.analyses
            ],
            "suggestedOrder": sprint.suggested_order,
            "totalEstimatedComplexity": sprint.total_estimated_complexity,
        },
        "executionPlan": {
            "batches": plan.batches,
            "criticalPath": plan.critical_path,
            "timeline": plan.timeline,
            "unresolved": plan.unresolved,
        },
        "modelRouting": {task_id: asdict(d) for task_id, d in report.model_routing.items()},
        "inferredDependencies": report.inferred_dependencies,
        "recommendedEngineers": report.recommended_engineers,
    }


def render_markdown(report: "PlanReport") -> str:
    plan = report.execution_plan
    frontmatter = {
        "updated": datetime.now(timezone.utc).isoformat(),
        "total_tasks": sum(len(batch) for batch in plan.batches),
        "batches": len(plan.batches),
        "recommended_engineers": report.recommended_engineers,
        "total_complexity": report.sprint_plan.total_estimated_complexity,
    }

    content = f"---\n{yaml.safe_dump(frontmatter, sort_keys=False)}---\n\n# Sprint Plan\n\n"

    content += "## Batches\n\n"
    for line in plan.timeline.splitlines():
        content += f"- {line}\n"
    if plan.unresolved:
        content += f"\n**Unresolved cycle**: {', '.join(plan.unresolved)}\n"

    if plan.critical_path:
        content += "\n## Critical Path\n\n"
        content += " -> ".join(f"#{task_id}" for task_id in plan.critical_path) + "\n"

    content += "\n## Tasks\n\n"
    for analysis in report.sprint_plan.analyses:
        decision = report.model_routing.get(analysis.task_id)
        model = decision.model if decision else "-"
        content += (
            f"### Task #{analysis.task_id} ({analysis.complexity.tier}, "
            f"{analysis.complexity.score}/10)\n"
        )
        content += f"Model: {model}\n"
        content += f"Reason: {decision.reason if decision else analysis.complexity.reason}\n"
        if analysis.warnings:
            content += f"Warnings: {', '.join(analysis.warnings)}\n"
        if analysis.split_suggestion:
            content += f"{analysis.split_suggestion}\n"
        content += "\n"

    return content


def write_plan_report(path: str, report: "PlanReport") -> Path:
    """Write the report as JSON for a .json path, Markdown otherwise."""
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)

    if output.suffix == ".json":
        output.write_text(json.dumps(report_to_dict(report), indent=2) + "\n")
    else:
        output.write_text(render_markdown(report))

    return output
