import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from .heuristics import DEFAULT_HEURISTICS, Heuristics

if TYPE_CHECKING:
    from .parser import Task

logger = logging.getLogger(__name__)


def is_internal_task(task: "Task", heuristics: Heuristics = DEFAULT_HEURISTICS) -> bool:
    """True for agent bookkeeping tasks such as "sprint-engineer-2"."""
    return heuristics.internal_subject_pattern.fullmatch(task.subject.strip()) is not None


def work_tasks(tasks: list["Task"], heuristics: Heuristics = DEFAULT_HEURISTICS) -> list["Task"]:
    return [t for t in tasks if not is_internal_task(t, heuristics)]


def creation_order(tasks: list["Task"]) -> dict[str, int]:
    """Map task id -> position in creation order.

    Numeric ids are their own order. When any id is not a plain integer the
    snapshot position stands in, since mixed id schemes cannot be compared.
    """
    if tasks and all(t.id.isdecimal() for t in tasks):
        return {t.id: int(t.id) for t in tasks}
    order: dict[str, int] = {}
    for position, task in enumerate(tasks):
        order.setdefault(task.id, position)
    return order


def infer_dependencies(
    tasks: list["Task"],
    heuristics: Heuristics = DEFAULT_HEURISTICS,
) -> dict[str, list[str]]:
    """Suggest blocked_by edges the task files did not declare.

    Only earlier tasks are candidates. For each (task, candidate) pair the
    first matching rule wins:

    1. the task references a file the candidate also references
    2. the task uses a prerequisite phrase ("based on", ...) and shares at
       least two significant tokens with the candidate
    3. the two subjects share at least two significant tokens

    Returns task id -> ids to add, omitting tasks with nothing new.
    """
    candidates = work_tasks(tasks, heuristics)
    order = creation_order(candidates)

    file_refs = {}
    tokens = {}
    subject_tokens = {}
    for t in candidates:
        file_refs[t.id] = heuristics.extract_file_refs(t.text)
        tokens[t.id] = heuristics.significant_tokens(t.text)
        subject_tokens[t.id] = heuristics.significant_tokens(t.subject)

    result = {}
    for task in candidates:
        lower_text = task.text.lower()
        has_phrase = any(phrase in lower_text for phrase in heuristics.prerequisite_phrases)
        my_files = file_refs[task.id]
        inferred = []

        for other in candidates:
            if other.id == task.id or order[other.id] >= order[task.id]:
                continue
            if other.id in inferred:
                continue

            if my_files & file_refs[other.id]:
                inferred.append(other.id)
            elif has_phrase and len(tokens[task.id] & tokens[other.id]) >= 2:
                inferred.append(other.id)
            elif len(subject_tokens[task.id] & subject_tokens[other.id]) >= 2:
                inferred.append(other.id)

        existing = set(task.blocked_by)
        additions = [dep for dep in inferred if dep not in existing]
        if additions:
            logger.debug("Inferred dependencies for task %s: %s", task.id, additions)
            result[task.id] = additions

    return result


def apply_inferred_dependencies(
    tasks: list["Task"],
    inferred: dict[str, list[str]],
) -> list["Task"]:
    """Return new tasks with inferred ids merged into blocked_by."""
    merged_tasks = []
    for task in tasks:
        additions = inferred.get(task.id)
        if not additions:
            merged_tasks.append(task)
            continue
        merged = tuple(dict.fromkeys([*task.blocked_by, *additions]))
        merged_tasks.append(replace(task, blocked_by=merged))
    return merged_tasks
