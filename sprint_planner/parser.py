import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

logger = logging.getLogger(__name__)

TaskStatus = Literal["pending", "in_progress", "completed", "deleted"]


@dataclass(frozen=True)
class Task:
    id: str
    subject: str
    status: TaskStatus = "pending"
    owner: str = ""
    blocked_by: tuple[str, ...] = ()
    description: str | None = None

    @property
    def text(self) -> str:
        """Subject and description joined, the input to every text heuristic."""
        return " ".join([self.subject, self.description or ""])


def task_from_dict(raw: dict) -> Task | None:
    if not raw.get("id"):
        return None

    blocked_by = raw.get("blockedBy") or []
    if isinstance(blocked_by, (str, int)):
        blocked_by = [blocked_by]
    elif not isinstance(blocked_by, (list, tuple)):
        blocked_by = []

    return Task(
        id=str(raw["id"]),
        subject=str(raw.get("subject") or raw.get("title") or "Untitled"),
        status=raw.get("status") or "pending",
        owner=raw.get("owner") or "",
        blocked_by=tuple(str(dep) for dep in blocked_by),
        description=raw.get("description"),
    )


def parse_task_file(path: Path) -> list[Task]:
    """Read one task file.

    A file holds either a single task object or a list of them. Files that
    cannot be read or decoded produce no tasks.
    """
    try:
        raw = json.loads(path.read_text())
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Skipping unreadable task file %s: %s", path, e)
        return []

    entries = raw if isinstance(raw, list) else [raw]

    tasks = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        task = task_from_dict(entry)
        if task is not None:
            tasks.append(task)
    return tasks


def task_sort_key(task_id: str) -> tuple[int, int, str]:
    if task_id.isdecimal():
        return (0, int(task_id), task_id)
    return (1, 0, task_id)


def parse_task_folder(path: str) -> list[Task]:
    folder = Path(path)
    tasks: dict[str, Task] = {}

    for json_file in sorted(folder.glob("*.json")):
        for task in parse_task_file(json_file):
            tasks[task.id] = task

    return sorted(tasks.values(), key=lambda t: task_sort_key(t.id))
