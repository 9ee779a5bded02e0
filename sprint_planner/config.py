"""Planner configuration from ``.sprint.yml`` and the environment.

Example ``.sprint.yml``::

    models:
      overrides:
        "12": claude-opus-4-6
    planner:
      max_engineers: 4
    heuristics:
      stop_words: [the, a, an, of]

Every section is optional. ``SPRINT_PLANNER_CONFIG`` points at another file and
``SPRINT_PLANNER_MAX_ENGINEERS`` wins over ``planner.max_engineers``.
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from .heuristics import DEFAULT_HEURISTICS, Heuristics
from .scheduler import DEFAULT_MAX_ENGINEERS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".sprint.yml"

# heuristics keys that may be replaced from YAML, each a list of strings
_LIST_HEURISTICS = (
    "high_complexity_keywords",
    "low_complexity_keywords",
    "prerequisite_phrases",
    "stop_words",
)


@dataclass
class PlannerConfig:
    model_overrides: dict[str, str] = field(default_factory=dict)
    max_engineers: int = DEFAULT_MAX_ENGINEERS
    heuristics: Heuristics = DEFAULT_HEURISTICS


def resolve_config_path(path: str | None = None) -> Path:
    if path:
        return Path(path)
    return Path(os.environ.get("SPRINT_PLANNER_CONFIG", DEFAULT_CONFIG_FILE))


def read_config_file(path: Path) -> dict:
    """Load the YAML mapping at ``path``; an unusable file counts as empty."""
    if not path.exists():
        logger.debug("No planner config at %s, using defaults", path)
        return {}

    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable planner config %s: %s", path, e)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def parse_model_overrides(data: dict) -> dict[str, str]:
    overrides = _section(_section(data, "models"), "overrides")
    # YAML reads unquoted ids as ints
    return {str(task_id): str(model) for task_id, model in overrides.items() if model}


def parse_heuristics(data: dict, base: Heuristics = DEFAULT_HEURISTICS) -> Heuristics:
    section = _section(data, "heuristics")
    changes = {}
    for key, value in section.items():
        if key not in _LIST_HEURISTICS:
            raise ValueError(
                f"Unknown heuristics key '{key}'. Expected one of: {', '.join(_LIST_HEURISTICS)}"
            )
        if not isinstance(value, list):
            raise ValueError(f"heuristics.{key} must be a list of strings")
        values = [str(v).lower() for v in value]
        changes[key] = frozenset(values) if key == "stop_words" else tuple(values)
    return replace(base, **changes) if changes else base


def parse_max_engineers(data: dict) -> int:
    raw = os.environ.get("SPRINT_PLANNER_MAX_ENGINEERS")
    if raw is None:
        raw = _section(data, "planner").get("max_engineers", DEFAULT_MAX_ENGINEERS)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"max_engineers must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"max_engineers must be at least 1, got {value}")
    return value


def load_model_overrides(path: str | None = None) -> dict[str, str]:
    return parse_model_overrides(read_config_file(resolve_config_path(path)))


def load_config(path: str | None = None) -> PlannerConfig:
    config_path = resolve_config_path(path)
    data = read_config_file(config_path)
    return PlannerConfig(
        model_overrides=parse_model_overrides(data),
        max_engineers=parse_max_engineers(data),
        heuristics=parse_heuristics(data),
    )
