from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from .heuristics import DEFAULT_HEURISTICS, Heuristics

if TYPE_CHECKING:
    from .parser import Task

Tier = Literal["simple", "medium", "complex"]

BASELINE_SCORE = 5
MIN_SCORE = 1
MAX_SCORE = 10


@dataclass(frozen=True)
class ComplexityResult:
    score: int
    tier: Tier
    reason: str


def count_words(text: str) -> int:
    return len(text.split())


def estimate_file_touches(text: str, heuristics: Heuristics = DEFAULT_HEURISTICS) -> int:
    """Rough count of files a task will touch, never less than one."""
    file_refs = len(heuristics.file_ref_pattern.findall(text))
    multi_file_hits = sum(1 for pattern in heuristics.multi_file_patterns if pattern.search(text))
    return max(1, file_refs + multi_file_hits * 2)


def score_keywords(text: str, heuristics: Heuristics = DEFAULT_HEURISTICS) -> int:
    lower = text.lower()
    high_hits = sum(1 for kw in heuristics.high_complexity_keywords if kw in lower)
    low_hits = sum(1 for kw in heuristics.low_complexity_keywords if kw in lower)
    return high_hits - low_hits


def tier_from_score(score: int) -> Tier:
    if score <= 3:
        return "simple"
    if score <= 7:
        return "medium"
    return "complex"


def score_task_complexity(
    task: "Task",
    heuristics: Heuristics = DEFAULT_HEURISTICS,
) -> ComplexityResult:
    """Score a task 1-10 from its text and declared dependencies.

    Each heuristic adds or removes points from a neutral baseline and records
    why in the reason string, in the order below.
    """
    text = task.text
    word_count = count_words(text)
    file_touches = estimate_file_touches(text, heuristics)
    keyword_delta = score_keywords(text, heuristics)
    dependency_count = len(task.blocked_by)

    reasons = []
    raw_score = BASELINE_SCORE

    if word_count > 80:
        raw_score += 2
        reasons.append("long description")
    elif word_count > 40:
        raw_score += 1
        reasons.append("moderate description length")
    elif word_count < 15:
        raw_score -= 1
        reasons.append("short description")

    if file_touches >= 5:
        raw_score += 2
        reasons.append(f"~{file_touches} files referenced")
    elif file_touches >= 3:
        raw_score += 1
        reasons.append(f"~{file_touches} files referenced")
    elif file_touches == 1:
        raw_score -= 1
        reasons.append("single file")

    if keyword_delta >= 2:
        raw_score += 2
        reasons.append("multiple high-complexity keywords")
    elif keyword_delta == 1:
        raw_score += 1
        reasons.append("high-complexity keyword")
    elif keyword_delta <= -1:
        raw_score -= 2
        reasons.append("low-complexity keyword")

    if dependency_count >= 3:
        raw_score += 2
        reasons.append(f"{dependency_count} dependencies")
    elif dependency_count >= 1:
        raw_score += 1
        reasons.append(f"{dependency_count} dependency")

    score = min(MAX_SCORE, max(MIN_SCORE, raw_score))
    return ComplexityResult(
        score=score,
        tier=tier_from_score(score),
        reason=", ".join(reasons) if reasons else "default estimate",
    )
