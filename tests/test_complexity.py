"""Tests for complexity scoring."""
import pytest

from sprint_planner.complexity import (
    estimate_file_touches,
    score_keywords,
    score_task_complexity,
    tier_from_score,
)
from sprint_planner.heuristics import Heuristics
from sprint_planner.parser import Task


def make_task(**overrides) -> Task:
    fields = {"id": "1", "subject": "Do something", "owner": "engineer"}
    fields.update(overrides)
    return Task(**fields)


AUTH_REFACTOR = (
    "Migrate the existing session-based authentication to JWT tokens. Refactor all "
    "protected routes, update middleware, redesign the token refresh pipeline, and "
    "integrate with the new distributed session store. Changes span across the "
    "entire codebase."
)


class TestScoreTaskComplexity:
    def test_typo_fix_is_simple(self):
        result = score_task_complexity(
            make_task(subject="Fix typo in README", description="Small rename")
        )
        assert result.tier == "simple"
        assert result.score == 1
        assert result.reason == "short description, single file, low-complexity keyword"

    def test_auth_refactor_is_complex(self):
        result = score_task_complexity(make_task(
            subject="Refactor authentication architecture",
            description=AUTH_REFACTOR,
            blocked_by=("1", "2", "3"),
        ))
        assert result.tier == "complex"
        assert result.score == 8
        assert result.reason == "single file, multiple high-complexity keywords, 3 dependencies"

    def test_default_estimate_when_nothing_fires(self):
        result = score_task_complexity(make_task(
            subject="Wire the new handlers together",
            description=(
                "Move request parsing out of server/index.ts into server/state.ts so "
                "both entry points share one code path for the parser"
            ),
        ))
        assert result.score == 5
        assert result.tier == "medium"
        assert result.reason == "default estimate"

    def test_long_description(self):
        result = score_task_complexity(
            make_task(subject="Implement feature", description=" ".join(["word"] * 90))
        )
        assert result.score == 6
        assert result.reason == "long description, single file"

    def test_moderate_description(self):
        result = score_task_complexity(
            make_task(subject="Implement feature", description=" ".join(["word"] * 50))
        )
        assert result.score == 5
        assert result.reason == "moderate description length, single file"

    def test_many_file_references(self):
        result = score_task_complexity(
            make_task(subject="Touch files", description="Update a.py b.py c.py d.py e.py")
        )
        assert result.score == 6
        assert result.reason == "short description, ~5 files referenced"

    def test_multi_file_phrases_count_double(self):
        result = score_task_complexity(
            make_task(subject="Restyle headers", description="Update every page across the codebase")
        )
        assert result.score == 5
        assert result.reason == "short description, ~4 files referenced"

    def test_one_or_two_dependencies(self):
        result = score_task_complexity(make_task(subject="Fix typo", blocked_by=("1", "2")))
        assert result.score == 2
        assert "2 dependency" in result.reason

    def test_missing_description_is_empty_text(self):
        result = score_task_complexity(make_task(subject="Fix typo", description=None))
        assert result.score == 1

    def test_score_clamped_at_ten(self):
        description = "Touch a.py b.py c.py d.py e.py. " + " ".join(["word"] * 80)
        result = score_task_complexity(make_task(
            subject="Refactor database schema",
            description=description,
            blocked_by=("1", "2", "3"),
        ))
        assert result.score == 10
        assert result.tier == "complex"

    def test_pure_and_deterministic(self):
        task = make_task(subject="Refactor authentication architecture", description=AUTH_REFACTOR)
        assert score_task_complexity(task) == score_task_complexity(task)
        assert task.description == AUTH_REFACTOR

    def test_custom_heuristics(self):
        task = make_task(subject="Add pagination to the list")
        default = score_task_complexity(task)
        tuned = score_task_complexity(task, Heuristics(high_complexity_keywords=("pagination",)))
        assert tuned.score == default.score + 1
        assert "high-complexity keyword" in tuned.reason


class TestSignals:
    def test_file_touches_floor_at_one(self):
        assert estimate_file_touches("no files here") == 1

    def test_file_touches_counts_refs(self):
        assert estimate_file_touches("edit server/index.ts and dashboard/src/App.tsx") == 2

    def test_keywords_cancel_out(self):
        assert score_keywords("refactor the changelog") == 0

    def test_keywords_case_insensitive(self):
        assert score_keywords("REFACTOR Database") == 2


class TestTierFromScore:
    @pytest.mark.parametrize("score,tier", [
        (1, "simple"), (3, "simple"),
        (4, "medium"), (7, "medium"),
        (8, "complex"), (10, "complex"),
    ])
    def test_step_function(self, score, tier):
        assert tier_from_score(score) == tier
