"""Lookup tables behind complexity scoring and dependency inference.

Scoring and inference read every keyword list, phrase set and pattern from a
``Heuristics`` instance, so a project can tune them from ``.sprint.yml``
(see ``config.py``) and tests can swap them without touching control flow.
"""

import re
from dataclasses import dataclass

# Keywords that signal high-complexity work
HIGH_COMPLEXITY_KEYWORDS = (
    "refactor",
    "migrate",
    "migration",
    "architecture",
    "worktree",
    "dashboard",
    "component library",
    "rewrite",
    "redesign",
    "integrate",
    "integration",
    "authentication",
    "authorization",
    "database",
    "schema",
    "pipeline",
    "infrastructure",
    "deployment",
    "multi-",
    "distributed",
    "concurrent",
    "async",
    "websocket",
    "streaming",
    "encryption",
    "security audit",
)

# Keywords that signal low-complexity work
LOW_COMPLEXITY_KEYWORDS = (
    "add comment",
    "fix typo",
    "update readme",
    "rename",
    "update docs",
    "fix lint",
    "formatting",
    "whitespace",
    "changelog",
    "bump version",
    "update version",
    "cleanup",
    "remove unused",
    "add log",
    "minor fix",
    "typo",
)

# Phrases that suggest many files are touched
MULTI_FILE_PATTERNS = (
    re.compile(r"\b(all|every|each)\s+(file|component|module|page|route|endpoint)", re.IGNORECASE),
    re.compile(r"\bmultiple\s+files?\b", re.IGNORECASE),
    re.compile(r"\bacross\s+the\s+(codebase|project|app)\b", re.IGNORECASE),
    re.compile(r"\bend[\s-]to[\s-]end\b", re.IGNORECASE),
    re.compile(r"\bfull[\s-]stack\b", re.IGNORECASE),
)

# Phrases signalling a task builds on another
PREREQUISITE_PHRASES = ("from task", "using the", "based on", "built on")

STOP_WORDS = frozenset(
    {"the", "a", "an", "in", "for", "of", "to", "and", "on", "with", "is", "are", "at", "by"}
)

# File refs like "server/index.ts", "worktree.ts"
FILE_REF_PATTERN = re.compile(r"[\w/-]+\.\w{2,4}", re.ASCII)

# Agent handles the orchestrator files as tasks for its own bookkeeping
INTERNAL_SUBJECT_PATTERN = re.compile(r"sprint-(manager|pm|engineer(-\d+)?)", re.IGNORECASE)


@dataclass(frozen=True)
class Heuristics:
    high_complexity_keywords: tuple[str, ...] = HIGH_COMPLEXITY_KEYWORDS
    low_complexity_keywords: tuple[str, ...] = LOW_COMPLEXITY_KEYWORDS
    multi_file_patterns: tuple[re.Pattern, ...] = MULTI_FILE_PATTERNS
    prerequisite_phrases: tuple[str, ...] = PREREQUISITE_PHRASES
    stop_words: frozenset[str] = STOP_WORDS
    file_ref_pattern: re.Pattern = FILE_REF_PATTERN
    internal_subject_pattern: re.Pattern = INTERNAL_SUBJECT_PATTERN

    def extract_file_refs(self, text: str) -> set[str]:
        return {ref.lower() for ref in self.file_ref_pattern.findall(text)}

    def significant_tokens(self, text: str) -> set[str]:
        return {
            token
            for token in re.split(r"\W+", text.lower())
            if len(token) > 2 and token not in self.stop_words
        }


DEFAULT_HEURISTICS = Heuristics()
