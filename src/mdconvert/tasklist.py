"""
Task-list preprocessing.

Normalizes checkbox-list syntax and separates lists from surrounding
paragraphs with blank lines so the engine recognizes where a list starts
and ends.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# "-[]", "-[ ]", "-[x]", "-[X]" written without the space after the dash
COMPACT_CHECKBOX_PATTERN = re.compile(r"^(\s*)-\[([ xX]?)\](?=\s|$)")

LIST_ITEM_PATTERN = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+")
# Lines starting any block construct; everything else is paragraph text
BLOCK_MARKER_PATTERN = re.compile(r"^(?:\s*[-*+]\s+|\s*#+\s+|\s*```|\s*~~~|\s*>|\s*\d+\.\s+)")
FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")

TASK_PATTERN = re.compile(r"^[ \t]*[-*+][ \t]+\[[ xX]\][ \t]+\S")
COMPLETED_TASK_PATTERN = re.compile(r"^[ \t]*[-*+][ \t]+\[[xX]\][ \t]+\S")

TASK_LIST_CSS = (
    ".task-list{margin:4px 0;padding-left:20px}"
    ".task-list li{margin:2px 0}"
    ".task-list input[type='checkbox']{margin-right:6px;width:14px;height:14px;cursor:pointer}"
    ".task-list li.completed,"
    ".task-list li:has(input[type='checkbox'][checked]),"
    "li.task-list-item:has(input[type='checkbox'][checked]){text-decoration:line-through;opacity:.7}"
)


@dataclass(frozen=True)
class TaskListStats:
    """Checkbox counts for a document."""

    total_tasks: int = 0
    completed_tasks: int = 0
    uncompleted_tasks: int = 0
    completion_percentage: float = 0.0

    def __str__(self) -> str:
        if self.total_tasks == 0:
            return "No tasks"
        return f"Tasks: {self.completed_tasks}/{self.total_tasks} ({self.completion_percentage:.1f}%)"


def _expand_checkbox(match: re.Match) -> str:
    mark = match.group(2) or " "
    return f"{match.group(1)}- [{mark}]"


def is_list_line(line: str) -> bool:
    """Check whether a line starts an ordered or unordered list item."""
    return bool(LIST_ITEM_PATTERN.match(line))


def is_text_line(line: str) -> bool:
    """Check whether a line is plain paragraph text."""
    return bool(line.strip()) and not BLOCK_MARKER_PATTERN.match(line)


def needs_blank_line(current: str, following: str) -> bool:
    """Decide whether a blank line must separate two adjacent lines."""
    if not current.strip() or not following.strip():
        return False
    if is_text_line(current) and is_list_line(following):
        return True
    return is_list_line(current) and is_text_line(following)


def normalize_task_lists(text: str) -> str:
    """
    Normalize checkbox markers and list/paragraph separation.

    Every line is right-trimmed and trailing blank lines are dropped.
    Lines inside fenced code blocks are never separated. The result is
    stable: normalizing it again returns it unchanged.
    """
    if not text:
        return text

    lines = [COMPACT_CHECKBOX_PATTERN.sub(_expand_checkbox, line.rstrip()) for line in text.split("\n")]

    result = []
    in_fence = False
    for i, line in enumerate(lines):
        result.append(line)
        if FENCE_PATTERN.match(line):
            in_fence = not in_fence
            continue
        if in_fence or i + 1 >= len(lines):
            continue
        following = lines[i + 1]
        if FENCE_PATTERN.match(following):
            continue
        if needs_blank_line(line, following):
            result.append("")

    return "\n".join(result).rstrip()


def compute_stats(text: str) -> TaskListStats:
    """Count checkbox items and how many are completed."""
    if not text:
        return TaskListStats()

    lines = text.split("\n")
    total = sum(1 for line in lines if TASK_PATTERN.match(line))
    completed = sum(1 for line in lines if COMPLETED_TASK_PATTERN.match(line))

    return TaskListStats(
        total_tasks=total,
        completed_tasks=completed,
        uncompleted_tasks=total - completed,
        completion_percentage=round(completed / total * 100, 1) if total else 0.0,
    )
