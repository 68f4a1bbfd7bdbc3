"""Validation problem reasons and their kinds."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class ProblemKind(Enum):
    """Stable category of a validation problem."""

    PARSE = "parse"
    LENGTH = "length"
    CHARSET = "charset"
    RANGE = "range"
    PATTERN = "pattern"
    INCOMPLETE_TEMPLATE = "incomplete_template"
    UNPARSEABLE_URL = "unparseable_url"


class Problem(str):
    """A human-readable validation reason that remembers its kind.

    ``Problem`` is a plain ``str`` for every other purpose, so it compares
    equal to its message and can be joined with other reasons.
    """

    kind: ProblemKind

    def __new__(cls, message: str, kind: ProblemKind) -> Problem:
        problem = super().__new__(cls, message)
        problem.kind = kind
        return problem

    def __repr__(self) -> str:
        return f"Problem({str(self)!r}, {self.kind.name})"


def compose_problems(problems: Iterable[str | None]) -> str | None:
    """Join the non-``None`` reasons with newlines, keeping their order.

    Args:
        problems: Reasons as returned by ``has_problem``, ``None`` for valid.

    Returns:
        The newline-joined reasons, or None when every entry is None.
    """
    reasons = [p for p in problems if p is not None]
    if not reasons:
        return None
    if len(reasons) == 1:
        return reasons[0]
    return "\n".join(reasons)
