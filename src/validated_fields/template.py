"""Digit templates for structured input such as phone numbers and dates.

A template pattern uses ``d`` for a digit slot; any other character is a
literal separator, e.g. ``"ddd-ddd-dddd"`` or ``"(ddd) ddd-dddd"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from validated_fields.capabilities import InputResponder, Validating, ValidationPreprocessing
from validated_fields.problems import Problem, ProblemKind

logger = logging.getLogger(__name__)

DIGIT_SLOT = "d"
_DIGITS = frozenset("0123456789")


def only_digits(value: str) -> str:
    """Return the ASCII digits of *value*, in order."""
    return "".join(ch for ch in value if ch in _DIGITS)


def fill_in_template(pattern: str, value: str, greedy: bool = True) -> str:
    """Pour the digits of *value* into *pattern* from left to right.

    Building stops when the digits run out on a digit slot.  Literals are
    always copied in greedy mode; in non-greedy mode a literal is copied only
    while digits remain, so the result never ends in a separator.

    Args:
        pattern: Template pattern, ``d`` marking digit slots.
        value: Any text; only its digits are used.
        greedy: Whether to append literals that follow the last digit.

    Returns:
        The (possibly partial) formatted string.
    """
    digits = list(only_digits(value))
    digits.reverse()
    built: list[str] = []
    for token in pattern:
        if token == DIGIT_SLOT:
            if not digits:
                break
            built.append(digits.pop())
        else:
            if not greedy and not digits:
                break
            built.append(token)
    return "".join(built)


@dataclass(frozen=True)
class StructuredTemplate(Validating, ValidationPreprocessing, InputResponder):
    """Validator, preprocessor and responder for a digit template.

    Stored values are digits only; displayed values carry the template's
    separators.  Typing is restricted to digits and reformatted after every
    keystroke, and editing ends by itself once every slot is filled.
    """

    pattern: str

    @property
    def placeholder_count(self) -> int:
        """Number of digit slots in the pattern."""
        return self.pattern.count(DIGIT_SLOT)

    def fill_in_template(self, value: str, greedy: bool = True) -> str:
        """Format the digits of *value* with this template."""
        return fill_in_template(self.pattern, value, greedy)

    def has_problem(self, text: str) -> str | None:
        digit_count = len(only_digits(text))
        if digit_count == self.placeholder_count:
            return None
        if digit_count > self.placeholder_count:
            return Problem("too many digits", ProblemKind.LENGTH)
        return Problem("incomplete", ProblemKind.INCOMPLETE_TEMPLATE)

    def process(self, marked_up: str) -> str:
        return only_digits(marked_up)

    def unprocess(self, stored: str) -> str:
        return self.fill_in_template(stored, greedy=True)

    def should_allow_update_to(self, updated: str, added: str) -> bool:
        if len(updated) > len(self.pattern):
            logger.debug("Template %r rejects %r: longer than pattern", self.pattern, updated)
            return False
        return all(ch in _DIGITS for ch in added)

    def replacement_for_after_add(self, value: str) -> str | None:
        return self.fill_in_template(value, greedy=True)

    def replacement_for_after_del(self, value: str) -> str | None:
        # Non-greedy: a trailing separator goes with the last digit.
        return self.fill_in_template(value, greedy=False)

    def should_stop_with_value(self, value: str) -> bool:
        return (
            len(only_digits(value)) == self.placeholder_count
            and self.has_problem(value) is None
        )
