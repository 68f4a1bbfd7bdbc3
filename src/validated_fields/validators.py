"""The catalog of leaf validators and the ``And`` combinator."""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any
from urllib.parse import urlsplit

from validated_fields.capabilities import (
    InputResponder,
    Validating,
    ValidationPreprocessing,
    allows_update,
    preprocessors_in,
    process_text,
    replacement_after_add,
    replacement_after_del,
    responders_in,
    should_stop,
    unprocess_text,
)
from validated_fields.numbers import NumberStyle
from validated_fields.problems import Problem, ProblemKind, compose_problems
from validated_fields.template import only_digits


DIGITS = "1234567890"
HEX_UPPER = "0123456789ABCDEF"
# Tab and the Unicode space separators (category Zs); line breaks are kept.
SPACES = "\t \u00a0\u1680" + "".join(map(chr, range(0x2000, 0x200B))) + "\u202f\u205f\u3000"

EMAIL_PATTERN = (
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"\.[a-zA-Z0-9](?:[a-zA-Z0-9-\.]{0,61}[a-zA-Z0-9])?$"
)


@dataclass(frozen=True)
class Trim(Validating, ValidationPreprocessing):
    """Strips surrounding spaces and tabs on the way in and out; never invalid."""

    def has_problem(self, text: str) -> str | None:
        return None

    def process(self, marked_up: str) -> str:
        return marked_up.strip(SPACES)

    def unprocess(self, stored: str) -> str:
        return stored.strip(SPACES)


@dataclass(frozen=True)
class Length(Validating, InputResponder):
    """Bounds the number of characters.

    Edits that would exceed ``max`` are refused, and editing ends by itself
    once the text is exactly ``max`` characters long.
    """

    min: int | None = None
    max: int | None = None

    def __post_init__(self) -> None:
        if self.min is None and self.max is None:
            raise ValueError("Length needs a min, a max, or both")

    @classmethod
    def exact(cls, length: int) -> Length:
        """A length that must be exactly *length* characters."""
        return cls(min=length, max=length)

    def has_problem(self, text: str) -> str | None:
        n = len(text)
        if self.min is not None and n < self.min:
            return Problem("too short", ProblemKind.LENGTH)
        if self.max is not None and n > self.max:
            return Problem("too long", ProblemKind.LENGTH)
        return None

    def should_allow_update_to(self, updated: str, added: str) -> bool:
        return self.max is None or len(updated) <= self.max

    def should_stop_with_value(self, value: str) -> bool:
        return self.max is not None and len(value) == self.max


@dataclass(frozen=True)
class CharsetOnly(Validating, InputResponder, ValidationPreprocessing):
    """Only characters from ``chars`` are allowed."""

    chars: str

    @classmethod
    def digits(cls) -> CharsetOnly:
        """Only the digits 0-9."""
        return cls(DIGITS)

    def has_problem(self, text: str) -> str | None:
        not_allowed = "".join(ch for ch in text if ch not in self.chars)
        if not_allowed:
            return Problem(f"invalid character(s): `{not_allowed}`", ProblemKind.CHARSET)
        return None

    def should_allow_update_to(self, updated: str, added: str) -> bool:
        return self.has_problem(updated) is None

    def process(self, marked_up: str) -> str:
        return "".join(ch for ch in marked_up if ch in self.chars)

    def unprocess(self, stored: str) -> str:
        return stored


class ComparableRange(Validating):
    """Interprets the text as a comparable value and checks it against bounds.

    Bounds are inclusive (``minimum``, ``maximum``), exclusive
    (``greater_than``, ``less_than``) or both at once (``equal_to``).  The text
    is converted with ``value_type``, which defaults to the type of the
    bounds, so ``ComparableRange(maximum=Decimal("9.99"))`` parses Decimals.
    """

    def __init__(
        self,
        *,
        minimum: Any = None,
        maximum: Any = None,
        greater_than: Any = None,
        less_than: Any = None,
        equal_to: Any = None,
        value_type: Callable[[str], Any] | None = None,
    ) -> None:
        if minimum is not None and greater_than is not None:
            raise ValueError("Give either minimum or greater_than, not both")
        if maximum is not None and less_than is not None:
            raise ValueError("Give either maximum or less_than, not both")
        if equal_to is not None:
            if any(b is not None for b in (minimum, maximum, greater_than, less_than)):
                raise ValueError("equal_to cannot be combined with other bounds")
            minimum = maximum = equal_to

        self._lower = minimum if minimum is not None else greater_than
        self._lower_inclusive = greater_than is None
        self._upper = maximum if maximum is not None else less_than
        self._upper_inclusive = less_than is None
        if self._lower is None and self._upper is None:
            raise ValueError("ComparableRange needs at least one bound")

        if value_type is None:
            bound = self._lower if self._lower is not None else self._upper
            value_type = type(bound)
        self._value_type = value_type
        self._numeric = isinstance(value_type, type) and issubclass(value_type, (int, float, Decimal))

    def __repr__(self) -> str:
        lower = "[" if self._lower_inclusive else "("
        upper = "]" if self._upper_inclusive else ")"
        return f"ComparableRange({lower}{self._lower!r}, {self._upper!r}{upper})"

    def _convert(self, text: str) -> Any:
        if self._numeric and (text != text.strip() or "_" in text):
            return None
        try:
            value = self._value_type(text)
            # NaN compares false with everything; infinities are not amounts.
            if value != value or value in (math.inf, -math.inf):
                return None
        except (ValueError, TypeError, ArithmeticError):
            return None
        return value

    def has_problem(self, text: str) -> str | None:
        value = self._convert(text)
        if value is None:
            return Problem(f"cannot interpret `{text}` as comparable value", ProblemKind.PARSE)
        if self._lower is not None:
            if value < self._lower or (not self._lower_inclusive and value == self._lower):
                return Problem("too small", ProblemKind.RANGE)
        if self._upper is not None:
            if value > self._upper or (not self._upper_inclusive and value == self._upper):
                return Problem("too big", ProblemKind.RANGE)
        return None


@dataclass(frozen=True)
class Pattern(Validating):
    """Valid when the regular expression matches somewhere in the text."""

    regex: str

    def has_problem(self, text: str) -> str | None:
        if re.search(self.regex, text):
            return None
        return Problem("is invalid", ProblemKind.PATTERN)


@dataclass(frozen=True)
class Email(Validating):
    """An e-mail address."""

    def has_problem(self, text: str) -> str | None:
        return Pattern(EMAIL_PATTERN).has_problem(text)


@dataclass(frozen=True)
class ValidURL(Validating):
    """Text that can be interpreted as a URL."""

    def has_problem(self, text: str) -> str | None:
        if not text or any(ch.isspace() or not ch.isprintable() for ch in text):
            return Problem("Unable to make valid URL", ProblemKind.UNPARSEABLE_URL)
        try:
            urlsplit(text)
        except ValueError:
            return Problem("Unable to make valid URL", ProblemKind.UNPARSEABLE_URL)
        return None


@dataclass(frozen=True)
class ScaledDecimal(Validating, InputResponder):
    """An amount typed as digits only, with an implied decimal point.

    Typing ``1``, ``2``, ``3`` with two places shows ``0.01``, ``0.12``,
    ``1.23``, the way a cash register fills in cents.
    """

    places: int

    _ALLOWED = DIGITS + "."

    def has_problem(self, text: str) -> str | None:
        no_symbol = "".join(ch for ch in text if ch in self._ALLOWED)
        try:
            Decimal(no_symbol)
        except InvalidOperation:
            return Problem("Invalid amount", ProblemKind.PARSE)
        return None

    def replacement_for_after_add(self, value: str) -> str | None:
        digits = only_digits(value)
        if not digits:
            return None
        digits = digits.lstrip("0").zfill(self.places + 1)
        if not self.places:
            return digits
        return f"{digits[:-self.places]}.{digits[-self.places:]}"


@dataclass(frozen=True)
class FormattedNumber(Validating, InputResponder):
    """A number shown in a ``NumberStyle``, reformatted after every addition."""

    style: NumberStyle

    def has_problem(self, text: str) -> str | None:
        if self.style.parse(text) is None:
            return Problem(f"cannot make a number for {text}", ProblemKind.PARSE)
        return None

    def replacement_for_after_add(self, value: str) -> str | None:
        number = self.style.parse(value)
        return self.style.format(number if number is not None else Decimal(0))


class And(Validating, InputResponder, ValidationPreprocessing):
    """Logical conjunction of several validators.

    Problems of all failing members are joined with newlines.  Keystrokes are
    routed through the members exactly as an edit session routes them through
    its own list: the first rejection vetoes, the first rewrite wins, and any
    member asking to stop ends editing.
    """

    def __init__(self, *validators: Validating) -> None:
        self.validators: tuple[Validating, ...] = tuple(validators)

    def __repr__(self) -> str:
        members = ", ".join(repr(v) for v in self.validators)
        return f"And({members})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, And):
            return NotImplemented
        return self.validators == other.validators

    def __hash__(self) -> int:
        return hash(self.validators)

    @property
    def _responders(self) -> list[InputResponder]:
        return responders_in(self.validators)

    def has_problem(self, text: str) -> str | None:
        return compose_problems(v.has_problem(text) for v in self.validators)

    def should_allow_update_to(self, updated: str, added: str) -> bool:
        return allows_update(self._responders, updated, added)

    def should_stop_with_value(self, value: str) -> bool:
        return should_stop(self._responders, value)

    def replacement_for_after_add(self, value: str) -> str | None:
        return replacement_after_add(self._responders, value)

    def replacement_for_after_del(self, value: str) -> str | None:
        return replacement_after_del(self._responders, value)

    def process(self, marked_up: str) -> str:
        return process_text(preprocessors_in(self.validators), marked_up)

    def unprocess(self, stored: str) -> str:
        return unprocess_text(preprocessors_in(self.validators), stored)
