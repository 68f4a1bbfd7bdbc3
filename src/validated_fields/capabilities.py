"""Capability contracts a validator may implement, and the reducers over them.

Every validator is ``Validating``.  It may additionally be an
``InputResponder`` (per-keystroke accept/reject/rewrite decisions) and/or a
``ValidationPreprocessing`` (round trip between stored and displayed text).
Consumers ask for a capability with ``as_responder`` / ``as_preprocessor``,
which answer ``None`` rather than failing when the capability is absent.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence


class Validating(ABC):
    """Something that decides whether a chunk of text is acceptable."""

    @abstractmethod
    def has_problem(self, text: str) -> str | None:
        """Return a human-readable reason when *text* is invalid, else None."""

    def is_valid(self, text: str) -> bool:
        """Return True when *text* has no problem."""
        return self.has_problem(text) is None


class InputResponder:
    """Makes decisions on what to do when someone types, pastes or deletes.

    All hooks have permissive defaults, so a responder only overrides the
    decisions it cares about.
    """

    def should_allow_update_to(self, updated: str, added: str) -> bool:
        """Whether adding *added* may produce the field text *updated*."""
        return True

    def should_stop_with_value(self, value: str) -> bool:
        """Whether editing should end automatically with *value*."""
        return False

    def replacement_for_after_add(self, value: str) -> str | None:
        """Optionally rewrite the field text after the user adds text."""
        return None

    def replacement_for_after_del(self, value: str) -> str | None:
        """Optionally rewrite the field text after the user removes text."""
        return None


class ValidationPreprocessing(ABC):
    """Removes markup (whitespace, symbols, separators) before editing and storage."""

    @abstractmethod
    def process(self, marked_up: str) -> str:
        """Remove markup to produce the raw value."""

    @abstractmethod
    def unprocess(self, stored: str) -> str:
        """Add markup to a stored value to produce the display value."""


def as_responder(validator: object) -> InputResponder | None:
    """Return *validator* if it can respond to input, otherwise None."""
    return validator if isinstance(validator, InputResponder) else None


def as_preprocessor(validator: object) -> ValidationPreprocessing | None:
    """Return *validator* if it preprocesses text, otherwise None."""
    return validator if isinstance(validator, ValidationPreprocessing) else None


def responders_in(validators: Iterable[object]) -> list[InputResponder]:
    """Return the input responders among *validators*, in order."""
    return [r for r in map(as_responder, validators) if r is not None]


def preprocessors_in(validators: Iterable[object]) -> list[ValidationPreprocessing]:
    """Return the preprocessors among *validators*, in order."""
    return [p for p in map(as_preprocessor, validators) if p is not None]


def allows_update(responders: Sequence[InputResponder], updated: str, added: str) -> bool:
    """Return False as soon as one responder rejects the addition."""
    return all(r.should_allow_update_to(updated, added) for r in responders)


def replacement_after_add(responders: Sequence[InputResponder], value: str) -> str | None:
    """Return the first rewrite offered after an addition, or None."""
    for responder in responders:
        tweaked = responder.replacement_for_after_add(value)
        if tweaked is not None:
            return tweaked
    return None


def replacement_after_del(responders: Sequence[InputResponder], value: str) -> str | None:
    """Return the first rewrite offered after a deletion, or None."""
    for responder in responders:
        tweaked = responder.replacement_for_after_del(value)
        if tweaked is not None:
            return tweaked
    return None


def should_stop(responders: Sequence[InputResponder], value: str) -> bool:
    """Return True if any responder wants editing to end with *value*."""
    return any(r.should_stop_with_value(value) for r in responders)


def process_text(preprocessors: Sequence[ValidationPreprocessing], text: str) -> str:
    """Run *text* through every preprocessor's ``process`` in order."""
    for preprocessor in preprocessors:
        text = preprocessor.process(text)
    return text


def unprocess_text(preprocessors: Sequence[ValidationPreprocessing], text: str) -> str:
    """Run *text* through every preprocessor's ``unprocess`` in order."""
    for preprocessor in preprocessors:
        text = preprocessor.unprocess(text)
    return text
