"""Per-field configuration: which validators apply and how the field is entered."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from validated_fields.bundle import ValidationBundle
from validated_fields.capabilities import (
    InputResponder,
    Validating,
    ValidationPreprocessing,
    preprocessors_in,
    responders_in,
)
from validated_fields.problems import compose_problems


@dataclass(frozen=True)
class FieldValidator:
    """Everything an edit session needs to know about one field.

    One-off validators come first, then the bundle's validators; that order
    decides which responder gets the first say on every keystroke.  A field
    with fixed ``choices`` or marked ``readonly`` never starts a text session.
    """

    bundle: ValidationBundle | None = None
    one_off: tuple[Validating, ...] = ()
    choices: tuple[str, ...] | None = None
    readonly: bool = False

    @classmethod
    def ensuring(cls, bundle: ValidationBundle) -> FieldValidator:
        """A field validated by *bundle*."""
        return cls(bundle=bundle)

    @classmethod
    def options(cls, values: Iterable[str]) -> FieldValidator:
        """A field whose value is picked from *values* instead of typed."""
        return cls(choices=tuple(values))

    @classmethod
    def with_validators(cls, *validators: Validating) -> FieldValidator:
        """A field validated by one-off *validators* and no bundle."""
        return cls(one_off=validators)

    def adding(self, *validators: Validating) -> FieldValidator:
        """Return a copy with *validators* appended to the one-off validators."""
        return replace(self, one_off=self.one_off + validators)

    @property
    def validators(self) -> list[Validating]:
        """All validators, one-off validators first."""
        combined = list(self.one_off)
        if self.bundle is not None:
            combined.extend(self.bundle.validators)
        return combined

    @property
    def responders(self) -> list[InputResponder]:
        """Validators that respond to keystrokes, in order."""
        return responders_in(self.validators)

    @property
    def preprocessors(self) -> list[ValidationPreprocessing]:
        """Validators that transform text on entering and leaving edit mode, in order."""
        return preprocessors_in(self.validators)

    @property
    def accepts_text_entry(self) -> bool:
        """Whether the field is edited by typing."""
        return not self.readonly and self.choices is None

    def problem_for(self, text: str) -> str | None:
        """Return every validator's problem with *text*, newline-joined, or None."""
        return compose_problems(v.has_problem(text) for v in self.validators)


READ_ONLY = FieldValidator(readonly=True)
