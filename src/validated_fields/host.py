"""The interface an edit session expects from the widget that owns the text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from validated_fields.bundle import Alignment, Capitalization, KeyboardKind, ValidationBundle
from validated_fields.registry import GeometryChange


class EditableField(Protocol):
    """A single editable text field as seen by an ``EditSession``."""

    text: str
    placeholder: str

    def apply_presentation(self, bundle: ValidationBundle) -> None:
        """Apply the bundle's presentation hints; must be idempotent."""

    def select_all(self) -> None:
        """Select the whole text."""

    def show_problem(self, problem: str | None) -> None:
        """Show (or with None, clear) the error indicator."""

    def relinquish_focus(self) -> None:
        """Stop being the focused field after the session ended itself."""

    def adjust_for_geometry(self, change: GeometryChange) -> None:
        """Keep the field visible after the visible area changed."""


@dataclass
class TextBuffer:
    """An in-memory ``EditableField`` for headless use and tests.

    Presentation hints are recorded as plain attributes so callers can
    inspect what a real widget would have displayed.
    """

    text: str = ""
    placeholder: str = ""
    keyboard: KeyboardKind = KeyboardKind.DEFAULT
    prefix: str | None = None
    suffix: str | None = None
    alignment: Alignment = Alignment.LEFT
    capitalization: Capitalization = Capitalization.NONE
    selected: bool = False
    problem: str | None = None
    focused: bool = True
    geometry_changes: list[GeometryChange] = field(default_factory=list)

    def apply_presentation(self, bundle: ValidationBundle) -> None:
        if bundle.keyboard is not None:
            self.keyboard = bundle.keyboard
        if bundle.placeholder and not self.placeholder:
            self.placeholder = bundle.placeholder
        if bundle.prefix is not None:
            self.prefix = bundle.prefix
        if bundle.suffix is not None:
            self.suffix = bundle.suffix
        if bundle.alignment is not None:
            self.alignment = bundle.alignment
        if bundle.capitalization is not None:
            self.capitalization = bundle.capitalization

    def select_all(self) -> None:
        self.selected = True

    def show_problem(self, problem: str | None) -> None:
        self.problem = problem

    def relinquish_focus(self) -> None:
        self.focused = False

    def adjust_for_geometry(self, change: GeometryChange) -> None:
        self.geometry_changes.append(change)
