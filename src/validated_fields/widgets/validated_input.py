"""Textual Input driven by an edit session."""

from __future__ import annotations

from collections.abc import Callable

from textual import events
from textual.message import Message
from textual.widgets import Input

from validated_fields.bundle import Capitalization, KeyboardKind, ValidationBundle, capitalize_typed
from validated_fields.field_validator import FieldValidator
from validated_fields.registry import ActiveSessionRegistry, GeometryChange
from validated_fields.session import EditSession, EndReason, FieldDelegate, Stage


class ValidatedInput(Input):
    """An Input whose every edit is decided by an ``EditSession``.

    Focus starts a session (stripping display markup), each insertion or
    deletion is routed through the field's validators, and losing focus
    commits the value only when it is valid; otherwise the field keeps focus
    and shows the problem.  Structured fields end editing by themselves once
    complete.
    """

    DEFAULT_CSS = """
    ValidatedInput.-problem {
        border: tall $error;
    }
    """

    class Finished(Message):
        """Posted when editing ends with the committed value."""

        def __init__(self, field: ValidatedInput, value: str | None) -> None:
            super().__init__()
            self.field = field
            self.value = value

        @property
        def control(self) -> ValidatedInput:
            """The field that finished editing."""
            return self.field

    def __init__(
        self,
        validator: FieldValidator | ValidationBundle | None = None,
        *,
        delegate: FieldDelegate | None = None,
        registry: ActiveSessionRegistry | None = None,
        on_finish: Callable[[str | None], None] | None = None,
        **kwargs,
    ) -> None:
        """Initialize the field.

        Args:
            validator: Field configuration; a bare bundle is wrapped in a
                ``FieldValidator``.
            delegate: Optional observer chained behind each edit session.
            registry: Registry of the active session shared by the form.
            on_finish: Called with the committed value after every edit.
            **kwargs: Passed through to ``Input``.
        """
        kwargs.setdefault("select_on_focus", False)
        super().__init__(**kwargs)
        if isinstance(validator, ValidationBundle):
            validator = FieldValidator.ensuring(validator)
        self.validator = validator or FieldValidator()
        self.delegate = delegate
        self.registry = registry
        self._on_finish = on_finish
        self.capitalization = Capitalization.NONE
        self._session: EditSession | None = None

    @property
    def session(self) -> EditSession | None:
        """The edit session in progress, if any."""
        return self._session

    @property
    def editing(self) -> bool:
        """Whether an edit session is in progress."""
        return self._session is not None and self._session.stage is Stage.EDITING

    # --- EditableField ---

    @property
    def text(self) -> str:
        """The field text."""
        return self.value

    @text.setter
    def text(self, value: str) -> None:
        self.value = value
        self.cursor_position = len(value)

    def apply_presentation(self, bundle: ValidationBundle) -> None:
        """Apply the bundle's hints: border labels, alignment, placeholder, keyboard."""
        if bundle.placeholder and not self.placeholder:
            self.placeholder = bundle.placeholder
        if bundle.prefix is not None:
            self.border_title = bundle.prefix
        if bundle.suffix is not None:
            self.border_subtitle = bundle.suffix
        if bundle.alignment is not None:
            self.styles.text_align = bundle.alignment.value
        if bundle.capitalization is not None:
            self.capitalization = bundle.capitalization
        if bundle.keyboard is not None:
            for kind in KeyboardKind:
                self.set_class(kind is bundle.keyboard, f"-keyboard-{kind.value}")

    def show_problem(self, problem: str | None) -> None:
        """Flag the field as invalid and explain why in its tooltip."""
        self.set_class(problem is not None, "-problem")
        self.tooltip = problem

    def relinquish_focus(self) -> None:
        """Give up focus after the session ended itself."""
        if self.has_focus:
            self.blur()

    def adjust_for_geometry(self, change: GeometryChange) -> None:
        """Scroll so the field stays visible after a resize."""
        self.scroll_visible(animate=False)

    # --- Edits ---

    def replace(self, text: str, start: int, end: int) -> None:
        """Route a range replacement through the edit session.

        Typing, pasting and every delete action of ``Input`` end up here.
        """
        session = self._session
        if session is None or session.stage is not Stage.EDITING:
            return
        value = self.value
        start, end = sorted((max(0, start), min(len(value), end)))
        if text:
            text = capitalize_typed(value, start, text, self.capitalization)
        outcome = session.handle_edit(start, end, text)
        if outcome.vetoed:
            self.restricted()
        elif outcome.changed and not outcome.rewritten and not outcome.ended:
            self.cursor_position = start + len(text)

    async def action_submit(self) -> None:
        """Enter asks the session whether to end editing."""
        if self.editing:
            self._session.should_return()
        await super().action_submit()

    # --- Focus ---

    def on_focus(self, event: events.Focus) -> None:
        """Start an edit session when the field gains focus."""
        if self.editing or not self._settle_active_session():
            return
        self._session = EditSession(
            self.validator,
            self,
            delegate=self.delegate,
            registry=self.registry,
            on_finish=self._finished,
        )
        if not self._session.begin():
            self._session = None
            self.blur()

    def on_blur(self, event: events.Blur) -> None:
        """Commit on blur, or take focus back while the value has problems."""
        session = self._session
        if session is None or session.stage is not Stage.EDITING:
            return
        if session.should_end_editing():
            session.did_end_editing(EndReason.FOCUS_LOST)
        else:
            self.focus()

    def _settle_active_session(self) -> bool:
        """End the session another field still has open, if its value allows.

        Focus may arrive here before the other field has seen its blur.
        Returns False when that field keeps editing; its own blur handler
        then takes focus back.
        """
        registry = self.registry
        if registry is None or not registry.busy:
            return True
        other = registry.current
        if other.should_end_editing():
            other.did_end_editing(EndReason.FOCUS_LOST)
            return True
        return False

    def on_unmount(self, event: events.Unmount) -> None:
        """Tear down an unfinished session."""
        if self._session is not None:
            self._session.abort()

    def _finished(self, value: str | None) -> None:
        self.post_message(self.Finished(self, value))
        if self._on_finish is not None:
            self._on_finish(value)
