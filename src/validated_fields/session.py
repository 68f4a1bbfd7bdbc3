"""The edit session: one field's begin-edit, keystroke and end-edit cycle.

A session sits between a host widget and the field's validators.  The host
reports the lifecycle points in order:

1. ``should_begin_editing`` (may refuse) and ``did_begin_editing``,
2. ``handle_edit`` for every change, as a character range and a replacement,
3. ``should_end_editing`` (refuses while the text has problems, unless empty),
4. ``did_end_editing``, after which the final text is read back.

The session always owns the resulting text: the host never applies its own
default edit.  A pre-existing ``FieldDelegate`` can be chained behind the
session; it is consulted after the session's own logic.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum

from validated_fields.capabilities import (
    allows_update,
    process_text,
    replacement_after_add,
    replacement_after_del,
    should_stop,
    unprocess_text,
)
from validated_fields.errors import SessionStateError
from validated_fields.field_validator import FieldValidator
from validated_fields.host import EditableField
from validated_fields.registry import ActiveSessionRegistry, GeometryChange

logger = logging.getLogger(__name__)


class Stage(Enum):
    """Lifecycle stage of an edit session."""

    IDLE = "idle"
    EDITING = "editing"
    ENDED = "ended"


class EndReason(Enum):
    """Why editing ended."""

    COMMITTED = "committed"
    AUTO_STOPPED = "auto-stopped"
    RETURN_KEY = "return-key"
    FOCUS_LOST = "focus-lost"


class EditKind(Enum):
    """Whether a keystroke adds or removes text."""

    ADDITION = "addition"
    DELETION = "deletion"


@dataclass(frozen=True)
class EditOutcome:
    """What a single keystroke did to the field.

    Attributes:
        kind: Addition or deletion.
        text: The field text after the keystroke was settled.
        changed: Whether the field text differs from before the keystroke.
        vetoed: A responder refused the addition.
        rewritten: A responder replaced the naive edit with its own text.
        declined: The chained delegate refused the naive edit.
        ended: The keystroke completed the value and ended the session.
    """

    kind: EditKind
    text: str
    changed: bool
    vetoed: bool = False
    rewritten: bool = False
    declined: bool = False
    ended: bool = False


class FieldDelegate:
    """An observer that was attached to the field before the session.

    Subclass and override the hooks you need; the defaults let everything
    through and express no opinion on the return key.
    """

    def should_begin_editing(self, field: EditableField) -> bool:
        return True

    def did_begin_editing(self, field: EditableField) -> None:
        pass

    def should_change_characters(
        self, field: EditableField, start: int, end: int, replacement: str
    ) -> bool:
        return True

    def should_return(self, field: EditableField) -> bool | None:
        return None

    def did_end_editing(self, field: EditableField, reason: EndReason) -> None:
        pass


def apply_edit(text: str, start: int, end: int, replacement: str) -> str:
    """Return *text* with ``text[start:end]`` replaced by *replacement*."""
    return f"{text[:start]}{replacement}{text[end:]}"


class EditSession:
    """State machine for one edit-to-commit cycle of a field.

    A session is used once: it starts ``IDLE``, moves to ``EDITING`` when the
    host grants focus, and is ``ENDED`` for good after the value is committed
    or the session is aborted.
    """

    def __init__(
        self,
        validator: FieldValidator,
        field: EditableField,
        *,
        delegate: FieldDelegate | None = None,
        registry: ActiveSessionRegistry | None = None,
        on_finish: Callable[[str | None], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            validator: Validators and presentation of the field.
            field: The host field holding the text.
            delegate: Optional pre-existing observer, consulted after the session.
            registry: Registry of the active session, for geometry changes.
            on_finish: Called once with the committed text, or None when the
                field was left empty.
        """
        self.validator = validator
        self.field = field
        self.delegate = delegate or FieldDelegate()
        self._registry = registry
        self._on_finish = on_finish
        self._stage = Stage.IDLE
        self._begin_granted = False
        self._problem: str | None = None
        self._pending_geometry: GeometryChange | None = None
        self._resources = ExitStack()

    def __repr__(self) -> str:
        return f"<EditSession {self._stage.value} text={self.field.text!r}>"

    @property
    def stage(self) -> Stage:
        """The current lifecycle stage."""
        return self._stage

    @property
    def editing(self) -> bool:
        """Whether the session is between begin and end."""
        return self._stage is Stage.EDITING

    @property
    def problem(self) -> str | None:
        """The reason the last attempt to end editing was refused, if shown."""
        return self._problem

    @property
    def pending_geometry(self) -> GeometryChange | None:
        """A geometry change waiting for editing to begin."""
        return self._pending_geometry

    def _require(self, stage: Stage, action: str) -> None:
        if self._stage is not stage:
            raise SessionStateError(f"Cannot {action} while the session is {self._stage.value}")

    def _apply_presentation(self) -> None:
        if self.validator.bundle is not None:
            self.field.apply_presentation(self.validator.bundle)

    def _set_problem(self, problem: str | None) -> None:
        self._problem = problem
        self.field.show_problem(problem)

    # --- Begin ---

    def should_begin_editing(self) -> bool:
        """Ask whether editing may start; claims the registry when it may."""
        self._require(Stage.IDLE, "begin editing")
        if not self.validator.accepts_text_entry:
            logger.debug("Field is read-only or has fixed choices; not editing")
            return False
        self._apply_presentation()
        if not self.delegate.should_begin_editing(self.field):
            logger.debug("Delegate refused to begin editing")
            return False
        if self._registry is not None:
            self._registry.claim(self)
            self._resources.callback(self._registry.release, self)
        self._begin_granted = True
        return True

    def did_begin_editing(self) -> None:
        """Enter ``EDITING``: strip markup and replay any deferred geometry change."""
        self._require(Stage.IDLE, "start editing")
        if not self._begin_granted:
            raise SessionStateError("Editing was not granted by should_begin_editing")
        self._apply_presentation()
        self._stage = Stage.EDITING

        text = self.field.text
        raw = process_text(self.validator.preprocessors, text)
        if raw != text:
            self.field.text = raw

        if self._registry is not None:
            self._resources.enter_context(self._registry.subscription(self))
        pending, self._pending_geometry = self._pending_geometry, None
        if pending is not None:
            self.handle_geometry(pending)

        bundle = self.validator.bundle
        if bundle is not None and bundle.preselect:
            self.field.select_all()
        logger.debug("Began editing %r", raw)
        self.delegate.did_begin_editing(self.field)

    def begin(self) -> bool:
        """Run both begin points; return False if editing was refused."""
        if not self.should_begin_editing():
            return False
        self.did_begin_editing()
        return True

    # --- Keystrokes ---

    def handle_edit(self, start: int, end: int, replacement: str) -> EditOutcome:
        """Decide what replacing ``text[start:end]`` with *replacement* does.

        Deletions take the first rewrite a responder offers, else the naive
        edit.  Additions are vetoed by the first responder that rejects them;
        otherwise the first rewrite offered wins, else the naive edit.  After
        an addition the session ends itself if a responder says the value is
        complete.
        """
        self._require(Stage.EDITING, "edit")
        text = self.field.text
        kind = EditKind.ADDITION if replacement else EditKind.DELETION

        if not 0 <= start <= end <= len(text):
            if __debug__:
                raise AssertionError(
                    f"Edit range {start}:{end} does not fit text of length {len(text)}"
                )
            logger.error("Ignoring edit range %d:%d for %r", start, end, text)
            return EditOutcome(kind, text, changed=False)

        updated = apply_edit(text, start, end, replacement)
        responders = self.validator.responders

        if kind is EditKind.DELETION:
            tweaked = replacement_after_del(responders, updated)
            if tweaked is not None:
                self.field.text = tweaked
                self._set_problem(None)
                logger.debug("Deletion rewritten to %r", tweaked)
                return EditOutcome(kind, tweaked, changed=tweaked != text, rewritten=True)
            if not self.delegate.should_change_characters(self.field, start, end, replacement):
                return EditOutcome(kind, text, changed=False, declined=True)
            self.field.text = updated
            self._set_problem(None)
            return EditOutcome(kind, updated, changed=updated != text)

        if not allows_update(responders, updated, replacement):
            logger.debug("Addition of %r vetoed", replacement)
            return EditOutcome(kind, text, changed=False, vetoed=True)

        tweaked = replacement_after_add(responders, updated)
        if tweaked is not None:
            logger.debug("Addition rewritten to %r", tweaked)
            self.field.text = tweaked
        elif not self.delegate.should_change_characters(self.field, start, end, replacement):
            return EditOutcome(kind, text, changed=False, declined=True)
        else:
            self.field.text = updated

        settled = self.field.text
        ended = self._stop_if_complete()
        return EditOutcome(
            kind,
            self.field.text,
            changed=settled != text,
            rewritten=tweaked is not None,
            ended=ended,
        )

    def should_change_characters(self, start: int, end: int, replacement: str) -> bool:
        """Host-facing keystroke query; the host must never apply its own edit."""
        self.handle_edit(start, end, replacement)
        return False

    def _stop_if_complete(self) -> bool:
        if not should_stop(self.validator.responders, self.field.text):
            return False
        return self.resign(EndReason.AUTO_STOPPED)

    # --- End ---

    def should_end_editing(self) -> bool:
        """Gatekeeper: an empty field may always end, otherwise it must be valid."""
        self._require(Stage.EDITING, "end editing")
        text = self.field.text
        if not text:
            return True
        problem = self.validator.problem_for(text)
        if problem is not None:
            logger.debug("Refusing to end editing %r: %s", text, problem)
            self._set_problem(problem)
            return False
        return True

    def did_end_editing(self, reason: EndReason = EndReason.COMMITTED) -> None:
        """Restore markup, notify the delegate and report the final value."""
        self._require(Stage.EDITING, "finish editing")
        text = self.field.text
        # An abandoned field stays empty; markup is only restored around a value.
        display = unprocess_text(self.validator.preprocessors, text) if text else ""
        if display != text:
            self.field.text = display
        self._set_problem(None)
        self._stage = Stage.ENDED
        self._resources.close()
        logger.debug("Ended editing (%s) with %r", reason.value, display)

        self.delegate.did_end_editing(self.field, reason)
        on_finish, self._on_finish = self._on_finish, None
        if on_finish is not None:
            on_finish(display or None)

    def resign(self, reason: EndReason = EndReason.COMMITTED) -> bool:
        """End editing if the gatekeeper allows it, then give up focus."""
        if not self.should_end_editing():
            return False
        self.did_end_editing(reason)
        self.field.relinquish_focus()
        return True

    def should_return(self) -> bool:
        """The return/submit key was pressed; the delegate may decide instead."""
        self._require(Stage.EDITING, "handle return")
        answer = self.delegate.should_return(self.field)
        if answer is not None:
            return answer
        self.resign(EndReason.RETURN_KEY)
        return True

    def abort(self) -> None:
        """Tear the session down without committing, e.g. when the host goes away."""
        if self._stage is Stage.ENDED:
            return
        self._stage = Stage.ENDED
        self._on_finish = None
        self._pending_geometry = None
        self._resources.close()
        logger.debug("Aborted %r", self)

    # --- Geometry ---

    def defer_geometry(self, change: GeometryChange) -> None:
        """Hold *change* until editing begins; a newer change replaces it."""
        self._pending_geometry = change

    def handle_geometry(self, change: GeometryChange) -> None:
        """Let the field react to a change of the visible area."""
        self.field.adjust_for_geometry(change)
