"""Fixed-choice fields: pick a value from a list instead of typing it."""

from __future__ import annotations

from collections.abc import Callable

from textual.message import Message
from textual.widget import Widget
from textual.widgets import Select

from validated_fields.field_validator import FieldValidator
from validated_fields.registry import ActiveSessionRegistry
from validated_fields.session import FieldDelegate
from validated_fields.widgets.validated_input import ValidatedInput


class ChoiceField(Select[str]):
    """A Select offering a field's fixed choices.

    A picked value is reported as-is, without validation; there is no edit
    session.
    """

    class Finished(Message):
        """Posted when a value is picked."""

        def __init__(self, field: ChoiceField, value: str) -> None:
            super().__init__()
            self.field = field
            self.value = value

        @property
        def control(self) -> ChoiceField:
            """The field a value was picked in."""
            return self.field

    def __init__(
        self,
        validator: FieldValidator,
        *,
        on_finish: Callable[[str | None], None] | None = None,
        **kwargs,
    ) -> None:
        """Initialize the field.

        Args:
            validator: Field configuration carrying the choices.
            on_finish: Called with every picked value.
            **kwargs: Passed through to ``Select``.
        """
        choices = validator.choices or ()
        kwargs.setdefault("disabled", validator.readonly)
        super().__init__([(choice, choice) for choice in choices], **kwargs)
        self.validator = validator
        self._on_finish = on_finish

    def on_select_changed(self, event: Select.Changed) -> None:
        """Deliver a picked value straight to the completion callback."""
        if event.select is not self or not isinstance(event.value, str):
            return
        self.post_message(self.Finished(self, event.value))
        if self._on_finish is not None:
            self._on_finish(event.value)


def make_field(
    validator: FieldValidator,
    *,
    delegate: FieldDelegate | None = None,
    registry: ActiveSessionRegistry | None = None,
    on_finish: Callable[[str | None], None] | None = None,
    **kwargs,
) -> Widget:
    """Build the right widget for *validator*: a choice list or a validated input."""
    kwargs.setdefault("disabled", validator.readonly)
    if validator.choices is not None:
        return ChoiceField(validator, on_finish=on_finish, **kwargs)
    return ValidatedInput(
        validator,
        delegate=delegate,
        registry=registry,
        on_finish=on_finish,
        **kwargs,
    )
