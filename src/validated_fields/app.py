"""Demo Textual application: a form with one validated field per bundle."""

from __future__ import annotations

import logging

from textual import events, on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Label, Static

from validated_fields.bundle import ValidationBundle
from validated_fields.field_validator import READ_ONLY, FieldValidator
from validated_fields.registry import ActiveSessionRegistry, GeometryChange
from validated_fields.widgets import ChoiceField, ValidatedInput, make_field

logger = logging.getLogger(__name__)

_SIZES = ("Small", "Medium", "Large")


class ValidatedFieldsApp(App):
    """A form showing every bundle, reporting committed values in a status bar."""

    TITLE = "validated-fields"

    CSS = """
    #form { height: 1fr; }
    .form-field { height: auto; }
    .form-field Label { width: 18; padding: 1 1 0 0; }
    .form-field ValidatedInput, .form-field ChoiceField { width: 1fr; }
    #status-bar { height: 1; background: $panel; }
    """

    def __init__(self, bundles: dict[str, ValidationBundle]) -> None:
        """Initialize the app.

        Args:
            bundles: Bundles to show, keyed by name.
        """
        super().__init__()
        self.bundles = bundles
        self.registry = ActiveSessionRegistry()
        self.committed: dict[str, str | None] = {}

    def compose(self) -> ComposeResult:
        """Create the form layout."""
        with VerticalScroll(id="form"):
            for name, bundle in self.bundles.items():
                with Horizontal(classes="form-field"):
                    yield Label(f"{name}:")
                    yield make_field(
                        FieldValidator.ensuring(bundle),
                        registry=self.registry,
                        id=f"field-{name}",
                    )
            with Horizontal(classes="form-field"):
                yield Label("size:")
                yield make_field(FieldValidator.options(_SIZES), id="field-size")
            with Horizontal(classes="form-field"):
                yield Label("account id:")
                yield make_field(READ_ONLY, value="ACC-0001", id="field-account-id")
        yield Static(
            "Tab between fields; values are committed when they are valid.",
            id="status-bar",
            markup=False,
        )

    def on_resize(self, event: events.Resize) -> None:
        """Forward terminal resizes to the field being edited."""
        self.registry.notify_geometry(GeometryChange(event.size.width, event.size.height))

    @on(ValidatedInput.Finished)
    def _text_committed(self, event: ValidatedInput.Finished) -> None:
        """Record and show a committed text value."""
        self._record(event.field.id, event.value)

    @on(ChoiceField.Finished)
    def _choice_picked(self, event: ChoiceField.Finished) -> None:
        """Record and show a picked value."""
        self._record(event.field.id, event.value)

    def _record(self, field_id: str | None, value: str | None) -> None:
        name = (field_id or "").removeprefix("field-")
        self.committed[name] = value
        logger.info("Committed %s = %r", name, value)
        shown = value if value is not None else "(empty)"
        self.query_one("#status-bar", Static).update(f"{name}: {shown}")
