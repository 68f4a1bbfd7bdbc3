"""Integration tests for the demo app."""

from __future__ import annotations

import pytest

from validated_fields.app import ValidatedFieldsApp
from validated_fields.bundle import email, phone
from validated_fields.registry import GeometryChange
from validated_fields.widgets import ChoiceField, ValidatedInput


@pytest.fixture
def app() -> ValidatedFieldsApp:
    """An app showing the phone and email bundles."""
    return ValidatedFieldsApp(bundles={"phone": phone(), "email": email()})


class TestAppStartup:
    """Tests for the composed form."""

    async def test_one_field_per_bundle(self, app: ValidatedFieldsApp):
        """Each bundle gets a validated input."""
        async with app.run_test():
            assert isinstance(app.query_one("#field-phone"), ValidatedInput)
            assert isinstance(app.query_one("#field-email"), ValidatedInput)

    async def test_choice_and_read_only_fields(self, app: ValidatedFieldsApp):
        """The form also shows a fixed-choice and a read-only field."""
        async with app.run_test():
            assert isinstance(app.query_one("#field-size"), ChoiceField)
            assert app.query_one("#field-account-id", ValidatedInput).disabled is True


class TestAppEditing:
    """Tests for committing values through the form."""

    async def test_phone_commit_is_recorded(self, app: ValidatedFieldsApp):
        """A completed phone number is recorded under its bundle name."""
        async with app.run_test() as pilot:
            app.query_one("#field-phone", ValidatedInput).focus()
            await pilot.pause()
            await pilot.press(*"5551234567")
            await pilot.pause()
            assert app.committed == {"phone": "555-123-4567"}

    async def test_invalid_email_keeps_focus(self, app: ValidatedFieldsApp):
        """An invalid e-mail address cannot be left."""
        async with app.run_test() as pilot:
            field = app.query_one("#field-email", ValidatedInput)
            field.focus()
            await pilot.pause()
            await pilot.press("j", "o", "tab")
            await pilot.pause()
            assert app.focused is field
            assert "email" not in app.committed

    async def test_resize_reaches_editing_field(self, app: ValidatedFieldsApp, monkeypatch):
        """A terminal resize is forwarded to the field being edited."""
        async with app.run_test() as pilot:
            field = app.query_one("#field-phone", ValidatedInput)
            field.focus()
            await pilot.pause()
            changes = []
            monkeypatch.setattr(field, "adjust_for_geometry", changes.append)
            await pilot.resize_terminal(100, 30)
            assert changes[-1].width == 100
            assert changes[-1].height == 30

    async def test_resize_without_editing_field(self, app: ValidatedFieldsApp):
        """Once the field being edited is left, a resize reaches nobody."""
        async with app.run_test() as pilot:
            app.set_focus(None)
            await pilot.pause()
            assert app.registry.current is None
            assert app.registry.notify_geometry(GeometryChange(90, 20)) is False
            await pilot.resize_terminal(90, 20)
