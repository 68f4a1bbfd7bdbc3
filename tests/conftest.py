"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from validated_fields.bundle import phone
from validated_fields.field_validator import FieldValidator
from validated_fields.host import TextBuffer
from validated_fields.registry import ActiveSessionRegistry
from validated_fields.session import EditSession, FieldDelegate


@pytest.fixture
def phone_validator() -> FieldValidator:
    """A field validated by the phone preset."""
    return FieldValidator.ensuring(phone())


@pytest.fixture
def registry() -> ActiveSessionRegistry:
    """A fresh active-session registry."""
    return ActiveSessionRegistry()


@pytest.fixture
def finished() -> list[str | None]:
    """Collects the values passed to a session's completion callback."""
    return []


@pytest.fixture
def make_session(
    finished: list[str | None],
) -> Callable[..., tuple[EditSession, TextBuffer]]:
    """Factory building a session over an in-memory text buffer."""

    def _make(
        validator: FieldValidator,
        text: str = "",
        *,
        delegate: FieldDelegate | None = None,
        registry: ActiveSessionRegistry | None = None,
    ) -> tuple[EditSession, TextBuffer]:
        buffer = TextBuffer(text=text)
        session = EditSession(
            validator,
            buffer,
            delegate=delegate,
            registry=registry,
            on_finish=finished.append,
        )
        return session, buffer

    return _make
