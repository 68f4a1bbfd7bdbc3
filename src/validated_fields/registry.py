"""Tracking of the one field currently being edited.

Visible-area changes (a terminal resize, an on-screen keyboard appearing)
arrive from outside the keystroke flow.  The registry matches them to the
active edit session, and holds a single pending change for a session that
has been granted focus but has not started editing yet.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from validated_fields.errors import SessionStateError

if TYPE_CHECKING:
    from validated_fields.session import EditSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeometryChange:
    """The visible area available to the field changed."""

    width: int
    height: int
    obstructed_height: int = 0


class ActiveSessionRegistry:
    """Knows which edit session, if any, is currently active.

    Owned by whatever manages the editable fields (a Textual ``App`` in the
    demo) and handed to each session explicitly.
    """

    def __init__(self) -> None:
        self._current: EditSession | None = None
        self._subscribed: set[EditSession] = set()

    @property
    def current(self) -> EditSession | None:
        """The session that most recently claimed the registry."""
        return self._current

    def claim(self, session: EditSession) -> None:
        """Make *session* the active one.

        Raises:
            SessionStateError: If a different session is still editing.
        """
        current = self._current
        if current is not None and current is not session:
            if current.editing:
                raise SessionStateError(f"Cannot begin {session!r} while {current!r} is editing")
            logger.debug("Session %r replaces %r as active", session, current)
        self._current = session

    @property
    def busy(self) -> bool:
        """Whether the active session is still editing."""
        return self._current is not None and self._current.editing

    def release(self, session: EditSession) -> None:
        """Forget *session* if it is still the active one."""
        self._subscribed.discard(session)
        if self._current is session:
            self._current = None

    def is_subscribed(self, session: EditSession) -> bool:
        """Whether *session* currently receives geometry changes directly."""
        return session in self._subscribed

    @contextmanager
    def subscription(self, session: EditSession) -> Iterator[None]:
        """Deliver geometry changes to *session* while the context is open."""
        self._subscribed.add(session)
        try:
            yield
        finally:
            self._subscribed.discard(session)

    def notify_geometry(self, change: GeometryChange) -> bool:
        """Route *change* to the active session.

        Returns:
            True when a session handled or deferred the change, False when
            no session is active and the change was dropped.
        """
        session = self._current
        if session is None:
            logger.debug("No active session for %r", change)
            return False
        if self.is_subscribed(session):
            session.handle_geometry(change)
        else:
            session.defer_geometry(change)
        return True
