"""Switch session: one overlay-visible interaction ending in a single activation."""

from enum import Enum
from typing import Callable, Optional
from .exceptions import SessionError
from .index import CategoryIndex
from .models import AppRecord
from .selection import SelectionPosition, Transition, revalidate

Activator = Callable[[str], bool]


class SessionState(Enum):
    OPEN = "open"
    CLOSED = "closed"


class SwitchSession:
    """Accumulates selection transitions and commits once on close.

    While open, transitions only move the selection. Closing activates the
    application at the final position, and only if the selection moved at
    least once during the session.
    """

    def __init__(self, index: CategoryIndex, activator: Activator, remembered: Optional[SelectionPosition] = None):
        """
        Open a session.

        Args:
            index: Category index the session cycles through
            activator: Called with an identifier to bring that application forward
            remembered: Position to start from (defaults to the first application)
        """
        self.index = index
        self.activator = activator
        self.origin = revalidate(index, remembered)
        self.position = self.origin
        self.dirty = False
        self.state = SessionState.OPEN

    @classmethod
    def open(cls, index: CategoryIndex, activator: Activator, remembered: Optional[SelectionPosition] = None) -> "SwitchSession":
        return cls(index, activator, remembered)

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    @property
    def selected_app(self) -> Optional[AppRecord]:
        if self.position is None:
            return None
        return self.index.app_at(self.position.category, self.position.index)

    def advance(self, transition: Transition) -> Optional[SelectionPosition]:
        """
        Apply a selection transition.

        Args:
            transition: One of the functions in selection.TRANSITIONS

        Returns:
            The new position

        Raises:
            SessionError: If the session is closed
        """
        if not self.is_open:
            raise SessionError("Cannot advance a closed switch session")

        new_position = transition(self.index, self.position)
        if new_position != self.position:
            self.dirty = True
        self.position = new_position
        return new_position

    def close(self) -> Optional[AppRecord]:
        """
        End the session, activating the selected application if the selection moved.

        Calling close() again has no effect.

        Returns:
            The application that was activated, or None
        """
        if not self.is_open:
            return None
        self.state = SessionState.CLOSED

        if not self.dirty:
            return None

        app = self.selected_app
        if app is None:
            return None

        if not self.activator(app.identifier):
            print(f"Warning: Failed to activate '{app.name}' ({app.identifier})")
        return app
