"""Presentation capability interface for the switcher overlay."""

from abc import ABC, abstractmethod
from typing import List, Optional
from .index import CategoryIndex
from .selection import SelectionPosition


class Overlay(ABC):
    """Capabilities the controller needs from the presentation layer."""

    @abstractmethod
    def show_overlay(self) -> None:
        """Make the overlay visible."""
        pass

    @abstractmethod
    def hide_overlay(self) -> None:
        """Hide the overlay."""
        pass

    @abstractmethod
    def render_state(self, index: CategoryIndex, position: Optional[SelectionPosition]) -> None:
        """
        Redraw the overlay for the current selection.

        Must be cheap; called after every transition.

        Args:
            index: Current category index
            position: Selected position, or None when there is nothing to select
        """
        pass


def format_state(index: CategoryIndex, position: Optional[SelectionPosition]) -> str:
    """
    Render the index as text, marking the selected category and application.

    Returns:
        Multi-line string, or a placeholder when no applications are running
    """
    if index.is_empty or position is None:
        return "  (no applications)"

    lines: List[str] = []
    for category in index.categories:
        marker = "▶" if category == position.category else " "
        names = []
        for i, app in enumerate(index.apps(category)):
            if category == position.category and i == position.index:
                names.append(f"[{app.name}]")
            else:
                names.append(app.name)
        lines.append(f"{marker} {category.label}: {', '.join(names)}")
    return "\n".join(lines)


class ConsoleOverlay(Overlay):
    """Overlay that prints the selection to the terminal."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.visible = False

    def show_overlay(self) -> None:
        self.visible = True

    def hide_overlay(self) -> None:
        if self.visible and not self.quiet:
            print()
        self.visible = False

    def render_state(self, index: CategoryIndex, position: Optional[SelectionPosition]) -> None:
        if self.quiet or not self.visible:
            return
        print(format_state(index, position))
        print("-" * 40)
