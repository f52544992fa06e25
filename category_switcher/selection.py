"""Selection transitions for cycling through categorized applications.

Every function here is pure: it takes a CategoryIndex and a position and
returns a new position, or None when the index has no applications.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional
from .categories import Category
from .index import CategoryIndex


@dataclass(frozen=True)
class SelectionPosition:
    """A category and an index into that category's applications."""
    category: Category
    index: int = 0


Transition = Callable[[CategoryIndex, Optional[SelectionPosition]], Optional[SelectionPosition]]


def is_valid(index: CategoryIndex, position: Optional[SelectionPosition]) -> bool:
    """True if the position names an application present in the index."""
    if position is None:
        return False
    return 0 <= position.index < len(index.apps(position.category))


def first_position(index: CategoryIndex) -> Optional[SelectionPosition]:
    """First application of the first non-empty category."""
    if index.is_empty:
        return None
    return SelectionPosition(index.categories[0], 0)


def revalidate(index: CategoryIndex, position: Optional[SelectionPosition]) -> Optional[SelectionPosition]:
    """
    Bring a possibly stale position back into range after a refresh.

    A position whose category still has applications is clamped to the
    last application of that category; otherwise the first position of
    the index is used.
    """
    if index.is_empty:
        return None
    if position is None:
        return first_position(index)

    apps = index.apps(position.category)
    if not apps:
        return first_position(index)
    return SelectionPosition(position.category, min(max(position.index, 0), len(apps) - 1))


def _neighbour(index: CategoryIndex, category: Category, step: int) -> Category:
    """Next (step=1) or previous (step=-1) non-empty category, wrapping."""
    categories = index.categories
    if category in categories:
        return categories[(categories.index(category) + step) % len(categories)]

    # Category no longer present: walk the full enum order from its slot
    ordered = Category.ordered()
    start = ordered.index(category)
    for offset in range(1, len(ordered)):
        candidate = ordered[(start + step * offset) % len(ordered)]
        if candidate in categories:
            return candidate
    return categories[0]


def next_app(index: CategoryIndex, position: Optional[SelectionPosition]) -> Optional[SelectionPosition]:
    """Advance one application, rolling into the next non-empty category at the end."""
    if index.is_empty:
        return None
    if position is None:
        return first_position(index)

    apps = index.apps(position.category)
    if not apps:
        return SelectionPosition(_neighbour(index, position.category, 1), 0)

    if position.index + 1 < len(apps):
        return SelectionPosition(position.category, position.index + 1)
    return SelectionPosition(_neighbour(index, position.category, 1), 0)


def previous_app(index: CategoryIndex, position: Optional[SelectionPosition]) -> Optional[SelectionPosition]:
    """Step back one application, rolling into the last app of the previous category."""
    if index.is_empty:
        return None
    if position is None:
        return first_position(index)

    apps = index.apps(position.category)
    if apps and position.index > 0:
        return SelectionPosition(position.category, min(position.index, len(apps)) - 1)

    category = _neighbour(index, position.category, -1)
    return SelectionPosition(category, len(index.apps(category)) - 1)


def next_category(index: CategoryIndex, position: Optional[SelectionPosition]) -> Optional[SelectionPosition]:
    """Jump to the first application of the next non-empty category."""
    if index.is_empty:
        return None
    if position is None:
        return first_position(index)
    return SelectionPosition(_neighbour(index, position.category, 1), 0)


TRANSITIONS: Dict[str, Transition] = {
    "next_app": next_app,
    "previous_app": previous_app,
    "next_category": next_category,
}
