"""Grouping of classified applications by category."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple
from .categories import Category
from .models import AppRecord


@dataclass(frozen=True)
class CategoryIndex:
    """Immutable grouping of applications into non-empty categories.

    `categories` lists only non-empty categories, in cycling order.
    `apps_by_category` has exactly those keys, each with a non-empty tuple
    of records in snapshot order.
    """
    categories: Tuple[Category, ...] = ()
    apps_by_category: Mapping[Category, Tuple[AppRecord, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def is_empty(self) -> bool:
        return not self.categories

    @property
    def total_apps(self) -> int:
        return sum(len(apps) for apps in self.apps_by_category.values())

    def apps(self, category: Category) -> Tuple[AppRecord, ...]:
        """Applications in a category (empty tuple if the category is absent)."""
        return self.apps_by_category.get(category, ())

    def app_at(self, category: Category, index: int) -> Optional[AppRecord]:
        apps = self.apps(category)
        if 0 <= index < len(apps):
            return apps[index]
        return None

    def find(self, identifier: str) -> Optional[Tuple[Category, int]]:
        """Locate an application by identifier."""
        for category in self.categories:
            for i, app in enumerate(self.apps_by_category[category]):
                if app.identifier == identifier:
                    return category, i
        return None


def build_index(records: Iterable[AppRecord]) -> CategoryIndex:
    """
    Group records by category.

    Order within a category follows the input order; empty categories are
    omitted. An empty input yields an empty index.

    Args:
        records: Classified applications in snapshot order

    Returns:
        A new CategoryIndex
    """
    grouped: Dict[Category, list] = {}
    for record in records:
        grouped.setdefault(record.category, []).append(record)

    categories = tuple(category for category in Category.ordered() if grouped.get(category))
    apps_by_category = MappingProxyType({
        category: tuple(grouped[category]) for category in categories
    })
    return CategoryIndex(categories=categories, apps_by_category=apps_by_category)
