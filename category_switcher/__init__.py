"""Category switcher: cycle through running apps grouped by category."""

from .categories import Category
from .classifier import Classifier
from .index import CategoryIndex, build_index
from .models import AppRecord, AppSnapshot
from .selection import SelectionPosition
from .session import SwitchSession

__all__ = [
    "Category",
    "Classifier",
    "CategoryIndex",
    "build_index",
    "AppRecord",
    "AppSnapshot",
    "SelectionPosition",
    "SwitchSession",
]
