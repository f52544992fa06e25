"""Data models for running applications."""

from dataclasses import dataclass
from typing import Any, Optional
from .categories import Category


@dataclass(frozen=True)
class AppSnapshot:
    """A running application as reported by the snapshot source."""
    name: str
    identifier: str
    icon: Optional[Any] = None


@dataclass(frozen=True)
class AppRecord:
    """A classified application. The icon handle is referenced, never copied."""
    identifier: str
    name: str
    category: Category
    icon: Optional[Any] = None
