"""Fixed set of application categories."""

from enum import Enum
from typing import List, Optional


class Category(Enum):
    """Application category. Declaration order is the cycling order."""

    PRODUCTIVITY = "Productivity"
    DEVELOPMENT = "Development"
    COMMUNICATION = "Communication"
    MEDIA = "Media & Entertainment"
    CREATIVITY = "Creativity & Design"
    UTILITIES = "Utilities"
    EDUCATION = "Education & Learning"
    FINANCE = "Finance & Business"
    GAMING = "Gaming"
    LIFESTYLE = "Lifestyle & Health"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def ordered(cls) -> List["Category"]:
        return list(cls)

    @classmethod
    def labels(cls) -> List[str]:
        return [category.value for category in cls]

    @classmethod
    def from_label(cls, text: Optional[object]) -> Optional["Category"]:
        """
        Match text against the category labels.

        Only an exact match after trimming surrounding whitespace counts;
        anything else (including a label embedded in a sentence or a
        non-string value) is None.
        """
        if not isinstance(text, str):
            return None
        candidate = text.strip()
        for category in cls:
            if category.value == candidate:
                return category
        return None

