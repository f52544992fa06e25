"""Cache package for persisted classification results."""

from .cache import (
    ClassificationCache,
    get_classification_cache,
    initialize_classification_cache,
    reset_classification_cache,
)

__all__ = [
    'ClassificationCache',
    'get_classification_cache',
    'initialize_classification_cache',
    'reset_classification_cache',
]
