"""Application classification with a persistent cache and offline fallback."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence
from .cache import ClassificationCache
from .categories import Category
from .exceptions import ClassifierError, ClassifierNotConfiguredError
from .fallback import fallback_category
from .models import AppRecord, AppSnapshot
from .remote import RemoteClassifier


class Classifier:
    """Resolves the category of running applications.

    Resolution order per identifier:
    - Tier 1: Cached category (no remote call)
    - Tier 2: Remote classification, cached on an exact label match
    - Tier 3: Substring rules, never cached so a later call may retry remote
    """

    def __init__(
        self,
        cache: ClassificationCache,
        remote: Optional[RemoteClassifier] = None,
        max_workers: Optional[int] = None
    ):
        """
        Initialize the classifier.

        Args:
            cache: Persistent identifier -> category cache
            remote: Remote classifier (None means offline only)
            max_workers: Upper bound on concurrent classifications in a batch
                (None or 0 classifies every uncached app of a batch at once)
        """
        self.cache = cache
        self.remote = remote
        self.max_workers = max_workers or None

    def classify(self, name: str, identifier: str) -> Category:
        """
        Resolve the category of a single application. Never raises.

        Args:
            name: Display name of the application
            identifier: Bundle identifier of the application

        Returns:
            Resolved Category
        """
        cached = self.cache.get(identifier)
        if cached is not None:
            return cached

        if self.remote is not None:
            try:
                category = self.remote.classify(name, identifier)
            except ClassifierNotConfiguredError:
                pass
            except ClassifierError as e:
                print(f"Warning: {e}; using fallback rules")
            else:
                self.cache.set(identifier, category)
                return category

        return fallback_category(identifier)

    def classify_batch(self, apps: Sequence[AppSnapshot]) -> List[AppRecord]:
        """
        Classify a snapshot of running applications concurrently.

        Identifiers are de-duplicated before dispatch so no identifier is
        classified twice in one batch. All classifications finish before
        this returns.

        Args:
            apps: Snapshot of running applications

        Returns:
            One AppRecord per distinct identifier, in snapshot order
        """
        unique: Dict[str, AppSnapshot] = {}
        for app in apps:
            if app.identifier and app.identifier not in unique:
                unique[app.identifier] = app

        categories: Dict[str, Category] = {}
        pending: List[AppSnapshot] = []
        for identifier, app in unique.items():
            cached = self.cache.get(identifier)
            if cached is not None:
                categories[identifier] = cached
            else:
                pending.append(app)

        if pending:
            workers = len(pending)
            if self.max_workers is not None:
                workers = min(self.max_workers, workers)
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(self.classify, app.name, app.identifier): app
                    for app in pending
                }

                # Collect results as they complete
                for future in as_completed(futures):
                    app = futures[future]
                    try:
                        categories[app.identifier] = future.result()
                    except Exception as e:
                        print(f"Error classifying '{app.identifier}': {e}")
                        categories[app.identifier] = fallback_category(app.identifier)

        return [
            AppRecord(
                identifier=identifier,
                name=app.name,
                category=categories[identifier],
                icon=app.icon,
            )
            for identifier, app in unique.items()
        ]
