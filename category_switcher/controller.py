"""Event controller tying snapshots, classification, selection and sessions together."""

import threading
import time
from typing import Callable, List, Optional
from .classifier import Classifier
from .index import CategoryIndex, build_index
from .models import AppSnapshot
from .overlay import Overlay
from .selection import SelectionPosition, TRANSITIONS, Transition, revalidate
from .session import Activator, SwitchSession

SnapshotSource = Callable[[], List[AppSnapshot]]

EVENTS = ("request_show", "request_hide", "next_app", "previous_app", "next_category")


class SwitcherController:
    """Owns the current index, the remembered selection and the open session.

    Hotkey events are handled one at a time. Refreshes may run on another
    thread; the new index is swapped in under the lock, and is held back
    until the open session (if any) closes.
    """

    def __init__(
        self,
        classifier: Classifier,
        overlay: Overlay,
        snapshot_source: SnapshotSource,
        activator: Activator
    ):
        """
        Initialize the controller.

        Args:
            classifier: Classifier used for every refresh
            overlay: Presentation layer (show/hide/render)
            snapshot_source: Returns the running applications
            activator: Brings an application forward by identifier
        """
        self.classifier = classifier
        self.overlay = overlay
        self.snapshot_source = snapshot_source
        self.activator = activator

        self.index = CategoryIndex()
        self.position: Optional[SelectionPosition] = None
        self.session: Optional[SwitchSession] = None

        self._remembered_identifier: Optional[str] = None
        self._pending_index: Optional[CategoryIndex] = None
        self._generation = 0
        self._lock = threading.RLock()

    # Snapshot refresh

    def refresh(self) -> CategoryIndex:
        """
        Pull a snapshot, classify it and swap in the resulting index.

        If a newer refresh starts before this one finishes, this result is
        discarded.

        Returns:
            The index built by this refresh
        """
        with self._lock:
            self._generation += 1
            generation = self._generation

        start_time = time.time()
        snapshot = self.snapshot_source()
        records = self.classifier.classify_batch(snapshot)
        index = build_index(records)

        with self._lock:
            if generation != self._generation:
                print("Note: Discarding stale snapshot refresh")
                return index
            changed = index != self.index
            if self.session is not None and self.session.is_open:
                self._pending_index = index
            else:
                self._install_index(index)

        if changed:
            elapsed = time.time() - start_time
            print(f"🔄 Refreshed {index.total_apps} apps in {len(index.categories)} categories ({elapsed:.2f}s)")
        return index

    def _install_index(self, index: CategoryIndex) -> None:
        """Swap in a new index and re-validate the remembered position. Caller holds the lock."""
        self.index = index
        self._pending_index = None

        located = None
        if self._remembered_identifier is not None:
            located = index.find(self._remembered_identifier)
        if located is not None:
            self.position = SelectionPosition(*located)
        else:
            self.position = revalidate(index, self.position)

    # Hotkey events

    def request_show(self) -> None:
        """Open a session and show the overlay. Ignored if a session is already open."""
        with self._lock:
            if self.session is not None and self.session.is_open:
                return
            if self._pending_index is not None:
                self._install_index(self._pending_index)

            self.session = SwitchSession.open(self.index, self.activator, self.position)
            self.overlay.show_overlay()
            self.overlay.render_state(self.index, self.session.position)

    def request_hide(self) -> None:
        """Close the open session, committing its selection, and hide the overlay."""
        with self._lock:
            session = self.session
            if session is None or not session.is_open:
                return

            committed = session.close()
            if committed is not None:
                self.position = session.position
                self._remembered_identifier = committed.identifier
            self.overlay.hide_overlay()

            if self._pending_index is not None:
                self._install_index(self._pending_index)

    def next_app(self) -> Optional[SelectionPosition]:
        return self._advance(TRANSITIONS["next_app"])

    def previous_app(self) -> Optional[SelectionPosition]:
        return self._advance(TRANSITIONS["previous_app"])

    def next_category(self) -> Optional[SelectionPosition]:
        return self._advance(TRANSITIONS["next_category"])

    def _advance(self, transition: Transition) -> Optional[SelectionPosition]:
        with self._lock:
            if self.session is None or not self.session.is_open:
                return None
            position = self.session.advance(transition)
            self.overlay.render_state(self.session.index, position)
            return position

    def dispatch(self, event: str) -> None:
        """
        Handle a named hotkey event.

        Args:
            event: One of EVENTS
        """
        if event not in EVENTS:
            print(f"Unknown event: {event}")
            return
        getattr(self, event)()


class BackgroundRefresher:
    """Periodically refreshes the controller's snapshot in a daemon thread."""

    def __init__(self, controller: SwitcherController, interval: float = 5.0, join_timeout: Optional[float] = None):
        """
        Initialize the background refresher.

        Args:
            controller: Controller to refresh
            interval: Seconds between refreshes
            join_timeout: Seconds stop() waits for an in-flight refresh
                (None waits until it finishes)
        """
        self.controller = controller
        self.interval = interval
        self.join_timeout = join_timeout
        self.thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def start(self):
        """Start the background refresh loop."""
        if self.running:
            return
        self._stop_event.clear()
        self.thread = threading.Thread(target=self._refresh_loop, daemon=True)
        self.thread.start()

    def stop(self):
        """Stop the background refresh loop.

        A refresh already in flight is allowed to finish, which can take as
        long as its remote classification calls. If join_timeout elapses
        first, `running` stays True until that refresh returns.
        """
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=self.join_timeout)

    def _refresh_loop(self):
        while not self._stop_event.wait(self.interval):
            try:
                self.controller.refresh()
            except Exception as e:
                print(f"Error in background refresh: {e}")
