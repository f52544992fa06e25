"""Tests for classification routing and batch classification."""

import threading
import time

from category_switcher.categories import Category
from category_switcher.classifier import Classifier
from category_switcher.models import AppSnapshot
from category_switcher.remote import RemoteClassifier

from conftest import FakeChatClient


def make_classifier(cache, config, client=None, max_workers=None):
    remote = RemoteClassifier(config, client=client) if client is not None else None
    return Classifier(cache, remote=remote, max_workers=max_workers)


class TestClassify:

    def test_cache_always_wins(self, cache, remote_config):
        cache.set("com.apple.Terminal", Category.COMMUNICATION)
        client = FakeChatClient(default="Development")
        classifier = make_classifier(cache, remote_config, client)

        assert classifier.classify("Terminal", "com.apple.Terminal") == Category.COMMUNICATION
        assert client.calls == []

    def test_remote_result_is_cached(self, cache, remote_config):
        client = FakeChatClient(default="Utilities")
        classifier = make_classifier(cache, remote_config, client)

        assert classifier.classify("Raycast", "com.raycast.macos") == Category.UTILITIES
        assert cache.get("com.raycast.macos") == Category.UTILITIES

        # Repeated calls are answered from the cache
        for _ in range(3):
            assert classifier.classify("Raycast", "com.raycast.macos") == Category.UTILITIES
        assert len(client.calls) == 1

    def test_unrecognized_answer_falls_back_without_caching(self, cache, remote_config):
        client = FakeChatClient(default="probably Development")
        classifier = make_classifier(cache, remote_config, client)

        assert classifier.classify("Slack", "com.tinyspeck.slackmacgap") == Category.COMMUNICATION
        assert cache.get("com.tinyspeck.slackmacgap") is None

        # A later call retries the remote path
        client.default = "Productivity"
        assert classifier.classify("Slack", "com.tinyspeck.slackmacgap") == Category.PRODUCTIVITY
        assert len(client.calls) == 2
        assert cache.get("com.tinyspeck.slackmacgap") == Category.PRODUCTIVITY

    def test_non_string_answer_falls_back_without_caching(self, cache, remote_config, capsys):
        client = FakeChatClient(default=["Development"])
        classifier = make_classifier(cache, remote_config, client)

        assert classifier.classify("Terminal", "com.apple.Terminal") == Category.DEVELOPMENT
        assert cache.get("com.apple.Terminal") is None
        assert "Unrecognized category" in capsys.readouterr().out

    def test_transport_failure_falls_back_without_caching(self, cache, remote_config, capsys):
        client = FakeChatClient(error=TimeoutError("slow"))
        classifier = make_classifier(cache, remote_config, client)

        assert classifier.classify("Terminal", "com.apple.Terminal") == Category.DEVELOPMENT
        assert len(cache) == 0
        assert "Warning" in capsys.readouterr().out

    def test_offline_uses_rules_without_caching(self, cache, offline_config, capsys):
        classifier = make_classifier(cache, offline_config)

        assert classifier.classify("Finder", "com.apple.finder") == Category.OTHER
        assert len(cache) == 0
        assert capsys.readouterr().out == ""

    def test_unconfigured_remote_is_silent(self, cache, offline_config, capsys):
        classifier = Classifier(cache, remote=RemoteClassifier(offline_config))

        assert classifier.classify("Terminal", "com.apple.Terminal") == Category.DEVELOPMENT
        assert capsys.readouterr().out == ""


class SlowClient(FakeChatClient):
    """Answers later for apps earlier in the snapshot and tracks concurrency."""

    def __init__(self, delays, **kwargs):
        super().__init__(**kwargs)
        self.delays = delays
        self.in_flight = 0
        self.max_in_flight = 0
        self._count_lock = threading.Lock()

    def _create(self, **kwargs):
        prompt = kwargs["messages"][0]["content"]
        with self._count_lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            for identifier, delay in self.delays.items():
                if f"Bundle ID: {identifier}\n" in prompt:
                    time.sleep(delay)
            return super()._create(**kwargs)
        finally:
            with self._count_lock:
                self.in_flight -= 1


class TestClassifyBatch:

    def test_empty_snapshot(self, cache, offline_config):
        assert make_classifier(cache, offline_config).classify_batch([]) == []

    def test_offline_scenario(self, cache, offline_config):
        snapshot = [
            AppSnapshot("Terminal", "com.apple.Terminal"),
            AppSnapshot("Slack", "com.tinyspeck.slack"),
        ]

        records = make_classifier(cache, offline_config).classify_batch(snapshot)

        assert [(r.name, r.category) for r in records] == [
            ("Terminal", Category.DEVELOPMENT),
            ("Slack", Category.COMMUNICATION),
        ]

    def test_duplicates_dispatched_once(self, cache, remote_config):
        client = FakeChatClient(default="Utilities")
        snapshot = [
            AppSnapshot("Raycast", "com.raycast.macos"),
            AppSnapshot("Raycast", "com.raycast.macos"),
            AppSnapshot("Alfred", "com.runningwithcrayons.Alfred"),
        ]

        records = make_classifier(cache, remote_config, client).classify_batch(snapshot)

        assert sorted(client.identifiers()) == ["com.raycast.macos", "com.runningwithcrayons.Alfred"]
        assert [r.identifier for r in records] == ["com.raycast.macos", "com.runningwithcrayons.Alfred"]

    def test_cached_apps_are_not_dispatched(self, cache, remote_config):
        cache.set("com.apple.Terminal", Category.DEVELOPMENT)
        client = FakeChatClient(default="Communication")
        snapshot = [
            AppSnapshot("Terminal", "com.apple.Terminal"),
            AppSnapshot("Slack", "com.tinyspeck.slack"),
        ]

        records = make_classifier(cache, remote_config, client).classify_batch(snapshot)

        assert client.identifiers() == ["com.tinyspeck.slack"]
        assert [r.category for r in records] == [Category.DEVELOPMENT, Category.COMMUNICATION]

    def test_runs_concurrently_and_keeps_snapshot_order(self, cache, remote_config):
        identifiers = [f"com.example.app{i}" for i in range(4)]
        # Earlier apps finish last
        delays = {identifier: 0.05 * (4 - i) for i, identifier in enumerate(identifiers)}
        client = SlowClient(delays, answers={identifiers[0]: "Gaming"}, default="Finance & Business")
        snapshot = [AppSnapshot(f"App {i}", identifier) for i, identifier in enumerate(identifiers)]

        records = make_classifier(cache, remote_config, client).classify_batch(snapshot)

        assert [r.identifier for r in records] == identifiers
        assert records[0].category == Category.GAMING
        assert all(r.category == Category.FINANCE for r in records[1:])
        assert client.max_in_flight > 1

    def test_respects_worker_limit(self, cache, remote_config):
        identifiers = [f"com.example.app{i}" for i in range(6)]
        client = SlowClient({identifier: 0.02 for identifier in identifiers})
        snapshot = [AppSnapshot(identifier, identifier) for identifier in identifiers]

        make_classifier(cache, remote_config, client, max_workers=2).classify_batch(snapshot)

        assert client.max_in_flight <= 2
        assert len(client.calls) == 6

    def test_icon_handle_is_carried_through(self, cache, offline_config):
        icon = object()
        records = make_classifier(cache, offline_config).classify_batch(
            [AppSnapshot("Music", "com.apple.Music", icon)]
        )
        assert records[0].icon is icon

    def test_unbounded_by_default(self, cache, remote_config):
        identifiers = [f"com.example.app{i}" for i in range(6)]
        # Every call waits for all six to be in flight; a smaller pool breaks the barrier
        barrier = threading.Barrier(len(identifiers), timeout=5)

        class GatedClient(FakeChatClient):
            def _create(self, **kwargs):
                barrier.wait()
                return super()._create(**kwargs)

        client = GatedClient(default="Gaming")
        snapshot = [AppSnapshot(identifier, identifier) for identifier in identifiers]

        records = make_classifier(cache, remote_config, client).classify_batch(snapshot)

        assert [r.category for r in records] == [Category.GAMING] * len(identifiers)
        assert len(cache) == len(identifiers)
