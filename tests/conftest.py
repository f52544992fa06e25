"""Shared fixtures for the category switcher tests."""

import os
import threading
from types import SimpleNamespace

import pytest

from category_switcher.cache import ClassificationCache, reset_classification_cache
from category_switcher.categories import Category
from category_switcher.config import Config
from category_switcher.index import build_index
from category_switcher.models import AppRecord


def make_response(content):
    """Build an object shaped like an OpenAI chat completion."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeChatClient:
    """Stand-in for openai.OpenAI that answers from a table or raises."""

    def __init__(self, answers=None, default="Other", error=None):
        self.answers = dict(answers or {})
        self.default = default
        self.error = error
        self.calls = []
        self._lock = threading.Lock()
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        prompt = kwargs["messages"][0]["content"]
        with self._lock:
            self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        for identifier, answer in self.answers.items():
            if f"Bundle ID: {identifier}\n" in prompt:
                return make_response(answer)
        return make_response(self.default)

    def identifiers(self):
        """Bundle ids named in the prompts received so far."""
        found = []
        for call in self.calls:
            for line in call["messages"][0]["content"].splitlines():
                if line.startswith("Bundle ID: "):
                    found.append(line[len("Bundle ID: "):])
        return found


@pytest.fixture(autouse=True)
def _reset_cache_singleton():
    reset_classification_cache()
    yield
    reset_classification_cache()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove switcher settings from the environment."""
    for name in list(os.environ):
        if name.startswith("SWITCHER_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return monkeypatch


@pytest.fixture
def settings_path(tmp_path):
    return str(tmp_path / "settings.json")


@pytest.fixture
def cache(settings_path):
    return ClassificationCache(settings_path=settings_path)


@pytest.fixture
def remote_config(clean_env, settings_path):
    clean_env.setenv("SWITCHER_LLM_API_KEY", "test-key")
    clean_env.setenv("SWITCHER_SETTINGS_PATH", settings_path)
    return Config()


@pytest.fixture
def offline_config(clean_env, settings_path):
    clean_env.setenv("SWITCHER_SETTINGS_PATH", settings_path)
    return Config()


def record(name, identifier, category):
    return AppRecord(identifier=identifier, name=name, category=category)


@pytest.fixture
def sample_index():
    """Two productivity apps, one communication app, three media apps."""
    return build_index([
        record("Word", "com.microsoft.Word", Category.PRODUCTIVITY),
        record("Slack", "com.tinyspeck.slackmacgap", Category.COMMUNICATION),
        record("Spotify", "com.spotify.client", Category.MEDIA),
        record("Excel", "com.microsoft.Excel", Category.PRODUCTIVITY),
        record("Music", "com.apple.Music", Category.MEDIA),
        record("Netflix", "com.netflix.app", Category.MEDIA),
    ])
