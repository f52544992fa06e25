"""Tests for the remote classifier."""

import httpx
import openai
import pytest

from category_switcher.categories import Category
from category_switcher.exceptions import (
    ClassifierConnectionError,
    ClassifierNotConfiguredError,
    ClassifierParseError,
)
from category_switcher.remote import RemoteClassifier, build_prompt

from conftest import FakeChatClient


class TestBuildPrompt:

    def test_names_every_label_and_the_app(self):
        prompt = build_prompt("Slack", "com.tinyspeck.slackmacgap")
        for label in Category.labels():
            assert label in prompt
        assert "App Name: Slack" in prompt
        assert "Bundle ID: com.tinyspeck.slackmacgap\n" in prompt
        assert "ONLY the category name" in prompt


class TestRemoteClassifier:

    def test_exact_label(self, remote_config):
        client = FakeChatClient(answers={"com.tinyspeck.slackmacgap": "Communication"})
        remote = RemoteClassifier(remote_config, client=client)

        assert remote.classify("Slack", "com.tinyspeck.slackmacgap") == Category.COMMUNICATION
        assert len(client.calls) == 1
        call = client.calls[0]
        assert call["model"] == remote_config.llm_model
        assert call["timeout"] == remote_config.llm_timeout

    def test_label_with_surrounding_whitespace(self, remote_config):
        client = FakeChatClient(default="  Gaming\n")
        remote = RemoteClassifier(remote_config, client=client)

        assert remote.classify("Steam", "com.valvesoftware.steam") == Category.GAMING

    def test_inexact_answer_is_a_parse_error(self, remote_config):
        client = FakeChatClient(default="probably Development")
        remote = RemoteClassifier(remote_config, client=client)

        with pytest.raises(ClassifierParseError):
            remote.classify("Terminal", "com.apple.Terminal")

    def test_empty_answer_is_a_parse_error(self, remote_config):
        client = FakeChatClient(default=None)
        remote = RemoteClassifier(remote_config, client=client)

        with pytest.raises(ClassifierParseError):
            remote.classify("Terminal", "com.apple.Terminal")

    def test_non_string_answer_is_a_parse_error(self, remote_config):
        client = FakeChatClient(default=["Development"])
        remote = RemoteClassifier(remote_config, client=client)

        with pytest.raises(ClassifierParseError):
            remote.classify("Terminal", "com.apple.Terminal")

    def test_transport_failure(self, remote_config):
        client = FakeChatClient(error=ConnectionResetError("reset by peer"))
        remote = RemoteClassifier(remote_config, client=client)

        with pytest.raises(ClassifierConnectionError):
            remote.classify("Terminal", "com.apple.Terminal")

    def test_timeout(self, remote_config):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client = FakeChatClient(error=openai.APITimeoutError(request=request))
        remote = RemoteClassifier(remote_config, client=client)

        with pytest.raises(ClassifierConnectionError, match="timed out"):
            remote.classify("Terminal", "com.apple.Terminal")

    def test_not_configured(self, offline_config):
        remote = RemoteClassifier(offline_config)

        assert remote.client is None
        with pytest.raises(ClassifierNotConfiguredError):
            remote.classify("Terminal", "com.apple.Terminal")

    def test_builds_openai_client_when_configured(self, remote_config):
        remote = RemoteClassifier(remote_config)
        assert isinstance(remote.client, openai.OpenAI)
