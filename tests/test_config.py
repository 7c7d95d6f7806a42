# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for settings loading and the text provider client."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from footprint_audit import check_dependency
from footprint_audit.ai.provider import (
    ChatCompletionsProvider,
    ProviderError,
    build_provider,
    request_text,
)
from footprint_audit.config import CredentialRef, ProviderSettings, Settings, load_settings


class TestCheckDependency:
    def test_present(self):
        check_dependency("json", "n/a")

    def test_missing(self):
        with pytest.raises(ImportError, match="pip install nothing"):
            check_dependency("no_such_package_xyz", "pip install nothing")


class TestSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings.provider.model == "gpt-4o-mini"
        assert settings.provider.timeout_seconds == 30
        assert settings.reference_dir is None

    def test_yaml(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "provider:\n"
            "  model: local-model\n"
            "  base_url: http://localhost:8080/v1\n"
            "  api_key:\n"
            "    value: inline-key\n"
            "log_level: DEBUG\n"
        )
        settings = load_settings(path)
        assert settings.provider.model == "local-model"
        assert settings.provider.api_key.resolve() == "inline-key"
        assert settings.log_level == "DEBUG"

    def test_env_var_path(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("provider:\n  enabled: false\n")
        monkeypatch.setenv("FOOTPRINT_AUDIT_CONFIG", str(path))
        assert load_settings().provider.enabled is False

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_log_level_normalized(self):
        assert Settings(log_level="info").log_level == "INFO"

    def test_unknown_log_level(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("log_level: LOUD\n")
        with pytest.raises(ValueError, match="log_level"):
            load_settings(path)


class TestCredentialRef:
    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("MY_KEY", "from-env")
        assert CredentialRef(env_var="MY_KEY").resolve() == "from-env"

    def test_file(self, tmp_path: Path):
        key_file = tmp_path / "key.txt"
        key_file.write_text("from-file\n")
        assert CredentialRef(env_var=None, file_path=str(key_file)).resolve() == "from-file"

    def test_nothing_raises(self):
        with pytest.raises(ValueError):
            CredentialRef().resolve()


class TestBuildProvider:
    def test_no_key_is_none(self):
        assert build_provider(Settings()) is None

    def test_disabled_is_none(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        settings = Settings(provider=ProviderSettings(enabled=False))
        assert build_provider(settings) is None

    def test_key_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert isinstance(build_provider(Settings()), ChatCompletionsProvider)


class TestChatCompletionsProvider:
    def _provider(self, handler) -> ChatCompletionsProvider:
        return ChatCompletionsProvider(
            "sk-test",
            ProviderSettings(base_url="https://llm.test/v1"),
            transport=httpx.MockTransport(handler),
        )

    def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200, json={"choices": [{"message": {"content": "hello"}}]}
            )

        assert self._provider(handler).generate("sys", "prompt") == "hello"
        assert seen["url"] == "https://llm.test/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"]["messages"][0] == {"role": "system", "content": "sys"}
        assert seen["body"]["model"] == "gpt-4o-mini"

    def test_http_error(self):
        provider = self._provider(lambda request: httpx.Response(503, text="busy"))
        with pytest.raises(ProviderError):
            provider.generate("sys", "prompt")

    def test_unexpected_shape(self):
        provider = self._provider(lambda request: httpx.Response(200, json={"choices": []}))
        with pytest.raises(ProviderError):
            provider.generate("sys", "prompt")

    def test_empty_content(self):
        provider = self._provider(
            lambda request: httpx.Response(200, json={"choices": [{"message": {"content": " "}}]})
        )
        with pytest.raises(ProviderError):
            provider.generate("sys", "prompt")

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ProviderError):
            self._provider(handler).generate("sys", "prompt")

    @pytest.mark.parametrize(
        "api_key, base_url",
        [
            ("sk-tést", "https://llm.test/v1"),
            ("sk-test", "http://[::1"),
        ],
    )
    def test_misconfigured_client(self, api_key, base_url):
        provider = ChatCompletionsProvider(
            api_key,
            ProviderSettings(base_url=base_url),
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )
        with pytest.raises(ProviderError):
            provider.generate("sys", "prompt")
        assert request_text(provider, "sys", "prompt") is None


class TestRequestText:
    def test_none_provider(self):
        assert request_text(None, "s", "p") is None

    def test_failure_becomes_none(self, failing_provider):
        assert request_text(failing_provider, "s", "p") is None

    def test_success(self, fake_provider):
        fake_provider.response = "ok"
        assert request_text(fake_provider, "s", "p") == "ok"
