# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Generative text provider client.

The provider is an untrusted, optional collaborator.  Callers go through
:func:`request_text`, which turns every provider failure into ``None`` so
the deterministic fallback path can take over.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

from footprint_audit.config import ProviderSettings, Settings

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when the text provider cannot produce a response."""


class TextProvider(Protocol):
    """Anything that turns a system + user prompt into free-form text."""

    def generate(self, system: str, prompt: str) -> str:
        ...


class ChatCompletionsProvider:
    """Client for an OpenAI-compatible ``/chat/completions`` endpoint.

    One attempt per call, no retries; a bounded timeout applies.
    """

    def __init__(
        self,
        api_key: str,
        settings: ProviderSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or ProviderSettings()
        self._api_key = api_key
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        """Create an httpx client with authentication and timeout settings."""
        return httpx.Client(
            base_url=self.settings.base_url.rstrip("/"),
            timeout=float(self.settings.timeout_seconds),
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Accept": "application/json",
            },
            transport=self._transport,
        )

    def generate(self, system: str, prompt: str) -> str:
        payload: dict[str, Any] = {
            "model": self.settings.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
        }
        try:
            client = self._get_client()
        except (httpx.InvalidURL, ValueError) as exc:
            # bad base_url, or an API key that cannot go in a header
            raise ProviderError(f"Provider client misconfigured: {exc}") from exc
        try:
            response = client.post("/chat/completions", json=payload)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ProviderError(f"Provider request failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"Provider returned non-JSON body: {exc}") from exc
        finally:
            client.close()

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(f"Unexpected provider payload shape: {exc!r}") from exc
        if not isinstance(content, str) or not content.strip():
            raise ProviderError("Provider returned empty content")
        return content


def build_provider(settings: Settings | None = None) -> Optional[TextProvider]:
    """Build the configured provider, or ``None`` for the static-only path.

    A missing API key is not an error: it simply disables generation.
    """
    settings = settings or Settings()
    if not settings.provider.enabled:
        logger.info("Text provider disabled by configuration")
        return None
    try:
        api_key = settings.provider.api_key.resolve()
    except ValueError:
        logger.info("No provider API key configured; using static analysis only")
        return None
    return ChatCompletionsProvider(api_key, settings.provider)


def request_text(
    provider: Optional[TextProvider], system: str, prompt: str
) -> Optional[str]:
    """Ask *provider* for text, returning ``None`` on absence or failure."""
    if provider is None:
        return None
    try:
        return provider.generate(system, prompt)
    except ProviderError as exc:
        logger.warning("Text provider unavailable, falling back: %s", exc)
        return None
