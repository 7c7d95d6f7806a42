# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Generative text provider client and response reconciliation."""

from footprint_audit.ai.provider import (
    ChatCompletionsProvider,
    ProviderError,
    TextProvider,
    build_provider,
    request_text,
)
from footprint_audit.ai.reconciler import ParseResult, ReconciledSections, ResponseReconciler

__all__ = [
    "ChatCompletionsProvider",
    "ParseResult",
    "ProviderError",
    "ReconciledSections",
    "ResponseReconciler",
    "TextProvider",
    "build_provider",
    "request_text",
]
