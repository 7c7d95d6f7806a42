# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI application factory for the footprint audit REST API."""

from __future__ import annotations

import logging
from typing import Optional

from footprint_audit import check_dependency

check_dependency("fastapi", "pip install -e '.[api]'")

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from footprint_audit.ai.provider import TextProvider, build_provider  # noqa: E402
from footprint_audit.api.routes import router  # noqa: E402
from footprint_audit.config import Settings, load_settings  # noqa: E402
from footprint_audit.data.reference import ReferenceData, load_reference_data  # noqa: E402

logger = logging.getLogger(__name__)

_UNSET = object()


def create_app(
    settings: Settings | None = None,
    provider: Optional[TextProvider] | object = _UNSET,
    reference: ReferenceData | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings:
        Loaded settings; read from ``FOOTPRINT_AUDIT_CONFIG`` when omitted.
    provider:
        Text provider to use.  Pass ``None`` explicitly to force the
        static-only path; omit it to build one from *settings*.
    reference:
        Preloaded reference tables.  Loaded once here when omitted.

    Returns
    -------
    FastAPI
        A fully configured application instance with CORS middleware
        and all API routes included.
    """
    settings = settings or load_settings()
    if reference is None:
        reference = load_reference_data(settings.reference_dir)
    if provider is _UNSET:
        provider = build_provider(settings)

    app = FastAPI(
        title="Footprint Audit API",
        description=(
            "REST API for small-business carbon footprint analysis. "
            "Score monthly utility usage, get recommendations with ROI, "
            "and explore what-if reduction scenarios."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS: allow all origins for development; tighten in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.reference = reference
    app.state.provider = provider
    logger.info(
        "API ready (provider %s)", "configured" if provider is not None else "disabled"
    )

    app.include_router(router)

    return app
