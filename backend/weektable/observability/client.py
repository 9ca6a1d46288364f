"""Lazily created Opik client shared by schedule traces and metric events.

Tracing is opt-in: nothing is exported unless OPIK_ENABLED is true and an
OPIK_API_KEY is configured. The first call decides; later calls reuse that
outcome until ``reset_opik_client`` is called (tests and settings reloads).
"""
from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from opik import Opik

from weektable.core.config import settings

logger = logging.getLogger(__name__)

_client: Optional[Opik] = None
_client_lock = Lock()
_init_attempted = False


def init_opik() -> Optional[Opik]:
    """Return the Opik client for the configured project, or None when tracing is off."""
    global _client, _init_attempted

    with _client_lock:
        if _client is not None or _init_attempted:
            return _client
        _init_attempted = True

    if not settings.opik_enabled:
        logger.debug("Schedule tracing disabled (OPIK_ENABLED is false).")
        return None

    if not settings.opik_api_key:
        logger.warning("Schedule tracing requested but OPIK_API_KEY is not set; traces will not be exported.")
        return None

    try:
        client = Opik(project_name=settings.opik_project, api_key=settings.opik_api_key)
    except Exception as exc:  # pragma: no cover - network/credential failure
        logger.warning("Could not connect to Opik project %s, schedule tracing disabled: %s", settings.opik_project, exc)
        return None

    logger.info("Exporting schedule traces to Opik project %s.", settings.opik_project)
    _client = client
    return _client


def get_opik_client() -> Optional[Opik]:
    if _client is not None:
        return _client
    return init_opik()


def reset_opik_client() -> None:
    """Drop the cached client and decision so the next lookup re-reads settings."""
    global _client, _init_attempted

    with _client_lock:
        _client = None
        _init_attempted = False
