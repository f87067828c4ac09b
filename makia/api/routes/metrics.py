"""Prometheus scrape endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from makia.api.dependencies import get_store
from makia.core.session import SessionStore
from makia.observability.metrics import get_content_type, get_metrics, record_sessions_active

router = APIRouter()


@router.get("/metrics")
async def metrics(store: SessionStore = Depends(get_store)) -> Response:
    """Turn, latency and session metrics.

    The active sessions gauge is refreshed from the store on every scrape,
    so it stays accurate between sweeps.
    """
    record_sessions_active(len(store))
    return Response(content=get_metrics(), media_type=get_content_type())
