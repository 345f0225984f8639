"""Admin login and diagnostics endpoints."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from service_request.api.deps import get_auth, get_event_log, require_admin
from service_request.core.logging_config import get_log_buffer
from service_request.core.security import AdminAuth, AdminIdentity
from service_request.services.events import EventLog

router = APIRouter(prefix="/admin", tags=["admin"])


class LoginPayload(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginPayload, auth: AdminAuth = Depends(get_auth)) -> TokenResponse:
    return TokenResponse(token=auth.login(payload.username, payload.password))


@router.get("/events")
def list_events(
    limit: int = Query(50, ge=1, le=200),
    admin: AdminIdentity = Depends(require_admin),
    events: EventLog = Depends(get_event_log),
) -> dict[str, list[dict[str, Any]]]:
    """Background failures, such as notification emails that could not be sent."""
    return {"events": [event.to_dict() for event in events.recent(limit)]}


@router.get("/logs")
def list_logs(
    limit: int = Query(100, ge=1, le=500),
    level: Optional[str] = Query(None, description="Minimum level, e.g. WARNING"),
    admin: AdminIdentity = Depends(require_admin),
) -> dict[str, list[dict[str, Any]]]:
    return {"logs": get_log_buffer(limit=limit, level=level)}


__all__ = ["router"]
