"""API dependencies."""

from __future__ import annotations

from fastapi import Depends, Header, Request

from service_request.core.security import AdminAuth, AdminIdentity, parse_bearer
from service_request.services.events import EventLog
from service_request.services.submissions import SubmissionService


def get_submission_service(request: Request) -> SubmissionService:
    return request.app.state.submission_service


def get_auth(request: Request) -> AdminAuth:
    return request.app.state.auth


def get_event_log(request: Request) -> EventLog:
    return request.app.state.events


def require_admin(
    authorization: str | None = Header(default=None),
    auth: AdminAuth = Depends(get_auth),
) -> AdminIdentity:
    """Reject the request unless it carries a valid admin bearer token."""
    return auth.authenticate(parse_bearer(authorization))
