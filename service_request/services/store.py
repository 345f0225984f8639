"""Persistence for service request submissions."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Sequence

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from service_request.db.session import get_session
from service_request.errors import StoreUnavailable
from service_request.models import ServiceRequest, ServiceRequestCreate
from service_request.models.submission import utcnow

logger = logging.getLogger(__name__)


class SubmissionStore:
    """Single-table store keyed by the generated ``id``.

    Each operation checks out its own pooled connection, so one store can be
    shared by concurrent requests. Inserts are serialized so that id order,
    write order and ``created_at`` order agree.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._write_lock = threading.Lock()
        self._last_created_at: datetime | None = None

    def _stamp(self) -> datetime:
        now = utcnow()
        if self._last_created_at is not None and now < self._last_created_at:
            now = self._last_created_at
        self._last_created_at = now
        return now

    def insert(self, fields: ServiceRequestCreate) -> ServiceRequest:
        row = ServiceRequest.model_validate(fields.model_dump())
        try:
            with self._write_lock, get_session(self.engine) as db:
                row.created_at = self._stamp()
                db.add(row)
                db.commit()
                db.refresh(row)
        except SQLAlchemyError as exc:
            logger.error("Failed to insert service request", exc_info=True)
            raise StoreUnavailable() from exc
        logger.info("Stored service request %s", row.id, extra={"submission_id": row.id})
        return row

    def get_all(self) -> Sequence[ServiceRequest]:
        stmt = select(ServiceRequest).order_by(
            ServiceRequest.created_at.desc(), ServiceRequest.id.desc()
        )
        try:
            with get_session(self.engine) as db:
                return db.exec(stmt).all()
        except SQLAlchemyError as exc:
            logger.error("Failed to list service requests", exc_info=True)
            raise StoreUnavailable("Internal server error fetching data.") from exc

    def get_by_id(self, submission_id: int) -> ServiceRequest | None:
        try:
            with get_session(self.engine) as db:
                return db.get(ServiceRequest, submission_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to load service request %s", submission_id, exc_info=True)
            raise StoreUnavailable() from exc

    def count(self) -> int:
        try:
            with get_session(self.engine) as db:
                return db.exec(select(func.count()).select_from(ServiceRequest)).one()
        except SQLAlchemyError as exc:
            logger.error("Failed to count service requests", exc_info=True)
            raise StoreUnavailable() from exc


__all__ = ["SubmissionStore"]
