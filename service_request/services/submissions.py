"""Submission workflow: persist, then notify the admin."""

from __future__ import annotations

import logging
from typing import Mapping, Protocol, Sequence

import pydantic

from service_request.errors import NotFound, ValidationError
from service_request.models import ServiceRequest, ServiceRequestCreate
from service_request.services.notifier import Notifier, compose_notification
from service_request.services.store import SubmissionStore
from service_request.services.task_queue import Task

logger = logging.getLogger(__name__)

# Public form field -> storage column.
FORM_FIELDS: dict[str, str] = {
    "fullName": "name",
    "contactNumber": "contact_number",
    "serviceType": "service",
    "projectDescription": "description",
}


class Dispatcher(Protocol):
    def submit(self, task: Task) -> None: ...


def validate_fields(fields: Mapping[str, object]) -> ServiceRequestCreate:
    """Map public form fields onto a storable record.

    Raises ``ValidationError`` naming every field that is absent, not a
    string, or blank.
    """

    missing = []
    values: dict[str, str] = {}
    for form_name, column in FORM_FIELDS.items():
        value = fields.get(form_name)
        if not isinstance(value, str) or not value.strip():
            missing.append(form_name)
            continue
        values[column] = value
    if missing:
        raise ValidationError(missing)
    try:
        return ServiceRequestCreate(**values)
    except pydantic.ValidationError as exc:
        columns = {column: form_name for form_name, column in FORM_FIELDS.items()}
        invalid = [columns.get(str(err["loc"][0]), str(err["loc"][0])) for err in exc.errors()]
        raise ValidationError(invalid, "Field values are too long.") from exc


class SubmissionService:
    def __init__(
        self,
        store: SubmissionStore,
        notifier: Notifier,
        dispatcher: Dispatcher,
        recipient: str,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.dispatcher = dispatcher
        self.recipient = recipient

    def submit(self, fields: Mapping[str, object]) -> ServiceRequest:
        """Store a new request and queue the admin email without waiting for it."""

        record = validate_fields(fields)
        submission = self.store.insert(record)
        self.dispatcher.submit(
            Task(
                name=f"notify-submission-{submission.id}",
                func=lambda: self._notify(submission),
                context={"submission_id": submission.id},
            )
        )
        return submission

    def list(self) -> Sequence[ServiceRequest]:
        return self.store.get_all()

    def resend(self, submission_id: int) -> ServiceRequest:
        """Email the admin about an existing submission, blocking on delivery."""

        submission = self.store.get_by_id(submission_id)
        if submission is None:
            raise NotFound()
        self._notify(submission)
        logger.info("Resent notification for submission %s", submission_id, extra={"submission_id": submission_id})
        return submission

    def _notify(self, submission: ServiceRequest) -> None:
        subject, body = compose_notification(submission)
        self.notifier.send(self.recipient, subject, body)


__all__ = ["FORM_FIELDS", "SubmissionService", "validate_fields"]
