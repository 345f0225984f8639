"""Service-layer utilities."""

from .events import Event, EventLog
from .notifier import Notifier, SendGridNotifier, SmtpNotifier, build_notifier, compose_notification
from .store import SubmissionStore
from .submissions import SubmissionService
from .task_queue import Task, TaskQueue

__all__ = [
    "Event",
    "EventLog",
    "Notifier",
    "SendGridNotifier",
    "SmtpNotifier",
    "build_notifier",
    "compose_notification",
    "SubmissionStore",
    "SubmissionService",
    "Task",
    "TaskQueue",
]
