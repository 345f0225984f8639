"""Resend the admin notification email for one stored submission."""

from __future__ import annotations

import argparse
import sys

from service_request.core.config import settings
from service_request.core.logging_config import setup_logging
from service_request.db.session import create_db_engine
from service_request.errors import NotFound, NotifyError, StoreUnavailable
from service_request.services.notifier import build_notifier
from service_request.services.store import SubmissionStore
from service_request.services.submissions import SubmissionService
from service_request.services.task_queue import TaskQueue


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Resend the notification email for a submission.")
    parser.add_argument("submission_id", type=int, help="Submission id to resend.")
    parser.add_argument("--to", type=str, default=None, help="Override recipient (default settings.admin_email).")
    args = parser.parse_args(argv)

    setup_logging(settings.model_copy(update={"service_name": "service-request-cli"}))
    engine = create_db_engine(settings.database_url)
    service = SubmissionService(
        store=SubmissionStore(engine),
        notifier=build_notifier(settings),
        dispatcher=TaskQueue(),
        recipient=args.to or settings.admin_email,
    )
    try:
        submission = service.resend(args.submission_id)
    except NotFound:
        print(f"Submission {args.submission_id} not found.")
        return 1
    except (NotifyError, StoreUnavailable) as exc:
        print(f"Resend failed: {exc.message}")
        return 2
    finally:
        engine.dispose()
    print(f"Resent notification for submission {submission.id} to {service.recipient}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
