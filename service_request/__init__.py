"""Service request FastAPI application package."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .api.errors import register_exception_handlers
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.security import AdminAuth
from .db.session import create_db_engine, init_db
from .services.events import EventLog
from .services.notifier import Notifier, build_notifier
from .services.store import SubmissionStore
from .services.submissions import SubmissionService
from .services.task_queue import TaskQueue


def create_app(settings: Settings | None = None, notifier: Notifier | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings)
    logger = logging.getLogger(__name__)
    logger.info("Initializing %s", settings.app_name)

    engine = create_db_engine(settings.database_url)
    events = EventLog()
    task_queue = TaskQueue(events)
    submission_service = SubmissionService(
        store=SubmissionStore(engine),
        notifier=notifier or build_notifier(settings),
        dispatcher=task_queue,
        recipient=settings.admin_email,
    )

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.settings = settings
    app.state.engine = engine
    app.state.events = events
    app.state.task_queue = task_queue
    app.state.auth = AdminAuth(settings)
    if app.state.auth.uses_default_secret:
        logger.warning("JWT_SECRET is not set; admin tokens are signed with the built-in default secret")
    app.state.submission_service = submission_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {
            "message": (
                f"{settings.app_name} is online. Try GET "
                f"{settings.api_prefix}/health for a health check."
            )
        }

    @app.on_event("startup")
    def _startup() -> None:
        init_db(engine)
        task_queue.start()
        logger.info("Database initialized; notification worker started")

    @app.on_event("shutdown")
    def _shutdown() -> None:
        task_queue.stop(timeout=settings.task_queue_join_timeout)
        engine.dispose()

    return app


__all__ = ["create_app"]
