"""ASGI entrypoint: ``uvicorn service_request.main:app``."""

from service_request import create_app

app = create_app()
