import json
import smtplib

import httpx
import pytest

from service_request.errors import NotifyError
from service_request.models import ServiceRequest
from service_request.services import notifier as notifier_module
from service_request.services.notifier import (
    SendGridNotifier,
    SmtpNotifier,
    build_notifier,
    compose_notification,
)


def _sendgrid(handler, api_key="SG.test") -> SendGridNotifier:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return SendGridNotifier(api_key=api_key, sender="noreply@example.com", client=client)


def test_compose_notification_escapes_user_text():
    submission = ServiceRequest(
        id=7,
        name="<b>Eve</b>",
        contact_number="555",
        service="Web Development",
        description="<script>alert(1)</script>",
    )

    subject, body = compose_notification(submission)

    assert subject == "New Service Request: Web Development"
    assert "&lt;b&gt;Eve&lt;/b&gt;" in body
    assert "<script>" not in body
    assert "admin dashboard" in body


def test_sendgrid_posts_message():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202)

    _sendgrid(handler).send("owner@example.com", "Hello", "<p>Body</p>")

    [request] = seen
    assert request.headers["Authorization"] == "Bearer SG.test"
    payload = json.loads(request.content)
    assert payload["personalizations"] == [{"to": [{"email": "owner@example.com"}]}]
    assert payload["from"] == {"email": "noreply@example.com"}
    assert payload["subject"] == "Hello"
    assert payload["content"] == [{"type": "text/html", "value": "<p>Body</p>"}]


def test_sendgrid_error_status_raises_with_diagnostic():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="The provided authorization grant is invalid")

    with pytest.raises(NotifyError) as excinfo:
        _sendgrid(handler).send("owner@example.com", "Hello", "Body")

    assert "401" in excinfo.value.diagnostic
    assert "authorization grant" in excinfo.value.diagnostic


def test_sendgrid_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NotifyError) as excinfo:
        _sendgrid(handler).send("owner@example.com", "Hello", "Body")

    assert "connection refused" in excinfo.value.diagnostic


def test_sendgrid_without_api_key_fails_without_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(202)

    with pytest.raises(NotifyError):
        _sendgrid(handler, api_key="").send("owner@example.com", "Hello", "Body")

    assert calls == []


class FakeSMTP:
    instances: list["FakeSMTP"] = []
    fail = False

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.messages = []
        self.logged_in = None
        self.tls = False
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.tls = True

    def login(self, username, password):
        self.logged_in = (username, password)

    def send_message(self, msg):
        if FakeSMTP.fail:
            raise smtplib.SMTPRecipientsRefused({msg["To"]: (550, b"no such user")})
        self.messages.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail = False
    monkeypatch.setattr(notifier_module.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def test_smtp_sends_html_message(fake_smtp):
    smtp = SmtpNotifier(sender="noreply@example.com", host="mail", port=587, username="u", password="p", use_tls=True)

    smtp.send("owner@example.com", "Hello", "<p>Body</p>")

    [conn] = fake_smtp.instances
    assert (conn.host, conn.port, conn.tls, conn.logged_in) == ("mail", 587, True, ("u", "p"))
    [msg] = conn.messages
    assert msg["To"] == "owner@example.com"
    assert msg["Subject"] == "Hello"
    assert msg.get_content_type() == "text/html"


def test_smtp_failure_raises_notify_error(fake_smtp):
    fake_smtp.fail = True

    with pytest.raises(NotifyError):
        SmtpNotifier(sender="noreply@example.com").send("owner@example.com", "Hello", "Body")


def test_build_notifier_selects_backend(settings):
    assert isinstance(build_notifier(settings), SendGridNotifier)
    assert isinstance(build_notifier(settings.model_copy(update={"notifier_backend": "smtp"})), SmtpNotifier)
    with pytest.raises(ValueError):
        build_notifier(settings.model_copy(update={"notifier_backend": "pigeon"}))
