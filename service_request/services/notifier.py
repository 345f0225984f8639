"""Outbound notification email backends."""

from __future__ import annotations

import html
import logging
import smtplib
from email.message import EmailMessage
from typing import Protocol

import httpx

from service_request.core.config import Settings
from service_request.errors import NotifyError
from service_request.models import ServiceRequest

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, recipient: str, subject: str, body: str) -> None:
        """Deliver one HTML email or raise ``NotifyError``."""


def compose_notification(submission: ServiceRequest) -> tuple[str, str]:
    """Return the subject and HTML body announcing ``submission`` to the admin."""

    subject = f"New Service Request: {submission.service}"
    body = f"""
<div style="font-family: Arial, sans-serif; padding: 20px; border: 1px solid #ddd;">
  <h2 style="color: #333;">New Request from {html.escape(submission.name)}</h2>
  <p>A new service request has been submitted through the form.</p>
  <hr style="border: 0; border-top: 1px solid #eee;">
  <p><strong>Contact Number:</strong> {html.escape(submission.contact_number)}</p>
  <p><strong>Service Type:</strong> {html.escape(submission.service)}</p>
  <p><strong>Project Description:</strong></p>
  <div style="padding: 10px; border: 1px solid #ccc; background-color: #f9f9f9;">
    {html.escape(submission.description)}
  </div>
  <p style="margin-top: 20px; font-size: 0.9em; color: #777;">
    Please log into the admin dashboard to review.
  </p>
</div>
"""
    return subject, body


class SendGridNotifier:
    """Send mail through the SendGrid v3 HTTP API."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        api_url: str = "https://api.sendgrid.com/v3/mail/send",
        timeout: float = 15.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.sender = sender
        self.api_url = api_url
        self.timeout = timeout
        self._client = client

    def send(self, recipient: str, subject: str, body: str) -> None:
        if not self.api_key:
            raise NotifyError("SendGrid API key is not configured (EMAIL_PASS is empty).")

        payload = {
            "personalizations": [{"to": [{"email": recipient}]}],
            "from": {"email": self.sender},
            "subject": subject,
            "content": [{"type": "text/html", "value": body}],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            if self._client is not None:
                response = self._client.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("SendGrid request failed: %s", exc)
            raise NotifyError(f"Failed to send email via SendGrid: {exc}") from exc

        if response.is_error:
            logger.warning(
                "SendGrid rejected message",
                extra={"status_code": response.status_code, "response_body": response.text, "recipient": recipient},
            )
            raise NotifyError(
                f"Failed to send email via SendGrid: HTTP {response.status_code} {response.text}".strip()
            )
        logger.info("Email notification sent to %s", recipient, extra={"recipient": recipient})


class SmtpNotifier:
    """Send mail through an SMTP relay."""

    def __init__(
        self,
        sender: str,
        host: str = "localhost",
        port: int = 25,
        username: str = "",
        password: str = "",
        use_tls: bool = False,
        timeout: float = 15.0,
    ) -> None:
        self.sender = sender
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def send(self, recipient: str, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.set_content(body, subtype="html")
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("SMTP delivery to %s failed: %s", recipient, exc)
            raise NotifyError(f"Failed to send email via SMTP: {exc}") from exc
        logger.info("Email notification sent to %s", recipient, extra={"recipient": recipient})


def build_notifier(settings: Settings) -> Notifier:
    backend = settings.notifier_backend.lower()
    if backend == "sendgrid":
        if not settings.sendgrid_api_key:
            logger.error("SENDGRID_API_KEY (EMAIL_PASS) is missing; email notifications will fail")
        return SendGridNotifier(
            api_key=settings.sendgrid_api_key,
            sender=settings.sender_email,
            api_url=settings.sendgrid_api_url,
            timeout=settings.notifier_timeout,
        )
    if backend == "smtp":
        return SmtpNotifier(
            sender=settings.sender_email,
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.notifier_timeout,
        )
    raise ValueError(f"Unknown notifier backend: {settings.notifier_backend}")


__all__ = [
    "Notifier",
    "SendGridNotifier",
    "SmtpNotifier",
    "build_notifier",
    "compose_notification",
]
