"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from functools import partial
from typing import Any

import anyio
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail

from app.config import Settings, get_settings
from app.domain.entities import DigestSnapshot, Project, Reminder, Task, UserProfile
from app.infrastructure.email_templates import (
    RenderedEmail,
    render_digest_email,
    render_escalation_email,
    render_reminder_email,
)
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict) or not item.get("message"):
                    continue
                message = str(item["message"])
                if item.get("field"):
                    message = f"{message} (field: {item['field']})"
                if item.get("help"):
                    message = f"{message} (help: {item['help']})"
                messages.append(message)
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_delivery_failure(recipient: str, status_code: Any, body: Any) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error(
            "SendGrid delivery to %s failed with status %s: %s",
            recipient,
            status_code,
            details,
        )
    elif status_code:
        logger.error("SendGrid delivery to %s failed with status %s", recipient, status_code)
    elif details:
        logger.error("SendGrid delivery to %s failed: %s", recipient, details)
    else:
        logger.error("SendGrid delivery to %s failed", recipient)


def send_email(
    recipient: str,
    subject: str,
    html_content: str,
    text_content: str | None = None,
    *,
    settings: Settings | None = None,
) -> bool:
    """Send an email using the configured SendGrid credentials.

    With ``EMAIL_ENABLED`` switched off the message is only logged and counts
    as delivered, which keeps local environments free of outbound traffic.
    """

    settings = settings or get_settings()
    if not settings.email_enabled:
        logger.info("[email disabled] to=%s subject=%s", recipient, subject)
        return True

    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.warning("SendGrid configuration incomplete; skipping email to %s", recipient)
        return False

    message = Mail(
        from_email=From(settings.sendgrid_sender, settings.email_from_name),
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
        plain_text_content=text_content,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        status_code = getattr(exc, "status_code", None)
        body = getattr(exc, "body", None)
        if status_code is None and body is None:
            logger.exception("Error sending email to %s via SendGrid", recipient)
        else:
            _log_delivery_failure(recipient, status_code, body)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_delivery_failure(recipient, status_code, getattr(response, "body", None))
        return False

    logger.info("Email sent to %s: %s", recipient, subject)
    return True


class EmailService:
    """Render notification emails and hand them to the SendGrid transport.

    The transport is blocking, so every send runs in a worker thread.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    @property
    def platform_name(self) -> str:
        return self._settings.email_from_name

    async def send_email(
        self,
        recipient: str,
        subject: str,
        html_content: str,
        text_content: str | None = None,
    ) -> bool:
        return await anyio.to_thread.run_sync(
            partial(
                send_email,
                recipient,
                subject,
                html_content,
                text_content,
                settings=self._settings,
            )
        )

    async def _send_rendered(self, recipient: UserProfile, rendered: RenderedEmail) -> bool:
        try:
            return await self.send_email(
                recipient.email, rendered.subject, rendered.html, rendered.text
            )
        except Exception:
            logger.exception("Failed to send email to user %s", recipient.id)
            return False

    async def send_reminder_email(
        self,
        reminder: Reminder,
        task: Task | None,
        recipients: Sequence[UserProfile],
    ) -> list[bool]:
        """Send the reminder to each recipient; one result per recipient."""

        sends = [
            self._send_rendered(
                recipient,
                render_reminder_email(
                    reminder,
                    task,
                    recipient.display_name,
                    base_url=self._settings.app_base_url,
                    platform=self.platform_name,
                ),
            )
            for recipient in recipients
        ]
        return list(await asyncio.gather(*sends))

    async def send_escalation_email(
        self,
        reason: str,
        level: str,
        project: Project,
        recipients: Sequence[UserProfile],
        additional_info: str | None = None,
    ) -> list[bool]:
        sends = [
            self._send_rendered(
                recipient,
                render_escalation_email(
                    reason,
                    level,
                    project,
                    recipient.display_name,
                    additional_info,
                    base_url=self._settings.app_base_url,
                    platform=self.platform_name,
                ),
            )
            for recipient in recipients
        ]
        return list(await asyncio.gather(*sends))

    async def send_digest_email(self, user: UserProfile, snapshot: DigestSnapshot) -> bool:
        rendered = render_digest_email(
            user.display_name,
            snapshot,
            now_in_app_timezone(),
            platform=self.platform_name,
        )
        return await self.send_email(user.email, rendered.subject, rendered.html, rendered.text)


__all__ = ["EmailService", "send_email"]
