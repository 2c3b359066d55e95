"""Fan notification intents out to the email and in-app channels."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from app.domain.entities import (
    Channel,
    NotificationIntent,
    Project,
    Reminder,
    Task,
    UserProfile,
)
from app.infrastructure.email import EmailService
from app.infrastructure.notifications import NotificationGateway, NotificationStore

from .content import InAppContent, build_in_app_content

logger = logging.getLogger(__name__)

# Channel requested by a producer -> channel that actually delivers it.
# Slack, Teams and webhook delivery are not built yet and land in-app.
CHANNEL_ROUTES: dict[Channel, Channel] = {
    Channel.EMAIL: Channel.EMAIL,
    Channel.IN_APP: Channel.IN_APP,
    Channel.SLACK: Channel.IN_APP,
    Channel.TEAMS: Channel.IN_APP,
    Channel.WEBHOOK: Channel.IN_APP,
}

_unrouted = [channel.value for channel in Channel if channel not in CHANNEL_ROUTES]
if _unrouted:
    raise RuntimeError(f"Channels without a delivery route: {', '.join(_unrouted)}")


class NotificationDispatcher:
    """Deliver notifications through the channel each intent asks for.

    ``send_notification`` never raises: every failure is logged and reported
    as ``False`` so producers can treat delivery as best effort.
    """

    def __init__(
        self,
        email_service: EmailService,
        store: NotificationStore,
        gateway: NotificationGateway,
    ) -> None:
        self._email_service = email_service
        self._store = store
        self._gateway = gateway

    async def send_notification(self, intent: NotificationIntent) -> bool:
        try:
            try:
                requested = Channel(intent.channel)
            except ValueError:
                logger.warning("Unknown notification channel: %s", intent.channel)
                return False
            route = CHANNEL_ROUTES[requested]
            if route is not requested:
                logger.info(
                    "Channel %s is delivered through %s", requested.value, route.value
                )
            if route is Channel.EMAIL:
                return await self._send_email(intent)
            return await self._send_in_app(intent)
        except Exception:
            logger.exception("Failed to send %s notification", intent.channel)
            return False

    async def _send_email(self, intent: NotificationIntent) -> bool:
        recipients = intent.recipients
        if not recipients:
            logger.warning("No recipients for email notification")
            return False

        if intent.escalation_reason and intent.escalation_level and intent.project:
            results = await self._email_service.send_escalation_email(
                intent.escalation_reason,
                intent.escalation_level,
                intent.project,
                recipients,
                intent.additional_info,
            )
        elif intent.reminder:
            results = await self._email_service.send_reminder_email(
                intent.reminder, intent.task, recipients
            )
        else:
            logger.warning("Email notification has neither escalation data nor a reminder")
            return False

        sent = sum(1 for result in results if result)
        logger.info("Email notification sent %d/%d", sent, len(recipients))
        return sent > 0

    async def _send_in_app(self, intent: NotificationIntent) -> bool:
        recipients = intent.recipients
        if not recipients:
            logger.warning("No recipients for in-app notification")
            return False

        content = build_in_app_content(intent)
        results = await asyncio.gather(
            *(self._deliver_in_app(recipient, content, intent) for recipient in recipients)
        )
        created = sum(1 for result in results if result)
        logger.info("In-app notification created for %d/%d recipients", created, len(recipients))
        return created > 0

    async def _deliver_in_app(
        self,
        recipient: UserProfile,
        content: InAppContent,
        intent: NotificationIntent,
    ) -> bool:
        task = intent.task
        project_id = intent.project.id if intent.project else None
        if project_id is None and task is not None:
            project_id = task.project_id

        try:
            notification = await self._store.create_in_app_notification(
                {
                    "user_id": recipient.id,
                    "type": content.type.value,
                    "title": content.title,
                    "message": content.message,
                    "link_url": content.link_url,
                    "task_id": task.id if task else None,
                    "project_id": project_id,
                }
            )
        except Exception:
            logger.exception("Failed to create in-app notification for user %s", recipient.id)
            return False

        try:
            await self._gateway.send_to_user(recipient.id, notification)
            unread_count = await self._store.get_unread_count(recipient.id)
            await self._gateway.send_unread_count(recipient.id, unread_count)
        except Exception:
            logger.exception("Failed to push in-app notification to user %s", recipient.id)
        return True

    async def get_recipients_by_ids(
        self, ids: Sequence[str], organization_id: str | None = None
    ) -> list[UserProfile]:
        if not ids:
            return []
        return await self._store.find_user_profiles_by_ids(ids, organization_id)

    async def send_reminder_notification(
        self, reminder: Reminder, task: Task | None = None
    ) -> bool:
        """Deliver ``reminder`` to its owner through the reminder's channel."""

        try:
            recipient = reminder.user
            if recipient is None and reminder.user_id:
                recipient = await self._store.get_user_profile(reminder.user_id)
        except Exception:
            logger.exception("Failed to resolve recipient of reminder %s", reminder.id)
            return False
        if recipient is None:
            logger.warning("No recipient found for reminder %s", reminder.id)
            return False

        return await self.send_notification(
            NotificationIntent(
                channel=reminder.channel,
                recipients=[recipient],
                reminder=reminder,
                task=task,
            )
        )

    async def send_escalation_notification(
        self,
        reason: str,
        level: str,
        project: Project,
        recipient_ids: Sequence[str],
        additional_info: str | None = None,
        organization_id: str | None = None,
    ) -> bool:
        """Notify the given stakeholders of an escalation by email and in-app."""

        if not recipient_ids:
            logger.warning("No recipients for escalation of project %s", project.id)
            return False
        try:
            recipients = await self.get_recipients_by_ids(recipient_ids, organization_id)
        except Exception:
            logger.exception("Failed to resolve escalation recipients for project %s", project.id)
            return False
        if not recipients:
            logger.warning("No recipients found for escalation of project %s", project.id)
            return False

        # Escalations go out by email and as an in-app record; both must succeed.
        results = []
        for channel in (Channel.EMAIL, Channel.IN_APP):
            results.append(
                await self.send_notification(
                    NotificationIntent(
                        channel=channel,
                        recipients=recipients,
                        project=project,
                        escalation_reason=reason,
                        escalation_level=level,
                        additional_info=additional_info,
                    )
                )
            )
        return all(results)


__all__ = ["CHANNEL_ROUTES", "NotificationDispatcher"]
