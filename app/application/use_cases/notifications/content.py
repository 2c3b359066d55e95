"""Rules that turn a notification intent into in-app title, message and link."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from app.domain.entities import NotificationIntent, NotificationKind


@dataclass(frozen=True)
class InAppContent:
    title: str
    message: str
    type: NotificationKind
    link_url: str | None = None


ContentRule = tuple[
    Callable[[NotificationIntent], bool],
    Callable[[NotificationIntent], InAppContent],
]


def _escalation(intent: NotificationIntent) -> InAppContent:
    return InAppContent(
        title=f"Escalation: {intent.project.name}",
        message=intent.escalation_reason or "",
        type=NotificationKind.SYSTEM,
        link_url=f"/projects/{intent.project.id}",
    )


def _task_reminder(intent: NotificationIntent) -> InAppContent:
    reminder, task = intent.reminder, intent.task
    return InAppContent(
        title=reminder.title or f"Task reminder: {task.title}",
        message=reminder.message or f'Task "{task.title}" is approaching its due date',
        type=NotificationKind.DEADLINE,
        link_url=f"/projects/{task.project_id}/tasks/{task.id}" if task.project_id else None,
    )


def _reminder(intent: NotificationIntent) -> InAppContent:
    reminder = intent.reminder
    return InAppContent(
        title=reminder.title or "Reminder",
        message=reminder.message or "",
        type=NotificationKind.SYSTEM,
        link_url=f"/projects/{reminder.project_id}" if reminder.project_id else None,
    )


def _default(intent: NotificationIntent) -> InAppContent:
    return InAppContent(title="Notification", message="", type=NotificationKind.SYSTEM)


# Evaluated in order; the first matching predicate wins.
CONTENT_RULES: tuple[ContentRule, ...] = (
    (lambda intent: bool(intent.escalation_reason and intent.project), _escalation),
    (lambda intent: bool(intent.reminder and intent.task), _task_reminder),
    (lambda intent: intent.reminder is not None, _reminder),
    (lambda intent: True, _default),
)


def build_in_app_content(intent: NotificationIntent) -> InAppContent:
    """Return the in-app content for ``intent``."""

    for matches, build in CONTENT_RULES:
        if matches(intent):
            return build(intent)
    return _default(intent)


__all__ = ["CONTENT_RULES", "InAppContent", "build_in_app_content"]
