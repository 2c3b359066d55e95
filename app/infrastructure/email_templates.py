"""HTML and plain-text bodies for notification emails."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from html import escape

from app.domain.entities import DigestSnapshot, Project, Reminder, Task
from app.utils import ensure_app_timezone

_FOOTER_HTML = (
    '<div style="text-align: center; padding: 20px; color: #6c757d; font-size: 12px;">'
    "<p>This is an automated notification from {platform}.</p>"
    "<p>Please do not reply to this email.</p>"
    "</div>"
)

_LEVEL_COLORS = {"critical": "#dc3545", "high": "#fd7e14"}
_DEFAULT_LEVEL_COLOR = "#ffc107"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str
    text: str


def _format_date(value: datetime | None) -> str:
    localized = ensure_app_timezone(value)
    return localized.strftime("%Y-%m-%d") if localized else ""


def _format_datetime(value: datetime | None) -> str:
    localized = ensure_app_timezone(value)
    return localized.strftime("%Y-%m-%d %H:%M") if localized else ""


def _document(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="UTF-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
        f"<title>{escape(title)}</title></head>"
        "<body style=\"font-family: 'Helvetica Neue', Arial, sans-serif; line-height: 1.6; "
        'color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">'
        f"{body}</body></html>"
    )


def _button(url: str, label: str, color: str) -> str:
    return (
        '<div style="margin-top: 30px; text-align: center;">'
        f'<a href="{escape(url)}" style="background: {color}; color: white; '
        "padding: 12px 30px; text-decoration: none; border-radius: 5px; "
        f'display: inline-block; font-weight: bold;">{escape(label)}</a></div>'
    )


def render_reminder_email(
    reminder: Reminder,
    task: Task | None,
    recipient_name: str,
    *,
    base_url: str,
    platform: str,
) -> RenderedEmail:
    """Render the email sent for a reminder, with optional task context."""

    title = reminder.title or (f"Task reminder: {task.title}" if task else "Reminder")
    message = reminder.message or "You have a new reminder."
    link = base_url.rstrip("/")
    if task and task.project_id:
        link = f"{link}/projects/{task.project_id}/tasks/{task.id}"
    elif reminder.project_id:
        link = f"{link}/projects/{reminder.project_id}"

    task_html = ""
    task_lines: list[str] = []
    if task:
        rows = [f"<p style=\"margin: 5px 0;\"><strong>Title:</strong> {escape(task.title)}</p>"]
        task_lines.append(f"Title: {task.title}")
        if task.description:
            rows.append(
                f'<p style="margin: 5px 0;"><strong>Description:</strong> {escape(task.description)}</p>'
            )
            task_lines.append(f"Description: {task.description}")
        if task.due_date:
            rows.append(
                f'<p style="margin: 5px 0;"><strong>Due Date:</strong> {_format_date(task.due_date)}</p>'
            )
            task_lines.append(f"Due Date: {_format_date(task.due_date)}")
        rows.append(f'<p style="margin: 5px 0;"><strong>Status:</strong> {escape(task.status)}</p>')
        rows.append(f'<p style="margin: 5px 0;"><strong>Priority:</strong> {escape(task.priority)}</p>')
        task_lines.extend([f"Status: {task.status}", f"Priority: {task.priority}"])
        task_html = (
            '<div style="background-color: #f8f9fa; padding: 15px; border-radius: 8px; margin: 20px 0;">'
            '<h3 style="margin: 0 0 10px 0; color: #495057;">Task Details</h3>'
            + "".join(rows)
            + "</div>"
        )

    scheduled = _format_datetime(reminder.scheduled_at)
    body = "".join(
        (
            '<div style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); '
            'padding: 30px; border-radius: 10px 10px 0 0;">'
            '<h1 style="color: white; margin: 0; font-size: 24px;">Reminder Notification</h1></div>',
            '<div style="background-color: white; padding: 30px; border: 1px solid #e9ecef; '
            'border-top: none; border-radius: 0 0 10px 10px;">',
            f'<p style="font-size: 16px;">Dear {escape(recipient_name)},</p>',
            f'<h2 style="color: #667eea;">{escape(title)}</h2>',
            f'<p style="font-size: 15px; color: #555;">{escape(message)}</p>',
            task_html,
            f'<p style="color: #6c757d; font-size: 14px;">Scheduled at: {scheduled}</p>'
            if scheduled
            else "",
            _button(link, "View Details", "#667eea"),
            "</div>",
            _FOOTER_HTML.format(platform=escape(platform)),
        )
    )

    text_parts = [f"Dear {recipient_name},", "=== REMINDER NOTIFICATION ===", title, message]
    if task_lines:
        text_parts.append("--- Task Details ---\n" + "\n".join(task_lines))
    if scheduled:
        text_parts.append(f"Scheduled at: {scheduled}")
    text_parts.append(f"View details: {link}")
    text_parts.append(f"---\nThis is an automated notification from {platform}.")

    return RenderedEmail(
        subject=f"[Reminder] {title}",
        html=_document(title, body),
        text="\n\n".join(text_parts),
    )


def render_escalation_email(
    reason: str,
    level: str,
    project: Project,
    recipient_name: str,
    additional_info: str | None = None,
    *,
    base_url: str,
    platform: str,
) -> RenderedEmail:
    """Render the escalation notice sent to project stakeholders."""

    color = _LEVEL_COLORS.get(level.lower(), _DEFAULT_LEVEL_COLOR)
    link = f"{base_url.rstrip('/')}/projects/{project.id}"

    details = [
        f'<p style="margin: 5px 0;"><strong>Project Name:</strong> {escape(project.name)}</p>'
    ]
    detail_lines = [f"Project Name: {project.name}"]
    if project.description:
        details.append(
            f'<p style="margin: 5px 0;"><strong>Description:</strong> {escape(project.description)}</p>'
        )
        detail_lines.append(f"Description: {project.description}")
    details.append(f'<p style="margin: 5px 0;"><strong>Status:</strong> {escape(project.status)}</p>')
    details.append(f'<p style="margin: 5px 0;"><strong>Priority:</strong> {escape(project.priority)}</p>')
    detail_lines.extend([f"Status: {project.status}", f"Priority: {project.priority}"])
    if project.end_date:
        details.append(
            f'<p style="margin: 5px 0;"><strong>Deadline:</strong> {_format_date(project.end_date)}</p>'
        )
        detail_lines.append(f"Deadline: {_format_date(project.end_date)}")
    details.append(f'<p style="margin: 5px 0;"><strong>Progress:</strong> {project.progress}%</p>')
    detail_lines.append(f"Progress: {project.progress}%")

    extra_html = ""
    if additional_info:
        extra_html = (
            '<div style="margin: 20px 0;"><h3 style="color: #495057;">Additional Information</h3>'
            f'<p style="font-size: 14px; color: #555;">{escape(additional_info)}</p></div>'
        )

    body = "".join(
        (
            f'<div style="background-color: {color}; padding: 30px; border-radius: 10px 10px 0 0;">'
            '<h1 style="color: white; margin: 0; font-size: 24px;">ESCALATION NOTICE</h1>'
            f'<p style="color: white; margin: 10px 0 0 0; text-transform: uppercase;">Level: {escape(level)}</p></div>',
            '<div style="background-color: white; padding: 30px; border: 1px solid #e9ecef; '
            'border-top: none; border-radius: 0 0 10px 10px;">',
            f'<p style="font-size: 16px;">Dear {escape(recipient_name)},</p>',
            '<p style="font-weight: bold; color: #856404;">'
            "This is an escalation notification requiring your immediate attention.</p>",
            '<h2 style="color: #495057;">Escalation Reason</h2>',
            f'<p style="font-size: 15px; color: #555;">{escape(reason)}</p>',
            '<div style="background-color: #f8f9fa; padding: 15px; border-radius: 8px; margin: 20px 0;">'
            '<h3 style="margin: 0 0 10px 0; color: #495057;">Project Details</h3>'
            + "".join(details)
            + "</div>",
            extra_html,
            _button(link, "View Project", color),
            "</div>",
            _FOOTER_HTML.format(platform=escape(platform)),
        )
    )

    text_parts = [
        f"Dear {recipient_name},",
        f"ESCALATION NOTICE - Level: {level.upper()}",
        "*** This is an escalation notification requiring your immediate attention. ***",
        f"ESCALATION REASON:\n{reason}",
        "--- Project Details ---\n" + "\n".join(detail_lines),
    ]
    if additional_info:
        text_parts.append(f"Additional Information:\n{additional_info}")
    text_parts.append(f"View project: {link}")
    text_parts.append(f"---\nThis escalation was generated automatically by {platform}.")

    return RenderedEmail(
        subject=f"[ESCALATION - {level.upper()}] {project.name}",
        html=_document(f"Escalation Notice - {project.name}", body),
        text="\n\n".join(text_parts),
    )


def greeting_for_hour(hour: int) -> str:
    if hour < 10:
        return "Good morning"
    if hour < 18:
        return "Hello"
    return "Good evening"


def render_digest_email(
    recipient_name: str,
    snapshot: DigestSnapshot,
    now: datetime,
    *,
    platform: str,
) -> RenderedEmail:
    """Render the once-a-day summary of a user's pending work."""

    date_label = now.strftime("%A, %B %d, %Y")
    greeting = greeting_for_hour(now.hour)
    stats = snapshot.stats

    sections = [
        '<div style="background: linear-gradient(135deg, #4F46E5 0%, #7C3AED 100%); '
        'color: white; padding: 24px; border-radius: 12px 12px 0 0;">'
        f'<h1 style="margin: 0; font-size: 24px;">{greeting}, {escape(recipient_name)}</h1>'
        f'<p style="margin: 8px 0 0 0;">Your digest for {date_label}</p></div>',
        '<div style="background: #F9FAFB; padding: 20px; text-align: center;">'
        f"<span><strong>{stats.total_tasks}</strong> total tasks</span> &middot; "
        f"<span><strong>{stats.completed_tasks}</strong> completed</span> &middot; "
        f"<span><strong>{stats.completion_rate}%</strong> completion rate</span></div>",
    ]
    text_parts = [
        f"{greeting}, {recipient_name}",
        f"Your digest for {date_label}",
        f"Total tasks: {stats.total_tasks} | Completed: {stats.completed_tasks} | "
        f"Completion rate: {stats.completion_rate}%",
    ]

    if snapshot.today_tasks:
        items = "".join(
            '<div style="padding: 12px; margin: 8px 0; border-left: 4px solid #4F46E5;">'
            f'<div style="font-weight: 600;">{escape(task.title)}</div>'
            + (
                f'<div style="font-size: 12px; color: #6B7280;">{escape(task.project_name)}</div>'
                if task.project_name
                else ""
            )
            + "</div>"
            for task in snapshot.today_tasks
        )
        sections.append(
            '<div style="padding: 20px;">'
            f"<h2 style=\"font-size: 18px;\">Due today ({len(snapshot.today_tasks)})</h2>{items}</div>"
        )
        text_parts.append(
            f"Due today ({len(snapshot.today_tasks)}):\n"
            + "\n".join(f"- {task.title}" for task in snapshot.today_tasks)
        )

    if snapshot.overdue_tasks:
        items = "".join(
            '<div style="padding: 12px; margin: 8px 0; background: #FEF2F2; border-left: 4px solid #EF4444;">'
            f'<div style="font-weight: 600; color: #991B1B;">{escape(task.title)}</div>'
            f'<div style="font-size: 12px; color: #DC2626;">{task.days_overdue} days overdue</div>'
            + (
                f'<div style="font-size: 12px; color: #6B7280;">{escape(task.project_name)}</div>'
                if task.project_name
                else ""
            )
            + "</div>"
            for task in snapshot.overdue_tasks
        )
        sections.append(
            '<div style="padding: 20px; background: #FEF2F2;">'
            f"<h2 style=\"font-size: 18px; color: #991B1B;\">Overdue ({len(snapshot.overdue_tasks)})</h2>"
            f"{items}</div>"
        )
        text_parts.append(
            f"Overdue ({len(snapshot.overdue_tasks)}):\n"
            + "\n".join(
                f"- {task.title} ({task.days_overdue} days overdue)"
                for task in snapshot.overdue_tasks
            )
        )

    if snapshot.unread_notifications:
        items = "".join(
            '<div style="padding: 12px; margin: 8px 0; border: 1px solid #E5E7EB; border-radius: 4px;">'
            f'<div style="font-size: 14px;">{escape(item.title)}</div>'
            f'<div style="font-size: 13px; color: #374151;">{escape(item.message)}</div>'
            f'<div style="font-size: 12px; color: #6B7280;">{_format_datetime(item.created_at)}</div>'
            "</div>"
            for item in snapshot.unread_notifications
        )
        sections.append(
            '<div style="padding: 20px;">'
            f"<h2 style=\"font-size: 18px;\">Unread notifications ({len(snapshot.unread_notifications)})</h2>"
            f"{items}</div>"
        )
        text_parts.append(
            f"Unread notifications ({len(snapshot.unread_notifications)}):\n"
            + "\n".join(f"- {item.title}" for item in snapshot.unread_notifications)
        )

    sections.append(
        '<div style="padding: 20px; background: #F9FAFB; text-align: center; font-size: 12px; color: #6B7280;">'
        f"This email was sent automatically by {escape(platform)}. "
        "You can turn the daily digest off in your notification settings.</div>"
    )
    text_parts.append(
        f"---\nThis email was sent automatically by {platform}. "
        "You can turn the daily digest off in your notification settings."
    )

    return RenderedEmail(
        subject=f"[{now.strftime('%Y-%m-%d')}] Your daily digest",
        html=_document("Daily digest", "".join(sections)),
        text="\n\n".join(text_parts),
    )


__all__ = [
    "RenderedEmail",
    "greeting_for_hour",
    "render_digest_email",
    "render_escalation_email",
    "render_reminder_email",
]
