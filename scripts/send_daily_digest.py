"""Utility script to run the daily digest outside of the scheduler."""

from __future__ import annotations

import argparse
import logging

import anyio
from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import DigestService
from app.config import get_settings
from app.infrastructure.database import initialize_database
from app.infrastructure.email import EmailService
from app.infrastructure.notifications import SqlAlchemyNotificationStore


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the digest run."""

    parser = argparse.ArgumentParser(
        description="Send the daily digest email to every eligible user.",
    )
    parser.add_argument(
        "--preview",
        metavar="USER_ID",
        default=None,
        help="Print the digest of one user instead of sending emails.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser.parse_args()


def build_service() -> DigestService:
    settings = get_settings()
    return DigestService(
        SqlAlchemyNotificationStore(),
        EmailService(settings),
        batch_size=settings.digest_batch_size,
    )


async def preview(service: DigestService, user_id: str) -> None:
    store = SqlAlchemyNotificationStore()
    user = await store.get_user_profile(user_id)
    if user is None:
        raise SystemExit(f"User {user_id} not found")

    snapshot = await service.generate_user_digest(user)
    print(f"Digest for {user.display_name} <{user.email}>")
    print(
        f"  Tasks: {snapshot.stats.total_tasks} total, "
        f"{snapshot.stats.completed_tasks} completed ({snapshot.stats.completion_rate}%)"
    )
    print(f"  Due today: {len(snapshot.today_tasks)}")
    for task in snapshot.today_tasks:
        print(f"    - [{task.priority}] {task.title}")
    print(f"  Overdue: {len(snapshot.overdue_tasks)}")
    for task in snapshot.overdue_tasks:
        print(f"    - {task.title} ({task.days_overdue} days overdue)")
    print(f"  Unread notifications: {len(snapshot.unread_notifications)}")
    if snapshot.is_empty():
        print("  Nothing to send; this user would be skipped.")


async def run(args: argparse.Namespace) -> None:
    service = build_service()
    if args.preview:
        await preview(service, args.preview)
        return

    result = await service.send_daily_digest()
    print(
        "Daily digest finished:\n"
        f"  Sent: {result.sent}\n"
        f"  Skipped: {result.skipped}\n"
        f"  Failed: {result.failed}"
    )


def main() -> None:
    """Run the digest using the provided command line arguments."""

    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_database()
    try:
        anyio.run(run, args)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Database error while running the digest: {exc}") from exc


if __name__ == "__main__":
    main()
