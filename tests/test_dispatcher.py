"""Tests for the notification dispatcher."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from factories import make_project, make_reminder, make_task, make_user

from app.application.use_cases.notifications import (
    CHANNEL_ROUTES,
    NotificationDispatcher,
    build_in_app_content,
)
from app.domain.entities import Channel, InAppNotification, NotificationIntent

pytestmark = pytest.mark.anyio


def _created(fields: dict) -> InAppNotification:
    return InAppNotification(id=f"n-{fields['user_id']}", **fields)


@pytest.fixture
def email_service() -> MagicMock:
    service = MagicMock()
    service.send_reminder_email = AsyncMock(return_value=[True])
    service.send_escalation_email = AsyncMock(return_value=[True])
    return service


@pytest.fixture
def store() -> MagicMock:
    store = MagicMock()
    store.create_in_app_notification = AsyncMock(side_effect=_created)
    store.get_unread_count = AsyncMock(return_value=3)
    store.find_user_profiles_by_ids = AsyncMock(return_value=[])
    store.get_user_profile = AsyncMock(return_value=None)
    return store


@pytest.fixture
def gateway() -> MagicMock:
    gateway = MagicMock()
    gateway.send_to_user = AsyncMock()
    gateway.send_unread_count = AsyncMock()
    return gateway


@pytest.fixture
def dispatcher(email_service, store, gateway) -> NotificationDispatcher:
    return NotificationDispatcher(email_service, store, gateway)


def test_every_channel_has_a_route() -> None:
    assert set(CHANNEL_ROUTES) == set(Channel)
    assert CHANNEL_ROUTES[Channel.SLACK] is Channel.IN_APP
    assert CHANNEL_ROUTES[Channel.TEAMS] is Channel.IN_APP
    assert CHANNEL_ROUTES[Channel.WEBHOOK] is Channel.IN_APP


async def test_email_reminder_is_sent_to_recipients(dispatcher, email_service) -> None:
    user = make_user()
    reminder = make_reminder(title="T", message="M")

    result = await dispatcher.send_notification(
        NotificationIntent(channel=Channel.EMAIL, reminder=reminder, recipients=[user])
    )

    assert result is True
    email_service.send_reminder_email.assert_awaited_once_with(reminder, None, [user])


async def test_escalation_succeeds_when_any_recipient_succeeds(
    dispatcher, email_service
) -> None:
    project = make_project()
    recipients = [make_user(), make_user()]
    email_service.send_escalation_email.return_value = [False, True]

    result = await dispatcher.send_notification(
        NotificationIntent(
            channel=Channel.EMAIL,
            escalation_reason="R",
            escalation_level="L",
            project=project,
            recipients=recipients,
        )
    )

    assert result is True
    email_service.send_escalation_email.assert_awaited_once_with(
        "R", "L", project, recipients, None
    )


async def test_email_fails_when_every_recipient_fails(dispatcher, email_service) -> None:
    email_service.send_reminder_email.return_value = [False, False]

    result = await dispatcher.send_notification(
        NotificationIntent(
            channel=Channel.EMAIL,
            reminder=make_reminder(),
            recipients=[make_user(), make_user()],
        )
    )

    assert result is False


async def test_in_app_task_reminder_creates_deadline_notification(
    dispatcher, store, gateway
) -> None:
    user = make_user("u1")
    task = make_task("t1", title="Test Task", project_id="p1")

    result = await dispatcher.send_notification(
        NotificationIntent(
            channel=Channel.IN_APP,
            reminder=make_reminder(title=None, message=None),
            task=task,
            recipients=[user],
        )
    )

    assert result is True
    store.create_in_app_notification.assert_awaited_once_with(
        {
            "user_id": "u1",
            "type": "deadline",
            "title": "Task reminder: Test Task",
            "message": 'Task "Test Task" is approaching its due date',
            "link_url": "/projects/p1/tasks/t1",
            "task_id": "t1",
            "project_id": "p1",
        }
    )
    gateway.send_to_user.assert_awaited_once()
    assert gateway.send_to_user.await_args.args[0] == "u1"
    gateway.send_unread_count.assert_awaited_once_with("u1", 3)


async def test_created_notification_matches_built_content(dispatcher, store) -> None:
    project = make_project("p-7")
    intent = NotificationIntent(
        channel=Channel.IN_APP,
        reminder=make_reminder(project_id="p-7"),
        project=project,
        recipients=[make_user("u2")],
    )
    content = build_in_app_content(intent)

    await dispatcher.send_notification(intent)

    fields = store.create_in_app_notification.await_args.args[0]
    assert fields["title"] == content.title
    assert fields["message"] == content.message
    assert fields["type"] == content.type.value
    assert fields["link_url"] == content.link_url
    assert fields["user_id"] == "u2"
    assert fields["task_id"] is None
    assert fields["project_id"] == "p-7"


@pytest.mark.parametrize("channel", [Channel.EMAIL, Channel.IN_APP])
async def test_empty_recipients_are_rejected_without_calls(
    dispatcher, email_service, store, gateway, channel
) -> None:
    result = await dispatcher.send_notification(
        NotificationIntent(channel=channel, reminder=make_reminder(), recipients=[])
    )

    assert result is False
    email_service.send_reminder_email.assert_not_awaited()
    email_service.send_escalation_email.assert_not_awaited()
    store.create_in_app_notification.assert_not_awaited()
    gateway.send_to_user.assert_not_awaited()


async def test_email_without_content_shape_is_rejected(dispatcher, email_service) -> None:
    result = await dispatcher.send_notification(
        NotificationIntent(
            channel=Channel.EMAIL,
            escalation_reason="R",
            project=make_project(),
            recipients=[make_user()],
        )
    )

    assert result is False
    email_service.send_reminder_email.assert_not_awaited()
    email_service.send_escalation_email.assert_not_awaited()


@pytest.mark.parametrize("channel", [Channel.SLACK, Channel.TEAMS, Channel.WEBHOOK])
async def test_unbuilt_channels_behave_like_in_app(
    email_service, gateway, channel
) -> None:
    recipients = [make_user("u1"), make_user("u2")]
    task = make_task("t1", project_id="p1")
    reminder = make_reminder(title=None)

    def _dispatch_with_fresh_store() -> tuple[NotificationDispatcher, MagicMock]:
        store = MagicMock()
        store.create_in_app_notification = AsyncMock(side_effect=_created)
        store.get_unread_count = AsyncMock(return_value=1)
        return NotificationDispatcher(email_service, store, gateway), store

    fallback, fallback_store = _dispatch_with_fresh_store()
    native, native_store = _dispatch_with_fresh_store()

    fallback_result = await fallback.send_notification(
        NotificationIntent(channel=channel, reminder=reminder, task=task, recipients=recipients)
    )
    native_result = await native.send_notification(
        NotificationIntent(
            channel=Channel.IN_APP, reminder=reminder, task=task, recipients=recipients
        )
    )

    assert fallback_result is native_result is True
    assert (
        fallback_store.create_in_app_notification.await_args_list
        == native_store.create_in_app_notification.await_args_list
    )
    email_service.send_reminder_email.assert_not_awaited()


async def test_channel_given_as_plain_string_is_accepted(dispatcher, store) -> None:
    result = await dispatcher.send_notification(
        NotificationIntent(channel="in_app", reminder=make_reminder(), recipients=[make_user()])
    )

    assert result is True
    store.create_in_app_notification.assert_awaited_once()


async def test_unknown_channel_returns_false(dispatcher, store, caplog) -> None:
    with caplog.at_level("WARNING"):
        result = await dispatcher.send_notification(
            NotificationIntent(channel="carrier-pigeon", recipients=[make_user()])
        )

    assert result is False
    assert "Unknown notification channel" in caplog.text
    store.create_in_app_notification.assert_not_awaited()


async def test_in_app_partial_failure_is_tolerated(dispatcher, store, caplog) -> None:
    def _create(fields: dict) -> InAppNotification:
        if fields["user_id"] == "broken":
            raise RuntimeError("database unavailable")
        return _created(fields)

    store.create_in_app_notification.side_effect = _create

    with caplog.at_level("ERROR"):
        result = await dispatcher.send_notification(
            NotificationIntent(
                channel=Channel.IN_APP,
                reminder=make_reminder(),
                recipients=[make_user("broken"), make_user("ok")],
            )
        )

    assert result is True
    assert store.create_in_app_notification.await_count == 2
    assert "broken" in caplog.text


async def test_in_app_fails_when_every_creation_fails(dispatcher, store) -> None:
    store.create_in_app_notification.side_effect = RuntimeError("down")

    result = await dispatcher.send_notification(
        NotificationIntent(
            channel=Channel.IN_APP,
            reminder=make_reminder(),
            recipients=[make_user(), make_user()],
        )
    )

    assert result is False


async def test_push_failure_does_not_undo_creation(dispatcher, gateway) -> None:
    gateway.send_to_user.side_effect = RuntimeError("socket closed")

    result = await dispatcher.send_notification(
        NotificationIntent(
            channel=Channel.IN_APP, reminder=make_reminder(), recipients=[make_user()]
        )
    )

    assert result is True


async def test_unexpected_error_is_never_raised(dispatcher, email_service) -> None:
    email_service.send_reminder_email.side_effect = RuntimeError("template crashed")

    result = await dispatcher.send_notification(
        NotificationIntent(
            channel=Channel.EMAIL, reminder=make_reminder(), recipients=[make_user()]
        )
    )

    assert result is False


async def test_recipients_lookup_skips_store_for_empty_ids(dispatcher, store) -> None:
    assert await dispatcher.get_recipients_by_ids([]) == []
    store.find_user_profiles_by_ids.assert_not_awaited()


async def test_reminder_uses_preloaded_user(dispatcher, store) -> None:
    user = make_user("u1")
    reminder = make_reminder(user=user, user_id="u1")

    result = await dispatcher.send_reminder_notification(reminder)

    assert result is True
    store.get_user_profile.assert_not_awaited()
    assert store.create_in_app_notification.await_args.args[0]["user_id"] == "u1"


async def test_reminder_resolves_user_by_id(dispatcher, store, email_service) -> None:
    user = make_user("u5")
    store.get_user_profile.return_value = user
    reminder = make_reminder(user_id="u5", channel=Channel.EMAIL)
    task = make_task()

    result = await dispatcher.send_reminder_notification(reminder, task)

    assert result is True
    store.get_user_profile.assert_awaited_once_with("u5")
    email_service.send_reminder_email.assert_awaited_once_with(reminder, task, [user])


async def test_reminder_without_recipient_returns_false(dispatcher, store) -> None:
    result = await dispatcher.send_reminder_notification(make_reminder(user_id="ghost"))

    assert result is False
    store.create_in_app_notification.assert_not_awaited()


async def test_escalation_is_emailed_and_recorded_in_app(
    dispatcher, store, email_service, gateway
) -> None:
    project = make_project()
    stakeholders = [make_user("a"), make_user("b")]
    store.find_user_profiles_by_ids.return_value = stakeholders

    result = await dispatcher.send_escalation_notification(
        "Budget exceeded", "high", project, ["a", "b"], "See report", "org-1"
    )

    assert result is True
    store.find_user_profiles_by_ids.assert_awaited_once_with(["a", "b"], "org-1")
    email_service.send_escalation_email.assert_awaited_once_with(
        "Budget exceeded", "high", project, stakeholders, "See report"
    )
    created = [call.args[0] for call in store.create_in_app_notification.await_args_list]
    assert [fields["user_id"] for fields in created] == ["a", "b"]
    assert created[0]["title"] == "Escalation: Website Renewal"
    assert created[0]["message"] == "Budget exceeded"
    assert created[0]["type"] == "system"
    assert created[0]["link_url"] == "/projects/project-1"
    assert gateway.send_to_user.await_count == 2


async def test_escalation_fails_when_email_fails_but_still_records_in_app(
    dispatcher, store, email_service
) -> None:
    store.find_user_profiles_by_ids.return_value = [make_user("a")]
    email_service.send_escalation_email.return_value = [False]

    result = await dispatcher.send_escalation_notification(
        "Budget exceeded", "high", make_project(), ["a"]
    )

    assert result is False
    store.create_in_app_notification.assert_awaited_once()


async def test_escalation_fails_when_in_app_record_cannot_be_created(
    dispatcher, store, email_service
) -> None:
    store.find_user_profiles_by_ids.return_value = [make_user("a")]
    store.create_in_app_notification.side_effect = RuntimeError("db down")

    result = await dispatcher.send_escalation_notification(
        "Budget exceeded", "high", make_project(), ["a"]
    )

    assert result is False
    email_service.send_escalation_email.assert_awaited_once()


async def test_escalation_without_recipient_ids_returns_false(dispatcher, store) -> None:
    result = await dispatcher.send_escalation_notification(
        "Late", "critical", make_project(), []
    )

    assert result is False
    store.find_user_profiles_by_ids.assert_not_awaited()


async def test_escalation_with_unknown_recipients_returns_false(
    dispatcher, email_service
) -> None:
    result = await dispatcher.send_escalation_notification(
        "Late", "critical", make_project(), ["missing"]
    )

    assert result is False
    email_service.send_escalation_email.assert_not_awaited()
