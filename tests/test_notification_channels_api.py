"""Integration tests for the notification channel configuration endpoints."""

from __future__ import annotations

import pytest
from factories import auth_headers, make_user

from app.domain.entities import Project
from app.infrastructure.repositories import ProjectRepository, UserProfileRepository


@pytest.fixture
def seeded(session) -> None:
    users = UserProfileRepository(session)
    users.create(make_user("u1", organization_id="org-1"))
    users.create(make_user("u2", organization_id="org-2"))
    users.create(make_user("inactive", organization_id="org-1", is_active=False))
    projects = ProjectRepository(session)
    projects.create(Project(id="p1", name="Portal", organization_id="org-1"))
    projects.create(Project(id="p2", name="Other", organization_id="org-2"))


def _create(client, user_id: str = "u1", **overrides):
    payload = {
        "name": "Release announcements",
        "type": "slack",
        "channel_id": "C012345",
        "project_id": "p1",
    }
    payload.update(overrides)
    return client.post("/notification-channels", json=payload, headers=auth_headers(user_id))


def test_channel_lifecycle(client, seeded) -> None:
    created = _create(client, config={"mention": "@here"})

    assert created.status_code == 201
    channel = created.json()
    assert channel["created_by_id"] == "u1"
    assert channel["is_active"] is True
    assert channel["config"] == {"mention": "@here"}

    listed = client.get("/notification-channels?project_id=p1", headers=auth_headers("u1"))
    assert [item["id"] for item in listed.json()] == [channel["id"]]

    updated = client.patch(
        f"/notification-channels/{channel['id']}",
        json={"is_active": False, "name": "Releases"},
        headers=auth_headers("u1"),
    )
    assert updated.status_code == 200
    assert updated.json()["is_active"] is False
    assert updated.json()["name"] == "Releases"
    assert updated.json()["channel_id"] == "C012345"

    deleted = client.delete(f"/notification-channels/{channel['id']}", headers=auth_headers("u1"))
    assert deleted.status_code == 204
    assert client.get("/notification-channels", headers=auth_headers("u1")).json() == []


def test_channels_are_scoped_to_the_callers_organization(client, seeded) -> None:
    channel = _create(client).json()

    assert client.get("/notification-channels", headers=auth_headers("u2")).json() == []
    patched = client.patch(
        f"/notification-channels/{channel['id']}",
        json={"is_active": False},
        headers=auth_headers("u2"),
    )
    deleted = client.delete(f"/notification-channels/{channel['id']}", headers=auth_headers("u2"))

    assert patched.status_code == 404
    assert deleted.status_code == 404


def test_cannot_create_channel_for_foreign_project(client, seeded) -> None:
    response = _create(client, project_id="p2")

    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


def test_only_external_channel_types_are_accepted(client, seeded) -> None:
    assert _create(client, type="email").status_code == 422
    assert _create(client, type="teams").status_code == 201


def test_unknown_channel_returns_404(client, seeded) -> None:
    response = client.delete("/notification-channels/missing", headers=auth_headers("u1"))

    assert response.status_code == 404


def test_inactive_and_unknown_users_are_refused(client, seeded) -> None:
    assert client.get("/notification-channels", headers=auth_headers("inactive")).status_code == 400
    assert client.get("/notification-channels", headers=auth_headers("ghost")).status_code == 401


def test_caller_without_organization_cannot_reach_any_channel(client, session, seeded) -> None:
    UserProfileRepository(session).create(make_user("loner", organization_id=None))
    channel = _create(client).json()

    assert client.get("/notification-channels", headers=auth_headers("loner")).json() == []
    assert _create(client, user_id="loner").status_code == 404

    patched = client.patch(
        f"/notification-channels/{channel['id']}",
        json={"name": "Hijacked"},
        headers=auth_headers("loner"),
    )
    deleted = client.delete(
        f"/notification-channels/{channel['id']}", headers=auth_headers("loner")
    )

    assert (patched.status_code, deleted.status_code) == (404, 404)
    listed = client.get("/notification-channels", headers=auth_headers("u1")).json()
    assert [item["name"] for item in listed] == ["Release announcements"]
