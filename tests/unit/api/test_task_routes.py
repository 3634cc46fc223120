"""Unit tests for task routes.

Key Test Scenarios:
1. Create via form with optional attachment; users cannot assign
2. Users only see and touch their own tasks (403 otherwise)
3. Status changes set timestamps once; bad status is 400
4. Admin-only edit, reassignment, deletion
5. Stats and task users per scope
"""

from uuid import uuid4

import pytest


def _profile_id(client, headers) -> str:
    return client.get("/api/auth/profile", headers=headers).json()["data"]["id"]


def _create(client, headers, **form):
    form.setdefault("heading", "Write tests")
    return client.post("/api/tasks/", data=form, headers=headers)


@pytest.fixture
def user1_task(seeded, user1_headers) -> dict:
    response = _create(seeded, user1_headers, heading="User one's task")
    assert response.status_code == 201
    return response.json()["data"]


class TestCreateTask:
    def test_create_returns_populated_task(self, seeded, user1_headers):
        response = _create(
            seeded, user1_headers, heading="  Plan  ", description="details", project="Ops"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Task created successfully"
        task = body["data"]
        assert task["heading"] == "Plan"
        assert task["status"] == "TO_DO"
        assert task["created_by"]["username"] == "user1"
        assert task["assigned_to"] is None
        assert task["project"] is None
        assert task["project_label"] == "Ops"
        assert task["in_progress_date"] is None
        assert task["created_date"].endswith("Z")

    def test_user_cannot_assign(self, seeded, user1_headers, user2_headers):
        user2_id = _profile_id(seeded, user2_headers)

        task = _create(seeded, user1_headers, assigned_to=user2_id).json()["data"]

        assert task["assigned_to"] is None
        assert task["assigned_to_id"] is None

    def test_admin_can_assign(self, seeded, admin_headers, user2_headers):
        user2_id = _profile_id(seeded, user2_headers)

        task = _create(seeded, admin_headers, assigned_to=user2_id).json()["data"]

        assert task["assigned_to"]["id"] == user2_id
        assert task["assigned_to_id"] == user2_id

    def test_attachment(self, seeded, user1_headers, file_storage):
        response = seeded.post(
            "/api/tasks/",
            data={"heading": "With file"},
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=user1_headers,
        )

        assert response.status_code == 201
        path = response.json()["data"]["file_path"]
        assert file_storage.files[path] == b"hello"

    def test_heading_required(self, seeded, user1_headers):
        response = seeded.post("/api/tasks/", data={}, headers=user1_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "heading"

    def test_blank_heading(self, seeded, user1_headers):
        response = _create(seeded, user1_headers, heading="   ")
        assert response.status_code == 400
        assert response.json()["message"] == "Heading is required"

    def test_requires_authentication(self, seeded):
        assert _create(seeded, {}).status_code == 401


class TestVisibility:
    def test_list_is_scoped(self, seeded, admin_headers, user1_headers, user2_headers, user1_task):
        _create(seeded, user2_headers, heading="User two's task")

        mine = seeded.get("/api/tasks/", headers=user1_headers).json()
        everyone = seeded.get("/api/tasks/", headers=admin_headers).json()

        assert [t["id"] for t in mine["data"]] == [user1_task["id"]]
        assert mine["count"] == 1
        assert everyone["count"] == 2

    def test_search_is_scoped(self, seeded, user1_headers, user2_headers):
        _create(seeded, user1_headers, heading="Quarterly report")
        _create(seeded, user2_headers, heading="Quarterly REPORT too")

        found = seeded.get(
            "/api/tasks/", params={"search": "report"}, headers=user1_headers
        ).json()

        assert [t["heading"] for t in found["data"]] == ["Quarterly report"]

    def test_invalid_status_filter(self, seeded, user1_headers):
        response = seeded.get(
            "/api/tasks/", params={"status": "CLOSED"}, headers=user1_headers
        )

        assert response.status_code == 400
        assert "TO_DO, IN_PROGRESS, or DONE" in response.json()["message"]

    def test_other_users_task_is_forbidden(self, seeded, user2_headers, user1_task):
        response = seeded.get(f"/api/tasks/{user1_task['id']}", headers=user2_headers)

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Access denied"}

    def test_unknown_task(self, seeded, user1_headers):
        response = seeded.get(f"/api/tasks/{uuid4()}", headers=user1_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Task not found"

    def test_malformed_task_id(self, seeded, user1_headers):
        response = seeded.get("/api/tasks/not-a-uuid", headers=user1_headers)
        assert response.status_code == 400


class TestStatus:
    def test_status_lifecycle(self, seeded, user1_headers, user1_task):
        url = f"/api/tasks/{user1_task['id']}/status"

        started = seeded.patch(url, json={"status": "IN_PROGRESS"}, headers=user1_headers)
        seeded.patch(url, json={"status": "TO_DO"}, headers=user1_headers)
        restarted = seeded.patch(url, json={"status": "IN_PROGRESS"}, headers=user1_headers)

        assert started.status_code == 200
        assert started.json()["message"] == "Task status updated successfully"
        first = started.json()["data"]["in_progress_date"]
        assert first is not None
        assert restarted.json()["data"]["in_progress_date"] == first

    def test_invalid_status(self, seeded, user1_headers, user1_task):
        response = seeded.patch(
            f"/api/tasks/{user1_task['id']}/status",
            json={"status": "FINISHED"},
            headers=user1_headers,
        )
        assert response.status_code == 400

    def test_outsider_cannot_change_status(self, seeded, user2_headers, user1_task):
        response = seeded.patch(
            f"/api/tasks/{user1_task['id']}/status",
            json={"status": "DONE"},
            headers=user2_headers,
        )
        assert response.status_code == 403

    def test_project_only_changes_when_sent(self, seeded, user1_headers):
        project = seeded.post(
            "/api/projects/", json={"title": "Ops"}, headers=user1_headers
        ).json()["data"]
        task = _create(seeded, user1_headers, project_id=project["id"]).json()["data"]
        url = f"/api/tasks/{task['id']}/status"

        kept = seeded.patch(url, json={"status": "DONE"}, headers=user1_headers)
        cleared = seeded.patch(
            url, json={"status": "DONE", "project_id": None}, headers=user1_headers
        )

        assert kept.json()["data"]["project"]["title"] == "Ops"
        assert cleared.json()["data"]["project_id"] is None
        assert cleared.json()["data"]["project"] is None


class TestAdminRoutes:
    def test_update_task_form(self, seeded, admin_headers, user1_task):
        response = seeded.put(
            f"/api/tasks/{user1_task['id']}",
            data={"heading": "Renamed", "status": "DONE", "description": ""},
            headers=admin_headers,
        )

        assert response.status_code == 200
        task = response.json()["data"]
        assert task["heading"] == "Renamed"
        assert task["status"] == "DONE"
        assert task["completion_date"] is not None
        assert task["description"] == user1_task["description"]

    def test_update_task_forbidden_for_user(self, seeded, user1_headers, user1_task):
        response = seeded.put(
            f"/api/tasks/{user1_task['id']}",
            data={"heading": "Mine now"},
            headers=user1_headers,
        )
        assert response.status_code == 403

    def test_reassign_and_clear(self, seeded, admin_headers, user2_headers, user1_task):
        user2_id = _profile_id(seeded, user2_headers)
        url = f"/api/tasks/{user1_task['id']}/assignee"

        assigned = seeded.patch(url, json={"assignee_id": user2_id}, headers=admin_headers)
        visible_to_user2 = seeded.get(
            f"/api/tasks/{user1_task['id']}", headers=user2_headers
        )
        cleared = seeded.patch(url, json={"assignee_id": None}, headers=admin_headers)

        assert assigned.json()["data"]["assigned_to"]["id"] == user2_id
        assert visible_to_user2.status_code == 200
        assert cleared.json()["data"]["assigned_to"] is None

    def test_delete(self, seeded, admin_headers, user1_headers, user1_task):
        forbidden = seeded.delete(f"/api/tasks/{user1_task['id']}", headers=user1_headers)
        deleted = seeded.delete(f"/api/tasks/{user1_task['id']}", headers=admin_headers)
        again = seeded.delete(f"/api/tasks/{user1_task['id']}", headers=admin_headers)

        assert forbidden.status_code == 403
        assert deleted.json() == {"success": True, "message": "Task deleted successfully"}
        assert again.status_code == 404

    def test_user_tasks_forbidden_for_user(self, seeded, user1_headers, user2_headers):
        user2_id = _profile_id(seeded, user2_headers)
        response = seeded.get(f"/api/tasks/user/{user2_id}", headers=user1_headers)
        assert response.status_code == 403


class TestStatsAndUsers:
    def test_stats(self, seeded, admin_headers, user1_headers, user2_headers, user1_task):
        _create(seeded, user2_headers)
        seeded.patch(
            f"/api/tasks/{user1_task['id']}/status",
            json={"status": "DONE"},
            headers=user1_headers,
        )

        mine = seeded.get("/api/tasks/stats", headers=user1_headers).json()["data"]
        everyone = seeded.get("/api/tasks/stats", headers=admin_headers).json()["data"]

        assert mine == {
            "total": 1,
            "todo": 0,
            "in_progress": 0,
            "done": 1,
            "completion_rate": 100,
        }
        assert everyone["total"] == 2
        assert everyone["completion_rate"] == 50

    def test_task_users(self, seeded, admin_headers, user2_headers):
        user2_id = _profile_id(seeded, user2_headers)
        _create(seeded, admin_headers, assigned_to=user2_id)

        users = seeded.get("/api/tasks/users", headers=admin_headers).json()

        assert [u["username"] for u in users["data"]] == ["admin", "user2"]
        assert set(users["data"][0]) == {"id", "username", "email"}
