"""
Integration tests for the admin dashboard and the design assistant chat
"""
import pytest

from podmayak.core.errors import TransientBackendError


class TestAdminAccess:

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/admin/stats"),
            ("get", "/api/admin/users"),
            ("get", "/api/admin/projects"),
            ("post", "/api/admin/content/seed"),
        ],
    )
    async def test_regular_users_are_forbidden(self, client, auth, method, path):
        response = await getattr(client, method)(path, headers=auth["headers"])
        assert response.status_code == 403


class TestAdminDashboard:

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_stats(self, client, auth, admin_auth, room_photo, generated_image):
        await client.post(
            "/api/projects",
            json={"original_image": room_photo, "generated_image": generated_image, "config": {}},
            headers=auth["headers"],
        )

        stats = (await client.get("/api/admin/stats", headers=admin_auth["headers"])).json()

        assert stats == {"total_users": 2, "pro_users": 0, "total_generations": 1, "total_revenue": 0}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_cycle_role_and_plan(self, client, auth, admin_auth):
        user_id = auth["user"]["id"]

        promoted = await client.patch(f"/api/admin/users/{user_id}", json={"field": "role"}, headers=admin_auth["headers"])
        assert promoted.json()["role"] == "admin"

        upgraded = await client.patch(f"/api/admin/users/{user_id}", json={"field": "plan"}, headers=admin_auth["headers"])
        assert upgraded.json()["plan"] == "pro"

        stats = (await client.get("/api/admin/stats", headers=admin_auth["headers"])).json()
        assert stats["pro_users"] == 1
        assert stats["total_revenue"] == 29

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_unknown_user(self, client, admin_auth):
        response = await client.patch("/api/admin/users/missing", json={"field": "role"}, headers=admin_auth["headers"])
        assert response.status_code == 404

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_list_users(self, client, auth, admin_auth):
        body = (await client.get("/api/admin/users", headers=admin_auth["headers"])).json()
        assert body["total"] == 2
        assert {user["email"] for user in body["users"]} == {"user@podmayak.az", "admin@podmayak.az"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_admin_manages_all_projects(self, client, auth, admin_auth, room_photo, generated_image):
        project = (
            await client.post(
                "/api/projects",
                json={"original_image": room_photo, "generated_image": generated_image, "config": {}},
                headers=auth["headers"],
            )
        ).json()

        listing = (await client.get("/api/admin/projects", headers=admin_auth["headers"])).json()
        assert [p["id"] for p in listing["projects"]] == [project["id"]]

        deleted = await client.delete(f"/api/admin/projects/{project['id']}", headers=admin_auth["headers"])
        assert deleted.status_code == 204
        assert (await client.get("/api/projects", headers=auth["headers"])).json()["total"] == 0

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_system_api_key_used_for_generation(self, app, client, auth, admin_auth, mock_ai_service, room_photo):
        response = await client.put(
            "/api/admin/system-config", json={"key": "apiKey", "value": "admin-key"}, headers=admin_auth["headers"]
        )
        assert response.json() == {"key": "apiKey", "updated": True}

        await client.post("/api/renovations/generate", json={"image": room_photo}, headers=auth["headers"])
        await app.state.jobs.wait_all()

        assert mock_ai_service.generate_renovation.await_args.kwargs["api_key"] == "admin-key"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_seed_content(self, client, admin_auth):
        body = (await client.post("/api/admin/content/seed", headers=admin_auth["headers"])).json()
        assert body["seeded"] is True
        assert body["counts"]["styles"] == 18


class TestChat:

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_stream(self, client, auth, mock_ai_service):
        response = await client.post(
            "/api/chat/stream",
            json={"message": "Hansı döşəmə yaxşıdır?", "history": [{"role": "model", "text": "Salam!"}]},
            headers=auth["headers"],
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Salam! Laminat tövsiyə edirəm."
        history, message = mock_ai_service.stream_chat_response.call_args.args[:2]
        assert message == "Hansı döşəmə yaxşıdır?"
        assert history[0].text == "Salam!"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_backend_failure_before_first_chunk(self, client, auth, mock_ai_service):
        async def failing_stream(history, message, api_key=None):
            raise TransientBackendError("The model is overloaded")
            yield

        mock_ai_service.stream_chat_response.side_effect = failing_stream

        response = await client.post("/api/chat/stream", json={"message": "Salam"}, headers=auth["headers"])

        assert response.status_code == 503
        assert response.json()["code"] == "backend_unavailable"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_requires_auth(self, client):
        response = await client.post("/api/chat/stream", json={"message": "Salam"})
        assert response.status_code == 401
