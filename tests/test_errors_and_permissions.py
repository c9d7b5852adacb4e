import pytest

from osteovet.models import Role, User
from osteovet.utils.role_utils import PUBLIC_PERMISSIONS, can_perform_action, get_user_permissions


@pytest.mark.api
class TestErrorEnvelope:
    def test_unknown_route(self, client):
        resp = client.get("/no-such-endpoint")

        assert resp.status_code == 404
        assert set(resp.get_json()) == {"error"}

    def test_unknown_resource_id(self, client, admin_headers):
        resp = client.get("/animals/12345", headers=admin_headers)
        assert resp.get_json() == {"error": "Animal not found"}

    def test_method_not_allowed(self, client):
        resp = client.delete("/auth/roles")

        assert resp.status_code == 405
        assert "error" in resp.get_json()

    def test_unexpected_errors_become_a_generic_500(self, client, admin_headers, monkeypatch):
        from osteovet.services import dashboard_service

        def explode(now=None):
            raise RuntimeError("database on fire")

        monkeypatch.setattr(dashboard_service, "get_metrics", explode)
        resp = client.get("/dashboard/metrics", headers=admin_headers)

        assert resp.status_code == 500
        assert resp.get_json() == {"error": "An unexpected error occurred"}

    def test_non_json_body_is_treated_as_empty(self, client):
        resp = client.post("/auth/login", data="email=x", content_type="text/plain")

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Email and password are required"


@pytest.mark.unit
class TestPermissions:
    def test_client_sections(self):
        user = User(role=Role.CLIENT)

        assert "animals" in get_user_permissions(user)["interface_sections"]
        assert "todos" not in get_user_permissions(user)["interface_sections"]
        assert can_perform_action(user, "book_appointment")
        assert not can_perform_action(user, "validate_client")

    def test_only_admin_bulk_validates(self):
        assert can_perform_action(User(role=Role.ADMIN), "bulk_validate_clients")
        assert not can_perform_action(User(role=Role.PRACTITIONER), "bulk_validate_clients")
        assert can_perform_action(User(role=Role.PRACTITIONER), "manage_reminders")

    def test_anonymous_gets_public_permissions(self):
        assert get_user_permissions(None) is PUBLIC_PERMISSIONS
        assert "booking" in get_user_permissions(None)["interface_sections"]
        assert not can_perform_action(None, "book_appointment")


@pytest.mark.api
class TestActionGuards:
    def test_actions_missing_from_the_role_table_are_refused(self, client, client_user, make_animal, make_service,
                                                             make_appointment, practitioner_headers):
        appointment = make_appointment(make_animal(client_user), make_service())

        resp = client.delete(f"/appointments/{appointment}", headers=practitioner_headers)

        assert resp.status_code == 403
        assert resp.get_json() == {"error": "Action delete_appointment is not allowed for role PRACTITIONER"}

    @pytest.mark.parametrize("method,url", [
        ("put", "/users/bulk/validate"),
        ("delete", "/services/1"),
        ("delete", "/appointments/1"),
    ])
    def test_clients_are_refused(self, client, client_headers, method, url):
        resp = getattr(client, method)(url, headers=client_headers, json={"clientIds": [1]})

        assert resp.status_code == 403
        assert resp.get_json()["error"].endswith("is not allowed for role CLIENT")
