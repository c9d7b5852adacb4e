import pytest

from osteovet import db
from osteovet.errors import PendingValidation
from osteovet.models import AuditLog, Role, User

REGISTRATION = {
    "firstName": "Anna",
    "lastName": "Martin",
    "email": "Anna.Martin@Example.com",
    "phone": "0611223344",
    "password": "secret123",
}


def _login(client, email, password="secret123"):
    return client.post("/auth/login", json={"email": email, "password": password})


@pytest.mark.api
class TestRegister:
    def test_register_creates_pending_client_without_tokens(self, app, client):
        resp = client.post("/auth/register", json=REGISTRATION)

        assert resp.status_code == 201
        body = resp.get_json()
        user = body["data"]["user"]
        assert user["email"] == "anna.martin@example.com"
        assert user["role"] == "CLIENT"
        assert user["validated"] is False
        assert "token" not in body["data"]
        assert "password" not in user
        with app.app_context():
            assert AuditLog.query.filter_by(action="USER_REGISTERED").count() == 1

    def test_duplicate_email_is_a_conflict_regardless_of_case(self, client):
        client.post("/auth/register", json=REGISTRATION)
        resp = client.post("/auth/register", json={**REGISTRATION, "email": "ANNA.martin@example.com"})

        assert resp.status_code == 409
        assert "already exists" in resp.get_json()["error"]

    @pytest.mark.parametrize("override", [
        {"firstName": ""},
        {"email": "not-an-email"},
        {"password": "123"},
    ])
    def test_invalid_input_is_rejected_before_any_write(self, app, client, override):
        resp = client.post("/auth/register", json={**REGISTRATION, **override})

        assert resp.status_code == 400
        assert "error" in resp.get_json()
        with app.app_context():
            assert User.query.count() == 0
            assert AuditLog.query.count() == 0


@pytest.mark.api
class TestLogin:
    def test_pending_client_cannot_log_in_until_validated(self, client, admin_headers):
        client.post("/auth/register", json=REGISTRATION)

        resp = _login(client, REGISTRATION["email"])
        assert resp.status_code == 403
        assert resp.get_json()["error"] == PendingValidation.default_message

        pending = client.get("/auth/pending-clients", headers=admin_headers).get_json()
        assert pending["total"] == 1
        client_id = pending["data"][0]["id"]

        resp = client.put(f"/auth/validate-client/{client_id}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["validated"] is True

        resp = _login(client, REGISTRATION["email"])
        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["token"]
        assert data["refreshToken"]
        assert data["user"]["permissions"]["interface_sections"] == ["overview", "appointments", "animals"]

    def test_wrong_password_and_unknown_user_share_one_message(self, client, client_user):
        wrong = _login(client, "bob@example.com", "nope-nope")
        unknown = _login(client, "nobody@example.com")

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.get_json()["error"] == unknown.get_json()["error"] == "Invalid credentials"

    def test_missing_fields(self, client):
        resp = client.post("/auth/login", json={"email": "bob@example.com"})
        assert resp.status_code == 400

    def test_staff_bypass_validation_gate(self, client, make_user):
        make_user(Role.PRACTITIONER, validated=False, email="new-vet@example.com")

        resp = _login(client, "new-vet@example.com")

        assert resp.status_code == 200
        assert resp.get_json()["data"]["user"]["role"] == "PRACTITIONER"

    def test_login_records_audit_entry(self, app, client, client_user):
        _login(client, "bob@example.com")
        with app.app_context():
            entry = AuditLog.query.filter_by(action="USER_LOGIN").one()
            assert entry.user_id == client_user


@pytest.mark.api
class TestValidateClient:
    def test_revalidating_is_a_conflict(self, client, client_user, admin_headers):
        resp = client.put(f"/auth/validate-client/{client_user}", headers=admin_headers)
        assert resp.status_code == 409

    def test_unknown_client(self, client, admin_headers):
        resp = client.put("/auth/validate-client/999", headers=admin_headers)
        assert resp.status_code == 404

    def test_staff_accounts_cannot_be_validated(self, client, practitioner, admin_headers):
        resp = client.put(f"/auth/validate-client/{practitioner}", headers=admin_headers)
        assert resp.status_code == 400

    def test_clients_cannot_validate(self, client, make_user, client_headers):
        pending = make_user(validated=False)
        resp = client.put(f"/auth/validate-client/{pending}", headers=client_headers)

        assert resp.status_code == 403
        assert resp.get_json() == {"error": "Access denied for role CLIENT"}


@pytest.mark.api
class TestRefresh:
    def _tokens(self, client):
        return _login(client, "bob@example.com").get_json()["data"]

    def test_refresh_issues_new_pair(self, client, client_user):
        tokens = self._tokens(client)

        resp = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["token"] and data["refreshToken"]
        assert data["user"]["id"] == client_user

    def test_garbage_token_is_unauthorized(self, client):
        resp = client.post("/auth/refresh", json={"refreshToken": "not.a.token"})

        assert resp.status_code == 401
        assert resp.get_json()["error"] == "Invalid refresh token"

    def test_access_token_is_not_a_refresh_token(self, client, client_user):
        tokens = self._tokens(client)
        resp = client.post("/auth/refresh", json={"refreshToken": tokens["token"]})
        assert resp.status_code == 401

    def test_missing_token(self, client):
        assert client.post("/auth/refresh", json={}).status_code == 400

    def test_devalidated_client_is_refused_distinctly(self, app, client, client_user):
        tokens = self._tokens(client)
        with app.app_context():
            db.session.get(User, client_user).validated = False
            db.session.commit()

        resp = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})

        assert resp.status_code == 403
        assert "revoked" in resp.get_json()["error"]


@pytest.mark.api
class TestTokenHandling:
    def test_verify_returns_user_with_permissions(self, client, admin_headers):
        resp = client.get("/auth/verify", headers=admin_headers)

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["role"] == "ADMIN"
        assert "bulk_validate_clients" in data["permissions"]["actions"]

    def test_missing_token_envelope(self, client):
        resp = client.get("/auth/verify")

        assert resp.status_code == 401
        assert resp.get_json()["error"].startswith("Missing token")

    def test_invalid_token_envelope(self, client):
        resp = client.get("/auth/verify", headers={"Authorization": "Bearer garbage"})

        assert resp.status_code == 401
        assert resp.get_json()["error"].startswith("Invalid token")

    def test_token_of_deleted_user(self, app, client, make_user, auth_headers):
        user_id = make_user()
        headers = auth_headers(user_id)
        with app.app_context():
            db.session.delete(db.session.get(User, user_id))
            db.session.commit()

        resp = client.get("/auth/verify", headers=headers)

        assert resp.status_code == 401
        assert resp.get_json() == {"error": "User not found"}

    def test_logout(self, client, client_headers):
        resp = client.post("/auth/logout", headers=client_headers)
        assert resp.status_code == 200

    def test_roles_are_public(self, client):
        resp = client.get("/auth/roles")
        assert resp.get_json()["data"] == ["ADMIN", "PRACTITIONER", "CLIENT"]
