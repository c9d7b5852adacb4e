import pytest


@pytest.mark.api
class TestTodos:
    def test_create_and_list_own_todos(self, client, admin_headers, practitioner_headers):
        resp = client.post("/todos", headers=admin_headers, json={
            "task": "Renew insurance", "priority": "HIGH", "dueDate": "2030-02-01T09:00:00",
        })
        assert resp.status_code == 201
        assert resp.get_json()["data"]["priority"] == "HIGH"

        assert len(client.get("/todos", headers=admin_headers).get_json()["data"]) == 1
        assert client.get("/todos", headers=practitioner_headers).get_json()["data"] == []

    def test_incomplete_first_then_by_due_date(self, client, admin_headers):
        def create(task, due=None):
            body = {"task": task}
            if due:
                body["dueDate"] = due
            return client.post("/todos", headers=admin_headers, json=body).get_json()["data"]["id"]

        done = create("Done already", "2030-01-01T00:00:00")
        late = create("Later", "2030-03-01T00:00:00")
        soon = create("Sooner", "2030-02-01T00:00:00")
        undated = create("Whenever")
        client.put(f"/todos/{done}/toggle", headers=admin_headers)

        ids = [t["id"] for t in client.get("/todos", headers=admin_headers).get_json()["data"]]
        assert ids == [soon, late, undated, done]

    def test_update_and_toggle(self, client, admin_headers):
        todo = client.post("/todos", headers=admin_headers, json={"task": "Call lab"}).get_json()["data"]

        resp = client.put(f"/todos/{todo['id']}", headers=admin_headers, json={"description": "Ask for results"})
        assert resp.get_json()["data"]["description"] == "Ask for results"

        first = client.put(f"/todos/{todo['id']}/toggle", headers=admin_headers).get_json()["data"]
        second = client.put(f"/todos/{todo['id']}/toggle", headers=admin_headers).get_json()["data"]
        assert first["completed"] is True
        assert second["completed"] is False

    def test_other_users_todos_are_hidden(self, client, admin_headers, practitioner_headers):
        todo = client.post("/todos", headers=admin_headers, json={"task": "Private"}).get_json()["data"]

        assert client.put(f"/todos/{todo['id']}/toggle", headers=practitioner_headers).status_code == 404
        assert client.delete(f"/todos/{todo['id']}", headers=practitioner_headers).status_code == 404
        assert client.delete(f"/todos/{todo['id']}", headers=admin_headers).status_code == 200

    def test_completed_must_be_a_boolean(self, client, admin_headers):
        todo = client.post("/todos", headers=admin_headers, json={"task": "Call lab"}).get_json()["data"]

        resp = client.put(f"/todos/{todo['id']}", headers=admin_headers, json={"completed": "false"})

        assert resp.status_code == 400
        assert client.get("/todos", headers=admin_headers).get_json()["data"][0]["completed"] is False

    def test_task_required(self, client, admin_headers):
        assert client.post("/todos", headers=admin_headers, json={"task": " "}).status_code == 400

    def test_clients_have_no_todos(self, client, client_headers):
        assert client.get("/todos", headers=client_headers).status_code == 403
