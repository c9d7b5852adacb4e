import pytest

from osteovet import db
from osteovet.models import Animal, Role, TreatmentNote

REX = {"name": "Rex", "breed": "Labrador", "age": 4, "weight": 31.5, "gender": "male"}


@pytest.mark.api
class TestAnimalCrud:
    def test_create_sets_caller_as_owner(self, client, client_user, client_headers):
        resp = client.post("/animals", json=REX, headers=client_headers)

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["ownerId"] == client_user
        assert data["owner"]["email"] == "bob@example.com"
        assert data["gender"] == "male"
        assert data["weight"] == 31.5

    @pytest.mark.parametrize("override", [
        {"name": "  "},
        {"age": -1},
        {"age": "four"},
        {"gender": "unknown"},
    ])
    def test_create_rejects_bad_input(self, app, client, client_headers, override):
        resp = client.post("/animals", json={**REX, **override}, headers=client_headers)

        assert resp.status_code == 400
        with app.app_context():
            assert Animal.query.count() == 0

    def test_clients_only_see_their_own_animals(self, client, client_user, make_user, make_animal,
                                                client_headers, admin_headers):
        other = make_user()
        mine = make_animal(client_user, name="Rex")
        theirs = make_animal(other, name="Felix")

        own_list = client.get("/animals", headers=client_headers).get_json()["data"]
        staff_list = client.get("/animals", headers=admin_headers).get_json()["data"]

        assert [a["id"] for a in own_list] == [mine]
        assert {a["id"] for a in staff_list} == {mine, theirs}
        assert client.get(f"/animals/{theirs}", headers=client_headers).status_code == 404

    def test_update(self, client, client_user, make_animal, client_headers):
        animal = make_animal(client_user)

        resp = client.put(f"/animals/{animal}", json={"age": 5, "notes": "Stiff hips"}, headers=client_headers)

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["age"] == 5
        assert data["notes"] == "Stiff hips"
        assert data["name"] == "Rex"

    def test_update_can_clear_weight(self, client, client_headers):
        animal = client.post("/animals", json=REX, headers=client_headers).get_json()["data"]

        resp = client.put(f"/animals/{animal['id']}", json={"weight": None}, headers=client_headers)

        assert resp.status_code == 200
        assert resp.get_json()["data"]["weight"] is None
        assert client.get(f"/animals/{animal['id']}", headers=client_headers).get_json()["data"]["weight"] is None

    def test_update_of_someone_elses_animal_is_not_found(self, client, make_user, make_animal, client_headers):
        animal = make_animal(make_user())
        resp = client.put(f"/animals/{animal}", json={"age": 5}, headers=client_headers)
        assert resp.status_code == 404


@pytest.mark.api
class TestAnimalDeletion:
    def test_delete_without_dependents(self, app, client, client_user, make_animal, client_headers):
        animal = make_animal(client_user)

        resp = client.delete(f"/animals/{animal}", headers=client_headers)

        assert resp.status_code == 200
        with app.app_context():
            assert db.session.get(Animal, animal) is None

    def test_delete_blocked_by_appointment(self, app, client, client_user, make_animal, make_service,
                                           make_appointment, client_headers):
        animal = make_animal(client_user)
        make_appointment(animal, make_service())

        resp = client.delete(f"/animals/{animal}", headers=client_headers)

        assert resp.status_code == 409
        assert "existing appointments" in resp.get_json()["error"]
        with app.app_context():
            assert db.session.get(Animal, animal) is not None

    def test_delete_blocked_by_treatment_note(self, app, client, client_user, make_animal, practitioner,
                                              admin_headers):
        animal = make_animal(client_user)
        with app.app_context():
            db.session.add(TreatmentNote(animal_id=animal, author_id=practitioner, content="Lumbar release"))
            db.session.commit()

        resp = client.delete(f"/animals/{animal}", headers=admin_headers)
        assert resp.status_code == 409


@pytest.mark.api
class TestTreatmentNotes:
    def test_staff_add_note_and_owner_reads_it(self, client, client_user, make_animal, practitioner_headers,
                                               client_headers):
        animal = make_animal(client_user)

        resp = client.post(f"/animals/{animal}/notes", json={"content": "Improved mobility"},
                           headers=practitioner_headers)
        assert resp.status_code == 201
        assert resp.get_json()["data"]["author"]["firstName"] == "Paul"

        notes = client.get(f"/animals/{animal}/notes", headers=client_headers).get_json()["data"]
        assert [n["content"] for n in notes] == ["Improved mobility"]

    def test_clients_cannot_write_notes(self, client, client_user, make_animal, client_headers):
        animal = make_animal(client_user)
        resp = client.post(f"/animals/{animal}/notes", json={"content": "x"}, headers=client_headers)
        assert resp.status_code == 403

    def test_note_requires_content(self, client, make_user, make_animal, admin_headers):
        animal = make_animal(make_user(Role.CLIENT))
        resp = client.post(f"/animals/{animal}/notes", json={}, headers=admin_headers)
        assert resp.status_code == 400
