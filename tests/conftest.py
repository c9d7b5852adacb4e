"""
Shared fixtures for the OsteoVet API tests.

Every test gets a fresh application bound to an in-memory SQLite database.
Rows are created inside short application contexts so that requests made
through the test client always run with their own session.
"""

from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

from osteovet import create_app, db
from osteovet.config import TestingConfig
from osteovet.models import (Animal, Appointment, AppointmentStatus, Gender, Reminder,
                             ReminderCategory, Role, Service, User)
from osteovet.models.todo_model import Priority
from osteovet.services.auth_service import hash_password
from osteovet.utils.util import utcnow

PASSWORD = "secret123"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user and return its id."""
    counter = {"n": 0}

    def _make_user(role=Role.CLIENT, validated=True, email=None, first_name="Test",
                   last_name="User", phone=None, password=PASSWORD):
        counter["n"] += 1
        with app.app_context():
            user = User(
                email=email or f"{role.value.lower()}{counter['n']}@example.com",
                password=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                phone=phone,
                role=role,
                validated=validated,
            )
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user_id):
        with app.app_context():
            token = create_access_token(identity=str(user_id))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN, email="admin@example.com", first_name="Alice", last_name="Admin")


@pytest.fixture
def practitioner(make_user):
    return make_user(Role.PRACTITIONER, email="vet@example.com", first_name="Paul", last_name="Practitioner")


@pytest.fixture
def client_user(make_user):
    return make_user(Role.CLIENT, email="bob@example.com", first_name="Bob", last_name="Client",
                     phone="0601020304")


@pytest.fixture
def admin_headers(admin, auth_headers):
    return auth_headers(admin)


@pytest.fixture
def practitioner_headers(practitioner, auth_headers):
    return auth_headers(practitioner)


@pytest.fixture
def client_headers(client_user, auth_headers):
    return auth_headers(client_user)


@pytest.fixture
def make_animal(app):
    def _make_animal(owner_id, name="Rex", breed="Labrador", age=4, gender=Gender.MALE):
        with app.app_context():
            animal = Animal(name=name, breed=breed, age=age, gender=gender, owner_id=owner_id)
            db.session.add(animal)
            db.session.commit()
            return animal.id

    return _make_animal


@pytest.fixture
def make_service(app):
    def _make_service(title="Osteopathy consultation", duration=60, price=70.0, active=True):
        with app.app_context():
            service = Service(title=title, duration=duration, price=price, active=active)
            db.session.add(service)
            db.session.commit()
            return service.id

    return _make_service


@pytest.fixture
def make_appointment(app):
    def _make_appointment(animal_id, service_id, status=AppointmentStatus.SCHEDULED, start_time=None):
        with app.app_context():
            animal = db.session.get(Animal, animal_id)
            start = start_time or utcnow() + timedelta(days=3)
            appointment = Appointment(
                start_time=start,
                end_time=start + timedelta(hours=1),
                status=status,
                client_id=animal.owner_id,
                animal_id=animal.id,
                service_id=service_id,
            )
            db.session.add(appointment)
            db.session.commit()
            return appointment.id

    return _make_appointment


@pytest.fixture
def make_reminder(app):
    def _make_reminder(message="Call owner", remind_at=None, sent=False, appointment_id=None):
        with app.app_context():
            reminder = Reminder(
                message=message,
                message_fr=message,
                type="MANUAL",
                category=ReminderCategory.FOLLOW_UP,
                priority=Priority.MEDIUM,
                remind_at=remind_at or utcnow() + timedelta(days=1),
                sent=sent,
                appointment_id=appointment_id,
            )
            db.session.add(reminder)
            db.session.commit()
            return reminder.id

    return _make_reminder
