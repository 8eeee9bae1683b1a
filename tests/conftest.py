# tests/conftest.py
import os

os.environ["SKIP_DB_INIT"] = "1"

import tempfile

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from roomhub.database import Base, get_db
from roomhub.domain.users.schemas import UserCreate
from roomhub.domain.users.service import UserService
from roomhub.main import app
from roomhub.models import Room
from roomhub.security_utils import create_access_token
from roomhub.services.notification_service import NotificationService, get_notification_service


class RecordingSenders:
    """Stands in for the email, SMS and push providers and records every send"""

    def __init__(self):
        self.emails = []
        self.sms = []
        self.pushes = []

    async def email(self, to, subject, template, context=None):
        self.emails.append({"to": to, "subject": subject, "template": template, "context": context})
        return {"id": "fake"}

    async def send_sms(self, to, message):
        self.sms.append({"to": to, "message": message})
        return {"sid": "fake"}

    async def push(self, token, title, body):
        self.pushes.append({"token": token, "title": title, "body": body})
        return True

    @property
    def total(self):
        return len(self.emails) + len(self.sms) + len(self.pushes)


@pytest.fixture(scope="function")
def test_db_session():
    # temp DB
    tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp.close()
    db_url = f"sqlite:///{tmp.name}"

    # test engine / Session
    engine = create_engine(db_url, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
        os.unlink(tmp.name)


@pytest.fixture
def senders():
    return RecordingSenders()


@pytest.fixture
def notifier(test_db_session, senders):
    return NotificationService(
        test_db_session,
        email_sender=senders.email,
        sms_sender=senders.send_sms,
        push_sender=senders.push,
    )


@pytest.fixture(scope="function")
def client(test_db_session, notifier):
    def override_get_db():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: notifier

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


# Factories
@pytest.fixture
def make_user(test_db_session):
    counter = {"n": 0}

    def _make_user(role="user", email=None, phone=None, fcm_token=None, password="secret123"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        user = UserService(test_db_session).create_user(
            UserCreate(
                username=f"user{counter['n']}",
                email=email,
                role=role,
                phone=phone,
                password=password,
                confirmPassword=password,
            )
        )
        if fcm_token:
            user.fcm_token = fcm_token
            test_db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_room(test_db_session):
    counter = {"n": 0}

    def _make_room(name=None, is_active=True, is_reservable=True, capacity=6):
        counter["n"] += 1
        room = Room(
            name=name or f"Room {counter['n']}",
            type="meeting",
            capacity=capacity,
            is_active=is_active,
            is_reservable=is_reservable,
        )
        test_db_session.add(room)
        test_db_session.commit()
        return room

    return _make_room


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = create_access_token(
            {"sub": user.id, "email": user.email, "username": user.username, "role": user.role}
        )
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
