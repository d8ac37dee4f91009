import os
import tempfile
from datetime import date

# Configure the app before anything from spa_booking is imported
UPLOAD_DIR = tempfile.mkdtemp(prefix="spa-booking-images-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["COOKIE_SECURE"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = UPLOAD_DIR
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from spa_booking.config import AUTH_COOKIE_NAME  # noqa: E402
from spa_booking.database import Base, SessionLocal, engine  # noqa: E402
from spa_booking.enums import RoleEnum  # noqa: E402
from spa_booking.main import app  # noqa: E402
from spa_booking.models import Account, Service, Slot, Therapist  # noqa: E402
from spa_booking.security_utils import create_access_token, hash_password  # noqa: E402

API = "/api"
PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_account(db):
    counter = {"n": 0}

    def _make(role=RoleEnum.CUSTOMER, is_active=True, username=None):
        counter["n"] += 1
        name = username or f"{role.value.lower()}{counter['n']}"
        account = Account(
            username=name,
            password=hash_password(PASSWORD),
            email=f"{name}@example.com",
            role=role,
            dob=date(1990, 1, 1),
            is_active=is_active,
        )
        db.add(account)
        db.commit()
        db.refresh(account)
        return account

    return _make


@pytest.fixture
def login_as(client):
    """Put a session cookie for the account on the shared client"""

    def _login(account):
        client.cookies.set(AUTH_COOKIE_NAME, create_access_token(account.id, account.role.value))
        return client

    return _login


@pytest.fixture
def customer(make_account):
    return make_account(RoleEnum.CUSTOMER)


@pytest.fixture
def staff(make_account):
    return make_account(RoleEnum.STAFF)


@pytest.fixture
def admin(make_account):
    return make_account(RoleEnum.ADMIN)


@pytest.fixture
def service_row(db):
    service = Service(service_name="Hydrating Facial", description="60 minute facial", price=45.0)
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def slot_row(db):
    from datetime import time

    slot = Slot(slot_num=1, start_time=time(9, 0), end_time=time(10, 0))
    db.add(slot)
    db.commit()
    db.refresh(slot)
    return slot


@pytest.fixture
def therapist_row(db, make_account, service_row):
    account = make_account(RoleEnum.THERAPIST)
    therapist = Therapist(
        account_id=account.id,
        certification=[],
        experience="5 years",
        specialization=[service_row],
    )
    db.add(therapist)
    db.commit()
    db.refresh(therapist)
    return therapist


@pytest.fixture
def booking(service_row, slot_row, therapist_row, customer):
    """Ids needed to book an appointment for the customer fixture"""
    return {
        "therapistId": therapist_row.id,
        "customerId": customer.id,
        "serviceId": service_row.id,
        "slotsId": slot_row.id,
    }
