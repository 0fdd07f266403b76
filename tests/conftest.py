"""Shared fixtures: a throwaway SQLite database per test, a session, and an API client."""
import itertools
import os

# Must be set before app.config / app.database are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

import app.models  # noqa: F401  (registers tables on Base.metadata)
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.models.booking import Booking, BookingStatus
from app.models.property import Address, Property, PropertyStatus
from app.models.user import User, UserRole, UserStatus
from app.schemas.user import UserSignupRequest
from app.services.auth import get_password_hash
from app.services.users import UserService
from app.store import Store

PASSWORD = "secret123"
_counter = itertools.count(1)
_password_hash = None


def _hashed_password() -> str:
    global _password_hash
    if _password_hash is None:
        _password_hash = get_password_hash(PASSWORD)
    return _password_hash


def next_phone() -> str:
    return f"555{next(_counter):07d}"


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(
        f"sqlite:///{tmp_path / 'spacefinders.db'}",
        connect_args={"check_same_thread": False},
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; let SQLAlchemy emit BEGIN
    @event.listens_for(eng, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return Store(db)


@pytest.fixture
def make_user(db):
    def _make(username=None, role=UserRole.CLIENT, status=UserStatus.ACTIVE):
        n = next(_counter)
        username = username or f"user{n}"
        user = User(
            username=username,
            email=f"{username}@spacefinders.io",
            phone=next_phone(),
            hashed_password=_hashed_password(),
            role=role,
            status=status,
        )
        db.add(user)
        db.flush()
        return user

    return _make


@pytest.fixture
def make_property(db):
    def _make(host, status=PropertyStatus.AVAILABLE, name="Lake House"):
        address = Address(street="1 Shore Rd", city="Pune", state="MH", country="India", postal_code="411001")
        db.add(address)
        db.flush()
        prop = Property(
            user_id=host.id,
            address_id=address.id,
            name=name,
            price_per_day=120.0,
            status=status,
            rate=0.0,
            rating_count=0,
        )
        prop.address = address
        db.add(prop)
        db.flush()
        return prop

    return _make


@pytest.fixture
def make_booking(db):
    from datetime import date

    def _make(prop, client, status=BookingStatus.PENDING, checkin=date(2026, 11, 1), checkout=date(2026, 11, 5)):
        booking = Booking(
            property_id=prop.id,
            user_id=client.id,
            checkin_date=checkin,
            checkout_date=checkout,
            status=status,
        )
        booking.property = prop
        booking.user = client
        db.add(booking)
        db.flush()
        return booking

    return _make


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = _get_db
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


class Api:
    """Small helper around TestClient for signup/login and authenticated calls."""

    def __init__(self, client: TestClient, session_factory):
        self.client = client
        self.session_factory = session_factory

    def signup(self, username: str, role: str = "CLIENT", **overrides):
        body = {
            "username": username,
            "password": PASSWORD,
            "email": f"{username}@spacefinders.io",
            "phone": next_phone(),
            "address": "221B Baker Street",
            "role": role,
        }
        body.update(overrides)
        return self.client.post("/users/signup", json=body)

    def login(self, username: str, password: str = PASSWORD):
        return self.client.post("/users/login", json={"username": username, "password": password})

    def register(self, username: str, role: str = "CLIENT") -> tuple[int, dict]:
        """Sign up and log in; returns (user_id, auth headers)."""
        r = self.signup(username, role)
        assert r.status_code == 201, r.text
        token = self.login(username).json()["access_token"]
        return r.json()["id"], {"Authorization": f"Bearer {token}"}

    def register_admin(self, username: str) -> tuple[int, dict]:
        """Seed an admin the way scripts/create_admin.py does, then log in."""
        session = self.session_factory()
        try:
            store = Store(session)
            admin = UserService(store).add_user(UserSignupRequest(
                username=username,
                password=PASSWORD,
                email=f"{username}@spacefinders.io",
                phone=next_phone(),
                role="ADMIN",
            ), allow_admin=True)
            store.commit()
        finally:
            session.close()
        token = self.login(username).json()["access_token"]
        return admin.id, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api(client, session_factory):
    return Api(client, session_factory)


PROPERTY_BODY = {
    "property_name": "Hillside Villa",
    "property_description": "Three rooms with a view",
    "no_of_rooms": 3,
    "no_of_bathrooms": 2,
    "max_no_of_guests": 6,
    "price_per_day": 150.0,
    "image_url": "https://img.spacefinders.io/villa.jpg",
    "has_wifi": True,
    "has_parking": True,
    "building_no": "12",
    "street": "Ridge Road",
    "city": "Shimla",
    "state": "HP",
    "country": "India",
    "postal_code": "171001",
}
