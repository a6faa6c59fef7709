import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from vacaplanner.database import Base, get_db
from vacaplanner.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="function", autouse=True)
def setup_database():
    """Fresh schema for every test so service-level commits and rollbacks stay isolated."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    session = TestingSessionLocal()
    yield session
    session.close()

@pytest.fixture(scope="function")
def session_factory():
    """Extra sessions for interleaving two writers; all of them are closed on teardown."""
    sessions = []

    def _open():
        session = TestingSessionLocal()
        sessions.append(session)
        return session

    yield _open
    for session in sessions:
        session.close()

def _make_user(db_session, email, role, name):
    from vacaplanner.models.user import User
    from vacaplanner.services import auth as auth_service

    user = User(
        email=email,
        hashed_password=auth_service.get_password_hash("Password123!"),
        name=name,
        role=role,
        vacation_days_total=22,
        vacation_half_days_used=0,
        personal_hours_total=32,
        personal_minutes_used=0,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user

@pytest.fixture(scope="function")
def admin_user(db_session):
    from vacaplanner.models.user import UserRole
    return _make_user(db_session, "admin@vacaplanner.it", UserRole.ADMIN, "Anna Amministratrice")

@pytest.fixture(scope="function")
def manager_user(db_session):
    from vacaplanner.models.user import UserRole
    return _make_user(db_session, "manager@vacaplanner.it", UserRole.MANAGER, "Marco Manager")

@pytest.fixture(scope="function")
def employee(db_session):
    from vacaplanner.models.user import UserRole
    return _make_user(db_session, "mario.rossi@vacaplanner.it", UserRole.USER, "Mario Rossi")

@pytest.fixture(scope="function")
def other_employee(db_session):
    from vacaplanner.models.user import UserRole
    return _make_user(db_session, "giulia.bianchi@vacaplanner.it", UserRole.USER, "Giulia Bianchi")

@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens."""
    from vacaplanner.services.auth import create_access_token

    def _get_token(user):
        return create_access_token(data={
            "sub": str(user.id),
            "role": user.role.value,
        })
    return _get_token

@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {get_token(user)}"}
    return _auth_headers

@pytest.fixture(scope="function")
def client():
    """Get a TestClient that uses the test database via dependency override."""
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
