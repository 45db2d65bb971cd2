import os

# Must be set before the app (and its settings) is imported
os.environ["ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("LOG_DIR", "logs")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from main import app
from core.config import settings
from core.database import Base
from models.users import User
from services.auth_service import AuthService
from services.session_store import SessionStore
from utils.deps import get_db, signer
from utils.hashing import get_password_hash

TEST_PASSWORD = "TestPassword123!"

# SYNC SQLite for testing (matches sync service layer)
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False}
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Creates a fresh, empty database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(session: Session) -> SessionStore:
    return SessionStore(session)


@pytest.fixture
def auth_service(store: SessionStore) -> AuthService:
    return AuthService(store, signer, settings)


@pytest.fixture
def active_user(session: Session) -> User:
    """An active user whose password is TEST_PASSWORD."""
    user = User(
        email="active@example.com",
        hashed_password=get_password_hash(TEST_PASSWORD),
        display_name="Active User",
        is_active=True
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
async def client(session: Session):
    """
    Yields an HTTP client that talks to the app using the test database.
    The client is async (for FastAPI), but the DB session is sync.
    """
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
