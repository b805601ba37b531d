"""
Shared pytest fixtures: in-memory database, API client and users per role.
"""
import os

os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.permissions import Role
from app.core.security import create_access_token, get_password_hash
from app.db.session import Base, get_db
from app.main import app
from app.models.category import Category
from app.models.user import User

TEST_PASSWORD = "password123"

@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """Create in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False)
    session = TestingSession()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)

@pytest.fixture
def client(test_db) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def users(test_db) -> Dict[Role, User]:
    """One active user per role"""
    created = {}
    for role in Role:
        user = User(
            email=f"{role.value.lower()}@example.com",
            name=role.value.title(),
            hashed_password=get_password_hash(TEST_PASSWORD),
            role=role,
            is_active=True,
        )
        test_db.add(user)
        created[role] = user
    test_db.commit()
    return created

def _headers(user: User) -> Dict[str, str]:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def admin_headers(users) -> Dict[str, str]:
    return _headers(users[Role.ADMIN])

@pytest.fixture
def staff_headers(users) -> Dict[str, str]:
    return _headers(users[Role.STAFF])

@pytest.fixture
def customer_headers(users) -> Dict[str, str]:
    return _headers(users[Role.CUSTOMER])

@pytest.fixture
def category_rows(test_db):
    """
    Electronics
      Phones (sort 2)
      Laptops (sort 1)
        Gaming Laptops
    Home
    """
    rows = [
        Category(id="cat_home", name="Home", slug="home", level=0, sort_order=2),
        Category(id="cat_elec", name="Electronics", slug="electronics", level=0, sort_order=1),
        Category(id="cat_phones", name="Phones", slug="phones", parent_id="cat_elec", level=1, sort_order=2),
        Category(id="cat_laptops", name="Laptops", slug="laptops", parent_id="cat_elec", level=1, sort_order=1),
        Category(id="cat_gaming", name="Gaming Laptops", slug="gaming-laptops", parent_id="cat_laptops", level=2, sort_order=1),
    ]
    test_db.add_all(rows)
    test_db.commit()
    return rows
