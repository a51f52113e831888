# File: tests/conftest.py
import os

# Keep the application's own engine off the developer database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, get_db
from main import app
from models.users import User
from models.product import Product
from utils.hashing import get_password_hash
from utils.tokenJWT import token_for_user

PASSWORD = "s3cret-pass"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make(email="jane@example.com", name="Jane Doe", is_admin=False):
        user = User(
            name=name,
            email=email,
            password=get_password_hash(PASSWORD),
            is_admin=is_admin,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", name="Admin User", is_admin=True)


def auth_headers(user):
    return {"Authorization": f"Bearer {token_for_user(user)}"}


@pytest.fixture
def headers(user):
    return auth_headers(user)


@pytest.fixture
def products(db_session):
    rows = [
        Product(name="Men's Chino Pants", category="Men", subcategory="Pants", price=1599,
                original_price=2499, images="https://img/1.jpg,https://img/2.jpg", rating=4.3,
                sizes="30,32,34", color="Beige", description="Stylish chino pants", stock=5),
        Product(name="Women's Pleated Skirt", category="Women", subcategory="Skirts", price=1199,
                original_price=1699, images="https://img/3.jpg", rating=4.6,
                sizes="S,M,L", color="White", description="Pleated skirt for summer", stock=2),
        Product(name="Kids' Jogger Pants", category="Kids", subcategory="Pants", price=899,
                images="https://img/4.jpg", rating=4.4, sizes="2-4Y,4-6Y", color="Gray",
                description="Jogger pants for active kids", stock=None),
    ]
    db_session.add_all(rows)
    db_session.commit()
    for p in rows:
        db_session.refresh(p)
    return rows


@pytest.fixture
def auth_for():
    return auth_headers
