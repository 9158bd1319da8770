import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_WORK_FACTOR"] = "4"

import pytest
from fastapi.testclient import TestClient

from messagely import models  # noqa: F401
from messagely.database import Base, SessionLocal, engine
from messagely.main import app
from messagely.repositories import MessageRepository, UserRepository


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def users(db):
    return UserRepository(db)


@pytest.fixture
def messages(db):
    return MessageRepository(db)


@pytest.fixture
def client():
    return TestClient(app)
