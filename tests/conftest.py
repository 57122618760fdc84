"""Shared test fixtures for todo-core."""

import os
import sqlite3
import tempfile

import pytest

from todo_core.main import app
from todo_core.config import settings
from todo_core.db import Core, init_db
from todo_core.schema import load_schema

# Cheap hashes keep the suite fast; behavior is identical
settings.bcrypt_work_factor = 4

ANN = {"name": "Ann", "email": "ann@x.com", "password": "secret123"}
BOB = {"name": "Bob", "email": "bob@x.com", "password": "hunter2000"}


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row

    # Enable foreign key constraints (required for SQLite)
    db.execute("PRAGMA foreign_keys = ON")

    db.executescript(load_schema())
    db.commit()

    yield db

    db.close()


@pytest.fixture
def core(test_db):
    """Core bound to the in-memory test database."""
    return Core(test_db, atomic=False)


@pytest.fixture
def db_file():
    """Point settings.database_path at a fresh temp file database.

    Uses a temp file instead of :memory: so every Core created during a
    request sees the same data.
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    original_db_path = settings.database_path
    settings.database_path = db_path
    try:
        init_db()
        yield db_path
    finally:
        settings.database_path = original_db_path
        try:
            os.unlink(db_path)
        except OSError:
            pass


@pytest.fixture
def client(db_file):
    """Create test client for API testing. Each test gets a fresh database."""
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def other_client(db_file):
    """A second, independent client (own cookie jar) on the same database.

    Not used as a context manager so it never holds a preserved request
    context while the primary client is active.
    """
    app.config["TESTING"] = True
    return app.test_client()


def register(client, payload=None):
    """Register a user through the API and return the response."""
    return client.post("/api/auth/register", json=payload or ANN)


@pytest.fixture
def authenticated_client(client):
    """Client that has registered Ann and holds her session cookie.

    Returns a tuple of (client, user) where user is the registration
    response body.
    """
    response = register(client, ANN)
    assert response.status_code == 201
    return client, response.get_json()


@pytest.fixture
def other_authenticated_client(other_client):
    """Second client logged in as Bob."""
    response = register(other_client, BOB)
    assert response.status_code == 201
    return other_client, response.get_json()
