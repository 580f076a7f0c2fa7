"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Redis is replaced
by fakeredis and object storage by an in-memory double, both reset per test.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from gallery_admin.core.config import TestingConfig
from gallery_admin.core.extensions import BLOB_STORAGE_KEY, REDIS_KEY
from gallery_admin.core.extensions import db as _db  # Flask-SQLAlchemy instance
from gallery_admin.factory import create_app  # application factory under test
from gallery_admin.services._shared.ports.blob_storage import InMemoryBlobStorage


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Leaves ``REDIS_URL`` and ``S3_BUCKET`` empty; doubles are injected.
    - Rate limiting stays off so repeated logins do not trip it.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied, a fakeredis
        client and in-memory blob storage registered as extensions.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig)
    app.extensions[REDIS_KEY] = fakeredis.FakeRedis(decode_responses=True)
    app.extensions[BLOB_STORAGE_KEY] = InMemoryBlobStorage()
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session.

    Yields
    ------
    sqlalchemy.engine.Connection
        Connection reused by nested transactions in each test.
    """
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; automatically rolled
        back after each test.

    Notes
    -----
    The connection sits inside a SAVEPOINT, so the session joins it in
    ``create_savepoint`` mode: ``commit()`` from a unit of work releases the
    session's own savepoint and ``rollback()`` only undoes work since the last
    commit. Everything disappears when the outer transaction rolls back.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection
    SessionFactory = sessionmaker(
        bind=connection, future=True, join_transaction_mode="create_savepoint"
    )
    scoped = scoped_session(SessionFactory)

    # 3) SAVEPOINT per test
    nested = connection.begin_nested()

    # 4) Re-create SAVEPOINT when the previous nested transaction ends
    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    # 5) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture()
def redis_client(app):
    """The fakeredis client registered on the app, emptied for each test."""
    client = app.extensions[REDIS_KEY]
    client.flushall()
    yield client
    client.flushall()


@pytest.fixture()
def blob_storage(app):
    """The in-memory blob storage registered on the app, emptied for each test."""
    storage = app.extensions[BLOB_STORAGE_KEY]
    storage.objects.clear()
    return storage


@pytest.fixture()
def client(app, session, redis_client, blob_storage):
    """Return a Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import bind_session

    bind_session(session)
    yield
    bind_session(None)
