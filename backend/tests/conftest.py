"""
Shared fixtures for the contact intake tests.

Storage tests run on in-memory SQLite. SQLite has no regexp_replace, so a
Postgres-compatible one is registered on every new connection.
"""
import os
import re

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "dev")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contact_intake.core.config import get_settings
from contact_intake.core.db import Base
from contact_intake.models.issue import Issue  # noqa: F401
from contact_intake.models.organization import Organization  # noqa: F401
from contact_intake.models.organization_issue import OrganizationIssue  # noqa: F401
from contact_intake.models.person import Person  # noqa: F401
from contact_intake.models.person_organization import PersonOrganization  # noqa: F401


def _regexp_replace(value, pattern, replacement, flags):
    if value is None:
        return None
    count = 0 if "g" in (flags or "") else 1
    return re.sub(pattern, replacement, value, count=count)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _register_functions(dbapi_connection, connection_record):
        dbapi_connection.create_function("regexp_replace", 4, _regexp_replace)

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def settings():
    return get_settings().model_copy()
