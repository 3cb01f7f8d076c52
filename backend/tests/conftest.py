import asyncio
from typing import Optional

import pytest

from staffgraph.api.deps_auth import CurrentUser, GraphQLContext
from staffgraph.api.schema import schema
from staffgraph.core.config import Settings
from staffgraph.core.database import Base, make_engine, make_session_factory
from staffgraph.core.security import TokenService
from staffgraph.models.user import Role, User
from staffgraph.services.users import register_user

# Register models on Base.metadata
import staffgraph.models.employee  # noqa: F401


@pytest.fixture
def settings():
    return Settings(DATABASE_URL="sqlite://", JWT_SECRET_KEY="test-secret", _env_file=None)


@pytest.fixture
def db():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def tokens(settings):
    return TokenService(settings)


def as_current(u: User) -> CurrentUser:
    return CurrentUser(id=u.id, name=u.name, email=u.email, role=u.role)


@pytest.fixture
def admin(db):
    return register_user(db, name="Admin", email="admin@test.io", password="admin-pass-1", role=Role.ADMIN)


@pytest.fixture
def staff(db):
    return register_user(db, name="Staff", email="staff@test.io", password="staff-pass-1")


@pytest.fixture
def gql(db, tokens):
    """Run an operation against the schema with an optional current user."""

    def run(query: str, variables: Optional[dict] = None, user: Optional[User] = None, context_db=None):
        ctx = GraphQLContext(
            db=context_db if context_db is not None else db,
            tokens=tokens,
            user=as_current(user) if user is not None else None,
        )
        return asyncio.run(schema.execute(query, variable_values=variables, context_value=ctx))

    return run


def error_code(result) -> Optional[str]:
    assert result.errors, "expected a GraphQL error"
    return (result.errors[0].extensions or {}).get("code")
