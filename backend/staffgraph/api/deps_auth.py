# backend/staffgraph/api/deps_auth.py

import logging
from typing import Optional

from fastapi import Depends, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext
from strawberry.types import Info

from staffgraph.core.errors import AuthenticationError, ForbiddenError
from staffgraph.core.security import TokenService
from staffgraph.models.user import Role
from staffgraph.services.users import get_user

log = logging.getLogger(__name__)


class CurrentUser(BaseModel):
    id: str
    name: str
    email: str
    role: str  # "ADMIN" | "EMPLOYEE"


class GraphQLContext(BaseContext):
    def __init__(self, db: Session, tokens: TokenService, user: Optional[CurrentUser] = None):
        super().__init__()
        self.db = db
        self.tokens = tokens
        self.user = user


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header, else None."""
    if not authorization or not isinstance(authorization, str):
        return None
    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def resolve_current_user(db: Session, tokens: TokenService, token: Optional[str]) -> Optional[CurrentUser]:
    """Verify the token and look its user up again.

    Every failure (bad signature, expiry, malformed payload, user gone)
    means "no user" rather than an error.
    """
    if not token:
        return None

    claim = tokens.verify(token)
    if not claim:
        return None

    user = get_user(db, str(claim["id"]))
    if not user:
        log.debug("Token refers to missing user %s", claim["id"])
        return None

    return CurrentUser(id=user.id, name=user.name, email=user.email, role=user.role)


def get_context(request: Request, db: Session = Depends(get_db)) -> GraphQLContext:
    # sync so FastAPI runs the user lookup in its threadpool
    tokens: TokenService = request.app.state.tokens
    token = bearer_token(request.headers.get("Authorization"))
    return GraphQLContext(db=db, tokens=tokens, user=resolve_current_user(db, tokens, token))


# ---------- GUARDS ----------

def require_user(info: Info) -> CurrentUser:
    user = info.context.user
    if not user:
        raise AuthenticationError("Not authenticated")
    return user


def require_admin(info: Info, action: str) -> CurrentUser:
    user = require_user(info)
    if user.role != Role.ADMIN.value:
        raise ForbiddenError(f"Not authorized to {action}")
    return user
