# backend/staffgraph/api/resolvers/users.py

import logging

from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from staffgraph.api.deps_auth import require_user
from staffgraph.api.types import AuthPayload, ChangePasswordResult, RegisterInput, UpdateProfileInput, User
from staffgraph.core.errors import AuthenticationError, UserInputError
from staffgraph.services import users as user_service

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"

# Database access and password hashing block, so every service call below
# goes through the threadpool instead of running on the event loop.


async def me(info: Info) -> User:
    current = require_user(info)

    u = await run_in_threadpool(user_service.get_user, info.context.db, current.id)
    if not u:
        # a vanished account means a stale session
        raise AuthenticationError("User not found")
    return User.from_model(u)


async def register(info: Info, input: RegisterInput) -> AuthPayload:
    u = await run_in_threadpool(
        user_service.register_user,
        info.context.db,
        name=input.name,
        email=input.email,
        password=input.password,
        role=input.role,
    )
    return AuthPayload(token=info.context.tokens.issue(u.claim()))


async def login(info: Info, email: str, password: str) -> AuthPayload:
    u = await run_in_threadpool(user_service.authenticate, info.context.db, email, password)
    if not u:
        # same message for unknown email and wrong password
        raise UserInputError(INVALID_CREDENTIALS)

    log.info("User %s logged in", u.id)
    return AuthPayload(token=info.context.tokens.issue(u.claim()))


async def update_profile(info: Info, input: UpdateProfileInput) -> User:
    current = require_user(info)
    u = await run_in_threadpool(
        user_service.update_profile, info.context.db, current.id, name=input.name, email=input.email
    )
    return User.from_model(u)


async def change_password(info: Info, current_password: str, new_password: str) -> ChangePasswordResult:
    current = require_user(info)
    result = await run_in_threadpool(
        user_service.change_password, info.context.db, current.id, current_password, new_password
    )
    return ChangePasswordResult.from_result(result)
