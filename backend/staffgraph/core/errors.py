# backend/staffgraph/core/errors.py

from pydantic import ValidationError


class AppError(Exception):
    """Client-visible error; the code travels in GraphQL ``extensions``."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.extensions = {"code": self.code}


class AuthenticationError(AppError):
    code = "UNAUTHENTICATED"


class ForbiddenError(AppError):
    code = "FORBIDDEN"


class UserInputError(AppError):
    code = "BAD_USER_INPUT"


def input_error_from(exc: ValidationError) -> UserInputError:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ()))
    msg = err.get("msg", "Invalid input")
    return UserInputError(f"{field}: {msg}" if field else msg)
