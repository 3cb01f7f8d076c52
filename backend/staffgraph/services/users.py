# backend/staffgraph/services/users.py

import logging
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from staffgraph.core.errors import UserInputError, input_error_from
from staffgraph.models.user import Role, User

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

EMAIL_TAKEN = "Email already exists"


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


# ---------- SCHEMAS ----------

class RegisterData(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    role: Role = Role.EMPLOYEE

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        # blank values leave the stored field untouched
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v):
        return normalize_email(v) if v is not None else v


# ---------- REPOSITORY ----------

def get_user(db: Session, user_id: str) -> Optional[User]:
    if not user_id:
        return None
    return db.get(User, str(user_id))


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def email_taken(db: Session, email: str, exclude_id: Optional[str] = None) -> bool:
    q = db.query(User.id).filter(User.email == normalize_email(email))
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    return q.first() is not None


def is_duplicate_email(err: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed: users.email"
    # postgres: 'duplicate key value violates unique constraint "ix_users_email"'
    text = str(err.orig).lower()
    return "unique" in text and "email" in text


def _commit_unique(db: Session, message: str) -> None:
    # the unique index is the real guard; pre-checks only reject early
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not is_duplicate_email(e):
            raise
        raise UserInputError(message) from e


# ---------- CREDENTIAL LIFECYCLE ----------

def register_user(db: Session, *, name: str, email: str, password: str, role: Optional[Role] = None) -> User:
    if email_taken(db, email):
        raise UserInputError(EMAIL_TAKEN)

    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise UserInputError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    try:
        data = RegisterData(name=name, email=email, password=password, role=role or Role.EMPLOYEE)
    except ValidationError as e:
        raise input_error_from(e) from e

    u = User(name=data.name, email=data.email, role=data.role.value)
    u.password = data.password

    db.add(u)
    _commit_unique(db, EMAIL_TAKEN)
    db.refresh(u)

    log.info("Registered user %s (%s)", u.id, u.role)
    return u


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    u = get_user_by_email(db, email)
    if not u or not u.check_password(password):
        return None
    return u


def update_profile(db: Session, user_id: str, *, name: Optional[str] = None, email: Optional[str] = None) -> User:
    payload = ProfileUpdate(name=name, email=email)

    if payload.email and email_taken(db, payload.email, exclude_id=user_id):
        raise UserInputError(EMAIL_TAKEN)

    u = get_user(db, user_id)
    if not u:
        raise UserInputError("User not found")

    for k, v in payload.model_dump(exclude_none=True).items():
        setattr(u, k, v)

    _commit_unique(db, EMAIL_TAKEN)
    db.refresh(u)
    return u


class PasswordChange(BaseModel):
    success: bool
    message: str


def change_password(db: Session, user_id: str, current_password: str, new_password: str) -> PasswordChange:
    """Validation failures come back as a result object, not an exception."""
    u = get_user(db, user_id)
    if not u:
        raise UserInputError("User not found")

    if not u.check_password(current_password):
        return PasswordChange(success=False, message="Current password is incorrect")

    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        return PasswordChange(
            success=False,
            message=f"New password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    u.password = new_password
    db.commit()

    log.info("Password changed for user %s", u.id)
    return PasswordChange(success=True, message="Password changed successfully")
