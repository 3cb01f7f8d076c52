import enum

from sqlalchemy import Column, DateTime, String

from staffgraph.core.database import Base, new_id, utcnow
from staffgraph.core.security import hash_password, verify_password


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)

    name = Column(String, nullable=False)
    # stored trimmed + lower-cased
    email = Column(String, unique=True, index=True, nullable=False)

    # "ADMIN" | "EMPLOYEE"
    role = Column(String, nullable=False, default=Role.EMPLOYEE.value)

    password_hash = Column(String, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, plain: str) -> None:
        self.password_hash = hash_password(plain)

    def check_password(self, candidate: str) -> bool:
        return verify_password(candidate, self.password_hash)

    def claim(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}
