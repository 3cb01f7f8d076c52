import enum

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
)

from staffgraph.core.database import Base, new_id, utcnow


class EmployeeClass(str, enum.Enum):
    SENIOR = "Senior"
    MID_LEVEL = "Mid-level"
    JUNIOR = "Junior"
    INTERN = "Intern"


class Employee(Base):
    __tablename__ = "employees"

    __table_args__ = (
        CheckConstraint("age IS NULL OR (age >= 18 AND age <= 100)", name="ck_employees_age_range"),
        CheckConstraint("attendance >= 0 AND attendance <= 100", name="ck_employees_attendance_range"),
        CheckConstraint("performance >= 0 AND performance <= 10", name="ck_employees_performance_range"),
        Index("ix_employees_department", "department"),
        Index("ix_employees_created_at", "created_at"),
    )

    id = Column(String(32), primary_key=True, default=new_id)

    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)

    age = Column(Integer, nullable=True)
    # "class" is reserved in Python
    employee_class = Column("class", String, nullable=True)

    attendance = Column(Float, nullable=False, default=100)
    performance = Column(Float, nullable=False, default=7)

    # ordered lists, kept as documents
    subjects = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    skills = Column(JSON, nullable=False, default=list)

    department = Column(String, nullable=True)
    position = Column(String, nullable=True)
    join_date = Column(DateTime, nullable=False, default=utcnow)

    address = Column(String, nullable=True)
    bio = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    profile_image = Column(String, nullable=True)

    # timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
