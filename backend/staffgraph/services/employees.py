# backend/staffgraph/services/employees.py

import enum
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from staffgraph.core.errors import UserInputError, input_error_from
from staffgraph.models.employee import Employee, EmployeeClass
from staffgraph.services.users import is_duplicate_email, normalize_email

log = logging.getLogger(__name__)

EMAIL_IN_USE = "Email is already in use"
NOT_FOUND = "Employee not found"


class SortOrder(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"


class SortField(str, enum.Enum):
    """Sortable employee attributes, keyed by their public (camelCase) name."""

    NAME = "name"
    EMAIL = "email"
    AGE = "age"
    CLASS = "class"
    ATTENDANCE = "attendance"
    DEPARTMENT = "department"
    POSITION = "position"
    JOIN_DATE = "joinDate"
    PERFORMANCE = "performance"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


SORT_COLUMNS = {
    SortField.NAME: Employee.name,
    SortField.EMAIL: Employee.email,
    SortField.AGE: Employee.age,
    SortField.CLASS: Employee.employee_class,
    SortField.ATTENDANCE: Employee.attendance,
    SortField.DEPARTMENT: Employee.department,
    SortField.POSITION: Employee.position,
    SortField.JOIN_DATE: Employee.join_date,
    SortField.PERFORMANCE: Employee.performance,
    SortField.CREATED_AT: Employee.created_at,
    SortField.UPDATED_AT: Employee.updated_at,
}

SEARCH_COLUMNS = (
    Employee.name,
    Employee.email,
    Employee.department,
    Employee.position,
    Employee.employee_class,
)


def parse_sort_field(sort_by: Optional[str]) -> SortField:
    try:
        return SortField(sort_by or SortField.NAME.value)
    except ValueError:
        allowed = ", ".join(f.value for f in SortField)
        raise UserInputError(f"Cannot sort by '{sort_by}'. Use one of: {allowed}")


@dataclass
class EmployeeFilter:
    search: Optional[str] = None
    department: Optional[str] = None
    employee_class: Optional[str] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    min_attendance: Optional[float] = None
    max_attendance: Optional[float] = None


@dataclass
class EmployeePage:
    employees: List[Employee]
    total_count: int
    total_pages: int


# ---------- SCHEMAS ----------

class _EmployeeFields(BaseModel):
    phone: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=18, le=100)
    employee_class: Optional[EmployeeClass] = None
    attendance: Optional[float] = Field(default=None, ge=0, le=100)
    subjects: Optional[List[str]] = None
    department: Optional[str] = None
    position: Optional[str] = None
    join_date: Optional[datetime] = None
    address: Optional[str] = None
    bio: Optional[str] = None
    education: Optional[List[str]] = None
    skills: Optional[List[str]] = None
    performance: Optional[float] = Field(default=None, ge=0, le=10)
    notes: Optional[str] = None
    profile_image: Optional[str] = None

    @field_validator(
        "phone", "department", "position", "address", "bio", "notes", "profile_image",
        mode="before",
    )
    @classmethod
    def _trim(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("join_date")
    @classmethod
    def _naive_utc(cls, v):
        if v is not None and v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    def columns(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        if data.get("employee_class") is not None:
            data["employee_class"] = data["employee_class"].value
        # lists and defaults are never stored as NULL
        for k in ("subjects", "education", "skills", "attendance", "performance", "join_date"):
            if k in data and data[k] is None:
                del data[k]
        return data


class EmployeeCreate(_EmployeeFields):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v


class EmployeeUpdate(_EmployeeFields):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=3)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    def columns(self) -> dict:
        data = super().columns()
        # name/email are required columns
        for k in ("name", "email"):
            if k in data and data[k] is None:
                del data[k]
        return data


def _validate(model, fields: dict):
    try:
        return model(**fields)
    except ValidationError as e:
        raise input_error_from(e) from e


# ---------- QUERIES ----------

def _escape_like(term: str) -> str:
    # search terms are literal text, not LIKE patterns
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _apply_filter(q, f: Optional[EmployeeFilter]):
    if f is None:
        return q

    if f.search and f.search.strip():
        terms = [_escape_like(t) for t in f.search.split()]
        q = q.filter(
            or_(*[col.ilike(f"%{term}%", escape="\\") for term in terms for col in SEARCH_COLUMNS])
        )

    if f.department:
        q = q.filter(Employee.department == f.department)

    if f.employee_class:
        q = q.filter(Employee.employee_class == f.employee_class)

    # each bound applies only when given; an omitted bound leaves that side open
    if f.min_age is not None:
        q = q.filter(Employee.age >= f.min_age)
    if f.max_age is not None:
        q = q.filter(Employee.age <= f.max_age)
    if f.min_attendance is not None:
        q = q.filter(Employee.attendance >= f.min_attendance)
    if f.max_attendance is not None:
        q = q.filter(Employee.attendance <= f.max_attendance)

    return q


def list_employees(
    db: Session,
    *,
    page: int = 1,
    limit: int = 10,
    filter: Optional[EmployeeFilter] = None,
    sort_by: SortField = SortField.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> EmployeePage:
    limit = max(1, limit or 1)
    page = max(1, page or 1)

    q = _apply_filter(db.query(Employee), filter)

    total_count = q.count()
    total_pages = math.ceil(total_count / limit)

    col = SORT_COLUMNS[sort_by]
    ordering = col.asc() if sort_order == SortOrder.ASC else col.desc()

    employees = (
        q.order_by(ordering, Employee.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return EmployeePage(employees=employees, total_count=total_count, total_pages=total_pages)


def get_employee(db: Session, employee_id: str) -> Optional[Employee]:
    if not employee_id:
        return None
    return db.get(Employee, str(employee_id))


def email_in_use(db: Session, email: str, exclude_id: Optional[str] = None) -> bool:
    q = db.query(Employee.id).filter(Employee.email == normalize_email(email))
    if exclude_id is not None:
        q = q.filter(Employee.id != exclude_id)
    return q.first() is not None


# ---------- WRITES ----------

def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # unique index on email is the authoritative duplicate check
        if not is_duplicate_email(e):
            raise
        raise UserInputError(EMAIL_IN_USE) from e


def create_employee(db: Session, fields: dict) -> Employee:
    payload = _validate(EmployeeCreate, fields)

    if email_in_use(db, payload.email):
        raise UserInputError(EMAIL_IN_USE)

    e = Employee(**payload.columns())
    db.add(e)
    _commit(db)
    db.refresh(e)

    log.info("Created employee %s", e.id)
    return e


def update_employee(db: Session, employee_id: str, fields: dict) -> Employee:
    payload = _validate(EmployeeUpdate, fields)

    if payload.email and email_in_use(db, payload.email, exclude_id=employee_id):
        raise UserInputError(EMAIL_IN_USE)

    e = get_employee(db, employee_id)
    if not e:
        raise UserInputError(NOT_FOUND)

    for k, v in payload.columns().items():
        setattr(e, k, v)

    _commit(db)
    db.refresh(e)

    log.info("Updated employee %s", e.id)
    return e


def delete_employee(db: Session, employee_id: str) -> bool:
    e = get_employee(db, employee_id)
    if not e:
        return False

    db.delete(e)
    db.commit()

    log.info("Deleted employee %s", employee_id)
    return True
