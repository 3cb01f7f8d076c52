# backend/staffgraph/api/types.py

from datetime import datetime
from typing import List, Optional

import strawberry

from staffgraph.models.employee import Employee as EmployeeModel
from staffgraph.models.user import Role, User as UserModel
from staffgraph.services.dashboard import DashboardStats as DashboardStatsData
from staffgraph.services.employees import EmployeeFilter, EmployeePage as EmployeePageData, SortOrder
from staffgraph.services.users import PasswordChange

Role = strawberry.enum(Role)
SortOrder = strawberry.enum(SortOrder)


def iso(dt: Optional[datetime]) -> Optional[str]:
    # stored as naive UTC
    if dt is None:
        return None
    return dt.isoformat(timespec="milliseconds") + "Z"


def provided(data) -> dict:
    """Fields the client actually sent, keyed by attribute name."""
    return {k: v for k, v in vars(data).items() if v is not strawberry.UNSET}


# ---------- OUTPUT ----------

@strawberry.type
class User:
    id: strawberry.ID
    name: str
    email: str
    role: Role
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_model(cls, u: UserModel) -> "User":
        return cls(
            id=strawberry.ID(u.id),
            name=u.name,
            email=u.email,
            role=Role(u.role),
            created_at=iso(u.created_at),
            updated_at=iso(u.updated_at),
        )


@strawberry.type
class Employee:
    id: strawberry.ID
    name: str
    email: str
    phone: Optional[str] = None
    age: Optional[int] = None
    employee_class: Optional[str] = strawberry.field(name="class", default=None)
    attendance: Optional[float] = None
    subjects: List[str] = strawberry.field(default_factory=list)
    department: Optional[str] = None
    position: Optional[str] = None
    join_date: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None
    education: List[str] = strawberry.field(default_factory=list)
    skills: List[str] = strawberry.field(default_factory=list)
    performance: Optional[float] = None
    notes: Optional[str] = None
    profile_image: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_model(cls, e: EmployeeModel) -> "Employee":
        return cls(
            id=strawberry.ID(e.id),
            name=e.name,
            email=e.email,
            phone=e.phone,
            age=e.age,
            employee_class=e.employee_class,
            attendance=e.attendance,
            subjects=list(e.subjects or []),
            department=e.department,
            position=e.position,
            join_date=iso(e.join_date),
            address=e.address,
            bio=e.bio,
            education=list(e.education or []),
            skills=list(e.skills or []),
            performance=e.performance,
            notes=e.notes,
            profile_image=e.profile_image,
            created_at=iso(e.created_at),
            updated_at=iso(e.updated_at),
        )


@strawberry.type
class EmployeePage:
    employees: List[Employee]
    total_count: int
    total_pages: int

    @classmethod
    def from_page(cls, page: EmployeePageData) -> "EmployeePage":
        return cls(
            employees=[Employee.from_model(e) for e in page.employees],
            total_count=page.total_count,
            total_pages=page.total_pages,
        )


@strawberry.type
class AuthPayload:
    token: str


@strawberry.type
class ChangePasswordResult:
    success: bool
    message: str

    @classmethod
    def from_result(cls, r: PasswordChange) -> "ChangePasswordResult":
        return cls(success=r.success, message=r.message)


@strawberry.type
class DashboardStats:
    total_employees: int
    new_employees: int
    attendance_rate: float
    departments_count: int

    @classmethod
    def from_stats(cls, s: DashboardStatsData) -> "DashboardStats":
        return cls(
            total_employees=s.total_employees,
            new_employees=s.new_employees,
            attendance_rate=s.attendance_rate,
            departments_count=s.departments_count,
        )


# ---------- INPUT ----------

@strawberry.input
class RegisterInput:
    name: str
    email: str
    password: str
    role: Optional[Role] = None


@strawberry.input
class UpdateProfileInput:
    name: Optional[str] = None
    email: Optional[str] = None


@strawberry.input
class EmployeeInput:
    name: str
    email: str
    phone: Optional[str] = strawberry.UNSET
    age: Optional[int] = strawberry.UNSET
    employee_class: Optional[str] = strawberry.field(name="class", default=strawberry.UNSET)
    attendance: Optional[float] = strawberry.UNSET
    subjects: Optional[List[str]] = strawberry.UNSET
    department: Optional[str] = strawberry.UNSET
    position: Optional[str] = strawberry.UNSET
    join_date: Optional[str] = strawberry.UNSET
    address: Optional[str] = strawberry.UNSET
    bio: Optional[str] = strawberry.UNSET
    education: Optional[List[str]] = strawberry.UNSET
    skills: Optional[List[str]] = strawberry.UNSET
    performance: Optional[float] = strawberry.UNSET
    notes: Optional[str] = strawberry.UNSET
    profile_image: Optional[str] = strawberry.UNSET


@strawberry.input
class EmployeeFilterInput:
    search: Optional[str] = None
    department: Optional[str] = None
    employee_class: Optional[str] = strawberry.field(name="class", default=None)
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    min_attendance: Optional[float] = None
    max_attendance: Optional[float] = None

    def to_filter(self) -> EmployeeFilter:
        return EmployeeFilter(
            search=self.search,
            department=self.department,
            employee_class=self.employee_class,
            min_age=self.min_age,
            max_age=self.max_age,
            min_attendance=self.min_attendance,
            max_attendance=self.max_attendance,
        )
