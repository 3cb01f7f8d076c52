from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from staffgraph.core.database import utcnow
from staffgraph.models.employee import Employee

NEW_EMPLOYEE_WINDOW = timedelta(days=30)


@dataclass
class DashboardStats:
    total_employees: int
    new_employees: int
    attendance_rate: float
    departments_count: int


def compute_dashboard_stats(db: Session, now: Optional[datetime] = None) -> DashboardStats:
    since = (now or utcnow()) - NEW_EMPLOYEE_WINDOW

    total = db.query(func.count(Employee.id)).scalar() or 0
    new = (
        db.query(func.count(Employee.id))
        .filter(Employee.created_at >= since)
        .scalar()
        or 0
    )

    avg_attendance = db.query(func.avg(Employee.attendance)).scalar()
    attendance_rate = round(float(avg_attendance), 2) if avg_attendance is not None else 0

    # COUNT(DISTINCT ...) skips NULL departments
    departments = db.query(func.count(distinct(Employee.department))).scalar() or 0

    return DashboardStats(
        total_employees=int(total),
        new_employees=int(new),
        attendance_rate=attendance_rate,
        departments_count=int(departments),
    )
