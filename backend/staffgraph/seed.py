# backend/staffgraph/seed.py

import logging

from sqlalchemy.orm import Session

from staffgraph.core.config import get_settings
from staffgraph.core.database import Base, make_engine, make_session_factory
from staffgraph.models.employee import Employee
from staffgraph.models.user import Role, User
from staffgraph.services.users import normalize_email

log = logging.getLogger(__name__)

# Change these creds anytime (dev defaults)
SEED_USERS = [
    {"name": "Admin", "email": "admin@example.com", "role": Role.ADMIN.value, "password": "admin12345"},
    {"name": "Employee", "email": "employee@example.com", "role": Role.EMPLOYEE.value, "password": "employee123"},
]

SEED_EMPLOYEES = [
    {
        "name": "Alice Johnson",
        "email": "alice.johnson@example.com",
        "phone": "+1 555 0101",
        "age": 34,
        "employee_class": "Senior",
        "attendance": 96,
        "subjects": ["Architecture", "Code Review"],
        "department": "Engineering",
        "position": "Staff Engineer",
        "skills": ["Python", "GraphQL", "PostgreSQL"],
        "education": ["BSc Computer Science"],
        "performance": 9,
    },
    {
        "name": "Bob Martinez",
        "email": "bob.martinez@example.com",
        "age": 27,
        "employee_class": "Mid-level",
        "attendance": 88,
        "subjects": ["Campaigns"],
        "department": "Marketing",
        "position": "Marketing Specialist",
        "skills": ["SEO", "Copywriting"],
        "performance": 7,
    },
    {
        "name": "Chen Wei",
        "email": "chen.wei@example.com",
        "age": 23,
        "employee_class": "Junior",
        "attendance": 92,
        "department": "Finance",
        "position": "Analyst",
        "skills": ["Excel", "Forecasting"],
        "performance": 8,
    },
    {
        "name": "Dana Smith",
        "email": "dana.smith@example.com",
        "age": 21,
        "employee_class": "Intern",
        "attendance": 100,
        "department": "HR",
        "position": "HR Intern",
        "performance": 6,
    },
]


def seed(db: Session) -> tuple[int, int]:
    created = 0
    updated = 0

    for s in SEED_USERS:
        existing = db.query(User).filter(User.email == normalize_email(s["email"])).first()
        if existing:
            # reset password + role so the documented creds always work
            existing.password = s["password"]
            existing.name = s["name"]
            existing.role = s["role"]
            updated += 1
            log.info("Updated user %s (%s)", s["email"], s["role"])
            continue

        u = User(name=s["name"], email=normalize_email(s["email"]), role=s["role"])
        u.password = s["password"]
        db.add(u)
        created += 1
        log.info("Created user %s (%s)", s["email"], s["role"])

    for data in SEED_EMPLOYEES:
        if db.query(Employee.id).filter(Employee.email == data["email"]).first():
            continue
        db.add(Employee(**data))
        created += 1

    db.commit()
    return created, updated


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    engine = make_engine(settings.DATABASE_URL)

    # make sure tables exist
    Base.metadata.create_all(bind=engine)

    db = make_session_factory(engine)()
    try:
        created, updated = seed(db)
    finally:
        db.close()

    log.info("Done. Created %d record(s). Updated %d user(s).", created, updated)
    for s in SEED_USERS:
        log.info("Login: %s / %s", s["email"], s["password"])


if __name__ == "__main__":
    main()
