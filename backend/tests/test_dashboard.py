from datetime import datetime, timedelta

from staffgraph.models.employee import Employee
from staffgraph.services.dashboard import compute_dashboard_stats

STATS = "query { dashboardStats { totalEmployees newEmployees attendanceRate departmentsCount } }"


def test_empty_collection_gives_zeros(gql, staff):
    result = gql(STATS, user=staff)

    assert result.errors is None
    assert result.data["dashboardStats"] == {
        "totalEmployees": 0,
        "newEmployees": 0,
        "attendanceRate": 0,
        "departmentsCount": 0,
    }


def test_stats_over_mixed_records(gql, db, staff):
    now = datetime(2026, 6, 30, 12, 0, 0)
    db.add_all(
        [
            Employee(name="A", email="a@x.com", department="Sales", attendance=90, created_at=now - timedelta(days=2)),
            Employee(name="B", email="b@x.com", department="Sales", attendance=85, created_at=now - timedelta(days=29)),
            Employee(name="C", email="c@x.com", department="HR", attendance=77, created_at=now - timedelta(days=31)),
            Employee(name="D", email="d@x.com", department=None, attendance=100, created_at=now - timedelta(days=400)),
        ]
    )
    db.commit()

    stats = compute_dashboard_stats(db, now=now)

    assert stats.total_employees == 4
    assert stats.new_employees == 2
    # (90 + 85 + 77 + 100) / 4 = 88.0
    assert stats.attendance_rate == 88.0
    assert stats.departments_count == 2


def test_attendance_rate_is_rounded_to_two_decimals(db):
    db.add_all(
        [
            Employee(name="A", email="a@x.com", attendance=100),
            Employee(name="B", email="b@x.com", attendance=100),
            Employee(name="C", email="c@x.com", attendance=99),
        ]
    )
    db.commit()

    assert compute_dashboard_stats(db).attendance_rate == 99.67


def test_dashboard_counts_fresh_records_as_new(gql, db, staff):
    db.add(Employee(name="A", email="a@x.com", department="Ops"))
    db.commit()

    stats = gql(STATS, user=staff).data["dashboardStats"]
    assert stats["totalEmployees"] == 1
    assert stats["newEmployees"] == 1
    assert stats["attendanceRate"] == 100
    assert stats["departmentsCount"] == 1
