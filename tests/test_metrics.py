from datetime import date

from ops_personnel.schemas.auth import Actor
from ops_personnel.schemas.records import (
    AttendanceRecord,
    EmployeeRecord,
    EvaluationRecord,
    ObservationRecord,
)
from ops_personnel.services import metrics
from ops_personnel.services.record_store import Snapshot


def _employee(id, department, score):
    return EmployeeRecord(
        id=id, name=id, department=department, email=f"{id}@skyport.aero",
        username=id, role="employee", overall_score=score,
    )


def _evaluation(id, employee_id, day, score):
    return EvaluationRecord(
        id=id, employee_id=employee_id, year=day.year, date=day, score=score, rating="Meets",
    )


def _observation(id, employee_id, status):
    return ObservationRecord(
        id=id, employee_id=employee_id, date=date(2024, 5, 1), description="late to stand", status=status,
    )


MANAGER = Actor(id="m1", role="manager", department="Ramp Operations", name="Sam", email="sam@skyport.aero")
ADMIN = Actor(id="a1", role="admin", department="HR & Admin", name="Ada", email="ada@skyport.aero")


def test_performance_breakdown_bands():
    team = [_employee(f"e{i}", "Ramp Operations", s) for i, s in enumerate([95, 88, 78, 82, 92])]
    assert metrics.performance_breakdown(team) == {"Exceeds": 2, "Meets": 3, "Below": 0}


def test_band_boundaries():
    assert metrics.score_band(90) == "Exceeds"
    assert metrics.score_band(89) == "Meets"
    assert metrics.score_band(75) == "Meets"
    assert metrics.score_band(74) == "Below"


def test_breakdown_of_nobody_is_all_zero():
    assert metrics.performance_breakdown([]) == {"Exceeds": 0, "Meets": 0, "Below": 0}


def test_breakdown_uses_current_score_over_baseline():
    employee = _employee("e1", "Ramp Operations", 95).model_copy(update={"current_score": 60})
    assert metrics.performance_breakdown([employee]) == {"Exceeds": 0, "Meets": 0, "Below": 1}


def test_department_distribution_skips_empty_departments():
    staff = [
        _employee("e1", "Ramp Operations", 80),
        _employee("e2", "Ramp Operations", 80),
        _employee("e3", "Cargo Logistics", 80),
    ]
    departments = ["Ramp Operations", "Baggage Handling", "Cargo Logistics"]
    assert metrics.department_distribution(staff, departments) == [
        {"name": "Ramp Operations", "value": 2},
        {"name": "Cargo Logistics", "value": 1},
    ]


def test_team_stats_for_manager():
    staff = [
        _employee("m1", "Ramp Operations", 90),
        _employee("e1", "Ramp Operations", 81),
        _employee("e2", "Baggage Handling", 40),
    ]
    observations = [
        _observation("o1", "e1", "open"),
        _observation("o2", "e1", "closed"),
        _observation("o3", "e2", "open"),
    ]
    # mean 85.5 rounds half up
    assert metrics.team_stats(MANAGER, staff, observations) == {
        "avg_score": 86, "team_size": 2, "open_observations": 1,
    }


def test_team_stats_empty_team_and_non_manager():
    assert metrics.team_stats(MANAGER, [], []) == {"avg_score": 0, "team_size": 0, "open_observations": 0}
    assert metrics.team_stats(ADMIN, [_employee("e1", "HR & Admin", 80)], []) is None


def test_latest_score_is_by_date_not_insertion_order():
    evaluations = [
        _evaluation("v1", "e1", date(2024, 6, 1), 91),
        _evaluation("v2", "e1", date(2023, 1, 10), 95),
        _evaluation("v3", "e2", date(2025, 1, 1), 50),
    ]
    assert metrics.latest_score("e1", evaluations, fallback=80) == 91
    assert metrics.latest_score("e9", evaluations, fallback=80) == 80


def test_with_current_scores():
    staff = [_employee("e1", "Ramp Operations", 80), _employee("e2", "Ramp Operations", 72)]
    scored = metrics.with_current_scores(staff, [_evaluation("v1", "e1", date(2024, 6, 1), 93)])
    assert [e.current_score for e in scored] == [93, 72]
    # input records are left untouched
    assert staff[0].current_score is None


def test_leave_totals():
    records = [
        AttendanceRecord(id="l1", employee_id="e1", date=date(2024, 1, 2), type="vacation", duration=2.5),
        AttendanceRecord(id="l2", employee_id="e1", date=date(2024, 2, 2), type="vacation", duration=1.0),
        AttendanceRecord(id="l3", employee_id="e1", date=date(2024, 3, 2), type="sick", duration=0.5),
    ]
    assert metrics.leave_totals(records) == {"vacation": 3.5, "sick": 0.5}
    assert metrics.leave_totals([]) == {}


def test_build_dashboard_counts_only_visible_staff():
    snapshot = Snapshot(
        employees=[
            _employee("m1", "Ramp Operations", 90),
            _employee("e1", "Ramp Operations", 70),
            _employee("e2", "Baggage Handling", 95),
        ],
        departments=["Ramp Operations", "Baggage Handling"],
    )
    summary = metrics.build_dashboard(MANAGER, snapshot)
    assert summary["total_employees"] == 2
    assert summary["performance_breakdown"] == {"Exceeds": 1, "Meets": 0, "Below": 1}
    assert summary["department_distribution"] == [{"name": "Ramp Operations", "value": 2}]
    assert summary["team_stats"]["team_size"] == 2

    admin_summary = metrics.build_dashboard(ADMIN, snapshot)
    assert admin_summary["total_employees"] == 3
    assert admin_summary["team_stats"] is None
