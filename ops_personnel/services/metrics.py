"""
Dashboard and team statistics derived from snapshot records.
Everything here is a pure function and accepts empty collections.
"""
import math
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from ops_personnel.models.behaviour_issue import ObservationStatus
from ops_personnel.models.employee import EmployeeRole
from ops_personnel.models.evaluation import EvaluationRating
from ops_personnel.services.visibility import ensure_known_role, filter_visible

EXCEEDS_THRESHOLD = 90
MEETS_THRESHOLD = 75


def score_band(score: float) -> str:
    if score >= EXCEEDS_THRESHOLD:
        return EvaluationRating.EXCEEDS.value
    if score >= MEETS_THRESHOLD:
        return EvaluationRating.MEETS.value
    return EvaluationRating.BELOW.value


def performance_breakdown(employees: Iterable) -> Dict[str, int]:
    counts = {band.value: 0 for band in EvaluationRating}
    for employee in employees:
        counts[score_band(employee.effective_score)] += 1
    return counts


def department_distribution(employees: Iterable, departments: Sequence[str]) -> List[Dict[str, object]]:
    """Employee count per known department; empty departments are left out."""
    counts = Counter(e.department for e in employees)
    return [{"name": name, "value": counts[name]} for name in departments if counts[name] > 0]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def team_stats(actor, employees: Sequence, observations: Iterable) -> Optional[Dict[str, int]]:
    """Stats for a manager's department. None for any other role."""
    if actor.role != EmployeeRole.MANAGER:
        return None
    team = [e for e in employees if e.department == actor.department]
    team_ids = {e.id for e in team}
    avg = _round_half_up(sum(e.effective_score for e in team) / len(team)) if team else 0
    open_count = sum(
        1 for o in observations
        if o.employee_id in team_ids and o.status == ObservationStatus.OPEN
    )
    return {"avg_score": avg, "team_size": len(team), "open_observations": open_count}


def latest_score(employee_id: str, evaluations: Iterable, fallback: int) -> int:
    """
    Score of the employee's most recent evaluation by date, or `fallback`.
    Same-date evaluations: which one wins is unspecified.
    """
    own = [ev for ev in evaluations if ev.employee_id == employee_id]
    if not own:
        return fallback
    return max(own, key=lambda ev: ev.date).score


def with_current_scores(employees: Sequence, evaluations: Iterable) -> list:
    latest = {}
    for ev in evaluations:
        current = latest.get(ev.employee_id)
        if current is None or ev.date > current.date:
            latest[ev.employee_id] = ev
    return [
        e.model_copy(update={
            "current_score": latest[e.id].score if e.id in latest else e.overall_score
        })
        for e in employees
    ]


def leave_totals(leave_records: Iterable) -> Dict[str, float]:
    totals: Dict[str, float] = defaultdict(float)
    for record in leave_records:
        totals[record.type] += record.duration
    return dict(totals)


def build_dashboard(actor, snapshot) -> Dict[str, object]:
    ensure_known_role(actor)
    visible = filter_visible(actor, snapshot.employees)
    return {
        "total_employees": len(visible),
        "performance_breakdown": performance_breakdown(visible),
        "department_distribution": department_distribution(visible, snapshot.departments),
        "team_stats": team_stats(actor, visible, snapshot.behaviour_issues),
    }
