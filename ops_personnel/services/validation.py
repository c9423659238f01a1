"""
Mutation validation and normalization.

Each `validate_*` function checks a proposed write against the current
snapshot and returns the storage values (snake_case) to hand to the
record store. Failures raise `InvalidInputError` or `NotFoundError`;
none of these functions touch the database.
"""
import math
from datetime import date
from typing import Any, Dict, Optional

from ops_personnel.core.exceptions import InvalidInputError, NotFoundError
from ops_personnel.models.attendance_log import LeaveType
from ops_personnel.models.behaviour_issue import ObservationStatus
from ops_personnel.models.evaluation import EvaluationRating
from ops_personnel.services.visibility import KNOWN_ROLES

MIN_PASSWORD_LENGTH = 8
MIN_LEAVE_DURATION = 0.5
LEAVE_DURATION_STEP = 0.5
RATINGS = frozenset(r.value for r in EvaluationRating)
LEAVE_TYPES = frozenset(t.value for t in LeaveType)
OBSERVATION_STATUSES = frozenset(s.value for s in ObservationStatus)


def _required_text(value: Optional[str], field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInputError(f"{field} is required", field=field)
    return cleaned


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _one_of(value: str, allowed: frozenset, field: str) -> str:
    if value not in allowed:
        raise InvalidInputError(
            f"{field} must be one of {sorted(allowed)}",
            field=field,
            details={"field": field, "allowed": sorted(allowed)},
        )
    return value


def _existing_employee(snapshot, employee_id: str):
    employee = snapshot.employee(employee_id)
    if employee is None:
        raise NotFoundError("employee", employee_id)
    return employee


def _score(value: int, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
        raise InvalidInputError(f"{field} must be an integer between 0 and 100", field=field)
    return value


# --- Employees ---
def validate_employee(payload, snapshot, employee_id: Optional[str] = None, default_score: int = 80) -> Dict[str, Any]:
    """
    Validate a create (employee_id=None) or full-record update.
    The password is not part of the returned values; see `validate_password`.
    """
    name = _required_text(payload.name, "name")
    username = _required_text(payload.username, "username")
    department = _required_text(payload.department, "department")
    if not snapshot.has_department(department):
        raise InvalidInputError(f"Unknown department '{department}'", field="department")
    role = _one_of(_required_text(payload.role, "role"), KNOWN_ROLES, "role")
    email = str(payload.email).strip().lower()

    for other in snapshot.employees:
        if other.id == employee_id:
            continue
        if other.email.lower() == email:
            raise InvalidInputError("email is already in use", field="email")
        if other.username == username:
            raise InvalidInputError("username is already in use", field="username")

    values = {
        "name": name,
        "department": department,
        "role": role,
        "email": email,
        "username": username,
        "job_title": _optional_text(payload.job_title),
        "active": payload.active,
        "hire_date": payload.hire_date,
        "profile_picture": payload.profile_picture or None,
    }
    if payload.overall_score is not None:
        values["overall_score"] = _score(payload.overall_score, "overallScore")
    elif employee_id is None:
        values["overall_score"] = default_score
    if employee_id is None and values["hire_date"] is None:
        values["hire_date"] = date.today()
    return values


def validate_password(password: Optional[str]) -> Optional[str]:
    if password is None:
        return None
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
        )
    return password


# --- Departments ---
def validate_department_name(name: Optional[str], snapshot, current: Optional[str] = None) -> str:
    """Trimmed, non-empty, and not already taken (exact, case-sensitive match)."""
    cleaned = _required_text(name, "name")
    if "/" in cleaned:
        # Names are path segments in the department routes
        raise InvalidInputError("Department names cannot contain '/'", field="name")
    if cleaned != current and snapshot.has_department(cleaned):
        raise InvalidInputError(f"Department '{cleaned}' already exists", field="name")
    return cleaned


def validate_department_delete(name: str, snapshot, reassign_to: Optional[str] = None) -> Optional[str]:
    if not snapshot.has_department(name):
        raise NotFoundError("department", name)
    if reassign_to is None:
        return None
    target = reassign_to.strip()
    if target == name or not snapshot.has_department(target):
        raise InvalidInputError(
            "reassignTo must name another existing department", field="reassignTo"
        )
    return target


# --- Child records ---
def validate_evaluation(employee_id: str, payload, snapshot) -> Dict[str, Any]:
    _existing_employee(snapshot, employee_id)
    score = _score(payload.score, "score")
    if not 1000 <= payload.year <= 9999:
        raise InvalidInputError("year must be a four-digit year", field="year")
    rating = _one_of(payload.rating, RATINGS, "rating")
    return {
        "employee_id": employee_id,
        "year": payload.year,
        "date": payload.date or date.today(),
        "score": score,
        "summary": _optional_text(payload.summary),
        "rating": rating,
    }


def validate_work_issue(employee_id: str, payload, author, snapshot) -> Dict[str, Any]:
    _existing_employee(snapshot, employee_id)
    author_record = snapshot.employee(author.id)
    if author_record is None:
        raise InvalidInputError("authorId must reference an existing employee", field="authorId")
    return {
        "employee_id": employee_id,
        "date": payload.date or date.today(),
        "author_id": author_record.id,
        "author_name": author_record.name,
        "title": _required_text(payload.title, "title"),
        "text": _required_text(payload.text, "text"),
    }


def validate_attendance(employee_id: str, payload, snapshot) -> Dict[str, Any]:
    _existing_employee(snapshot, employee_id)
    leave_type = _one_of(payload.type, LEAVE_TYPES, "type")
    duration = payload.duration
    if (
        not math.isfinite(duration)
        or duration < MIN_LEAVE_DURATION
        or (duration / LEAVE_DURATION_STEP) % 1 != 0
    ):
        raise InvalidInputError(
            "duration must be at least 0.5 days in steps of 0.5", field="duration"
        )
    return {
        "employee_id": employee_id,
        "date": payload.date,
        "type": leave_type,
        "duration": float(duration),
        "comment": _optional_text(payload.comment),
    }


def validate_observation(employee_id: str, payload, snapshot) -> Dict[str, Any]:
    _existing_employee(snapshot, employee_id)
    return {
        "employee_id": employee_id,
        "date": payload.date,
        "description": _required_text(payload.description, "description"),
        "status": _one_of(payload.status, OBSERVATION_STATUSES, "status"),
        "action_plan": _optional_text(payload.action_plan),
    }
