# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    user, department, employee, evaluation,
    work_issue, attendance_log, behaviour_issue,
)

# Explicit class exports for cleaner imports
from .user import User, UserSession
from .department import Department
from .employee import Employee, EmployeeRole
from .evaluation import Evaluation, EvaluationRating
from .work_issue import WorkIssue
from .attendance_log import AttendanceLog, LeaveType
from .behaviour_issue import BehaviourIssue, ObservationStatus

__all__ = [
    "User",
    "UserSession",
    "Department",
    "Employee",
    "EmployeeRole",
    "Evaluation",
    "EvaluationRating",
    "WorkIssue",
    "AttendanceLog",
    "LeaveType",
    "BehaviourIssue",
    "ObservationStatus",
]
