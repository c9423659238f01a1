import datetime as dt
from typing import Dict, List, Optional

from pydantic import EmailStr, Field

from ops_personnel.schemas.records import (
    CamelModel,
    EmployeeRecord,
    EvaluationRecord,
    WorkIssueRecord,
    AttendanceRecord,
    ObservationRecord,
)


# --- Employees ---
class EmployeeCreate(CamelModel):
    name: str
    department: str
    role: str
    email: EmailStr
    username: str
    job_title: Optional[str] = None
    password: Optional[str] = None
    active: bool = True
    hire_date: Optional[dt.date] = None
    profile_picture: Optional[str] = None
    overall_score: Optional[int] = None


class EmployeeUpdate(EmployeeCreate):
    """Full-record replacement. Omitting `password` keeps the current one."""
    pass


class EmployeeDetail(CamelModel):
    employee: EmployeeRecord
    evaluations: List[EvaluationRecord] = []
    work_issues: List[WorkIssueRecord] = []
    attendance: List[AttendanceRecord] = []
    behaviour_issues: List[ObservationRecord] = []
    leave_totals: Dict[str, float] = {}


# --- Departments ---
class DepartmentCreate(CamelModel):
    name: str


class DepartmentRename(CamelModel):
    name: str = Field(..., description="New department name")


# --- Child records ---
class EvaluationCreate(CamelModel):
    year: int
    score: int
    rating: str
    summary: Optional[str] = None
    date: Optional[dt.date] = None


class WorkIssueCreate(CamelModel):
    title: str
    text: str
    date: Optional[dt.date] = None


class AttendanceCreate(CamelModel):
    date: dt.date
    type: str
    duration: float
    comment: Optional[str] = None


class BehaviourIssueCreate(CamelModel):
    date: dt.date
    description: str
    status: str
    action_plan: Optional[str] = None


# --- Dashboard ---
class DepartmentCount(CamelModel):
    name: str
    value: int


class TeamStats(CamelModel):
    avg_score: int
    team_size: int
    open_observations: int


class DashboardSummary(CamelModel):
    total_employees: int
    performance_breakdown: Dict[str, int]
    department_distribution: List[DepartmentCount]
    team_stats: Optional[TeamStats] = None


class InsightResult(CamelModel):
    employee_id: str
    insight: str
