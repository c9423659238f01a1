"""
Typed records for the in-memory snapshot.

Storage columns are snake_case; the JSON wire format is camelCase
(`employee_id` <-> `employeeId`, `overall_score` <-> `overallScore`,
`hire_date` <-> `hireDate`, `action_plan` <-> `actionPlan`,
`author_id`/`author_name` <-> `authorId`/`authorName`). The alias
generator below is the single place that translation happens.
"""
import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EmployeeRecord(CamelModel):
    id: str
    name: str
    department: str
    job_title: Optional[str] = None
    email: str
    username: str
    active: bool = True
    hire_date: Optional[dt.date] = None
    profile_picture: Optional[str] = None
    role: str
    overall_score: int = 80
    # Derived from the latest evaluation, filled in when the snapshot is built
    current_score: Optional[int] = None

    @property
    def effective_score(self) -> int:
        return self.current_score if self.current_score is not None else self.overall_score


class DepartmentRecord(CamelModel):
    name: str


class EvaluationRecord(CamelModel):
    id: str
    employee_id: str
    year: int
    date: dt.date
    score: int
    summary: Optional[str] = None
    rating: str


class WorkIssueRecord(CamelModel):
    id: str
    employee_id: str
    date: dt.date
    author_id: str
    author_name: str
    title: str
    text: str


class AttendanceRecord(CamelModel):
    id: str
    employee_id: str
    date: dt.date
    type: str
    duration: float
    comment: Optional[str] = None


class ObservationRecord(CamelModel):
    id: str
    employee_id: str
    date: dt.date
    description: str
    status: str
    action_plan: Optional[str] = None
