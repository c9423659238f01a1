"""
Record Store: the only component that talks to the database.

Reads come back as a `Snapshot` of typed records covering all six
collections. Writes go through `insert`/`update`/`delete` (plus the
department and employee-account helpers) and are followed by an explicit
`invalidate()`; the next `snapshot()` call re-reads everything.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ops_personnel.core.exceptions import NotFoundError, PersistenceError
from ops_personnel.models.attendance_log import AttendanceLog
from ops_personnel.models.behaviour_issue import BehaviourIssue
from ops_personnel.models.department import Department
from ops_personnel.models.employee import Employee
from ops_personnel.models.evaluation import Evaluation
from ops_personnel.models.user import User
from ops_personnel.models.work_issue import WorkIssue
from ops_personnel.schemas.records import (
    AttendanceRecord,
    DepartmentRecord,
    EmployeeRecord,
    EvaluationRecord,
    ObservationRecord,
    WorkIssueRecord,
)
from ops_personnel.services import metrics
from ops_personnel.services.base import BaseService

# collection name -> (ORM model, typed record, ordering)
COLLECTIONS: Dict[str, tuple] = {
    "employees": (Employee, EmployeeRecord, (Employee.created_at, Employee.name)),
    "departments": (Department, DepartmentRecord, (Department.created_at, Department.name)),
    "evaluations": (Evaluation, EvaluationRecord, (Evaluation.date, Evaluation.created_at)),
    "work_issues": (WorkIssue, WorkIssueRecord, (WorkIssue.date, WorkIssue.created_at)),
    "attendance_logs": (AttendanceLog, AttendanceRecord, (AttendanceLog.date, AttendanceLog.created_at)),
    "behaviour_issues": (BehaviourIssue, ObservationRecord, (BehaviourIssue.date, BehaviourIssue.created_at)),
}


@dataclass
class Snapshot:
    """Every collection at one point in time. Treat as read-only."""
    employees: List[EmployeeRecord] = field(default_factory=list)
    departments: List[str] = field(default_factory=list)
    evaluations: List[EvaluationRecord] = field(default_factory=list)
    work_issues: List[WorkIssueRecord] = field(default_factory=list)
    attendance_logs: List[AttendanceRecord] = field(default_factory=list)
    behaviour_issues: List[ObservationRecord] = field(default_factory=list)

    def employee(self, employee_id: str) -> Optional[EmployeeRecord]:
        return next((e for e in self.employees if e.id == employee_id), None)

    def has_employee(self, employee_id: str) -> bool:
        return self.employee(employee_id) is not None

    def has_department(self, name: str) -> bool:
        return name in self.departments

    def employees_in(self, department: str) -> List[EmployeeRecord]:
        return [e for e in self.employees if e.department == department]

    def owned_by(self, collection: str, employee_id: str) -> list:
        return [r for r in getattr(self, collection) if r.employee_id == employee_id]


def _row_values(row: Any) -> Dict[str, Any]:
    """Column values of an ORM row keyed by (snake_case) attribute name."""
    return {attr.key: getattr(row, attr.key) for attr in sa_inspect(row).mapper.column_attrs}


class RecordStore(BaseService):

    def __init__(self, db: Session):
        super().__init__(db)
        self._snapshot: Optional[Snapshot] = None

    # --- Reads ---
    def snapshot(self) -> Snapshot:
        if self._snapshot is None:
            self._snapshot = self.reload()
        return self._snapshot

    def invalidate(self) -> None:
        self._snapshot = None

    def reload(self) -> Snapshot:
        employees = self.read_all("employees")
        evaluations = self.read_all("evaluations")
        return Snapshot(
            employees=metrics.with_current_scores(employees, evaluations),
            departments=[d.name for d in self.read_all("departments")],
            evaluations=evaluations,
            work_issues=self.read_all("work_issues"),
            attendance_logs=self.read_all("attendance_logs"),
            behaviour_issues=self.read_all("behaviour_issues"),
        )

    def read_all(self, collection: str) -> list:
        """
        Read one collection. A failing read degrades to an empty list so the
        other collections still load.
        """
        model, record_cls, ordering = COLLECTIONS[collection]
        try:
            rows = self.db.query(model).order_by(*ordering).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.log_error(f"Failed to read {collection}: {e}")
            return []
        return [self._to_record(row, record_cls) for row in rows]

    @staticmethod
    def _to_record(row: Any, record_cls: Type):
        return record_cls.model_validate(_row_values(row))

    # --- Generic writes ---
    def insert(self, collection: str, values: Dict[str, Any]) -> str:
        model = COLLECTIONS[collection][0]
        row = model(**values)
        self.db.add(row)
        self._commit(f"insert into {collection}")
        return self._identity(row)

    def update(self, collection: str, key: str, values: Dict[str, Any]) -> None:
        row = self._get(collection, key)
        for attr, value in values.items():
            setattr(row, attr, value)
        self._commit(f"update {collection} {key}")

    def delete(self, collection: str, key: str) -> None:
        row = self._get(collection, key)
        self.db.delete(row)
        self._commit(f"delete from {collection} {key}")

    # --- Employees and their login accounts ---
    def insert_employee(self, values: Dict[str, Any], hashed_password: str) -> str:
        employee = Employee(**values)
        employee.user = User(email=values["email"], hashed_password=hashed_password)
        self.db.add(employee)
        self._commit("insert employee")
        return employee.id

    def update_employee(self, employee_id: str, values: Dict[str, Any], hashed_password: Optional[str] = None) -> None:
        employee = self._get("employees", employee_id)
        for attr, value in values.items():
            setattr(employee, attr, value)
        if employee.user is None and hashed_password:
            employee.user = User(email=employee.email, hashed_password=hashed_password)
        elif employee.user is not None:
            employee.user.email = employee.email
            if hashed_password:
                employee.user.hashed_password = hashed_password
        self._commit(f"update employee {employee_id}")

    # --- Departments ---
    def rename_department(self, old_name: str, new_name: str) -> int:
        """
        Rename a department and move every employee carrying the old name.
        One transaction: either both happen or neither does.
        """
        department = self._get("departments", old_name)
        try:
            self.db.add(Department(name=new_name, created_at=department.created_at))
            moved = self.db.query(Employee).filter(Employee.department == old_name).update(
                {Employee.department: new_name}, synchronize_session=False
            )
            self.db.delete(department)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.log_error(f"Department rename {old_name!r} -> {new_name!r} failed: {e}")
            raise PersistenceError(
                "Department rename failed; no employees were changed",
                details={"old_name": old_name, "new_name": new_name},
            ) from e
        self.log_info(f"Renamed department {old_name!r} -> {new_name!r} ({moved} employees moved)")
        return moved

    def delete_department(self, name: str, reassign_to: Optional[str] = None) -> int:
        department = self._get("departments", name)
        moved = 0
        try:
            if reassign_to:
                moved = self.db.query(Employee).filter(Employee.department == name).update(
                    {Employee.department: reassign_to}, synchronize_session=False
                )
            self.db.delete(department)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.log_error(f"Department delete {name!r} failed: {e}")
            raise PersistenceError("Department delete failed", details={"department": name}) from e
        return moved

    # --- Helpers ---
    def _get(self, collection: str, key: str):
        model = COLLECTIONS[collection][0]
        try:
            row = self.db.get(model, key)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to load {collection} {key}") from e
        if row is None:
            raise NotFoundError(collection, key)
        return row

    def _commit(self, operation: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.log_error(f"Record store rejected {operation}: {e}")
            raise PersistenceError(f"Record store rejected {operation}") from e

    @staticmethod
    def _identity(row: Any) -> str:
        return sa_inspect(row).identity[0]
