"""
Personnel Service Layer

Business operations behind the HTTP routers. Every operation runs as an
actor against one RecordStore:

- reads go through the visibility filter
- writes are validated first, then stored, then the snapshot is invalidated
  so the next read reflects the change
"""
from typing import Dict, List, Optional

from ops_personnel.core.config import settings
from ops_personnel.core.exceptions import (
    AccessDeniedError,
    DepartmentInUseError,
    NotFoundError,
)
from ops_personnel.models.employee import EmployeeRole
from ops_personnel.schemas.records import EmployeeRecord
from ops_personnel.services import auth as auth_service
from ops_personnel.services import insight_ai, metrics, report, validation
from ops_personnel.services.record_store import RecordStore
from ops_personnel.services.visibility import (
    can_view,
    ensure_known_role,
    filter_visible,
    search_employees,
    visible_children,
)

RECORDER_ROLES = (EmployeeRole.ADMIN, EmployeeRole.MANAGER)


class PersonnelService:

    def __init__(self, store: RecordStore):
        self.store = store

    # --- Access helpers ---
    def _visible_employee(self, actor, employee_id: str) -> EmployeeRecord:
        ensure_known_role(actor)
        employee = self.store.snapshot().employee(employee_id)
        if employee is None:
            raise NotFoundError("employee", employee_id)
        if not can_view(actor, employee):
            raise AccessDeniedError("You do not have access to this employee")
        return employee

    def _require_recorder(self, actor, employee_id: str) -> EmployeeRecord:
        """Admins and managers may add records for employees they can see."""
        employee = self._visible_employee(actor, employee_id)
        if actor.role not in RECORDER_ROLES:
            raise AccessDeniedError("Only admins and managers can add records")
        return employee

    def _refreshed(self, employee_id: str) -> EmployeeRecord:
        self.store.invalidate()
        return self.store.snapshot().employee(employee_id)

    # --- Employees ---
    def list_employees(self, actor, search: Optional[str] = None) -> List[EmployeeRecord]:
        ensure_known_role(actor)
        visible = filter_visible(actor, self.store.snapshot().employees)
        return search_employees(visible, search)

    def get_employee_detail(self, actor, employee_id: str) -> Dict[str, object]:
        employee = self._visible_employee(actor, employee_id)
        snapshot = self.store.snapshot()
        attendance = snapshot.owned_by("attendance_logs", employee_id)
        return {
            "employee": employee,
            "evaluations": sorted(
                snapshot.owned_by("evaluations", employee_id), key=lambda ev: ev.date, reverse=True
            ),
            "work_issues": snapshot.owned_by("work_issues", employee_id),
            "attendance": attendance,
            "behaviour_issues": snapshot.owned_by("behaviour_issues", employee_id),
            "leave_totals": metrics.leave_totals(attendance),
        }

    def create_employee(self, payload) -> EmployeeRecord:
        password = validation.validate_password(payload.password)
        values = validation.validate_employee(
            payload, self.store.snapshot(), default_score=settings.default_overall_score
        )
        hashed = (
            auth_service.get_password_hash(password) if password
            else auth_service.unusable_password_hash()
        )
        employee_id = self.store.insert_employee(values, hashed)
        self.store.log_info(f"Created employee {employee_id} in {values['department']}")
        return self._refreshed(employee_id)

    def update_employee(self, employee_id: str, payload) -> EmployeeRecord:
        snapshot = self.store.snapshot()
        if not snapshot.has_employee(employee_id):
            raise NotFoundError("employee", employee_id)
        password = validation.validate_password(payload.password)
        values = validation.validate_employee(payload, snapshot, employee_id=employee_id)
        hashed = auth_service.get_password_hash(password) if password else None
        self.store.update_employee(employee_id, values, hashed_password=hashed)
        return self._refreshed(employee_id)

    def delete_employee(self, employee_id: str) -> None:
        if not self.store.snapshot().has_employee(employee_id):
            raise NotFoundError("employee", employee_id)
        # Child records and the login account go with the profile
        self.store.delete("employees", employee_id)
        self.store.invalidate()
        self.store.log_info(f"Deleted employee {employee_id}")

    # --- Departments ---
    def list_departments(self) -> List[str]:
        return list(self.store.snapshot().departments)

    def create_department(self, name: str) -> str:
        cleaned = validation.validate_department_name(name, self.store.snapshot())
        self.store.insert("departments", {"name": cleaned})
        self.store.invalidate()
        return cleaned

    def rename_department(self, old_name: str, new_name: str) -> Dict[str, object]:
        snapshot = self.store.snapshot()
        if not snapshot.has_department(old_name):
            raise NotFoundError("department", old_name)
        cleaned = validation.validate_department_name(new_name, snapshot, current=old_name)
        if cleaned == old_name:
            return {"name": cleaned, "employees_moved": 0}
        moved = self.store.rename_department(old_name, cleaned)
        self.store.invalidate()
        return {"name": cleaned, "employees_moved": moved}

    def delete_department(self, name: str, reassign_to: Optional[str] = None) -> Dict[str, object]:
        snapshot = self.store.snapshot()
        target = validation.validate_department_delete(name, snapshot, reassign_to)
        in_use = len(snapshot.employees_in(name))
        if in_use and target is None:
            raise DepartmentInUseError(name, in_use)
        moved = self.store.delete_department(name, reassign_to=target)
        self.store.invalidate()
        return {"name": name, "reassigned_to": target, "employees_moved": moved}

    # --- Child records ---
    def add_evaluation(self, actor, employee_id: str, payload):
        self._require_recorder(actor, employee_id)
        values = validation.validate_evaluation(employee_id, payload, self.store.snapshot())
        return self._insert_child("evaluations", values)

    def add_work_issue(self, actor, employee_id: str, payload):
        self._require_recorder(actor, employee_id)
        values = validation.validate_work_issue(employee_id, payload, actor, self.store.snapshot())
        return self._insert_child("work_issues", values)

    def add_attendance(self, actor, employee_id: str, payload):
        self._require_recorder(actor, employee_id)
        values = validation.validate_attendance(employee_id, payload, self.store.snapshot())
        return self._insert_child("attendance_logs", values)

    def add_behaviour_issue(self, actor, employee_id: str, payload):
        self._require_recorder(actor, employee_id)
        values = validation.validate_observation(employee_id, payload, self.store.snapshot())
        return self._insert_child("behaviour_issues", values)

    def list_records(self, actor, employee_id: str, collection: str) -> list:
        self._visible_employee(actor, employee_id)
        children = visible_children(actor, self.store.snapshot(), collection)
        return [r for r in children if r.employee_id == employee_id]

    def _insert_child(self, collection: str, values: Dict[str, object]):
        record_id = self.store.insert(collection, values)
        self.store.invalidate()
        return next(r for r in getattr(self.store.snapshot(), collection) if r.id == record_id)

    # --- Derived views ---
    def dashboard(self, actor) -> Dict[str, object]:
        return metrics.build_dashboard(actor, self.store.snapshot())

    def employee_report(self, actor, employee_id: str) -> str:
        detail = self.get_employee_detail(actor, employee_id)
        return report.render_employee_report(
            detail["employee"],
            detail["evaluations"],
            detail["attendance"],
            detail["work_issues"],
            detail["behaviour_issues"],
        )

    def employee_insight(self, actor, employee_id: str) -> str:
        detail = self.get_employee_detail(actor, employee_id)
        bundle = insight_ai.build_insight_bundle(
            detail["employee"],
            detail["work_issues"],
            detail["attendance"],
            detail["behaviour_issues"],
        )
        result = insight_ai.generate_performance_insight(bundle)
        if insight_ai.is_error(result):
            self.store.log_warning(f"Insight for employee {employee_id} failed: {result}")
        return result
