"""
Which employee records an actor may see.

- admin: everyone
- manager: their own department, themselves included
- employee: their own record only

Child records (evaluations, notes, leave, observations) follow the
visibility of the employee that owns them.
"""
import logging
from typing import Iterable, List, Optional

from ops_personnel.core.exceptions import RoleConfigurationError
from ops_personnel.models.employee import EmployeeRole

logger = logging.getLogger(__name__)

KNOWN_ROLES = frozenset(role.value for role in EmployeeRole)


def is_known_role(role) -> bool:
    return role in KNOWN_ROLES


def ensure_known_role(actor) -> None:
    if not is_known_role(actor.role):
        logger.error(f"Actor {actor.id} carries unknown role {actor.role!r}")
        raise RoleConfigurationError(actor.role)


def can_view(actor, employee) -> bool:
    if actor.role == EmployeeRole.ADMIN:
        return True
    if actor.role == EmployeeRole.MANAGER:
        return employee.department == actor.department
    if actor.role == EmployeeRole.EMPLOYEE:
        return employee.id == actor.id
    return False


def filter_visible(actor, employees: Iterable) -> List:
    """Subset of `employees` the actor may see, in original order. Unknown roles see nothing."""
    if not is_known_role(actor.role):
        return []
    return [e for e in employees if can_view(actor, e)]


def visible_children(actor, snapshot, collection: str) -> List:
    """Child records of `collection` whose owning employee is visible to the actor."""
    visible_ids = {e.id for e in filter_visible(actor, snapshot.employees)}
    return [r for r in getattr(snapshot, collection) if r.employee_id in visible_ids]


def search_employees(employees: Iterable, term: Optional[str]) -> List:
    """Case-insensitive substring match on name or department."""
    if not term or not term.strip():
        return list(employees)
    needle = term.strip().lower()
    return [
        e for e in employees
        if needle in e.name.lower() or needle in e.department.lower()
    ]
