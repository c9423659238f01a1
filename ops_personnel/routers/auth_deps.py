"""
Request-scoped dependencies: the record store, the personnel service,
the current actor, and role gates.
"""
import logging
from typing import Callable, List

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ops_personnel.core.exceptions import AccessDeniedError, AuthError
from ops_personnel.database import get_db
from ops_personnel.models.employee import EmployeeRole
from ops_personnel.schemas.auth import Actor
from ops_personnel.services import auth as auth_service
from ops_personnel.services.personnel import PersonnelService
from ops_personnel.services.record_store import RecordStore

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_personnel_service(store: RecordStore = Depends(get_record_store)) -> PersonnelService:
    return PersonnelService(store)


def get_current_actor(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Actor:
    """Resolves the bearer token to the acting employee."""
    try:
        return auth_service.resolve_actor(db, token)
    except AuthError as e:
        logger.warning(f"Authentication failed: {e.message}")
        raise


def require_role(allowed_roles: List[EmployeeRole]) -> Callable:
    """
    Dependency factory that checks the actor holds one of the allowed roles.

    Usage:
        @router.delete("/{name}")
        def delete(actor: Actor = Depends(require_role([EmployeeRole.ADMIN]))):
            ...
    """
    allowed = {r.value for r in allowed_roles}

    def role_checker(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in allowed:
            raise AccessDeniedError(f"Access denied. Required roles: {sorted(allowed)}")
        return actor
    return role_checker


def require_admin():
    """Shorthand for requiring the admin role."""
    return require_role([EmployeeRole.ADMIN])


def require_manager():
    """Shorthand for admins and managers."""
    return require_role([EmployeeRole.ADMIN, EmployeeRole.MANAGER])
