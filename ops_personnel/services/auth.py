"""
Identity provider: password hashing, session tokens, and the mapping
from an authenticated account to an Employee profile.
"""
import logging
import secrets
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ops_personnel.core.config import settings
from ops_personnel.core.exceptions import (
    AuthError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidInputError,
    PersistenceError,
    RoleMismatchError,
    UnconfirmedAccountError,
)
from ops_personnel.models.department import Department
from ops_personnel.models.employee import Employee, EmployeeRole
from ops_personnel.models.user import User, UserSession
from ops_personnel.schemas.auth import Actor
from ops_personnel.services.visibility import KNOWN_ROLES

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
FALLBACK_DEPARTMENT = "Unassigned"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognised hash format
        return False


def unusable_password_hash() -> str:
    """Hash of a random secret nobody knows; the account needs a password reset to log in."""
    return get_password_hash(secrets.token_urlsafe(32))


def create_access_token(data: Dict[str, Any], expires_at: Optional[datetime] = None) -> str:
    to_encode = data.copy()
    expire = expires_at or datetime.now(timezone.utc) + timedelta(days=settings.session_expire_days)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Payload dict, `{"error": "TOKEN_EXPIRED"}` for an expired token, or None if invalid."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        return {"error": "TOKEN_EXPIRED"}
    except jwt.PyJWTError:
        return None


def actor_from_employee(employee: Employee) -> Actor:
    return Actor(
        id=employee.id,
        role=employee.role,
        department=employee.department,
        name=employee.name,
        email=employee.email,
    )


def _unique_username(db: Session, base: str) -> str:
    candidate, suffix = base, 1
    while db.query(Employee).filter(Employee.username == candidate).first() is not None:
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


def provision_profile(db: Session, user: User) -> Employee:
    """Default employee profile for an account that logs in without one."""
    local_part = user.email.split("@", 1)[0]
    department = db.query(Department).order_by(Department.created_at, Department.name).first()
    if department is None:
        department = Department(name=FALLBACK_DEPARTMENT)
        db.add(department)

    employee = Employee(
        name=local_part.replace(".", " ").replace("_", " ").title(),
        department=department.name,
        email=user.email,
        username=_unique_username(db, local_part),
        role=EmployeeRole.EMPLOYEE.value,
        active=True,
        hire_date=date.today(),
        overall_score=settings.default_overall_score,
        user=user,
    )
    db.add(employee)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Auto-provisioning failed for {user.email}: {e}")
        raise PersistenceError("Could not create a profile for this account") from e
    db.refresh(employee)
    logger.info(f"Auto-provisioned employee profile {employee.id} for {user.email}")
    return employee


def authenticate(db: Session, email: str, password: str, requested_role: Optional[str] = None) -> Employee:
    """
    Check credentials and return the account's employee profile.
    Unknown email and wrong password fail identically.
    """
    if requested_role is not None and requested_role not in KNOWN_ROLES:
        raise InvalidInputError(f"role must be one of {sorted(KNOWN_ROLES)}", field="role")

    user = db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()
    if user is None or not verify_password(password, user.hashed_password):
        raise InvalidCredentialsError()
    if not user.is_confirmed:
        raise UnconfirmedAccountError()

    if not user.is_active:
        raise InactiveAccountError()
    employee = user.employee_profile or provision_profile(db, user)
    if not employee.active:
        raise InactiveAccountError()
    if requested_role is not None and employee.role != requested_role:
        raise RoleMismatchError(requested_role)
    return employee


def open_session(db: Session, employee: Employee) -> str:
    """Persist a session row and return the bearer token that refers to it."""
    expires_at = datetime.now(timezone.utc) + timedelta(days=settings.session_expire_days)
    session = UserSession(user_id=employee.user_id, expires_at=expires_at)
    db.add(session)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError("Could not open a session") from e
    return create_access_token(
        {"sub": employee.id, "role": employee.role, "sid": session.id},
        expires_at=expires_at,
    )


def revoke_session(db: Session, token: str) -> bool:
    payload = decode_access_token(token)
    if not payload or "sid" not in payload:
        return False
    session = db.get(UserSession, payload["sid"])
    if session is None or session.is_revoked:
        return False
    session.is_revoked = True
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError("Could not end the session") from e
    return True


def resolve_actor(db: Session, token: str) -> Actor:
    """Current actor for a bearer token, re-read from the employee record."""
    payload = decode_access_token(token)
    if payload is None:
        raise AuthError("Could not validate credentials")
    if payload.get("error") == "TOKEN_EXPIRED":
        raise AuthError("TOKEN_EXPIRED")
    if payload.get("type") != "access" or not payload.get("sub") or not payload.get("sid"):
        raise AuthError("Invalid token")

    session = db.get(UserSession, payload["sid"])
    if session is None or session.is_revoked:
        raise AuthError("Session has ended")

    employee = db.get(Employee, payload["sub"])
    if employee is None:
        raise AuthError("User not found")
    if not employee.active or (employee.user is not None and not employee.user.is_active):
        raise InactiveAccountError()
    return actor_from_employee(employee)
