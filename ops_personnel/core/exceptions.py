from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class InvalidInputError(AppException):
    """Proposed mutation failed local validation. Never reaches the record store."""
    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.field = field
        if field and details is None:
            details = {"field": field}
        super().__init__(
            message=message,
            status_code=422,
            error_code="INVALID_INPUT",
            details=details
        )

class NotFoundError(AppException):
    def __init__(self, entity: str, key: Any):
        self.entity = entity
        self.key = key
        super().__init__(
            message=f"{entity} '{key}' not found",
            status_code=404,
            error_code="NOT_FOUND",
            details={"entity": entity, "key": str(key)}
        )

class PersistenceError(AppException):
    """The record store rejected or failed a call."""
    def __init__(self, message: str = "Record store unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=503,
            error_code="PERSISTENCE_ERROR",
            details=details
        )

class DepartmentInUseError(AppException):
    def __init__(self, name: str, employee_count: int):
        super().__init__(
            message=f"Department '{name}' is still assigned to {employee_count} employee(s)",
            status_code=409,
            error_code="DEPARTMENT_IN_USE",
            details={"department": name, "employee_count": employee_count}
        )

class RoleConfigurationError(AppException):
    """Actor carries a role outside admin/manager/employee. Not recoverable."""
    def __init__(self, role: Any):
        super().__init__(
            message=f"Actor role {role!r} is not a recognised role",
            status_code=500,
            error_code="ROLE_MISCONFIGURED"
        )

class ExternalServiceError(AppException):
    def __init__(self, message: str, reason: str = "unavailable", details: Optional[Dict[str, Any]] = None):
        self.reason = reason
        super().__init__(
            message=message,
            status_code=503,
            error_code="EXTERNAL_SERVICE_ERROR",
            details=details
        )

class AuthError(AppException):
    def __init__(self, message: str = "Could not validate credentials", status_code: int = 401, error_code: str = "AUTH_FAILED"):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code
        )

class InvalidCredentialsError(AuthError):
    # Same wording whether or not the email exists
    def __init__(self):
        super().__init__(
            message="Incorrect email or password",
            status_code=401,
            error_code="AUTH_INVALID_CREDENTIALS"
        )

class UnconfirmedAccountError(AuthError):
    def __init__(self):
        super().__init__(
            message="Account email has not been confirmed yet",
            status_code=403,
            error_code="AUTH_UNCONFIRMED"
        )

class InactiveAccountError(AuthError):
    def __init__(self):
        super().__init__(
            message="Account is inactive",
            status_code=403,
            error_code="AUTH_INACTIVE"
        )

class RoleMismatchError(AuthError):
    def __init__(self, requested_role: str):
        super().__init__(
            message=f"This account is not registered with the '{requested_role}' access level",
            status_code=403,
            error_code="AUTH_ROLE_MISMATCH"
        )

class AccessDeniedError(AppException):
    """Custom permission error. Named AccessDeniedError to avoid shadowing Python's built-in PermissionError."""
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            status_code=403,
            error_code="PERMISSION_DENIED"
        )
