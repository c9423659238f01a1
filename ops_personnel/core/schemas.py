from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone

T = TypeVar("T")


class ErrorItem(BaseModel):
    msg: str
    code: Optional[str] = None
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        # Absent keys rather than nulls keep error bodies compact
        return self.model_dump(mode="json", exclude_none=True)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for mutation results and every error body."""
    model_config = ConfigDict(json_encoders={datetime: lambda v: v.isoformat()})

    success: bool
    data: Optional[T] = None
    errors: List[ErrorItem] = []
    metadata: Dict[str, Any] = {}
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        body = self.model_dump(mode="json", exclude={"errors"})
        if not self.success:
            body.pop("data", None)
            body["errors"] = [e.to_dict() for e in self.errors]
        return body

    @classmethod
    def ok(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, metadata=metadata or {})

    @classmethod
    def fail(cls, *errors: ErrorItem) -> "ApiResponse[T]":
        return cls(success=False, errors=list(errors))
