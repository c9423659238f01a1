from pydantic import BaseModel, EmailStr
from typing import Optional

from ops_personnel.schemas.records import CamelModel


class Actor(CamelModel):
    """The authenticated identity an operation runs as."""
    id: str
    role: str
    department: str
    name: str
    email: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    # When given, the account must hold exactly this access level
    role: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str
    user: Actor


class SessionState(BaseModel):
    user: Optional[Actor] = None
