import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ops_personnel.core.exceptions import AuthError
from ops_personnel.core.schemas import ApiResponse
from ops_personnel.database import get_db, get_session_factory
from ops_personnel.routers.auth_deps import get_current_actor, oauth2_scheme, optional_oauth2_scheme
from ops_personnel.schemas.auth import Actor, LoginRequest, SessionState, Token
from ops_personnel.services import auth as auth_service
from ops_personnel.services.session import check_session

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


@router.post("/login", response_model=Token)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    # JSON body rather than form-data; `role` optionally pins the access level
    try:
        employee = auth_service.authenticate(db, login_data.email, login_data.password, login_data.role)
    except AuthError as e:
        logger.info(f"Login rejected for {login_data.email}: {e.error_code}")
        raise

    access_token = auth_service.open_session(db, employee)
    logger.info(f"Login succeeded for {employee.email} ({employee.role})")
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": auth_service.actor_from_employee(employee),
    }


@router.post("/logout")
def logout(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    revoked = auth_service.revoke_session(db, token)
    return ApiResponse.ok({"revoked": revoked}).to_dict()


@router.get("/me", response_model=Actor)
def read_me(actor: Actor = Depends(get_current_actor)):
    return actor


@router.get("/session", response_model=SessionState)
async def read_session(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    session_factory=Depends(get_session_factory),
):
    """Current user, or `{"user": null}` when signed out or the check times out."""
    return {"user": await check_session(session_factory, token)}
