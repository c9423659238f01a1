"""
Bounded "who am I" check used by clients on startup.
A slow or failing lookup answers "no session" instead of hanging the caller.
"""
import asyncio
import functools
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ops_personnel.core.config import settings
from ops_personnel.core.exceptions import AppException
from ops_personnel.schemas.auth import Actor
from ops_personnel.services import auth as auth_service

logger = logging.getLogger(__name__)


def _lookup(session_factory: Callable[[], Session], token: str) -> Actor:
    # Runs on a worker thread, so it must never touch the request's session
    db = session_factory()
    try:
        return auth_service.resolve_actor(db, token)
    finally:
        db.close()


async def check_session(
    session_factory: Callable[[], Session], token: Optional[str], timeout: Optional[float] = None
) -> Optional[Actor]:
    if not token:
        return None
    limit = settings.session_check_timeout_seconds if timeout is None else timeout
    try:
        # A plain executor future, so a timed-out lookup is abandoned rather than awaited
        lookup = asyncio.get_running_loop().run_in_executor(
            None, functools.partial(_lookup, session_factory, token)
        )
        return await asyncio.wait_for(lookup, timeout=limit)
    except asyncio.TimeoutError:
        logger.warning(f"Session check exceeded {limit}s; treating as signed out")
        return None
    except AppException as e:
        logger.info(f"Session check found no valid session: {e.error_code}")
        return None
