"""
Bearer-token access control for the scoring API.

Tokens are issued by the HR application's auth service with the shared
SECRET_KEY; "sub" carries the employee key of the caller.
"""

import logging
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from attendscore.core.security import decode_token
from attendscore.db.models import User
from attendscore.db.session import get_db

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

PRIVILEGED_ROLES = ("admin", "manager")


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _subject(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None:
        raise _unauthorized()
    try:
        payload = decode_token(credentials.credentials)
    except JWTError as exc:
        logger.debug("Rejected token: %s", exc)
        raise _unauthorized()
    subject = payload.get("sub")
    if payload.get("type") != "access" or not subject:
        raise _unauthorized()
    return str(subject)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    employee_key = _subject(credentials)

    result = await db.execute(select(User).where(User.employee_key == employee_key))
    user = result.scalar_one_or_none()
    if user is None:
        raise _unauthorized()
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )
    return user


def require_role(*roles: str) -> Callable:
    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {', '.join(roles)}",
            )
        return current_user

    return role_checker


def ensure_can_view(employee_key: str, current_user: User) -> None:
    """Admins and managers may view any employee; others only themselves."""
    if current_user.role in PRIVILEGED_ROLES:
        return
    if current_user.employee_key != employee_key:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
