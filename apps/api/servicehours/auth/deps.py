from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from servicehours.auth.jwt import verify_access_token
from servicehours.core.config import settings
from servicehours.db import get_db
from servicehours.models import User
from servicehours.models.profile import UserRole
from servicehours.services import access
from servicehours.services.error_codes import ErrorCode
from servicehours.services.exceptions import ConflictError, PermissionDeniedError
from servicehours.services.profiles_service import provision_user

DBSession = Annotated[Session, Depends(get_db)]


def _unauthorized(detail: str = "unauthorized") -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _dev_user(db: Session, token: str) -> User:
    prefix = settings.dev_auth_prefix
    if not token.startswith(prefix):
        raise _unauthorized(f"invalid dev token (expected prefix {prefix})")

    email = token.removeprefix(prefix).strip().lower()
    if "@" not in email:
        raise _unauthorized("invalid email in token")

    user = db.scalar(select(User).where(User.email == email))
    if user:
        return user

    try:
        user, _ = provision_user(db, email)
    except ConflictError:
        # A concurrent first request provisioned the same email
        user = db.scalar(select(User).where(User.email == email))
        if not user:
            raise
        return user

    db.commit()
    db.refresh(user)
    return user


def get_current_user(request: Request, db: DBSession) -> User:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise _unauthorized("missing bearer token")

    token = auth.removeprefix("Bearer ").strip()

    # Local dev auth only
    if settings.auth_mode == "dev" and settings.env == "local":
        return _dev_user(db, token)

    if settings.auth_mode != "jwt":
        raise _unauthorized("auth not configured")

    try:
        user_id = verify_access_token(token)
    except ValueError:
        raise _unauthorized("invalid access token") from None

    user = db.get(User, user_id)
    if not user:
        raise _unauthorized("user not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_role(*roles: UserRole):
    allowed = frozenset(roles)

    def _dependency(user: CurrentUser, db: DBSession) -> User:
        if not access.has_role(db, user.id, allowed):
            raise PermissionDeniedError(ErrorCode.ROLE_REQUIRED, "insufficient role")
        return user

    return _dependency


StaffUser = Annotated[User, Depends(require_role(UserRole.OFFICER, UserRole.ADMIN))]
AdminUser = Annotated[User, Depends(require_role(UserRole.ADMIN))]
