"""Local-only helpers, mounted when ENV=local and DEV_ROUTES_ENABLED.

There is no API path that can create the first admin, so this is the
bootstrap: it sets a role directly, guarded by ``X-Dev-Api-Key``.
"""

from __future__ import annotations

import secrets

import structlog
from fastapi import APIRouter, Header, HTTPException
from pydantic import BaseModel, EmailStr
from sqlalchemy import select

from servicehours.api.v1.schemas import ProfileOut
from servicehours.auth.deps import DBSession
from servicehours.core.config import settings
from servicehours.models import Profile
from servicehours.models.profile import UserRole
from servicehours.services.profiles_service import provision_user

router = APIRouter(prefix="/dev", tags=["dev"])

logger = structlog.get_logger(__name__)


class SetRoleIn(BaseModel):
    email: EmailStr
    role: UserRole
    name: str | None = None


@router.post("/users/role", response_model=ProfileOut)
def dev_set_role(
    payload: SetRoleIn,
    db: DBSession,
    x_dev_api_key: str | None = Header(default=None),
):
    if not settings.dev_api_key:
        raise HTTPException(status_code=404, detail="not found")
    if not x_dev_api_key or not secrets.compare_digest(x_dev_api_key, settings.dev_api_key):
        raise HTTPException(status_code=401, detail="invalid dev api key")

    email = payload.email.strip().lower()
    profile = db.scalar(select(Profile).where(Profile.email == email))
    if not profile:
        _, profile = provision_user(db, email, name=payload.name)

    profile.role = payload.role
    db.add(profile)
    db.commit()
    db.refresh(profile)

    logger.warning("dev_role_assigned", email=email, role=payload.role.value)
    return profile
