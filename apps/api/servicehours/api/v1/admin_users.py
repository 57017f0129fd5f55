from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_, select

from servicehours.api.v1.schemas import ProfileOut, RoleUpdate
from servicehours.auth.deps import AdminUser, DBSession, require_role
from servicehours.models import Profile
from servicehours.models.profile import UserRole
from servicehours.services import profiles_service

router = APIRouter(
    prefix="/admin/users",
    tags=["admin"],
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)


@router.get("", response_model=list[ProfileOut])
def search_users(
    db: DBSession,
    query: str | None = Query(default=None, min_length=1),
    role: UserRole | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
):
    stmt = select(Profile).order_by(Profile.name.asc()).limit(limit)
    if query:
        like = f"%{query.strip().lower()}%"
        stmt = stmt.where(
            or_(
                Profile.email.ilike(like),
                Profile.name.ilike(like),
            )
        )
    if role is not None:
        stmt = stmt.where(Profile.role == role)

    return list(db.scalars(stmt))


@router.patch("/{user_id}/role", response_model=ProfileOut)
def update_user_role(user_id: uuid.UUID, payload: RoleUpdate, admin: AdminUser, db: DBSession):
    return profiles_service.update_role(db, admin, user_id, payload.role)
