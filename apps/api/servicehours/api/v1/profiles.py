from __future__ import annotations

import uuid

from fastapi import APIRouter

from servicehours.api.v1.schemas import ProfileOut, ProfileUpdate, StatsOut
from servicehours.auth.deps import CurrentUser, DBSession, StaffUser
from servicehours.services import profiles_service

router = APIRouter(tags=["profiles"])


@router.get("/profiles/me", response_model=ProfileOut)
def get_my_profile(user: CurrentUser, db: DBSession):
    return profiles_service.get_profile_for_user(db, user.id)


@router.patch("/profiles/me", response_model=ProfileOut)
def update_my_profile(payload: ProfileUpdate, user: CurrentUser, db: DBSession):
    # Role and total_hours are not part of ProfileUpdate and cannot be written here
    return profiles_service.update_own_name(db, user, payload.name)


@router.get("/profiles", response_model=list[ProfileOut])
def list_profiles(staff: StaffUser, db: DBSession):
    return profiles_service.list_profiles(db, staff)


@router.get("/profiles/{user_id}", response_model=ProfileOut)
def get_profile(user_id: uuid.UUID, user: CurrentUser, db: DBSession):
    return profiles_service.get_profile(db, user, user_id)


@router.get("/stats", response_model=StatsOut)
def stats(staff: StaffUser, db: DBSession):
    return StatsOut(**profiles_service.dashboard_stats(db, staff))
