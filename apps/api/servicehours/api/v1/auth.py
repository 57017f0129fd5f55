from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from servicehours.auth.deps import CurrentUser, DBSession
from servicehours.auth.jwt import create_access_token
from servicehours.auth.password import hash_password, needs_rehash, verify_password
from servicehours.core.config import settings
from servicehours.models import User
from servicehours.services.profiles_service import get_profile_for_user, provision_user

router = APIRouter(prefix="/auth", tags=["auth"])


class AuthTokensOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str
    email: str
    name: str
    role: str


class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str | None = Field(default=None, max_length=200)


def _tokens_out(db: Session, user: User) -> AuthTokensOut:
    profile = get_profile_for_user(db, user.id)
    return AuthTokensOut(
        access_token=create_access_token(user.id),
        expires_in=settings.access_token_ttl_seconds,
        user_id=str(user.id),
        email=user.email,
        name=profile.name,
        role=profile.role.value,
    )


@router.post("/register", response_model=AuthTokensOut)
def register(payload: RegisterIn, db: DBSession):
    # Identity and member profile are created in one transaction
    user, _ = provision_user(
        db,
        email=payload.email,
        name=payload.name,
        password_hash=hash_password(payload.password),
    )
    db.commit()
    db.refresh(user)
    return _tokens_out(db, user)


class LoginIn(BaseModel):
    email: EmailStr
    password: str


@router.post("/login", response_model=AuthTokensOut)
def login(payload: LoginIn, db: DBSession):
    email = payload.email.strip().lower()
    user = db.scalar(select(User).where(User.email == email))
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="invalid credentials")

    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(payload.password)
        db.add(user)
        db.commit()

    return _tokens_out(db, user)


class MeOut(BaseModel):
    user_id: str
    email: str
    name: str
    role: str
    total_hours: int


@router.get("/me", response_model=MeOut)
def me(user: CurrentUser, db: DBSession):
    profile = get_profile_for_user(db, user.id)
    return MeOut(
        user_id=str(user.id),
        email=user.email,
        name=profile.name,
        role=profile.role.value,
        total_hours=profile.total_hours,
    )
