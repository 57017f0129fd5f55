from fastapi import APIRouter

from servicehours.api.v1.admin_users import router as admin_users_router
from servicehours.api.v1.attendance import router as attendance_router
from servicehours.api.v1.auth import router as auth_router
from servicehours.api.v1.events import router as events_router
from servicehours.api.v1.profiles import router as profiles_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(events_router)
router.include_router(attendance_router)
router.include_router(profiles_router)
router.include_router(admin_users_router)
