from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from servicehours.api.dev import router as dev_router
from servicehours.api.errors import service_error_handler
from servicehours.api.v1.router import router as v1_router
from servicehours.core.config import settings
from servicehours.core.logging import configure_logging
from servicehours.middleware.rate_limit import RateLimitMiddleware
from servicehours.middleware.request_id import RequestIdMiddleware
from servicehours.middleware.security_headers import SecurityHeadersMiddleware
from servicehours.services.exceptions import ServiceError

configure_logging()

app = FastAPI(title="Service Hours API")

# Starlette runs the LAST added middleware FIRST (outermost), so request ids and
# security headers also cover CORS preflights and 429s.
app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(ServiceError, service_error_handler)

Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)


@app.get("/")
def root():
    return {"name": "Service Hours API", "status": "ok"}


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(v1_router, prefix="/v1")

if settings.env == "local" and settings.dev_routes_enabled:
    app.include_router(dev_router)
