from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staffdesk.api.errors import register_error_handlers
from staffdesk.api.routes import health
from staffdesk.core.config import settings
from staffdesk.core.logging import configure_logging, get_logger
from staffdesk.core.monitoring import configure_error_monitoring
from staffdesk.core.observability import configure_observability
from staffdesk.domains.admin_users.router import router as admin_users_router
from staffdesk.domains.auth.router import router as auth_router
from staffdesk.domains.employees.router import router as employee_router
from staffdesk.domains.positions.router import router as position_router
from staffdesk.seed.seed_data import seed
from staffdesk.storage.factory import open_storage, prepare_storage

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=bool(settings.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(health.router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(employee_router, prefix="/api")
app.include_router(position_router, prefix="/api")
app.include_router(admin_users_router, prefix="/api")


@app.on_event("startup")
def startup_event() -> None:
    prepare_storage()
    if settings.seed_defaults:
        with open_storage() as storage:
            seed(storage)
    logger.info("startup_complete", env=settings.env, storage=settings.storage_backend)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "StaffDesk API running", "environment": settings.env}
