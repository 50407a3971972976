from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from staffdesk.api.deps import get_storage_settings
from staffdesk.core.config import Settings
from staffdesk.core.errors import StaffDeskError
from staffdesk.core.logging import get_logger
from staffdesk.storage.factory import open_storage, storage_name

router = APIRouter(prefix="/health", tags=["health"])
logger = get_logger(__name__)


@router.get("", summary="Liveness probe")
def healthcheck(config: Settings = Depends(get_storage_settings)):
    # Opened inside the try: a store that fails to load reports ERROR.
    database = storage_name(config)
    try:
        with open_storage(config) as storage:
            storage.ping()
    except StaffDeskError as exc:
        logger.error("healthcheck_failed", storage=database, error=repr(exc.__cause__ or exc))
        return JSONResponse(status_code=500, content={"status": "ERROR", "database": database})
    return {
        "status": "OK",
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
