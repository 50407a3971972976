from staffdesk.core.logging import get_logger
from staffdesk.core.security import hash_password
from staffdesk.repositories.base import storage_now
from staffdesk.storage import Storage

logger = get_logger(__name__)

DEFAULT_POSITIONS = [
    "Software Developer",
    "Project Manager",
    "HR Manager",
    "QA Engineer",
    "DevOps Engineer",
]
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "password"


def seed(storage: Storage) -> bool:
    """Fill an empty store with the default positions and admin account."""
    seeded = False
    now = storage_now()
    if not storage.list_positions():
        for name in DEFAULT_POSITIONS:
            storage.insert_position(name, created_at=now)
        seeded = True
    if not storage.list_admin_users():
        storage.insert_admin_user(
            DEFAULT_ADMIN_USERNAME, hash_password(DEFAULT_ADMIN_PASSWORD), created_at=now
        )
        seeded = True
    if seeded:
        logger.info("store_seeded", storage=storage.name)
    return seeded
