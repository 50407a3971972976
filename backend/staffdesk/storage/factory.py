from contextlib import contextmanager
from typing import Iterator

from staffdesk.core.config import Settings, settings
from staffdesk.db.session import create_schema, engine, get_session

from .base import Storage
from .json_file import JsonFileStorage
from .sql import SqlStorage, dialect_label


@contextmanager
def open_storage(config: Settings = settings) -> Iterator[Storage]:
    """Open a storage handle for the configured backend, closing it afterwards."""
    if config.storage_backend == "json":
        yield JsonFileStorage(config.json_store_path)
        return

    with contextmanager(get_session)() as db:
        yield SqlStorage(db)


def storage_name(config: Settings = settings) -> str:
    """Name of the configured backend, known without opening it."""
    if config.storage_backend == "json":
        return JsonFileStorage.name
    return dialect_label(engine.dialect.name)


def prepare_storage(config: Settings = settings) -> None:
    """Create the schema for the SQL backend; the JSON document appears on first write."""
    if config.storage_backend == "sql":
        create_schema(engine)
