import logging

from packslip.settings import settings
from packslip.storage.base import StorageBackend
from packslip.storage.counter import JsonFileCounterStore, SlipCounterStore

logger = logging.getLogger(__name__)


def get_storage() -> StorageBackend:
    backend = settings.storage_backend

    if backend == "local":
        from packslip.storage.local import LocalStorage

        logger.info("Using storage backend: local path=%s", settings.storage_local_path)
        return LocalStorage(settings.storage_local_path)

    raise ValueError(f"Unsupported storage backend: {backend}")


def get_counter_store() -> SlipCounterStore:
    logger.info("Using slip counter at %s", settings.counter_path)
    return JsonFileCounterStore(settings.counter_path)
