import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import certifi
from mongoengine import connect, disconnect

from app.migrations import run_migrations
from app.utils.config import Settings


logger = logging.getLogger(__name__)


def init_mongo(settings: Settings) -> None:
    options = {"tz_aware": True, "uuidRepresentation": "standard"}
    if settings.uses_srv:
        options["tlsCAFile"] = certifi.where()
    connect(host=settings.mongodb_uri, alias="default", **options)
    logger.info("Connected to MongoDB")


def close_mongo() -> None:
    disconnect(alias="default")


@asynccontextmanager
async def mongo_lifespan(settings: Settings) -> AsyncIterator[None]:
    init_mongo(settings)
    try:
        run_migrations()
        yield
    finally:
        close_mongo()
