"""Ordered, run-once schema migrations.

Each migration is recorded in the `changelog` collection once applied; the
collection is only ever appended to.
"""
import logging
from typing import Callable, NamedTuple

from mongoengine.connection import get_db
from pymongo import ASCENDING

from app.models.migration import MigrationRecord


logger = logging.getLogger(__name__)


class Migration(NamedTuple):
    name: str
    apply: Callable[[], None]


def create_user_email_index() -> None:
    get_db()["users"].create_index([("email", ASCENDING)], unique=True, name="email_1")


MIGRATIONS: list[Migration] = [
    Migration("create-user-email-index", create_user_email_index),
]


def ensure_changelog_index() -> None:
    get_db()["changelog"].create_index([("file_name", ASCENDING)], unique=True, name="file_name_1")


def applied_migrations() -> set[str]:
    return {record.file_name for record in MigrationRecord.objects.only("file_name")}


def run_migrations(migrations: list[Migration] | None = None) -> list[str]:
    """Apply pending migrations in order and return the names applied now."""
    migrations = MIGRATIONS if migrations is None else migrations
    ensure_changelog_index()
    done = applied_migrations()
    applied: list[str] = []

    for migration in migrations:
        if migration.name in done:
            continue
        logger.info("Applying migration %s", migration.name)
        migration.apply()
        MigrationRecord(file_name=migration.name).save(force_insert=True)
        applied.append(migration.name)

    if not applied:
        logger.debug("No pending migrations")
    return applied
