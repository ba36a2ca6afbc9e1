import pytest
from mongoengine.connection import get_db
from mongoengine.errors import NotUniqueError

from app.migrations import MIGRATIONS, Migration, run_migrations
from app.models.migration import MigrationRecord


def test_migrations_are_recorded_once(mongo):
    # The fixture already applied everything.
    assert run_migrations() == []
    assert [r.file_name for r in MigrationRecord.objects] == [m.name for m in MIGRATIONS]


def test_email_index_is_unique(mongo):
    indexes = get_db()["users"].index_information()

    assert indexes["email_1"]["unique"] is True


def test_new_migration_is_appended_in_order(mongo):
    calls = []
    extra = [
        *MIGRATIONS,
        Migration("second", lambda: calls.append("second")),
        Migration("third", lambda: calls.append("third")),
    ]

    assert run_migrations(extra) == ["second", "third"]
    assert run_migrations(extra) == []
    assert calls == ["second", "third"]
    assert MigrationRecord.objects.count() == len(MIGRATIONS) + 2


def test_changelog_rejects_duplicate_file_name(mongo):
    with pytest.raises(NotUniqueError):
        MigrationRecord(file_name=MIGRATIONS[0].name).save(force_insert=True)
