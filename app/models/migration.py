from mongoengine import Document, DateTimeField, StringField

from app.models.base import utcnow


class MigrationRecord(Document):
    """Append-only log entry for an applied migration."""
    file_name = StringField(required=True, null=False, unique=True)
    applied_at = DateTimeField(default=utcnow, null=False)

    meta = {
        "collection": "changelog",
        # The unique file_name index is created by run_migrations.
        "auto_create_index": False,
        "ordering": ["applied_at"],
    }
