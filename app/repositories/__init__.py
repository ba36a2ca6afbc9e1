"""Generic CRUD over any `BaseDocument` subclass.

A concrete repository is an instance bound to one document type:

    users = Repository(User)
    users.find_one({"email": "a@b.com"})

Filters are mongoengine keyword filters. Every operation returns plain
records (`BaseDocument.to_output()` dicts), never live documents.

`find_one` and `find_one_and_update` raise `NotFoundError` on a miss, while
`find_one_and_delete` returns None; callers rely on both behaviours.
"""
import logging
from typing import Any, Generic, TypeVar

from bson.objectid import ObjectId
from mongoengine.errors import ValidationError
from mongoengine.queryset import QuerySet

from app.models.base import BaseDocument, utcnow
from app.utils.errors import NotFoundError


T = TypeVar("T", bound=BaseDocument)

Filter = dict[str, Any]
Record = dict[str, Any]


class Repository(Generic[T]):
    def __init__(self, document: type[T]) -> None:
        self.document = document
        self.logger = logging.getLogger(f"{__name__}.{document.__name__}")

    def _queryset(self, filter_query: Filter) -> QuerySet:
        return self.document.objects(**filter_query)

    def _first(self, filter_query: Filter) -> T | None:
        try:
            return self._queryset(filter_query).first()
        except ValidationError:
            # A malformed id can never match a stored document.
            return None

    def _not_found(self, filter_query: Filter) -> NotFoundError:
        self.logger.warning("Document not found with filter %s", filter_query)
        return NotFoundError("Document not found")

    def create(self, payload: dict[str, Any]) -> Record:
        """Insert a new document under a freshly generated id."""
        if "id" in payload or "_id" in payload:
            raise ValueError("create() generates the id; payload must not carry one")
        document = self.document(id=ObjectId(), **payload)
        document.save(force_insert=True)
        return document.to_output()

    def find_one(self, filter_query: Filter) -> Record:
        document = self._first(filter_query)
        if document is None:
            raise self._not_found(filter_query)
        return document.to_output()

    def find_one_and_update(self, filter_query: Filter, patch: dict[str, Any]) -> Record:
        """Apply `patch` with $set and return the updated record."""
        updates = {f"set__{field}": value for field, value in patch.items()}
        updates["set__updated_at"] = utcnow()
        try:
            document = self._queryset(filter_query).modify(new=True, **updates)
        except ValidationError:
            document = None
        if document is None:
            raise self._not_found(filter_query)
        return document.to_output()

    def find(self, filter_query: Filter) -> list[Record]:
        try:
            return [document.to_output() for document in self._queryset(filter_query)]
        except ValidationError:
            return []

    def find_one_and_delete(self, filter_query: Filter) -> Record | None:
        """Delete the first match and return it as it was, or None."""
        document = self._first(filter_query)
        if document is None:
            return None
        record = document.to_output()
        document.delete()
        return record
