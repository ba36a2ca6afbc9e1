from typing import TypedDict

from mongoengine import EmailField, StringField
from app.models.base import BaseDocument


class User(BaseDocument):
    """User document.

    Fields:
    - email (str): Login identifier, unique through the `users.email` index
    - password (str, hashed): Bcrypt hash, never the plaintext
    """
    email = EmailField(required=True, null=False)
    password = StringField(required=True, null=False)

    meta = {
        "collection": "users",
        # The unique email index is owned by the migrations.
        "auto_create_index": False,
    }


class UserRecord(TypedDict):
    """Plain record handed out by the users repository."""
    id: str
    email: str
    password: str
    created_at: str
    updated_at: str
