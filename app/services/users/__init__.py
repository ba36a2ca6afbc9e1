import logging
from typing import Any

from passlib.context import CryptContext

from app.models.user import User, UserRecord
from app.repositories import Repository
from app.utils.errors import NotFoundError, UnauthorizedError


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credentials are not valid"


class PasswordHasher:
    """Bcrypt hashing through passlib; every hash carries its own salt."""

    def __init__(self, rounds: int = 12) -> None:
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, plain: str) -> str:
        return self.context.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        return self.context.verify(plain, hashed)


class UserService:
    def __init__(self, repository: Repository[User], passwords: PasswordHasher) -> None:
        self.repository = repository
        self.passwords = passwords

    def create(self, data: dict[str, Any]) -> UserRecord:
        """Persist a new user with its password hashed."""
        user = self.repository.create({**data, "password": self.passwords.hash(data["password"])})
        logger.info("Created user %s", user["id"])
        return user

    def find_all(self) -> list[UserRecord]:
        return self.repository.find({})

    def find_one(self, user_id: str) -> UserRecord:
        return self.repository.find_one({"id": user_id})

    def update(self, user_id: str, patch: dict[str, Any]) -> UserRecord:
        changes = {field: value for field, value in patch.items() if value is not None}
        if changes.get("password"):
            changes["password"] = self.passwords.hash(changes["password"])
        return self.repository.find_one_and_update({"id": user_id}, changes)

    def remove(self, user_id: str) -> UserRecord | None:
        return self.repository.find_one_and_delete({"id": user_id})

    def verify_user(self, email: str, password: str) -> UserRecord:
        """Return the user owning these credentials.

        An unknown email and a wrong password fail with the same error so
        callers cannot probe which emails are registered.
        """
        try:
            user = self.repository.find_one({"email": email})
        except NotFoundError:
            raise UnauthorizedError(INVALID_CREDENTIALS) from None

        if not self.passwords.verify(password, user["password"]):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user
