from typing import Any

from fastapi import status


class AppError(Exception):
    """Base error surfaced to clients over REST and GraphQL.

    `extensions` is picked up by graphql-core when a resolver raises, so the
    same error renders with its code on both surfaces.
    """
    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": self.code}

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Document not found"


class UnauthorizedError(AppError):
    code = "UNAUTHENTICATED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InvalidInputError(AppError):
    code = "BAD_USER_INPUT"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"

    def __init__(self, violations: list[str], message: str | None = None) -> None:
        super().__init__(message)
        self.violations = violations

    @property
    def extensions(self) -> dict[str, Any]:
        return {"code": self.code, "violations": self.violations}

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "violations": self.violations}
