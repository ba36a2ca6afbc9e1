"""Request authentication strategies.

`CredentialStrategy` handles the login body, `SessionStrategy` the session
cookie on every protected call. Both REST handlers and GraphQL resolvers
hand them the same Starlette request.
"""
import logging

from jose import JWTError
from pydantic import ValidationError
from starlette.requests import Request

from app.models.user import UserRecord
from app.services.auth import TokenPayload, decode_token
from app.services.users import UserService
from app.utils.config import Settings
from app.utils.errors import UnauthorizedError


logger = logging.getLogger(__name__)


class CredentialStrategy:
    def __init__(self, users: UserService) -> None:
        self.users = users

    def validate(self, email: str, password: str) -> UserRecord:
        try:
            user = self.users.verify_user(email, password)
        except UnauthorizedError:
            logger.info("Rejected login attempt")
            raise
        logger.info("User %s logged in", user["id"])
        return user


class SessionStrategy:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def authenticate(self, request: Request) -> TokenPayload:
        """Decode the session cookie and attach the principal to the request."""
        token = request.cookies.get(self.settings.auth_cookie_name)
        if not token:
            raise UnauthorizedError()
        try:
            principal = decode_token(token, self.settings)
        except (JWTError, ValidationError):
            raise UnauthorizedError() from None
        request.state.user = principal
        return principal
