from datetime import datetime, timedelta, timezone

from fastapi import Response
from jose import jwt
from pydantic import BaseModel

from app.models.user import UserRecord
from app.utils.config import Settings


class TokenPayload(BaseModel):
    """Claims carried by a session token."""
    id: str
    email: str
    iat: int
    exp: int


def create_token(subject_id: str, email: str, expires_delta: timedelta, settings: Settings) -> tuple[str, datetime]:
    """Create a signed JWT for the user; returns the token and its expiry."""
    now = datetime.now(timezone.utc)
    expires = now + expires_delta
    payload = {
        "id": subject_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, datetime.fromtimestamp(payload["exp"], tz=timezone.utc)


def decode_token(token: str, settings: Settings) -> TokenPayload:
    """Verify signature and expiry; raises `jose.JWTError` when either fails."""
    claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    return TokenPayload.model_validate(claims)


class AuthService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def login(self, user: UserRecord, response: Response) -> str:
        """Issue a session token for a verified user as an HttpOnly cookie."""
        token, expires = create_token(
            subject_id=str(user["id"]),
            email=user["email"],
            expires_delta=timedelta(seconds=self.settings.jwt_expiration),
            settings=self.settings,
        )
        response.set_cookie(
            key=self.settings.auth_cookie_name,
            value=token,
            httponly=True,
            expires=expires,
            secure=self.settings.cookie_secure,
            samesite=self.settings.cookie_samesite,
        )
        return token
