from fastapi import APIRouter, Depends, Request, Response, status

from app.api.users.schemas import LoginBody, UserOut
from app.models.user import UserRecord
from app.services.auth import AuthService, TokenPayload
from app.services.auth.strategies import CredentialStrategy, SessionStrategy


def create_auth_router(
    credentials: CredentialStrategy,
    sessions: SessionStrategy,
    auth_service: AuthService,
) -> APIRouter:
    router = APIRouter()

    def verified_user(body: LoginBody) -> UserRecord:
        return credentials.validate(body.email, body.password)

    def current_user(request: Request) -> TokenPayload:
        return sessions.authenticate(request)

    @router.post("/login", status_code=status.HTTP_200_OK)
    def login(user: UserRecord = Depends(verified_user)) -> Response:
        """PUBLIC: Verify credentials and set the session cookie."""
        response = Response(status_code=status.HTTP_200_OK)
        auth_service.login(user, response)
        return response

    @router.get("/me", response_model=UserOut)
    def me(principal: TokenPayload = Depends(current_user)) -> UserOut:
        """PROTECTED: Principal decoded from the session cookie."""
        return UserOut(id=principal.id, email=principal.email)

    return router
