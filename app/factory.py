import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.auth import create_auth_router
from app.api.users import create_graphql_router
from app.connections import mongo_lifespan
from app.repositories.users import users_repository
from app.services.auth import AuthService
from app.services.auth.strategies import CredentialStrategy, SessionStrategy
from app.services.users import PasswordHasher, UserService
from app.utils.config import Settings
from app.utils.errors import AppError
from app.utils.logging import configure_logging


logger = logging.getLogger(__name__)


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(settings: Settings) -> FastAPI:
    """Build every component explicitly and wire them into one FastAPI app."""
    configure_logging(settings.log_level)

    users = UserService(users_repository(), PasswordHasher(rounds=settings.bcrypt_rounds))
    credentials = CredentialStrategy(users)
    sessions = SessionStrategy(settings)
    auth_service = AuthService(settings)

    async def lifespan(app: FastAPI):
        async with mongo_lifespan(settings):
            yield

    app = FastAPI(title="Users API (Mongo)", version="0.1.0", debug=settings.debug, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Authorization",
            "apollographql-client-name",
            "apollographql-client-version",
            "x-apollo-operation-name",
            "x-apollo-cache-control",
        ],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - started) * 1000.0
        logger.info("%s %s -> %s in %.1f ms", request.method, request.url.path, response.status_code, elapsed)
        return response

    app.add_exception_handler(AppError, handle_app_error)

    app.include_router(create_auth_router(credentials, sessions, auth_service), prefix="/auth")
    app.include_router(create_graphql_router(users, sessions, settings.graphql_ide), prefix="/graphql")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app
