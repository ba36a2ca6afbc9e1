from functools import lru_cache

from pydantic import PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    debug: bool = False

    host: str = "0.0.0.0"
    port: int = 3000

    mongodb_uri: str

    jwt_secret: str
    jwt_expiration: PositiveInt
    jwt_algorithm: str = "HS256"

    bcrypt_rounds: int = 12

    auth_cookie_name: str = "Authentication"
    cookie_secure: bool = False
    cookie_samesite: str = "lax"

    cors_origin_regex: str = r"^((http|https)://localhost:\d+|https://studio\.apollographql\.com)$"

    log_level: str = "INFO"
    graphql_ide: bool = True

    model_config = SettingsConfigDict(env_file=(".env",), case_sensitive=False, extra="ignore")

    @property
    def uses_srv(self) -> bool:
        return self.mongodb_uri.startswith("mongodb+srv://")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once; missing required values raise before startup."""
    return Settings()
