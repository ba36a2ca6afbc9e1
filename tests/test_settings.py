import re

import pytest
from pydantic import ValidationError

from app.utils.config import Settings


REQUIRED = {
    "MONGODB_URI": "mongodb+srv://cluster.example.net/users",
    "JWT_SECRET": "secret",
    "JWT_EXPIRATION": "3600",
}


@pytest.fixture
def clean_env(monkeypatch):
    for name in [*REQUIRED, "PORT"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_loads_from_environment(clean_env):
    for name, value in REQUIRED.items():
        clean_env.setenv(name, value)
    clean_env.setenv("PORT", "8080")

    settings = Settings(_env_file=None)

    assert settings.mongodb_uri == REQUIRED["MONGODB_URI"]
    assert settings.jwt_expiration == 3600
    assert settings.port == 8080
    assert settings.uses_srv is True
    assert settings.auth_cookie_name == "Authentication"


@pytest.mark.parametrize("missing", list(REQUIRED))
def test_missing_required_value_fails_fast(clean_env, missing):
    for name, value in REQUIRED.items():
        if name != missing:
            clean_env.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_expiration_must_be_positive(clean_env):
    for name, value in REQUIRED.items():
        clean_env.setenv(name, value)
    clean_env.setenv("JWT_EXPIRATION", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_default_cors_allows_localhost_and_apollo_studio(clean_env):
    for name, value in REQUIRED.items():
        clean_env.setenv(name, value)
    clean_env.delenv("CORS_ORIGIN_REGEX", raising=False)

    pattern = re.compile(Settings(_env_file=None).cors_origin_regex)

    assert pattern.match("http://localhost:3000")
    assert pattern.match("https://studio.apollographql.com")
    assert not pattern.match("https://evil.example.com")
