from pydantic import BaseModel, ConfigDict, EmailStr, ValidationError, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from app.utils.errors import InvalidInputError


def password_violations(password: str) -> list[str]:
    """Rules a strong password must satisfy; returns the broken ones."""
    violations = []
    if len(password) < 8:
        violations.append("must be at least 8 characters long")
    if not any(c.islower() for c in password):
        violations.append("must contain a lowercase letter")
    if not any(c.isupper() for c in password):
        violations.append("must contain an uppercase letter")
    if not any(c.isdigit() for c in password):
        violations.append("must contain a number")
    if not any(not c.isalnum() and not c.isspace() for c in password):
        violations.append("must contain a symbol")
    return violations


def _strong_password(value: str | None) -> str | None:
    if value is None:
        return value
    violations = password_violations(value)
    if violations:
        raise ValueError("password " + ", ".join(violations))
    return value


class CreateUserBody(BaseModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str | None) -> str | None:
        return _strong_password(value)


class UpdateUserBody(BaseModel):
    id: str
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str | None) -> str | None:
        return _strong_password(value)


class LoginBody(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        # Stored emails went through EmailStr; match its normalized form.
        try:
            return validate_email(value)[1]
        except PydanticCustomError:
            # Never stored, so the credential check rejects it.
            return value


class UserOut(BaseModel):
    """REST view of a user; only allow-listed fields leave the service."""
    model_config = ConfigDict(extra="ignore")

    id: str
    email: str


def parse_input(model: type[BaseModel], data: dict) -> BaseModel:
    """Validate client input, turning pydantic errors into `InvalidInputError`."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        violations = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "input"
            message = error["msg"].removeprefix("Value error, ")
            violations.append(f"{field}: {message}")
        raise InvalidInputError(violations) from None
