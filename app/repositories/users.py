from app.models.user import User
from app.repositories import Repository


def users_repository() -> Repository[User]:
    return Repository(User)
