"""GraphQL surface for user accounts.

Creating a user is public (registration); every other field requires a
valid session cookie. Blocking work (bcrypt, mongo) runs in the threadpool.
"""
from dataclasses import asdict
from typing import Any

import strawberry
from fastapi.concurrency import run_in_threadpool
from strawberry.fastapi import GraphQLRouter
from strawberry.permission import BasePermission
from strawberry.types import Info

from app.api.users.schemas import CreateUserBody, UpdateUserBody, parse_input
from app.models.user import UserRecord
from app.services.auth.strategies import SessionStrategy
from app.services.users import UserService
from app.utils.errors import UnauthorizedError


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    email: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserType":
        return cls(id=strawberry.ID(record["id"]), email=record["email"])


@strawberry.input
class CreateUserInput:
    email: str
    password: str


@strawberry.input
class UpdateUserInput:
    id: strawberry.ID
    email: str | None = None
    password: str | None = None


class IsAuthenticated(BasePermission):
    message = "Unauthorized"
    error_extensions = {"code": UnauthorizedError.code}

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        try:
            info.context["sessions"].authenticate(info.context["request"])
        except UnauthorizedError:
            return False
        return True


@strawberry.type
class Query:
    @strawberry.field(permission_classes=[IsAuthenticated])
    async def users(self, info: Info) -> list[UserType]:
        records = await run_in_threadpool(info.context["users"].find_all)
        return [UserType.from_record(record) for record in records]

    @strawberry.field(permission_classes=[IsAuthenticated])
    async def user(self, info: Info, id: strawberry.ID) -> UserType:
        record = await run_in_threadpool(info.context["users"].find_one, str(id))
        return UserType.from_record(record)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_user(self, info: Info, input: CreateUserInput) -> UserType:
        body = parse_input(CreateUserBody, asdict(input))
        record = await run_in_threadpool(info.context["users"].create, body.model_dump())
        return UserType.from_record(record)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def update_user(self, info: Info, input: UpdateUserInput) -> UserType:
        body = parse_input(UpdateUserBody, asdict(input))
        patch = body.model_dump(exclude={"id"}, exclude_none=True)
        record = await run_in_threadpool(info.context["users"].update, body.id, patch)
        return UserType.from_record(record)

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def remove_user(self, info: Info, id: strawberry.ID) -> UserType | None:
        record = await run_in_threadpool(info.context["users"].remove, str(id))
        return UserType.from_record(record) if record else None


schema = strawberry.Schema(query=Query, mutation=Mutation)


def create_graphql_router(users: UserService, sessions: SessionStrategy, graphql_ide: bool = True) -> GraphQLRouter:
    def get_context() -> dict[str, Any]:
        return {"users": users, "sessions": sessions}

    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if graphql_ide else None,
    )
