# backend/staffgraph/api/schema.py

import strawberry
from graphql.validation import NoSchemaIntrospectionCustomRule
from strawberry.extensions import AddValidationRules, MaskErrors

from staffgraph.api.resolvers import dashboard, employees, users
from staffgraph.api.types import AuthPayload, ChangePasswordResult, DashboardStats, Employee, EmployeePage, User
from staffgraph.core.errors import AppError


@strawberry.type
class Query:
    me: User = strawberry.field(resolver=users.me)
    dashboard_stats: DashboardStats = strawberry.field(resolver=dashboard.dashboard_stats)
    get_employees: EmployeePage = strawberry.field(resolver=employees.get_employees)
    get_employee: Employee = strawberry.field(resolver=employees.get_employee)


@strawberry.type
class Mutation:
    register: AuthPayload = strawberry.mutation(resolver=users.register)
    login: AuthPayload = strawberry.mutation(resolver=users.login)
    update_profile: User = strawberry.mutation(resolver=users.update_profile)
    change_password: ChangePasswordResult = strawberry.mutation(resolver=users.change_password)

    create_employee: Employee = strawberry.mutation(resolver=employees.create_employee)
    update_employee: Employee = strawberry.mutation(resolver=employees.update_employee)
    delete_employee: bool = strawberry.mutation(resolver=employees.delete_employee)


def _should_mask(error) -> bool:
    # query/validation errors have no original error and stay visible
    original = getattr(error, "original_error", None)
    return original is not None and not isinstance(original, AppError)


def build_schema(introspection: bool = True) -> strawberry.Schema:
    # factories, so each request gets fresh extension instances
    extensions = [lambda: MaskErrors(should_mask_error=_should_mask)]
    if not introspection:
        extensions.append(lambda: AddValidationRules([NoSchemaIntrospectionCustomRule]))
    return strawberry.Schema(query=Query, mutation=Mutation, extensions=extensions)


schema = build_schema()
