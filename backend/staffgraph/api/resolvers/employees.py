# backend/staffgraph/api/resolvers/employees.py

from typing import Optional

import strawberry
from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from staffgraph.api.deps_auth import require_admin, require_user
from staffgraph.api.types import Employee, EmployeeFilterInput, EmployeeInput, EmployeePage, SortOrder, provided
from staffgraph.core.errors import UserInputError
from staffgraph.services import employees as employee_service


async def get_employees(
    info: Info,
    page: int = 1,
    limit: int = 10,
    filter: Optional[EmployeeFilterInput] = None,
    sort_by: Optional[str] = "name",
    sort_order: Optional[SortOrder] = SortOrder.ASC,
) -> EmployeePage:
    require_user(info)

    result = await run_in_threadpool(
        employee_service.list_employees,
        info.context.db,
        page=page,
        limit=limit,
        filter=filter.to_filter() if filter else None,
        sort_by=employee_service.parse_sort_field(sort_by),
        sort_order=sort_order or SortOrder.ASC,
    )
    return EmployeePage.from_page(result)


async def get_employee(info: Info, id: strawberry.ID) -> Employee:
    require_user(info)

    e = await run_in_threadpool(employee_service.get_employee, info.context.db, id)
    if not e:
        raise UserInputError(employee_service.NOT_FOUND)
    return Employee.from_model(e)


async def create_employee(info: Info, input: EmployeeInput) -> Employee:
    require_admin(info, "create employees")
    e = await run_in_threadpool(employee_service.create_employee, info.context.db, provided(input))
    return Employee.from_model(e)


async def update_employee(info: Info, id: strawberry.ID, input: EmployeeInput) -> Employee:
    require_admin(info, "update employees")
    e = await run_in_threadpool(employee_service.update_employee, info.context.db, id, provided(input))
    return Employee.from_model(e)


async def delete_employee(info: Info, id: strawberry.ID) -> bool:
    require_admin(info, "delete employees")
    return await run_in_threadpool(employee_service.delete_employee, info.context.db, id)
