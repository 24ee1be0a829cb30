"""
Shared router dependencies.

The canonical auth dependencies live in app.routers.auth_deps.
This module re-exports them next to the list-query parsers so routers
have a single import point.
"""
from typing import Optional

from fastapi import Depends, Query

from app.core.tenancy import TenantContext
from app.routers.auth_deps import (
    get_credential_id,
    require_admin,
    require_authenticated,
    require_owner_or_admin,
)
from app.services.filters import ALL, FilterSpec


def _gate_employee_filter(context: TenantContext, filters: FilterSpec) -> FilterSpec:
    # Filtering on a colleague is an admin capability
    if filters.employee_id not in (None, ALL):
        require_owner_or_admin(context, filters.employee_id)
    return filters


def list_filters(
    employee_id: Optional[str] = Query(None, description='Employee id or "all"'),
    status: Optional[str] = Query(None, description='Status value or "all"'),
    type: Optional[str] = Query(None, description='Type value or "all"'),
    search: Optional[str] = Query(None, description="Case-insensitive text search"),
    context: TenantContext = Depends(require_authenticated),
) -> FilterSpec:
    filters = FilterSpec(employee_id=employee_id, status=status, type=type, search=search)
    return _gate_employee_filter(context, filters)


def employee_filters(
    employee_id: Optional[str] = Query(None, description='Employee id or "all"'),
    status: Optional[str] = Query(None, description='Status value or "all"'),
    department: Optional[str] = Query(None, description='Department name or "all"'),
    search: Optional[str] = Query(None, description="Matches name or email"),
    context: TenantContext = Depends(require_authenticated),
) -> FilterSpec:
    filters = FilterSpec(employee_id=employee_id, status=status, department=department, search=search)
    return _gate_employee_filter(context, filters)


__all__ = [
    "get_credential_id",
    "require_authenticated",
    "require_admin",
    "require_owner_or_admin",
    "list_filters",
    "employee_filters",
]
