"""
Tenant context resolution and tenant isolation.

Every core operation receives a resolved TenantContext explicitly and runs
the rows it touches through authorize_resource_access().
"""
import logging
from typing import Any, Optional, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, ResourceNotFound, TenantMismatch
from app.models.employee import Employee

logger = logging.getLogger(__name__)

M = TypeVar("M")


class TenantContext(BaseModel):
    """Who is asking: the single source of truth handed to every service call."""
    model_config = ConfigDict(frozen=True)

    company_id: int
    employee_id: int
    is_admin: bool = False


@runtime_checkable
class ResolvesToCompany(Protocol):
    """
    Implemented by every tenant-scoped model.
    The method must fetch intermediate rows itself (e.g. document -> employee -> company)
    instead of trusting any company id the client supplied.
    """
    def resolve_company_id(self, db: Session) -> Optional[int]:
        ...


def resolve_tenant_context(db: Session, credential_id: Optional[str]) -> Optional[TenantContext]:
    """
    Map an authenticated credential subject to its employee row.
    Returns None when the credential has no employee; callers treat that as unauthenticated.
    """
    if not credential_id:
        return None
    employee = db.query(Employee).filter(Employee.user_id == str(credential_id)).first()
    if employee is None:
        return None
    return TenantContext(
        company_id=employee.company_id,
        employee_id=employee.id,
        is_admin=bool(employee.is_admin),
    )


def authorize_resource_access(
    db: Session,
    resource: ResolvesToCompany,
    context: TenantContext,
    require_admin: bool = False,
    require_owner_field: Optional[str] = None,
) -> Any:
    """
    Gate access to a single row.

    1. Resource resolving to another company (or to nothing) -> TenantMismatch (404).
       This is checked first and applies to admins as well.
    2. require_admin and actor is not admin -> AuthorizationError.
    3. require_owner_field set, actor is not admin and the field differs
       from the actor's employee id -> AuthorizationError.
    """
    company_id = resource.resolve_company_id(db)
    if company_id is None or company_id != context.company_id:
        logger.warning(
            "Cross-tenant access blocked",
            extra={
                "resource": type(resource).__name__,
                "actor_employee_id": context.employee_id,
            },
        )
        raise TenantMismatch(f"{_label(resource)} not found")

    if require_admin and not context.is_admin:
        raise AuthorizationError("Only administrators can perform this operation")

    if require_owner_field and not context.is_admin:
        owner_id = getattr(resource, require_owner_field)
        if owner_id != context.employee_id:
            raise AuthorizationError(f"Access denied to this {_label(resource).lower()}")

    return resource


def load_scoped(
    db: Session,
    model: Type[M],
    resource_id: int,
    context: TenantContext,
    require_admin: bool = False,
    require_owner_field: Optional[str] = None,
) -> M:
    """Fetch a row by primary key and run it through the isolation guard."""
    resource = db.get(model, resource_id)
    if resource is None:
        raise ResourceNotFound(f"{model.__name__} not found")
    return authorize_resource_access(
        db,
        resource,
        context,
        require_admin=require_admin,
        require_owner_field=require_owner_field,
    )


def _label(resource: Any) -> str:
    return type(resource).__name__
