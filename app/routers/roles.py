from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import require_admin, require_authenticated
from app.schemas.role import RoleActiveUpdate, RoleDetailResponse, RolePayload, RoleResponse
from app.services.role_service import RoleService

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("")
def list_roles(
    include_inactive: bool = Query(False),
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    roles = RoleService(db, context).list_roles(include_inactive=include_inactive)
    return respond([RoleResponse.model_validate(r) for r in roles])


@router.post("")
def create_role(
    payload: RolePayload,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    role = RoleService(db, context).create_role(payload)
    return respond(RoleDetailResponse.model_validate(role), message="Role created", status=201)


@router.get("/{role_id}")
def get_role(
    role_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    """Role with team name and all five requirement collections."""
    role = RoleService(db, context).get_role(role_id)
    return respond(RoleDetailResponse.model_validate(role))


@router.put("/{role_id}")
def update_role(
    role_id: int,
    payload: RolePayload,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Full replace: every submitted collection becomes the stored collection, empty lists included."""
    role = RoleService(db, context).update_role(role_id, payload)
    return respond(RoleDetailResponse.model_validate(role), message="Role updated")


@router.patch("/{role_id}/active")
def set_role_active(
    role_id: int,
    payload: RoleActiveUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    role = RoleService(db, context).set_active(role_id, payload)
    return respond(RoleResponse.model_validate(role), message="Role activated" if role.active else "Role deactivated")


@router.delete("/{role_id}")
def delete_role(
    role_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    RoleService(db, context).delete_role(role_id)
    return respond(message="Role deleted")
