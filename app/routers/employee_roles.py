from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFound
from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import require_admin, require_authenticated
from app.schemas.employee_role import EmployeeRoleCreate, EmployeeRoleResponse, EmployeeRoleUpdate
from app.services.employee_role_service import EmployeeRoleService

router = APIRouter(tags=["employee-roles"])


@router.get("/employees/{employee_id}/roles")
def list_employee_roles(
    employee_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    """Role history, most recent first."""
    assignments = EmployeeRoleService(db, context).list_assignments(employee_id)
    return respond([EmployeeRoleResponse.model_validate(a) for a in assignments])


@router.get("/employees/{employee_id}/roles/current")
def get_current_role(
    employee_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    assignment = EmployeeRoleService(db, context).current_assignment(employee_id)
    if assignment is None:
        raise ResourceNotFound("Employee has no current role")
    return respond(EmployeeRoleResponse.model_validate(assignment))


@router.post("/employees/{employee_id}/roles")
def assign_role(
    employee_id: int,
    payload: EmployeeRoleCreate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    assignment = EmployeeRoleService(db, context).create_assignment(employee_id, payload)
    return respond(EmployeeRoleResponse.model_validate(assignment), message="Role assigned", status=201)


@router.patch("/employee-roles/{assignment_id}")
def update_employee_role(
    assignment_id: int,
    payload: EmployeeRoleUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    assignment = EmployeeRoleService(db, context).update_assignment(assignment_id, payload)
    return respond(EmployeeRoleResponse.model_validate(assignment), message="Role assignment updated")


@router.delete("/employee-roles/{assignment_id}")
def delete_employee_role(
    assignment_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    EmployeeRoleService(db, context).delete_assignment(assignment_id)
    return respond(message="Role assignment deleted")
