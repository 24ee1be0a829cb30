from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import require_admin, require_authenticated
from app.schemas.dependent import DependentBatchCreate, DependentCreate, DependentResponse, DependentUpdate
from app.services.dependent_service import DependentService

# Collection routes hang off the employee; single-row routes are addressed by id
router = APIRouter(tags=["dependents"])


def _dump(dependents) -> List[DependentResponse]:
    return [DependentResponse.model_validate(d) for d in dependents]


@router.get("/employees/{employee_id}/dependents")
def list_dependents(
    employee_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return respond(_dump(DependentService(db, context).list_dependents(employee_id)))


@router.post("/employees/{employee_id}/dependents")
def create_dependent(
    employee_id: int,
    payload: DependentCreate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    dependent = DependentService(db, context).create_dependent(employee_id, payload)
    return respond(DependentResponse.model_validate(dependent), message="Dependent created", status=201)


@router.post("/employees/{employee_id}/dependents/batch")
def create_dependents(
    employee_id: int,
    payload: DependentBatchCreate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    dependents = DependentService(db, context).create_dependents(employee_id, payload)
    return respond(_dump(dependents), message=f"{len(dependents)} dependents created", status=201)


@router.get("/dependents/{dependent_id}")
def get_dependent(
    dependent_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return respond(DependentResponse.model_validate(DependentService(db, context).get_dependent(dependent_id)))


@router.patch("/dependents/{dependent_id}")
def update_dependent(
    dependent_id: int,
    payload: DependentUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    dependent = DependentService(db, context).update_dependent(dependent_id, payload)
    return respond(DependentResponse.model_validate(dependent), message="Dependent updated")


@router.delete("/dependents/{dependent_id}")
def delete_dependent(
    dependent_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    DependentService(db, context).delete_dependent(dependent_id)
    return respond(message="Dependent deleted")
