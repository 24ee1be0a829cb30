from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import require_authenticated
from app.schemas.employee import EmployeeResponse, TenantContextResponse
from app.services.employee_service import EmployeeService

router = APIRouter(tags=["auth"])


@router.get("/me")
def get_me(
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    """Who is asking: the resolved tenant context plus the caller's employee record."""
    employee = EmployeeService(db, context).get_employee(context.employee_id)
    return respond({
        "context": TenantContextResponse(**context.model_dump()).model_dump(mode="json"),
        "employee": EmployeeResponse.model_validate(employee).model_dump(mode="json"),
    })
