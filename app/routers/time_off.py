from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import list_filters, require_admin, require_authenticated
from app.schemas.time_off import TimeOffCreate, TimeOffResponse, TimeOffStatusUpdate
from app.services.filters import FilterSpec
from app.services.time_off_service import TimeOffService

router = APIRouter(prefix="/time-off", tags=["time-off"])


@router.get("")
def list_time_off(
    filters: FilterSpec = Depends(list_filters),
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    requests = TimeOffService(db, context).list_requests(filters)
    return respond([TimeOffResponse.model_validate(r) for r in requests])


@router.post("")
def request_time_off(
    payload: TimeOffCreate,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    request = TimeOffService(db, context).create_request(payload)
    return respond(TimeOffResponse.model_validate(request), message="Time-off requested", status=201)


@router.get("/{request_id}")
def get_time_off(
    request_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    request = TimeOffService(db, context).get_request(request_id)
    return respond(TimeOffResponse.model_validate(request))


@router.patch("/{request_id}/status")
def update_time_off_status(
    request_id: int,
    payload: TimeOffStatusUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    request = TimeOffService(db, context).update_status(request_id, payload)
    return respond(TimeOffResponse.model_validate(request), message=f"Request {request.status}")


@router.delete("/{request_id}")
def delete_time_off(
    request_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    TimeOffService(db, context).delete_request(request_id)
    return respond(message="Time-off request deleted")
