from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFound
from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import employee_filters, require_admin, require_authenticated
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeStatusUpdate, EmployeeUpdate
from app.schemas.profile import AddressResponse, AddressUpsert, PhotoResponse, PhotoUpsert
from app.services.employee_service import EmployeeService
from app.services.filters import FilterSpec
from app.services.profile_service import ProfileService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("")
def list_employees(
    filters: FilterSpec = Depends(employee_filters),
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    employees = EmployeeService(db, context).list_employees(filters)
    return respond([EmployeeResponse.model_validate(e) for e in employees])


@router.get("/departments")
def list_departments(
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    return respond(EmployeeService(db, context).list_departments())


@router.post("")
def invite_employee(
    payload: EmployeeCreate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    employee = EmployeeService(db, context).invite_employee(payload)
    return respond(EmployeeResponse.model_validate(employee), message="Employee created", status=201)


@router.get("/{employee_id}")
def get_employee(
    employee_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    employee = EmployeeService(db, context).get_employee(employee_id)
    return respond(EmployeeResponse.model_validate(employee))


@router.patch("/{employee_id}")
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    employee = EmployeeService(db, context).update_employee(employee_id, payload)
    return respond(EmployeeResponse.model_validate(employee), message="Employee updated")


@router.patch("/{employee_id}/status")
def update_employee_status(
    employee_id: int,
    payload: EmployeeStatusUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    employee = EmployeeService(db, context).update_status(employee_id, payload)
    return respond(EmployeeResponse.model_validate(employee), message="Employee status updated")


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    EmployeeService(db, context).delete_employee(employee_id)
    return respond(message="Employee deleted")


# --- Admission photo and address ----------------------------------------

@router.get("/{employee_id}/photo")
def get_photo(
    employee_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    photo = ProfileService(db, context).get_photo(employee_id)
    if photo is None:
        raise ResourceNotFound("EmployeePhoto not found")
    return respond(PhotoResponse.model_validate(photo))


@router.put("/{employee_id}/photo")
def save_photo(
    employee_id: int,
    payload: PhotoUpsert,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    photo, created = ProfileService(db, context).save_photo(employee_id, payload)
    return respond(PhotoResponse.model_validate(photo), message="Photo saved", status=201 if created else 200)


@router.get("/{employee_id}/address")
def get_address(
    employee_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    address = ProfileService(db, context).get_address(employee_id)
    if address is None:
        raise ResourceNotFound("EmployeeAddress not found")
    return respond(AddressResponse.model_validate(address))


@router.put("/{employee_id}/address")
def save_address(
    employee_id: int,
    payload: AddressUpsert,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    address, created = ProfileService(db, context).save_address(employee_id, payload)
    return respond(AddressResponse.model_validate(address), message="Address saved", status=201 if created else 200)
