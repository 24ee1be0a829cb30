from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import list_filters, require_admin, require_authenticated
from app.schemas.onboarding import (
    EmployeeOnboardingResponse,
    OnboardingAssign,
    OnboardingStatusUpdate,
    OnboardingTaskCreate,
    OnboardingTaskResponse,
    OnboardingTaskUpdate,
)
from app.services.filters import FilterSpec
from app.services.onboarding_service import OnboardingService

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


# ============================================================================
# TASK TEMPLATES
# ============================================================================

@router.get("/tasks")
def list_tasks(
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    tasks = OnboardingService(db, context).list_tasks()
    return respond([OnboardingTaskResponse.model_validate(t) for t in tasks])


@router.post("/tasks")
def create_task(
    payload: OnboardingTaskCreate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    task = OnboardingService(db, context).create_task(payload)
    return respond(OnboardingTaskResponse.model_validate(task), message="Task created", status=201)


@router.get("/tasks/{task_id}")
def get_task(
    task_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    task = OnboardingService(db, context).get_task(task_id)
    return respond(OnboardingTaskResponse.model_validate(task))


@router.patch("/tasks/{task_id}")
def update_task(
    task_id: int,
    payload: OnboardingTaskUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    task = OnboardingService(db, context).update_task(task_id, payload)
    return respond(OnboardingTaskResponse.model_validate(task), message="Task updated")


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    OnboardingService(db, context).delete_task(task_id)
    return respond(message="Task deleted")


# ============================================================================
# ASSIGNMENTS
# ============================================================================

@router.post("/assign")
def assign_tasks(
    payload: OnboardingAssign,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    assignments = OnboardingService(db, context).assign(payload)
    return respond(
        [EmployeeOnboardingResponse.model_validate(a) for a in assignments],
        message=f"{len(assignments)} task(s) assigned",
        status=201,
    )


@router.get("")
def list_onboardings(
    filters: FilterSpec = Depends(list_filters),
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    onboardings = OnboardingService(db, context).list_onboardings(filters)
    return respond([EmployeeOnboardingResponse.model_validate(o) for o in onboardings])


@router.get("/{onboarding_id}")
def get_onboarding(
    onboarding_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    onboarding = OnboardingService(db, context).get_onboarding(onboarding_id)
    return respond(EmployeeOnboardingResponse.model_validate(onboarding))


@router.patch("/{onboarding_id}/status")
def update_onboarding_status(
    onboarding_id: int,
    payload: OnboardingStatusUpdate,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    onboarding = OnboardingService(db, context).update_status(onboarding_id, payload)
    return respond(EmployeeOnboardingResponse.model_validate(onboarding), message="Onboarding updated")


@router.delete("/{onboarding_id}")
def delete_onboarding(
    onboarding_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    OnboardingService(db, context).delete_onboarding(onboarding_id)
    return respond(message="Onboarding deleted")
