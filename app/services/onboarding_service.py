from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import joinedload

from app.core.exceptions import ResourceConflict, ValidationError
from app.models.employee import Employee
from app.models.employee_onboarding import EmployeeOnboarding, OnboardingStatus
from app.models.onboarding_task import OnboardingTask
from app.schemas.onboarding import (
    OnboardingAssign,
    OnboardingStatusUpdate,
    OnboardingTaskCreate,
    OnboardingTaskUpdate,
)
from app.services.base import BaseService
from app.services.filters import FilterSpec, filter_records
from app.services.workflow import recognized_changes

ONBOARDING_SEARCH_FIELDS = ("task.name", "employee.full_name")


class OnboardingService(BaseService):
    """
    Onboarding task templates and their assignment to employees.

    Assignment status machine: pending <-> completed.
    completed_at/completed_by are stamped on pending -> completed and cleared
    on completed -> pending. Completing an already completed assignment keeps
    the original stamp.
    """

    # --- Task templates -------------------------------------------------

    def list_tasks(self) -> List[OnboardingTask]:
        return (
            self.db.query(OnboardingTask)
            .filter(OnboardingTask.company_id == self.company_id)
            .order_by(OnboardingTask.name)
            .all()
        )

    def get_task(self, task_id: int) -> OnboardingTask:
        return self.load(OnboardingTask, task_id)

    def create_task(self, payload: OnboardingTaskCreate) -> OnboardingTask:
        data = payload.model_dump()
        data["category"] = payload.category.value
        task = OnboardingTask(company_id=self.company_id, **data)
        self.db.add(task)
        self.commit("create onboarding task")
        self.db.refresh(task)
        return task

    def update_task(self, task_id: int, payload: OnboardingTaskUpdate) -> OnboardingTask:
        task = self.load(OnboardingTask, task_id, require_admin=True)
        changes = recognized_changes(
            payload, "onboarding task", required=("name", "category", "is_required", "default_due_days")
        )
        if changes.get("category") is not None:
            changes["category"] = payload.category.value
        for field, value in changes.items():
            setattr(task, field, value)
        self.commit("update onboarding task")
        self.db.refresh(task)
        return task

    def delete_task(self, task_id: int) -> None:
        task = self.load(OnboardingTask, task_id, require_admin=True)
        in_use = self.db.query(EmployeeOnboarding.id).filter(EmployeeOnboarding.task_id == task.id).first()
        if in_use:
            raise ResourceConflict("This task is assigned to employees and cannot be deleted")
        self.db.delete(task)
        self.commit("delete onboarding task")

    # --- Assignments ----------------------------------------------------

    def assign(self, payload: OnboardingAssign) -> List[EmployeeOnboarding]:
        employee = self.load(Employee, payload.employee_id)
        tasks = [self.load(OnboardingTask, task_id) for task_id in dict.fromkeys(payload.task_ids)]

        today = date.today()
        assignments = []
        for task in tasks:
            assignment = EmployeeOnboarding(
                employee_id=employee.id,
                task_id=task.id,
                status=OnboardingStatus.pending.value,
                notes=payload.notes,
                due_date=payload.due_date or today + timedelta(days=task.default_due_days),
            )
            self.db.add(assignment)
            assignments.append(assignment)

        self.commit("assign onboarding tasks")
        for assignment in assignments:
            self.db.refresh(assignment)
        self.log_info("Onboarding tasks assigned", employee_id=employee.id, task_count=len(assignments))
        return assignments

    def list_onboardings(self, filters: Optional[FilterSpec] = None) -> List[EmployeeOnboarding]:
        query = (
            self.db.query(EmployeeOnboarding)
            .join(Employee, EmployeeOnboarding.employee_id == Employee.id)
            .options(joinedload(EmployeeOnboarding.task), joinedload(EmployeeOnboarding.employee))
            .filter(Employee.company_id == self.company_id)
        )
        if not self.context.is_admin:
            query = query.filter(EmployeeOnboarding.employee_id == self.actor_id)
        onboardings = query.order_by(EmployeeOnboarding.due_date, EmployeeOnboarding.id).all()
        return filter_records(onboardings, filters or FilterSpec(), ONBOARDING_SEARCH_FIELDS)

    def get_onboarding(self, onboarding_id: int) -> EmployeeOnboarding:
        return self.load(EmployeeOnboarding, onboarding_id, require_owner_field="employee_id")

    def delete_onboarding(self, onboarding_id: int) -> None:
        onboarding = self.load(EmployeeOnboarding, onboarding_id, require_admin=True)
        self.db.delete(onboarding)
        self.commit("delete onboarding")

    def update_status(self, onboarding_id: int, payload: OnboardingStatusUpdate) -> EmployeeOnboarding:
        onboarding = self.load(EmployeeOnboarding, onboarding_id, require_owner_field="employee_id")
        changes = recognized_changes(payload, "onboarding", ignore_none=("status", "completed_by"))

        target = changes.get("status")
        if target is None and changes.get("completed_by") is not None:
            raise ValidationError("completed_by can only be sent together with status=completed")

        if "notes" in changes:
            onboarding.notes = changes["notes"]

        if target is not None:
            self._transition(onboarding, OnboardingStatus(target), changes.get("completed_by"))

        self.commit("update onboarding status")
        self.db.refresh(onboarding)
        return onboarding

    def _transition(
        self,
        onboarding: EmployeeOnboarding,
        target: OnboardingStatus,
        completed_by: Optional[int],
    ) -> None:
        current = OnboardingStatus(onboarding.status)

        if target == OnboardingStatus.completed:
            if current == OnboardingStatus.completed:
                return
            if completed_by is not None:
                # Must be a colleague from the same company
                self.load(Employee, completed_by)
            onboarding.status = OnboardingStatus.completed.value
            onboarding.completed_at = datetime.now(timezone.utc)
            onboarding.completed_by = completed_by if completed_by is not None else self.actor_id
        else:
            onboarding.status = OnboardingStatus.pending.value
            onboarding.completed_at = None
            onboarding.completed_by = None

        self.log_info(
            "Onboarding status changed",
            onboarding_id=onboarding.id,
            from_status=current.value,
            to_status=onboarding.status,
        )
