from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import joinedload

from app.core.exceptions import InvalidStateTransition
from app.models.employee import Employee, EmployeeStatus
from app.models.time_off import TimeOff, TimeOffStatus, TimeOffType
from app.schemas.time_off import TimeOffCreate, TimeOffStatusUpdate
from app.services.base import BaseService
from app.services.filters import FilterSpec, filter_records

TIME_OFF_SEARCH_FIELDS = ("reason", "employee.full_name")

TERMINAL_STATUSES = {TimeOffStatus.APPROVED, TimeOffStatus.REJECTED}


class TimeOffService(BaseService):
    """
    Time-off requests: pending -> approved | rejected, both terminal.

    Approving a vacation request also flips the owner's employee status to
    "vacation". Both writes are committed together or not at all.
    """

    def list_requests(self, filters: Optional[FilterSpec] = None) -> List[TimeOff]:
        query = (
            self.db.query(TimeOff)
            .join(Employee, TimeOff.employee_id == Employee.id)
            .options(joinedload(TimeOff.employee), joinedload(TimeOff.approver))
            .filter(Employee.company_id == self.company_id)
        )
        if not self.context.is_admin:
            query = query.filter(TimeOff.employee_id == self.actor_id)
        requests = query.order_by(TimeOff.created_at.desc(), TimeOff.id.desc()).all()
        return filter_records(requests, filters or FilterSpec(), TIME_OFF_SEARCH_FIELDS)

    def get_request(self, request_id: int) -> TimeOff:
        return self.load(TimeOff, request_id, require_owner_field="employee_id")

    def create_request(self, payload: TimeOffCreate) -> TimeOff:
        # Admins may file for any colleague; everyone else only for themselves
        employee = self.load(Employee, payload.employee_id, require_owner_field="id")

        total_days = payload.total_days
        if total_days is None:
            total_days = float((payload.end_date - payload.start_date).days + 1)

        request = TimeOff(
            employee_id=employee.id,
            type=payload.type.value,
            status=TimeOffStatus.PENDING.value,
            start_date=payload.start_date,
            end_date=payload.end_date,
            total_days=total_days,
            reason=payload.reason,
        )
        self.db.add(request)
        self.commit("create time-off request")
        self.db.refresh(request)
        self.log_info("Time-off requested", time_off_id=request.id, employee_id=employee.id)
        return request

    def update_status(self, request_id: int, payload: TimeOffStatusUpdate) -> TimeOff:
        request = self.load(TimeOff, request_id, require_admin=True)
        current = TimeOffStatus(request.status)
        target = payload.status

        if current in TERMINAL_STATUSES:
            raise InvalidStateTransition(
                f"Request is already {current.value}",
                details={"from": current.value, "to": target.value},
            )
        if target == TimeOffStatus.PENDING:
            raise InvalidStateTransition(
                "A pending request can only be approved or rejected",
                details={"from": current.value, "to": target.value},
            )

        with self.unit_of_work("update time-off status"):
            request.status = target.value
            request.approved_by = self.actor_id
            request.approved_at = datetime.now(timezone.utc)

            if target == TimeOffStatus.APPROVED and request.type == TimeOffType.VACATION.value:
                self._apply_vacation_status(request)

        self.db.refresh(request)
        self.log_info(
            "Time-off status changed",
            time_off_id=request.id,
            from_status=current.value,
            to_status=request.status,
        )
        return request

    def delete_request(self, request_id: int) -> None:
        request = self.load(TimeOff, request_id, require_owner_field="employee_id")
        if not self.context.is_admin and request.status != TimeOffStatus.PENDING.value:
            raise InvalidStateTransition("Only pending requests can be withdrawn")
        self.db.delete(request)
        self.commit("delete time-off request")

    def _apply_vacation_status(self, request: TimeOff) -> None:
        employee = self.db.get(Employee, request.employee_id)
        employee.status = EmployeeStatus.VACATION.value
        self.log_info("Employee placed on vacation", employee_id=employee.id, time_off_id=request.id)
