"""
Role history of employees.

Making an assignment current closes the previous current one, ending it on
the new start date. Deleting the current assignment promotes the most recent
remaining one. Both happen in the same transaction as the write itself.
"""
from datetime import date
from typing import List, Optional

from app.core.exceptions import ValidationError
from app.models.employee import Employee
from app.models.employee_role import EmployeeRole
from app.models.role import Role
from app.schemas.employee_role import EmployeeRoleCreate, EmployeeRoleUpdate
from app.services.base import BaseService
from app.services.workflow import recognized_changes


class EmployeeRoleService(BaseService):

    def list_assignments(self, employee_id: int) -> List[EmployeeRole]:
        self.load(Employee, employee_id, require_owner_field="id")
        return (
            self.db.query(EmployeeRole)
            .filter(EmployeeRole.employee_id == employee_id)
            .order_by(EmployeeRole.start_date.desc(), EmployeeRole.id.desc())
            .all()
        )

    def current_assignment(self, employee_id: int) -> Optional[EmployeeRole]:
        self.load(Employee, employee_id, require_owner_field="id")
        return (
            self.db.query(EmployeeRole)
            .filter(EmployeeRole.employee_id == employee_id, EmployeeRole.is_current.is_(True))
            .first()
        )

    def create_assignment(self, employee_id: int, payload: EmployeeRoleCreate) -> EmployeeRole:
        self.load(Employee, employee_id, require_admin=True)
        self.load(Role, payload.role_id)
        assignment = EmployeeRole(employee_id=employee_id, **payload.model_dump())
        with self.unit_of_work("assign role"):
            if payload.is_current:
                self._close_current(employee_id, payload.start_date)
            self.db.add(assignment)
        self.db.refresh(assignment)
        self.log_info("Role assigned", employee_id=employee_id, role_id=payload.role_id, is_current=payload.is_current)
        return assignment

    def update_assignment(self, assignment_id: int, payload: EmployeeRoleUpdate) -> EmployeeRole:
        assignment = self.load(EmployeeRole, assignment_id, require_admin=True)
        changes = recognized_changes(payload, "role assignment", required=("role_id", "start_date", "is_current"))
        if "role_id" in changes:
            self.load(Role, changes["role_id"])

        start_date = changes.get("start_date", assignment.start_date)
        end_date = changes.get("end_date", assignment.end_date)
        if end_date is not None and end_date < start_date:
            raise ValidationError("end_date must be on or after start_date")

        with self.unit_of_work("update role assignment"):
            if changes.get("is_current") and not assignment.is_current:
                self._close_current(assignment.employee_id, start_date, keep_id=assignment.id)
            for field, value in changes.items():
                setattr(assignment, field, value)
        self.db.refresh(assignment)
        return assignment

    def delete_assignment(self, assignment_id: int) -> None:
        assignment = self.load(EmployeeRole, assignment_id, require_admin=True)
        employee_id = assignment.employee_id
        was_current = assignment.is_current
        with self.unit_of_work("delete role assignment"):
            self.db.delete(assignment)
            self.db.flush()
            if was_current:
                self._promote_latest(employee_id)
        self.log_info("Role assignment deleted", employee_id=employee_id, assignment_id=assignment_id)

    def _close_current(self, employee_id: int, end_date: date, keep_id: Optional[int] = None) -> None:
        query = self.db.query(EmployeeRole).filter(
            EmployeeRole.employee_id == employee_id,
            EmployeeRole.is_current.is_(True),
        )
        if keep_id is not None:
            query = query.filter(EmployeeRole.id != keep_id)
        for previous in query.all():
            previous.is_current = False
            previous.end_date = end_date
        self.db.flush()

    def _promote_latest(self, employee_id: int) -> None:
        latest = (
            self.db.query(EmployeeRole)
            .filter(EmployeeRole.employee_id == employee_id)
            .order_by(EmployeeRole.start_date.desc(), EmployeeRole.id.desc())
            .first()
        )
        if latest is not None:
            latest.is_current = True
            latest.end_date = None
