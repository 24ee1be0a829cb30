from typing import List, Optional

from app.core.exceptions import ResourceConflict, ValidationError
from app.models.employee import Employee
from app.models.employee_onboarding import EmployeeOnboarding
from app.models.team import Subteam, Team
from app.models.time_off import TimeOff
from app.schemas.employee import EmployeeCreate, EmployeeStatusUpdate, EmployeeUpdate
from app.services.base import BaseService
from app.services.filters import FilterSpec, filter_records
from app.services.workflow import recognized_changes

EMPLOYEE_SEARCH_FIELDS = ("full_name", "email")
EMPLOYEE_REQUIRED_FIELDS = ("full_name", "email", "is_admin")
EMPLOYEE_FILTER_FIELDS = {"employee_id": "id", "status": "status", "department": "department"}


class EmployeeService(BaseService):

    def list_employees(self, filters: Optional[FilterSpec] = None) -> List[Employee]:
        """Admins see the whole company; everyone else only sees themselves."""
        query = self.db.query(Employee).filter(Employee.company_id == self.company_id)
        if not self.context.is_admin:
            query = query.filter(Employee.id == self.actor_id)
        employees = query.order_by(Employee.full_name).all()
        return filter_records(employees, filters or FilterSpec(), EMPLOYEE_SEARCH_FIELDS, EMPLOYEE_FILTER_FIELDS)

    def list_departments(self) -> List[str]:
        """Distinct department names in use across the company."""
        rows = (
            self.db.query(Employee.department)
            .filter(Employee.company_id == self.company_id, Employee.department.isnot(None))
            .distinct()
            .order_by(Employee.department)
            .all()
        )
        return [department for (department,) in rows if department]

    def get_employee(self, employee_id: int) -> Employee:
        return self.load(Employee, employee_id, require_owner_field="id")

    def invite_employee(self, payload: EmployeeCreate) -> Employee:
        self._ensure_unique_email(payload.email)
        if payload.user_id is not None:
            self._ensure_unlinked_credential(payload.user_id)
        employee = Employee(company_id=self.company_id, **payload.model_dump())
        self.db.add(employee)
        self.commit("create employee")
        self.db.refresh(employee)
        self.log_info("Employee invited", employee_id=employee.id)
        return employee

    def update_employee(self, employee_id: int, payload: EmployeeUpdate) -> Employee:
        employee = self.load(Employee, employee_id, require_admin=True)
        changes = recognized_changes(payload, "employee", required=EMPLOYEE_REQUIRED_FIELDS)
        if "email" in changes and changes["email"] != employee.email:
            self._ensure_unique_email(changes["email"])
        if changes.get("is_admin") is False and employee.id == self.actor_id:
            raise ValidationError("Administrators cannot revoke their own admin access")
        for field, value in changes.items():
            setattr(employee, field, value)
        self.commit("update employee")
        self.db.refresh(employee)
        return employee

    def update_status(self, employee_id: int, payload: EmployeeStatusUpdate) -> Employee:
        employee = self.load(Employee, employee_id, require_admin=True)
        previous = employee.status
        employee.status = payload.status.value
        self.commit("update employee status")
        self.db.refresh(employee)
        self.log_info(
            "Employee status changed",
            employee_id=employee.id,
            from_status=previous,
            to_status=employee.status,
        )
        return employee

    def delete_employee(self, employee_id: int) -> None:
        employee = self.load(Employee, employee_id, require_admin=True)
        if employee.id == self.actor_id:
            raise ValidationError("Administrators cannot delete themselves")

        # Rows owned by colleagues may still point at this employee
        self.db.query(EmployeeOnboarding).filter(
            EmployeeOnboarding.completed_by == employee.id
        ).update({EmployeeOnboarding.completed_by: None}, synchronize_session=False)
        self.db.query(TimeOff).filter(
            TimeOff.approved_by == employee.id
        ).update({TimeOff.approved_by: None}, synchronize_session=False)
        self.db.query(Team).filter(Team.manager_id == employee.id).update(
            {Team.manager_id: None}, synchronize_session=False
        )
        self.db.query(Subteam).filter(Subteam.manager_id == employee.id).update(
            {Subteam.manager_id: None}, synchronize_session=False
        )

        # Documents, onboarding, time-off, photo, address and memberships cascade
        self.db.delete(employee)
        self.commit("delete employee")
        self.log_info("Employee deleted", employee_id=employee_id)

    def _ensure_unique_email(self, email: str) -> None:
        exists = self.db.query(Employee.id).filter(
            Employee.company_id == self.company_id,
            Employee.email == str(email),
        ).first()
        if exists:
            raise ResourceConflict("An employee with this email already exists")

    def _ensure_unlinked_credential(self, user_id: str) -> None:
        # Credential ids are global: one identity maps to one employee in one company
        exists = self.db.query(Employee.id).filter(Employee.user_id == user_id).first()
        if exists:
            raise ResourceConflict("This credential is already linked to an employee")
