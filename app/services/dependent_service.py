"""
Dependents of an employee.
The owning employee and admins can read them; only admins write.
"""
from typing import List

from app.models.employee import Employee
from app.models.employee_dependent import EmployeeDependent
from app.schemas.dependent import DependentBatchCreate, DependentCreate, DependentUpdate
from app.services.base import BaseService
from app.services.workflow import recognized_changes

DEPENDENT_REQUIRED_FIELDS = ("full_name", "birth_date", "relationship", "gender", "has_disability", "is_student")


class DependentService(BaseService):

    def list_dependents(self, employee_id: int) -> List[EmployeeDependent]:
        self.load(Employee, employee_id, require_owner_field="id")
        return (
            self.db.query(EmployeeDependent)
            .filter(EmployeeDependent.employee_id == employee_id)
            .order_by(EmployeeDependent.full_name)
            .all()
        )

    def get_dependent(self, dependent_id: int) -> EmployeeDependent:
        return self.load(EmployeeDependent, dependent_id, require_owner_field="employee_id")

    def create_dependent(self, employee_id: int, payload: DependentCreate) -> EmployeeDependent:
        self.load(Employee, employee_id, require_admin=True)
        dependent = EmployeeDependent(employee_id=employee_id, **self._values(payload))
        self.db.add(dependent)
        self.commit("create dependent")
        self.db.refresh(dependent)
        self.log_info("Dependent created", employee_id=employee_id, dependent_id=dependent.id)
        return dependent

    def create_dependents(self, employee_id: int, payload: DependentBatchCreate) -> List[EmployeeDependent]:
        """All or nothing: one failed row leaves the employee without any of the batch."""
        self.load(Employee, employee_id, require_admin=True)
        dependents = [EmployeeDependent(employee_id=employee_id, **self._values(item)) for item in payload.dependents]
        with self.unit_of_work("create dependents"):
            self.db.add_all(dependents)
        for dependent in dependents:
            self.db.refresh(dependent)
        self.log_info("Dependents created", employee_id=employee_id, count=len(dependents))
        return dependents

    def update_dependent(self, dependent_id: int, payload: DependentUpdate) -> EmployeeDependent:
        dependent = self.load(EmployeeDependent, dependent_id, require_admin=True)
        changes = recognized_changes(payload, "dependent", required=DEPENDENT_REQUIRED_FIELDS)
        for field, value in changes.items():
            setattr(dependent, field, getattr(value, "value", value))
        self.commit("update dependent")
        self.db.refresh(dependent)
        return dependent

    def delete_dependent(self, dependent_id: int) -> None:
        dependent = self.load(EmployeeDependent, dependent_id, require_admin=True)
        self.db.delete(dependent)
        self.commit("delete dependent")
        self.log_info("Dependent deleted", employee_id=dependent.employee_id, dependent_id=dependent_id)

    @staticmethod
    def _values(payload: DependentCreate):
        data = payload.model_dump()
        data["relationship"] = payload.relationship.value
        data["gender"] = payload.gender.value
        return data
