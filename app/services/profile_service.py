"""
Photo and address: one row per employee, written with a singular upsert keyed by employee_id.
"""
from typing import Optional

from app.models.employee import Employee
from app.models.employee_profile import EmployeeAddress, EmployeePhoto
from app.schemas.profile import AddressUpsert, PhotoUpsert
from app.services.base import BaseService


class ProfileService(BaseService):

    def _owner(self, employee_id: int) -> Employee:
        return self.load(Employee, employee_id, require_owner_field="id")

    def get_photo(self, employee_id: int) -> Optional[EmployeePhoto]:
        self._owner(employee_id)
        return self.db.query(EmployeePhoto).filter(EmployeePhoto.employee_id == employee_id).first()

    def save_photo(self, employee_id: int, payload: PhotoUpsert):
        self._owner(employee_id)
        photo, created = self.upsert_by(
            EmployeePhoto,
            {"employee_id": employee_id},
            payload.model_dump(),
        )
        self.commit("save employee photo")
        self.db.refresh(photo)
        return photo, created

    def get_address(self, employee_id: int) -> Optional[EmployeeAddress]:
        self._owner(employee_id)
        return self.db.query(EmployeeAddress).filter(EmployeeAddress.employee_id == employee_id).first()

    def save_address(self, employee_id: int, payload: AddressUpsert):
        self._owner(employee_id)
        address, created = self.upsert_by(
            EmployeeAddress,
            {"employee_id": employee_id},
            payload.model_dump(),
        )
        self.commit("save employee address")
        self.db.refresh(address)
        return address, created
