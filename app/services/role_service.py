"""
Role aggregate writer.

A full Role update replaces each of the five child collections with exactly
the submitted set (delete all rows for the role, then insert the new ones).
The parent update and all five delete/insert pairs share one transaction:
if any step fails nothing is persisted and the caller gets InternalError.
"""
from typing import Any, Dict, Iterable, List, Type

from app.core.exceptions import ResourceConflict
from app.models.employee_role import EmployeeRole
from app.models.role import (
    Role,
    RoleBehavioralSkill,
    RoleComplementaryCourse,
    RoleCourse,
    RoleLanguage,
    RoleTechnicalSkill,
)
from app.models.team import Team
from app.schemas.role import RoleActiveUpdate, RolePayload
from app.services.base import BaseService

# payload attribute -> child model
ROLE_COLLECTIONS = (
    ("courses", RoleCourse),
    ("complementary_courses", RoleComplementaryCourse),
    ("technical_skills", RoleTechnicalSkill),
    ("behavioral_skills", RoleBehavioralSkill),
    ("languages", RoleLanguage),
)

CHILD_FIELDS = {name for name, _ in ROLE_COLLECTIONS}


class RoleService(BaseService):

    def list_roles(self, include_inactive: bool = False) -> List[Role]:
        query = self.db.query(Role).filter(Role.company_id == self.company_id)
        if not include_inactive:
            query = query.filter(Role.active.is_(True))
        return query.order_by(Role.title).all()

    def get_role(self, role_id: int) -> Role:
        return self.load(Role, role_id)

    def create_role(self, payload: RolePayload) -> Role:
        self._check_team(payload.team_id)
        role = Role(company_id=self.company_id, **self._scalar_fields(payload))
        with self.unit_of_work("create role"):
            self.db.add(role)
            self.db.flush()
            for attr, model in ROLE_COLLECTIONS:
                self._insert_children(model, role.id, self._child_rows(payload, attr))
        self.db.refresh(role)
        self.log_info("Role created", role_id=role.id)
        return role

    def update_role(self, role_id: int, payload: RolePayload) -> Role:
        role = self.load(Role, role_id, require_admin=True)
        self._check_team(payload.team_id)
        with self.unit_of_work("update role"):
            for field, value in self._scalar_fields(payload).items():
                setattr(role, field, value)
            self.db.flush()
            for attr, model in ROLE_COLLECTIONS:
                self._replace_collection(model, role.id, self._child_rows(payload, attr))
        self.db.refresh(role)
        self.log_info("Role updated", role_id=role.id)
        return role

    def set_active(self, role_id: int, payload: RoleActiveUpdate) -> Role:
        role = self.load(Role, role_id, require_admin=True)
        role.active = payload.active
        self.commit("change role status")
        self.db.refresh(role)
        return role

    def delete_role(self, role_id: int) -> None:
        role = self.load(Role, role_id, require_admin=True)
        in_use = self.db.query(EmployeeRole.id).filter(EmployeeRole.role_id == role.id).first()
        if in_use:
            raise ResourceConflict("This role is part of an employee's role history and cannot be deleted")
        with self.unit_of_work("delete role"):
            for _, model in ROLE_COLLECTIONS:
                self.db.query(model).filter(model.role_id == role.id).delete(synchronize_session=False)
            self.db.delete(role)
        self.log_info("Role deleted", role_id=role_id)

    def _replace_collection(self, model: Type, role_id: int, rows: Iterable[Dict[str, Any]]) -> None:
        self.db.query(model).filter(model.role_id == role_id).delete(synchronize_session=False)
        self._insert_children(model, role_id, rows)

    def _insert_children(self, model: Type, role_id: int, rows: Iterable[Dict[str, Any]]) -> None:
        self.db.add_all([model(role_id=role_id, **row) for row in rows])
        self.db.flush()

    def _check_team(self, team_id) -> None:
        if team_id is not None:
            self.load(Team, team_id)

    @staticmethod
    def _scalar_fields(payload: RolePayload) -> Dict[str, Any]:
        data = payload.model_dump(exclude=CHILD_FIELDS)
        data["contract_type"] = payload.contract_type.value
        data["work_model"] = payload.work_model.value if payload.work_model else None
        return data

    @staticmethod
    def _child_rows(payload: RolePayload, attr: str) -> List[Dict[str, Any]]:
        return [item.model_dump() for item in getattr(payload, attr)]
