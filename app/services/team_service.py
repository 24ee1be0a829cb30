from typing import List, Optional, Tuple

from sqlalchemy.orm import joinedload

from app.core.exceptions import InvalidStateTransition, ResourceConflict, ResourceNotFound
from app.models.employee import Employee
from app.models.role import Role
from app.models.team import Subteam, SubteamMember, Team, TeamMember
from app.schemas.team import MemberAdd, SubteamCreate, SubteamUpdate, TeamCreate, TeamUpdate
from app.services.base import BaseService
from app.services.workflow import recognized_changes


class TeamService(BaseService):
    """
    Teams, their subteams and memberships.
    Reads are open to every employee of the company; writes are admin only.
    """

    # --- Teams ----------------------------------------------------------

    def list_teams(self) -> List[Team]:
        return (
            self.db.query(Team)
            .options(joinedload(Team.members))
            .filter(Team.company_id == self.company_id)
            .order_by(Team.name)
            .all()
        )

    def get_team(self, team_id: int) -> Team:
        return self.load(Team, team_id)

    def save_team(self, payload: TeamCreate) -> Tuple[Team, bool]:
        """Upsert on (company, name). Returns (team, created)."""
        self._check_manager(payload.manager_id)
        team, created = self.upsert_by(Team, {"company_id": self.company_id, "name": payload.name}, payload.model_dump())
        self.commit("save team")
        self.db.refresh(team)
        self.log_info("Team saved", team_id=team.id)
        return team, created

    def update_team(self, team_id: int, payload: TeamUpdate) -> Team:
        team = self.load(Team, team_id, require_admin=True)
        changes = recognized_changes(payload, "team", required=("name",))
        self._check_manager(changes.get("manager_id"))
        for field, value in changes.items():
            setattr(team, field, value)
        self.commit("update team")
        self.db.refresh(team)
        return team

    def delete_team(self, team_id: int) -> None:
        team = self.load(Team, team_id, require_admin=True)
        self.db.query(Role).filter(Role.team_id == team.id).update({Role.team_id: None}, synchronize_session=False)
        self.db.delete(team)
        self.commit("delete team")
        self.log_info("Team deleted", team_id=team_id)

    # --- Team members ---------------------------------------------------

    def list_members(self, team_id: int) -> List[TeamMember]:
        team = self.load(Team, team_id)
        return (
            self.db.query(TeamMember)
            .options(joinedload(TeamMember.employee))
            .filter(TeamMember.team_id == team.id)
            .order_by(TeamMember.joined_at, TeamMember.id)
            .all()
        )

    def add_member(self, team_id: int, payload: MemberAdd) -> TeamMember:
        team = self.load(Team, team_id, require_admin=True)
        # Colleagues from another company look exactly like missing employees
        employee = self.load(Employee, payload.employee_id)
        if self._team_member(team.id, employee.id) is not None:
            raise ResourceConflict("Employee is already a member of this team")

        member = TeamMember(team_id=team.id, employee_id=employee.id)
        self.db.add(member)
        self.commit("add team member")
        self.db.refresh(member)
        self.log_info("Team member added", team_id=team.id, employee_id=employee.id)
        return member

    def remove_member(self, team_id: int, employee_id: int) -> None:
        team = self.load(Team, team_id, require_admin=True)
        member = self._team_member(team.id, employee_id)
        if member is None:
            raise ResourceNotFound("Team member not found")

        # Leaving a team also drops the employee from its subteams
        subteam_ids = [s.id for s in team.subteams]
        if subteam_ids:
            (
                self.db.query(SubteamMember)
                .filter(SubteamMember.subteam_id.in_(subteam_ids), SubteamMember.employee_id == employee_id)
                .delete(synchronize_session=False)
            )
        self.db.delete(member)
        self.commit("remove team member")
        self.log_info("Team member removed", team_id=team.id, employee_id=employee_id)

    # --- Subteams -------------------------------------------------------

    def list_subteams(self, team_id: int) -> List[Subteam]:
        team = self.load(Team, team_id)
        return self.db.query(Subteam).filter(Subteam.team_id == team.id).order_by(Subteam.name).all()

    def get_subteam(self, team_id: int, subteam_id: int, require_admin: bool = False) -> Subteam:
        subteam = self.load(Subteam, subteam_id, require_admin=require_admin)
        if subteam.team_id != team_id:
            raise ResourceNotFound("Subteam not found")
        return subteam

    def save_subteam(self, team_id: int, payload: SubteamCreate) -> Tuple[Subteam, bool]:
        team = self.load(Team, team_id, require_admin=True)
        self._check_manager(payload.manager_id)
        subteam, created = self.upsert_by(Subteam, {"team_id": team.id, "name": payload.name}, payload.model_dump())
        self.commit("save subteam")
        self.db.refresh(subteam)
        self.log_info("Subteam saved", team_id=team.id, subteam_id=subteam.id)
        return subteam, created

    def update_subteam(self, team_id: int, subteam_id: int, payload: SubteamUpdate) -> Subteam:
        subteam = self.get_subteam(team_id, subteam_id, require_admin=True)
        changes = recognized_changes(payload, "subteam", required=("name",))
        self._check_manager(changes.get("manager_id"))
        for field, value in changes.items():
            setattr(subteam, field, value)
        self.commit("update subteam")
        self.db.refresh(subteam)
        return subteam

    def delete_subteam(self, team_id: int, subteam_id: int) -> None:
        subteam = self.get_subteam(team_id, subteam_id, require_admin=True)
        self.db.delete(subteam)
        self.commit("delete subteam")

    # --- Subteam members ------------------------------------------------

    def add_subteam_member(self, team_id: int, subteam_id: int, payload: MemberAdd) -> SubteamMember:
        subteam = self.get_subteam(team_id, subteam_id, require_admin=True)
        employee = self.load(Employee, payload.employee_id)
        if self._team_member(subteam.team_id, employee.id) is None:
            raise InvalidStateTransition(
                "Employee must be a member of the parent team first",
                details={"team_id": subteam.team_id, "employee_id": employee.id},
            )
        existing = (
            self.db.query(SubteamMember)
            .filter(SubteamMember.subteam_id == subteam.id, SubteamMember.employee_id == employee.id)
            .first()
        )
        if existing is not None:
            raise ResourceConflict("Employee is already a member of this subteam")

        member = SubteamMember(subteam_id=subteam.id, employee_id=employee.id)
        self.db.add(member)
        self.commit("add subteam member")
        self.db.refresh(member)
        return member

    def remove_subteam_member(self, team_id: int, subteam_id: int, employee_id: int) -> None:
        subteam = self.get_subteam(team_id, subteam_id, require_admin=True)
        member = (
            self.db.query(SubteamMember)
            .filter(SubteamMember.subteam_id == subteam.id, SubteamMember.employee_id == employee_id)
            .first()
        )
        if member is None:
            raise ResourceNotFound("Subteam member not found")
        self.db.delete(member)
        self.commit("remove subteam member")

    def _team_member(self, team_id: int, employee_id: int) -> Optional[TeamMember]:
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.team_id == team_id, TeamMember.employee_id == employee_id)
            .first()
        )

    def _check_manager(self, manager_id: Optional[int]) -> None:
        if manager_id is not None:
            self.load(Employee, manager_id)
