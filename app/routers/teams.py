from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.schemas import respond
from app.core.tenancy import TenantContext
from app.database import get_db
from app.dependencies import require_admin, require_authenticated
from app.schemas.team import (
    MemberAdd,
    MemberResponse,
    SubteamCreate,
    SubteamResponse,
    SubteamUpdate,
    TeamCreate,
    TeamDetailResponse,
    TeamResponse,
    TeamUpdate,
)
from app.services.team_service import TeamService

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("")
def list_teams(
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    teams = TeamService(db, context).list_teams()
    return respond([TeamResponse.model_validate(t) for t in teams])


@router.post("")
def save_team(
    payload: TeamCreate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a team, or update the existing team with the same name."""
    team, created = TeamService(db, context).save_team(payload)
    return respond(
        TeamResponse.model_validate(team),
        message="Team created" if created else "Team updated",
        status=201 if created else 200,
    )


@router.get("/{team_id}")
def get_team(
    team_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    team = TeamService(db, context).get_team(team_id)
    return respond(TeamDetailResponse.model_validate(team))


@router.patch("/{team_id}")
def update_team(
    team_id: int,
    payload: TeamUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    team = TeamService(db, context).update_team(team_id, payload)
    return respond(TeamResponse.model_validate(team), message="Team updated")


@router.delete("/{team_id}")
def delete_team(
    team_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    TeamService(db, context).delete_team(team_id)
    return respond(message="Team deleted")


# --- Members ------------------------------------------------------------

@router.get("/{team_id}/members")
def list_members(
    team_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    members = TeamService(db, context).list_members(team_id)
    return respond([MemberResponse.model_validate(m) for m in members])


@router.post("/{team_id}/members")
def add_member(
    team_id: int,
    payload: MemberAdd,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    member = TeamService(db, context).add_member(team_id, payload)
    return respond(MemberResponse.model_validate(member), message="Member added", status=201)


@router.delete("/{team_id}/members/{employee_id}")
def remove_member(
    team_id: int,
    employee_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    TeamService(db, context).remove_member(team_id, employee_id)
    return respond(message="Member removed")


# --- Subteams -----------------------------------------------------------

@router.get("/{team_id}/subteams")
def list_subteams(
    team_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    subteams = TeamService(db, context).list_subteams(team_id)
    return respond([SubteamResponse.model_validate(s) for s in subteams])


@router.post("/{team_id}/subteams")
def save_subteam(
    team_id: int,
    payload: SubteamCreate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    subteam, created = TeamService(db, context).save_subteam(team_id, payload)
    return respond(
        SubteamResponse.model_validate(subteam),
        message="Subteam created" if created else "Subteam updated",
        status=201 if created else 200,
    )


@router.get("/{team_id}/subteams/{subteam_id}")
def get_subteam(
    team_id: int,
    subteam_id: int,
    context: TenantContext = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    subteam = TeamService(db, context).get_subteam(team_id, subteam_id)
    data = SubteamResponse.model_validate(subteam).model_dump(mode="json")
    data["members"] = [MemberResponse.model_validate(m).model_dump(mode="json") for m in subteam.members]
    return respond(data)


@router.patch("/{team_id}/subteams/{subteam_id}")
def update_subteam(
    team_id: int,
    subteam_id: int,
    payload: SubteamUpdate,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    subteam = TeamService(db, context).update_subteam(team_id, subteam_id, payload)
    return respond(SubteamResponse.model_validate(subteam), message="Subteam updated")


@router.delete("/{team_id}/subteams/{subteam_id}")
def delete_subteam(
    team_id: int,
    subteam_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    TeamService(db, context).delete_subteam(team_id, subteam_id)
    return respond(message="Subteam deleted")


@router.post("/{team_id}/subteams/{subteam_id}/members")
def add_subteam_member(
    team_id: int,
    subteam_id: int,
    payload: MemberAdd,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    member = TeamService(db, context).add_subteam_member(team_id, subteam_id, payload)
    return respond(MemberResponse.model_validate(member), message="Member added", status=201)


@router.delete("/{team_id}/subteams/{subteam_id}/members/{employee_id}")
def remove_subteam_member(
    team_id: int,
    subteam_id: int,
    employee_id: int,
    context: TenantContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    TeamService(db, context).remove_subteam_member(team_id, subteam_id, employee_id)
    return respond(message="Member removed")
