"""
Team Model with Subteam Support.
Subteams hang off a parent team and inherit its company.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    manager_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    members = relationship("TeamMember", back_populates="team", cascade="all, delete-orphan")
    subteams = relationship("Subteam", back_populates="team", cascade="all, delete-orphan")
    manager = relationship("Employee", foreign_keys=[manager_id])

    @property
    def members_count(self):
        return len(self.members)

    def resolve_company_id(self, db):
        return self.company_id

    def __repr__(self):
        return f"<Team {self.id}: {self.name}>"


class TeamMember(Base):
    __tablename__ = "team_members"
    __table_args__ = (UniqueConstraint("team_id", "employee_id", name="uq_team_member"),)

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    team = relationship("Team", back_populates="members")
    employee = relationship("Employee", back_populates="team_memberships")

    @property
    def full_name(self):
        return self.employee.full_name if self.employee else None

    @property
    def email(self):
        return self.employee.email if self.employee else None

    def resolve_company_id(self, db):
        team = db.get(Team, self.team_id)
        return team.company_id if team else None


class Subteam(Base):
    __tablename__ = "subteams"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    manager_id = Column(Integer, ForeignKey("employees.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    team = relationship("Team", back_populates="subteams")
    members = relationship("SubteamMember", back_populates="subteam", cascade="all, delete-orphan")

    @property
    def members_count(self):
        return len(self.members)

    def resolve_company_id(self, db):
        # Never trust a denormalized company id: walk subteam -> team -> company
        team = db.get(Team, self.team_id)
        return team.company_id if team else None


class SubteamMember(Base):
    __tablename__ = "subteam_members"
    __table_args__ = (UniqueConstraint("subteam_id", "employee_id", name="uq_subteam_member"),)

    id = Column(Integer, primary_key=True, index=True)
    subteam_id = Column(Integer, ForeignKey("subteams.id"), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    subteam = relationship("Subteam", back_populates="members")
    employee = relationship("Employee", back_populates="subteam_memberships")

    @property
    def full_name(self):
        return self.employee.full_name if self.employee else None

    @property
    def email(self):
        return self.employee.email if self.employee else None

    def resolve_company_id(self, db):
        subteam = db.get(Subteam, self.subteam_id)
        return subteam.resolve_company_id(db) if subteam else None
