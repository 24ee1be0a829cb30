"""
Role aggregate.
A Role owns five child collections that are always replaced wholesale.
"""
from sqlalchemy import Column, Integer, String, Text, Float, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from app.database import Base


class SkillLevel(str, enum.Enum):
    basic = "basic"
    intermediate = "intermediate"
    advanced = "advanced"
    fluent = "fluent"


class ContractType(str, enum.Enum):
    clt = "clt"
    apprentice = "apprentice"
    intern = "intern"
    contractor = "contractor"
    outsourced = "outsourced"
    temporary = "temporary"
    partner = "partner"
    intermittent = "intermittent"


class WorkModel(str, enum.Enum):
    remote = "remote"
    hybrid = "hybrid"
    on_site = "on_site"


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=True)

    title = Column(String, nullable=False, index=True)
    contract_type = Column(String, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    description = Column(Text, nullable=True)
    salary = Column(Float, nullable=True)
    level = Column(String, nullable=True)
    seniority_level = Column(String, nullable=True)
    work_model = Column(String, nullable=True)
    required_requirements = Column(Text, nullable=True)
    desired_requirements = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    team = relationship("Team")
    courses = relationship("RoleCourse", order_by="RoleCourse.id", cascade="all, delete-orphan")
    complementary_courses = relationship("RoleComplementaryCourse", order_by="RoleComplementaryCourse.id", cascade="all, delete-orphan")
    technical_skills = relationship("RoleTechnicalSkill", order_by="RoleTechnicalSkill.id", cascade="all, delete-orphan")
    behavioral_skills = relationship("RoleBehavioralSkill", order_by="RoleBehavioralSkill.id", cascade="all, delete-orphan")
    languages = relationship("RoleLanguage", order_by="RoleLanguage.id", cascade="all, delete-orphan")
    assignments = relationship("EmployeeRole", back_populates="role")

    @property
    def team_name(self):
        return self.team.name if self.team else None

    @property
    def employees_count(self):
        return sum(1 for assignment in self.assignments if assignment.is_current)

    def resolve_company_id(self, db):
        return self.company_id

    def __repr__(self):
        return f"<Role {self.id}: {self.title}>"


class RoleCourse(Base):
    __tablename__ = "role_courses"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    is_required = Column(Boolean, default=False, nullable=False)


class RoleComplementaryCourse(Base):
    __tablename__ = "role_complementary_courses"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    name = Column(String, nullable=False)


class RoleTechnicalSkill(Base):
    __tablename__ = "role_technical_skills"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    level = Column(String, nullable=True)


class RoleBehavioralSkill(Base):
    __tablename__ = "role_behavioral_skills"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    level = Column(String, nullable=True)


class RoleLanguage(Base):
    __tablename__ = "role_languages"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    level = Column(String, nullable=True)
    is_required = Column(Boolean, default=False, nullable=False)
