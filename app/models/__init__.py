# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    company, employee, document,
    onboarding_task, employee_onboarding,
    time_off, role, team, employee_profile,
    employee_dependent, employee_role,
)

# Explicit class exports for cleaner imports
from .company import Company
from .employee import Employee, EmployeeStatus
from .document import Document, DocumentStatus
from .onboarding_task import OnboardingTask, OnboardingTaskCategory
from .employee_onboarding import EmployeeOnboarding, OnboardingStatus
from .time_off import TimeOff, TimeOffStatus, TimeOffType
from .role import (
    Role, RoleCourse, RoleComplementaryCourse,
    RoleTechnicalSkill, RoleBehavioralSkill, RoleLanguage,
)
from .team import Team, TeamMember, Subteam, SubteamMember
from .employee_profile import EmployeePhoto, EmployeeAddress
from .employee_dependent import EmployeeDependent, DependentGender, DependentRelationship
from .employee_role import EmployeeRole

__all__ = [
    "Company",
    "Employee",
    "EmployeeStatus",
    "Document",
    "DocumentStatus",
    "OnboardingTask",
    "OnboardingTaskCategory",
    "EmployeeOnboarding",
    "OnboardingStatus",
    "TimeOff",
    "TimeOffStatus",
    "TimeOffType",
    "Role",
    "RoleCourse",
    "RoleComplementaryCourse",
    "RoleTechnicalSkill",
    "RoleBehavioralSkill",
    "RoleLanguage",
    "Team",
    "TeamMember",
    "Subteam",
    "SubteamMember",
    "EmployeePhoto",
    "EmployeeAddress",
    "EmployeeDependent",
    "DependentGender",
    "DependentRelationship",
    "EmployeeRole",
]
