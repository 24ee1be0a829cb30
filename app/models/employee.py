"""
Employee Model.
The principal inside a tenant; also the owner of most self-service rows.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from app.database import Base


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "active"
    VACATION = "vacation"
    TERMINATED = "terminated"
    MATERNITY_LEAVE = "maternity_leave"
    SICK_LEAVE = "sick_leave"
    OTHER_LEAVE = "other_leave"


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)

    # Subject of the identity provider's credential; empty until the invite is accepted
    user_id = Column(String, unique=True, index=True, nullable=True)

    full_name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False, index=True)
    position = Column(String, nullable=True)
    department = Column(String, nullable=True, index=True)
    hire_date = Column(Date, nullable=True)

    is_admin = Column(Boolean, default=False, nullable=False)
    status = Column(String, default=EmployeeStatus.ACTIVE.value, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    company = relationship("Company", back_populates="employees")

    # Dependent rows are removed together with the employee
    documents = relationship("Document", back_populates="employee", cascade="all, delete-orphan")
    onboardings = relationship(
        "EmployeeOnboarding",
        foreign_keys="[EmployeeOnboarding.employee_id]",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    time_offs = relationship(
        "TimeOff",
        foreign_keys="[TimeOff.employee_id]",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    photo = relationship("EmployeePhoto", back_populates="employee", uselist=False, cascade="all, delete-orphan")
    address = relationship("EmployeeAddress", back_populates="employee", uselist=False, cascade="all, delete-orphan")
    team_memberships = relationship("TeamMember", back_populates="employee", cascade="all, delete-orphan")
    subteam_memberships = relationship("SubteamMember", back_populates="employee", cascade="all, delete-orphan")
    dependents = relationship(
        "EmployeeDependent",
        order_by="EmployeeDependent.full_name",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    role_assignments = relationship("EmployeeRole", back_populates="employee", cascade="all, delete-orphan")

    def resolve_company_id(self, db):
        return self.company_id

    def __repr__(self):
        return f"<Employee {self.id} ({self.email})>"


def company_of_employee(db, employee_id):
    """Company id of an employee row, fetched from the store; None if the row is gone."""
    if employee_id is None:
        return None
    employee = db.get(Employee, employee_id)
    return employee.company_id if employee else None
