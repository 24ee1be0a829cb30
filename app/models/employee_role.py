"""
Role history of an employee.
Each row is one period in a Role; at most one row per employee is current.
"""
from sqlalchemy import Column, Integer, Text, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.employee import company_of_employee


class EmployeeRole(Base):
    __tablename__ = "employee_roles"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, default=False, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", back_populates="role_assignments")
    role = relationship("Role", back_populates="assignments")

    @property
    def role_title(self):
        return self.role.title if self.role else None

    @property
    def employee_name(self):
        return self.employee.full_name if self.employee else None

    def resolve_company_id(self, db):
        return company_of_employee(db, self.employee_id)

    def __repr__(self):
        return f"<EmployeeRole employee={self.employee_id} role={self.role_id} current={self.is_current}>"
