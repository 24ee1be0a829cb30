from sqlalchemy import Column, Integer, Text, Date, DateTime, String, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from app.database import Base
from app.models.employee import company_of_employee


class OnboardingStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"


class EmployeeOnboarding(Base):
    """
    Assignment of an onboarding task to an employee.
    completed_at/completed_by are set iff status is completed; the store does not enforce it.
    """
    __tablename__ = "employee_onboarding"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("onboarding_tasks.id"), nullable=False, index=True)
    status = Column(String, default=OnboardingStatus.pending.value, nullable=False, index=True)
    due_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    completed_by = Column(Integer, ForeignKey("employees.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", foreign_keys=[employee_id], back_populates="onboardings")
    task = relationship("OnboardingTask")
    completed_by_employee = relationship("Employee", foreign_keys=[completed_by])

    @property
    def employee_name(self):
        return self.employee.full_name if self.employee else None

    @property
    def task_name(self):
        return self.task.name if self.task else None

    @property
    def task_category(self):
        return self.task.category if self.task else None

    def resolve_company_id(self, db):
        return company_of_employee(db, self.employee_id)
