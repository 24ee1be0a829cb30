from sqlalchemy import Column, Integer, String, Date, Float, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.employee import company_of_employee
import enum

class TimeOffStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class TimeOffType(str, enum.Enum):
    VACATION = "vacation"
    SICK_LEAVE = "sick_leave"
    MATERNITY_LEAVE = "maternity_leave"
    PATERNITY_LEAVE = "paternity_leave"
    BEREAVEMENT = "bereavement"
    PERSONAL = "personal"
    OTHER = "other"

class TimeOff(Base):
    __tablename__ = "time_off"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    type = Column(String, nullable=False, index=True)
    status = Column(String, default=TimeOffStatus.PENDING.value, nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_days = Column(Float, nullable=False)
    reason = Column(String, nullable=True)
    # Stamped by both terminal states
    approved_by = Column(Integer, ForeignKey("employees.id"), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", foreign_keys=[employee_id], back_populates="time_offs")
    approver = relationship("Employee", foreign_keys=[approved_by])

    @property
    def employee_name(self):
        return self.employee.full_name if self.employee else None

    @property
    def approver_name(self):
        return self.approver.full_name if self.approver else None

    def resolve_company_id(self, db):
        return company_of_employee(db, self.employee_id)
