"""
Employee dependents (children and other legal dependents).
"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, ForeignKey
from sqlalchemy import orm
from sqlalchemy.sql import func
import enum
from app.database import Base
from app.models.employee import company_of_employee


class DependentRelationship(str, enum.Enum):
    child = "child"
    stepchild = "stepchild"
    foster_child = "foster_child"
    legal_ward = "legal_ward"
    other = "other"


class DependentGender(str, enum.Enum):
    male = "male"
    female = "female"
    other = "other"


class EmployeeDependent(Base):
    __tablename__ = "employee_dependents"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)

    full_name = Column(String, nullable=False)
    cpf = Column(String, nullable=True)
    birth_date = Column(Date, nullable=False)
    # Column name shadows sqlalchemy.orm.relationship, hence orm.relationship below
    relationship = Column(String, nullable=False)
    gender = Column(String, nullable=False)
    birth_certificate_number = Column(String, nullable=True)
    has_disability = Column(Boolean, default=False, nullable=False)
    is_student = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = orm.relationship("Employee", back_populates="dependents")

    def resolve_company_id(self, db):
        return company_of_employee(db, self.employee_id)

    def __repr__(self):
        return f"<EmployeeDependent {self.id} of employee {self.employee_id}>"
