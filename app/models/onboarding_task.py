from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
import enum
from app.core.config import settings
from app.database import Base


class OnboardingTaskCategory(str, enum.Enum):
    documentation = "documentation"
    training = "training"
    system_access = "system_access"
    equipment = "equipment"
    introduction = "introduction"
    other = "other"


class OnboardingTask(Base):
    """Per-company onboarding task template."""
    __tablename__ = "onboarding_tasks"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String, default=OnboardingTaskCategory.other.value, index=True)
    is_required = Column(Boolean, default=True, nullable=False)
    default_due_days = Column(Integer, default=settings.default_onboarding_due_days, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def resolve_company_id(self, db):
        return self.company_id
