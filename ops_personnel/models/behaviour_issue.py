import enum
from sqlalchemy import Column, String, Date, Text, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ops_personnel.database import Base
from ops_personnel.models.user import _new_id


class ObservationStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class BehaviourIssue(Base):
    """Behavioural observation. Status is fixed at creation."""
    __tablename__ = "behaviour_issues"

    id = Column(String(32), primary_key=True, default=_new_id)
    employee_id = Column(String(32), ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String, default=ObservationStatus.OPEN.value, nullable=False)
    action_plan = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="behaviour_issues")
