import enum
from sqlalchemy import Column, Integer, String, Date, Text, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ops_personnel.database import Base
from ops_personnel.models.user import _new_id


class EvaluationRating(str, enum.Enum):
    EXCEEDS = "Exceeds"
    MEETS = "Meets"
    BELOW = "Below"


class Evaluation(Base):
    __tablename__ = "evaluations"

    id = Column(String(32), primary_key=True, default=_new_id)
    employee_id = Column(String(32), ForeignKey("employees.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    score = Column(Integer, nullable=False)  # 0-100
    summary = Column(Text, nullable=True)
    rating = Column(String, nullable=False)  # independent of score
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="evaluations")
