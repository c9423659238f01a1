from sqlalchemy import Column, String, Date, Text, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ops_personnel.database import Base
from ops_personnel.models.user import _new_id


class WorkIssue(Base):
    """Manager note about an employee."""
    __tablename__ = "work_issues"

    id = Column(String(32), primary_key=True, default=_new_id)
    employee_id = Column(String(32), ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    # Author is kept by value so notes survive the author's removal
    author_id = Column(String(32), nullable=False)
    author_name = Column(String, nullable=False)
    title = Column(String, nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="work_issues")
