import enum
from sqlalchemy import Column, String, Date, Float, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ops_personnel.database import Base
from ops_personnel.models.user import _new_id


class LeaveType(str, enum.Enum):
    VACATION = "vacation"
    SICK = "sick"
    ABSENCE = "absence"


class AttendanceLog(Base):
    __tablename__ = "attendance_logs"

    id = Column(String(32), primary_key=True, default=_new_id)
    employee_id = Column(String(32), ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False, index=True)
    duration = Column(Float, nullable=False)  # days, half-day steps
    comment = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", back_populates="attendance_logs")
