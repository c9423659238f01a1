"""
Employee profile.
`department` holds a Department name rather than a foreign key, so a
deleted department leaves the string in place instead of failing.
"""
import enum
from sqlalchemy import Column, String, Date, DateTime, Boolean, Integer, Text, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ops_personnel.database import Base
from ops_personnel.models.user import _new_id


class EmployeeRole(str, enum.Enum):
    """
    Access levels. Exactly three, no composition.

    - ADMIN: every record, department management, employee CRUD
    - MANAGER: own department, may add evaluations/notes/leave/observations
    - EMPLOYEE: self-service, own record only
    """
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    department = Column(String, nullable=False, index=True)
    job_title = Column(String, nullable=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    hire_date = Column(Date, nullable=True)
    profile_picture = Column(Text, nullable=True)  # data URL

    # Stored as plain string so a bad value surfaces as a misconfiguration instead of a load error
    role = Column(String, default=EmployeeRole.EMPLOYEE.value, nullable=False)

    # Baseline only; the live score comes from the latest evaluation
    overall_score = Column(Integer, default=80, nullable=False)

    user_id = Column(String(32), ForeignKey("users.id"), nullable=True, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="employee_profile", single_parent=True, cascade="all, delete-orphan")
    evaluations = relationship("Evaluation", back_populates="employee", cascade="all, delete-orphan")
    work_issues = relationship("WorkIssue", back_populates="employee", cascade="all, delete-orphan")
    attendance_logs = relationship("AttendanceLog", back_populates="employee", cascade="all, delete-orphan")
    behaviour_issues = relationship("BehaviourIssue", back_populates="employee", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Employee {self.username} ({self.role})>"
