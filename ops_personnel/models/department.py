from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from ops_personnel.database import Base


class Department(Base):
    __tablename__ = "departments"

    # The name is the key; employees reference departments by name
    name = Column(String, primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Department {self.name}>"
