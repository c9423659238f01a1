import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError

from ops_personnel.core.config import settings
from ops_personnel.database import SessionLocal
from ops_personnel.models.department import Department
from ops_personnel.models.employee import Employee, EmployeeRole
from ops_personnel.models.user import User
from ops_personnel.services import auth as auth_service

logger = logging.getLogger(__name__)


def seed_departments(db) -> int:
    """Insert the initial departments when none exist. Returns how many were added."""
    if db.query(Department).count() > 0:
        return 0
    for name in settings.initial_departments:
        db.add(Department(name=name))
    return len(settings.initial_departments)


def seed_admin(db) -> bool:
    """Create the bootstrap admin from the environment, once."""
    email = settings.bootstrap_admin_email
    password = settings.bootstrap_admin_password
    if not email or not password:
        return False
    email = email.strip().lower()
    if db.query(User).filter(User.email == email).first() is not None:
        return False

    department = settings.initial_departments[-1] if settings.initial_departments else "Unassigned"
    if db.get(Department, department) is None:
        db.add(Department(name=department))
    admin = Employee(
        name="System Admin",
        department=department,
        email=email,
        username=email.split("@", 1)[0],
        role=EmployeeRole.ADMIN.value,
        active=True,
        hire_date=date.today(),
        overall_score=settings.default_overall_score,
        user=User(email=email, hashed_password=auth_service.get_password_hash(password)),
    )
    db.add(admin)
    return True


def init_system_data():
    """
    Seed a fresh database: the initial departments and, when configured,
    a bootstrap admin account.
    """
    db = SessionLocal()
    try:
        added = seed_departments(db)
        db.flush()
        created_admin = seed_admin(db)
        db.commit()
        if added:
            logger.info(f"✓ Seeded {added} initial departments")
        if created_admin:
            logger.info(f"✓ Created bootstrap admin {settings.bootstrap_admin_email}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error during system initialization: {e}", exc_info=True)
        raise
    finally:
        db.close()
