import pytest
import os
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["OPENROUTER_API_KEY"] = ""
os.environ["AI_KILL_SWITCH"] = "false"
os.environ.pop("BOOTSTRAP_ADMIN_EMAIL", None)
os.environ.pop("BOOTSTRAP_ADMIN_PASSWORD", None)

import ops_personnel.models  # noqa: F401
from ops_personnel.database import Base, get_db, get_session_factory
from ops_personnel.main import app
from ops_personnel.models.employee import Employee, EmployeeRole
from ops_personnel.models.user import User
from ops_personnel.core.init_system import seed_departments
from ops_personnel.services import auth as auth_service
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "Password123!"


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def session_factory(db_session):
    """Fresh sessions on the test connection, for code that opens its own."""
    return lambda: TestingSessionLocal(bind=db_session.bind)


@pytest.fixture(scope="function")
def departments(db_session):
    """The six initial ground-ops departments."""
    seed_departments(db_session)
    db_session.commit()
    return [
        "Ramp Operations",
        "Baggage Handling",
        "Passenger Services",
        "Fleet Maintenance",
        "Cargo Logistics",
        "HR & Admin",
    ]


@pytest.fixture(scope="function")
def make_employee(db_session, departments):
    """Factory for an employee profile with a confirmed login account."""
    def _make(name, department, role=EmployeeRole.EMPLOYEE, email=None, password=DEFAULT_PASSWORD, **fields):
        username = name.lower().replace(" ", ".")
        email = email or f"{username}@skyport.aero"
        employee = Employee(
            name=name,
            department=department,
            role=role.value if isinstance(role, EmployeeRole) else role,
            email=email,
            username=username,
            hire_date=fields.pop("hire_date", date(2020, 3, 1)),
            user=User(email=email, hashed_password=auth_service.get_password_hash(password)),
            **fields,
        )
        db_session.add(employee)
        db_session.commit()
        return employee
    return _make


@pytest.fixture(scope="function")
def admin(make_employee):
    return make_employee("Alex Admin", "HR & Admin", EmployeeRole.ADMIN)


@pytest.fixture(scope="function")
def manager(make_employee):
    return make_employee("Morgan Manager", "Ramp Operations", EmployeeRole.MANAGER)


@pytest.fixture(scope="function")
def employee(make_employee):
    return make_employee("Erin Employee", "Ramp Operations", EmployeeRole.EMPLOYEE)


@pytest.fixture(scope="function")
def other_employee(make_employee):
    return make_employee("Olly Other", "Baggage Handling", EmployeeRole.EMPLOYEE)


@pytest.fixture(scope="function")
def auth_headers(db_session):
    """Helper fixture to open a session and return bearer headers for an employee."""
    def _headers(employee):
        token = auth_service.open_session(db_session, employee)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture(scope="function")
def client(db_session, session_factory):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
