from fastapi import APIRouter
from ops_personnel.routers import auth, dashboard, departments, employees, records

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(records.router, tags=["Employee Records"])
api_router.include_router(departments.router, tags=["Departments"])
api_router.include_router(dashboard.router, tags=["Dashboard"])
