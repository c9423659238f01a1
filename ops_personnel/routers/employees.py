from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse

from ops_personnel.core.schemas import ApiResponse
from ops_personnel.routers.auth_deps import get_current_actor, get_personnel_service, require_admin
from ops_personnel.schemas.auth import Actor
from ops_personnel.schemas.personnel import EmployeeCreate, EmployeeDetail, EmployeeUpdate, InsightResult
from ops_personnel.schemas.records import EmployeeRecord
from ops_personnel.services.personnel import PersonnelService

router = APIRouter(
    prefix="/employees",
    tags=["employees"]
)


@router.get("", response_model=List[EmployeeRecord])
def list_employees(
    search: Optional[str] = Query(None, description="Case-insensitive match on name or department"),
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.list_employees(actor, search)


@router.post("", response_model=EmployeeRecord, status_code=status.HTTP_201_CREATED)
def create_employee(
    payload: EmployeeCreate,
    actor: Actor = Depends(require_admin()),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.create_employee(payload)


@router.get("/{employee_id}", response_model=EmployeeDetail)
def get_employee(
    employee_id: str,
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.get_employee_detail(actor, employee_id)


@router.put("/{employee_id}", response_model=EmployeeRecord)
def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    actor: Actor = Depends(require_admin()),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.update_employee(employee_id, payload)


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: str,
    actor: Actor = Depends(require_admin()),
    service: PersonnelService = Depends(get_personnel_service),
):
    service.delete_employee(employee_id)
    return ApiResponse.ok({"id": employee_id}).to_dict()


@router.get("/{employee_id}/report", response_class=HTMLResponse)
def employee_report(
    employee_id: str,
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    return HTMLResponse(service.employee_report(actor, employee_id))


@router.post("/{employee_id}/insight", response_model=InsightResult)
def employee_insight(
    employee_id: str,
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    # Failures come back as text starting with "ERROR:", not as an HTTP error
    return {"employee_id": employee_id, "insight": service.employee_insight(actor, employee_id)}
