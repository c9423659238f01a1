from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ops_personnel.core.schemas import ApiResponse
from ops_personnel.routers.auth_deps import get_current_actor, get_personnel_service, require_admin
from ops_personnel.schemas.auth import Actor
from ops_personnel.schemas.personnel import DepartmentCreate, DepartmentRename
from ops_personnel.schemas.records import DepartmentRecord
from ops_personnel.services.personnel import PersonnelService

router = APIRouter(
    prefix="/departments",
    tags=["departments"]
)


@router.get("", response_model=List[DepartmentRecord])
def list_departments(
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    return [{"name": name} for name in service.list_departments()]


@router.post("", response_model=DepartmentRecord, status_code=status.HTTP_201_CREATED)
def create_department(
    payload: DepartmentCreate,
    actor: Actor = Depends(require_admin()),
    service: PersonnelService = Depends(get_personnel_service),
):
    return {"name": service.create_department(payload.name)}


@router.put("/{name}")
def rename_department(
    name: str,
    payload: DepartmentRename,
    actor: Actor = Depends(require_admin()),
    service: PersonnelService = Depends(get_personnel_service),
):
    """Rename a department; every employee in it moves with it."""
    result = service.rename_department(name, payload.name)
    return ApiResponse.ok(
        {"name": result["name"]}, metadata={"employeesMoved": result["employees_moved"]}
    ).to_dict()


@router.delete("/{name}")
def delete_department(
    name: str,
    reassign_to: Optional[str] = Query(None, alias="reassignTo"),
    actor: Actor = Depends(require_admin()),
    service: PersonnelService = Depends(get_personnel_service),
):
    """
    Delete a department. Refused with 409 while employees still belong to it,
    unless `reassignTo` names the department they should move to.
    """
    result = service.delete_department(name, reassign_to)
    return ApiResponse.ok(
        {"name": result["name"], "reassignedTo": result["reassigned_to"]},
        metadata={"employeesMoved": result["employees_moved"]},
    ).to_dict()
