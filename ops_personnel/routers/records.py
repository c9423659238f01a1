"""
Per-employee records: evaluations, work issues (manager notes),
attendance (leave) and behaviour issues (observations).
Append-only: create and list.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from ops_personnel.routers.auth_deps import get_current_actor, get_personnel_service, require_manager
from ops_personnel.schemas.auth import Actor
from ops_personnel.schemas.personnel import (
    AttendanceCreate,
    BehaviourIssueCreate,
    EvaluationCreate,
    WorkIssueCreate,
)
from ops_personnel.schemas.records import (
    AttendanceRecord,
    EvaluationRecord,
    ObservationRecord,
    WorkIssueRecord,
)
from ops_personnel.services.personnel import PersonnelService

router = APIRouter(
    prefix="/employees/{employee_id}",
    tags=["employee records"]
)


# --- Evaluations ---
@router.post("/evaluations", response_model=EvaluationRecord, status_code=status.HTTP_201_CREATED)
def add_evaluation(
    employee_id: str,
    payload: EvaluationCreate,
    actor: Actor = Depends(require_manager()),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.add_evaluation(actor, employee_id, payload)


@router.get("/evaluations", response_model=List[EvaluationRecord])
def list_evaluations(
    employee_id: str,
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.list_records(actor, employee_id, "evaluations")


# --- Work issues ---
@router.post("/work-issues", response_model=WorkIssueRecord, status_code=status.HTTP_201_CREATED)
def add_work_issue(
    employee_id: str,
    payload: WorkIssueCreate,
    actor: Actor = Depends(require_manager()),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.add_work_issue(actor, employee_id, payload)


@router.get("/work-issues", response_model=List[WorkIssueRecord])
def list_work_issues(
    employee_id: str,
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.list_records(actor, employee_id, "work_issues")


# --- Attendance ---
@router.post("/attendance", response_model=AttendanceRecord, status_code=status.HTTP_201_CREATED)
def add_attendance(
    employee_id: str,
    payload: AttendanceCreate,
    actor: Actor = Depends(require_manager()),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.add_attendance(actor, employee_id, payload)


@router.get("/attendance", response_model=List[AttendanceRecord])
def list_attendance(
    employee_id: str,
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.list_records(actor, employee_id, "attendance_logs")


# --- Behaviour issues ---
@router.post("/behaviour-issues", response_model=ObservationRecord, status_code=status.HTTP_201_CREATED)
def add_behaviour_issue(
    employee_id: str,
    payload: BehaviourIssueCreate,
    actor: Actor = Depends(require_manager()),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.add_behaviour_issue(actor, employee_id, payload)


@router.get("/behaviour-issues", response_model=List[ObservationRecord])
def list_behaviour_issues(
    employee_id: str,
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    return service.list_records(actor, employee_id, "behaviour_issues")
