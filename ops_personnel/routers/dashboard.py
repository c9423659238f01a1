from fastapi import APIRouter, Depends

from ops_personnel.routers.auth_deps import get_current_actor, get_personnel_service
from ops_personnel.schemas.auth import Actor
from ops_personnel.schemas.personnel import DashboardSummary
from ops_personnel.services.personnel import PersonnelService

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"]
)


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(
    actor: Actor = Depends(get_current_actor),
    service: PersonnelService = Depends(get_personnel_service),
):
    """Headcount, score bands and department split over the records the caller can see."""
    return service.dashboard(actor)
