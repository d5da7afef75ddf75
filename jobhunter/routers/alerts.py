import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from jobhunter.database import get_db
from jobhunter.dependencies import AuthenticatedUser, get_current_user, require_cron_secret
from jobhunter.repos.alert_repo import (
    create as create_alert,
    delete as delete_alert,
    list_for_user,
    toggle_active,
    update as update_alert,
)
from jobhunter.repos.profile_repo import get_or_create as ensure_profile
from jobhunter.schemas.alert import DispatchSummary, JobAlertCreate, JobAlertResponse, JobAlertUpdate
from jobhunter.services.alert_dispatch import AlertDispatchNotConfigured, run_dispatch
from jobhunter.services.alert_scheduler import get_status, start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=list[JobAlertResponse])
def list_alerts(
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return list_for_user(db, user.id)


@router.post("", response_model=JobAlertResponse, status_code=status.HTTP_201_CREATED)
def add_alert(
    data: JobAlertCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    ensure_profile(db, user.id, user.email)
    alert = create_alert(db, user.id, data.model_dump())
    logger.info("Created alert %s for user %s", alert.id, user.id)
    return alert


@router.post("/dispatch", response_model=DispatchSummary)
def dispatch_alerts(
    db: Session = Depends(get_db),
    _cron=Depends(require_cron_secret),
):
    """Batch trigger for external schedulers (cron). Authenticated by shared secret."""
    try:
        return run_dispatch(db)
    except AlertDispatchNotConfigured as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e


@router.get("/scheduler")
def scheduler_status(_cron=Depends(require_cron_secret)):
    return get_status()


@router.post("/scheduler/start")
def scheduler_start(_cron=Depends(require_cron_secret)):
    ok, message = start_scheduler()
    if not ok:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)
    return {"message": message, **get_status()}


@router.post("/scheduler/stop")
def scheduler_stop(_cron=Depends(require_cron_secret)):
    ok, message = stop_scheduler()
    if not ok:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)
    return {"message": message, **get_status()}


@router.put("/{alert_id}", response_model=JobAlertResponse)
def edit_alert(
    alert_id: str,
    data: JobAlertUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    alert = update_alert(db, alert_id, user.id, data.model_dump(exclude_unset=True))
    if not alert:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Alert not found")
    return alert


@router.post("/{alert_id}/toggle", response_model=JobAlertResponse)
def toggle_alert(
    alert_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    alert = toggle_active(db, alert_id, user.id)
    if not alert:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Alert not found")
    logger.info("Alert %s active=%s for user %s", alert_id, alert.is_active, user.id)
    return alert


@router.delete("/{alert_id}")
def remove_alert(
    alert_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    if not delete_alert(db, alert_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Alert not found")
    return {"message": "Alert deleted", "id": alert_id}
