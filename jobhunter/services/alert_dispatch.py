"""
Batch job behind job alerts: find due alerts, search for fresh listings and
email a digest through Resend. Each alert is processed in isolation.
"""
import html
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import requests
from sqlalchemy.orm import Session

from jobhunter.config import settings
from jobhunter.repos import alert_repo, profile_repo
from jobhunter.schemas.job import JobListing, JobSearchFilters
from jobhunter.services import job_source

logger = logging.getLogger(__name__)

FREQUENCY_INTERVALS = {
    "daily": timedelta(hours=24),
    "weekly": timedelta(days=7),
}
DESCRIPTION_PREVIEW_CHARS = 200


class AlertDeliveryError(RuntimeError):
    """The email provider rejected or failed the send."""


class AlertDispatchNotConfigured(RuntimeError):
    pass


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def should_send(alert: Any, now: datetime) -> bool:
    if not alert.is_active:
        return False
    interval = FREQUENCY_INTERVALS.get(alert.notification_frequency)
    if interval is None:
        return False
    if alert.last_sent_at is None:
        return True
    return _aware(now) - _aware(alert.last_sent_at) >= interval


def alert_filters(alert: Any) -> JobSearchFilters:
    return JobSearchFilters(
        query=" ".join(k.strip() for k in (alert.keywords or []) if k and k.strip()),
        location=alert.location or "",
        radius=0,
        remote_only=bool(alert.remote_only),
        salary_min=alert.min_salary or None,
    )


def render_digest(user_name: str, alert_title: str, jobs: list[JobListing]) -> str:
    cards = []
    for job in jobs:
        preview = job.description[:DESCRIPTION_PREVIEW_CHARS]
        cards.append(
            '<div style="background: #f8f9fa; padding: 20px; margin: 15px 0; border-radius: 12px; '
            'border-left: 4px solid #3b82f6;">'
            f'<h3 style="margin: 0 0 8px 0; font-size: 18px; color: #1a1a1a;">{html.escape(job.title)}</h3>'
            f'<p style="margin: 4px 0; color: #666; font-size: 14px;">{html.escape(job.company)}</p>'
            f'<p style="margin: 4px 0; color: #10b981; font-weight: bold; font-size: 14px;">{html.escape(job.salary_range)}</p>'
            f'<p style="margin: 12px 0; color: #444; font-size: 14px; line-height: 1.5;">{html.escape(preview)}...</p>'
            f'<a href="{html.escape(job.job_url or "", quote=True)}" style="display: inline-block; background: #3b82f6; '
            'color: white; padding: 10px 24px; text-decoration: none; border-radius: 8px; font-weight: 600;">Apply Now</a>'
            "</div>"
        )
    base = settings.app_base_url.rstrip("/")
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\"></head>"
        "<body style=\"font-family: Arial, sans-serif; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;\">"
        "<h1 style=\"color: #3b82f6; text-align: center;\">New Job Matches</h1>"
        f"<p>Hi {html.escape(user_name)},</p>"
        f"<p>We found <strong>{len(jobs)} new jobs</strong> matching your alert "
        f"\"<strong>{html.escape(alert_title)}</strong>\":</p>"
        f"{''.join(cards)}"
        "<div style=\"margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; text-align: center; font-size: 14px;\">"
        f"<p><a href=\"{base}/alerts\">Manage your alerts</a> | <a href=\"{base}/tracker\">View tracker</a></p>"
        "<p style=\"color: #999; font-size: 12px;\">You're receiving this because you set up a job alert. "
        "Deactivate the alert in your settings to stop these emails.</p>"
        "</div></body></html>"
    )


def send_email(to: str, subject: str, html_body: str) -> None:
    try:
        r = requests.post(
            f"{settings.resend_base_url}/emails",
            headers={
                "Authorization": f"Bearer {settings.resend_api_key}",
                "Content-Type": "application/json",
            },
            json={"from": settings.alert_from_email, "to": to, "subject": subject, "html": html_body},
            timeout=settings.http_timeout_seconds,
        )
    except requests.RequestException as e:
        raise AlertDeliveryError(f"Resend request failed: {e}") from e
    if not r.ok:
        raise AlertDeliveryError(f"Resend API error ({r.status_code}): {r.text[:200]}")


def _process_alert(db: Session, alert: Any, now: datetime) -> str:
    """Returns one of "sent", "skipped_empty", "skipped_no_email"."""
    profile = profile_repo.get_by_id(db, alert.user_id)
    if not profile or not profile.email:
        logger.info("Alert %s skipped: owner has no email", alert.id)
        return "skipped_no_email"

    found = job_source.search_jobs(alert_filters(alert), results_per_page=settings.alert_results_per_page)
    if not found.results:
        logger.info("Alert %s skipped: no matching jobs", alert.id)
        return "skipped_empty"

    body = render_digest(profile.full_name or "there", alert.title, found.results)
    send_email(profile.email, f"{len(found.results)} New Jobs: {alert.title}", body)
    alert_repo.mark_sent(db, alert, now)
    logger.info("Alert %s sent %d jobs", alert.id, len(found.results))
    return "sent"


def run_dispatch(db: Session, now: datetime | None = None) -> dict[str, int]:
    """
    Send every due alert once. Failures are logged and counted per alert;
    the batch always runs to the end.
    Returns {"alerts", "due", "sent", "skipped_empty", "skipped_no_email", "failed"}.
    """
    if not settings.resend_api_key or not job_source.is_configured():
        raise AlertDispatchNotConfigured("Missing required API keys (RESEND or ADZUNA)")
    now = now or datetime.now(timezone.utc)
    alerts = alert_repo.list_active(db)
    summary = {"alerts": len(alerts), "due": 0, "sent": 0, "skipped_empty": 0, "skipped_no_email": 0, "failed": 0}

    for alert in alerts:
        if not should_send(alert, now):
            continue
        summary["due"] += 1
        try:
            outcome = _process_alert(db, alert, now)
        except Exception as e:
            db.rollback()
            logger.exception("Alert %s failed: %s", alert.id, e)
            summary["failed"] += 1
            continue
        summary[outcome] += 1

    logger.info("Alert dispatch done: %s", summary)
    return summary
