"""
Background thread that runs alert dispatch every `ALERT_INTERVAL_SECONDS`.
State is in-process only (resets on server restart).
"""
import logging
import threading
from datetime import datetime, timezone, timedelta

from jobhunter.config import settings
from jobhunter.database import SessionLocal
from jobhunter.services.alert_dispatch import run_dispatch

logger = logging.getLogger(__name__)

INTERVAL_SECONDS = settings.alert_interval_seconds

_lock = threading.Lock()
_running = False
_thread: threading.Thread | None = None
_stop_event = threading.Event()
_last_run: datetime | None = None
_next_run: datetime | None = None
_last_result: dict | None = None


def _run_dispatch_once() -> dict:
    """Run one dispatch pass with its own DB session."""
    db = SessionLocal()
    try:
        return run_dispatch(db)
    finally:
        db.close()


def _scheduler_loop() -> None:
    global _last_run, _next_run, _last_result
    logger.info("Alert scheduler thread started")
    while True:
        with _lock:
            if not _running:
                break
        result = None
        try:
            result = _run_dispatch_once()
        except Exception as e:
            logger.exception("Scheduled alert dispatch failed: %s", e)
        with _lock:
            _last_run = datetime.now(timezone.utc)
            _last_result = result
            if not _running:
                _next_run = None
                break
            _next_run = _last_run + timedelta(seconds=INTERVAL_SECONDS)
        if _stop_event.wait(INTERVAL_SECONDS):
            break
    logger.info("Alert scheduler thread stopped")


def start_scheduler() -> tuple[bool, str]:
    """Run dispatch now, then every interval. Returns (started, message)."""
    global _running, _thread
    with _lock:
        if _running:
            return False, "Alert scheduler is already running"
        _running = True
        _stop_event.clear()
        _thread = threading.Thread(target=_scheduler_loop, daemon=True)
        _thread.start()
    return True, f"Alert scheduler started (runs every {INTERVAL_SECONDS} seconds)"


def stop_scheduler() -> tuple[bool, str]:
    global _running, _next_run
    with _lock:
        if not _running:
            return False, "Alert scheduler is not running"
        _running = False
        _next_run = None
        _stop_event.set()
    return True, "Alert scheduler stop requested"


def get_status() -> dict:
    with _lock:
        return {
            "running": _running,
            "last_run": _last_run.isoformat() if _last_run else None,
            "next_run": _next_run.isoformat() if _next_run else None,
            "interval_seconds": INTERVAL_SECONDS,
            "last_result": _last_result,
        }
