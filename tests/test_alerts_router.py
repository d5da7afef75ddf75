import jobhunter.dependencies as deps
import jobhunter.routers.alerts as alerts_mod
from jobhunter.services.alert_dispatch import AlertDispatchNotConfigured


class _Alert:
    def __init__(self, alert_id="a1", is_active=True, **kwargs):
        self.id = alert_id
        self.user_id = "user-1"
        self.title = kwargs.get("title", "Python roles")
        self.keywords = kwargs.get("keywords", ["python"])
        self.location = None
        self.min_salary = None
        self.remote_only = False
        self.notification_frequency = kwargs.get("notification_frequency", "daily")
        self.is_active = is_active
        self.last_sent_at = None
        self.created_at = None


def test_create_and_list_alerts(monkeypatch, client):
    monkeypatch.setattr(alerts_mod, "ensure_profile", lambda db, uid, email=None: object())
    monkeypatch.setattr(alerts_mod, "create_alert", lambda db, uid, data: _Alert(**data))
    monkeypatch.setattr(alerts_mod, "list_for_user", lambda db, uid: [_Alert()])

    resp = client.post("/alerts", json={"title": "Go jobs", "keywords": ["go"], "notification_frequency": "weekly"})
    assert resp.status_code == 201
    assert resp.json()["notification_frequency"] == "weekly"
    assert client.get("/alerts").json()[0]["id"] == "a1"


def test_create_alert_rejects_unknown_frequency(client):
    resp = client.post("/alerts", json={"title": "x", "notification_frequency": "hourly"})
    assert resp.status_code == 422


def test_toggle_update_delete(monkeypatch, client):
    monkeypatch.setattr(alerts_mod, "toggle_active", lambda db, aid, uid: _Alert(aid, is_active=False))
    monkeypatch.setattr(alerts_mod, "update_alert", lambda db, aid, uid, data: _Alert(aid, **data))
    monkeypatch.setattr(alerts_mod, "delete_alert", lambda db, aid, uid: False)

    assert client.post("/alerts/a1/toggle").json()["is_active"] is False
    assert client.put("/alerts/a1", json={"title": "Renamed"}).json()["title"] == "Renamed"
    assert client.delete("/alerts/a1").status_code == 404


def test_dispatch_requires_cron_secret(monkeypatch, client):
    monkeypatch.setattr(deps.settings, "cron_secret", "s3cret")
    resp = client.post("/alerts/dispatch")
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid cron secret"


def test_dispatch_runs_batch(monkeypatch, client):
    monkeypatch.setattr(deps.settings, "cron_secret", "s3cret")
    monkeypatch.setattr(
        alerts_mod, "run_dispatch",
        lambda db: {"alerts": 3, "due": 2, "sent": 1, "skipped_empty": 1, "skipped_no_email": 0, "failed": 0},
    )
    resp = client.post("/alerts/dispatch", headers={"X-Cron-Secret": "s3cret"})
    assert resp.status_code == 200
    assert resp.json()["sent"] == 1


def test_dispatch_not_configured_is_500(monkeypatch, client):
    def _missing(db):
        raise AlertDispatchNotConfigured("Missing required API keys (RESEND or ADZUNA)")

    monkeypatch.setattr(deps.settings, "cron_secret", "s3cret")
    monkeypatch.setattr(alerts_mod, "run_dispatch", _missing)
    resp = client.post("/alerts/dispatch", headers={"X-Cron-Secret": "s3cret"})
    assert resp.status_code == 500
    assert "RESEND" in resp.json()["error"]


def test_scheduler_controls(monkeypatch, client):
    monkeypatch.setattr(deps.settings, "cron_secret", "s3cret")
    monkeypatch.setattr(alerts_mod, "start_scheduler", lambda: (True, "started"))
    monkeypatch.setattr(alerts_mod, "stop_scheduler", lambda: (False, "Alert scheduler is not running"))
    monkeypatch.setattr(alerts_mod, "get_status", lambda: {"running": True})
    headers = {"X-Cron-Secret": "s3cret"}

    r1 = client.post("/alerts/scheduler/start", headers=headers)
    r2 = client.post("/alerts/scheduler/stop", headers=headers)
    r3 = client.get("/alerts/scheduler", headers=headers)
    assert r1.status_code == 200 and r1.json()["message"] == "started"
    assert r2.status_code == 409
    assert r3.json()["running"] is True
