from datetime import datetime, timezone

import jobhunter.services.alert_scheduler as sched


class _DB:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


def test_run_dispatch_once_closes_session(monkeypatch):
    db = _DB()
    monkeypatch.setattr(sched, "SessionLocal", lambda: db)
    monkeypatch.setattr(sched, "run_dispatch", lambda session: {"sent": 2})
    assert sched._run_dispatch_once() == {"sent": 2}
    assert db.closed is True


def test_start_stop_status_and_double_start(monkeypatch):
    monkeypatch.setattr(sched, "_scheduler_loop", lambda: None)
    sched._running = False
    sched._thread = None
    sched._last_run = datetime.now(timezone.utc)

    ok1, msg1 = sched.start_scheduler()
    ok2, msg2 = sched.start_scheduler()
    ok3, msg3 = sched.stop_scheduler()
    status = sched.get_status()

    assert ok1 is True and "started" in msg1
    assert ok2 is False and "already" in msg2
    assert ok3 is True and "stop requested" in msg3
    assert status["running"] is False
    assert status["next_run"] is None
    assert status["last_run"] is not None


def test_stop_scheduler_when_not_running():
    sched._running = False
    ok, msg = sched.stop_scheduler()
    assert ok is False
    assert "not running" in msg


def test_scheduler_loop_runs_once_and_stops(monkeypatch):
    calls = {"n": 0}

    def fake_run_once():
        calls["n"] += 1
        sched._running = False
        return {"sent": 1}

    sched._running = True
    sched._stop_event.clear()
    monkeypatch.setattr(sched, "_run_dispatch_once", fake_run_once)
    sched._scheduler_loop()
    assert calls["n"] == 1
    assert sched.get_status()["last_result"] == {"sent": 1}


def test_scheduler_loop_survives_dispatch_errors(monkeypatch):
    def failing():
        sched._running = False
        raise RuntimeError("db down")

    sched._running = True
    monkeypatch.setattr(sched, "_run_dispatch_once", failing)
    sched._scheduler_loop()
    assert sched.get_status()["last_result"] is None
