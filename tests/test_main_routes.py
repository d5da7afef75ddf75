import jobhunter.main as main_mod
from jobhunter.schemas.job import JobSearchResult


class _ConnOK:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, _query):
        return 1


class _EngineOK:
    def connect(self):
        return _ConnOK()


class _EngineFail:
    def connect(self):
        raise RuntimeError("db down")


def test_health_live(client):
    resp = client.get("/health/live")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_health_ready_ok(monkeypatch, client):
    monkeypatch.setattr(main_mod, "engine", _EngineOK())
    resp = client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ready"


def test_health_ready_not_ready(monkeypatch, client):
    monkeypatch.setattr(main_mod, "engine", _EngineFail())
    resp = client.get("/health/ready")
    assert resp.status_code == 503
    assert resp.json()["status"] == "not_ready"


def test_preflight_answers_ok_with_cors_headers(anon_client):
    resp = anon_client.options("/saved-jobs")
    assert resp.status_code == 200
    assert resp.text == "ok"
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "authorization" in resp.headers["access-control-allow-headers"]


def test_invalid_token_is_401(anon_client):
    resp = anon_client.get("/saved-jobs", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid or expired token"}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/no-such-route")
    assert resp.status_code == 404
    assert "error" in resp.json()


def test_search_rate_limit(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_search_per_min", 2)
    monkeypatch.setattr("jobhunter.routers.jobs.search_jobs", lambda filters: JobSearchResult(results=[], count=0))
    r1 = client.post("/jobs/search", json={"query": "x"})
    r2 = client.post("/jobs/search", json={"query": "x"})
    r3 = client.post("/jobs/search", json={"query": "x"})
    assert r1.status_code == 200 and r2.status_code == 200
    assert r3.status_code == 429
    assert r3.json()["error"] == "Too many requests. Please retry shortly."
    assert int(r3.headers["retry-after"]) >= 1


def test_ai_rate_limit_is_separate(monkeypatch, client):
    monkeypatch.setattr(main_mod.settings, "rate_limit_ai_per_min", 1)
    monkeypatch.setattr("jobhunter.routers.ai.is_perplexity_configured", lambda: False)
    assert client.post("/ai/research-company", json={"companyName": "ACME"}).status_code == 200
    assert client.post("/ai/research-company", json={"companyName": "ACME"}).status_code == 429
    assert client.get("/health/live").status_code == 200
