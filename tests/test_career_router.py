import jobhunter.routers.career as career_mod


class _Item:
    def __init__(self, item_id="c1", status="saved", **kwargs):
        self.id = item_id
        self.user_id = "user-1"
        self.type = kwargs.get("type", "certification")
        self.title = kwargs.get("title", "CKA")
        self.description = None
        self.url = None
        self.status = status
        self.created_at = None


class _Analysis:
    def __init__(self, analysis_id="an1", resume_id=None, analysis_data=None):
        self.id = analysis_id
        self.user_id = "user-1"
        self.resume_id = resume_id
        self.analysis_data = analysis_data or {}
        self.created_at = None


def test_add_and_list_items(monkeypatch, client):
    monkeypatch.setattr(career_mod, "ensure_profile", lambda db, uid, email=None: object())
    monkeypatch.setattr(career_mod, "create_item", lambda db, uid, data: _Item(**data))
    monkeypatch.setattr(career_mod, "list_items", lambda db, uid: [_Item()])

    resp = client.post("/career/items", json={"type": "role", "title": "Staff Engineer"})
    assert resp.status_code == 201
    assert resp.json()["type"] == "role"
    assert client.get("/career/items").json()[0]["title"] == "CKA"


def test_item_rejects_unknown_type(client):
    assert client.post("/career/items", json={"type": "hobby", "title": "x"}).status_code == 422


def test_update_and_delete_item(monkeypatch, client):
    monkeypatch.setattr(career_mod, "update_item_status", lambda db, iid, uid, status: _Item(iid, status=status))
    monkeypatch.setattr(career_mod, "delete_item", lambda db, iid, uid: True)
    assert client.patch("/career/items/c1", json={"status": "completed"}).json()["status"] == "completed"
    assert client.delete("/career/items/c1").json()["id"] == "c1"

    monkeypatch.setattr(career_mod, "update_item_status", lambda db, iid, uid, status: None)
    assert client.patch("/career/items/c9", json={"status": "completed"}).status_code == 404


def test_analyses_recent_and_create(monkeypatch, client):
    seen = {}

    def _recent(db, uid, limit):
        seen["limit"] = limit
        return [_Analysis()]

    monkeypatch.setattr(career_mod, "list_recent_analyses", _recent)
    monkeypatch.setattr(career_mod, "ensure_profile", lambda db, uid, email=None: object())
    monkeypatch.setattr(
        career_mod, "create_analysis",
        lambda db, uid, data, resume_id=None: _Analysis(resume_id=resume_id, analysis_data=data),
    )

    assert client.get("/career/analyses").status_code == 200
    assert seen["limit"] == 5
    resp = client.post("/career/analyses", json={"resume_id": "r1", "analysis_data": {"analysis": {"readiness_score": 60}}})
    assert resp.status_code == 201
    assert resp.json()["resume_id"] == "r1"
