import pytest
from fastapi import HTTPException

import jobhunter.dependencies as deps


class _Creds:
    def __init__(self, token: str):
        self.credentials = token


def test_get_current_user_missing_credentials():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(credentials=None)
    assert ex.value.status_code == 401
    assert ex.value.detail == "Missing authorization header"


def test_get_current_user_invalid_token(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(credentials=_Creds("bad"))
    assert ex.value.status_code == 401


def test_get_current_user_success(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: {"sub": "u1", "email": "u1@example.com"})
    user = deps.get_current_user(credentials=_Creds("tok"))
    assert user == deps.AuthenticatedUser(id="u1", email="u1@example.com")


def test_require_cron_secret(monkeypatch):
    monkeypatch.setattr(deps.settings, "cron_secret", "")
    with pytest.raises(HTTPException):
        deps.require_cron_secret(x_cron_secret="")

    monkeypatch.setattr(deps.settings, "cron_secret", "s3cret")
    with pytest.raises(HTTPException) as ex:
        deps.require_cron_secret(x_cron_secret="nope")
    assert ex.value.status_code == 401
    assert deps.require_cron_secret(x_cron_secret="s3cret") is None
