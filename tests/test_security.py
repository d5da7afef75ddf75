from jose import jwt

import jobhunter.core.security as sec
from jobhunter.core.security import create_access_token, decode_access_token, generate_id


def test_access_token_roundtrip():
    token = create_access_token("user-123", email="u@example.com")
    claims = decode_access_token(token)
    assert claims["sub"] == "user-123"
    assert claims["email"] == "u@example.com"
    assert claims["aud"] == "authenticated"


def test_decode_rejects_bad_tokens():
    assert decode_access_token("not-a-jwt") is None
    wrong_aud = jwt.encode({"sub": "u1", "aud": "anon"}, sec.settings.supabase_jwt_secret, algorithm="HS256")
    assert decode_access_token(wrong_aud) is None
    wrong_key = jwt.encode({"sub": "u1", "aud": "authenticated"}, "other-secret", algorithm="HS256")
    assert decode_access_token(wrong_key) is None
    no_sub = jwt.encode({"aud": "authenticated"}, sec.settings.supabase_jwt_secret, algorithm="HS256")
    assert decode_access_token(no_sub) is None


def test_decode_rejects_expired(monkeypatch):
    monkeypatch.setattr(sec.settings, "access_token_expire_minutes", -5)
    assert decode_access_token(create_access_token("u1")) is None


def test_generate_id():
    assert len(generate_id()) > 10
    assert generate_id() != generate_id()
