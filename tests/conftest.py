import pytest
from fastapi.testclient import TestClient

from jobhunter.core.rate_limiter import rate_limiter
from jobhunter.database import get_db
from jobhunter.dependencies import AuthenticatedUser, get_current_user
from jobhunter.main import app


@pytest.fixture
def stub_user() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-1", email="user@example.com")


@pytest.fixture
def client(stub_user: AuthenticatedUser):
    def _db_override():
        yield object()

    rate_limiter.reset()
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    def _db_override():
        yield object()

    rate_limiter.reset()
    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()
