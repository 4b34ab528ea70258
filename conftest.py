import os

import pytest

os.environ.setdefault("APP_ENV", "test")

from app import app  # noqa: E402
from models import DocumentStore, CredentialStore  # noqa: E402


@pytest.fixture
def test_app(tmp_path, monkeypatch):
    """Points the app at throwaway storage with a single admin/secret account."""
    monkeypatch.setitem(app.config, "TESTING", True)
    monkeypatch.setitem(app.config, "DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setitem(app.config, "CREDENTIALS_PATH", str(tmp_path / "users.yml"))
    CredentialStore(app.config["CREDENTIALS_PATH"]).register("admin", "secret")
    yield app


@pytest.fixture
def client(test_app):
    with test_app.test_client() as client:
        yield client


@pytest.fixture
def documents(test_app):
    return DocumentStore(test_app.config["DATA_DIR"])


@pytest.fixture
def credentials(test_app):
    return CredentialStore(test_app.config["CREDENTIALS_PATH"])


@pytest.fixture
def admin(client):
    """Marks the test client's session as signed in as admin."""
    with client.session_transaction() as sess:
        sess["username"] = "admin"
    return client
