import base64

from fastapi.testclient import TestClient

from app.auth import parse_basic_auth
from app.config import Settings
from app.main import create_app


def _basic(user, password):
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def _client(sites_csv, tmp_path):
    settings = Settings(
        csv_path=str(sites_csv),
        static_dir=str(tmp_path / "public"),
        auth_user="ops",
        auth_pass="s3:cret",
    )
    return TestClient(create_app(settings))


def test_parse_basic_auth():
    assert parse_basic_auth(_basic("a", "b:c")["Authorization"]) == ("a", "b:c")
    assert parse_basic_auth("Bearer xyz") is None
    assert parse_basic_auth("Basic !!!not-base64") is None
    assert parse_basic_auth("Basic " + base64.b64encode(b"nocolon").decode()) is None


def test_missing_credentials_challenged(sites_csv, tmp_path):
    r = _client(sites_csv, tmp_path).get("/api/points")
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == 'Basic realm="Protected"'
    assert r.text == "Authentication required"


def test_wrong_credentials_rejected(sites_csv, tmp_path):
    r = _client(sites_csv, tmp_path).get("/api/points", headers=_basic("ops", "wrong"))
    assert r.status_code == 401
    assert r.text == "Invalid credentials"


def test_valid_credentials_accepted(sites_csv, tmp_path):
    r = _client(sites_csv, tmp_path).get("/api/points", headers=_basic("ops", "s3:cret"))
    assert r.status_code == 200
    assert len(r.json()) == 2


def test_health_is_public(sites_csv, tmp_path):
    client = _client(sites_csv, tmp_path)
    assert client.get("/healthz").status_code == 200
    assert client.get("/health").status_code == 200


def test_auth_disabled_without_both_settings(sites_csv, tmp_path):
    settings = Settings(csv_path=str(sites_csv), static_dir=str(tmp_path / "public"), auth_user="ops")
    r = TestClient(create_app(settings)).get("/api/points")
    assert r.status_code == 200
