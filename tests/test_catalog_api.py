from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from catalog_server.core.config import Settings
from catalog_server.main import create_app
from dynamic_catalog import parse_properties

from conftest import wait_for, write_catalog

PREFIX = "/presto/catalog/api"


@pytest.fixture
def settings(catalog_dir: Path) -> Settings:
    return Settings(
        catalog_dir=catalog_dir,
        disabled_catalogs=["blocked"],
        watcher_polling=True,
        watcher_poll_interval=0.1,
    )


@pytest.fixture
def client(settings: Settings, catalog_dir: Path):
    write_catalog(catalog_dir, "mysql1", "connector.name=mysql\nconnection-url=jdbc:mysql://h:3306")
    write_catalog(catalog_dir, "blocked", "connector.name=memory")
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def _post(client: TestClient, path: str, body) -> int:
    response = client.post(f"{PREFIX}{path}", json=body)
    assert response.status_code == 200
    return response.json()


def test_startup_loads_existing_catalogs(client: TestClient):
    health = client.get("/health").json()

    assert health["status"] == "ready"
    assert health["live_catalogs"] == ["mysql1"]
    assert health["announced_catalogs"] == ["mysql1"]
    assert health["watcher_running"] is True
    assert _post(client, "/conf", {"catalogName": "mysql1"}) == 0
    assert _post(client, "/conf", {"catalogName": "blocked"}) == -1
    assert _post(client, "/catalog", {"catalogName": "blocked"}) == -2


def test_add_round_trip(client: TestClient, catalog_dir: Path):
    body = {"catalogName": "p1", "connector.name": "memory", "connection-url": "x"}

    assert _post(client, "/add", body) == 0
    assert _post(client, "/file", {"catalogName": "p1"}) == 0
    assert _post(client, "/conf", {"catalogName": "p1"}) in (0, -1)
    assert parse_properties((catalog_dir / "p1.properties").read_text(encoding="utf-8")) == {
        "connector.name": "memory",
        "connection-url": "x",
    }
    assert wait_for(lambda: _post(client, "/conf", {"catalogName": "p1"}) == 0)
    assert _post(client, "/catalog", {"catalogName": "p1"}) == 0
    assert _post(client, "/exists", {"catalogName": "p1", "mode": "conf"}) == 0


def test_duplicate_add_has_single_winner(client: TestClient, catalog_dir: Path):
    bodies = [
        {"catalogName": "dup", "connector.name": "memory", "owner": "first"},
        {"catalogName": "dup", "connector.name": "memory", "owner": "second"},
    ]

    with ThreadPoolExecutor(max_workers=2) as pool:
        codes = list(pool.map(lambda body: _post(client, "/add", body), bodies))

    assert sorted(codes) == [-1, 0]
    winner = bodies[codes.index(0)]
    stored = parse_properties((catalog_dir / "dup.properties").read_text(encoding="utf-8"))
    assert stored["owner"] == winner["owner"]


def test_external_delete_unmounts_catalog(client: TestClient, catalog_dir: Path):
    (catalog_dir / "mysql1.properties").unlink()

    assert wait_for(lambda: _post(client, "/catalog", {"catalogName": "mysql1"}) == -1)
    assert "mysql1" not in client.get("/health").json()["announced_catalogs"]


def test_delete_and_update(client: TestClient):
    assert _post(client, "/update", {"catalogName": "nope", "connector.name": "memory"}) == -1
    assert _post(client, "/update", {"catalogName": "mysql1", "connector.name": "memory", "k": "v"}) == 0
    assert _post(client, "/delete", {"catalogName": "mysql1"}) == 0
    assert _post(client, "/delete", {"catalogName": "mysql1"}) == -1
    assert wait_for(lambda: _post(client, "/catalog", {"catalogName": "mysql1"}) == -1)


@pytest.mark.parametrize("path", ["/add", "/delete", "/update", "/conf", "/file", "/catalog", "/exists"])
def test_bad_requests_answer_minus_one_with_http_200(client: TestClient, path: str):
    assert _post(client, path, {"connector.name": "memory"}) == -1
    assert _post(client, path, ["not", "an", "object"]) == -1
    assert _post(client, path, {"catalogName": "../escape"}) == -1

    response = client.post(f"{PREFIX}{path}", content=b"{not json", headers={"content-type": "application/json"})
    assert response.status_code == 200
    assert response.json() == -1


def test_unknown_route_uses_error_envelope(client: TestClient):
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == 404


def test_requests_before_startup_get_service_unavailable(settings: Settings):
    client = TestClient(create_app(settings), raise_server_exceptions=False)

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["error"]["message"] == "Service is starting"
