"""vault 相关 API 接口测试。"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from vaulttriage.connection import VaultConnection
from vaulttriage.main import create_app

from conftest import write_note


NOT_A_VAULT = (
    "Directory does not appear to be a vault: "
    "no .obsidian directory and no .md files found"
)


@pytest.fixture
def client() -> TestClient:
    """每个测试使用独立的连接状态。"""
    return TestClient(create_app(VaultConnection()))


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    vault = tmp_path / "with-obsidian"
    (vault / ".obsidian").mkdir(parents=True)
    write_note(vault, "note.md", "---\ntags: [a]\n---\n# Hello")
    return vault


def test_health(client: TestClient):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["timestamp"].endswith("Z")
    assert resp.headers["X-Request-ID"]


def test_unknown_route(client: TestClient):
    resp = client.get("/api/unknown")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_connect_success(client: TestClient, vault: Path):
    resp = client.post("/api/vault/connect", json={"path": str(vault)})

    assert resp.status_code == 200
    data = resp.json()
    assert data["path"] == str(vault)
    assert data["hasObsidianDir"] is True
    assert data["markdownFileCount"] == 1
    assert isinstance(data["connectedAt"], str)


def test_connect_markdown_only(client: TestClient, tmp_path: Path):
    write_note(tmp_path, "note1.md", "# Note 1")
    write_note(tmp_path, "note2.md", "# Note 2")

    resp = client.post("/api/vault/connect", json={"path": str(tmp_path)})

    assert resp.status_code == 200
    assert resp.json()["hasObsidianDir"] is False
    assert resp.json()["markdownFileCount"] == 2


@pytest.mark.parametrize("body", [{}, {"path": 123}, {"path": ""}, {"path": None}])
def test_connect_requires_path(client: TestClient, body):
    resp = client.post("/api/vault/connect", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "path is required"}


def test_connect_without_body(client: TestClient):
    resp = client.post("/api/vault/connect")

    assert resp.status_code == 400
    assert resp.json() == {"error": "path is required"}


def test_connect_missing_directory(client: TestClient, tmp_path: Path):
    missing = tmp_path / "nonexistent-vault-dir"

    resp = client.post("/api/vault/connect", json={"path": str(missing)})

    assert resp.status_code == 400
    assert resp.json() == {"error": f"Directory does not exist: {missing.resolve()}"}


def test_connect_empty_directory(client: TestClient, tmp_path: Path):
    resp = client.post("/api/vault/connect", json={"path": str(tmp_path)})

    assert resp.status_code == 400
    assert resp.json() == {"error": NOT_A_VAULT}


def test_status_lifecycle(client: TestClient, vault: Path):
    assert client.get("/api/vault/status").json() == {"vault": None}

    connected = client.post("/api/vault/connect", json={"path": str(vault)}).json()
    resp = client.get("/api/vault/status")
    assert resp.status_code == 200
    assert resp.json() == {"vault": connected}

    resp = client.post("/api/vault/disconnect")
    assert resp.json() == {"vault": None}
    assert client.get("/api/vault/status").json() == {"vault": None}


def test_failed_connect_keeps_status(client: TestClient, vault: Path, tmp_path: Path):
    connected = client.post("/api/vault/connect", json={"path": str(vault)}).json()
    client.post("/api/vault/connect", json={"path": str(tmp_path / "missing")})

    assert client.get("/api/vault/status").json() == {"vault": connected}


def test_scan_connected_vault(client: TestClient, vault: Path):
    client.post("/api/vault/connect", json={"path": str(vault)})

    resp = client.post("/api/vault/scan")

    assert resp.status_code == 200
    data = resp.json()
    assert data["vaultPath"] == str(vault)
    assert data["healthScore"] == 100
    assert data["notes"][0]["path"] == "note.md"
    assert data["notes"][0]["title"] == "Hello"
    assert data["notes"][0]["tags"] == ["a"]
    assert data["notes"][0]["issues"] == []

    cached = client.get("/api/vault/scan").json()
    assert cached == {"scan": data}


def test_scan_explicit_path_does_not_connect(client: TestClient, vault: Path):
    resp = client.post("/api/vault/scan", json={"path": str(vault)})

    assert resp.status_code == 200
    assert len(resp.json()["notes"]) == 1
    assert client.get("/api/vault/status").json() == {"vault": None}


def test_scan_without_vault(client: TestClient):
    resp = client.post("/api/vault/scan")

    assert resp.status_code == 400
    assert resp.json() == {"error": "No vault connected"}
    assert client.get("/api/vault/scan").json() == {"scan": None}


def test_scan_missing_directory(client: TestClient, tmp_path: Path):
    missing = tmp_path / "gone"
    resp = client.post("/api/vault/scan", json={"path": str(missing)})

    assert resp.status_code == 400
    assert resp.json() == {"error": f"Directory does not exist: {missing.resolve()}"}


def test_cached_scan_before_scanning(client: TestClient, vault: Path):
    client.post("/api/vault/connect", json={"path": str(vault)})
    assert client.get("/api/vault/scan").json() == {"scan": None}


def test_invalid_json_body(client: TestClient):
    resp = client.post(
        "/api/vault/scan",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}


def test_unhandled_error_is_hidden(monkeypatch, vault: Path):
    """未处理异常返回通用 500，不泄露细节。"""

    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr("vaulttriage.api.routes.scan_vault", boom)
    client = TestClient(create_app(VaultConnection()), raise_server_exceptions=False)

    resp = client.post("/api/vault/scan", json={"path": str(vault)})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal Server Error"}


def test_scan_filesystem_error_returns_500(monkeypatch, vault: Path):
    """扫描中读取失败返回通用 500，且不写缓存。"""
    original_read_text = Path.read_text

    def read_text(self, *args, **kwargs):
        if self.name == "note.md":
            raise PermissionError(13, "Permission denied", str(self))
        return original_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", read_text)
    client = TestClient(create_app(VaultConnection()), raise_server_exceptions=False)

    resp = client.post("/api/vault/scan", json={"path": str(vault)})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal Server Error"}
    assert not (vault / ".vault-triage" / "scan-cache.json").exists()


def test_scan_non_utf8_note(client: TestClient, vault: Path):
    (vault / "legacy.md").write_bytes("# Résumé".encode("cp1252"))

    resp = client.post("/api/vault/scan", json={"path": str(vault)})

    assert resp.status_code == 200
    titles = {note["path"]: note["title"] for note in resp.json()["notes"]}
    assert titles["legacy.md"] == "R\ufffdsum\ufffd"
