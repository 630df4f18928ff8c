from fastapi.testclient import TestClient

from backend.app.main import _resolve_allowed_origins, _split_raw_origins, app


def test_split_raw_origins_accepts_commas_and_whitespace():
    raw = "http://localhost:5173, http://127.0.0.1:5173 https://tablero.lameca.test"
    assert _split_raw_origins(raw) == [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "https://tablero.lameca.test",
    ]


def test_resolve_allowed_origins_keeps_local_development_hosts(monkeypatch):
    monkeypatch.setenv("BACKEND_ALLOWED_ORIGINS", "https://tablero.lameca.test/")

    origins = _resolve_allowed_origins()

    assert origins == [
        "http://localhost:3000",
        "http://localhost:5173",
        "https://tablero.lameca.test",
    ]


def test_preflight_includes_cors_headers_for_local_dev_origin():
    client = TestClient(app)

    response = client.options(
        "/dashboard/overview",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == "http://localhost:5173"
    assert response.headers.get("access-control-allow-credentials") == "true"
