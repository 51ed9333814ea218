from fastapi.testclient import TestClient

from api.main import create_app
from api.middleware import RateLimitMiddleware
from settings import Settings


def _client(**overrides):
    return TestClient(create_app(Settings(**overrides)))


def test_root_describes_service():
    resp = _client(MIN_FONT_SIZE=8, MAX_FONT_SIZE=64).get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["version"]
    assert "8-64" in data["parameters"]["fontSize"]
    assert len(data["examples"]) == 4


def test_favicon_is_empty():
    resp = _client().get("/favicon.ico")
    assert resp.status_code == 204
    assert resp.content == b""


def test_health_check():
    resp = _client(ENVIRONMENT="test").get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["environment"] == "test"
    assert data["uptime"] >= 0
    assert data["cache"]["images"] == {"size": 0, "max_size": 100}
    assert data["cache"]["fonts"]["size"] == 0


def test_health_check_custom_path_and_disabled():
    assert _client(HEALTH_CHECK_PATH="/healthz").get("/healthz").status_code == 200
    assert _client(HEALTH_CHECK_ENABLED=False).get("/health").status_code == 404


def test_rate_limit_rejects_after_max():
    client = _client(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX=2, RATE_LIMIT_WINDOW=60000)

    assert client.get("/favicon.ico").status_code == 204
    assert client.get("/favicon.ico").status_code == 204
    resp = client.get("/favicon.ico")

    assert resp.status_code == 429
    assert resp.text == "Too many requests from this IP, please try again later."


def test_cors_headers_when_enabled():
    client = _client(CORS_ENABLED=True, CORS_ORIGIN="https://example.com")
    resp = client.get("/", headers={"Origin": "https://example.com"})
    assert resp.headers["access-control-allow-origin"] == "https://example.com"


def test_rate_limit_windows_are_pruned_across_many_clients():
    limiter = RateLimitMiddleware(None, window_ms=1000, max_requests=5)

    for i in range(10000):
        assert limiter._hit(f"10.0.{i // 256}.{i % 256}", i * 10.0)

    assert len(limiter._windows) == 1


def test_rate_limit_pruning_keeps_live_windows():
    limiter = RateLimitMiddleware(None, window_ms=1000, max_requests=2)

    assert limiter._hit("1.1.1.1", 0.0)
    assert limiter._hit("2.2.2.2", 0.5)
    # 1.1.1.1 has expired by now; 2.2.2.2 is still inside its window.
    assert limiter._hit("3.3.3.3", 1.2)
    assert set(limiter._windows) == {"2.2.2.2", "3.3.3.3"}
    assert limiter._hit("2.2.2.2", 1.3)
    assert not limiter._hit("2.2.2.2", 1.4)
