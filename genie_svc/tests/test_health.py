"""
Tests for health, readiness, and metrics endpoints.

These tests verify the observability endpoints work correctly:
- /health: Liveness check
- /ready: Readiness check against the database
- /metrics: Prometheus-format metrics
- /: Root endpoint with API info
"""


# =============================================================================
# ROOT ENDPOINT TESTS
# =============================================================================

def test_root_endpoint(client):
    """Test the root endpoint returns API info."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Drug GENIE Health Score API"
    assert data["version"] == "1.0.0"
    assert "health" in data
    assert "ready" in data
    assert "metrics" in data


# =============================================================================
# HEALTH ENDPOINT TESTS (LIVENESS)
# =============================================================================

def test_health_endpoint(client):
    """Test the /health liveness endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "1.0.0"
    assert data["timestamp"].endswith("Z")


# =============================================================================
# READINESS ENDPOINT TESTS
# =============================================================================

def test_ready_endpoint(client, temp_db, monkeypatch):
    """Test the /ready readiness endpoint."""
    from core import dependencies as deps

    monkeypatch.setattr(deps, "get_database", lambda: temp_db)

    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert [d["name"] for d in data["dependencies"]] == ["database"]
    assert "timestamp" in data


def test_ready_reports_database_failure(client, monkeypatch):
    """Test that an unreachable database makes the service not ready."""
    from core import dependencies as deps

    def broken_database():
        raise RuntimeError("disk gone")

    monkeypatch.setattr(deps, "get_database", broken_database)

    response = client.get("/ready")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    assert data["dependencies"][0]["status"] == "unavailable"


# =============================================================================
# METRICS ENDPOINT TESTS
# =============================================================================

def test_metrics_endpoint(client):
    """Test the /metrics Prometheus endpoint."""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers.get("content-type", "")
    content = response.text
    assert "http_requests_total" in content
    assert "http_request_duration_ms" in content
    assert 'health_scores_total{result="success"}' in content
    assert 'health_scores_total{result="failure"}' in content


def test_metrics_json_endpoint(client):
    """Test the /metrics/json endpoint."""
    response = client.get("/metrics/json")
    assert response.status_code == 200
    data = response.json()
    assert "http_requests_total" in data
    assert "http_requests_2xx_total" in data
    assert "http_requests_4xx_total" in data
    assert "http_requests_5xx_total" in data
    assert "http_request_duration_ms_p50" in data
    assert "health_scores_computed_total" in data
    assert "health_scores_failed_total" in data


def test_successful_score_counted(client, user_headers):
    """Test that successful computations are counted."""
    before = client.get("/metrics/json").json()["health_scores_computed_total"]
    client.get("/api/v1/health-score", headers=user_headers)
    after = client.get("/metrics/json").json()["health_scores_computed_total"]
    assert after == before + 1
