"""Tests for the HTTP API.

The client is entered as a context manager so the application lifespan
runs and loads the bundled knowledge base.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterator

import orjson
import pytest
import structlog
from fastapi.testclient import TestClient

from src.api.v1.analysis import analyze_fir, export_analysis
from src.main import _configure_logging, app


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


# -----------------------------------------------------------------------
# /analyze
# -----------------------------------------------------------------------


def test_analyze_sample(client: TestClient, sample_fir: str) -> None:
    """Full analysis of the sample returns camelCase JSON."""
    response = client.post("/api/v1/analyze", json={"firText": sample_fir})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["confidence"] == 95
    assert "processingTime" in data
    results = data["results"]
    assert results["complainant"]["name"] == "Rajesh Kumar"
    assert results["accused"][0]["serialNo"] == 1
    assert results["insights"]["riskAssessment"]["level"] == "High"
    assert results["metadata"]["languageDetected"] == "English"
    assert len(results["legalSections"]) == 7


def test_analyze_accepts_snake_case(client: TestClient, sample_fir: str) -> None:
    response = client.post("/api/v1/analyze", json={"fir_text": sample_fir})
    assert response.status_code == 200


def test_analyze_short_text(client: TestClient) -> None:
    """Text below the minimum length is an input error."""
    response = client.post("/api/v1/analyze", json={"firText": "too short"})
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert "50 characters" in data["error"]


def test_analyze_blank_text(client: TestClient) -> None:
    response = client.post("/api/v1/analyze", json={"firText": "   "})
    assert response.status_code == 400


def test_analyze_missing_field(client: TestClient) -> None:
    response = client.post("/api/v1/analyze", json={})
    assert response.status_code == 422


def test_analyze_long_unpunctuated_text(client: TestClient) -> None:
    """Text at the length limit with no sentence end is analysed."""
    text = "complainant " + "word " * 9990
    response = client.post("/api/v1/analyze", json={"firText": text})
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_analysis_routes_run_in_threadpool() -> None:
    """CPU-bound routes are plain functions so they stay off the event loop."""
    assert not inspect.iscoroutinefunction(analyze_fir)
    assert not inspect.iscoroutinefunction(export_analysis)


def test_analyze_without_analyzer(
    client: TestClient, sample_fir: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Analysis answers 503 when the knowledge base failed to load."""
    monkeypatch.setattr(app.state, "analyzer", None)
    response = client.post("/api/v1/analyze", json={"firText": sample_fir})
    assert response.status_code == 503


# -----------------------------------------------------------------------
# /analyze/validate, /analyze/keywords, /analyze/export
# -----------------------------------------------------------------------


def test_validate_sample(client: TestClient, sample_fir: str) -> None:
    response = client.post("/api/v1/analyze/validate", json={"firText": sample_fir})
    assert response.status_code == 200
    assert response.json() == {"isValid": True, "issues": []}


def test_validate_reports_issues(client: TestClient) -> None:
    response = client.post("/api/v1/analyze/validate", json={"firText": "hello"})
    assert response.status_code == 200
    data = response.json()
    assert data["isValid"] is False
    assert "No complainant mentioned" in data["issues"]


def test_keywords(client: TestClient) -> None:
    response = client.post(
        "/api/v1/analyze/keywords",
        json={"firText": "pistol pistol wallet and the pistol"},
    )
    assert response.status_code == 200
    assert response.json()["keywords"] == ["pistol", "wallet"]


def test_export(client: TestClient, sample_fir: str) -> None:
    """Export returns the full report as a JSON attachment."""
    response = client.post("/api/v1/analyze/export", json={"firText": sample_fir})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert "attachment" in response.headers["content-disposition"]
    assert "fir-analysis.json" in response.headers["content-disposition"]
    data = orjson.loads(response.content)
    assert data["results"]["legalSections"]


def test_export_short_text(client: TestClient) -> None:
    response = client.post("/api/v1/analyze/export", json={"firText": "short"})
    assert response.status_code == 400


# -----------------------------------------------------------------------
# /legal-sections
# -----------------------------------------------------------------------


def test_list_legal_sections(client: TestClient) -> None:
    response = client.get("/api/v1/legal-sections")
    assert response.status_code == 200
    data = response.json()["data"]
    assert set(data) >= {"bns_2023", "sc_st_act", "arms_act", "keywords_to_sections"}
    assert list(data["keywords_to_sections"])[0] == "caste"


def test_get_legal_section(client: TestClient) -> None:
    response = client.get("/api/v1/legal-sections/arms_act/25")
    assert response.status_code == 200
    data = response.json()
    assert data["act"] == "Arms Act, 1959"
    assert data["severity"] == "high"


def test_get_legal_section_with_parentheses(client: TestClient) -> None:
    response = client.get("/api/v1/legal-sections/sc_st_act/3(1)(r)")
    assert response.status_code == 200
    assert response.json()["section"] == "3(1)(r)"


def test_get_legal_section_not_found(client: TestClient) -> None:
    response = client.get("/api/v1/legal-sections/bns_2023/999")
    assert response.status_code == 404


# -----------------------------------------------------------------------
# /health
# -----------------------------------------------------------------------


def test_health(client: TestClient) -> None:
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "1.0.0"
    assert data["sections_loaded"] == 12


def test_ready(client: TestClient) -> None:
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"] == {"knowledge_base": "ok", "analyzer": "ok"}


def test_not_ready(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app.state, "knowledge_base", None)
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


def test_api_info(client: TestClient) -> None:
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["endpoints"]["analyze"] == "/api/v1/analyze"


# -----------------------------------------------------------------------
# Request context middleware
# -----------------------------------------------------------------------


def test_request_id_generated(client: TestClient) -> None:
    response = client.get("/api/v1/health")
    assert len(response.headers["x-request-id"]) == 32


def test_request_id_echoed(client: TestClient) -> None:
    response = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"


def test_responses_not_cacheable(client: TestClient, sample_fir: str) -> None:
    """Analysis responses carry personal data and must not be cached."""
    response = client.post("/api/v1/analyze", json={"firText": sample_fir})
    assert response.headers["cache-control"] == "no-store, private"
    assert response.headers["x-content-type-options"] == "nosniff"


# -----------------------------------------------------------------------
# Logging configuration
# -----------------------------------------------------------------------


@pytest.fixture
def restore_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.mark.parametrize(
    ("level", "fmt"),
    [("INFO", "json"), ("debug", "console"), ("Warning", "json"), ("ERROR", "console")],
)
def test_configure_logging_accepts_level_names(
    level: str, fmt: str, restore_structlog: None
) -> None:
    """Level names resolve case-insensitively to stdlib logging levels."""
    _configure_logging(level, fmt)


def test_configure_logging_filters_below_level(
    capsys: pytest.CaptureFixture[str], restore_structlog: None
) -> None:
    _configure_logging("WARNING", "json")
    logger = structlog.get_logger("test")
    logger.info("test.hidden")
    logger.warning("test.shown")
    out = capsys.readouterr().out
    assert "test.shown" in out
    assert "test.hidden" not in out
