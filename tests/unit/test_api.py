from decimal import Decimal as D

import pytest
from fastapi.testclient import TestClient

from app.api.http import app as api_app


def _client() -> TestClient:
    return TestClient(api_app)


def test_health_includes_build_meta(monkeypatch):
    monkeypatch.setenv("BUILD_VERSION", "1.2.3")
    monkeypatch.setenv("BUILD_SHA", "abc123")
    with _client() as client:
        body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["regimes"] == ["current", "projected"]
    assert body["build"] == {"version": "1.2.3", "sha": "abc123"}


def test_compare_post_5000():
    payload = {
        "gross_salary": 5000,
        "is_contribution_liable": True,
        "dependents": 0,
        "other_deductions": 0,
    }
    with _client() as client:
        resp = client.post("/compare", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert D(body["gross"]) == D("5000.0")
    assert D(body["current"]["contribution"]) == D("509.597")
    assert D(body["current"]["tax"]) == D("312.89")
    assert D(body["current"]["tax_rate_percent"]) == D("22.5")
    assert D(body["projected"]["tax"]) == D("0.0")
    assert D(body["projected"]["reduction_applied"]) == D("312.89")
    assert D(body["projected"]["net"]) == D("4498.4856")


def test_compare_post_accepts_camel_case():
    payload = {"grossSalary": 6000, "isContributionLiable": True, "otherDeductions": 100}
    with _client() as client:
        body = client.post("/compare", json=payload).json()
    assert D(body["projected"]["reduction_applied"]) == D("179.75")
    assert D(body["projected"]["tax"]) == D("385.10")
    assert D(body["other"]) == D("100.0")


def test_compare_post_negative_salary_is_422():
    with _client() as client:
        resp = client.post("/compare", json={"gross_salary": -1})
    assert resp.status_code == 422


def test_compare_post_too_many_dependents_is_400(monkeypatch):
    monkeypatch.setenv("MAX_DEPENDENTS", "2")
    with _client() as client:
        resp = client.post("/compare", json={"gross_salary": 5000, "dependents": 3})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["field"] == "dependents"


def test_compare_query_string():
    with _client() as client:
        resp = client.get("/compare", params={"gross": 10000, "dependents": 0, "liable": "true"})
    assert resp.status_code == 200
    body = resp.json()
    assert D(body["current"]["tax"]) == D("1579.57")
    assert D(body["projected"]["tax"]) == D("1569.54")
    assert D(body["projected"]["reduction_applied"]) == D("0.0")


def test_compare_query_rejects_negative_values():
    with _client() as client:
        resp = client.get("/compare", params={"gross": -5})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["field"] == "gross_salary"


def test_regimes_listing():
    with _client() as client:
        body = client.get("/regimes").json()
    assert [view["name"] for view in body] == ["current", "projected"]
    assert body[0]["reduction"] is None
    assert body[1]["reduction"]["slope"] == pytest.approx(0.133145)
    assert body[1]["income_tax"]["tiers"][-1]["upper"] is None


def test_regime_detail_by_year_and_unknown():
    with _client() as client:
        found = client.get("/regimes/2025")
        missing = client.get("/regimes/nope")
    assert found.status_code == 200
    assert found.json()["contribution"]["ceiling"] == pytest.approx(8157.41)
    assert missing.status_code == 404


def test_compare_amounts_serialize_as_exact_strings():
    with _client() as client:
        body = client.get("/compare", params={"gross": 5000}).json()
    for key in ("gross", "other", "net_difference"):
        assert isinstance(body[key], str)
    assert D(body["current"]["contribution"]) == D("509.597")
    assert D(body["net_difference"]) == D("320.9726")
    assert body["dependents"] == 0


def test_compare_query_rejects_amounts_too_large_for_cents():
    with _client() as client:
        resp = client.get("/compare", params={"gross": "1e27"})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["field"] == "gross_salary"


def test_compare_post_rejects_amounts_too_large_for_cents():
    with _client() as client:
        resp = client.post("/compare", json={"gross_salary": 5000, "other_deductions": 1e30})
    assert resp.status_code == 422


def test_app_starts_with_lowercase_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    with _client() as client:
        resp = client.get("/health")
    assert resp.status_code == 200
