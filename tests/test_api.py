from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import app
from insights.data import DATASETS

HR_CSV = (
    "EmployeeNumber,Age,Attrition,Department,JobRole,OverTime,YearsAtCompany,MonthlyIncome\n"
    "1,24,Yes,Sales,Sales Rep,Yes,1,2500\n"
    "2,31,No,Sales,Sales Exec,Yes,1,2800\n"
    "3,45,No,R&D,Scientist,No,10,9000\n"
)


@pytest.fixture
def client(tmp_path, monkeypatch):
    (tmp_path / DATASETS["hr"].filename).write_text(HR_CSV, encoding="utf-8")
    monkeypatch.setenv("INSIGHTS_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("INSIGHTS_RISK_JITTER", raising=False)
    return TestClient(app)


def test_meta_datasets(client):
    resp = client.get("/meta/datasets")
    assert resp.status_code == 200
    names = [d["name"] for d in resp.json()["datasets"]]
    assert names == ["hr", "telecom", "retail"]


def test_meta_values(client):
    resp = client.get("/meta/values/hr/Department")
    assert resp.status_code == 200
    assert resp.json() == {"values": ["R&D", "Sales"]}
    assert client.get("/meta/values/payroll/Department").status_code == 404


def test_dashboard(client):
    resp = client.post("/dashboard/hr", json={})
    assert resp.status_code == 200
    body = resp.json()
    assert body["kpis"]["total_employees"] == 3
    assert body["kpis"]["attrition_rate"] == pytest.approx(1 / 3)
    assert [g["label"] for g in body["groups"]["by_department"]] == ["Sales", "R&D"]
    assert body["risk_list"][0]["id"] == "2"
    assert "charts" not in body


def test_dashboard_filters_and_charts(client):
    payload = {"selected": {"Department": ["R&D"], "NotAField": ["x"]}, "top_n": 1}
    resp = client.post("/dashboard/hr", params={"charts": "true"}, json=payload)
    body = resp.json()
    assert body["record_count"] == 1
    assert body["filters"]["selected"] == {"Department": ["R&D"]}
    assert "by_department" in body["charts"]


def test_dashboard_missing_file_degrades_to_empty(client):
    resp = client.post("/dashboard/telecom", json={})
    assert resp.status_code == 200
    body = resp.json()
    assert body["kpis"]["total_customers"] == 0
    assert body["kpis"]["highest_churn_contract"] == "No data"


def test_dashboard_unknown_dataset(client):
    assert client.post("/dashboard/payroll", json={}).status_code == 404


def test_dashboard_rejects_bad_payload(client):
    assert client.post("/dashboard/hr", json={"top_n": "lots"}).status_code == 422


def test_export(client):
    resp = client.post("/export/hr", json={"selected": {"Department": ["Sales"]}})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("EmployeeNumber,Age,Attrition")
    assert len(lines) == 3


def test_dashboard_uses_configured_risk_limit(tmp_path, monkeypatch):
    data_dir = tmp_path / "big"
    data_dir.mkdir()
    rows = "".join(f"{i},30,No,Sales,Sales Exec,Yes,1,2800\n" for i in range(1, 31))
    (data_dir / DATASETS["hr"].filename).write_text(HR_CSV.splitlines()[0] + "\n" + rows, encoding="utf-8")
    monkeypatch.setenv("INSIGHTS_DATA_DIR", str(data_dir))
    monkeypatch.setenv("INSIGHTS_RISK_LIMIT", "25")
    client = TestClient(app)

    body = client.post("/dashboard/hr", json={}).json()
    assert len(body["risk_list"]) == 25
    assert body["filters"]["top_n"] == 25

    body = client.post("/dashboard/hr", json={"top_n": 3}).json()
    assert len(body["risk_list"]) == 3


def test_export_failure_returns_error_body(client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr("api.main.apply_filters", boom)
    resp = client.post("/export/hr", json={})
    assert resp.status_code == 500
    assert resp.json() == {"error": "disk on fire", "type": "RuntimeError"}
