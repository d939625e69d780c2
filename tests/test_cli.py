from __future__ import annotations

import json

import pytest

from insights.cli import main

TELECOM_CSV = (
    "customerID,Churn,Contract,InternetService,tenure,MonthlyCharges,TechSupport,OnlineSecurity,PaymentMethod\n"
    "C-1,Yes,Month-to-month,Fiber optic,2,95,No,No,Electronic check\n"
    "C-2,No,Month-to-month,Fiber optic,5,85,No,No,Electronic check\n"
    "C-3,No,Two year,DSL,60,30,Yes,Yes,Mailed check\n"
)


def test_cli_prints_dashboard(tmp_path, capsys):
    path = tmp_path / "telco.csv"
    path.write_text(TELECOM_CSV, encoding="utf-8")
    assert main(["telecom", "--csv", str(path), "--filter", "Contract=Month-to-month", "--top-n", "5"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["record_count"] == 2
    assert body["kpis"]["churn_rate"] == 0.5
    assert [row["id"] for row in body["risk_list"]] == ["C-2"]


def test_cli_missing_csv_prints_empty_dashboard(tmp_path, capsys):
    assert main(["hr", "--csv", str(tmp_path / "missing.csv")]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["kpis"]["total_employees"] == 0


def test_cli_rejects_bad_filter(tmp_path):
    with pytest.raises(SystemExit):
        main(["hr", "--csv", str(tmp_path / "missing.csv"), "--filter", "Department"])
