"""Tests for the API endpoints."""

import pytest
from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    """GET /health returns ok status and the loaded tax years."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "2025-26" in data["tax_years"]


def test_list_tax_years(client: TestClient) -> None:
    response = client.get("/tax-years")
    assert response.status_code == 200
    data = response.json()
    assert {"key": "2025-26", "name": "2025/26"} in data["tax_years"]
    assert data["default"] == "2025-26"


def test_tax_year_detail(client: TestClient) -> None:
    response = client.get("/tax-years/2024-25")
    assert response.status_code == 200
    data = response.json()
    assert data["employer_ni"]["threshold"] == 9100
    assert data["national_insurance"][-1]["upper"] is None


def test_tax_year_detail_unknown(client: TestClient) -> None:
    """Unknown tax year keys are 404 with an error message listing what exists."""
    response = client.get("/tax-years/2010-11")
    assert response.status_code == 404
    assert "2025-26" in response.json()["error"]


# --- Deductions and solver ---


def test_deductions_basic(client: TestClient) -> None:
    response = client.post("/deductions", json={"gross_annual": 60_000, "tax_year": "2025-26"})
    assert response.status_code == 200
    data = response.json()
    assert data["net_annual"] == pytest.approx(45_357.40)
    assert data["tax"]["breakdown"][0]["name"] == "Basic Rate"


def test_deductions_accepts_raw_form_input(client: TestClient) -> None:
    response = client.post("/deductions", json={"gross_annual": "£60,000"})
    assert response.status_code == 200
    assert response.json()["gross_annual"] == 60_000


def test_deductions_advanced(client: TestClient) -> None:
    response = client.post(
        "/deductions",
        json={
            "gross_annual": 60_000,
            "use_advanced": True,
            "options": {"pension_type": "percent", "pension_value": "5"},
        },
    )
    assert response.status_code == 200
    assert response.json()["net_annual"] == pytest.approx(43_557.40)


def test_deductions_negative_gross(client: TestClient) -> None:
    response = client.post("/deductions", json={"gross_annual": -10})
    assert response.status_code == 422
    assert "non-negative" in response.json()["error"]


def test_deductions_unknown_student_loan(client: TestClient) -> None:
    response = client.post(
        "/deductions",
        json={"gross_annual": 40_000, "use_advanced": True, "options": {"student_loan_plan": "plan9"}},
    )
    assert response.status_code == 422
    assert "plan9" in response.json()["error"]


def test_unknown_tax_year_in_body(client: TestClient) -> None:
    response = client.post("/deductions", json={"gross_annual": 40_000, "tax_year": "2010-11"})
    assert response.status_code == 422


def test_gross_from_net(client: TestClient) -> None:
    response = client.post("/gross-from-net", json={"target_net": 45_357.40})
    assert response.status_code == 200
    data = response.json()
    assert data["converged"] is True
    assert data["gross"] == pytest.approx(60_000, abs=0.05)


def test_gross_from_net_unreachable(client: TestClient) -> None:
    """Non-convergence is a normal result, not an error."""
    response = client.post(
        "/gross-from-net",
        json={
            "target_net": 1_000,
            "use_advanced": True,
            "options": {"pension_type": "percent", "pension_value": 100},
        },
    )
    assert response.status_code == 200
    assert response.json()["converged"] is False


def test_take_home_monthly(client: TestClient) -> None:
    response = client.post("/take-home", json={"amount": 5_000, "pay_period": "monthly"})
    assert response.status_code == 200
    data = response.json()
    assert data["per_period"]["monthly"]["take_home"] == pytest.approx(45_357.40 / 12)


def test_take_home_bad_period(client: TestClient) -> None:
    response = client.post("/take-home", json={"amount": 5_000, "pay_period": "fortnightly"})
    assert response.status_code == 422


# --- Calculators ---


def test_income_tax(client: TestClient) -> None:
    response = client.post("/income-tax", json={"annual_income": 40_000, "region": "scotland"})
    assert response.status_code == 200
    assert response.json()["total_tax"] == pytest.approx(5_582.82)


def test_income_tax_negative(client: TestClient) -> None:
    response = client.post("/income-tax", json={"annual_income": -1})
    assert response.status_code == 422
    assert "error" in response.json()


def test_national_insurance_includes_employer(client: TestClient) -> None:
    response = client.post("/national-insurance", json={"annual_income": 40_000})
    assert response.status_code == 200
    data = response.json()
    assert data["total_ni"] == pytest.approx(2_194.40)
    assert data["employer_ni"] == pytest.approx(5_250.0)


def test_dividend_tax(client: TestClient) -> None:
    response = client.post("/dividend-tax", json={"dividends": 10_500, "other_income": 12_570})
    assert response.status_code == 200
    assert response.json()["dividend_tax"] == pytest.approx(875.0)


def test_corporation_tax(client: TestClient) -> None:
    response = client.post("/corporation-tax", json={"profit": "100,000"})
    assert response.status_code == 200
    assert response.json()["tax_due"] == pytest.approx(22_750.0)


def test_stamp_duty(client: TestClient) -> None:
    response = client.post(
        "/stamp-duty", json={"property_price": 500_000, "buyer_type": "first_time_buyer"}
    )
    assert response.status_code == 200
    assert response.json()["total_tax"] == pytest.approx(3_750.0)


def test_maternity_pay(client: TestClient) -> None:
    response = client.post(
        "/maternity-pay", json={"average_weekly_earnings": 600, "tax_year": "2024-25"}
    )
    assert response.status_code == 200
    assert response.json()["total_smp"] == pytest.approx(9_312.99)


def test_mortgage_with_schedule(client: TestClient) -> None:
    response = client.post(
        "/mortgage",
        json={
            "property_value": 300_000,
            "deposit": 100_000,
            "annual_rate": 5,
            "term_years": 25,
            "include_schedule": True,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["monthly_payment"] == pytest.approx(1_169.18, abs=0.01)
    assert len(data["schedule"]) == 25


def test_mortgage_bad_deposit(client: TestClient) -> None:
    response = client.post(
        "/mortgage",
        json={"property_value": 200_000, "deposit": 300_000, "annual_rate": 5, "term_years": 25},
    )
    assert response.status_code == 422


def test_ir35(client: TestClient) -> None:
    response = client.post("/ir35", json={"day_rate": 500})
    assert response.status_code == 200
    data = response.json()
    assert data["inside"]["take_home"] == pytest.approx(70_152.40)
    assert data["outside"]["take_home"] == pytest.approx(76_959.82, abs=0.01)


def test_brrrr_sentinel(client: TestClient) -> None:
    response = client.post(
        "/brrrr",
        json={
            "purchase_price": 100_000,
            "closing_costs": 5_000,
            "rehab_costs": 20_000,
            "after_repair_value": 200_000,
            "selling_costs": 10_000,
            "refinance_closing_costs": 2_000,
        },
    )
    assert response.status_code == 200
    assert response.json()["brrrr"]["cash_on_cash_roi"] == "All Capital Returned"
