"""Tests for the HTTP endpoints."""

import pytest

from laborpay.core.config import LaborConfig

from tests.conftest import NEW_YEAR, SUNDAY, TUESDAY, WEDNESDAY


def shift_payload(date=TUESDAY, start="08:00", end="16:00", salary=80000):
    return {"date": date, "start_time": start, "end_time": end, "base_salary": salary}


class TestGeneral:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_config_exposes_surcharges(self, client):
        data = client.get("/config").json()
        assert data["regular_hours_per_day"] == 8
        assert data["surcharge_rates"]["overtime_day"] == 0.25
        assert data["surcharge_rates"]["holiday_night"] == 1.10
        assert data["surcharge_rates"]["sunday_night"] == 1.10


class TestShiftEndpoint:

    def test_regular_shift(self, client):
        response = client.post("/labor/shift", json=shift_payload())

        assert response.status_code == 200
        data = response.json()
        assert data["total_pay"] == 80000
        assert len(data["breakdown"]) == 1
        assert data["breakdown"][0]["category"] == "regular"

    def test_holiday_shift(self, client):
        data = client.post("/labor/shift", json=shift_payload(date=NEW_YEAR)).json()
        assert data["breakdown"][0]["category"] == "holiday_day"
        assert data["total_pay"] == pytest.approx(140000)

    def test_computed_calendar_query(self, client):
        payload = shift_payload(date="2025-12-25")

        static = client.post("/labor/shift", json=payload).json()
        computed = client.post("/labor/shift?calendar=computed", json=payload).json()

        assert static["breakdown"][0]["category"] == "regular"
        assert computed["breakdown"][0]["category"] == "holiday_day"

    def test_unknown_calendar(self, client):
        response = client.post("/labor/shift?calendar=lunar", json=shift_payload())
        assert response.status_code == 400

    def test_invalid_time(self, client):
        response = client.post("/labor/shift", json=shift_payload(start="25:00"))
        assert response.status_code == 400
        assert "25:00" in response.json()["detail"]

    def test_negative_salary(self, client):
        response = client.post("/labor/shift", json=shift_payload(salary=-5))
        assert response.status_code == 400

    def test_zero_length_shift(self, client):
        response = client.post("/labor/shift", json=shift_payload(start="09:00", end="09:00"))
        assert response.status_code == 400

    def test_missing_field(self, client):
        payload = shift_payload()
        del payload["base_salary"]
        response = client.post("/labor/shift", json=payload)
        assert response.status_code == 422


class TestWeeklyEndpoints:

    def test_weekly(self, client):
        shifts = [shift_payload(), shift_payload(date=WEDNESDAY, start="22:00", end="06:00")]
        response = client.post("/labor/weekly", json={"shifts": shifts})

        assert response.status_code == 200
        data = response.json()
        assert data["total_hours"] == 16
        assert data["total_pay"] == pytest.approx(188000)
        assert [line["category"] for line in data["breakdown"]] == ["regular", "night"]
        assert data["surcharge_by_category"] == {"night": pytest.approx(28000)}

    def test_empty_week(self, client):
        data = client.post("/labor/weekly", json={"shifts": []}).json()
        assert data["total_pay"] == 0
        assert data["breakdown"] == []

    def test_weekly_reports_failing_shift(self, client):
        shifts = [shift_payload(), shift_payload(date=WEDNESDAY, end="8pm")]
        response = client.post("/labor/weekly", json={"shifts": shifts})

        assert response.status_code == 400
        assert "#1" in response.json()["detail"]
        assert WEDNESDAY in response.json()["detail"]

    def test_batch_limit(self, client, monkeypatch):
        monkeypatch.setattr(LaborConfig, "MAX_SHIFTS_PER_REQUEST", 1)
        response = client.post("/labor/weekly", json={"shifts": [shift_payload(), shift_payload()]})
        assert response.status_code == 400

    def test_weekly_csv(self, client):
        shifts = [shift_payload(), shift_payload(date=SUNDAY)]
        response = client.post("/labor/weekly/csv", json={"shifts": shifts})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert f"labor_{TUESDAY}.csv" in response.headers["content-disposition"]
        lines = response.text.strip().splitlines()
        assert len(lines) == 4
        assert lines[-1].startswith("TOTAL")

    def test_weekly_csv_unexpected_error(self, client, monkeypatch):
        def broken_export(*args):
            raise RuntimeError("disk full")

        monkeypatch.setattr("laborpay.api.endpoints.labor.generate_labor_csv", broken_export)
        response = client.post("/labor/weekly/csv", json={"shifts": [shift_payload()]})

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to export labor CSV"


class TestValidateEndpoint:

    def test_overlapping_shifts(self, client):
        shifts = [shift_payload(), shift_payload(start="10:00", end="14:00")]
        response = client.post("/labor/validate", json={"shifts": shifts})

        assert response.status_code == 200
        data = response.json()
        assert [w["error_code"] for w in data] == ["SHIFT_OVERLAP"]
        assert data[0]["severity"] == "error"
        assert data[0]["shift_indexes"] == [0, 1]

    def test_clean_week(self, client):
        shifts = [shift_payload(), shift_payload(date=WEDNESDAY)]
        assert client.post("/labor/validate", json={"shifts": shifts}).json() == []

    def test_invalid_shift(self, client):
        response = client.post("/labor/validate", json={"shifts": [shift_payload(end="8pm")]})
        assert response.status_code == 400
        assert "#0" in response.json()["detail"]


class TestCompensatoryEndpoint:

    def test_alerts_and_compliance(self, client):
        payload = {
            "employee_id": "emp-1",
            "employee_name": "Ana",
            "shifts": [shift_payload(date=SUNDAY), shift_payload(date=TUESDAY)],
            "rest_days": ["2024-01-06"],
            "today": "2024-01-10",
        }
        response = client.post("/labor/compensatory-alerts", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert len(data["alerts"]) == 1
        assert data["alerts"][0]["work_date"] == SUNDAY
        assert data["alerts"][0]["days_until_expiry"] == 27
        assert data["compliance"]["compliant"] is True
        assert data["compliance"]["work_days_count"] == 2

    def test_bad_today(self, client):
        payload = {"employee_id": "e", "employee_name": "n", "shifts": [], "today": "10/01/2024"}
        response = client.post("/labor/compensatory-alerts", json=payload)
        assert response.status_code == 400

    def test_schedule_warnings_included(self, client):
        payload = {
            "employee_id": "emp-2",
            "employee_name": "Luis",
            "shifts": [shift_payload(), shift_payload(start="12:00", end="20:00")],
            "today": "2024-01-10",
        }
        data = client.post("/labor/compensatory-alerts", json=payload).json()

        assert [w["type"] for w in data["schedule_warnings"]] == ["overlap"]
        assert data["schedule_warnings"][0]["date"] == TUESDAY

    def test_unexpected_error(self, client, monkeypatch):
        def broken_alerts(*args):
            raise RuntimeError("calendar offline")

        monkeypatch.setattr("laborpay.api.endpoints.labor.build_compensatory_alerts", broken_alerts)
        payload = {"employee_id": "e", "employee_name": "n", "shifts": [shift_payload(date=SUNDAY)]}
        response = client.post("/labor/compensatory-alerts", json=payload)

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to build compensatory alerts"


class TestCalendarEndpoints:

    def test_static_holidays(self, client):
        data = client.get("/calendar/holidays/2024").json()
        assert data["calendar"] == "static"
        assert len(data["holidays"]) == 18
        assert data["holidays"][0] == "2024-01-01"

    def test_static_calendar_other_year_is_empty(self, client):
        assert client.get("/calendar/holidays/2026").json()["holidays"] == []

    def test_computed_holidays(self, client):
        data = client.get("/calendar/holidays/2026?calendar=computed").json()
        assert data["calendar"] == "computed"
        assert "2026-12-25" in data["holidays"]

    def test_year_out_of_range(self, client):
        assert client.get("/calendar/holidays/1200").status_code == 400

    def test_day_info(self, client):
        data = client.get(f"/calendar/day/{SUNDAY}").json()
        assert data == {"date": SUNDAY, "is_holiday": False, "is_sunday": True}

    def test_day_info_bad_date(self, client):
        assert client.get("/calendar/day/not-a-date").status_code == 400
