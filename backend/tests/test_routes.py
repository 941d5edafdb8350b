"""
Integration tests driving the blueprints through Flask's test client.
"""
import pytest
from openpyxl import load_workbook

from wms import create_app
from conftest import FakeBackend, NOW, day


class TestAuth:
    def test_screens_need_login(self, client):
        response = client.get("/workers/")
        assert response.status_code == 401
        assert response.get_json() == {"error": "Login required"}

    def test_home_is_public(self, client):
        assert client.get("/").status_code == 200

    def test_bad_credentials(self, client, app):
        response = client.post("/auth/login", json={"userId": "user", "password": "nope"})
        assert response.status_code == 401
        with open(app.config["AUDIT_LOG_FILE"]) as f:
            assert "LOGIN_FAILED" in f.read()

    def test_missing_fields(self, client):
        assert client.post("/auth/login", json={}).status_code == 400

    def test_login_me_logout(self, logged_in):
        assert logged_in.get("/auth/me").get_json()["userId"] == "user"
        assert logged_in.post("/auth/logout").status_code == 200
        assert logged_in.get("/auth/me").status_code == 401

    def test_login_is_rate_limited(self, backend, tmp_path):
        app = create_app({
            "TESTING": True,
            "API_TRANSPORT": backend.transport,
            "RATELIMIT_ENABLED": True,
            "RATELIMIT_STORAGE_URI": "memory://",
            "AUDIT_LOG_FILE": str(tmp_path / "audit.log"),
        })
        client = app.test_client()
        codes = [client.post("/auth/login", json={"userId": "x", "password": "y"}).status_code
                 for _ in range(6)]
        assert codes[:5] == [401] * 5
        assert codes[5] == 429
        with open(tmp_path / "audit.log") as f:
            assert "RATE_LIMIT_EXCEEDED" in f.read()


class TestEntityScreens:
    def test_list_applies_filters_sort_and_keeps_state(self, backend, logged_in):
        backend.seed("workers", *({"Worker_ID": f"W{i:02d}", "Age": 20 + i, "Gender": "Male" if i % 2 else "Female"}
                                  for i in range(1, 13)))
        first = logged_in.get("/workers/?gender=Male&sort=Age").get_json()
        assert first["total"] == 6
        assert [r["Age"] for r in first["items"]] == [21, 23, 25, 27, 29, 31]

        # filter and sort come back from the session on the next visit
        again = logged_in.get("/workers/").get_json()
        assert again["filters"] == {"gender": "Male"}
        assert again["sort"] == {"key": "Age", "direction": "asc"}

        cleared = logged_in.get("/workers/?clear=1").get_json()
        assert cleared["total"] == 12
        assert cleared["pages"] == 2

    def test_bad_filter_value_is_client_error(self, logged_in):
        response = logged_in.get("/workers/?ageRange=1-2")
        assert response.status_code == 400

    def test_gateway_failure_is_502(self, backend, logged_in):
        backend.fail("trades")
        response = logged_in.get("/trades/")
        assert response.status_code == 502
        assert response.get_json() == {"error": "Failed to fetch trades"}

    def test_register_rows_carry_validity_alert(self, backend, logged_in):
        backend.seed("trade-registers", {"Worker_ID": "W1", "Record_Date": "2024-06-01",
                                         "Validity_Date": day(5), "Status": "Active"})
        (row,) = logged_in.get("/trade-registers/").get_json()["items"]
        assert row["Validity_Alert"] == "EXPIRING (5 days)"

    def test_form_schema(self, logged_in):
        fields = logged_in.get("/departments/form_schema").get_json()["fields"]
        assert {"name", "label", "type", "required"} <= set(fields[0])


class TestFormFlow:
    def test_create_then_list_round_trip(self, backend, logged_in):
        assert logged_in.post("/trades/form", json={"mode": "create"}).get_json()["mode"] == "creating"
        logged_in.post("/trades/form", json={"values": {"Trade_Code": "T7", "Trade_Name": "Rigging"}})
        response = logged_in.post("/trades/form/submit", json={"values": {"Training_Frequency": "6 months"}})

        assert response.status_code == 200
        assert response.get_json()["items"] == [
            {"Trade_Code": "T7", "Trade_Name": "Rigging", "Training_Frequency": "6 months"}
        ]
        assert backend.collections["trades"][0]["Trade_Name"] == "Rigging"
        assert logged_in.get("/trades/form").get_json()["mode"] == "closed"

    def test_invalid_submit_returns_field_errors(self, logged_in):
        logged_in.post("/departments/form", json={"mode": "create"})
        response = logged_in.post("/departments/form/submit", json={"values": {"Max_Labour_Count": "0"}})
        assert response.status_code == 400
        assert "Max_Labour_Count" in response.get_json()["errors"]
        assert logged_in.get("/departments/form").get_json()["mode"] == "creating"

    def test_failed_submit_keeps_form_open(self, backend, logged_in):
        backend.fail("trades", "POST")
        logged_in.post("/trades/form", json={"mode": "create", "values": {
            "Trade_Code": "T7", "Trade_Name": "Rigging", "Training_Frequency": "As needed"}})
        assert logged_in.post("/trades/form/submit").status_code == 502

        form = logged_in.get("/trades/form").get_json()
        assert form["mode"] == "creating"
        assert form["error"] == "Failed to add trade"
        assert form["buffer"]["Trade_Code"] == "T7"

    def test_edit_unknown_record(self, logged_in):
        response = logged_in.post("/workers/form", json={"mode": "edit", "key": "W404"})
        assert response.status_code == 404

    def test_submit_without_open_form(self, logged_in):
        assert logged_in.post("/workers/form/submit").status_code == 400

    def test_cancel(self, logged_in):
        logged_in.post("/workers/form", json={"mode": "create"})
        assert logged_in.post("/workers/form/cancel").get_json()["mode"] == "closed"


class TestDelete:
    def test_delete_register_needs_record_date(self, logged_in):
        assert logged_in.delete("/trade-registers/W1").status_code == 400

    def test_delete_register(self, backend, logged_in, app):
        backend.seed("trade-registers",
                     {"Worker_ID": "W1", "Record_Date": "2024-06-01T00:00:00.000Z", "Status": "Active"},
                     {"Worker_ID": "W1", "Record_Date": "2024-07-01", "Status": "Active"})
        response = logged_in.delete("/trade-registers/W1", json={"Record_Date": "2024-06-01T00:00:00.000Z"})
        assert response.status_code == 200
        assert [r["Record_Date"] for r in response.get_json()["items"]] == ["2024-07-01"]
        with open(app.config["AUDIT_LOG_FILE"]) as f:
            assert "RECORD_DELETED" in f.read()

    def test_delete_entity(self, backend, logged_in):
        backend.seed("departments", {"Department_code": "D1"})
        assert logged_in.delete("/departments/D1").status_code == 200
        assert backend.collections["departments"] == []


class TestAlertsScreen:
    ROW = {"Worker_ID": "W1", "Record_Date": "2024-06-01", "Department_Code": "D1", "Training_Code": "S1",
           "Status": "Active", "Validity_Date": day(-3), "Alert_Completed": False}

    def test_list_active_alerts(self, backend, logged_in):
        backend.seed("training-registers", self.ROW)
        payload = logged_in.get("/alerts/?type=training&mode=active").get_json()
        assert payload["type"] == "training"
        assert payload["items"][0]["Validity_Alert"] == "OVERDUE (3 days)"

    def test_unknown_type(self, logged_in):
        assert logged_in.get("/alerts/?type=meal").status_code == 400
        assert logged_in.get("/alerts/?type=trade&mode=all").status_code == 400

    def test_complete_keeps_status_and_refetches(self, backend, logged_in):
        backend.seed("training-registers", self.ROW)
        response = logged_in.post("/alerts/training/W1/complete", json={"Record_Date": "2024-06-01"})
        assert response.status_code == 200
        stored = backend.collections["training-registers"][0]
        assert stored["Alert_Completed"] is True
        assert stored["Status"] == "Active"
        # the active view no longer lists the acknowledged row
        assert response.get_json()["items"] == []

        logged_in.post("/alerts/training/W1/incomplete", json={"Record_Date": "2024-06-01"})
        assert backend.collections["training-registers"][0]["Alert_Completed"] is False
        assert backend.collections["training-registers"][0]["Status"] == "Active"

    def test_toggle_requires_record_date(self, logged_in):
        assert logged_in.post("/alerts/trade/W1/complete", json={}).status_code == 400

    def test_stats(self, backend, logged_in):
        backend.seed("trade-registers", {**self.ROW, "Alert_Completed": True})
        stats = logged_in.get("/alerts/stats").get_json()
        assert stats["trade"] == {"active": 0, "inactive": 0, "completed": 1}
        assert stats["training"] == {"active": 0, "inactive": 0, "completed": 0}


class TestReportsScreen:
    def seed(self, backend):
        backend.seed("departments", {"Department_code": "D1", "Department_Name": "Assembly"})
        backend.seed("trades", {"Trade_Code": "T1", "Trade_Name": "Welding"})
        backend.seed("trade-registers",
                     {"Worker_ID": "W1", "Department_Code": "D1", "Trade_Code": "T1", "Status": "Active",
                      "Validity_Date": day(3), "Record_Date": "2024-06-01"})

    def test_index(self, logged_in):
        keys = [r["key"] for r in logged_in.get("/reports/").get_json()]
        assert keys[:3] == ["department-wise", "trade-wise", "alert-wise"]

    def test_department_wise(self, backend, logged_in):
        self.seed(backend)
        (row,) = logged_in.get("/reports/department-wise").get_json()["items"]
        assert row["Department_Name"] == "Assembly"
        assert row["Expiring_Count"] == 1

    def test_unknown_report(self, logged_in):
        assert logged_in.get("/reports/salary").status_code == 400

    def test_one_failed_fetch_fails_the_report(self, backend, logged_in):
        backend.fail("trade-registers")
        assert logged_in.get("/reports/trade-wise").status_code == 502

    def test_export(self, backend, logged_in):
        self.seed(backend)
        response = logged_in.get("/reports/alert-wise/export")
        assert response.status_code == 200
        assert response.mimetype.endswith("spreadsheetml.sheet")
        assert "alert-wise-report" in response.headers["Content-Disposition"]

        from io import BytesIO
        sheet = load_workbook(BytesIO(response.data)).active
        assert sheet["A1"].value == "Type"
        assert sheet["B2"].value == "W1"


def test_dashboard_summary(backend, logged_in):
    backend.seed("workers", {"Worker_ID": "W1"})
    backend.fail("trainings")
    summary = logged_in.get("/dashboard/summary").get_json()
    assert summary["total"] == 1
    assert summary["series"][0]["percentage"] == 100
