"""
Tests for the REST gateway against the in-memory API.
"""
import httpx
import pytest

from wms.gateway import GatewayError, RemoteGateway, fetch_all, fetch_counts
from wms.models import Worker


class TestReads:
    def test_list_returns_collection(self, backend, gateway_for):
        backend.seed("workers", {"Worker_ID": "W1"}, {"Worker_ID": "W2"})
        assert gateway_for("workers").list() == [{"Worker_ID": "W1"}, {"Worker_ID": "W2"}]

    def test_non_2xx_becomes_gateway_error(self, backend, gateway_for):
        backend.fail("workers")
        with pytest.raises(GatewayError) as exc:
            gateway_for("workers").list()
        assert exc.value.message == "Failed to fetch workers"
        assert exc.value.status_code == 500

    def test_transport_exception_becomes_gateway_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway = RemoteGateway(Worker, "http://api.test", transport=httpx.MockTransport(refuse))
        with pytest.raises(GatewayError) as exc:
            gateway.list()
        assert exc.value.message == "Failed to fetch workers"

    def test_list_alerts_hits_alerts_endpoint(self, backend, gateway_for):
        gateway_for("trade-registers").list_alerts()
        assert backend.calls[-1][:2] == ("GET", "/api/trade-registers/alerts")


class TestWrites:
    def test_create_then_list_round_trip(self, gateway_for):
        gateway = gateway_for("workers")
        record = {"Worker_ID": "W9", "Age": 30, "Gender": "Female", "Remarks": ""}
        gateway.create(record)
        assert record in gateway.list()

    def test_update_register_sends_record_date(self, backend, gateway_for):
        backend.seed("trade-registers", {"Worker_ID": "W1", "Record_Date": "2024-01-05", "Status": "Active"})
        gateway_for("trade-registers").update("W1", {"Status": "Inactive"}, record_date="2024-01-05")
        method, path, body = backend.calls[-1]
        assert (method, path) == ("PUT", "/api/trade-registers/W1")
        assert body == {"Status": "Inactive", "Record_Date": "2024-01-05"}
        assert backend.collections["trade-registers"][0]["Status"] == "Inactive"

    def test_delete_register_sends_body(self, backend, gateway_for):
        backend.seed("training-registers", {"Worker_ID": "W1", "Record_Date": "2024-01-05"})
        gateway_for("training-registers").delete("W1", record_date="2024-01-05")
        assert backend.calls[-1] == ("DELETE", "/api/training-registers/W1", {"Record_Date": "2024-01-05"})
        assert backend.collections["training-registers"] == []

    def test_delete_entity_has_no_body(self, backend, gateway_for):
        backend.seed("trades", {"Trade_Code": "T1"})
        gateway_for("trades").delete("T1")
        assert backend.calls[-1] == ("DELETE", "/api/trades/T1", None)

    def test_failed_write_message(self, backend, gateway_for):
        backend.fail("departments", "POST")
        with pytest.raises(GatewayError, match="Failed to add department"):
            gateway_for("departments").create({"Department_code": "D1"})

    def test_alert_toggle_paths(self, backend, gateway_for):
        backend.seed("trade-registers", {"Worker_ID": "W1", "Record_Date": "2024-01-05", "Alert_Completed": False})
        gateway = gateway_for("trade-registers")
        gateway.set_alert_completed("W1", "2024-01-05", True)
        assert backend.calls[-1][1] == "/api/trade-registers/W1/complete-alert"
        gateway.set_alert_completed("W1", "2024-01-05", False)
        assert backend.calls[-1][1] == "/api/trade-registers/W1/incomplete-alert"


class TestConcurrentFetches:
    def test_fetch_all_preserves_order(self, backend, gateway_for):
        backend.seed("workers", {"Worker_ID": "W1"})
        backend.seed("trades", {"Trade_Code": "T1"}, {"Trade_Code": "T2"})
        workers, trades = fetch_all(gateway_for("workers").alist, gateway_for("trades").alist)
        assert len(workers) == 1
        assert len(trades) == 2

    def test_fetch_all_fails_as_a_whole(self, backend, gateway_for):
        backend.fail("trades")
        with pytest.raises(GatewayError):
            fetch_all(gateway_for("workers").alist, gateway_for("trades").alist)

    def test_fetch_counts_tolerates_failures(self, backend, gateway_for):
        backend.seed("workers", {"Worker_ID": "W1"})
        backend.fail("trades")
        assert fetch_counts(gateway_for("workers").alist, gateway_for("trades").alist) == [1, None]
