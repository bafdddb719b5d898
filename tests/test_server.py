"""HTTP endpoint tests against a live server on an ephemeral port."""

from unittest.mock import MagicMock

import pytest
import requests

from garden_stock_monitor.monitor import StockMonitor
from garden_stock_monitor.server import StockHTTPServer


@pytest.fixture
def monitor():
    m = MagicMock(spec=StockMonitor)
    m.check_stock_changes.return_value = {"success": True, "changes": ["A is back in stock"]}
    m.get_current_stock.return_value = {"success": False, "error": "stockDataSSR not found"}
    return m


@pytest.fixture
def server(monitor, tmp_path):
    (tmp_path / "index.html").write_text("<h1>Stock Monitor</h1>", encoding="utf-8")
    srv = StockHTTPServer(monitor, host="127.0.0.1", port=0, public_dir=str(tmp_path))
    srv.start()
    yield srv
    srv.stop()


class TestStockHTTPServer:
    """Endpoint routing."""

    def test_check_endpoint(self, server, monitor):
        resp = requests.get(f"{server.base_url}/api/stock/check", timeout=5)

        assert resp.status_code == 200
        assert resp.json() == {"success": True, "changes": ["A is back in stock"]}
        monitor.check_stock_changes.assert_called_once_with()

    def test_get_endpoint_failure_is_still_200(self, server, monitor):
        resp = requests.get(f"{server.base_url}/api/stock/get", timeout=5)

        assert resp.status_code == 200
        assert resp.headers["Content-Type"].startswith("application/json")
        assert resp.json() == {"success": False, "error": "stockDataSSR not found"}

    def test_query_string_ignored(self, server, monitor):
        resp = requests.get(f"{server.base_url}/api/stock/check?force=1", timeout=5)
        assert resp.status_code == 200
        monitor.check_stock_changes.assert_called_once_with()

    def test_static_index(self, server, monitor):
        resp = requests.get(f"{server.base_url}/", timeout=5)

        assert resp.status_code == 200
        assert "Stock Monitor" in resp.text
        monitor.check_stock_changes.assert_not_called()

    def test_unknown_static_file(self, server):
        resp = requests.get(f"{server.base_url}/missing.js", timeout=5)
        assert resp.status_code == 404

    def test_start_is_idempotent(self, server):
        assert server.start() == server.base_url
        assert server.port != 0
