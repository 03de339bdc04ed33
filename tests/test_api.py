"""Tests for the HTTP surface exposing the tool registry."""
import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from finnhub_tools.main import create_app
from finnhub_tools.registry import build_registry

from conftest import BASE_URL


@pytest.fixture
def client(api_config, session):
    app = create_app(build_registry(api_config, session=session))
    return TestClient(app)


class TestHttpSurface:

    def test_health(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["tools"] == 9

    def test_list_tools(self, client):
        resp = client.get("/tools")

        assert resp.status_code == 200
        tools = {t["name"]: t for t in resp.json()["tools"]}
        assert tools["get_news"]["inputSchema"]["required"] == ["category"]

    def test_invoke_success(self, client, session, make_response):
        session.send.return_value = make_response(200, b'{"id":1}')

        resp = client.post(
            "/tools/get_news/invoke",
            json={"arguments": {"category": "general"}},
            headers={"x-correlation-id": "trace-42"},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["tool"] == "get_news"
        assert body["isError"] is False
        assert body["content"] == [{"type": "text", "text": '{\n  "id": 1\n}'}]
        assert body["trace_id"] == "trace-42"
        assert body["error"] is None
        assert resp.headers["x-correlation-id"] == "trace-42"
        assert session.send.call_args.args[0].url == f"{BASE_URL}/news?category=general"

    def test_invoke_api_error(self, client, session, make_response):
        session.send.return_value = make_response(429, b'{"error":"API limit reached"}')

        resp = client.post("/tools/get_news/invoke", json={"arguments": {"category": "general"}})

        assert resp.status_code == 200
        body = resp.json()
        assert body["isError"] is True
        assert body["content"][0]["text"] == 'API error: {"error":"API limit reached"}'
        assert body["error"]["error_type"] == "APIError"
        assert body["error"]["details"]["status"] == 429

    def test_invoke_with_non_object_arguments(self, client, session):
        resp = client.post("/tools/get_news/invoke", json={"arguments": "category=general"})

        body = resp.json()
        assert body["isError"] is True
        assert body["content"][0]["text"] == "Invalid arguments object"
        session.send.assert_not_called()

    def test_invoke_without_arguments(self, client, session, make_response):
        session.send.return_value = make_response(200, b"[]")

        resp = client.post("/tools/get_etf_holdings/invoke", json={})

        assert resp.json()["isError"] is False
        assert session.send.call_args.args[0].url == f"{BASE_URL}/etf/holdings"

    def test_unknown_tool_is_404(self, client):
        resp = client.post("/tools/get_quote/invoke", json={"arguments": {}})
        assert resp.status_code == 404

    def test_metrics_count_invocations(self, client, session, make_response):
        # Arrange
        labels = {"tool": "get_crypto_symbol", "outcome": "ok"}
        before = REGISTRY.get_sample_value("tool_invocations_total", labels) or 0.0
        session.send.return_value = make_response(200, b"{}")

        # Act
        client.post("/tools/get_crypto_symbol/invoke", json={"arguments": {"exchange": "binance"}})
        resp = client.get("/metrics")

        # Assert
        assert resp.status_code == 200
        assert "tool_invocations_total" in resp.text
        assert REGISTRY.get_sample_value("tool_invocations_total", labels) == before + 1

    def test_metrics_count_errors_by_type(self, client, session, make_response):
        labels = {"tool": "get_news", "error_type": "APIError"}
        before = REGISTRY.get_sample_value("tool_errors_total", labels) or 0.0
        session.send.return_value = make_response(500, b"boom")

        client.post("/tools/get_news/invoke", json={"arguments": {"category": "general"}})

        assert REGISTRY.get_sample_value("tool_errors_total", labels) == before + 1
