"""Tests for tool descriptors and the Finnhub endpoint catalog."""
import pytest
from pydantic import ValidationError

from finnhub_tools.tools.catalog import (
    DESCRIPTORS_BY_NAME,
    FINNHUB_TOOLS,
    MARKET_NEWS,
    MUTUAL_FUND_HOLDINGS,
)
from finnhub_tools.tools.descriptor import ParameterSpec, ToolDescriptor


EXPECTED_ENDPOINTS = {
    "get_airline_price-index": ("/airline/price-index", ["airline", "from", "to"], ["airline", "from", "to"]),
    "get_bond_tick": ("/bond/tick", ["isin", "date", "limit", "skip", "exchange"],
                      ["isin", "date", "limit", "skip", "exchange"]),
    "get_crypto_symbol": ("/crypto/symbol", ["exchange"], ["exchange"]),
    "get_etf_holdings": ("/etf/holdings", ["symbol", "isin", "skip", "date"], []),
    "get_stock_filings": ("/stock/filings", ["symbol", "cik", "accessNumber", "form", "from", "to"], []),
    "get_stock_financials-reported": ("/stock/financials-reported",
                                      ["symbol", "cik", "accessNumber", "freq", "from", "to"], []),
    "get_global-filings_filter": ("/global-filings/filter", ["field", "source"], ["field"]),
    "get_news": ("/news", ["category", "minId"], ["category"]),
    "get_mutual-fund_holdings": ("/mutual-fund/holdings", ["symbol", "isin", "skip"], []),
}


class TestCatalog:
    """Test that the catalog matches the upstream endpoints."""

    def test_all_endpoints_present(self):
        assert set(DESCRIPTORS_BY_NAME) == set(EXPECTED_ENDPOINTS)
        assert len(FINNHUB_TOOLS) == len(EXPECTED_ENDPOINTS)

    @pytest.mark.parametrize("name", sorted(EXPECTED_ENDPOINTS))
    def test_path_and_parameters(self, name):
        path, keys, required = EXPECTED_ENDPOINTS[name]
        descriptor = DESCRIPTORS_BY_NAME[name]

        assert descriptor.path == path
        assert [p.key for p in descriptor.parameters] == keys
        assert list(descriptor.required_keys) == required
        assert descriptor.description

    def test_every_parameter_is_documented(self):
        for descriptor in FINNHUB_TOOLS:
            for param in descriptor.parameters:
                assert param.description, f"{descriptor.name}.{param.key} has no description"


class TestToolDescriptor:
    """Test descriptor validation and JSON schema output."""

    def test_input_schema_for_news(self):
        schema = MARKET_NEWS.input_schema()

        assert schema["type"] == "object"
        assert list(schema["properties"]) == ["category", "minId"]
        assert schema["properties"]["category"]["type"] == "string"
        assert "general, forex, crypto, merger" in schema["properties"]["category"]["description"]
        assert schema["required"] == ["category"]

    def test_input_schema_with_no_required_fields(self):
        assert MUTUAL_FUND_HOLDINGS.input_schema()["required"] == []

    def test_descriptor_is_immutable(self):
        with pytest.raises(ValidationError):
            MARKET_NEWS.path = "/other"

    def test_duplicate_parameter_keys_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ToolDescriptor(
                name="get_dupe",
                description="Dupe",
                path="/dupe",
                parameters=(ParameterSpec(key="symbol"), ParameterSpec(key="symbol")),
            )
        assert "duplicate parameter key" in str(exc_info.value)

    def test_path_must_start_with_slash(self):
        with pytest.raises(ValidationError):
            ToolDescriptor(name="get_bad", description="Bad", path="news")

    def test_parameter_defaults(self):
        spec = ParameterSpec(key="symbol")
        assert spec.required is False
        assert spec.description == ""
