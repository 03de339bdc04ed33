"""Finnhub endpoints exposed as tools.

Adding an endpoint means adding a descriptor here; no handler code is needed.
Tool names follow the upstream path with "/" replaced by "_" and a "get_"
prefix, so clients that already know these tool names keep working.
"""
from typing import Dict, Tuple

from .descriptor import ParameterSpec, ToolDescriptor


def _param(key: str, description: str, required: bool = False) -> ParameterSpec:
    return ParameterSpec(key=key, required=required, description=description)


_SKIP_HISTORY = (
    "Skip the first n results. You can use this parameter to query historical constituents data. "
    "The latest result is returned if skip=0 or not set."
)

AIRLINE_PRICE_INDEX = ToolDescriptor(
    name="get_airline_price-index",
    description="Airline Price Index",
    path="/airline/price-index",
    parameters=(
        _param(
            "airline",
            "Filter data by airline. Accepted values: <code>united</code>,<code>delta</code>,"
            "<code>american_airlines</code>,<code>southwest</code>,<code>southern_airways_express</code>,"
            "<code>alaska_airlines</code>,<code>frontier_airlines</code>,<code>jetblue_airways</code>,"
            "<code>spirit_airlines</code>,<code>sun_country_airlines</code>,<code>breeze_airways</code>,"
            "<code>hawaiian_airlines</code>",
            required=True,
        ),
        _param("from", "From date <code>YYYY-MM-DD</code>.", required=True),
        _param("to", "To date <code>YYYY-MM-DD</code>.", required=True),
    ),
)

BOND_TICK = ToolDescriptor(
    name="get_bond_tick",
    description="Bond Tick Data",
    path="/bond/tick",
    parameters=(
        _param("isin", "ISIN.", required=True),
        _param("date", "Date: 2020-04-02.", required=True),
        _param("limit", "Limit number of ticks returned. Maximum value: <code>25000</code>", required=True),
        _param("skip", "Number of ticks to skip. Use this parameter to loop through the entire data.", required=True),
        _param("exchange", "Currently support the following values: <code>trace</code>.", required=True),
    ),
)

CRYPTO_SYMBOL = ToolDescriptor(
    name="get_crypto_symbol",
    description="Crypto Symbol",
    path="/crypto/symbol",
    parameters=(
        _param("exchange", "Exchange you want to get the list of symbols from.", required=True),
    ),
)

ETF_HOLDINGS = ToolDescriptor(
    name="get_etf_holdings",
    description="ETFs Holdings",
    path="/etf/holdings",
    parameters=(
        _param("symbol", "ETF symbol."),
        _param("isin", "ETF isin."),
        _param("skip", _SKIP_HISTORY),
        _param("date", "Query holdings by date. You can use either this param or <code>skip</code> param, not both."),
    ),
)

STOCK_FILINGS = ToolDescriptor(
    name="get_stock_filings",
    description="SEC Filings",
    path="/stock/filings",
    parameters=(
        _param("symbol", "Symbol. Leave <code>symbol</code>,<code>cik</code> and <code>accessNumber</code> empty to list latest filings."),
        _param("cik", "CIK."),
        _param("accessNumber", "Access number of a specific report you want to retrieve data from."),
        _param("form", "Filter by form. You can use this value <code>NT 10-K</code> to find non-timely filings for a company."),
        _param("from", "From date: 2023-03-15."),
        _param("to", "To date: 2023-03-16."),
    ),
)

STOCK_FINANCIALS_REPORTED = ToolDescriptor(
    name="get_stock_financials-reported",
    description="Financials As Reported",
    path="/stock/financials-reported",
    parameters=(
        _param("symbol", "Symbol."),
        _param("cik", "CIK."),
        _param("accessNumber", "Access number of a specific report you want to retrieve financials from."),
        _param("freq", "Frequency. Can be either <code>annual</code> or <code>quarterly</code>. Default to <code>annual</code>."),
        _param("from", "From date <code>YYYY-MM-DD</code>. Filter for endDate."),
        _param("to", "To date <code>YYYY-MM-DD</code>. Filter for endDate."),
    ),
)

GLOBAL_FILINGS_FILTER = ToolDescriptor(
    name="get_global-filings_filter",
    description="Search Filter",
    path="/global-filings/filter",
    parameters=(
        _param(
            "field",
            'Field to get available filters. Available filters are "countries", "exchanges", "exhibits", '
            '"forms", "gics", "naics", "caps", "acts", and "sort".',
            required=True,
        ),
        _param("source", "Get available forms for each source."),
    ),
)

MARKET_NEWS = ToolDescriptor(
    name="get_news",
    description="Market News",
    path="/news",
    parameters=(
        _param(
            "category",
            "This parameter can be 1 of the following values <code>general, forex, crypto, merger</code>.",
            required=True,
        ),
        _param("minId", "Use this field to get only news after this ID. Default to 0"),
    ),
)

MUTUAL_FUND_HOLDINGS = ToolDescriptor(
    name="get_mutual-fund_holdings",
    description="Mutual Funds Holdings",
    path="/mutual-fund/holdings",
    parameters=(
        _param("symbol", "Fund's symbol."),
        _param("isin", "Fund's isin."),
        _param("skip", _SKIP_HISTORY),
    ),
)

FINNHUB_TOOLS: Tuple[ToolDescriptor, ...] = (
    AIRLINE_PRICE_INDEX,
    BOND_TICK,
    CRYPTO_SYMBOL,
    ETF_HOLDINGS,
    STOCK_FILINGS,
    STOCK_FINANCIALS_REPORTED,
    GLOBAL_FILINGS_FILTER,
    MARKET_NEWS,
    MUTUAL_FUND_HOLDINGS,
)

DESCRIPTORS_BY_NAME: Dict[str, ToolDescriptor] = {d.name: d for d in FINNHUB_TOOLS}
