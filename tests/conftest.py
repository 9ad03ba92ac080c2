"""Shared fixtures: a test config and realistic Bitstamp payloads."""
from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from bitstamp_cli.config import ApiConfig


def _make_response(status_code: int, body: Any = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body)
    return response


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects; non-string bodies are JSON encoded."""

    return _make_response


@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(
        base_url="https://example.test",
        api_version="v2",
        rate_limit_sec=400,
        rate_limit_min=10000,
        timeout_ms=2500,
    )


@pytest.fixture
def ticker_payload() -> dict[str, Any]:
    return {
        "timestamp": "1700000000",
        "open": "36500.00",
        "high": "37250.12",
        "low": "36111.00",
        "last": "37001.5",
        "volume": "1234.56789012",
        "vwap": "36850.00000001",
        "bid": "37000",
        "ask": "37001",
        "side": "0",
        "open_24": "36400",
        "percent_change_24": "1.65",
    }


@pytest.fixture
def currency_payloads() -> list[dict[str, Any]]:
    return [
        {
            "name": "Bitcoin",
            "currency": "BTC",
            "type": "crypto",
            "symbol": "₿",
            "decimals": 8,
            "logo": "https://assets.bitstamp.net/static/webapp/images/currencies/btc.svg",
            "available_supply": "19500000.00000000",
            "deposit": "Enabled",
            "withdrawal": "Enabled",
            "networks": [
                {
                    "network": "bitcoin",
                    "withdrawal_decimals": 8,
                    "deposit": "Enabled",
                    "withdrawal": "Enabled",
                    "withdrawal_minimum_amount": "0.00020000",
                }
            ],
        },
        {
            "name": "US Dollar",
            "currency": "USD",
            "type": "fiat",
            "decimals": 2,
            "logo": "https://assets.bitstamp.net/static/webapp/images/currencies/usd.svg",
            "available_supply": "",
            "deposit": "Enabled",
            "withdrawal": "Enabled",
        },
        {
            "name": "Ether",
            "currency": "ETH",
            "type": "crypto",
            "symbol": "Ξ",
            "decimals": 18,
            "logo": "https://assets.bitstamp.net/static/webapp/images/currencies/eth.svg",
            "available_supply": "120000000.000000000000000000",
            "deposit": "Enabled",
            "withdrawal": "Disabled",
            "networks": [],
        },
    ]


@pytest.fixture
def market_payloads() -> list[dict[str, Any]]:
    return [
        {
            "name": "BTC/USD",
            "market_symbol": "btcusd",
            "base_currency": "BTC",
            "base_decimals": 8,
            "counter_currency": "USD",
            "counter_decimals": 0,
            "minimum_order_value": "10.00",
            "trading": "Enabled",
            "instant_order_counter_decimals": 2,
            "instant_and_market_orders": "Enabled",
            "description": "Bitcoin / U.S. dollar",
            "market_type": "SPOT",
        },
        {
            "name": "ETH/EUR",
            "market_symbol": "etheur",
            "base_currency": "ETH",
            "base_decimals": 8,
            "counter_currency": "EUR",
            "counter_decimals": 1,
            "minimum_order_value": "10.0",
            "trading": "Enabled",
            "instant_order_counter_decimals": 2,
            "instant_and_market_orders": "Disabled",
            "description": "Ether / Euro",
            "market_type": "SPOT",
        },
    ]


@pytest.fixture
def order_book_payload() -> dict[str, Any]:
    return {
        "timestamp": "1700000000",
        "microtimestamp": "1700000000123456",
        "bids": [["37000", "0.50000000"], ["36999.99", "1.25"], ["36990", "0.00000001"]],
        "asks": [["37001", "0.10000000"], ["37005.5", "2"]],
    }
