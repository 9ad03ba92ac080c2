# src/bitstamp_cli/market_data/api.py

import logging
from typing import Any, List, Optional

from bitstamp_cli.config import ApiConfig
from bitstamp_cli.connection.exceptions import DecodeError
from bitstamp_cli.connection.rest_client import BitstampRESTClient
from bitstamp_cli.logging_config import structured_log_extra
from bitstamp_cli.market_data.decoding import (
    Decoder,
    SchemaError,
    decode_list,
    first_element,
    first_success,
    parse_json,
)
from bitstamp_cli.market_data.models import Currency, Market, OrderBook, Ticker

logger = logging.getLogger(__name__)

# The ticker endpoint answers with an array for some symbol formats and a
# bare object for others; the array form is tried first.
TICKER_SHAPES = (
    ("ticker array", first_element(Ticker.from_payload)),
    ("ticker object", Ticker.from_payload),
)


def _currencies_from_payload(payload: Any) -> List[Currency]:
    return decode_list(payload, Currency.from_payload, what="currencies")


def _markets_from_payload(payload: Any) -> List[Market]:
    return decode_list(payload, Market.from_payload, what="markets")


def _ticker_from_payload(payload: Any) -> Ticker:
    return first_success(payload, TICKER_SHAPES)


class MarketDataAPI:
    """
    The public interface for Bitstamp market data: one method per REST resource.
    """
    def __init__(self, config: ApiConfig, rest_client: Optional[BitstampRESTClient] = None):
        self._config = config
        self._rest_client = rest_client or BitstampRESTClient(
            request_timeout=config.request_timeout
        )

    def _get_url(self, resource_path: str) -> str:
        base_url = self._config.base_url.rstrip("/")
        return f"{base_url}/{self._config.api_version}/{resource_path}"

    def _get(self, operation: str, resource_path: str, decoder: Decoder, symbol: Optional[str] = None):
        """
        Fetches one resource and decodes it. Transport errors propagate unchanged;
        shape mismatches become DecodeError tagged with the operation name.
        """
        url = self._get_url(resource_path)
        body = self._rest_client.fetch(url)

        try:
            return decoder(parse_json(body))
        except SchemaError as e:
            logger.warning(
                "Could not decode %s response",
                operation,
                extra=structured_log_extra(
                    event="decode_failed", endpoint=operation, url=url, symbol=symbol
                ),
            )
            raise DecodeError(operation, str(e), url=url) from e

    def get_ticker(self, symbol: str) -> Ticker:
        """Returns the current ticker for a market symbol such as ``btcusd``."""
        return self._get("get_ticker", f"ticker/{symbol}", _ticker_from_payload, symbol=symbol)

    def get_currencies(self) -> List[Currency]:
        return self._get("get_currencies", "currencies", _currencies_from_payload)

    def get_markets(self) -> List[Market]:
        return self._get("get_markets", "markets", _markets_from_payload)

    def get_order_book(self, symbol: str) -> OrderBook:
        """Returns the order book with bids and asks in the exchange's order."""
        return self._get("get_order_book", f"order_book/{symbol}", OrderBook.from_payload, symbol=symbol)
