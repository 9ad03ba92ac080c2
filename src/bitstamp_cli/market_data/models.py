from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bitstamp_cli.market_data.decoding import (
    SchemaError,
    decode_list,
    optional_str,
    require_int,
    require_mapping,
    require_str,
)

# Price and quantity fields stay as the exchange's decimal text; they are never floats.

_TICKER_DECIMAL_FIELDS = (
    "timestamp",
    "open",
    "high",
    "low",
    "last",
    "volume",
    "vwap",
    "bid",
    "ask",
    "side",
    "open_24",
)


def _without_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Ticker:
    timestamp: str
    open: str
    high: str
    low: str
    last: str
    volume: str
    vwap: str
    bid: str
    ask: str
    side: str
    open_24: str
    percent_change_24: Optional[str] = None
    pair: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Ticker":
        data = require_mapping(payload, "ticker object")
        values = {name: require_str(data, name) for name in _TICKER_DECIMAL_FIELDS}
        return cls(
            **values,
            percent_change_24=optional_str(data, "percent_change_24"),
            pair=optional_str(data, "pair"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {name: getattr(self, name) for name in _TICKER_DECIMAL_FIELDS}
        data["percent_change_24"] = self.percent_change_24
        data["pair"] = self.pair
        return _without_none(data)


@dataclass
class Network:
    network: str
    withdrawal_decimals: int
    deposit: str
    withdrawal: str
    withdrawal_minimum_amount: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Network":
        data = require_mapping(payload, "network object")
        return cls(
            network=require_str(data, "network"),
            withdrawal_decimals=require_int(data, "withdrawal_decimals"),
            deposit=require_str(data, "deposit"),
            withdrawal=require_str(data, "withdrawal"),
            withdrawal_minimum_amount=optional_str(data, "withdrawal_minimum_amount"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _without_none(
            {
                "network": self.network,
                "withdrawal_decimals": self.withdrawal_decimals,
                "deposit": self.deposit,
                "withdrawal": self.withdrawal,
                "withdrawal_minimum_amount": self.withdrawal_minimum_amount,
            }
        )


@dataclass
class Currency:
    name: str
    currency: str
    currency_type: str
    decimals: int
    logo: str
    available_supply: str
    deposit: str
    withdrawal: str
    symbol: Optional[str] = None
    networks: Optional[List[Network]] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Currency":
        data = require_mapping(payload, "currency object")
        networks = None
        if data.get("networks") is not None:
            networks = decode_list(data["networks"], Network.from_payload, what="networks")
        return cls(
            name=require_str(data, "name"),
            currency=require_str(data, "currency"),
            currency_type=require_str(data, "type"),
            symbol=optional_str(data, "symbol"),
            decimals=require_int(data, "decimals"),
            logo=require_str(data, "logo"),
            available_supply=require_str(data, "available_supply"),
            deposit=require_str(data, "deposit"),
            withdrawal=require_str(data, "withdrawal"),
            networks=networks,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _without_none(
            {
                "name": self.name,
                "currency": self.currency,
                "type": self.currency_type,
                "symbol": self.symbol,
                "decimals": self.decimals,
                "logo": self.logo,
                "available_supply": self.available_supply,
                "deposit": self.deposit,
                "withdrawal": self.withdrawal,
                "networks": (
                    [n.to_dict() for n in self.networks] if self.networks is not None else None
                ),
            }
        )


@dataclass
class Market:
    name: str
    market_symbol: str
    base_currency: str
    base_decimals: int
    counter_currency: str
    counter_decimals: int
    minimum_order_value: str
    trading: str
    instant_order_counter_decimals: int
    instant_and_market_orders: str
    description: str
    market_type: str

    @classmethod
    def from_payload(cls, payload: Any) -> "Market":
        data = require_mapping(payload, "market object")
        return cls(
            name=require_str(data, "name"),
            market_symbol=require_str(data, "market_symbol"),
            base_currency=require_str(data, "base_currency"),
            base_decimals=require_int(data, "base_decimals"),
            counter_currency=require_str(data, "counter_currency"),
            counter_decimals=require_int(data, "counter_decimals"),
            minimum_order_value=require_str(data, "minimum_order_value"),
            trading=require_str(data, "trading"),
            instant_order_counter_decimals=require_int(data, "instant_order_counter_decimals"),
            instant_and_market_orders=require_str(data, "instant_and_market_orders"),
            description=require_str(data, "description"),
            market_type=require_str(data, "market_type"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "market_symbol": self.market_symbol,
            "base_currency": self.base_currency,
            "base_decimals": self.base_decimals,
            "counter_currency": self.counter_currency,
            "counter_decimals": self.counter_decimals,
            "minimum_order_value": self.minimum_order_value,
            "trading": self.trading,
            "instant_order_counter_decimals": self.instant_order_counter_decimals,
            "instant_and_market_orders": self.instant_and_market_orders,
            "description": self.description,
            "market_type": self.market_type,
        }


@dataclass
class Order:
    price: str
    amount: str

    @classmethod
    def from_payload(cls, payload: Any) -> "Order":
        """Accepts the wire form ``[price, amount, ...]`` or ``{"price", "amount"}``."""
        if isinstance(payload, list):
            if len(payload) < 2:
                raise SchemaError(f"order entry needs price and amount, got {len(payload)} element(s)")
            data = {"price": payload[0], "amount": payload[1]}
        else:
            data = require_mapping(payload, "order entry")
        return cls(price=require_str(data, "price"), amount=require_str(data, "amount"))

    def to_dict(self) -> Dict[str, Any]:
        return {"price": self.price, "amount": self.amount}

    def to_wire(self) -> List[str]:
        return [self.price, self.amount]


@dataclass
class OrderBook:
    timestamp: str
    microtimestamp: str
    bids: List[Order] = field(default_factory=list)
    asks: List[Order] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "OrderBook":
        data = require_mapping(payload, "order book object")
        if "bids" not in data or "asks" not in data:
            raise SchemaError("order book needs both 'bids' and 'asks'")
        return cls(
            timestamp=require_str(data, "timestamp"),
            microtimestamp=require_str(data, "microtimestamp"),
            bids=decode_list(data["bids"], Order.from_payload, what="bids"),
            asks=decode_list(data["asks"], Order.from_payload, what="asks"),
        )

    def truncated(self, depth: int) -> "OrderBook":
        """Returns a copy holding only the first ``depth`` levels per side, order kept."""
        return OrderBook(
            timestamp=self.timestamp,
            microtimestamp=self.microtimestamp,
            bids=self.bids[:depth],
            asks=self.asks[:depth],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "microtimestamp": self.microtimestamp,
            "bids": [order.to_wire() for order in self.bids],
            "asks": [order.to_wire() for order in self.asks],
        }
