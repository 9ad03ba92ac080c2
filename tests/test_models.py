import json

import pytest

from bitstamp_cli.market_data.decoding import (
    SchemaError,
    decode_list,
    first_element,
    first_success,
    parse_json,
)
from bitstamp_cli.market_data.models import (
    Currency,
    Market,
    Network,
    Order,
    OrderBook,
    Ticker,
)


def test_ticker_decimal_text_survives_reencoding():
    body = (
        '{"timestamp": "1700000000", "open": "0.00000001", "high": "1E-8",'
        ' "low": "100.10", "last": "123456789.123456789012", "volume": "0",'
        ' "vwap": "1.000000000000000001", "bid": "-0.0", "ask": "007",'
        ' "side": "1", "open_24": "99.990", "percent_change_24": null,'
        ' "pair": "BTC/USD", "market": "btcusd"}'
    )

    ticker = Ticker.from_payload(parse_json(body))
    reencoded = json.loads(json.dumps(ticker.to_dict()))

    assert reencoded["last"] == "123456789.123456789012"
    assert reencoded["high"] == "1E-8"
    assert reencoded["vwap"] == "1.000000000000000001"
    assert reencoded["ask"] == "007"
    assert "percent_change_24" not in reencoded
    assert "market" not in reencoded
    assert ticker.pair == "BTC/USD"


def test_order_decimal_text_survives_reencoding():
    order = Order.from_payload(["0.10000000", "12345678901234567890.00000001", "1234"])

    assert order == Order(price="0.10000000", amount="12345678901234567890.00000001")
    assert order.to_wire() == ["0.10000000", "12345678901234567890.00000001"]
    assert order.to_dict() == {"price": "0.10000000", "amount": "12345678901234567890.00000001"}


def test_order_accepts_object_form():
    assert Order.from_payload({"price": "1.5", "amount": "2"}) == Order("1.5", "2")


@pytest.mark.parametrize("payload", [["37000"], [37000, "0.5"], "37000", None])
def test_order_rejects_bad_entries(payload):
    with pytest.raises(SchemaError):
        Order.from_payload(payload)


def test_order_book_requires_both_sides(order_book_payload):
    del order_book_payload["asks"]

    with pytest.raises(SchemaError, match="'bids' and 'asks'"):
        OrderBook.from_payload(order_book_payload)


def test_order_book_error_points_at_entry(order_book_payload):
    order_book_payload["asks"][1] = ["37005.5"]

    with pytest.raises(SchemaError, match=r"asks\[1\]"):
        OrderBook.from_payload(order_book_payload)


def test_order_book_truncated_keeps_best_levels(order_book_payload):
    order_book = OrderBook.from_payload(order_book_payload)

    top = order_book.truncated(2)

    assert [o.price for o in top.bids] == ["37000", "36999.99"]
    assert [o.price for o in top.asks] == ["37001", "37005.5"]
    assert len(order_book.bids) == 3


def test_order_book_round_trip(order_book_payload):
    order_book = OrderBook.from_payload(order_book_payload)

    assert order_book.to_dict() == order_book_payload


def test_currency_uses_wire_type_key(currency_payloads):
    currency = Currency.from_payload(currency_payloads[0])

    assert currency.currency_type == "crypto"
    assert currency.to_dict() == currency_payloads[0]
    assert isinstance(currency.networks[0], Network)


def test_currency_without_optionals_round_trips(currency_payloads):
    currency = Currency.from_payload(currency_payloads[1])

    assert currency.to_dict() == currency_payloads[1]


def test_currency_bad_network_is_reported(currency_payloads):
    currency_payloads[0]["networks"][0]["withdrawal_decimals"] = "8"

    with pytest.raises(SchemaError, match=r"networks\[0\]: field 'withdrawal_decimals' must be an integer"):
        Currency.from_payload(currency_payloads[0])


def test_market_round_trip(market_payloads):
    market = Market.from_payload(market_payloads[1])

    assert market.to_dict() == market_payloads[1]


def test_market_rejects_boolean_decimals(market_payloads):
    market_payloads[0]["base_decimals"] = True

    with pytest.raises(SchemaError, match="base_decimals"):
        Market.from_payload(market_payloads[0])


def test_parse_json_wraps_malformed_body():
    with pytest.raises(SchemaError, match="malformed JSON"):
        parse_json("[{]")


def test_decode_list_names_failing_index():
    with pytest.raises(SchemaError, match=r"markets\[1\]"):
        decode_list([{"price": "1", "amount": "1"}, {}], Order.from_payload, what="markets")


def test_first_success_takes_first_matching_attempt():
    calls = []

    def never(payload):
        calls.append("never")
        raise SchemaError("nope")

    def always(payload):
        calls.append("always")
        return "matched"

    def unused(payload):
        calls.append("unused")
        return "too late"

    result = first_success({}, [("a", never), ("b", always), ("c", unused)])

    assert result == "matched"
    assert calls == ["never", "always"]


def test_first_success_reports_every_failure():
    with pytest.raises(SchemaError) as exc_info:
        first_success([], [("ticker array", first_element(Order.from_payload)), ("ticker object", Order.from_payload)])

    message = str(exc_info.value)
    assert "as ticker array: expected a non-empty array" in message
    assert "as ticker object:" in message
