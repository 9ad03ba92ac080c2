"""Command line interface for the Bitstamp public API."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any, Callable, Iterable

from bitstamp_cli import APP_VERSION
from bitstamp_cli.config import ApiConfig, ConfigError, load_config
from bitstamp_cli.connection.exceptions import BitstampAPIError
from bitstamp_cli.logging_config import configure_logging, structured_log_extra
from bitstamp_cli.market_data.api import MarketDataAPI

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _print_error(message: str) -> int:
    """Print an error message to stderr and return a non-zero exit code."""

    print(message, file=sys.stderr)
    return 1


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def _print_lines(values: Iterable[str]) -> None:
    for value in values:
        print(value)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _ticker_command(api: MarketDataAPI, args: argparse.Namespace) -> int:
    """Print the ticker for one market symbol."""

    ticker = api.get_ticker(args.market_symbol)
    _print_json(ticker.to_dict())
    return 0


def _currencies_command(api: MarketDataAPI, args: argparse.Namespace) -> int:
    """Print every currency, or only the currency codes with --brief."""

    currencies = api.get_currencies()
    if args.brief:
        _print_lines(c.currency for c in currencies)
    else:
        _print_json([c.to_dict() for c in currencies])
    return 0


def _markets_command(api: MarketDataAPI, args: argparse.Namespace) -> int:
    """Print every market, or only the market symbols with --brief."""

    markets = api.get_markets()
    if args.brief:
        _print_lines(m.market_symbol for m in markets)
    else:
        _print_json([m.to_dict() for m in markets])
    return 0


def _order_book_command(api: MarketDataAPI, args: argparse.Namespace) -> int:
    """Print the order book for one market symbol, optionally limited to --depth levels."""

    order_book = api.get_order_book(args.market_symbol)
    if args.depth is not None:
        order_book = order_book.truncated(args.depth)
    _print_json(order_book.to_dict())
    return 0


def _build_api(config: ApiConfig) -> MarketDataAPI:
    return MarketDataAPI(config)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bitstamp", description="A console Bitstamp API client")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {APP_VERSION}"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to the JSON or YAML config file (defaults to $BITSTAMP_CLI_CONFIG, "
        "./config.json, then the user config directory)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Log level for the JSON logs written to stderr (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ticker_parser = subparsers.add_parser(
        "ticker", help="Get ticker information for a market symbol"
    )
    ticker_parser.add_argument(
        "market_symbol",
        help="Market symbol (e.g. btcusd). Use the `markets` command to list all available markets",
    )
    ticker_parser.set_defaults(func=_ticker_command)

    currencies_parser = subparsers.add_parser("currencies", help="List all available currencies")
    currencies_parser.add_argument(
        "-b", "--brief", action="store_true", help="Show only currency codes"
    )
    currencies_parser.set_defaults(func=_currencies_command)

    markets_parser = subparsers.add_parser("markets", help="List all available markets")
    markets_parser.add_argument(
        "-b", "--brief", action="store_true", help="Show only market symbols"
    )
    markets_parser.set_defaults(func=_markets_command)

    order_book_parser = subparsers.add_parser(
        "order-book", help="Get the order book for a market symbol"
    )
    order_book_parser.add_argument("market_symbol", help="Market symbol (e.g. btcusd)")
    order_book_parser.add_argument(
        "--depth",
        type=_positive_int,
        help="Show only the best N bids and asks",
    )
    order_book_parser.set_defaults(func=_order_book_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the `bitstamp` console script."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=getattr(logging, args.log_level))

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error(
            "Configuration could not be loaded",
            extra=structured_log_extra(event="config_load_failed", error=str(exc)),
        )
        return _print_error(f"Configuration error: {exc}")

    command: Callable[[MarketDataAPI, argparse.Namespace], int] = getattr(args, "func")
    try:
        return command(_build_api(config), args)
    except BitstampAPIError as exc:
        logger.error(
            "Command %s failed",
            args.command,
            extra=structured_log_extra(
                event="command_failed", url=exc.url, error_type=type(exc).__name__
            ),
        )
        return _print_error(f"Error: {exc}")


if __name__ == "__main__":
    sys.exit(main())
