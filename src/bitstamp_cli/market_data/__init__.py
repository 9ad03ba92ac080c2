"""Typed records and endpoint operations for Bitstamp market data."""
