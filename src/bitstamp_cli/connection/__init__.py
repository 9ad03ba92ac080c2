"""HTTP transport and error taxonomy for the Bitstamp public REST API."""
