# src/bitstamp_cli/connection/rest_client.py

import json
import logging
from typing import Any, Optional

import requests

from bitstamp_cli import APP_VERSION
from bitstamp_cli.logging_config import structured_log_extra
from .exceptions import (
    HTTPStatusError,
    NetworkError,
    NotFoundError,
    NotFoundReason,
)

DEFAULT_REQUEST_TIMEOUT = 10.0

logger = logging.getLogger(__name__)


def parse_not_found_reason(body: str) -> Optional[NotFoundReason]:
    """
    Looks for a documented 404 sub-code in an error body.

    Bitstamp reports it either as a top-level ``code`` or inside an ``errors``
    list. Returns None when the body is not JSON or carries no known code.
    """
    try:
        payload: Any = json.loads(body)
    except ValueError:
        return None

    candidates = []
    if isinstance(payload, dict):
        candidates.append(payload.get("code"))
        errors = payload.get("errors")
        if isinstance(errors, list):
            candidates.extend(e.get("code") for e in errors if isinstance(e, dict))

    for code in candidates:
        if isinstance(code, str):
            reason = NotFoundReason.from_code(code)
            if reason is not None:
                return reason
    return None


class BitstampRESTClient:
    """
    Issues single GET requests against the public API and classifies the response.
    """
    def __init__(
        self,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.request_timeout = request_timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {"User-Agent": f"bitstamp-cli/{APP_VERSION}"}
        )

    def fetch(self, url: str) -> str:
        """
        Performs one GET and returns the body text of a 2xx response.

        Raises NotFoundError on 404, HTTPStatusError on any other non-2xx status
        and NetworkError when no response was received.
        """
        logger.debug(
            "GET %s",
            url,
            extra=structured_log_extra(event="rest_request", url=url),
        )

        try:
            # Status codes are classified below, raise_for_status is not used.
            response = self.session.get(url, timeout=self.request_timeout)
        except requests.exceptions.Timeout as e:
            self._log_failure(url, "timeout")
            raise NetworkError(f"Request timed out: {e}", url=url) from e
        except requests.exceptions.RequestException as e:
            self._log_failure(url, "network")
            raise NetworkError(f"Network Error: {e}", url=url) from e

        status_code = response.status_code
        if 200 <= status_code < 300:
            return response.text

        if status_code == 404:
            reason = parse_not_found_reason(response.text)
            self._log_failure(url, "not_found", status_code=status_code)
            raise NotFoundError(url=url, reason=reason)

        self._log_failure(url, "http_status", status_code=status_code)
        raise HTTPStatusError(status_code, url=url)

    def _log_failure(self, url: str, kind: str, status_code: Optional[int] = None) -> None:
        logger.warning(
            "Request to %s failed (%s)",
            url,
            kind,
            extra=structured_log_extra(
                event="rest_request_failed", url=url, status_code=status_code
            ),
        )
