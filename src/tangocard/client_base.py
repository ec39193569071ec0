from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


class APIClientError(RuntimeError):
    """Base error for transport failures (network, invalid JSON)."""


class APIClientTimeout(APIClientError):
    """Raised when request times out."""


class BaseAPIClient:
    """
    Reusable base HTTP client for JSON APIs.

    Features:
    - Persistent session
    - Default headers and optional basic auth
    - Opt-in retries (GET only, off by default)
    - Configurable timeout
    - Safe JSON parsing

    HTTP error statuses are returned to the caller together with the parsed
    body instead of being raised, since the APIs we talk to report failures
    as JSON documents on 4xx responses.
    """

    DEFAULT_TIMEOUT = 15  # seconds
    DEFAULT_RETRIES = 0
    DEFAULT_BACKOFF_FACTOR = 0.5

    def __init__(
        self,
        base_url: str,
        default_headers: Optional[Dict[str, str]] = None,
        auth: Optional[Tuple[str, str]] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
    ) -> None:

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        self.session = requests.Session()

        headers = {
            "User-Agent": "tangocard-raas/0.1",
            "Accept": "application/json",
        }

        if default_headers:
            headers.update(default_headers)

        self.session.headers.update(headers)

        if auth is not None:
            self.session.auth = auth

        # Funding calls must never be replayed, so only GET is retryable.
        retry_strategy = Retry(
            total=retries if retries is not None else self.DEFAULT_RETRIES,
            backoff_factor=backoff_factor if backoff_factor is not None else self.DEFAULT_BACKOFF_FACTOR,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ---------------------------------------------------
    # Core request method
    # ---------------------------------------------------
    def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Tuple[int, Any]:
        """
        Send a request and return ``(status_code, parsed_json)``.
        Raises clean, structured errors for transport problems only.
        """

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                params=params,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise APIClientTimeout(
                f"Request timed out calling {url}"
            ) from e
        except requests.RequestException as e:
            raise APIClientError(
                f"Request failed calling {url}"
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise APIClientError(
                f"Invalid JSON returned from {url} (HTTP {response.status_code})"
            ) from e

        return response.status_code, body

    def get_json(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Tuple[int, Any]:
        return self.request_json("GET", endpoint, params=params)

    def post_json(
        self,
        endpoint: str,
        payload: Dict[str, Any],
    ) -> Tuple[int, Any]:
        return self.request_json("POST", endpoint, payload=payload)
