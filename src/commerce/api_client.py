"""
Commerce API Client

Shared client for the commerce platform's admin REST API.
One session per process, shared by the product, brand and link services.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)


class CommerceAPIClient:
    """
    Shared client for the commerce platform admin API.

    Handles:
    - Bearer token authentication
    - Rate limiting (safe to share across worker threads)
    - Retries on 429 and gateway errors; other failures are logged and yield None

    Usage:
        client = CommerceAPIClient(base_url="http://localhost:9000/admin", api_token="sk_xxx")

        result = client.rest_request("GET", "products", params={"limit": 50})
        result = client.rest_request("POST", "brands", {"name": "Essence"})
    """

    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}
    SUPPORTED_METHODS = {"GET", "POST", "DELETE"}

    def __init__(self, base_url: str, api_token: str = "", min_request_interval: float = 0.05):
        """
        Create the client and its session.

        Args:
            base_url: Admin API root (e.g. "http://localhost:9000/admin")
            api_token: Admin API token (sent as a bearer token)
            min_request_interval: Minimum seconds between requests
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token

        self.session = requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        if api_token:
            self.session.headers["Authorization"] = f"Bearer {api_token}"

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = min_request_interval
        self._rate_lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Space requests at least min_request_interval apart."""
        with self._rate_lock:
            now = time.time()
            elapsed = now - self.last_request_time

            if elapsed < self.min_request_interval:
                time.sleep(self.min_request_interval - elapsed)

            self.last_request_time = time.time()
            self.requests_made += 1

    @staticmethod
    def _retry_delay(response: requests.Response, attempt: int) -> float:
        """Seconds to wait: Retry-After when numeric, else 2**attempt."""
        try:
            return float(response.headers["Retry-After"])
        except (KeyError, TypeError, ValueError):
            return float(2 ** attempt)

    def rest_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: int = 30
    ) -> Optional[Dict[str, Any]]:
        """
        Send one admin API request, retrying throttled and gateway failures.

        Args:
            method: HTTP method (GET, POST, DELETE)
            endpoint: API endpoint relative to base_url (e.g., "products")
            data: JSON request body for POST
            params: Query parameters (list values are repeated)
            timeout: Request timeout in seconds

        Returns:
            Response JSON ({} for empty bodies) or None on error
        """
        if method not in self.SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method: {method}")

        url = urljoin(self.base_url + "/", endpoint)

        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            try:
                if method == "GET":
                    response = self.session.get(url, params=params, timeout=timeout)
                elif method == "POST":
                    response = self.session.post(url, json=data, params=params, timeout=timeout)
                else:
                    response = self.session.delete(url, params=params, timeout=timeout)

                # Throttled or gateway failure: wait and try again
                if response.status_code in self.RETRYABLE_STATUS_CODES:
                    retry_after = self._retry_delay(response, attempt)
                    logger.warning("HTTP %d from %s %s, attempt %d/%d, waiting %.1fs",
                                   response.status_code, method, endpoint, attempt + 1,
                                   self.MAX_RETRIES, retry_after)
                    time.sleep(retry_after)
                    continue

                # Anything else at 4xx/5xx is final
                if response.status_code >= 400:
                    error_msg = response.text[:200]
                    logger.error("API Error %d on %s %s: %s",
                                 response.status_code, method, endpoint, error_msg)
                    return None

                if not response.content:
                    return {}
                return response.json()

            except requests.exceptions.Timeout:
                logger.error("Timed out after %ds: %s %s", timeout, method, endpoint)
                return None
            except requests.exceptions.RequestException as e:
                logger.error("%s %s failed: %s", method, endpoint, e)
                return None

        logger.error("Giving up on %s %s after %d attempts", method, endpoint, self.MAX_RETRIES)
        return None

    def test_connection(self) -> bool:
        """
        Test API connection by fetching the store.

        Returns:
            True if connection successful
        """
        result = self.rest_request("GET", "stores")
        if result and result.get("stores"):
            store_name = result["stores"][0].get("name", "Unknown")
            logger.info("Connected to: %s", store_name)
            return True
        return False
