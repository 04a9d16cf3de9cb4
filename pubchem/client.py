"""
PubChem HTTP client.

Low-level transport for the PUG REST API:
- One synchronous GET per call; no retries, no caching
- Network failures become RequestError / RequestTimeoutError
- Non-2xx responses become ApiError subclasses chosen by PUGREST fault code

This client returns raw httpx responses. Use ResponseParser to turn them
into typed values.
"""

import logging

import httpx

from pubchem.exceptions import (
    FAULT_CODE_ERRORS,
    STATUS_CODE_ERRORS,
    ApiError,
    RequestError,
    RequestTimeoutError,
)
from pubchem.parser import ResponseParser
from pubchem.settings import pubchem_settings

logger = logging.getLogger(__name__)


class PubChemClient:
    """
    Low-level HTTP client for PubChem PUG REST API.

    Example:
        with PubChemClient() as client:
            response = client.get("/compound/cid/2244/property/Title/TXT")
            print(response.text)
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.base_url = base_url or pubchem_settings.pubchem_base_url
        self.timeout = timeout or pubchem_settings.pubchem_timeout

        self._client: httpx.Client | None = http_client
        self._owns_client = http_client is None
        self._parser = ResponseParser()

    def _get_client(self) -> httpx.Client:
        """Lazy initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={"User-Agent": pubchem_settings.pubchem_user_agent},
                follow_redirects=True,
            )
        return self._client

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def get(self, path: str) -> httpx.Response:
        """
        Make a single GET request.

        Args:
            path: API path relative to the base URL

        Returns:
            The successful (2xx) response

        Raises:
            RequestTimeoutError: Transport timed out
            RequestError: Network failure
            ApiError: Non-2xx status (NotFoundError, BadRequestError, ...)
        """
        if pubchem_settings.pubchem_log_requests:
            logger.debug(f"PubChem GET {path}")

        client = self._get_client()
        try:
            response = client.get(path)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request timeout: {e}", timeout=self.timeout) from e
        except httpx.RequestError as e:
            raise RequestError(f"Request error: {e}") from e

        if not 200 <= response.status_code < 300:
            error = self._api_error(response)
            logger.warning(f"PubChem request failed for {path}: {error}")
            raise error

        return response

    def _api_error(self, response: httpx.Response) -> ApiError:
        """Map an error response to the matching ApiError subclass."""
        status_code = response.status_code
        fault = self._parser.parse_fault(response)

        if fault is not None:
            error_cls = FAULT_CODE_ERRORS.get(
                fault.code, STATUS_CODE_ERRORS.get(status_code, ApiError)
            )
            return error_cls(
                fault.message or fault.code,
                status_code=status_code,
                code=fault.code,
                details=fault.details,
            )

        error_cls = STATUS_CODE_ERRORS.get(status_code, ApiError)
        return error_cls(f"HTTP error {status_code}", status_code=status_code)

    # =========================================================================
    # Cleanup
    # =========================================================================

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
        if self._owns_client:
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
