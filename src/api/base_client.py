"""
Base API client with common functionality
"""

from typing import Optional, Dict, Any
import httpx
from src.utils.error_handler import APIError, server_message
from src.utils.logger import logger


class BaseAPIClient:
    """Base class for API clients with common functionality"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base API client

        Args:
            base_url: Base URL for API
            timeout: Request timeout in seconds
            headers: Headers sent with every request
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_headers: Dict[str, str] = dict(headers or {})
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.logger = logger

    def set_header(self, name: str, value: str):
        """Attach a header to every subsequent request"""
        self.default_headers[name] = value

    def remove_header(self, name: str):
        """Stop sending a default header"""
        self.default_headers.pop(name, None)

    async def _request(
        self,
        method: str,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        """
        Make HTTP request

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint
            headers: Extra request headers
            params: Query parameters
            json_data: JSON body

        Returns:
            Decoded JSON body, or None for an empty body

        Raises:
            APIError: If the API returns an error status
            httpx.HTTPError: If the request cannot be sent
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        request_headers = {**self.default_headers, **(headers or {})}

        self.logger.debug(f"Request: {method} {url}")

        request_kwargs = {
            "method": method,
            "url": url,
            "headers": request_headers,
            "params": params,
        }
        if json_data is not None:
            request_kwargs["json"] = json_data

        try:
            response = await self.client.request(**request_kwargs)
        except httpx.RequestError as e:
            self.logger.error(f"Request error: {method} {url}: {e}")
            raise

        self.logger.debug(f"Response status: {response.status_code}")
        if response.status_code >= 400:
            self.logger.warning(f"Error response body: {response.text[:1000]}")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise APIError(server_message(response), status_code=response.status_code) from e

        # Handle empty response (204 No Content or empty body)
        if response.status_code == 204 or not response.text.strip():
            return None

        try:
            return response.json()
        except ValueError:
            self.logger.warning(f"Non-JSON response body from {method} {url}")
            return None

    async def get(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make GET request"""
        return await self._request("GET", endpoint, headers=headers, params=params)

    async def post(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        """Make POST request"""
        return await self._request("POST", endpoint, headers=headers, params=params, json_data=json_data)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
