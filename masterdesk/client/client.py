"""Master-data API client.

Provides an async client for the backend's brand, product and province
resources.

Usage:
    from masterdesk.client import MasterDataClient

    async with MasterDataClient(base_url="http://localhost:3000/api/be") as client:
        brands = await client.brands.list("ac")
        product = await client.products.get("42")
"""

from typing import Any

import httpx

from masterdesk.client.models import Brand, Product, Province
from masterdesk.client.resources import HttpResource
from masterdesk.config.models.api import APIConfig
from masterdesk.errors import RequestFailed
from masterdesk.observability.logging import get_logger

logger = get_logger(__name__)


class MasterDataClient:
    """Async client for the master-data backend.

    Attributes:
        base_url: Base URL of the backend API
        brands: Brand resource
        products: Product resource
        provinces: Province resource
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000/api/be",
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the backend API
            token: Bearer token attached to every request
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

        self.brands: HttpResource[Brand] = HttpResource(self, "brands", "/api/Brands", Brand)
        self.products: HttpResource[Product] = HttpResource(
            self, "products", "/api/Products", Product
        )
        self.provinces: HttpResource[Province] = HttpResource(
            self, "provinces", "/api/Provinces", Province
        )

    @classmethod
    def from_config(
        cls,
        config: APIConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "MasterDataClient":
        """Create a client from the ``api`` settings section."""
        return cls(
            base_url=config.base_url,
            token=config.token,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "MasterDataClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        """Make an API request and return the decoded JSON body.

        Raises:
            RequestFailed: On transport errors and non-2xx responses
        """
        try:
            response = await self._client.request(
                method=method,
                url=path,
                headers=self._headers(),
                json=json,
                params=params,
            )
        except httpx.HTTPError as e:
            logger.warning("backend_request_error", method=method, path=path, error=str(e))
            raise RequestFailed(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            details: Any = None
            try:
                details = response.json()
                message = details.get("title") or details.get("message") or response.text
            except (ValueError, AttributeError):
                message = response.text or response.reason_phrase

            logger.warning(
                "backend_request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise RequestFailed(
                message=message,
                status_code=response.status_code,
                details=details,
            )

        if response.status_code == 204 or not response.content:
            return None

        return response.json()
