# inventory_tracker/clients/product_client.py

"""Async HTTP client for the products API.

Each call performs one request/response round trip and unwraps the
``{success, data | error}`` envelope. Envelope failures raise
:class:`ProductApiError`; transport failures (connection refused,
malformed JSON) propagate unchanged.
"""

import logging
from typing import Any

from curl_cffi.requests import AsyncSession

from inventory_tracker.config.settings import Settings
from inventory_tracker.models.product import Product, ProductPatch

logger = logging.getLogger("inventory_tracker.client")


class ProductApiError(Exception):
    """The server answered with ``success: false``."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProductClient:
    """Remote access client for the products resource."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self.base_url = (base_url or Settings.API_BASE_URL).rstrip("/")
        self._endpoint = f"{self.base_url}{Settings.API_PREFIX}"
        self._timeout = timeout or Settings.REQUEST_TIMEOUT
        self.session = AsyncSession(headers=dict(Settings.DEFAULT_HEADERS))

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.session.close()

    async def __aenter__(self) -> "ProductClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    async def _request(
        self,
        method: str,
        url: str,
        fallback_error: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the envelope on success."""
        logger.debug("%s %s", method, url)
        resp = await self.session.request(
            method,  # type: ignore[arg-type]
            url,
            json=payload,
            timeout=self._timeout,
        )
        envelope: dict[str, Any] = resp.json()
        if not envelope.get("success"):
            message = envelope.get("error") or fallback_error
            logger.warning(
                "%s %s failed with HTTP %d: %s",
                method,
                url,
                resp.status_code,
                message,
            )
            raise ProductApiError(message, resp.status_code)
        return envelope

    async def list_products(self) -> list[Product]:
        """Fetch all products, newest first."""
        envelope = await self._request(
            "GET", self._endpoint, "Failed to fetch products",
        )
        return [Product.from_dict(item) for item in envelope["data"]]

    async def create_product(self, patch: ProductPatch) -> Product:
        """Create a product and return it with its assigned id."""
        envelope = await self._request(
            "POST",
            self._endpoint,
            "Failed to create product",
            payload=patch.to_dict(),
        )
        return Product.from_dict(envelope["data"])

    async def update_product(
        self, product_id: str, patch: ProductPatch,
    ) -> Product:
        """Replace a product's mutable fields and return the stored result."""
        envelope = await self._request(
            "PUT",
            f"{self._endpoint}/{product_id}",
            "Failed to update product",
            payload=patch.to_dict(),
        )
        return Product.from_dict(envelope["data"])

    async def delete_product(self, product_id: str) -> None:
        """Delete a product by id."""
        await self._request(
            "DELETE",
            f"{self._endpoint}/{product_id}",
            "Failed to delete product",
        )
