# inventory_tracker/services/coordinator.py

"""Application state coordinator.

Owns the session's authoritative product collection and applies the
result of each remote CRUD call to it. The UI never mutates the
collection directly; it dispatches commands.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from inventory_tracker.clients.product_client import (
    ProductApiError,
    ProductClient,
)
from inventory_tracker.models.product import Product, ProductPatch

logger = logging.getLogger("inventory_tracker.coordinator")


# ── Commands ─────────────────────────────────────────────


@dataclass(frozen=True)
class LoadRequested:
    """Reload the collection from the server."""


@dataclass(frozen=True)
class AddRequested:
    """Create a product from a validated patch."""

    patch: ProductPatch


@dataclass(frozen=True)
class EditConfirmed:
    """Replace a product's mutable fields."""

    product_id: str
    patch: ProductPatch


@dataclass(frozen=True)
class DeleteConfirmed:
    """Delete a product after the confirmation gate accepted."""

    product_id: str


@dataclass(frozen=True)
class DismissError:
    """Clear the visible error message."""


Command = (
    LoadRequested | AddRequested | EditConfirmed | DeleteConfirmed | DismissError
)


# ── State ────────────────────────────────────────────────


@dataclass
class InventoryState:
    """Collection, loading flag and last error for one session."""

    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    loading: bool = False
    error: str | None = None


def _message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, ProductApiError) and exc.message:
        return exc.message
    return fallback


class InventoryCoordinator:
    """Applies CRUD results to the in-memory collection.

    Failures never escape: they land in ``state.error`` and the
    collection keeps its last-known-good value.
    """

    def __init__(
        self,
        client: ProductClient,
        listener: Callable[[InventoryState], None] | None = None,
    ) -> None:
        self.client = client
        self.state = InventoryState()
        self._listener = listener

    def _changed(self) -> None:
        if self._listener is not None:
            self._listener(self.state)

    def find(self, product_id: str) -> Product | None:
        """Look up a product in the current collection."""
        for product in self.state.products:
            if product.id == product_id:
                return product
        return None

    async def dispatch(self, command: Command) -> None:
        """Route a UI command to the matching operation."""
        if isinstance(command, LoadRequested):
            await self.load()
        elif isinstance(command, AddRequested):
            await self.add(command.patch)
        elif isinstance(command, EditConfirmed):
            await self.apply_edit(command.product_id, command.patch)
        elif isinstance(command, DeleteConfirmed):
            await self.remove(command.product_id)
        elif isinstance(command, DismissError):
            self.dismiss_error()
        else:
            raise TypeError(f"Unknown command: {command!r}")

    async def load(self) -> None:
        """Replace the collection with the server's list."""
        self.state.loading = True
        self._changed()
        try:
            products = await self.client.list_products()
        except Exception as exc:
            logger.error("Failed to load products: %s", exc, exc_info=True)
            self.state.error = _message(exc, "Failed to load products")
        else:
            self.state.products = products
            self.state.error = None
            logger.info("Loaded %d products", len(products))
        finally:
            self.state.loading = False
            self._changed()

    async def add(self, patch: ProductPatch) -> None:
        """Create a product and put it at the front of the collection."""
        try:
            created = await self.client.create_product(patch)
        except Exception as exc:
            logger.error("Failed to add product %s: %s", patch.code, exc)
            self.state.error = _message(exc, "Failed to add product")
        else:
            self.state.products = [created, *self.state.products]
            logger.info("Added product %s (%s)", created.id, created.code)
        self._changed()

    async def apply_edit(self, product_id: str, patch: ProductPatch) -> None:
        """Update a product and swap in the server-confirmed version."""
        try:
            updated = await self.client.update_product(product_id, patch)
        except Exception as exc:
            logger.error("Failed to update product %s: %s", product_id, exc)
            self.state.error = _message(exc, "Failed to update product")
        else:
            self.state.products = [
                updated if p.id == product_id else p
                for p in self.state.products
            ]
            logger.info("Updated product %s", product_id)
        self._changed()

    async def remove(self, product_id: str) -> None:
        """Delete a product and drop it from the collection."""
        try:
            await self.client.delete_product(product_id)
        except Exception as exc:
            logger.error("Failed to delete product %s: %s", product_id, exc)
            self.state.error = _message(exc, "Failed to delete product")
        else:
            self.state.products = [
                p for p in self.state.products if p.id != product_id
            ]
            logger.info("Deleted product %s", product_id)
        self._changed()

    def dismiss_error(self) -> None:
        self.state.error = None
        self._changed()
