# inventory_tracker/api/controller/products_controller.py

"""REST controller for the products resource.

Every response is wrapped in an envelope:
``{"success": true, "data": ...}`` on success and
``{"success": false, "error": "..."}`` on failure.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from inventory_tracker.config.settings import Settings
from inventory_tracker.models.errors import (
    InventoryError,
    ProductNotFoundError,
    ProductValidationError,
)
from inventory_tracker.models.product import (
    ProductPatch,
    to_storage_shape,
    to_transfer_shape,
)
from inventory_tracker.storage.product_store import ProductStore, is_valid_key

logger = logging.getLogger("inventory_tracker.api")

router = APIRouter(prefix=Settings.API_PREFIX, tags=["products"])


class ProductPayload(BaseModel):
    """Incoming body for POST and PUT. Presence is checked by hand so
    that missing fields produce the envelope error, not a 422."""

    name: Optional[str] = None
    code: Optional[str] = None
    count: Optional[int] = None
    description: Optional[str] = None


def get_store(request: Request) -> ProductStore:
    """Resolve the store attached to the running application."""
    store: ProductStore = request.app.state.store
    return store


def _ok(data: Any) -> JSONResponse:
    return JSONResponse({"success": True, "data": data})


def _fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": message}, status_code=status_code,
    )


def _to_patch(payload: ProductPayload, allow_zero: bool) -> ProductPatch:
    """Check required fields and count bounds, then build a patch."""
    name = (payload.name or "").strip()
    code = (payload.code or "").strip()
    if not name or not code or payload.count is None:
        raise ProductValidationError("Name, code, and count are required")
    if payload.count <= 0 and not allow_zero:
        raise ProductValidationError("Count must be greater than 0")
    if payload.count < 0:
        raise ProductValidationError("Count cannot be negative")
    description = (payload.description or "").strip() or None
    return ProductPatch(
        name=name, code=code, count=payload.count, description=description,
    )


def _check_id(product_id: str) -> None:
    if not is_valid_key(product_id):
        raise ProductValidationError("Invalid product ID")


@router.get("")
def list_products(store: ProductStore = Depends(get_store)) -> JSONResponse:
    """Return all products, newest first."""
    try:
        documents = store.find_all()
        return _ok([to_transfer_shape(d).to_dict() for d in documents])
    except Exception:
        logger.error("Error fetching products", exc_info=True)
        return _fail(500, "Failed to fetch products")


@router.post("")
def create_product(
    payload: ProductPayload,
    store: ProductStore = Depends(get_store),
) -> JSONResponse:
    """Create a product. Codes must be unique."""
    try:
        patch = _to_patch(payload, allow_zero=False)
        document = store.insert_if_absent(to_storage_shape(patch))
        return _ok(to_transfer_shape(document).to_dict())
    except InventoryError as exc:
        return _fail(exc.status_code, exc.message)
    except Exception:
        logger.error("Error creating product", exc_info=True)
        return _fail(500, "Failed to create product")


@router.put("/{product_id}")
def update_product(
    product_id: str,
    payload: ProductPayload,
    store: ProductStore = Depends(get_store),
) -> JSONResponse:
    """Replace the mutable fields of an existing product."""
    try:
        _check_id(product_id)
        patch = _to_patch(payload, allow_zero=True)
        document = store.replace(product_id, to_storage_shape(patch))
        if document is None:
            raise ProductNotFoundError()
        return _ok(to_transfer_shape(document).to_dict())
    except InventoryError as exc:
        return _fail(exc.status_code, exc.message)
    except Exception:
        logger.error("Error updating product %s", product_id, exc_info=True)
        return _fail(500, "Failed to update product")


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    store: ProductStore = Depends(get_store),
) -> JSONResponse:
    """Delete a product by id."""
    try:
        _check_id(product_id)
        if not store.delete(product_id):
            raise ProductNotFoundError()
        return JSONResponse(
            {"success": True, "message": "Product deleted successfully"},
        )
    except InventoryError as exc:
        return _fail(exc.status_code, exc.message)
    except Exception:
        logger.error("Error deleting product %s", product_id, exc_info=True)
        return _fail(500, "Failed to delete product")
