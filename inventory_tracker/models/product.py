# inventory_tracker/models/product.py

"""Product record: transfer shape, storage shape, and conversions.

The *transfer* shape is what the API exchanges with clients and what the
UI renders; it exposes a string ``id``. The *storage* shape is the
document as persisted, keyed by the store's own ``_id``.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


class MissingKeyError(KeyError):
    """A storage document was converted before the store assigned a key."""


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _parse_timestamp(value: object) -> datetime | None:
    """Accept a datetime or an ISO-8601 string (``Z`` suffix allowed)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class Product:
    """A single inventory item as seen by callers."""

    id: str
    name: str
    code: str
    count: int
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON wire shape."""
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "count": self.count,
            "description": self.description,
            "createdAt": _format_timestamp(self.created_at),
            "updatedAt": _format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from the JSON wire shape."""
        description = data.get("description")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            code=str(data["code"]),
            count=int(data["count"]),
            description=str(description) if description is not None else None,
            created_at=_parse_timestamp(data.get("createdAt")),
            updated_at=_parse_timestamp(data.get("updatedAt")),
        )


@dataclass
class ProductPatch:
    """The mutable fields of a product, submitted on create and update."""

    name: str
    code: str
    count: int
    description: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Request body for POST / PUT; absent description is omitted."""
        body: dict[str, Any] = {
            "name": self.name,
            "code": self.code,
            "count": self.count,
        }
        if self.description is not None:
            body["description"] = self.description
        return body

    @classmethod
    def from_product(cls, product: Product, **changes: Any) -> "ProductPatch":
        """Copy a product's mutable fields, overriding any in *changes*."""
        fields: dict[str, Any] = {
            "name": product.name,
            "code": product.code,
            "count": product.count,
            "description": product.description,
        }
        fields.update(changes)
        return cls(**fields)


def to_transfer_shape(document: dict[str, Any]) -> Product:
    """Map a stored document to a Product, exposing ``_id`` as ``id``."""
    if document.get("_id") is None:
        raise MissingKeyError("storage document has no _id")
    return Product(
        id=str(document["_id"]),
        name=document["name"],
        code=document["code"],
        count=document["count"],
        description=document.get("description"),
        created_at=_parse_timestamp(document.get("createdAt")),
        updated_at=_parse_timestamp(document.get("updatedAt")),
    )


def to_storage_shape(patch: ProductPatch) -> dict[str, Any]:
    """Build a storage document (without ``_id``) from a patch.

    ``createdAt`` keeps the patch's value when given, otherwise now;
    ``updatedAt`` is always now. No validation happens here.
    """
    now = utc_now()
    return {
        "name": patch.name,
        "code": patch.code,
        "count": patch.count,
        "description": patch.description,
        "createdAt": patch.created_at or now,
        "updatedAt": now,
    }
