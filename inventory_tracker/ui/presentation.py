# inventory_tracker/ui/presentation.py

"""List presentation: sorting, stock status, pagination and edit state.

Everything here is a pure computation over the coordinator's product
collection. Nothing in this module performs I/O; requested mutations
are handed back to the caller as patches.
"""

import locale
import math
from dataclasses import dataclass, field
from enum import Enum

from inventory_tracker.config.settings import Settings
from inventory_tracker.models.product import Product, ProductPatch

LOW_STOCK_THRESHOLD: int = Settings.LOW_STOCK_THRESHOLD

SORTABLE_FIELDS: tuple[str, ...] = ("name", "code", "count")


class StockStatus(Enum):
    """Derived availability of a product."""

    IN_STOCK = "in stock"
    LOW_STOCK = "low stock"
    OUT_OF_STOCK = "out of stock"

    @property
    def label(self) -> str:
        return self.value


def stock_status(count: int) -> StockStatus:
    """Classify a stock count against the low-stock threshold."""
    if count <= 0:
        return StockStatus.OUT_OF_STOCK
    if count <= LOW_STOCK_THRESHOLD:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def total_units(products: list[Product]) -> int:
    """Sum of stock counts across the whole collection."""
    return sum(p.count for p in products)


def low_stock_count(products: list[Product]) -> int:
    """Number of products at or below the low-stock threshold."""
    return sum(1 for p in products if p.count <= LOW_STOCK_THRESHOLD)


# ── Sorting ──────────────────────────────────────────────


@dataclass
class SortState:
    """Selected sort column and direction."""

    field: str = "name"
    ascending: bool = True

    def toggle(self, field: str) -> None:
        """Re-selecting a column flips direction; a new column resets it."""
        if field not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by {field!r}")
        if field == self.field:
            self.ascending = not self.ascending
        else:
            self.field = field
            self.ascending = True


def _sort_key(product: Product, field: str) -> int | str:
    if field == "count":
        return product.count
    return locale.strxfrm(getattr(product, field))


def sort_products(
    products: list[Product], sort_state: SortState,
) -> list[Product]:
    """Return a sorted copy. Equal keys keep their relative order."""
    return sorted(
        products,
        key=lambda p: _sort_key(p, sort_state.field),
        reverse=not sort_state.ascending,
    )


# ── Pagination ───────────────────────────────────────────


@dataclass
class Pagination:
    """1-indexed page cursor over a sorted sequence."""

    items_per_page: int = Settings.DEFAULT_ITEMS_PER_PAGE
    current_page: int = 1

    def total_pages(self, total_items: int) -> int:
        return math.ceil(total_items / self.items_per_page)

    def set_items_per_page(self, items_per_page: int) -> None:
        """Change the page size and return to the first page."""
        if items_per_page < 1:
            raise ValueError("items_per_page must be at least 1")
        self.items_per_page = items_per_page
        self.current_page = 1

    def go_to(self, page: int, total_items: int) -> int:
        """Move to *page*, clamped to the valid range. Returns the page."""
        last = max(self.total_pages(total_items), 1)
        self.current_page = min(max(page, 1), last)
        return self.current_page

    def next_page(self, total_items: int) -> int:
        return self.go_to(self.current_page + 1, total_items)

    def previous_page(self, total_items: int) -> int:
        return self.go_to(self.current_page - 1, total_items)

    def page_slice(self, items: list[Product]) -> list[Product]:
        start = (self.current_page - 1) * self.items_per_page
        return items[start:start + self.items_per_page]

    def window(self, total_items: int) -> tuple[int, int]:
        """1-based inclusive bounds of the rows shown, (0, 0) if none."""
        start = (self.current_page - 1) * self.items_per_page
        end = min(start + self.items_per_page, total_items)
        if start >= end:
            return (0, 0)
        return (start + 1, end)


# ── Edit state ───────────────────────────────────────────


@dataclass
class EditState:
    """Which product (if any) is in full-row or inline-count edit.

    The two modes are tracked independently, but a single product is
    never in both at once.
    """

    editing_id: str | None = None
    count_editing_id: str | None = None
    pending_count: int = 0

    def start_edit(self, product_id: str) -> None:
        self.editing_id = product_id
        if self.count_editing_id == product_id:
            self.cancel_count_edit()

    def cancel_edit(self) -> None:
        self.editing_id = None

    def commit_edit(self) -> str | None:
        """Leave full-row edit; returns the id that was being edited."""
        product_id, self.editing_id = self.editing_id, None
        return product_id

    def start_count_edit(self, product_id: str, current_count: int) -> None:
        self.count_editing_id = product_id
        self.pending_count = current_count
        if self.editing_id == product_id:
            self.cancel_edit()

    def cancel_count_edit(self) -> None:
        self.count_editing_id = None
        self.pending_count = 0

    def commit_count_edit(self) -> tuple[str, int] | None:
        """Leave inline count edit.

        Returns ``(product_id, new_count)`` when the pending value is a
        valid positive count, otherwise ``None``. The edit state is
        cleared either way.
        """
        product_id, new_count = self.count_editing_id, self.pending_count
        self.cancel_count_edit()
        if product_id is None or new_count <= 0:
            return None
        return product_id, new_count

    def handle_count_key(self, key: str) -> tuple[str, int] | None:
        """Enter commits, Escape discards; other keys are ignored."""
        if key == "enter":
            return self.commit_count_edit()
        if key == "escape":
            self.cancel_count_edit()
        return None

    def handle_count_blur(self) -> tuple[str, int] | None:
        """Losing focus commits the inline edit."""
        if self.count_editing_id is None:
            return None
        return self.commit_count_edit()


# ── Form validation ──────────────────────────────────────


def parse_count(raw: str) -> int:
    """Parse a count field; anything unparseable counts as 0."""
    try:
        return int(raw.strip())
    except ValueError:
        return 0


def validate_form(name: str, code: str, count: int) -> dict[str, str]:
    """Return field -> message for every invalid field."""
    errors: dict[str, str] = {}
    if not name.strip():
        errors["name"] = "Product name is required"
    if not code.strip():
        errors["code"] = "Product code is required"
    if count <= 0:
        errors["count"] = "Count must be greater than 0"
    return errors


def build_patch(
    name: str, code: str, count: int, description: str = "",
) -> ProductPatch:
    """Trim user input into a patch; an empty description becomes None."""
    return ProductPatch(
        name=name.strip(),
        code=code.strip(),
        count=count,
        description=description.strip() or None,
    )


# ── Derived view ─────────────────────────────────────────


@dataclass
class ProductRow:
    """One visible table row."""

    product: Product
    status: StockStatus


@dataclass
class ListView:
    """Everything the table needs to render one frame."""

    rows: list[ProductRow]
    current_page: int
    total_pages: int
    first_shown: int
    last_shown: int
    total_products: int
    total_units: int
    low_stock_count: int


@dataclass
class ListPresentation:
    """Sort, pagination and edit state for the product table."""

    sort: SortState = field(default_factory=SortState)
    pagination: Pagination = field(default_factory=Pagination)
    edit: EditState = field(default_factory=EditState)

    def sort_by(self, field_name: str) -> None:
        self.sort.toggle(field_name)

    def visible(self, products: list[Product]) -> list[Product]:
        """Products on the current page, in display order."""
        ordered = sort_products(products, self.sort)
        self.pagination.go_to(self.pagination.current_page, len(ordered))
        return self.pagination.page_slice(ordered)

    def build(self, products: list[Product]) -> ListView:
        """Compute the rows and summary figures for *products*."""
        page_items = self.visible(products)
        first, last = self.pagination.window(len(products))
        return ListView(
            rows=[ProductRow(p, stock_status(p.count)) for p in page_items],
            current_page=self.pagination.current_page,
            total_pages=self.pagination.total_pages(len(products)),
            first_shown=first,
            last_shown=last,
            total_products=len(products),
            total_units=total_units(products),
            low_stock_count=low_stock_count(products),
        )
