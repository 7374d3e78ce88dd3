# inventory_tracker/ui/app.py

"""Terminal UI for the inventory tracker."""

import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    LoadingIndicator,
    Select,
    Static,
)

from inventory_tracker.clients.product_client import ProductClient
from inventory_tracker.config.settings import Settings
from inventory_tracker.models.product import Product, ProductPatch
from inventory_tracker.services.coordinator import (
    AddRequested,
    Command,
    DeleteConfirmed,
    DismissError,
    EditConfirmed,
    InventoryCoordinator,
    InventoryState,
    LoadRequested,
)
from inventory_tracker.ui.confirm_gate import ConfirmationGate
from inventory_tracker.ui.presentation import (
    ListPresentation,
    ListView,
    StockStatus,
    parse_count,
)
from inventory_tracker.ui.screens import (
    ConfirmScreen,
    CountInput,
    ProductFormScreen,
)

logger = logging.getLogger("inventory_tracker.ui")

_COLUMNS: list[tuple[str, str]] = [
    ("Name", "name"),
    ("Code", "code"),
    ("Stock", "count"),
    ("Description", "description"),
    ("Status", "status"),
]

_STATUS_STYLES: dict[StockStatus, str] = {
    StockStatus.IN_STOCK: "green",
    StockStatus.LOW_STOCK: "bold yellow",
    StockStatus.OUT_OF_STOCK: "bold red",
}


class InventoryApp(App[object]):
    """Single-screen product table with add, edit and delete."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_product", "Add"),
        Binding("e", "edit_product", "Edit"),
        Binding("c", "edit_count", "Count"),
        Binding("d", "delete_product", "Delete"),
        Binding("1", "sort('name')", "Sort Name"),
        Binding("2", "sort('code')", "Sort Code"),
        Binding("3", "sort('count')", "Sort Stock"),
        Binding("left_square_bracket", "previous_page", "Prev Page"),
        Binding("right_square_bracket", "next_page", "Next Page"),
        Binding("r", "reload", "Reload"),
        Binding("x", "dismiss_error", "Dismiss Error"),
    ]

    def __init__(self, client: ProductClient | None = None) -> None:
        super().__init__()
        self._owns_client = client is None
        self.client = client or ProductClient()
        self.coordinator = InventoryCoordinator(
            self.client, listener=self._on_state_changed
        )
        self.presentation = ListPresentation()
        self.gate = ConfirmationGate()
        self.list_view: ListView | None = None

    # ── Layout ───────────────────────────────────────────

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        page_sizes = [
            (str(n), n) for n in Settings.ITEMS_PER_PAGE_OPTIONS
        ]
        yield Header()
        yield Container(
            Static("📦 Inventory", id="title"),
            Horizontal(
                Static("", id="error_message"),
                Button("×", id="dismiss_error_btn"),
                id="error_bar",
            ),
            Horizontal(
                Static("", id="summary"),
                Button("Add product", variant="primary", id="add_btn"),
                id="summary_bar",
            ),
            LoadingIndicator(id="loading"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="products_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            CountInput(type="integer", id="count_input"),
            Horizontal(
                Button("◀ Prev", id="prev_page_btn"),
                Static("", id="page_label"),
                Button("Next ▶", id="next_page_btn"),
                Select(
                    page_sizes,
                    value=Settings.DEFAULT_ITEMS_PER_PAGE,
                    allow_blank=False,
                    id="page_size",
                ),
                id="pagination_bar",
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Hide transient widgets and load the collection."""
        self.query_one("#count_input", CountInput).display = False
        self.query_one("#error_bar").display = False
        self.send(LoadRequested())

    async def on_unmount(self) -> None:
        if self._owns_client:
            await self.client.close()

    # ── State flow ───────────────────────────────────────

    def send(self, command: Command) -> None:
        """Hand a command to the coordinator without blocking the UI."""
        logger.debug("Dispatching %s", type(command).__name__)
        self.run_worker(
            self.coordinator.dispatch(command),
            group="coordinator",
        )

    @property
    def products(self) -> list[Product]:
        return self.coordinator.state.products

    def _on_state_changed(self, state: InventoryState) -> None:
        if not self.is_running:
            return
        self.query_one("#loading").display = state.loading
        error_bar = self.query_one("#error_bar")
        error_bar.display = state.error is not None
        if state.error is not None:
            self.query_one("#error_message", Static).update(
                f"⚠ {state.error}"
            )
        self.populate_table()

    def populate_table(self) -> None:
        """Render the current page of the collection."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#products_table", DataTable),
        )
        table.clear(columns=True)
        sort = self.presentation.sort
        for label, key in _COLUMNS:
            if key == sort.field:
                label = f"{label} {'▲' if sort.ascending else '▼'}"
            table.add_column(label, key=key)

        view = self.presentation.build(self.products)
        self.list_view = view
        for row in view.rows:
            p = row.product
            table.add_row(
                p.name[:40],
                p.code,
                str(p.count),
                (p.description or "")[:40],
                Text(row.status.label, style=_STATUS_STYLES[row.status]),
                key=p.id,
            )

        summary = (
            f"{view.total_products} products • "
            f"{view.total_units} total units"
        )
        if view.low_stock_count:
            summary += f" • {view.low_stock_count} low stock"
        self.query_one("#summary", Static).update(summary)
        self.query_one("#page_label", Static).update(
            f"Page {view.current_page}/{max(view.total_pages, 1)} • "
            f"Showing {view.first_shown}-{view.last_shown}"
            f" of {view.total_products}"
        )

    def selected_product(self) -> Product | None:
        """Product under the table cursor, if any."""
        if self.list_view is None or not self.list_view.rows:
            return None
        table = self.query_one("#products_table", DataTable)
        row = table.cursor_row
        if 0 <= row < len(self.list_view.rows):
            return self.list_view.rows[row].product
        return None

    # ── Events ───────────────────────────────────────────

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        button_id = event.button.id
        if button_id == "add_btn":
            self.action_add_product()
        elif button_id == "dismiss_error_btn":
            self.action_dismiss_error()
        elif button_id == "prev_page_btn":
            self.action_previous_page()
        elif button_id == "next_page_btn":
            self.action_next_page()

    def on_select_changed(self, event: Select.Changed) -> None:
        """Apply a new page size; the view returns to page 1."""
        if event.select.id != "page_size":
            return
        self.presentation.pagination.set_items_per_page(
            cast(int, event.value)
        )
        self.populate_table()

    def on_data_table_header_selected(
        self, event: DataTable.HeaderSelected
    ) -> None:
        """Sort by the clicked column when it is sortable."""
        key = event.column_key.value
        if key in ("name", "code", "count"):
            self.action_sort(key)

    # ── Add / edit ───────────────────────────────────────

    def action_add_product(self) -> None:
        """Open the add-product form."""
        self.push_screen(ProductFormScreen(), self._on_add_result)

    def _on_add_result(self, patch: ProductPatch | None) -> None:
        if patch is not None:
            self.send(AddRequested(patch))

    def action_edit_product(self) -> None:
        """Open the full-row editor for the selected product."""
        product = self.selected_product()
        if product is None:
            return
        self.presentation.edit.start_edit(product.id)
        self.push_screen(
            ProductFormScreen(product), self._on_edit_result
        )

    def _on_edit_result(self, patch: ProductPatch | None) -> None:
        edit = self.presentation.edit
        if patch is None:
            edit.cancel_edit()
            return
        product_id = edit.commit_edit()
        if product_id is not None:
            self.send(EditConfirmed(product_id, patch))

    def action_edit_count(self) -> None:
        """Start an inline stock-count edit on the selected product."""
        product = self.selected_product()
        if product is None:
            return
        self.presentation.edit.start_count_edit(product.id, product.count)
        count_input = self.query_one("#count_input", CountInput)
        count_input.value = str(product.count)
        count_input.border_title = f"Stock for {product.name}"
        count_input.display = True
        count_input.focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "count_input":
            self.presentation.edit.pending_count = parse_count(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "count_input":
            self._finish_count_edit(
                self.presentation.edit.handle_count_key("enter")
            )

    def on_count_input_cancelled(self, event: CountInput.Cancelled) -> None:
        self._finish_count_edit(
            self.presentation.edit.handle_count_key("escape")
        )

    def on_count_input_left(self, event: CountInput.Left) -> None:
        self._finish_count_edit(self.presentation.edit.handle_count_blur())

    def _finish_count_edit(self, committed: tuple[str, int] | None) -> None:
        count_input = self.query_one("#count_input", CountInput)
        if count_input.display:
            count_input.display = False
            self.query_one("#products_table").focus()
        if committed is None:
            return
        product_id, new_count = committed
        product = self.coordinator.find(product_id)
        if product is not None and product.count != new_count:
            self.send(
                EditConfirmed(
                    product_id,
                    ProductPatch.from_product(product, count=new_count),
                )
            )

    # ── Delete ───────────────────────────────────────────

    def action_delete_product(self) -> None:
        """Ask for confirmation before deleting the selected product."""
        product = self.selected_product()
        if product is None or self.gate.is_open:
            return
        target = self.gate.open(
            product.id,
            product.name,
            lambda product_id: self.coordinator.dispatch(
                DeleteConfirmed(product_id)
            ),
        )
        self.push_screen(
            ConfirmScreen(
                "Delete product",
                f'Delete "{target.label}"? This cannot be undone.',
            ),
            self._on_delete_result,
        )

    def _on_delete_result(self, confirmed: bool | None) -> None:
        if confirmed:
            self.run_worker(self.gate.confirm(), group="coordinator")
        else:
            self.gate.cancel()

    # ── Sorting / paging ─────────────────────────────────

    def action_sort(self, field: str) -> None:
        """Sort by *field*; pressing it again flips the direction."""
        self.presentation.sort_by(field)
        self.populate_table()

    def action_previous_page(self) -> None:
        self.presentation.pagination.previous_page(len(self.products))
        self.populate_table()

    def action_next_page(self) -> None:
        self.presentation.pagination.next_page(len(self.products))
        self.populate_table()

    # ── Misc ─────────────────────────────────────────────

    def action_reload(self) -> None:
        """Reload the collection from the server."""
        self.send(LoadRequested())

    def action_dismiss_error(self) -> None:
        self.send(DismissError())
