# inventory_tracker/ui/screens.py

"""Modal screens: product form and delete confirmation."""

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from inventory_tracker.models.product import Product, ProductPatch
from inventory_tracker.ui.presentation import (
    build_patch,
    parse_count,
    validate_form,
)

_FORM_FIELDS: tuple[str, ...] = ("name", "code", "count")


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no dialog. Dismisses with True only on explicit confirm.

    Escape, the Cancel button and a click outside the dialog all
    dismiss with False.
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(
        self,
        title: str,
        message: str,
        confirm_text: str = "Delete",
        cancel_text: str = "Cancel",
    ) -> None:
        super().__init__()
        self._title = title
        self._message = message
        self._confirm_text = confirm_text
        self._cancel_text = cancel_text

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(self._title, id="confirm_title"),
            Static(self._message, id="confirm_message"),
            Horizontal(
                Button(self._cancel_text, id="confirm_no"),
                Button(
                    self._confirm_text, variant="error", id="confirm_yes"
                ),
                id="confirm_buttons",
            ),
            id="dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm_yes")

    def on_click(self, event: events.Click) -> None:
        dialog = self.query_one("#dialog")
        if not dialog.region.contains(event.screen_x, event.screen_y):
            self.dismiss(False)

    def action_cancel(self) -> None:
        self.dismiss(False)


class ProductFormScreen(ModalScreen[ProductPatch | None]):
    """Add-product form; pre-filled, it doubles as the full-row editor.

    Dismisses with a trimmed :class:`ProductPatch` once every field
    passes validation, or ``None`` when cancelled.
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, product: Product | None = None) -> None:
        super().__init__()
        self.product = product

    def compose(self) -> ComposeResult:
        p = self.product
        title = "Edit product" if p else "Add product"
        yield Vertical(
            Static(title, id="form_title"),
            Label("Name"),
            Input(value=p.name if p else "", id="form_name"),
            Static("", id="error_name", classes="field-error"),
            Label("Code"),
            Input(value=p.code if p else "", id="form_code"),
            Static("", id="error_code", classes="field-error"),
            Label("Count"),
            Input(
                value=str(p.count) if p else "",
                type="integer",
                id="form_count",
            ),
            Static("", id="error_count", classes="field-error"),
            Label("Description"),
            Input(
                value=(p.description or "") if p else "",
                id="form_description",
            ),
            Horizontal(
                Button("Cancel", id="form_cancel"),
                Button(
                    "Save" if p else "Add",
                    variant="primary",
                    id="form_submit",
                ),
                id="form_buttons",
            ),
            id="form_dialog",
        )

    def _value(self, field: str) -> str:
        return self.query_one(f"#form_{field}", Input).value

    def submit(self) -> None:
        """Validate the form and dismiss with a patch when it is clean."""
        count = parse_count(self._value("count"))
        errors = validate_form(
            self._value("name"), self._value("code"), count
        )
        for field in _FORM_FIELDS:
            self.query_one(f"#error_{field}", Static).update(
                errors.get(field, "")
            )
        if errors:
            return
        self.dismiss(
            build_patch(
                self._value("name"),
                self._value("code"),
                count,
                self._value("description"),
            )
        )

    def on_input_changed(self, event: Input.Changed) -> None:
        """Clear a field's error as soon as the user edits it."""
        field = (event.input.id or "").removeprefix("form_")
        if field in _FORM_FIELDS:
            self.query_one(f"#error_{field}", Static).update("")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "form_submit":
            self.submit()
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class CountInput(Input):
    """Inline stock-count editor docked under the table."""

    class Cancelled(Message):
        """Escape pressed while editing."""

    class Left(Message):
        """Focus moved away while editing."""

    BINDINGS = [Binding("escape", "cancel_edit", "Cancel", show=False)]

    def action_cancel_edit(self) -> None:
        self.post_message(self.Cancelled())

    def on_blur(self, event: events.Blur) -> None:
        self.post_message(self.Left())
