# inventory_tracker/models/errors.py

"""Error taxonomy shared by the store and the HTTP API."""


class InventoryError(Exception):
    """Base class for expected, user-facing inventory failures."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductValidationError(InventoryError):
    """Missing or empty field, non-positive count, or malformed id."""

    status_code = 400


class DuplicateCodeError(InventoryError):
    """Another product already uses the submitted code."""

    status_code = 400

    def __init__(self, message: str = "Product code already exists") -> None:
        super().__init__(message)


class ProductNotFoundError(InventoryError):
    """No product matches the addressed id."""

    status_code = 404

    def __init__(self, message: str = "Product not found") -> None:
        super().__init__(message)
