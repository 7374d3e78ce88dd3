# inventory_tracker/config/settings.py

"""Central configuration for the inventory tracker."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the inventory tracker."""

    # --- API server ---
    SERVER_HOST: str = os.environ.get("INVENTORY_HOST", "127.0.0.1")
    SERVER_PORT: int = int(os.environ.get("INVENTORY_PORT", "8000"))
    API_PREFIX: str = "/api/products"

    # --- API client ---
    API_BASE_URL: str = os.environ.get(
        "INVENTORY_API_URL", "http://127.0.0.1:8000"
    )
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    HEALTH_TIMEOUT: int = 5             # Seconds per health probe
    SLOW_RESPONSE_MS: float = 2000.0    # Latency above this is "slow"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Presentation ---
    LOW_STOCK_THRESHOLD: int = 5        # count <= this is flagged
    DEFAULT_ITEMS_PER_PAGE: int = 10
    ITEMS_PER_PAGE_OPTIONS: list[int] = [5, 10, 20, 50]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DB_PATH: Path = Path(
        os.environ.get(
            "INVENTORY_DB_PATH", str(BASE_DIR / "data" / "inventory.db")
        )
    )
    LOGS_DIR: Path = BASE_DIR / "logs"
