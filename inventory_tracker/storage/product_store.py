# inventory_tracker/storage/product_store.py

"""SQLite-backed document store for product records.

Each product is kept as a JSON document keyed by a store-generated
24-hex-character key. ``code`` and ``created_at`` are mirrored into
indexed columns so that code uniqueness is a table constraint and the
default listing is newest-created-first.
"""

import json
import logging
import re
import secrets
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from inventory_tracker.config.settings import Settings
from inventory_tracker.models.errors import DuplicateCodeError

logger = logging.getLogger("inventory_tracker.store")

_KEY_RE = re.compile(r"^[0-9a-f]{24}$")

_TIMESTAMP_FIELDS: tuple[str, ...] = ("createdAt", "updatedAt")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS products (
    seq        INTEGER PRIMARY KEY AUTOINCREMENT,
    key        TEXT    NOT NULL UNIQUE,
    code       TEXT    NOT NULL UNIQUE,
    created_at TEXT    NOT NULL,
    document   TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_products_created
    ON products(created_at);
"""


def new_key() -> str:
    """Generate a fresh store key."""
    return secrets.token_hex(12)


def is_valid_key(value: str) -> bool:
    """Return True if *value* is a well-formed store key."""
    return bool(_KEY_RE.match(value))


def _encode(document: dict[str, Any]) -> str:
    body = {k: v for k, v in document.items() if k != "_id"}
    for field in _TIMESTAMP_FIELDS:
        value = body.get(field)
        if isinstance(value, datetime):
            body[field] = value.isoformat()
    return json.dumps(body, ensure_ascii=False)


def _decode(key: str, raw: str) -> dict[str, Any]:
    body: dict[str, Any] = json.loads(raw)
    for field in _TIMESTAMP_FIELDS:
        value = body.get(field)
        if isinstance(value, str):
            body[field] = datetime.fromisoformat(value)
    return {"_id": key, **body}


def _timestamp_column(document: dict[str, Any]) -> str:
    created = document["createdAt"]
    if isinstance(created, datetime):
        return created.isoformat()
    return str(created)


def _is_code_conflict(exc: sqlite3.IntegrityError) -> bool:
    return "products.code" in str(exc)


class ProductStore:
    """Document store for product records."""

    def __init__(
        self, db_path: Path | None = None,
    ) -> None:
        path = db_path or Settings.DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(
            str(path), check_same_thread=False,
        )
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        self._lock = threading.Lock()
        logger.debug("ProductStore opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ── Reads ────────────────────────────────────────────

    def find_all(self) -> list[dict[str, Any]]:
        """Return every document, newest-created first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT key, document FROM products "
                "ORDER BY created_at DESC, seq DESC",
            ).fetchall()
        return [_decode(r[0], r[1]) for r in rows]

    def find_one(self, key: str) -> dict[str, Any] | None:
        """Return the document stored under *key*, if any."""
        with self._lock:
            row = self._conn.execute(
                "SELECT key, document FROM products WHERE key = ?",
                (key,),
            ).fetchone()
        return _decode(row[0], row[1]) if row else None

    def find_by_code(self, code: str) -> dict[str, Any] | None:
        """Return the document using *code*, if any."""
        with self._lock:
            row = self._conn.execute(
                "SELECT key, document FROM products WHERE code = ?",
                (code,),
            ).fetchone()
        return _decode(row[0], row[1]) if row else None

    # ── Writes ───────────────────────────────────────────

    def insert_if_absent(
        self, document: dict[str, Any],
    ) -> dict[str, Any]:
        """Insert *document* unless its code is already taken.

        The uniqueness check and the insert are one statement, so two
        concurrent creations with the same code cannot both succeed.

        Raises:
            DuplicateCodeError: If another document uses the same code.
        """
        key = new_key()
        with self._lock:
            try:
                self._conn.execute(
                    "INSERT INTO products "
                    "(key, code, created_at, document) "
                    "VALUES (?, ?, ?, ?)",
                    (
                        key,
                        document["code"],
                        _timestamp_column(document),
                        _encode(document),
                    ),
                )
                self._conn.commit()
            except sqlite3.IntegrityError as exc:
                self._conn.rollback()
                if _is_code_conflict(exc):
                    logger.info(
                        "Rejected insert, code %r already exists",
                        document["code"],
                    )
                    raise DuplicateCodeError() from exc
                raise
            row = self._conn.execute(
                "SELECT key, document FROM products WHERE key = ?",
                (key,),
            ).fetchone()
        logger.info("Inserted product %s (code=%s)", key, document["code"])
        return _decode(row[0], row[1])

    def replace(
        self, key: str, document: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Overwrite the mutable fields of *key* and return the result.

        The stored ``createdAt`` survives the replacement. Returns
        ``None`` when no document has that key.

        Raises:
            DuplicateCodeError: If the new code belongs to another product.
        """
        with self._lock:
            row = self._conn.execute(
                "SELECT document FROM products WHERE key = ?",
                (key,),
            ).fetchone()
            if row is None:
                return None
            current: dict[str, Any] = json.loads(row[0])
            merged = {**document, "createdAt": current["createdAt"]}
            try:
                self._conn.execute(
                    "UPDATE products SET code = ?, document = ? "
                    "WHERE key = ?",
                    (merged["code"], _encode(merged), key),
                )
                self._conn.commit()
            except sqlite3.IntegrityError as exc:
                self._conn.rollback()
                if _is_code_conflict(exc):
                    raise DuplicateCodeError() from exc
                raise
            row = self._conn.execute(
                "SELECT key, document FROM products WHERE key = ?",
                (key,),
            ).fetchone()
        logger.info("Updated product %s", key)
        return _decode(row[0], row[1])

    def delete(self, key: str) -> bool:
        """Remove the document under *key*. Returns False if absent."""
        with self._lock:
            cur = self._conn.execute(
                "DELETE FROM products WHERE key = ?", (key,),
            )
            self._conn.commit()
        deleted = cur.rowcount > 0
        if deleted:
            logger.info("Deleted product %s", key)
        return deleted

    def count(self) -> int:
        """Number of stored documents."""
        with self._lock:
            row = self._conn.execute(
                "SELECT COUNT(*) FROM products",
            ).fetchone()
        return int(row[0])
