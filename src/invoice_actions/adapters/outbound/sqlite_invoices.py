from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Sequence

from returns.result import Failure, Result, Success

from invoice_actions.core.domain.model.auth import User
from invoice_actions.core.domain.model.errors import (
    ActionError,
    InvoiceNotFound,
    PersistenceError,
)
from invoice_actions.core.domain.model.invoice import (
    Customer,
    CustomerId,
    Invoice,
    InvoiceChanges,
    InvoiceId,
    InvoiceStatus,
    NewInvoice,
)
from invoice_actions.core.ports.outbound.invoices import InvoiceRepository

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS customers (
    id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(16)))),
    name TEXT NOT NULL,
    email TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS invoices (
    id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(16)))),
    customer_id TEXT NOT NULL REFERENCES customers(id),
    amount INTEGER NOT NULL CHECK (amount > 0),
    status TEXT NOT NULL CHECK (status IN ('pending', 'paid')),
    date TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(16)))),
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL
);
"""


def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def connect(db_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = dict_factory
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def ensure_schema(db_path: str) -> None:
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = connect(db_path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema ready: %s", db_path)


def _row_to_invoice(row: dict[str, Any]) -> Invoice:
    return Invoice(
        invoice_id=InvoiceId(row["id"]),
        customer_id=CustomerId(row["customer_id"]),
        amount=int(row["amount"]),
        status=InvoiceStatus(row["status"]),
        date=row["date"],
    )


class SQLiteInvoiceRepository(InvoiceRepository):
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        return connect(self.db_path)

    def _run(
        self, action: str, sql: str, params: tuple[Any, ...] = (), write: bool = False
    ) -> Result[list[dict[str, Any]], ActionError]:
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute(sql, params).fetchall()
                if write:
                    conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OverflowError) as e:
            logger.error("%s failed: %s", action, e)
            return Failure(PersistenceError(message=f"{action} failed: {e}"))
        return Success(rows)

    def insert(self, invoice: NewInvoice) -> Result[InvoiceId, ActionError]:
        return self._run(
            "insert invoice",
            "INSERT INTO invoices (customer_id, amount, status, date) "
            "VALUES (?, ?, ?, ?) RETURNING id",
            (
                invoice.customer_id.value,
                invoice.amount,
                invoice.status.value,
                invoice.date,
            ),
            write=True,
        ).map(lambda rows: InvoiceId(rows[0]["id"]))

    def update(
        self, invoice_id: InvoiceId, changes: InvoiceChanges
    ) -> Result[None, ActionError]:
        return self._run(
            f"update invoice {invoice_id.value}",
            "UPDATE invoices SET customer_id = ?, amount = ?, status = ? WHERE id = ?",
            (
                changes.customer_id.value,
                changes.amount,
                changes.status.value,
                invoice_id.value,
            ),
            write=True,
        ).map(lambda _: None)

    def delete(self, invoice_id: InvoiceId) -> Result[None, ActionError]:
        return self._run(
            f"delete invoice {invoice_id.value}",
            "DELETE FROM invoices WHERE id = ?",
            (invoice_id.value,),
            write=True,
        ).map(lambda _: None)

    def get(self, invoice_id: InvoiceId) -> Result[Invoice, ActionError]:
        def first(rows: list[dict[str, Any]]) -> Result[Invoice, ActionError]:
            if not rows:
                return Failure(
                    InvoiceNotFound(
                        message="invoice not found", invoice_id=invoice_id.value
                    )
                )
            return Success(_row_to_invoice(rows[0]))

        return self._run(
            f"select invoice {invoice_id.value}",
            "SELECT id, customer_id, amount, status, date FROM invoices WHERE id = ?",
            (invoice_id.value,),
        ).bind(first)

    def list(self) -> Result[Sequence[Invoice], ActionError]:
        return self._run(
            "list invoices",
            "SELECT id, customer_id, amount, status, date FROM invoices "
            "ORDER BY date DESC, rowid DESC",
        ).map(lambda rows: tuple(_row_to_invoice(r) for r in rows))


class SQLiteCustomerRepository:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def add(self, name: str, email: str) -> Customer:
        conn = connect(self.db_path)
        try:
            (row,) = conn.execute(
                "INSERT INTO customers (name, email) VALUES (?, ?) RETURNING id",
                (name, email),
            ).fetchall()
            conn.commit()
        finally:
            conn.close()
        return Customer(customer_id=CustomerId(row["id"]), name=name, email=email)


class SQLiteUserRepository:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def add(self, name: str, email: str, password_hash: str) -> User:
        conn = connect(self.db_path)
        try:
            (row,) = conn.execute(
                "INSERT INTO users (name, email, password) VALUES (?, ?, ?) RETURNING id",
                (name, email, password_hash),
            ).fetchall()
            conn.commit()
        finally:
            conn.close()
        return User(user_id=row["id"], name=name, email=email, password_hash=password_hash)

    def get_by_email(self, email: str) -> User | None:
        conn = connect(self.db_path)
        try:
            row = conn.execute(
                "SELECT id, name, email, password FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return User(
            user_id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password"],
        )
