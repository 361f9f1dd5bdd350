from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

MINOR_UNITS_PER_MAJOR = 100
# largest value an SQLite INTEGER column holds
MAX_MINOR_UNITS = 2**63 - 1


@dataclass(frozen=True)
class InvoiceId:
    value: str


@dataclass(frozen=True)
class CustomerId:
    value: str


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


def to_minor_units(amount: Decimal | int | str) -> int:
    """Major units (dollars) -> integer minor units (cents), rounded half-up."""
    cents = (Decimal(str(amount)) * MINOR_UNITS_PER_MAJOR).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return int(cents)


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(amount) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"))


@dataclass(frozen=True)
class InvoiceFields:
    """Validated, user-editable part of an invoice (amount in major units)."""

    customer_id: CustomerId
    amount: Decimal
    status: InvoiceStatus

    def amount_in_cents(self) -> int:
        return to_minor_units(self.amount)


@dataclass(frozen=True)
class NewInvoice:
    customer_id: CustomerId
    amount: int  # minor units
    status: InvoiceStatus
    date: str  # YYYY-MM-DD


@dataclass(frozen=True)
class InvoiceChanges:
    customer_id: CustomerId
    amount: int  # minor units
    status: InvoiceStatus


@dataclass(frozen=True)
class Invoice:
    invoice_id: InvoiceId
    customer_id: CustomerId
    amount: int  # minor units
    status: InvoiceStatus
    date: str

    def amount_major(self) -> Decimal:
        return from_minor_units(self.amount)


@dataclass(frozen=True)
class Customer:
    customer_id: CustomerId
    name: str
    email: str


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def iso_date(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).date().isoformat()


