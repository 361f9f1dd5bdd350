from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Protocol, Sequence

# Raw form values keyed by field name: strings, uploaded files or absent.
FormInput = Mapping[str, Any]

INVOICES_PATH = "/dashboard/invoices"


@dataclass(frozen=True)
class ActionState:
    errors: dict[str, list[str]] | None = None
    message: str | None = None


@dataclass(frozen=True)
class Redirect:
    """Navigation instruction; returning it ends the action."""

    location: str


@dataclass(frozen=True)
class DeleteOutcome:
    message: str


@dataclass(frozen=True)
class InvoiceView:
    invoice_id: str
    customer_id: str
    amount: Decimal  # major units
    status: str
    date: str


@dataclass(frozen=True)
class InvoiceForm:
    invoice_id: str
    customer_id: str
    amount: Decimal  # major units
    status: str


class InvoiceActionsUseCase(Protocol):
    def create_invoice(self, form: FormInput) -> ActionState | Redirect: ...

    def update_invoice(self, invoice_id: str, form: FormInput) -> Redirect: ...

    def delete_invoice(self, invoice_id: str) -> DeleteOutcome: ...

    def list_invoices(self) -> Sequence[InvoiceView]: ...

    def get_invoice_form(self, invoice_id: str) -> InvoiceForm: ...
