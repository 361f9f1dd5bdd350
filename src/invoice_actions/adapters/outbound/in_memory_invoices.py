from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence, Set
from uuid import uuid4

from returns.result import Failure, Result, Success

from invoice_actions.core.domain.model.errors import (
    ActionError,
    InvoiceNotFound,
    PersistenceError,
)
from invoice_actions.core.domain.model.invoice import (
    Invoice,
    InvoiceChanges,
    InvoiceId,
    NewInvoice,
)
from invoice_actions.core.ports.outbound.invoices import InvoiceRepository


@dataclass
class InMemoryInvoiceRepository(InvoiceRepository):
    known_customers: Set[str] | None = None
    fail: bool = False
    _store: Dict[str, Invoice] = field(default_factory=dict)

    def insert(self, invoice: NewInvoice) -> Result[InvoiceId, ActionError]:
        check = self._check(invoice.customer_id.value)
        if isinstance(check, Failure):
            return check
        invoice_id = InvoiceId(str(uuid4()))
        self._store[invoice_id.value] = Invoice(
            invoice_id=invoice_id,
            customer_id=invoice.customer_id,
            amount=invoice.amount,
            status=invoice.status,
            date=invoice.date,
        )
        return Success(invoice_id)

    def update(
        self, invoice_id: InvoiceId, changes: InvoiceChanges
    ) -> Result[None, ActionError]:
        check = self._check(changes.customer_id.value)
        if isinstance(check, Failure):
            return check
        current = self._store.get(invoice_id.value)
        # zero matched rows is not an error, same as UPDATE ... WHERE
        if current is not None:
            self._store[invoice_id.value] = Invoice(
                invoice_id=current.invoice_id,
                customer_id=changes.customer_id,
                amount=changes.amount,
                status=changes.status,
                date=current.date,
            )
        return Success(None)

    def delete(self, invoice_id: InvoiceId) -> Result[None, ActionError]:
        if self.fail:
            return Failure(PersistenceError(message="store is down"))
        self._store.pop(invoice_id.value, None)
        return Success(None)

    def get(self, invoice_id: InvoiceId) -> Result[Invoice, ActionError]:
        if self.fail:
            return Failure(PersistenceError(message="store is down"))
        invoice = self._store.get(invoice_id.value)
        if invoice is None:
            return Failure(
                InvoiceNotFound(message="invoice not found", invoice_id=invoice_id.value)
            )
        return Success(invoice)

    def list(self) -> Result[Sequence[Invoice], ActionError]:
        if self.fail:
            return Failure(PersistenceError(message="store is down"))
        invoices = sorted(self._store.values(), key=lambda i: i.date, reverse=True)
        return Success(tuple(invoices))

    def _check(self, customer_id: str) -> Result[None, ActionError]:
        if self.fail:
            return Failure(PersistenceError(message="store is down"))
        if self.known_customers is not None and customer_id not in self.known_customers:
            return Failure(PersistenceError(message=f"unknown customer: {customer_id}"))
        return Success(None)
