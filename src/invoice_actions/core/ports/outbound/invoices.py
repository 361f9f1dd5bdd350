from __future__ import annotations

from typing import Protocol, Sequence

from returns.result import Result

from invoice_actions.core.domain.model.errors import ActionError
from invoice_actions.core.domain.model.invoice import (
    Invoice,
    InvoiceChanges,
    InvoiceId,
    NewInvoice,
)


class InvoiceRepository(Protocol):
    """
    Every write is a single statement; no multi-statement transactions.
    The store assigns ids and enforces the customer reference.
    """

    def insert(self, invoice: NewInvoice) -> Result[InvoiceId, ActionError]: ...

    def update(
        self, invoice_id: InvoiceId, changes: InvoiceChanges
    ) -> Result[None, ActionError]: ...

    def delete(self, invoice_id: InvoiceId) -> Result[None, ActionError]: ...

    def get(self, invoice_id: InvoiceId) -> Result[Invoice, ActionError]: ...

    def list(self) -> Result[Sequence[Invoice], ActionError]: ...
