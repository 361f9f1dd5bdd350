from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from returns.result import Failure, Result

from invoice_actions.core.domain.model.errors import ActionError
from invoice_actions.core.domain.model.invoice import (
    Invoice,
    InvoiceChanges,
    InvoiceFields,
    InvoiceId,
    NewInvoice,
    iso_date,
)
from invoice_actions.core.domain.service.validation import (
    parse_invoice_form,
    validate_invoice_form,
)
from invoice_actions.core.ports.inbound.invoice_actions import (
    INVOICES_PATH,
    ActionState,
    DeleteOutcome,
    FormInput,
    InvoiceActionsUseCase,
    InvoiceForm,
    InvoiceView,
    Redirect,
)
from invoice_actions.core.ports.outbound.cache import PathCache
from invoice_actions.core.ports.outbound.clock import Clock
from invoice_actions.core.ports.outbound.invoices import InvoiceRepository

logger = logging.getLogger(__name__)

CREATE_FAILED_MESSAGE = "Missing Fields. Failed to Create Invoice."
DELETED_MESSAGE = "Deleted Invoice"
DELETE_FAILED_MESSAGE = "Database error: Failed to Delete Error"


@dataclass(frozen=True)
class InvoiceActionsDeps:
    invoices: InvoiceRepository
    cache: PathCache
    clock: Clock


@dataclass(frozen=True)
class InvoiceActionsService(InvoiceActionsUseCase):
    deps: InvoiceActionsDeps

    # ---- mutations ---------------------------------------------------------

    def create_invoice(self, form: FormInput) -> ActionState | Redirect:
        validated = validate_invoice_form(form)
        if isinstance(validated, Failure):
            err = validated.failure()
            logger.info("create_invoice rejected: fields=%s", sorted(err.field_errors))
            return ActionState(errors=err.field_errors, message=CREATE_FAILED_MESSAGE)

        new_invoice = _build_new_invoice(validated.unwrap(), self.deps.clock)
        invoice_id = _raise_on_failure(self.deps.invoices.insert(new_invoice))
        logger.info(
            "invoice created: id=%s customer=%s amount=%s",
            invoice_id.value,
            new_invoice.customer_id.value,
            new_invoice.amount,
        )
        return self._revalidate_and_redirect()

    def update_invoice(self, invoice_id: str, form: FormInput) -> Redirect:
        fields = parse_invoice_form(form)
        changes = InvoiceChanges(
            customer_id=fields.customer_id,
            amount=fields.amount_in_cents(),
            status=fields.status,
        )
        _raise_on_failure(self.deps.invoices.update(InvoiceId(invoice_id), changes))
        logger.info("invoice updated: id=%s", invoice_id)
        return self._revalidate_and_redirect()

    def delete_invoice(self, invoice_id: str) -> DeleteOutcome:
        result = self.deps.invoices.delete(InvoiceId(invoice_id))
        if isinstance(result, Failure):
            logger.warning(
                "invoice delete failed: id=%s error=%s", invoice_id, result.failure()
            )
            return DeleteOutcome(message=DELETE_FAILED_MESSAGE)

        logger.info("invoice deleted: id=%s", invoice_id)
        self.deps.cache.revalidate_path(INVOICES_PATH)
        return DeleteOutcome(message=DELETED_MESSAGE)

    # ---- reads -------------------------------------------------------------

    def list_invoices(self) -> Sequence[InvoiceView]:
        def render() -> Sequence[InvoiceView]:
            invoices = _raise_on_failure(self.deps.invoices.list())
            return tuple(_to_view(inv) for inv in invoices)

        return self.deps.cache.get_or_render(INVOICES_PATH, render)

    def get_invoice_form(self, invoice_id: str) -> InvoiceForm:
        invoice = _raise_on_failure(self.deps.invoices.get(InvoiceId(invoice_id)))
        return InvoiceForm(
            invoice_id=invoice.invoice_id.value,
            customer_id=invoice.customer_id.value,
            amount=invoice.amount_major(),
            status=invoice.status.value,
        )

    def _revalidate_and_redirect(self) -> Redirect:
        self.deps.cache.revalidate_path(INVOICES_PATH)
        return Redirect(location=INVOICES_PATH)


# ---- pure helpers ----------------------------------------------------------


def _build_new_invoice(fields: InvoiceFields, clock: Clock) -> NewInvoice:
    return NewInvoice(
        customer_id=fields.customer_id,
        amount=fields.amount_in_cents(),
        status=fields.status,
        date=iso_date(clock.now_utc()),
    )


def _raise_on_failure(result: Result):
    if isinstance(result, Failure):
        err: ActionError = result.failure()
        raise err
    return result.unwrap()


def _to_view(invoice: Invoice) -> InvoiceView:
    return InvoiceView(
        invoice_id=invoice.invoice_id.value,
        customer_id=invoice.customer_id.value,
        amount=invoice.amount_major(),
        status=invoice.status.value,
        date=invoice.date,
    )
