from __future__ import annotations

from decimal import Decimal, InvalidOperation

from returns.result import Failure, Result, Success

from invoice_actions.core.domain.model.errors import InvalidInvoiceForm
from invoice_actions.core.domain.model.invoice import (
    MAX_MINOR_UNITS,
    CustomerId,
    InvoiceFields,
    InvoiceStatus,
    to_minor_units,
)
from invoice_actions.core.ports.inbound.invoice_actions import FormInput

CUSTOMER_ID_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."
INVALID_FORM_MESSAGE = "Invalid invoice form."


def validate_customer_id(form: FormInput) -> Result[CustomerId, str]:
    raw = form.get("customerId")
    if not isinstance(raw, str) or not raw.strip():
        return Failure(CUSTOMER_ID_MESSAGE)
    return Success(CustomerId(raw.strip()))


def validate_amount(form: FormInput) -> Result[Decimal, str]:
    raw = form.get("amount")
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float, Decimal)):
        return Failure(AMOUNT_MESSAGE)
    try:
        amount = Decimal(str(raw).strip() or "0")
    except InvalidOperation:
        return Failure(AMOUNT_MESSAGE)
    if not amount.is_finite() or amount <= 0:
        return Failure(AMOUNT_MESSAGE)
    # sub-cent amounts round to zero, huge ones overflow the context
    try:
        cents = to_minor_units(amount)
    except ArithmeticError:
        return Failure(AMOUNT_MESSAGE)
    if not 0 < cents <= MAX_MINOR_UNITS:
        return Failure(AMOUNT_MESSAGE)
    return Success(amount)


def validate_status(form: FormInput) -> Result[InvoiceStatus, str]:
    raw = form.get("status")
    if not isinstance(raw, str):
        return Failure(STATUS_MESSAGE)
    try:
        return Success(InvoiceStatus(raw))
    except ValueError:
        return Failure(STATUS_MESSAGE)


def validate_invoice_form(form: FormInput) -> Result[InvoiceFields, InvalidInvoiceForm]:
    """Check every field and collect all messages; never raises."""
    checks = {
        "customerId": validate_customer_id(form),
        "amount": validate_amount(form),
        "status": validate_status(form),
    }
    field_errors = {
        name: [result.failure()]
        for name, result in checks.items()
        if isinstance(result, Failure)
    }
    if field_errors:
        return Failure(
            InvalidInvoiceForm(message=INVALID_FORM_MESSAGE, field_errors=field_errors)
        )
    return Success(
        InvoiceFields(
            customer_id=checks["customerId"].unwrap(),
            amount=checks["amount"].unwrap(),
            status=checks["status"].unwrap(),
        )
    )


def parse_invoice_form(form: FormInput) -> InvoiceFields:
    """Like validate_invoice_form, but raises InvalidInvoiceForm."""
    result = validate_invoice_form(form)
    if isinstance(result, Failure):
        raise result.failure()
    return result.unwrap()
