from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ActionError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True, eq=False)
class InvalidInvoiceForm(ActionError):
    field_errors: dict[str, list[str]] = field(default_factory=dict)

    def __str__(self) -> str:  # pragma: no cover
        fields = ", ".join(sorted(self.field_errors))
        return f"invalid_invoice_form: {fields} ({self.message})"


@dataclass(frozen=True)
class PersistenceError(ActionError):
    pass


@dataclass(frozen=True)
class InvoiceNotFound(PersistenceError):
    invoice_id: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return f"invoice_not_found: {self.invoice_id} ({self.message})"


@dataclass(frozen=True)
class SignInError(ActionError):
    pass


@dataclass(frozen=True)
class CredentialsSignin(SignInError):
    """Rejected email/password; the message always carries the type name."""

    message: str = "CredentialsSignin: invalid email or password"
