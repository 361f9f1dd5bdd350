from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI

from invoice_actions.adapters.inbound.web import SignInFactory, create_app
from invoice_actions.adapters.outbound.credentials_provider import (
    CredentialsSignInProvider,
    hash_password,
)
from invoice_actions.adapters.outbound.path_cache import InMemoryPathCache
from invoice_actions.adapters.outbound.sessions import InMemorySessionStore
from invoice_actions.adapters.outbound.sqlite_invoices import (
    SQLiteCustomerRepository,
    SQLiteInvoiceRepository,
    SQLiteUserRepository,
    ensure_schema,
)
from invoice_actions.adapters.outbound.system_clock import SystemClock
from invoice_actions.config import Settings, get_settings
from invoice_actions.core.domain.service.invoice_actions_service import (
    InvoiceActionsDeps,
    InvoiceActionsService,
)
from invoice_actions.core.ports.outbound.auth import CookieWriter, SignInProvider


@dataclass(frozen=True)
class UseCases:
    invoice_actions: InvoiceActionsService
    sign_in_factory: SignInFactory


def build_usecases(settings: Settings | None = None) -> UseCases:
    settings = settings or get_settings()
    ensure_schema(settings.db_path)

    invoice_actions = InvoiceActionsService(
        InvoiceActionsDeps(
            invoices=SQLiteInvoiceRepository(settings.db_path),
            cache=InMemoryPathCache(),
            clock=SystemClock(),
        )
    )

    users = SQLiteUserRepository(settings.db_path)
    sessions = InMemorySessionStore()

    def sign_in_factory(response: CookieWriter) -> SignInProvider:
        return CredentialsSignInProvider(
            users=users,
            sessions=sessions,
            response=response,
            cookie_name=settings.session_cookie,
        )

    return UseCases(invoice_actions=invoice_actions, sign_in_factory=sign_in_factory)


def build_app(settings: Settings | None = None) -> FastAPI:
    usecases = build_usecases(settings)
    return create_app(usecases.invoice_actions, usecases.sign_in_factory)


def create_asgi_app() -> FastAPI:
    return build_app()


def seed_demo_data(
    settings: Settings | None = None,
    email: str = "user@nextmail.com",
    password: str = "123456",
) -> dict[str, str]:
    """Create one customer and one sign-in user so the dashboard is usable."""
    settings = settings or get_settings()
    ensure_schema(settings.db_path)
    customer = SQLiteCustomerRepository(settings.db_path).add(
        name="Evil Rabbit", email="evil@rabbit.com"
    )
    users = SQLiteUserRepository(settings.db_path)
    user = users.get_by_email(email) or users.add(
        name="User", email=email, password_hash=hash_password(password)
    )
    return {"customer_id": customer.customer_id.value, "user_id": user.user_id}
