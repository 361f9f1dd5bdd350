from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from invoice_actions.adapters.outbound.credentials_provider import hash_password
from invoice_actions.adapters.outbound.in_memory_invoices import InMemoryInvoiceRepository
from invoice_actions.adapters.outbound.path_cache import InMemoryPathCache
from invoice_actions.adapters.outbound.sqlite_invoices import (
    SQLiteCustomerRepository,
    SQLiteInvoiceRepository,
    SQLiteUserRepository,
    ensure_schema,
)
from invoice_actions.adapters.outbound.system_clock import FixedClock
from invoice_actions.config import Settings
from invoice_actions.core.domain.service.invoice_actions_service import (
    InvoiceActionsDeps,
    InvoiceActionsService,
)

USER_EMAIL = "user@nextmail.com"
USER_PASSWORD = "123456"


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc))


@pytest.fixture
def cache():
    return Mock(wraps=InMemoryPathCache())


@pytest.fixture
def memory_repo():
    return InMemoryInvoiceRepository(known_customers={"cust-1", "cust-2"})


@pytest.fixture
def memory_service(memory_repo, cache, clock):
    return InvoiceActionsService(
        InvoiceActionsDeps(invoices=memory_repo, cache=cache, clock=clock)
    )


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "invoices.db")
    ensure_schema(path)
    return path


@pytest.fixture
def customer_id(db_path):
    return SQLiteCustomerRepository(db_path).add("Evil Rabbit", "evil@rabbit.com").customer_id.value


@pytest.fixture
def user(db_path):
    return SQLiteUserRepository(db_path).add(
        name="User", email=USER_EMAIL, password_hash=hash_password(USER_PASSWORD)
    )


@pytest.fixture
def sqlite_repo(db_path):
    return SQLiteInvoiceRepository(db_path)


@pytest.fixture
def sqlite_service(sqlite_repo, cache, clock):
    return InvoiceActionsService(
        InvoiceActionsDeps(invoices=sqlite_repo, cache=cache, clock=clock)
    )


@pytest.fixture
def settings(db_path, monkeypatch):
    monkeypatch.setenv("INVOICE_ACTIONS_DB_PATH", db_path)
    return Settings()
