"""
HTTP tests for the dashboard form endpoints.

The app is built over a temporary SQLite database with one seeded customer
and one seeded user.
"""

import asyncio
import sqlite3
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from invoice_actions.adapters.inbound.web import create_app
from invoice_actions.bootstrap import build_app
from invoice_actions.core.ports.inbound.invoice_actions import INVOICES_PATH, Redirect

USER_EMAIL = "user@nextmail.com"
USER_PASSWORD = "123456"


@pytest.fixture
def client(settings):
    return TestClient(build_app(settings), raise_server_exceptions=False)


def _amounts(db_path):
    conn = sqlite3.connect(db_path)
    try:
        return [r[0] for r in conn.execute("SELECT amount FROM invoices").fetchall()]
    finally:
        conn.close()


def _create(client, customer_id, amount="12.50", status="pending"):
    return client.post(
        "/dashboard/invoices/create",
        data={"customerId": customer_id, "amount": amount, "status": status},
        follow_redirects=False,
    )


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_redirects_to_listing(client, customer_id, db_path):
    res = _create(client, customer_id)

    assert res.status_code == 303
    assert res.headers["location"] == "/dashboard/invoices"
    assert _amounts(db_path) == [1250]

    items = client.get("/dashboard/invoices").json()["items"]
    assert [(i["customer_id"], i["amount"], i["status"]) for i in items] == [
        (customer_id, "12.50", "pending")
    ]


def test_create_field_errors(client, db_path):
    res = client.post("/dashboard/invoices/create", data={"amount": "0", "status": "void"})

    assert res.status_code == 400
    assert res.json() == {
        "errors": {
            "customerId": ["Please select a customer."],
            "amount": ["Please enter an amount greater than $0."],
            "status": ["Please select an invoice status."],
        },
        "message": "Missing Fields. Failed to Create Invoice.",
    }
    assert _amounts(db_path) == []


def test_listing_reflects_writes(client, customer_id):
    assert client.get("/dashboard/invoices").json()["items"] == []

    _create(client, customer_id)

    assert len(client.get("/dashboard/invoices").json()["items"]) == 1


def test_edit_form_and_update(client, customer_id, db_path):
    _create(client, customer_id, amount="19.99")
    (item,) = client.get("/dashboard/invoices").json()["items"]

    form = client.get(f"/dashboard/invoices/{item['id']}/edit").json()
    assert form == {
        "id": item["id"],
        "customerId": customer_id,
        "amount": "19.99",
        "status": "pending",
    }

    res = client.post(
        f"/dashboard/invoices/{item['id']}/edit",
        data={"customerId": customer_id, "amount": form["amount"], "status": "paid"},
        follow_redirects=False,
    )

    assert res.status_code == 303
    (updated,) = client.get("/dashboard/invoices").json()["items"]
    assert (updated["id"], updated["amount"], updated["status"], updated["date"]) == (
        item["id"],
        "19.99",
        "paid",
        item["date"],
    )
    assert _amounts(db_path) == [1999]


def test_update_invalid_form_is_rejected(client, customer_id):
    _create(client, customer_id)
    (item,) = client.get("/dashboard/invoices").json()["items"]

    res = client.post(
        f"/dashboard/invoices/{item['id']}/edit",
        data={"customerId": customer_id, "amount": "-1", "status": "paid"},
    )

    assert res.status_code == 400
    body = res.json()
    assert body["type"] == "InvalidInvoiceForm"
    assert body["details"] == {"amount": ["Please enter an amount greater than $0."]}


def test_edit_form_unknown_invoice(client):
    res = client.get("/dashboard/invoices/missing/edit")

    assert res.status_code == 404
    assert res.json()["type"] == "InvoiceNotFound"


def test_create_for_unknown_customer_is_server_error(client):
    res = _create(client, "no-such-customer")

    assert res.status_code == 500
    assert res.json()["type"] == "PersistenceError"


def test_delete(client, customer_id, db_path):
    _create(client, customer_id)
    (item,) = client.get("/dashboard/invoices").json()["items"]

    res = client.post(f"/dashboard/invoices/{item['id']}/delete")

    assert res.json() == {"message": "Deleted Invoice"}
    assert _amounts(db_path) == []
    assert client.get("/dashboard/invoices").json()["items"] == []


def test_login_success_sets_session_cookie(client, user):
    res = client.post(
        "/login",
        data={"email": USER_EMAIL, "password": USER_PASSWORD},
        follow_redirects=False,
    )

    assert res.status_code == 303
    assert res.headers["location"] == "/dashboard"
    assert "session_token=" in res.headers["set-cookie"]


@pytest.mark.parametrize(
    "data",
    [
        {"email": USER_EMAIL, "password": "wrong-password"},
        {"email": "someone@else.com", "password": USER_PASSWORD},
        {"email": USER_EMAIL},
    ],
)
def test_login_rejected(client, user, data):
    res = client.post("/login", data=data, follow_redirects=False)

    assert res.status_code == 401
    assert res.json() == {"error": "CredentialSignin"}
    assert "set-cookie" not in res.headers


def _loop_state(seen):
    try:
        asyncio.get_running_loop()
        seen.append("event loop")
    except RuntimeError:
        seen.append("worker thread")


def test_blocking_work_runs_off_the_event_loop():
    seen = []

    def record_and_redirect(*args):
        _loop_state(seen)
        return Redirect(location=INVOICES_PATH)

    usecase = Mock()
    usecase.create_invoice.side_effect = record_and_redirect
    usecase.update_invoice.side_effect = record_and_redirect
    provider = Mock()
    provider.sign_in.side_effect = lambda provider_id, fields: _loop_state(seen)
    client = TestClient(create_app(usecase, lambda response: provider))
    form = {"customerId": "c-1", "amount": "1", "status": "paid"}

    client.post("/dashboard/invoices/create", data=form, follow_redirects=False)
    client.post("/dashboard/invoices/x/edit", data=form, follow_redirects=False)
    client.post("/login", data={"email": "a@b.c", "extra": "kept"}, follow_redirects=False)

    assert seen == ["worker thread"] * 3
    assert usecase.create_invoice.call_args.args[0] == form
    assert usecase.update_invoice.call_args.args == ("x", form)
    assert provider.sign_in.call_args.args == (
        "credentials",
        {"email": "a@b.c", "extra": "kept"},
    )
