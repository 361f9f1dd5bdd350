from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import FastAPI, Form, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from invoice_actions.core.domain.model.errors import (
    ActionError,
    InvalidInvoiceForm,
    InvoiceNotFound,
    PersistenceError,
)
from invoice_actions.core.domain.service.authenticate import authenticate
from invoice_actions.core.ports.inbound.invoice_actions import (
    ActionState,
    InvoiceActionsUseCase,
    Redirect,
)
from invoice_actions.core.ports.outbound.auth import CookieWriter, SignInProvider

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"

SignInFactory = Callable[[CookieWriter], SignInProvider]


# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class InvoiceOut(BaseModel):
    id: str
    customer_id: str
    amount: str
    status: str
    date: str


class InvoiceListResponse(BaseModel):
    items: list[InvoiceOut]


class InvoiceFormResponse(BaseModel):
    id: str
    customerId: str
    amount: str
    status: str


class ActionStateResponse(BaseModel):
    errors: dict[str, list[str]] | None = None
    message: str | None = None


class MessageResponse(BaseModel):
    message: str


class SignInErrorResponse(BaseModel):
    error: str


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: dict[str, list[str]] | None = None


def _map_error_to_http(err: ActionError) -> tuple[int, ErrorResponse]:
    if isinstance(err, InvalidInvoiceForm):
        return 400, ErrorResponse(
            type=type(err).__name__, message=str(err), details=err.field_errors
        )

    if isinstance(err, InvoiceNotFound):
        return 404, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, PersistenceError):
        return 500, ErrorResponse(type=type(err).__name__, message=str(err))

    return 500, ErrorResponse(type=type(err).__name__, message=str(err))


def _invoice_form(
    customer_id: Optional[str], amount: Optional[str], status: Optional[str]
) -> dict[str, Any]:
    return {"customerId": customer_id, "amount": amount, "status": status}


def _to_http(outcome: ActionState | Redirect) -> Any:
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.location, status_code=303)
    body = ActionStateResponse(errors=outcome.errors, message=outcome.message)
    return JSONResponse(status_code=400, content=body.model_dump())


def create_app(
    invoice_actions: InvoiceActionsUseCase,
    sign_in_factory: SignInFactory,
) -> FastAPI:
    app = FastAPI(title="invoice_actions")

    # --- exception handlers -------------------------------------------------

    @app.exception_handler(ActionError)
    async def handle_action_error(_: Request, exc: ActionError) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        if status >= 500:
            logger.error("action failed: %s", exc)
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(type="RequestValidationError", message="invalid request")
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error")
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes -------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/dashboard/invoices", response_model=InvoiceListResponse)
    def list_invoices() -> Any:
        return InvoiceListResponse(
            items=[
                InvoiceOut(
                    id=v.invoice_id,
                    customer_id=v.customer_id,
                    amount=str(v.amount),
                    status=v.status,
                    date=v.date,
                )
                for v in invoice_actions.list_invoices()
            ]
        )

    @app.post(
        "/dashboard/invoices/create",
        status_code=303,
        responses={400: {"model": ActionStateResponse}},
    )
    def create_invoice(
        customerId: Optional[str] = Form(None),
        amount: Optional[str] = Form(None),
        status: Optional[str] = Form(None),
    ) -> Any:
        form = _invoice_form(customerId, amount, status)
        return _to_http(invoice_actions.create_invoice(form))

    @app.get(
        "/dashboard/invoices/{invoice_id}/edit",
        response_model=InvoiceFormResponse,
        responses={404: {"model": ErrorResponse}},
    )
    def edit_invoice_form(invoice_id: str) -> Any:
        view = invoice_actions.get_invoice_form(invoice_id)
        return InvoiceFormResponse(
            id=view.invoice_id,
            customerId=view.customer_id,
            amount=str(view.amount),
            status=view.status,
        )

    @app.post(
        "/dashboard/invoices/{invoice_id}/edit",
        status_code=303,
        responses={400: {"model": ErrorResponse}},
    )
    def update_invoice(
        invoice_id: str,
        customerId: Optional[str] = Form(None),
        amount: Optional[str] = Form(None),
        status: Optional[str] = Form(None),
    ) -> Any:
        form = _invoice_form(customerId, amount, status)
        return _to_http(invoice_actions.update_invoice(invoice_id, form))

    @app.post("/dashboard/invoices/{invoice_id}/delete", response_model=MessageResponse)
    def delete_invoice(invoice_id: str) -> Any:
        outcome = invoice_actions.delete_invoice(invoice_id)
        return MessageResponse(message=outcome.message)

    @app.post(
        "/login",
        status_code=303,
        responses={401: {"model": SignInErrorResponse}},
    )
    async def login(request: Request) -> Any:
        form = await request.form()
        response = RedirectResponse(url=DASHBOARD_PATH, status_code=303)
        # sign-in blocks on argon2 and sqlite
        signal = await run_in_threadpool(authenticate, form, sign_in_factory(response))
        if signal is not None:
            body = SignInErrorResponse(error=signal)
            return JSONResponse(status_code=401, content=body.model_dump())
        return response

    return app
