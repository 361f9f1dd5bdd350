from __future__ import annotations

import json
from typing import Any

from invoice_actions.core.domain.model.errors import ActionError
from invoice_actions.core.domain.service.invoice_actions_service import DELETED_MESSAGE
from invoice_actions.core.ports.inbound.invoice_actions import (
    DeleteOutcome,
    InvoiceActionsUseCase,
    Redirect,
)


def run_cli(usecase: InvoiceActionsUseCase, raw: str) -> int:
    """
    raw: JSON string.
    Examples:
      {"action":"create","customerId":"c-1","amount":"12.50","status":"pending"}
      {"action":"update","id":"<invoice id>","customerId":"c-1","amount":"9","status":"paid"}
      {"action":"delete","id":"<invoice id>"}
    """
    try:
        payload = json.loads(raw)
        action, invoice_id, form = _parse_payload(payload)
    except Exception as e:  # noqa: BLE001
        print(f"invalid_input: {e}")
        return 2

    try:
        if action == "create":
            outcome = usecase.create_invoice(form)
        elif action == "update":
            outcome = usecase.update_invoice(invoice_id, form)
        else:
            outcome = usecase.delete_invoice(invoice_id)
    except ActionError as err:
        print("[ng]", str(err))
        return 1

    if isinstance(outcome, Redirect):
        print("[ok]", {"redirect": outcome.location})
        return 0

    if isinstance(outcome, DeleteOutcome):
        ok = outcome.message == DELETED_MESSAGE
        print("[ok]" if ok else "[ng]", {"message": outcome.message})
        return 0 if ok else 1

    print("[ng]", {"errors": outcome.errors, "message": outcome.message})
    return 1


def _parse_payload(payload: dict[str, Any]) -> tuple[str, str, dict[str, Any]]:
    action = str(payload.get("action", "create"))
    if action not in {"create", "update", "delete"}:
        raise ValueError(f"unknown action: {action}")
    invoice_id = str(payload.get("id", ""))
    if action != "create" and not invoice_id:
        raise ValueError("id is required")
    form = {k: v for k, v in payload.items() if k not in {"action", "id"}}
    return action, invoice_id, form
