from __future__ import annotations

from invoice_actions.bootstrap import build_app

app = build_app()
