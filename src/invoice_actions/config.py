from __future__ import annotations

import os
from functools import lru_cache


class Settings:
    def __init__(self) -> None:
        self.db_path = os.environ.get("INVOICE_ACTIONS_DB_PATH", "./data/invoices.db")
        self.host = os.environ.get("INVOICE_ACTIONS_HOST", "0.0.0.0")
        self.port = int(os.environ.get("INVOICE_ACTIONS_PORT", "8000"))
        self.log_level = os.environ.get("INVOICE_ACTIONS_LOG_LEVEL", "INFO").upper()
        self.session_cookie = os.environ.get(
            "INVOICE_ACTIONS_SESSION_COOKIE", "session_token"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
