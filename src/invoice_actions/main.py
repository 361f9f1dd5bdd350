from __future__ import annotations

import sys

import uvicorn

from invoice_actions.adapters.inbound.cli import run_cli
from invoice_actions.bootstrap import build_usecases, seed_demo_data
from invoice_actions.config import get_settings
from invoice_actions.logging_setup import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "invoice_actions.bootstrap:create_asgi_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
    )


def cli_main(argv: list[str] | None = None) -> int:
    argv = argv or sys.argv[1:]
    if not argv:
        print("usage: invoice-actions-cli seed | '<json>'")
        return 2

    configure_logging(get_settings().log_level)
    if argv[0] == "seed":
        print("[ok]", seed_demo_data())
        return 0

    return run_cli(build_usecases().invoice_actions, argv[0])


if __name__ == "__main__":
    raise SystemExit(cli_main())
