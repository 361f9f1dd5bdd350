from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from invoice_actions.core.domain.model.invoice import now_utc
from invoice_actions.core.ports.outbound.clock import Clock


@dataclass(frozen=True)
class SystemClock(Clock):
    def now_utc(self) -> datetime:
        return now_utc()


@dataclass(frozen=True)
class FixedClock(Clock):
    moment: datetime

    def now_utc(self) -> datetime:
        return self.moment
