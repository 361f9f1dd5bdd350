from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    user_id: str
    name: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class Session:
    token: str
    user_id: str
    email: str
    created_at: datetime
