from __future__ import annotations

from typing import Mapping, Protocol

from invoice_actions.core.domain.model.auth import Session, User


class SignInProvider(Protocol):
    def sign_in(self, provider_id: str, fields: Mapping[str, str]) -> None:
        """Raises on failure; on success establishes the session as a side effect."""
        ...


class UserRepository(Protocol):
    def get_by_email(self, email: str) -> User | None: ...


class SessionStore(Protocol):
    def save(self, session: Session) -> None: ...

    def get(self, token: str) -> Session | None: ...


class CookieWriter(Protocol):
    def set_cookie(self, key: str, value: str, **kwargs) -> None: ...
