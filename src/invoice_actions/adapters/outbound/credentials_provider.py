from __future__ import annotations

import logging
import secrets
from typing import Mapping

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError

from invoice_actions.core.domain.model.auth import Session
from invoice_actions.core.domain.model.errors import CredentialsSignin, SignInError
from invoice_actions.core.domain.model.invoice import now_utc
from invoice_actions.core.ports.outbound.auth import (
    CookieWriter,
    SessionStore,
    SignInProvider,
    UserRepository,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except VerificationError:
        return False


class CredentialsSignInProvider(SignInProvider):
    """
    Email/password sign-in bound to one response.

    On success a Session is stored and its token written as an HttpOnly
    cookie on the response; rejected credentials raise CredentialsSignin.
    """

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionStore,
        response: CookieWriter,
        cookie_name: str = "session_token",
    ):
        self.users = users
        self.sessions = sessions
        self.response = response
        self.cookie_name = cookie_name

    def sign_in(self, provider_id: str, fields: Mapping[str, str]) -> None:
        if provider_id != "credentials":
            raise SignInError(message=f"unsupported provider: {provider_id}")

        email = fields.get("email")
        password = fields.get("password")
        if not isinstance(email, str) or not isinstance(password, str):
            raise CredentialsSignin()
        if "@" not in email or len(password) < MIN_PASSWORD_LENGTH:
            raise CredentialsSignin()

        user = self.users.get_by_email(email.strip())
        if user is None or not verify_password(password, user.password_hash):
            raise CredentialsSignin()

        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=user.user_id,
            email=user.email,
            created_at=now_utc(),
        )
        self.sessions.save(session)
        self.response.set_cookie(
            key=self.cookie_name,
            value=session.token,
            httponly=True,
            samesite="lax",
        )
        logger.info("signed in: user=%s", user.user_id)
