from __future__ import annotations

import logging

from invoice_actions.core.ports.inbound.invoice_actions import FormInput
from invoice_actions.core.ports.outbound.auth import SignInProvider

logger = logging.getLogger(__name__)

CREDENTIALS_PROVIDER = "credentials"
CREDENTIALS_REJECTED_MARKER = "CredentialsSignin"
CREDENTIAL_SIGNIN = "CredentialSignin"


def authenticate(form: FormInput, sign_in: SignInProvider) -> str | None:
    """
    Forward every form field to the credentials provider.

    Returns "CredentialSignin" when the provider rejects the credentials and
    None on success; any other provider error propagates unchanged.
    """
    fields = dict(form.items())
    try:
        sign_in.sign_in(CREDENTIALS_PROVIDER, fields)
    except Exception as exc:
        if CREDENTIALS_REJECTED_MARKER in str(exc):
            logger.info("sign-in rejected")
            return CREDENTIAL_SIGNIN
        raise
    return None
