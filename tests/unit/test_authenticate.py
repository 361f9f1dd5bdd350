from unittest.mock import Mock

import pytest

from invoice_actions.core.domain.model.errors import CredentialsSignin, SignInError
from invoice_actions.core.domain.service.authenticate import (
    CREDENTIAL_SIGNIN,
    authenticate,
)

FORM = {"email": "user@nextmail.com", "password": "123456", "redirectTo": "/dashboard"}


@pytest.fixture
def mock_sign_in():
    return Mock()


def test_success_returns_none_and_forwards_all_fields(mock_sign_in):
    assert authenticate(FORM, mock_sign_in) is None

    mock_sign_in.sign_in.assert_called_once_with("credentials", FORM)


def test_rejected_credentials_return_signal(mock_sign_in):
    mock_sign_in.sign_in.side_effect = CredentialsSignin()

    assert authenticate(FORM, mock_sign_in) == CREDENTIAL_SIGNIN == "CredentialSignin"


def test_rejection_is_recognised_by_message(mock_sign_in):
    mock_sign_in.sign_in.side_effect = RuntimeError("Read more at CredentialsSignin docs")

    assert authenticate(FORM, mock_sign_in) == CREDENTIAL_SIGNIN


def test_other_provider_errors_propagate_unchanged(mock_sign_in):
    err = SignInError(message="provider unavailable")
    mock_sign_in.sign_in.side_effect = err

    with pytest.raises(SignInError) as exc_info:
        authenticate(FORM, mock_sign_in)

    assert exc_info.value is err


def test_unrelated_exception_propagates(mock_sign_in):
    mock_sign_in.sign_in.side_effect = ConnectionError("db down")

    with pytest.raises(ConnectionError):
        authenticate(FORM, mock_sign_in)


def test_rejection_log_leaves_out_submitted_fields(mock_sign_in, caplog):
    mock_sign_in.sign_in.side_effect = CredentialsSignin()

    with caplog.at_level("INFO"):
        authenticate(FORM, mock_sign_in)

    assert "sign-in rejected" in caplog.text
    assert FORM["email"] not in caplog.text
    assert FORM["password"] not in caplog.text
