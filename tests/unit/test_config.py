"""Tests for IdentityConfig defaults and validation."""

import dataclasses

import pytest

from fastapi_request_identity import IdentityConfig
from fastapi_request_identity.exceptions import IdentityConfigurationError


def test_defaults() -> None:
    config = IdentityConfig()
    assert config.session_key == "user"
    assert config.token_param == "token"
    assert config.redirect_to == "/"
    assert config.redirect_status_code == 302


def test_is_frozen() -> None:
    config = IdentityConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.session_key = "other"  # type: ignore[misc]


@pytest.mark.parametrize("field", ["session_key", "token_param", "redirect_to"])
def test_empty_string_rejected(field: str) -> None:
    with pytest.raises(IdentityConfigurationError, match=field):
        IdentityConfig(**{field: ""})


@pytest.mark.parametrize("status_code", [200, 299, 400, 500])
def test_non_redirect_status_rejected(status_code: int) -> None:
    with pytest.raises(IdentityConfigurationError, match="3xx"):
        IdentityConfig(redirect_status_code=status_code)


def test_custom_values_accepted() -> None:
    config = IdentityConfig(
        session_key="account_id",
        token_param="api_key",
        redirect_to="/login",
        redirect_status_code=303,
    )
    assert config.session_key == "account_id"
    assert config.redirect_status_code == 303
