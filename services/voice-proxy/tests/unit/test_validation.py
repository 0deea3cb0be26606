"""Authentication and amount validation."""

from __future__ import annotations

import pytest

from voice_proxy.errors import AuthenticationError, InputValidationError
from voice_proxy.validation import check_authorization, validate_amount


def test_exact_bearer_key_passes() -> None:
    check_authorization("Bearer s3cret", "s3cret")


@pytest.mark.parametrize(
    "header",
    [None, "", "s3cret", "bearer s3cret", "Bearer s3cret ", "Bearer wrong", "Basic s3cret"],
)
def test_anything_else_fails(header: str | None) -> None:
    with pytest.raises(AuthenticationError) as exc:
        check_authorization(header, "s3cret")
    assert exc.value.to_body() == {"code": 401, "msg": "authentication failed"}


def test_empty_configured_key_never_authenticates() -> None:
    with pytest.raises(AuthenticationError):
        check_authorization("Bearer ", "")


@pytest.mark.parametrize("number", ["0.01", "1", "1000", "1e3", "99999999999.99"])
def test_amount_inside_open_range(number: str) -> None:
    assert 0 < validate_amount(number) < 100_000_000_000


@pytest.mark.parametrize("number", ["0", "0.0", "-1", "100000000000", "1e12"])
def test_amount_on_or_outside_bounds(number: str) -> None:
    with pytest.raises(InputValidationError) as exc:
        validate_amount(number)
    assert exc.value.status == 400
    assert exc.value.msg == "amount must be between 0 and 100 billion"


@pytest.mark.parametrize(
    "number", ["abc", "12abc", "nan", "-inf", "1,000", "1_000", " 10 ", "１０００", "1e999"]
)
def test_amount_not_a_finite_number(number: str) -> None:
    with pytest.raises(InputValidationError) as exc:
        validate_amount(number)
    assert exc.value.msg == "amount must be a valid number"


@pytest.mark.parametrize("number", [None, ""])
def test_amount_missing(number: str | None) -> None:
    with pytest.raises(InputValidationError) as exc:
        validate_amount(number)
    assert exc.value.msg == "amount parameter is required"
