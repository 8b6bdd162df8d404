"""Account schemas: email normalization, password bounds, beta key aliases.

Invariants:
    - email is stripped and lowercased, then validated by email-validator
    - password is 8-1024 chars and kept verbatim
    - betaKey and beta_key both populate beta_key
"""

import pytest
from pydantic import ValidationError

from ficai_signals.schemas.account import AccountCreate, AccountResponse, SessionCreate


def test_email_is_normalized():
    body = SessionCreate(email="  Reader@Example.COM ", password="hunter2hunter2")
    assert body.email == "reader@example.com"


@pytest.mark.parametrize("email", [
    "", "reader", "reader@", "@example.com", "reader@example",
    "two words@example.com", "a@" + "b" * 320 + ".com",
    "a@b..c", "a@.b.c", "a@b.c.", "x@-bad-.com", "a\"b@c.d",
])
def test_malformed_email_rejected(email):
    with pytest.raises(ValidationError):
        SessionCreate(email=email, password="hunter2hunter2")


def test_password_bounds():
    with pytest.raises(ValidationError):
        SessionCreate(email="a@b.co", password="x" * 7)
    with pytest.raises(ValidationError):
        SessionCreate(email="a@b.co", password="x" * 1025)
    assert SessionCreate(email="a@b.co", password="x" * 8).password == "x" * 8


def test_password_not_stripped():
    assert SessionCreate(email="a@b.co", password=" spaced out ").password == " spaced out "


def test_beta_key_accepts_camel_and_snake_case():
    camel = AccountCreate.model_validate(
        {"email": "a@b.co", "password": "hunter2hunter2", "betaKey": "k"},
    )
    snake = AccountCreate.model_validate(
        {"email": "a@b.co", "password": "hunter2hunter2", "beta_key": "k"},
    )
    assert camel.beta_key == snake.beta_key == "k"


def test_beta_key_required():
    with pytest.raises(ValidationError):
        AccountCreate.model_validate({"email": "a@b.co", "password": "hunter2hunter2"})


def test_account_response_shape():
    assert AccountResponse(id=1, email="a@b.co").model_dump() == {"id": 1, "email": "a@b.co"}


@pytest.mark.parametrize("email", ["first.last@example.com", "reader+fics@example.org"])
def test_well_formed_email_accepted(email):
    assert SessionCreate(email=email, password="hunter2hunter2").email == email
